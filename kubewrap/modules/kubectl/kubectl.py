"""kubectl wrapper wiring command builders, an executor and status interpretation."""

import logging
from typing import TYPE_CHECKING, List, Mapping, NamedTuple, Optional

from kubewrap.modules.executor import OsExecutor, ProcessExecutor, ProcessOutput

from .commands import (
    CommandSpec,
    Timeout,
    delete_all_resources_by_label_command,
    job_status_command,
    rollout_status_command,
)
from .status import JobStatusResult, interpret_job_status

if TYPE_CHECKING:
    from kubewrap.config.provider import KubewrapConfig

logger = logging.getLogger("kubewrap.kubectl")

DEFAULT_BINARY = "kubectl"
DEFAULT_BASE_DOMAIN = "svc.cluster.local"


class CommandOutput(NamedTuple):
    """Raw command output paired with the executor error, if any."""

    output: bytes
    error: Optional[Exception] = None

    def raise_for_error(self) -> bytes:
        """Re-raise the stored error unchanged, otherwise return the output."""
        if self.error is not None:
            raise self.error
        return self.output


class Kubectl:
    """
    Stateless kubectl wrapper.

    Holds only immutable configuration, so one instance can be shared
    between threads. Nothing is retried or cached; errors from the executor
    are returned to the caller as-is.
    """

    def __init__(
        self,
        executor: ProcessExecutor,
        kubeconfig_path: str = "",
        base_domain: str = DEFAULT_BASE_DOMAIN,
        binary: str = DEFAULT_BINARY,
    ):
        """
        Initialize wrapper.

        Args:
            executor: Process executor used to run kubectl
            kubeconfig_path: Passed as KUBECONFIG when non-empty
            base_domain: Cluster DNS suffix used by service_host()
            binary: kubectl executable name or path
        """
        self._executor = executor
        self._kubeconfig_path = kubeconfig_path
        self._base_domain = base_domain
        self._binary = binary

    @classmethod
    def from_config(
        cls,
        config: "KubewrapConfig",
        executor: Optional[ProcessExecutor] = None,
    ) -> "Kubectl":
        """Create a wrapper from configuration, defaulting to a local OsExecutor."""
        if executor is None:
            executor = OsExecutor(timeout_seconds=config.command_timeout_seconds)
        return cls(
            executor,
            kubeconfig_path=config.kubeconfig_path,
            base_domain=config.base_domain,
            binary=config.kubectl_binary,
        )

    @property
    def base_domain(self) -> str:
        return self._base_domain

    def _env(self) -> Optional[List[str]]:
        if not self._kubeconfig_path:
            return None
        return [f"KUBECONFIG={self._kubeconfig_path}"]

    def _run(self, spec: CommandSpec) -> ProcessOutput:
        logger.debug(f"Executing {self._binary} {' '.join(spec.args)}")
        return self._executor.execute(
            self._binary,
            list(spec.args),
            None if spec.env is None else list(spec.env),
            spec.stdin,
        )

    def rollout_status(self, timeout: Timeout, resource_name: str, namespace: str) -> CommandOutput:
        """
        Wait for a rollout via ``kubectl rollout status``.

        Output is not interpreted; the executor error is returned unchanged.
        """
        spec = rollout_status_command(timeout, resource_name, namespace, env=self._env())
        stdout, _, error = self._run(spec)
        return CommandOutput(stdout, error)

    def job_status(self, job_name: str, namespace: str) -> JobStatusResult:
        """
        Query and classify the status of a Job.

        Returns:
            JobStatusResult(status, error). On executor failure the error is
            the executor's own error object.
        """
        spec = job_status_command(job_name, namespace, env=self._env())
        stdout, stderr, error = self._run(spec)
        result = interpret_job_status(stdout, stderr, error)
        logger.debug(f"Job {namespace}/{job_name} status: {result.status.value}")
        return result

    def delete_all_resources_by_label(
        self,
        namespace: str,
        labels: Optional[Mapping[str, str]],
    ) -> Optional[Exception]:
        """
        Delete ``all,ing`` resources in a namespace matching every label.

        Empty or None labels delete everything of those kinds in the namespace.

        Returns:
            The executor error, or None on success
        """
        if not labels:
            logger.warning(f"Deleting all resources in namespace {namespace!r} without a label selector")
        spec = delete_all_resources_by_label_command(namespace, labels, env=self._env())
        _, _, error = self._run(spec)
        return error

    def service_host(self, service: str, namespace: str) -> str:
        """In-cluster DNS name of a service, e.g. ``api.default.svc.cluster.local``."""
        return f"{service}.{namespace}.{self._base_domain}"
