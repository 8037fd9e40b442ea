"""
Kubewrap command line interface.

Thin caller around the Kubectl wrapper. Owns the things the wrapper leaves to
its callers: configuration, logging setup, polling and the guard against
unlabelled bulk deletes.
"""

import logging
import time
from typing import Dict, Optional, Tuple

import click

from kubewrap.config.provider import EnvConfigProvider, YamlConfigProvider
from kubewrap.logging_config import POLL_LOGGER, configure_logging
from kubewrap.modules.kubectl import Kubectl, KubernetesJobStatus

logger = logging.getLogger("kubewrap.cli")
poll_logger = logging.getLogger(POLL_LOGGER)

EXIT_JOB_FAILED = 2
EXIT_WAIT_TIMEOUT = 3


def _parse_labels(ctx, param, values: Tuple[str, ...]) -> Dict[str, str]:
    labels = {}
    for value in values:
        key, sep, label_value = value.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected key=value, got {value!r}")
        labels[key] = label_value
    return labels


@click.group()
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False), default=None,
              help="YAML configuration file (defaults to environment variables)")
@click.option("--kubeconfig", "kubeconfig_path", default=None, help="Path passed to kubectl as KUBECONFIG")
@click.option("--base-domain", default=None, help="Cluster DNS suffix")
@click.option("--kubectl", "kubectl_binary", default=None, help="kubectl executable")
@click.option("--log-level", type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
              default=None)
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: Optional[str],
    kubeconfig_path: Optional[str],
    base_domain: Optional[str],
    kubectl_binary: Optional[str],
    log_level: Optional[str],
):
    """Drive kubectl for rollout, job status and cleanup operations."""
    provider = YamlConfigProvider(config_path) if config_path else EnvConfigProvider()
    try:
        config = provider.get_config()
    except ValueError as e:
        raise click.ClickException(str(e))

    config = config.with_overrides(
        kubeconfig_path=kubeconfig_path,
        base_domain=base_domain,
        kubectl_binary=kubectl_binary,
        log_level=log_level.upper() if log_level else None,
    )
    configure_logging(config.log_level)

    # A pre-built wrapper (tests, embedding) wins over configuration
    if not isinstance(ctx.obj, Kubectl):
        ctx.obj = Kubectl.from_config(config)


@cli.command("rollout-status")
@click.argument("resource")
@click.option("-n", "--namespace", default="default", show_default=True)
@click.option("--timeout", type=float, default=300, show_default=True, help="Seconds to wait")
@click.pass_obj
def rollout_status(kubectl: Kubectl, resource: str, namespace: str, timeout: float):
    """Wait for RESOURCE (e.g. deployment/api) to finish rolling out."""
    output, error = kubectl.rollout_status(timeout, resource, namespace)
    if error is not None:
        raise click.ClickException(str(error))
    click.echo(output.decode("utf-8", errors="replace"), nl=False)


@cli.command("job-status")
@click.argument("name")
@click.option("-n", "--namespace", default="default", show_default=True)
@click.pass_obj
def job_status(kubectl: Kubectl, name: str, namespace: str):
    """Print the lifecycle status of job NAME."""
    status, error = kubectl.job_status(name, namespace)
    if error is not None:
        raise click.ClickException(str(error))
    click.echo(status.value)


@cli.command("wait-job")
@click.argument("name")
@click.option("-n", "--namespace", default="default", show_default=True)
@click.option("--interval", type=float, default=5, show_default=True, help="Seconds between polls")
@click.option("--timeout", type=float, default=600, show_default=True, help="Seconds before giving up")
@click.pass_context
def wait_job(ctx: click.Context, name: str, namespace: str, interval: float, timeout: float):
    """Poll job NAME until it completes or fails."""
    kubectl: Kubectl = ctx.obj
    deadline = time.monotonic() + timeout

    while True:
        status, error = kubectl.job_status(name, namespace)
        if error is not None:
            logger.warning(f"Job {namespace}/{name} status query failed: {error}")
        else:
            poll_logger.info(
                f"Job {namespace}/{name} is {status.value}",
                extra={"job_status": status.value},
            )

        if status == KubernetesJobStatus.COMPLETE:
            click.echo(status.value)
            return
        if status == KubernetesJobStatus.FAILED:
            click.echo(status.value)
            ctx.exit(EXIT_JOB_FAILED)

        remaining = deadline - time.monotonic()
        if remaining <= 0:
            click.echo(f"timed out waiting for job {namespace}/{name} (last status: {status.value})", err=True)
            ctx.exit(EXIT_WAIT_TIMEOUT)
        time.sleep(min(interval, remaining))


@cli.command("delete-by-label")
@click.option("-n", "--namespace", required=True)
@click.option("-l", "--label", "labels", multiple=True, callback=_parse_labels,
              help="Label selector key=value, repeatable")
@click.option("--yes", is_flag=True, help="Skip confirmation when no labels are given")
@click.pass_obj
def delete_by_label(kubectl: Kubectl, namespace: str, labels: Dict[str, str], yes: bool):
    """Delete all,ing resources in NAMESPACE matching the given labels."""
    if not labels and not yes:
        click.confirm(
            f"No labels given: delete ALL resources of kinds all,ing in namespace {namespace!r}?",
            abort=True,
        )

    error = kubectl.delete_all_resources_by_label(namespace, labels)
    if error is not None:
        raise click.ClickException(str(error))


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
