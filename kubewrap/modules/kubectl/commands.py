"""
kubectl command builders.

Pure functions turning operation parameters into a CommandSpec. They never
raise and never validate; namespace and names are passed through literally.
"""

import math
from dataclasses import dataclass
from datetime import timedelta
from typing import Mapping, Optional, Sequence, Tuple, Union

Timeout = Union[timedelta, int, float]


@dataclass(frozen=True)
class CommandSpec:
    """Arguments, environment overrides and stdin for one kubectl invocation."""

    args: Tuple[str, ...]
    env: Optional[Tuple[str, ...]] = None
    stdin: str = ""


def _freeze_env(env: Optional[Sequence[str]]) -> Optional[Tuple[str, ...]]:
    return None if env is None else tuple(env)


def format_timeout(timeout: Timeout) -> str:
    """
    Render a timeout as whole seconds with an ``s`` suffix, e.g. ``5s``.

    Halves round away from zero. NaN and infinite values render as ``0s``,
    which kubectl reads as "wait forever".
    """
    if isinstance(timeout, timedelta):
        seconds = timeout.total_seconds()
    else:
        seconds = float(timeout)
    if not math.isfinite(seconds):
        return "0s"
    whole = math.floor(abs(seconds) + 0.5)
    return f"{int(math.copysign(whole, seconds))}s"


def rollout_status_command(
    timeout: Timeout,
    resource_name: str,
    namespace: str,
    env: Optional[Sequence[str]] = None,
) -> CommandSpec:
    """
    Build ``-n NAMESPACE rollout status RESOURCE --timeout Ns``.

    Args:
        timeout: timedelta or seconds, rounded to the nearest second
        resource_name: Resource reference such as ``deployment/foo``
        namespace: Target namespace
        env: Optional KEY=VALUE environment overrides

    Returns:
        CommandSpec for the rollout status call
    """
    args = (
        "-n",
        namespace,
        "rollout",
        "status",
        resource_name,
        "--timeout",
        format_timeout(timeout),
    )
    return CommandSpec(args=args, env=_freeze_env(env))


def job_status_command(
    job_name: str,
    namespace: str,
    env: Optional[Sequence[str]] = None,
) -> CommandSpec:
    """Build ``-n NAMESPACE get job NAME -o json``."""
    args = ("-n", namespace, "get", "job", job_name, "-o", "json")
    return CommandSpec(args=args, env=_freeze_env(env))


def delete_all_resources_by_label_command(
    namespace: str,
    labels: Optional[Mapping[str, str]],
    env: Optional[Sequence[str]] = None,
) -> CommandSpec:
    """
    Build ``-n NAMESPACE delete all,ing [-l key=value]*``.

    With no labels the command deletes every ``all,ing`` resource in the
    namespace; guarding against that is the caller's job.

    Label pairs are emitted sorted by key, each ``-l`` directly followed by
    its own ``key=value``.
    """
    args = ["-n", namespace, "delete", "all,ing"]
    for key in sorted(labels or {}):
        args.extend(["-l", f"{key}={labels[key]}"])
    return CommandSpec(args=tuple(args), env=_freeze_env(env))
