"""
Kubectl Module - Black Box Interface

Purpose: Build kubectl command lines and interpret job status output
Interface: Kubectl.rollout_status(), Kubectl.job_status(), Kubectl.delete_all_resources_by_label()
Hidden: argv layout, label ordering, status precedence rules

Depends only on an injected ProcessExecutor; never talks to the cluster API directly.
"""

from .commands import (
    CommandSpec,
    delete_all_resources_by_label_command,
    format_timeout,
    job_status_command,
    rollout_status_command,
)
from .kubectl import CommandOutput, Kubectl
from .models import JobCondition, JobDocument, JobStatusDocument, KubernetesJobStatus
from .status import (
    JOB_STATUS_RULES,
    JobStatusParseError,
    JobStatusResult,
    classify_job_status,
    interpret_job_status,
    parse_job_document,
)

__all__ = [
    "CommandOutput",
    "CommandSpec",
    "JOB_STATUS_RULES",
    "JobCondition",
    "JobDocument",
    "JobStatusDocument",
    "JobStatusParseError",
    "JobStatusResult",
    "Kubectl",
    "KubernetesJobStatus",
    "classify_job_status",
    "delete_all_resources_by_label_command",
    "format_timeout",
    "interpret_job_status",
    "job_status_command",
    "parse_job_document",
    "rollout_status_command",
]
