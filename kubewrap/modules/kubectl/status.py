"""
Job status interpretation.

Maps the raw output of ``kubectl get job -o json`` to a KubernetesJobStatus.
Rules are evaluated in order and the first match wins:

1. executor error        -> UNKNOWN, same error object
2. unparseable stdout    -> UNKNOWN, JobStatusParseError
3. Failed condition      -> FAILED
4. Complete condition    -> COMPLETE
5. active > 0            -> ACTIVE
6. succeeded > 0         -> COMPLETE
7. anything else         -> UNKNOWN, no error

Failed is checked before Complete and the counters because a job can report
``succeeded`` pods before it finally fails.
"""

from typing import Callable, NamedTuple, Optional, Tuple, Union

from pydantic import ValidationError

from .models import JobDocument, JobStatusDocument, KubernetesJobStatus


class JobStatusParseError(ValueError):
    """kubectl output was not a valid job JSON document."""


class JobStatusResult(NamedTuple):
    """Status paired with the error that prevented classification, if any."""

    status: KubernetesJobStatus
    error: Optional[Exception] = None

    def raise_for_error(self) -> KubernetesJobStatus:
        """Re-raise the stored error unchanged, otherwise return the status."""
        if self.error is not None:
            raise self.error
        return self.status


JobStatusRule = Tuple[KubernetesJobStatus, Callable[[JobStatusDocument], bool]]

JOB_STATUS_RULES: Tuple[JobStatusRule, ...] = (
    (KubernetesJobStatus.FAILED, lambda doc: doc.has_condition("Failed")),
    (KubernetesJobStatus.COMPLETE, lambda doc: doc.has_condition("Complete")),
    (KubernetesJobStatus.ACTIVE, lambda doc: (doc.active or 0) > 0),
    # Counters alone may report success without any condition
    (KubernetesJobStatus.COMPLETE, lambda doc: (doc.succeeded or 0) > 0),
)


def classify_job_status(document: JobStatusDocument) -> KubernetesJobStatus:
    """Apply JOB_STATUS_RULES to a parsed status document."""
    for status, matches in JOB_STATUS_RULES:
        if matches(document):
            return status
    return KubernetesJobStatus.UNKNOWN


def parse_job_document(stdout: Union[bytes, str]) -> JobDocument:
    """
    Parse kubectl JSON output.

    Raises:
        JobStatusParseError: If stdout is not a JSON object of the expected shape
    """
    try:
        return JobDocument.model_validate_json(stdout)
    except ValidationError as e:
        raise JobStatusParseError(f"Failed to parse job status JSON: {e}") from e


def interpret_job_status(
    stdout: Union[bytes, str],
    stderr: Union[bytes, str] = b"",
    error: Optional[Exception] = None,
) -> JobStatusResult:
    """
    Interpret the output of a job status query.

    Args:
        stdout: Raw kubectl stdout
        stderr: Raw kubectl stderr (not used for classification)
        error: Error reported by the executor, if any

    Returns:
        JobStatusResult; ``error`` is the executor error itself or a
        JobStatusParseError, and None whenever classification ran
    """
    if error is not None:
        return JobStatusResult(KubernetesJobStatus.UNKNOWN, error)

    try:
        document = parse_job_document(stdout)
    except JobStatusParseError as e:
        return JobStatusResult(KubernetesJobStatus.UNKNOWN, e)

    return JobStatusResult(classify_job_status(document.status), None)
