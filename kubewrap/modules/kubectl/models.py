"""
Kubewrap kubectl data models.

These models describe the job status document returned by
``kubectl get job -o json`` and the lifecycle states derived from it.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator


class KubernetesJobStatus(str, Enum):
    """Lifecycle state of a Kubernetes Job."""

    ACTIVE = "active"
    COMPLETE = "complete"
    FAILED = "failed"
    UNKNOWN = "unknown"


class JobCondition(BaseModel):
    """A single entry of ``status.conditions``."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    type: str = ""
    status: str = ""
    reason: Optional[str] = None
    message: Optional[str] = None
    last_probe_time: Optional[str] = Field(None, alias="lastProbeTime")
    last_transition_time: Optional[str] = Field(None, alias="lastTransitionTime")

    @field_validator("type", "status", mode="before")
    @classmethod
    def null_to_empty(cls, v):
        """Read an explicit null as an empty string."""
        return "" if v is None else v

    @property
    def is_true(self) -> bool:
        return self.status == "True"


class JobStatusDocument(BaseModel):
    """The ``status`` object of a Job; every field may be missing."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    active: Optional[StrictInt] = None
    succeeded: Optional[StrictInt] = None
    failed: Optional[StrictInt] = None
    start_time: Optional[str] = Field(None, alias="startTime")
    completion_time: Optional[str] = Field(None, alias="completionTime")
    conditions: List[JobCondition] = Field(default_factory=list)

    @field_validator("conditions", mode="before")
    @classmethod
    def null_conditions(cls, v):
        """Treat an explicit null as no conditions and drop null entries."""
        if v is None:
            return []
        if isinstance(v, list):
            return [c for c in v if c is not None]
        return v

    def has_condition(self, condition_type: str) -> bool:
        """Check for a condition of the given type whose status is True."""
        return any(c.type == condition_type and c.is_true for c in self.conditions)


class JobDocument(BaseModel):
    """Top-level ``kubectl get job -o json`` output; only ``status`` is read."""

    model_config = ConfigDict(extra="ignore")

    status: JobStatusDocument = Field(default_factory=JobStatusDocument)

    @field_validator("status", mode="before")
    @classmethod
    def null_status(cls, v):
        """Treat an explicit null as an empty status."""
        return {} if v is None else v
