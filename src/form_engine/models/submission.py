"""Submission lifecycle models."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class SubmissionStatus(str, Enum):
    """States of the submission controller."""

    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class SubmissionOutcome(BaseModel):
    """What a single submit() call did."""

    accepted: bool = Field(..., description="Whether the remote call succeeded")
    status: SubmissionStatus = Field(..., description="Status the attempt settled in")
    errors: dict[str, str] = Field(default_factory=dict, description="ErrorMap after the attempt")
    response: Any | None = Field(default=None, description="Collaborator response on success")
