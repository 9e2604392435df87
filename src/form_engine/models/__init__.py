"""
Data models for the form engine.

This module contains Pydantic models for:
- The form Record and its nested parts
- Validation results and the ErrorMap
- Submission status
"""

from form_engine.models.record import (
    Address,
    Gender,
    HobbyItem,
    Record,
    new_stable_id,
)
from form_engine.models.submission import (
    SubmissionOutcome,
    SubmissionStatus,
)
from form_engine.models.validation_result import (
    ROOT_ERROR_KEY,
    ErrorMap,
    FieldValidationError,
    SequenceConstraintError,
    ValidationResult,
)

__all__ = [
    # Record
    "Address",
    "Gender",
    "HobbyItem",
    "Record",
    "new_stable_id",
    # Validation
    "ErrorMap",
    "ROOT_ERROR_KEY",
    "FieldValidationError",
    "SequenceConstraintError",
    "ValidationResult",
    # Submission
    "SubmissionOutcome",
    "SubmissionStatus",
]
