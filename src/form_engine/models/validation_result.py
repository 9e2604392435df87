"""
Validation result models.

These models represent the output of a validation pass over a Record.
"""

from typing import Any

from pydantic import BaseModel, Field

# Field path -> human-readable message. A missing key means the path is valid.
ErrorMap = dict[str, str]

# Key for errors that belong to the whole form rather than one field
ROOT_ERROR_KEY = "root"


class FieldValidationError(BaseModel):
    """Validation error for a specific field path."""

    field_path: str = Field(..., description="Path of the field with error")
    error_type: str = Field(..., description="Type of validation error")
    message: str = Field(..., description="Human-readable error message")
    received: Any | None = Field(default=None, description="Received value")


class SequenceConstraintError(FieldValidationError):
    """Validation error reported at a list's own path."""

    error_type: str = Field(default="sequence", description="Type of validation error")


class ValidationResult(BaseModel):
    """Result of validating one record snapshot."""

    is_valid: bool = Field(..., description="Whether the record is valid")
    errors: list[FieldValidationError] = Field(
        default_factory=list, description="List of validation errors"
    )
    validated_data: dict[str, Any] | None = Field(
        default=None, description="Submission payload if valid"
    )

    @property
    def error_count(self) -> int:
        """Get the number of validation errors."""
        return len(self.errors)

    def get_field_errors(self, field_path: str) -> list[FieldValidationError]:
        """Get all errors for a specific field path."""
        return [e for e in self.errors if e.field_path == field_path]

    def to_error_map(self) -> ErrorMap:
        """Convert errors to an ErrorMap, keeping the first message per path."""
        result: ErrorMap = {}
        for error in self.errors:
            result.setdefault(error.field_path, error.message)
        return result
