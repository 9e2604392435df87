"""
Exceptions raised by the form engine.

Per-field and per-sequence problems are not exceptions: they are collected
into the ErrorMap by the validator. The classes here cover misuse of the
store (bad paths, wrong types), list invariant guards, and the submission
lifecycle.
"""


class FormEngineError(Exception):
    """Base class for all form engine errors."""


class FieldPathError(FormEngineError, KeyError):
    """A field path does not name anything in the record."""

    def __init__(self, path: str, reason: str = "Unknown field path"):
        self.path = path
        self.reason = reason
        super().__init__(f"{reason}: {path!r}")

    def __str__(self) -> str:
        return f"{self.reason}: {self.path!r}"


class OutOfRangeError(FieldPathError, IndexError):
    """A list index in a field path is beyond the current list length."""

    def __init__(self, path: str, index: int, length: int):
        self.index = index
        self.length = length
        super().__init__(path, f"Index {index} out of range for list of length {length}")


class FieldTypeError(FormEngineError, ValueError):
    """A value was rejected by the record's type coercion."""

    def __init__(self, path: str, message: str):
        self.path = path
        self.message = message
        super().__init__(f"{path}: {message}")


class RemovalRejected(FormEngineError):
    """Removing an item would leave the hobbies list empty."""


class BusyRejected(FormEngineError):
    """A submission is already in flight."""


class SubmissionRejected(FormEngineError):
    """The remote collaborator refused the record."""

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)
