"""
Form Engine: form state, validation and submission.

Holds the values of a sign-up style form (personal data, nested address,
a repeatable list of hobbies, a start date, a newsletter flag and a
conditionally required referral), validates them against a declarative
schema and submits the validated record to a remote endpoint.

Simple Usage:
    from form_engine import submit_form

    outcome = await submit_form({
        "firstName": "Ada",
        "lastName": "Lovelace",
        "email": "ada@example.com",
        "age": 36,
        "gender": "female",
        "address.city": "London",
        "address.state": "Greater London",
        "hobbies": ["Mathematics"],
    })

Advanced Usage:
    from form_engine import FormEngine, SimulatedSubmitter

    engine = FormEngine(submitter=SimulatedSubmitter(latency=0.5))

    engine.set("firstName", "Ada")
    chess = engine.add_hobby("Chess")
    engine.remove_hobby(chess.stable_id)

    # Validate without side effects
    errors = engine.validate()

    # Validate, submit and settle
    outcome = await engine.submit()

Logging:
    from form_engine.logging_setup import setup_logging

    setup_logging(verbose=True, file_path="engine.jsonl")
"""

from form_engine.engine import (
    FormEngine,
    submit_form,
)
from form_engine.controller import SubmissionController
from form_engine.errors import (
    BusyRejected,
    FieldPathError,
    FieldTypeError,
    FormEngineError,
    OutOfRangeError,
    RemovalRejected,
    SubmissionRejected,
)
from form_engine.models import (
    ROOT_ERROR_KEY,
    Address,
    ErrorMap,
    FieldValidationError,
    Gender,
    HobbyItem,
    Record,
    SequenceConstraintError,
    SubmissionOutcome,
    SubmissionStatus,
    ValidationResult,
)
from form_engine.store import (
    FieldStore,
    ListManager,
)
from form_engine.submitters import (
    HttpSubmitter,
    SimulatedSubmitter,
)
from form_engine.validator import (
    check,
    validate,
    validate_path,
)
from form_engine.logging_setup import (
    setup_logging,
    disable_logging,
    enable_logging,
)

__all__ = [
    # Main interface
    "FormEngine",
    "submit_form",
    "SubmissionController",
    # Record models
    "Address",
    "Gender",
    "HobbyItem",
    "Record",
    # Store
    "FieldStore",
    "ListManager",
    # Validation
    "check",
    "validate",
    "validate_path",
    "ErrorMap",
    "ROOT_ERROR_KEY",
    "FieldValidationError",
    "SequenceConstraintError",
    "ValidationResult",
    # Submission
    "SubmissionOutcome",
    "SubmissionStatus",
    "HttpSubmitter",
    "SimulatedSubmitter",
    # Errors
    "FormEngineError",
    "FieldPathError",
    "OutOfRangeError",
    "FieldTypeError",
    "RemovalRejected",
    "BusyRejected",
    "SubmissionRejected",
    # Logging
    "setup_logging",
    "disable_logging",
    "enable_logging",
]

__version__ = "0.1.0"
