"""
Submit collaborator contract.

A submitter is any async callable that takes the validated Record and
returns an opaque response. It signals failure by raising; the message
of that exception becomes the form's root error.
"""

from typing import Any, Awaitable, Callable

from form_engine.models.record import Record

Submitter = Callable[[Record], Awaitable[Any]]


def failure_message(error: BaseException) -> str:
    """Human-readable message of a failed submission."""
    message = getattr(error, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(error) or type(error).__name__
