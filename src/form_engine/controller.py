"""
Submission controller.

Runs the validate -> submit -> settle cycle and owns the submission
status. Only one submission may be in flight at a time.

    idle/failed --submit, invalid--> unchanged (ErrorMap populated)
    idle/failed --submit, valid----> submitting
    submitting --resolved----------> succeeded -> idle (store reset)
    submitting --rejected----------> failed (root error, store kept)
"""

import asyncio
import logging
from typing import Any, Callable

from form_engine.errors import BusyRejected
from form_engine.logging_setup import logged_operation
from form_engine.models.record import Record
from form_engine.models.submission import SubmissionOutcome, SubmissionStatus
from form_engine.models.validation_result import ROOT_ERROR_KEY, ErrorMap
from form_engine.paths import format_path, parse_path
from form_engine.store.field_store import FieldStore
from form_engine.submitters.base import Submitter, failure_message
from form_engine.validator import validate

logger = logging.getLogger("form-engine.submit")

StatusListener = Callable[[SubmissionStatus], None]


class SubmissionController:
    """
    Orchestrates validation and the external submit call.

    Usage:
        controller = SubmissionController(store, submitter)
        outcome = await controller.submit()
        if not outcome.accepted:
            print(controller.errors)
    """

    def __init__(
        self,
        store: FieldStore,
        submitter: Submitter,
        validator: Callable[[Record], ErrorMap] = validate,
    ):
        self._store = store
        self._submitter = submitter
        self._validator = validator
        self._status = SubmissionStatus.IDLE
        self._errors: ErrorMap = {}
        self._last_response: Any = None
        self._listeners: list[StatusListener] = []

    @property
    def status(self) -> SubmissionStatus:
        return self._status

    @property
    def is_submitting(self) -> bool:
        return self._status is SubmissionStatus.SUBMITTING

    @property
    def errors(self) -> ErrorMap:
        """Copy of the current ErrorMap."""
        return dict(self._errors)

    @property
    def root_error(self) -> str | None:
        return self._errors.get(ROOT_ERROR_KEY)

    @property
    def last_response(self) -> Any:
        """Response of the most recent successful submission."""
        return self._last_response

    def add_listener(self, listener: StatusListener) -> Callable[[], None]:
        """Call ``listener`` on every status transition. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    def clear_errors(self) -> None:
        self._errors = {}

    def drop_item_errors(self, sequence: str, index: int) -> None:
        """
        Re-key item errors after the item at ``index`` left ``sequence``.

        Errors of the removed item are dropped and errors of later items
        move up one position, so each message stays with its item.
        """
        rekeyed: ErrorMap = {}
        for path, message in self._errors.items():
            segments = parse_path(path)
            if segments[0] == sequence and len(segments) > 1 and isinstance(segments[1], int):
                if segments[1] == index:
                    continue
                if segments[1] > index:
                    path = format_path(sequence, segments[1] - 1, *segments[2:])
            rekeyed[path] = message
        self._errors = rekeyed

    async def submit(self) -> SubmissionOutcome:
        """
        Validate the current record and, if valid, hand it to the submitter.

        The record is snapshotted once, so edits made while the call is in
        flight are neither submitted nor lost by a failed attempt.

        Returns:
            SubmissionOutcome describing how the attempt settled.

        Raises:
            BusyRejected: If a submission is already in flight.
        """
        if self._status is SubmissionStatus.SUBMITTING:
            logger.warning("Submit rejected: a submission is already in progress")
            raise BusyRejected("A submission is already in progress")

        record = self._store.snapshot()
        self._errors = dict(self._validator(record))
        if self._errors:
            logger.info(f"Validation failed for: {', '.join(self._errors)}")
            return SubmissionOutcome(accepted=False, status=self._status, errors=self.errors)

        self._transition(SubmissionStatus.SUBMITTING)
        try:
            async with logged_operation("submission", logger):
                response = await self._submitter(record)
        except asyncio.CancelledError:
            self._fail("Submission was cancelled")
            raise
        except Exception as e:
            self._fail(failure_message(e))
            return SubmissionOutcome(accepted=False, status=self._status, errors=self.errors)

        logger.info(f"Submission succeeded: {response}")
        self._last_response = response
        self._store.reset()
        self._errors = {}
        self._transition(SubmissionStatus.SUCCEEDED)
        self._transition(SubmissionStatus.IDLE)
        return SubmissionOutcome(
            accepted=True,
            status=SubmissionStatus.SUCCEEDED,
            errors={},
            response=response,
        )

    def _fail(self, message: str) -> None:
        self._errors = {ROOT_ERROR_KEY: message}
        self._transition(SubmissionStatus.FAILED)

    def _transition(self, status: SubmissionStatus) -> None:
        logger.debug(f"Status {self._status.value} -> {status.value}")
        self._status = status
        for listener in list(self._listeners):
            try:
                listener(status)
            except Exception:
                # A broken listener must not stop the status from settling.
                logger.exception(f"Status listener failed on {status.value}")
