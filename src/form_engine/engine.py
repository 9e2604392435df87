"""
Form engine.

This is the main entry point. It wires a FieldStore, a ListManager and a
SubmissionController together and exposes the current record, errors and
status as plain synchronous reads for whatever renders the form.
"""

import logging
from datetime import date
from typing import Any, Callable, Mapping

from form_engine.config import FormEngineConfig, get_config
from form_engine.controller import StatusListener, SubmissionController
from form_engine.date_source import coerce_date, today as default_today
from form_engine.errors import RemovalRejected
from form_engine.models.record import HobbyItem, Record
from form_engine.models.submission import SubmissionOutcome, SubmissionStatus
from form_engine.models.validation_result import ErrorMap
from form_engine.schema.constants import HOBBIES_PATH
from form_engine.store.field_store import FieldStore
from form_engine.store.list_manager import ListManager
from form_engine.submitters.base import Submitter
from form_engine.submitters.http_submitter import HttpSubmitter
from form_engine.validator import validate, validate_path

logger = logging.getLogger("form-engine")

START_DATE_PATH = "startDate"


class FormEngine:
    """
    Form state, validation and submission for one form instance.

    Usage:
        engine = FormEngine(submitter=SimulatedSubmitter(latency=0))

        engine.set("firstName", "Ada")
        engine.set("address.city", "London")
        item = engine.add_hobby("Chess")

        outcome = await engine.submit()
        if not outcome.accepted:
            print(engine.errors)
    """

    def __init__(
        self,
        submitter: Submitter | None = None,
        config: FormEngineConfig | None = None,
        today: Callable[[], date] = default_today,
    ):
        """
        Initialize the engine with a default record.

        Args:
            submitter: Submit collaborator. If None, an HttpSubmitter for
                config.submit_url is used.
            config: Engine configuration. If None, uses the global config.
            today: Source of the default start date.
        """
        self.config = config or get_config()
        if submitter is None:
            submitter = HttpSubmitter(self.config.submit_url, timeout=self.config.submit_timeout)

        self.store = FieldStore(today=today)
        self.hobbies = ListManager(self.store)
        self.controller = SubmissionController(self.store, submitter, validate)

    @property
    def record(self) -> Record:
        return self.store.snapshot()

    @property
    def errors(self) -> ErrorMap:
        return self.controller.errors

    @property
    def root_error(self) -> str | None:
        return self.controller.root_error

    @property
    def status(self) -> SubmissionStatus:
        return self.controller.status

    @property
    def is_submitting(self) -> bool:
        return self.controller.is_submitting

    def get(self, path: str) -> Any:
        return self.store.get(path)

    def set(self, path: str, value: Any) -> None:
        if path == START_DATE_PATH:
            value = coerce_date(value)
        self.store.set(path, value)

    def update(self, values: Mapping[str, Any]) -> None:
        """Set several paths at once, all or nothing."""
        values = dict(values)
        if START_DATE_PATH in values:
            values[START_DATE_PATH] = coerce_date(values[START_DATE_PATH])
        self.store.update(values)

    def set_start_date(self, value: Any) -> None:
        """Take a value from the date picker; anything that is not a date clears the field."""
        self.set(START_DATE_PATH, value)

    def add_hobby(self, name: str = "") -> HobbyItem:
        return self.hobbies.append(name)

    def remove_hobby(self, stable_id: str) -> bool:
        """
        Remove a hobby. Returns False when it is the last one and stays.

        Errors already shown for later items move with them.
        """
        index = self.hobbies.index_of(stable_id)
        try:
            self.hobbies.remove(stable_id)
        except RemovalRejected:
            logger.debug(f"Kept last hobby {stable_id}")
            return False
        self.controller.drop_item_errors(HOBBIES_PATH, index)
        return True

    def hobby_error(self, stable_id: str, attribute: str = "name") -> str | None:
        """Current error for one hobby item, looked up by identity."""
        return self.errors.get(self.hobbies.path_for(stable_id, attribute))

    def validate(self) -> ErrorMap:
        """Speculative validation of the current record; changes nothing."""
        return validate(self.store.snapshot())

    def check_field(self, path: str) -> str | None:
        """Speculative validation of one path; changes nothing."""
        return validate_path(self.store.snapshot(), path)

    def add_listener(self, listener: StatusListener) -> Callable[[], None]:
        return self.controller.add_listener(listener)

    async def submit(self) -> SubmissionOutcome:
        return await self.controller.submit()


async def submit_form(
    values: Mapping[str, Any],
    submitter: Submitter | None = None,
    config: FormEngineConfig | None = None,
) -> SubmissionOutcome:
    """
    Convenience function to fill a fresh form and submit it.

    Args:
        values: Mapping of field path to value, e.g. {"firstName": "Ada",
            "hobbies": ["Chess"], "address.city": "London"}.
        submitter: Submit collaborator. If None, uses an HttpSubmitter.
        config: Engine configuration. If None, uses the global config.

    Returns:
        SubmissionOutcome

    Example:
        >>> from form_engine import submit_form, SimulatedSubmitter
        >>> outcome = await submit_form({"firstName": ""}, SimulatedSubmitter())
        >>> outcome.errors["firstName"]
        'First Name is Required'
    """
    engine = FormEngine(submitter=submitter, config=config)
    engine.update(values)
    return await engine.submit()
