"""
Field store.

Holds the current form values. Scalar and nested fields live in a Record;
the hobbies list lives in an ItemArena so that item identity survives
removals. Every read returns a copy, so callers cannot mutate the store
behind its back.
"""

import logging
from datetime import date
from typing import Any, Callable, Iterable, Mapping

from pydantic import BaseModel, ValidationError

from form_engine.date_source import today as default_today
from form_engine.errors import FieldPathError, FieldTypeError, RemovalRejected
from form_engine.models.record import HobbyItem, Record
from form_engine.paths import attribute_for, parse_path, read_path, step
from form_engine.schema.constants import HOBBIES_PATH, MIN_HOBBIES
from form_engine.store.arena import ItemArena

logger = logging.getLogger("form-engine.store")

HobbyInput = HobbyItem | Mapping[str, Any] | str


def _first_error(error: ValidationError) -> str:
    details = error.errors()
    return details[0]["msg"] if details else str(error)


def _to_hobby(value: HobbyInput, path: str) -> HobbyItem:
    if isinstance(value, HobbyItem):
        return value
    if not isinstance(value, (str, Mapping)):
        raise FieldTypeError(path, f"Expected a hobby name or object, got {type(value).__name__}")
    try:
        if isinstance(value, str):
            return HobbyItem(name=value)
        return HobbyItem.model_validate(value)
    except ValidationError as e:
        raise FieldTypeError(path, _first_error(e)) from e


class FieldStore:
    """
    In-memory store for one Record.

    Usage:
        store = FieldStore()
        store.set("address.city", "Springfield")
        store.get("hobbies.0.name")
        record = store.snapshot()
    """

    def __init__(self, today: Callable[[], date] = default_today):
        """
        Initialize the store with default values.

        Args:
            today: Source of the default start date, called on every reset.
        """
        self._today = today
        self._values = self._default_values()
        self._hobbies = ItemArena([HobbyItem()], path=HOBBIES_PATH)

    @property
    def hobbies(self) -> ItemArena:
        """The live hobbies arena. Mutate it through ListManager."""
        return self._hobbies

    def get(self, path: str) -> Any:
        """
        Read the value at a field path.

        Raises:
            FieldPathError: If the path names no field.
            OutOfRangeError: If a list index is beyond the current length.
        """
        segments = parse_path(path)
        if segments[0] == HOBBIES_PATH:
            value = self._get_hobby(segments, path)
        else:
            value = read_path(self._values, path)
        return value.model_copy(deep=True) if isinstance(value, BaseModel) else value

    def set(self, path: str, value: Any) -> None:
        """
        Assign the value at a field path, leaving sibling paths untouched.

        Raises:
            FieldPathError: If the path names no assignable field.
            OutOfRangeError: If a list index is beyond the current length.
            FieldTypeError: If the value does not fit the field's type.
            RemovalRejected: If the whole hobbies list is replaced by an empty one.
        """
        segments = parse_path(path)
        if segments[0] == HOBBIES_PATH:
            self._set_hobby(segments, value, path)
        else:
            parent: Any = self._values
            for segment in segments[:-1]:
                parent = step(parent, segment, path)
            self._assign(parent, segments[-1], value, path)
        logger.debug(f"Set {path}")

    def update(self, values: Mapping[str, Any]) -> None:
        """Set several paths at once; on any failure none of them is applied."""
        values_backup = self._values.model_copy(deep=True)
        hobbies_backup = self._hobbies.clone()
        try:
            for path, value in values.items():
                self.set(path, value)
        except Exception:
            self._values = values_backup
            self._hobbies = hobbies_backup
            raise

    def get_list(self) -> list[HobbyItem]:
        """Copies of the hobby items in display order."""
        return self._hobbies.items()

    def replace_list(self, items: Iterable[HobbyInput]) -> None:
        """Replace the whole hobbies list; strings become new items with fresh ids."""
        if isinstance(items, (str, bytes)) or not isinstance(items, Iterable):
            raise FieldTypeError(HOBBIES_PATH, f"Expected a list of hobbies, got {type(items).__name__}")
        hobbies = [_to_hobby(item, HOBBIES_PATH) for item in items]
        if len(hobbies) < MIN_HOBBIES:
            raise RemovalRejected("The hobbies list must keep at least one item")
        self._hobbies.replace(hobbies)

    def snapshot(self) -> Record:
        """A deep copy of the current Record, hobbies in display order."""
        return self._values.model_copy(
            deep=True,
            update={"hobbies": self._hobbies.items()},
        )

    def reset(self) -> None:
        """Restore every field to its default value."""
        self._values = self._default_values()
        self._hobbies.replace([HobbyItem()])
        logger.info("Field store reset to defaults")

    def _default_values(self) -> Record:
        return Record.defaults(self._today()).model_copy(update={"hobbies": []})

    def _get_hobby(self, segments: tuple, path: str) -> Any:
        if len(segments) == 1:
            return self._hobbies.items()
        index = segments[1]
        if not isinstance(index, int) or len(segments) > 3:
            raise FieldPathError(path)
        item = self._hobbies.at(index, path)
        if len(segments) == 2:
            return item
        return getattr(item, attribute_for(HobbyItem, segments[2], path))

    def _set_hobby(self, segments: tuple, value: Any, path: str) -> None:
        if len(segments) == 1:
            self.replace_list(value)
            return
        index = segments[1]
        if not isinstance(index, int) or len(segments) > 3:
            raise FieldPathError(path)
        item = self._hobbies.at(index, path)
        if len(segments) == 2:
            replacement = _to_hobby(value, path)
            if "stable_id" in replacement.model_fields_set and replacement.stable_id != item.stable_id:
                raise FieldPathError(path, "stableId is read-only")
            self._assign(item, "name", replacement.name, path)
            return
        if segments[2] == "stableId":
            raise FieldPathError(path, "stableId is read-only")
        self._assign(item, segments[2], value, path)

    def _assign(self, parent: Any, segment: Any, value: Any, path: str) -> None:
        if not isinstance(segment, str) or not isinstance(parent, BaseModel):
            raise FieldPathError(path, "Cannot assign to this path")
        attribute = attribute_for(type(parent), segment, path)
        if isinstance(value, BaseModel):
            value = value.model_copy(deep=True)
        try:
            setattr(parent, attribute, value)
        except ValidationError as e:
            raise FieldTypeError(path, _first_error(e)) from e
