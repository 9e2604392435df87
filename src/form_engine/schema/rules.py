"""
Declarative rule table for the form.

Each rule names the field path it reports at, a predicate over the value
at that path, and the message shown when the predicate fails. Rules for
the same path are checked in declaration order and the first failure wins.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable

from form_engine.models.record import Record
from form_engine.schema.constants import (
    AGE_REQUIRED,
    AGE_TOO_LOW,
    CITY_REQUIRED,
    EMAIL_INVALID,
    EMAIL_PATTERN,
    EMAIL_REQUIRED,
    FIRST_NAME_REQUIRED,
    GENDER_CHOICES,
    GENDER_REQUIRED,
    HOBBIES_PATH,
    HOBBIES_REQUIRED,
    HOBBY_NAME_REQUIRED,
    LAST_NAME_REQUIRED,
    MIN_HOBBIES,
    MINIMUM_AGE,
    REFERRAL_REQUIRED,
    START_DATE_REQUIRED,
    STATE_REQUIRED,
)


@dataclass(frozen=True)
class FieldRule:
    """A constraint on the value at one field path."""

    path: str
    check: Callable[[Any], bool]
    message: str
    error_type: str = "invalid"
    # Evaluated against the whole record on every pass
    when: Callable[[Record], bool] | None = None

    def applies_to(self, record: Record) -> bool:
        return self.when is None or self.when(record)


@dataclass(frozen=True)
class ItemRule:
    """A constraint applied to one attribute of every item in a list."""

    sequence: str
    attribute: str
    check: Callable[[Any], bool]
    message: str
    error_type: str = "required"


@dataclass(frozen=True)
class SequenceRule:
    """A length constraint reported at the list's own path."""

    path: str
    min_items: int
    message: str


@dataclass(frozen=True)
class FormSchema:
    """All rules for a form."""

    field_rules: tuple[FieldRule, ...] = field(default_factory=tuple)
    sequence_rules: tuple[SequenceRule, ...] = field(default_factory=tuple)
    item_rules: tuple[ItemRule, ...] = field(default_factory=tuple)


def is_filled(value: Any) -> bool:
    """Non-empty after trimming."""
    return isinstance(value, str) and bool(value.strip())


def is_email(value: Any) -> bool:
    return isinstance(value, str) and EMAIL_PATTERN.match(value) is not None


def is_present(value: Any) -> bool:
    return value is not None


def is_adult(value: Any) -> bool:
    return isinstance(value, int) and value >= MINIMUM_AGE


def is_gender(value: Any) -> bool:
    return value in GENDER_CHOICES


def is_date(value: Any) -> bool:
    return isinstance(value, date)


def is_subscribed(record: Record) -> bool:
    return record.subscribe is True


FORM_SCHEMA = FormSchema(
    field_rules=(
        FieldRule("firstName", is_filled, FIRST_NAME_REQUIRED, "required"),
        FieldRule("lastName", is_filled, LAST_NAME_REQUIRED, "required"),
        FieldRule("email", is_filled, EMAIL_REQUIRED, "required"),
        FieldRule("email", is_email, EMAIL_INVALID, "format"),
        FieldRule("age", is_present, AGE_REQUIRED, "required"),
        FieldRule("age", is_adult, AGE_TOO_LOW, "minimum"),
        FieldRule("gender", is_gender, GENDER_REQUIRED, "enum"),
        FieldRule("address.city", is_filled, CITY_REQUIRED, "required"),
        FieldRule("address.state", is_filled, STATE_REQUIRED, "required"),
        FieldRule("startDate", is_date, START_DATE_REQUIRED, "type"),
        FieldRule("referral", is_filled, REFERRAL_REQUIRED, "conditional", when=is_subscribed),
    ),
    sequence_rules=(
        SequenceRule(HOBBIES_PATH, MIN_HOBBIES, HOBBIES_REQUIRED),
    ),
    item_rules=(
        ItemRule(HOBBIES_PATH, "name", is_filled, HOBBY_NAME_REQUIRED),
    ),
)
