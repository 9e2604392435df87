"""
Date source adapter.

A date picker hands the engine either a date or nothing. This module
normalises whatever the picker produced into ``date | None``.
"""

from datetime import date, datetime
from typing import Any


def today() -> date:
    """Default start date."""
    return date.today()


def coerce_date(value: Any) -> date | None:
    """
    Normalise a picker value.

    Accepts ``date``, ``datetime`` (its date part) and ISO-8601 strings.
    ``None``, blank strings and unparsable strings mean no date was picked.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return datetime.fromisoformat(text).date()
        except ValueError:
            return None
    return None
