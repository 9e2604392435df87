"""Shared fixtures for form engine tests."""

from datetime import date

import pytest

from form_engine.models.record import Address, Gender, HobbyItem, Record
from form_engine.store.field_store import FieldStore

FIXED_TODAY = date(2024, 1, 1)

VALID_VALUES = {
    "firstName": "Ada",
    "lastName": "Lovelace",
    "email": "ada@example.com",
    "age": 36,
    "gender": "female",
    "address.city": "London",
    "address.state": "Greater London",
    "hobbies": ["Mathematics"],
    "startDate": date(2024, 3, 1),
    "subscribe": False,
    "referral": "",
}


@pytest.fixture
def make_record():
    """Factory for a valid Record with optional overrides."""

    def _make(**overrides) -> Record:
        data = dict(
            first_name="Ada",
            last_name="Lovelace",
            email="ada@example.com",
            age=36,
            gender=Gender.FEMALE,
            address=Address(city="London", state="Greater London"),
            hobbies=[HobbyItem(name="Mathematics")],
            start_date=date(2024, 3, 1),
            subscribe=False,
            referral="",
        )
        data.update(overrides)
        return Record(**data)

    return _make


@pytest.fixture
def store() -> FieldStore:
    return FieldStore(today=lambda: FIXED_TODAY)


@pytest.fixture
def filled_store(store: FieldStore) -> FieldStore:
    store.update(VALID_VALUES)
    return store
