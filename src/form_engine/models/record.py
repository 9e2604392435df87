"""
Record models for the form engine.

The Record is the full form value. Attributes are snake_case in Python;
field paths and the submitted payload use the camelCase aliases
(``firstName``, ``address.city``, ``hobbies.0.name``).
"""

import uuid
from datetime import date
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator


def new_stable_id() -> str:
    """Generate an opaque identity token for a list item."""
    return uuid.uuid4().hex


class Gender(str, Enum):
    """Closed set of accepted gender values."""

    MALE = "male"
    FEMALE = "female"


class Address(BaseModel):
    """Nested address object."""

    city: str = Field(default="", description="City name")
    state: str = Field(default="", description="State name")

    model_config = {"validate_assignment": True}


class HobbyItem(BaseModel):
    """
    One entry of the repeatable hobbies list.

    ``stable_id`` is assigned at creation and never derived from the
    item's position, so it keeps pairing rendered rows with their data
    when earlier items are removed.
    """

    stable_id: str = Field(
        default_factory=new_stable_id,
        alias="stableId",
        frozen=True,
        description="Opaque identity, independent of position",
    )
    name: str = Field(default="", description="Hobby name")

    model_config = {"populate_by_name": True, "validate_assignment": True}


class Record(BaseModel):
    """The complete form value."""

    first_name: str = Field(default="", alias="firstName")
    last_name: str = Field(default="", alias="lastName")
    email: str = Field(default="")
    age: int | None = Field(default=18, description="Age in years, already numeric")
    gender: Gender | None = Field(default=None, description="None means unset")
    address: Address = Field(default_factory=Address)
    hobbies: list[HobbyItem] = Field(default_factory=lambda: [HobbyItem()])
    start_date: date | None = Field(default_factory=date.today, alias="startDate")
    subscribe: bool = Field(default=False, description="Newsletter opt-in")
    referral: str = Field(default="", description="Required only when subscribing")

    model_config = {"populate_by_name": True, "validate_assignment": True}

    @field_validator("gender", mode="before")
    @classmethod
    def _blank_gender_is_unset(cls, value: Any) -> Any:
        # The select's placeholder option submits an empty string.
        if value == "":
            return None
        return value

    @classmethod
    def defaults(cls, today: date | None = None) -> "Record":
        """Build the default record with one blank hobby."""
        return cls(start_date=today or date.today())

    def to_payload(self) -> dict[str, Any]:
        """Export the JSON-ready dict sent to the submission endpoint."""
        return self.model_dump(
            mode="json",
            by_alias=True,
            exclude={"hobbies": {"__all__": {"stable_id"}}},
        )
