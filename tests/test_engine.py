"""Tests for the FormEngine facade and helpers."""

from datetime import date, datetime

import pytest

from form_engine import FormEngine, SimulatedSubmitter, submit_form
from form_engine.date_source import coerce_date
from form_engine.errors import BusyRejected, FieldPathError
from form_engine.models.submission import SubmissionStatus
from form_engine.submitters.http_submitter import HttpSubmitter

from conftest import FIXED_TODAY, VALID_VALUES


@pytest.fixture
def engine() -> FormEngine:
    return FormEngine(submitter=SimulatedSubmitter(latency=0), today=lambda: FIXED_TODAY)


class TestCoerceDate:
    """Tests for the date source adapter."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (date(2024, 2, 1), date(2024, 2, 1)),
            (datetime(2024, 2, 1, 15, 30), date(2024, 2, 1)),
            ("2024-02-01", date(2024, 2, 1)),
            (" 2024-02-01T09:00:00 ", date(2024, 2, 1)),
            (None, None),
            ("", None),
            ("next tuesday", None),
            (20240201, None),
        ],
    )
    def test_coerce(self, value, expected):
        assert coerce_date(value) == expected


class TestFormEngine:
    """Tests for FormEngine reads and edits."""

    def test_initial_state(self, engine):
        assert engine.status is SubmissionStatus.IDLE
        assert engine.errors == {}
        assert engine.root_error is None
        assert not engine.is_submitting
        assert engine.record.start_date == FIXED_TODAY

    def test_default_submitter_is_http(self):
        engine = FormEngine()
        assert isinstance(engine.controller._submitter, HttpSubmitter)

    def test_start_date_from_picker(self, engine):
        """Test that picker values are normalised and null is invalid."""
        engine.set_start_date("2024-05-06")
        assert engine.get("startDate") == date(2024, 5, 6)

        engine.set_start_date(None)
        assert engine.get("startDate") is None
        assert engine.check_field("startDate") == "Start date is required"

    def test_update_coerces_start_date(self, engine):
        engine.update({"startDate": "garbage"})
        assert engine.get("startDate") is None

    def test_speculative_validation_has_no_side_effects(self, engine):
        errors = engine.validate()
        assert "firstName" in errors
        assert engine.errors == {}
        assert engine.status is SubmissionStatus.IDLE

    def test_check_field(self, engine):
        engine.set("subscribe", True)
        assert engine.check_field("referral") == "Referral source is required when subscribing"
        engine.set("referral", "Podcast")
        assert engine.check_field("referral") is None

    def test_remove_last_hobby_absorbed(self, engine):
        """Test that removing the only hobby is refused quietly."""
        only_id = engine.get("hobbies.0.stableId")
        assert engine.remove_hobby(only_id) is False
        assert len(engine.get("hobbies")) == 1
        assert engine.errors == {}

    def test_remove_unknown_hobby(self, engine):
        with pytest.raises(FieldPathError):
            engine.remove_hobby("missing")


class TestFormEngineSubmit:
    """End-to-end submissions through the facade."""

    @pytest.mark.asyncio
    async def test_example_record(self, engine):
        """Test the empty-name, underage, unset-gender example."""
        engine.update({"firstName": "", "age": 16, "gender": ""})

        outcome = await engine.submit()

        assert not outcome.accepted
        assert engine.errors["firstName"] == "First Name is Required"
        assert engine.errors["age"] == "You must be at least 18 years old"
        assert engine.errors["gender"] == "Gender is Required"
        assert engine.errors["hobbies.0.name"] == "Hobby name is required"
        assert engine.controller._submitter.calls == []

    @pytest.mark.asyncio
    async def test_valid_submission(self, engine):
        engine.update(VALID_VALUES)
        outcome = await engine.submit()
        assert outcome.accepted
        assert engine.get("firstName") == ""
        assert engine.errors == {}

    @pytest.mark.asyncio
    async def test_hobby_errors_follow_identity(self, engine):
        """Test that removing an earlier item keeps errors with their items."""
        engine.update(VALID_VALUES)
        named = engine.get("hobbies.0")
        blank = engine.add_hobby("")
        other_blank = engine.add_hobby("")

        await engine.submit()
        assert engine.hobby_error(named.stable_id) is None
        assert engine.hobby_error(blank.stable_id) == "Hobby name is required"

        assert engine.remove_hobby(named.stable_id)
        assert engine.hobby_error(blank.stable_id) == "Hobby name is required"
        assert engine.hobby_error(other_blank.stable_id) == "Hobby name is required"
        assert engine.errors["hobbies.0.name"] == "Hobby name is required"
        assert "hobbies.2.name" not in engine.errors

    @pytest.mark.asyncio
    async def test_busy_through_facade(self, engine):
        engine.update(VALID_VALUES)
        engine.controller._status = SubmissionStatus.SUBMITTING
        with pytest.raises(BusyRejected):
            await engine.submit()


class TestSubmitForm:
    """Tests for the submit_form convenience function."""

    @pytest.mark.asyncio
    async def test_valid(self):
        submitter = SimulatedSubmitter(latency=0)
        outcome = await submit_form(VALID_VALUES, submitter=submitter)
        assert outcome.accepted
        assert submitter.calls[0]["firstName"] == "Ada"
        assert submitter.calls[0]["hobbies"] == [{"name": "Mathematics"}]

    @pytest.mark.asyncio
    async def test_rejected(self):
        submitter = SimulatedSubmitter(latency=0, fail_with="Server is down")
        outcome = await submit_form(VALID_VALUES, submitter=submitter)
        assert not outcome.accepted
        assert outcome.errors == {"root": "Server is down"}
