"""Tests for the submission controller state machine."""

import asyncio

import pytest

from form_engine.controller import SubmissionController
from form_engine.errors import BusyRejected, SubmissionRejected
from form_engine.models.record import Record
from form_engine.models.submission import SubmissionStatus
from form_engine.submitters.simulated import SimulatedSubmitter

from conftest import FIXED_TODAY


class GatedSubmitter:
    """Submitter that waits until the test releases it."""

    def __init__(self):
        self.release = asyncio.Event()
        self.calls = 0

    async def __call__(self, record: Record) -> dict:
        self.calls += 1
        await self.release.wait()
        return {"id": self.calls}


class FlakySubmitter:
    """Fails on the first call, succeeds afterwards."""

    def __init__(self):
        self.calls = 0

    async def __call__(self, record: Record) -> dict:
        self.calls += 1
        if self.calls == 1:
            raise RuntimeError("Service unavailable")
        return {"ok": True}


def _defaults_payload() -> dict:
    return Record.defaults(FIXED_TODAY).to_payload()


class TestInvalidSubmission:
    """Validation failures never reach the collaborator."""

    @pytest.mark.asyncio
    async def test_collaborator_not_called(self, store):
        submitter = SimulatedSubmitter(latency=0)
        controller = SubmissionController(store, submitter)

        outcome = await controller.submit()

        assert not outcome.accepted
        assert submitter.calls == []
        assert controller.status is SubmissionStatus.IDLE
        assert controller.errors["firstName"] == "First Name is Required"
        assert outcome.errors == controller.errors

    @pytest.mark.asyncio
    async def test_errors_replaced_not_merged(self, store):
        """Test that fixing a field removes its stale error."""
        controller = SubmissionController(store, SimulatedSubmitter(latency=0))
        await controller.submit()
        assert "firstName" in controller.errors

        store.set("firstName", "Ada")
        await controller.submit()
        assert "firstName" not in controller.errors
        assert "lastName" in controller.errors


class TestSuccessfulSubmission:
    """A valid record is sent once and the store is reset."""

    @pytest.mark.asyncio
    async def test_success_resets_store(self, filled_store):
        submitter = SimulatedSubmitter(latency=0)
        controller = SubmissionController(filled_store, submitter)
        sent = filled_store.snapshot().to_payload()

        outcome = await controller.submit()

        assert outcome.accepted
        assert outcome.status is SubmissionStatus.SUCCEEDED
        assert submitter.calls == [sent]
        assert outcome.response == {"status": 200, "data": sent}
        assert controller.last_response == outcome.response
        assert filled_store.snapshot().to_payload() == _defaults_payload()
        assert controller.errors == {}
        assert controller.status is SubmissionStatus.IDLE

    @pytest.mark.asyncio
    async def test_succeeded_is_transient(self, filled_store):
        """Test the observed sequence of status transitions."""
        controller = SubmissionController(filled_store, SimulatedSubmitter(latency=0))
        seen: list[SubmissionStatus] = []
        controller.add_listener(seen.append)

        await controller.submit()

        assert seen == [
            SubmissionStatus.SUBMITTING,
            SubmissionStatus.SUCCEEDED,
            SubmissionStatus.IDLE,
        ]

    @pytest.mark.asyncio
    async def test_listener_unsubscribe(self, filled_store):
        controller = SubmissionController(filled_store, SimulatedSubmitter(latency=0))
        seen: list[SubmissionStatus] = []
        unsubscribe = controller.add_listener(seen.append)
        unsubscribe()

        await controller.submit()

        assert seen == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("broken_on", [SubmissionStatus.SUBMITTING, SubmissionStatus.SUCCEEDED])
    async def test_failing_listener_does_not_block_settling(self, filled_store, broken_on):
        """Test that a listener that raises leaves the controller able to submit again."""
        submitter = SimulatedSubmitter(latency=0)
        controller = SubmissionController(filled_store, submitter)
        seen: list[SubmissionStatus] = []

        def broken(status: SubmissionStatus) -> None:
            if status is broken_on:
                raise RuntimeError("listener bug")

        controller.add_listener(broken)
        controller.add_listener(seen.append)

        outcome = await controller.submit()

        assert outcome.accepted
        assert len(submitter.calls) == 1
        assert controller.status is SubmissionStatus.IDLE
        assert not controller.is_submitting
        assert seen[-1] is SubmissionStatus.IDLE
        assert filled_store.snapshot().to_payload() == _defaults_payload()

        second = await controller.submit()
        assert not second.accepted
        assert "firstName" in second.errors

    @pytest.mark.asyncio
    async def test_reset_waits_for_resolution(self, filled_store):
        """Test that the store keeps its values while the call is in flight."""
        submitter = GatedSubmitter()
        controller = SubmissionController(filled_store, submitter)

        task = asyncio.create_task(controller.submit())
        await asyncio.sleep(0)
        assert filled_store.get("firstName") == "Ada"

        submitter.release.set()
        await task
        assert filled_store.get("firstName") == ""


class TestFailedSubmission:
    """A rejected call keeps the record and reports a root error."""

    @pytest.mark.asyncio
    async def test_failure_keeps_record(self, filled_store):
        controller = SubmissionController(filled_store, SimulatedSubmitter(latency=0, fail_with="Server exploded"))
        before = filled_store.snapshot()

        outcome = await controller.submit()

        assert not outcome.accepted
        assert outcome.status is SubmissionStatus.FAILED
        assert controller.status is SubmissionStatus.FAILED
        assert controller.errors == {"root": "Server exploded"}
        assert controller.root_error == "Server exploded"
        assert filled_store.snapshot() == before

    @pytest.mark.asyncio
    async def test_rejection_message_used_verbatim(self, filled_store):
        """Test that the rejection message becomes the root entry."""

        async def broken(record):
            raise SubmissionRejected("Email already registered", status_code=409)

        controller = SubmissionController(filled_store, broken)
        await controller.submit()
        assert controller.errors == {"root": "Email already registered"}

    @pytest.mark.asyncio
    async def test_resubmit_after_failure(self, filled_store):
        """Test that the user can retry without re-entering anything."""
        submitter = FlakySubmitter()
        controller = SubmissionController(filled_store, submitter)

        await controller.submit()
        assert controller.root_error == "Service unavailable"

        outcome = await controller.submit()
        assert outcome.accepted
        assert submitter.calls == 2
        assert controller.errors == {}
        assert controller.status is SubmissionStatus.IDLE

    @pytest.mark.asyncio
    async def test_invalid_after_failure(self, filled_store):
        """Test that a validation pass replaces the root message."""
        controller = SubmissionController(filled_store, SimulatedSubmitter(latency=0, fail_with="Down"))
        await controller.submit()

        filled_store.set("firstName", "")
        await controller.submit()

        assert controller.status is SubmissionStatus.FAILED
        assert controller.errors == {"firstName": "First Name is Required"}


class TestBusyGuard:
    """Only one submission may be in flight."""

    @pytest.mark.asyncio
    async def test_second_submit_rejected(self, filled_store):
        submitter = GatedSubmitter()
        controller = SubmissionController(filled_store, submitter)

        first = asyncio.create_task(controller.submit())
        await asyncio.sleep(0)
        assert controller.status is SubmissionStatus.SUBMITTING
        assert controller.is_submitting

        with pytest.raises(BusyRejected):
            await controller.submit()
        assert submitter.calls == 1
        assert controller.status is SubmissionStatus.SUBMITTING

        submitter.release.set()
        outcome = await first
        assert outcome.accepted
        assert submitter.calls == 1

    @pytest.mark.asyncio
    async def test_cancelled_call_settles_as_failed(self, filled_store):
        submitter = GatedSubmitter()
        controller = SubmissionController(filled_store, submitter)

        task = asyncio.create_task(controller.submit())
        await asyncio.sleep(0)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert controller.status is SubmissionStatus.FAILED
        assert controller.root_error == "Submission was cancelled"
        assert filled_store.get("firstName") == "Ada"


class TestDropItemErrors:
    """Re-keying item errors after a removal."""

    def test_rekey(self, store):
        controller = SubmissionController(store, SimulatedSubmitter(latency=0))
        controller._errors = {
            "firstName": "First Name is Required",
            "hobbies.0.name": "Hobby name is required",
            "hobbies.1.name": "Hobby name is required",
            "hobbies.3.name": "Hobby name is required",
        }
        controller.drop_item_errors("hobbies", 1)
        assert controller.errors == {
            "firstName": "First Name is Required",
            "hobbies.0.name": "Hobby name is required",
            "hobbies.2.name": "Hobby name is required",
        }
