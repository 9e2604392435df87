"""
Simulated submit collaborator for development and demos.

Waits for a configurable latency, then either echoes the payload or
fails with a fixed message.
"""

import asyncio
from typing import Any

from form_engine.config import get_config
from form_engine.errors import SubmissionRejected
from form_engine.models.record import Record


class SimulatedSubmitter:
    """Stand-in for a remote endpoint."""

    def __init__(self, latency: float | None = None, fail_with: str | None = None):
        """
        Args:
            latency: Seconds to wait before answering. If None, uses config.simulated_latency.
            fail_with: If set, every call fails with this message.
        """
        self.latency = get_config().simulated_latency if latency is None else latency
        self.fail_with = fail_with
        self.calls: list[dict[str, Any]] = []

    async def __call__(self, record: Record) -> dict[str, Any]:
        payload = record.to_payload()
        self.calls.append(payload)
        await asyncio.sleep(self.latency)
        if self.fail_with:
            raise SubmissionRejected(self.fail_with)
        return {"status": 200, "data": payload}
