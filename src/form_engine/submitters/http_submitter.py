"""
HTTP submit collaborator.

POSTs the record payload as JSON and turns any non-success outcome into
SubmissionRejected with a message fit for showing to the user.
"""

import logging
from typing import Any

import httpx

from form_engine.config import get_config
from form_engine.errors import SubmissionRejected
from form_engine.models.record import Record

logger = logging.getLogger("form-engine.submit")


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in ("message", "detail", "error"):
            if isinstance(body.get(key), str) and body[key]:
                return body[key]
    return f"Submission failed with status {response.status_code}"


class HttpSubmitter:
    """
    Submit records to a remote HTTP endpoint.

    Usage:
        submitter = HttpSubmitter("https://example.com/api/signups")
        response = await submitter(record)
    """

    def __init__(
        self,
        url: str | None = None,
        timeout: float | None = None,
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Args:
            url: Endpoint URL. If None, uses config.submit_url.
            timeout: Request timeout in seconds. If None, uses config.submit_timeout.
            headers: Extra request headers.
            transport: Optional httpx transport, e.g. httpx.MockTransport.
        """
        config = get_config()
        self.url = url or config.submit_url
        self.timeout = config.submit_timeout if timeout is None else timeout
        self.headers = dict(headers or {})
        self.transport = transport

    async def __call__(self, record: Record) -> Any:
        headers = {"Content-Type": "application/json", **self.headers}

        logger.info(f"POST to submission endpoint: {self.url}")
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(self.url, json=record.to_payload(), headers=headers)
        except httpx.ConnectError as e:
            logger.error(f"Connection error to submission endpoint: {e}")
            raise SubmissionRejected("Could not reach the submission server") from e
        except httpx.TimeoutException as e:
            logger.error(f"Timeout connecting to submission endpoint: {e}")
            raise SubmissionRejected("The submission server did not respond in time") from e
        except httpx.HTTPError as e:
            logger.error(f"Failed to submit: {type(e).__name__}: {e}")
            raise SubmissionRejected(f"Submission failed: {e}") from e

        logger.info(f"Submission endpoint response: {response.status_code}")
        if response.is_error:
            raise SubmissionRejected(_error_message(response), status_code=response.status_code)

        try:
            return response.json()
        except ValueError:
            return {"status": response.status_code, "text": response.text}
