"""
Submit collaborators.

Anything matching the Submitter signature works; these two ship with
the engine.
"""

from form_engine.submitters.base import Submitter, failure_message
from form_engine.submitters.http_submitter import HttpSubmitter
from form_engine.submitters.simulated import SimulatedSubmitter

__all__ = [
    "Submitter",
    "failure_message",
    "HttpSubmitter",
    "SimulatedSubmitter",
]
