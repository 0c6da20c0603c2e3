"""Exceptions raised around elevation requests."""
from __future__ import annotations

from .outcome import ElevationOutcome, describe


class ElevatorError(Exception):
    """Base class for every error raised by :mod:`elevator`."""


class InvalidRequestError(ElevatorError, ValueError):
    """Raised when a request is rejected before any OS call is attempted."""


class ElevationError(ElevatorError):
    """An elevation attempt ended in an environment failure."""

    def __init__(self, outcome: ElevationOutcome, command: str | None = None) -> None:
        super().__init__(describe(outcome))
        self.outcome = outcome
        self.command = command


class ProcessWaitError(ElevatorError, OSError):
    """Waiting on the elevated process handle failed."""


class UnsupportedPlatformError(ElevatorError, OSError):
    """No elevation backend exists for the running platform."""


__all__ = [
    "ElevationError",
    "ElevatorError",
    "InvalidRequestError",
    "ProcessWaitError",
    "UnsupportedPlatformError",
]
