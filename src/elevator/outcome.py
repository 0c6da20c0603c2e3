"""Closed set of elevation results and their human-readable descriptions."""
from __future__ import annotations

from enum import Enum
from typing import Any


class ElevationOutcome(str, Enum):
    """Result of a single elevation attempt."""

    SUCCESS = "success"
    CANCELLED = "cancelled"
    FILE_NOT_FOUND = "file_not_found"
    PATH_NOT_FOUND = "path_not_found"
    DATA_EXCHANGE_FAILURE = "data_exchange_failure"
    NO_ASSOCIATION = "no_association"
    ACCESS_DENIED = "access_denied"
    DEPENDENCY_NOT_FOUND = "dependency_not_found"
    NOT_ENOUGH_MEMORY = "not_enough_memory"
    SHARING_VIOLATION = "sharing_violation"
    UNKNOWN_ERROR = "unknown_error"

    @property
    def is_error(self) -> bool:
        """``False`` for the two outcomes callers treat as normal data."""

        return self not in (ElevationOutcome.SUCCESS, ElevationOutcome.CANCELLED)

    @property
    def description(self) -> str:
        return describe(self)


UNKNOWN_DESCRIPTION = "Unknown error"

_DESCRIPTIONS: dict[ElevationOutcome, str] = {
    ElevationOutcome.SUCCESS: "Success",
    ElevationOutcome.CANCELLED: "The user cancelled the elevation request",
    ElevationOutcome.FILE_NOT_FOUND: "The specified file was not found",
    ElevationOutcome.PATH_NOT_FOUND: "The specified path was not found",
    ElevationOutcome.DATA_EXCHANGE_FAILURE: (
        "The Dynamic Data Exchange (DDE) transaction failed"
    ),
    ElevationOutcome.NO_ASSOCIATION: (
        "There is no application associated with the specified file name extension"
    ),
    ElevationOutcome.ACCESS_DENIED: "Access to the specified file is denied",
    ElevationOutcome.DEPENDENCY_NOT_FOUND: (
        "One of the library files necessary to run the application can't be found"
    ),
    ElevationOutcome.NOT_ENOUGH_MEMORY: (
        "There is not enough memory to perform the specified action"
    ),
    ElevationOutcome.SHARING_VIOLATION: "A sharing violation occurred",
    ElevationOutcome.UNKNOWN_ERROR: UNKNOWN_DESCRIPTION,
}


def describe(outcome: Any) -> str:
    """Return the fixed English sentence for *outcome*.

    Values outside :class:`ElevationOutcome` map to ``"Unknown error"``.
    """

    try:
        return _DESCRIPTIONS[ElevationOutcome(outcome)]
    except (ValueError, KeyError, TypeError):
        return UNKNOWN_DESCRIPTION


__all__ = ["ElevationOutcome", "UNKNOWN_DESCRIPTION", "describe"]
