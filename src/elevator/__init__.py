"""Public package interface for elevator."""

__version__ = "1.0.0"

from .binding import (
    ElevationResult,
    elevate_async,
    execute,
    execute_async,
    execute_with_callback,
)
from .errors import (
    ElevationError,
    ElevatorError,
    InvalidRequestError,
    ProcessWaitError,
    UnsupportedPlatformError,
)
from .executor import default_backend, elevate
from .outcome import ElevationOutcome, describe
from .privileges import is_elevated, relaunch_elevated, require_elevation
from .request import ElevationRequest, join_arguments

__all__ = [
    "ElevationError",
    "ElevationOutcome",
    "ElevationRequest",
    "ElevationResult",
    "ElevatorError",
    "InvalidRequestError",
    "ProcessWaitError",
    "UnsupportedPlatformError",
    "default_backend",
    "describe",
    "elevate",
    "elevate_async",
    "execute",
    "execute_async",
    "execute_with_callback",
    "is_elevated",
    "join_arguments",
    "relaunch_elevated",
    "require_elevation",
]
