"""Administrative privilege checks and self-relaunch helpers."""
from __future__ import annotations

import logging
import os
import sys
from typing import List, Optional

from . import platform as platform_state
from .binding import ElevationResult, execute
from .executor import ElevationBackend

logger = logging.getLogger(__name__)


def is_elevated() -> bool:
    """Return ``True`` when the current process has administrator/root rights."""

    if platform_state.IS_WINDOWS:
        from .win32 import Win32Api

        try:
            return Win32Api.load().is_user_an_admin()
        except OSError as exc:
            logger.debug("IsUserAnAdmin unavailable: %s", exc)
            return False
    geteuid = getattr(os, "geteuid", None)
    if not callable(geteuid):
        return False
    return geteuid() == 0


def relaunch_elevated(
    argv: Optional[List[str]] = None, *, backend: ElevationBackend | None = None
) -> ElevationResult:
    """Run the current interpreter again, elevated, with *argv* (``sys.argv`` by default)."""

    arguments = list(sys.argv if argv is None else argv)
    return execute([sys.executable, *arguments], backend=backend)


def require_elevation(
    argv: Optional[List[str]] = None, *, backend: ElevationBackend | None = None
) -> None:
    """Return if already elevated; otherwise relaunch elevated and exit.

    The unprivileged process exits with status 0 once the elevated copy has
    finished or the user declined the prompt. Environment failures propagate
    as :class:`~elevator.errors.ElevationError`.
    """

    if is_elevated():
        return
    result = relaunch_elevated(argv, backend=backend)
    if result.cancelled:
        logger.warning("Elevation was declined; exiting without administrator rights")
    raise SystemExit(0)


__all__ = ["is_elevated", "relaunch_elevated", "require_elevation"]
