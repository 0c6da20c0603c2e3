"""Run a command elevated and translate the result into an outcome.

On Windows the request goes through ``ShellExecuteExW`` with the ``runas``
verb, which shows the UAC consent prompt. The call blocks until the elevated
process exits. Other platforms are served by :mod:`elevator.posix`.
"""
from __future__ import annotations

import ctypes
import logging
import os
from contextlib import contextmanager
from typing import Iterable, Iterator, Mapping, Protocol

from . import platform as platform_state
from . import win32
from .config import ElevatorSettings, get_settings
from .errors import ProcessWaitError, UnsupportedPlatformError
from .outcome import ElevationOutcome
from .request import ElevationRequest

logger = logging.getLogger(__name__)

RUNAS_VERB = "runas"

LAUNCH_MASK = (
    win32.SEE_MASK_NOCLOSEPROCESS | win32.SEE_MASK_NOASYNC | win32.SEE_MASK_FLAG_NO_UI
)

WINDOWS_ERROR_OUTCOMES: Mapping[int, ElevationOutcome] = {
    win32.ERROR_FILE_NOT_FOUND: ElevationOutcome.FILE_NOT_FOUND,
    win32.ERROR_PATH_NOT_FOUND: ElevationOutcome.PATH_NOT_FOUND,
    win32.ERROR_DDE_FAIL: ElevationOutcome.DATA_EXCHANGE_FAILURE,
    win32.ERROR_NO_ASSOCIATION: ElevationOutcome.NO_ASSOCIATION,
    win32.ERROR_ACCESS_DENIED: ElevationOutcome.ACCESS_DENIED,
    win32.ERROR_DLL_NOT_FOUND: ElevationOutcome.DEPENDENCY_NOT_FOUND,
    win32.ERROR_CANCELLED: ElevationOutcome.CANCELLED,
    win32.ERROR_NOT_ENOUGH_MEMORY: ElevationOutcome.NOT_ENOUGH_MEMORY,
    win32.ERROR_SHARING_VIOLATION: ElevationOutcome.SHARING_VIOLATION,
}


def outcome_from_windows_error(code: int) -> ElevationOutcome:
    """Map a Win32 error code to an outcome; unknown codes become ``UNKNOWN_ERROR``."""

    return WINDOWS_ERROR_OUTCOMES.get(code, ElevationOutcome.UNKNOWN_ERROR)


class ElevationBackend(Protocol):
    def run(self, request: ElevationRequest) -> ElevationOutcome: ...


@contextmanager
def _native_strings(info: win32.SHELLEXECUTEINFOW, request: ElevationRequest) -> Iterator[None]:
    """Point ``lpFile``/``lpParameters`` at owned UTF-16 buffers for one call."""

    file_buffer = ctypes.create_unicode_buffer(request.command)
    parameter_buffer = ctypes.create_unicode_buffer(request.parameters)
    info.lpFile = ctypes.cast(file_buffer, win32.LPCWSTR)
    info.lpParameters = ctypes.cast(parameter_buffer, win32.LPCWSTR)
    try:
        yield
    finally:
        info.lpFile = None
        info.lpParameters = None
        del file_buffer, parameter_buffer


class ShellExecuteBackend:
    """Elevate through ``ShellExecuteExW(runas)`` and wait for the process."""

    def __init__(self, api: win32.Win32Api | None = None, *, show_window: bool = False) -> None:
        self._api = api
        self.show_window = show_window

    @property
    def api(self) -> win32.Win32Api:
        if self._api is None:
            self._api = win32.Win32Api.load()
        return self._api

    def build_info(self) -> win32.SHELLEXECUTEINFOW:
        info = win32.SHELLEXECUTEINFOW.new()
        info.fMask = LAUNCH_MASK
        info.lpVerb = RUNAS_VERB
        info.nShow = win32.SW_SHOWNORMAL if self.show_window else win32.SW_HIDE
        info.lpDirectory = None
        return info

    def run(self, request: ElevationRequest) -> ElevationOutcome:
        api = self.api
        info = self.build_info()
        with _native_strings(info, request):
            ok, error_code = api.shell_execute_ex(info)

        if not ok:
            outcome = outcome_from_windows_error(error_code)
            if outcome is ElevationOutcome.CANCELLED:
                logger.info("Elevation of %s was declined", request.command)
            else:
                logger.warning(
                    "ShellExecuteExW rejected %s (error %d): %s",
                    request.command,
                    error_code,
                    outcome.description,
                )
            return outcome

        handle = info.hProcess
        if not handle:
            return ElevationOutcome.SUCCESS
        return self._wait_and_release(api, handle, request)

    def _wait_and_release(
        self, api: win32.Win32Api, handle: int, request: ElevationRequest
    ) -> ElevationOutcome:
        try:
            status = api.wait_for_single_object(handle, win32.INFINITE)
        finally:
            closed = api.close_handle(handle)

        if status == win32.WAIT_FAILED:
            logger.error("Waiting for elevated %s failed", request.command)
            raise ProcessWaitError(f"Could not wait for the elevated process {request.command!r}")
        if not closed:
            logger.error("Could not close the process handle of %s", request.command)
            return ElevationOutcome.UNKNOWN_ERROR
        logger.debug("Elevated %s exited", request.command)
        return ElevationOutcome.SUCCESS


def default_backend(settings: ElevatorSettings | None = None) -> ElevationBackend:
    """Return the backend for the running platform."""

    settings = settings or get_settings()
    if platform_state.IS_WINDOWS:
        return ShellExecuteBackend(show_window=settings.show_window)

    from .posix import OsascriptBackend, PolkitBackend

    if platform_state.IS_MAC:
        return OsascriptBackend()
    if platform_state.IS_LINUX or os.name == "posix":
        return PolkitBackend(helpers=settings.posix_helpers)
    raise UnsupportedPlatformError(
        f"Elevation is not supported on {platform_state.describe_platform()}"
    )


def elevate(
    command: str,
    arguments: Iterable[str] = (),
    *,
    backend: ElevationBackend | None = None,
) -> ElevationOutcome:
    """Run *command* with *arguments* elevated and block until it exits."""

    request = ElevationRequest(command, arguments)  # type: ignore[arg-type]
    backend = backend or default_backend()
    logger.debug("Requesting elevation: %s", request)
    return backend.run(request)


__all__ = [
    "ElevationBackend",
    "LAUNCH_MASK",
    "RUNAS_VERB",
    "ShellExecuteBackend",
    "WINDOWS_ERROR_OUTCOMES",
    "default_backend",
    "elevate",
    "outcome_from_windows_error",
]
