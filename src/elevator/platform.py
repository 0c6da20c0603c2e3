"""Platform detection helpers and native library loaders."""
from __future__ import annotations

import ctypes
import platform
import sys
from typing import Any

_SYSTEM = platform.system()
IS_WINDOWS = _SYSTEM == "Windows"
IS_MAC = _SYSTEM == "Darwin"
IS_LINUX = _SYSTEM == "Linux"

_libraries: dict[str, Any] = {}


def load_library(name: str) -> Any | None:
    """Return a cached ``WinDLL`` for *name* that records the last error.

    ``use_last_error`` makes ctypes copy the thread's last-error value right
    after each foreign call, so it can be read with :func:`ctypes.get_last_error`
    without being clobbered by later calls.
    """

    if not IS_WINDOWS:
        return None
    library = _libraries.get(name)
    if library is None:
        library = ctypes.WinDLL(name, use_last_error=True)  # type: ignore[attr-defined]
        _libraries[name] = library
    return library


def describe_platform() -> str:
    return f"{_SYSTEM or sys.platform} ({platform.release() or 'unknown release'})"


__all__ = [
    "IS_LINUX",
    "IS_MAC",
    "IS_WINDOWS",
    "describe_platform",
    "load_library",
]
