"""ctypes declarations for the Win32 calls used to launch elevated processes."""
from __future__ import annotations

import ctypes
from typing import Any

from . import platform as platform_state
from .errors import UnsupportedPlatformError

# SHELLEXECUTEINFOW.fMask
SEE_MASK_NOCLOSEPROCESS = 0x00000040
SEE_MASK_NOASYNC = 0x00000100
SEE_MASK_FLAG_NO_UI = 0x00000400

# nShow
SW_HIDE = 0
SW_SHOWNORMAL = 1

INFINITE = 0xFFFFFFFF
WAIT_OBJECT_0 = 0x00000000
WAIT_FAILED = 0xFFFFFFFF

ERROR_FILE_NOT_FOUND = 2
ERROR_PATH_NOT_FOUND = 3
ERROR_ACCESS_DENIED = 5
ERROR_NOT_ENOUGH_MEMORY = 8
ERROR_SHARING_VIOLATION = 32
ERROR_NO_ASSOCIATION = 1155
ERROR_DDE_FAIL = 1156
ERROR_DLL_NOT_FOUND = 1157
ERROR_CANCELLED = 1223

DWORD = ctypes.c_uint32
HANDLE = ctypes.c_void_p
LPCWSTR = ctypes.c_wchar_p


class SHELLEXECUTEINFOW(ctypes.Structure):
    _fields_ = [
        ("cbSize", DWORD),
        ("fMask", DWORD),
        ("hwnd", HANDLE),
        ("lpVerb", LPCWSTR),
        ("lpFile", LPCWSTR),
        ("lpParameters", LPCWSTR),
        ("lpDirectory", LPCWSTR),
        ("nShow", ctypes.c_int),
        ("hInstApp", HANDLE),
        ("lpIDList", ctypes.c_void_p),
        ("lpClass", LPCWSTR),
        ("hkeyClass", HANDLE),
        ("dwHotKey", DWORD),
        ("hIconOrMonitor", HANDLE),
        ("hProcess", HANDLE),
    ]

    @classmethod
    def new(cls) -> "SHELLEXECUTEINFOW":
        """Return a zeroed structure with ``cbSize`` already filled in."""

        info = cls()
        info.cbSize = ctypes.sizeof(cls)
        return info


class Win32Api:
    """Thin wrapper over ``shell32``/``kernel32`` with typed prototypes.

    Each method returns plain Python values. The last-error code of a failing
    ``ShellExecuteExW`` is read straight after the call, before anything else
    runs on the thread.
    """

    def __init__(self, shell32: Any, kernel32: Any) -> None:
        self._shell32 = shell32
        self._kernel32 = kernel32

        self._shell_execute_ex = shell32.ShellExecuteExW
        self._shell_execute_ex.argtypes = [ctypes.POINTER(SHELLEXECUTEINFOW)]
        self._shell_execute_ex.restype = ctypes.c_int

        self._wait_for_single_object = kernel32.WaitForSingleObject
        self._wait_for_single_object.argtypes = [HANDLE, DWORD]
        self._wait_for_single_object.restype = DWORD

        self._close_handle = kernel32.CloseHandle
        self._close_handle.argtypes = [HANDLE]
        self._close_handle.restype = ctypes.c_int

        self._is_user_an_admin = shell32.IsUserAnAdmin
        self._is_user_an_admin.argtypes = []
        self._is_user_an_admin.restype = ctypes.c_int

    @classmethod
    def load(cls) -> "Win32Api":
        if not platform_state.IS_WINDOWS:
            raise UnsupportedPlatformError("The Win32 API is only available on Windows")
        return cls(
            platform_state.load_library("shell32"),
            platform_state.load_library("kernel32"),
        )

    def shell_execute_ex(self, info: SHELLEXECUTEINFOW) -> tuple[bool, int]:
        """Call ``ShellExecuteExW``; return ``(ok, last_error)``."""

        ok = self._shell_execute_ex(ctypes.byref(info))
        if ok:
            return True, 0
        return False, ctypes.get_last_error()  # type: ignore[attr-defined]

    def wait_for_single_object(self, handle: int, timeout: int = INFINITE) -> int:
        return int(self._wait_for_single_object(handle, timeout))

    def close_handle(self, handle: int) -> bool:
        return bool(self._close_handle(handle))

    def is_user_an_admin(self) -> bool:
        return bool(self._is_user_an_admin())


__all__ = [
    "ERROR_ACCESS_DENIED",
    "ERROR_CANCELLED",
    "ERROR_DDE_FAIL",
    "ERROR_DLL_NOT_FOUND",
    "ERROR_FILE_NOT_FOUND",
    "ERROR_NOT_ENOUGH_MEMORY",
    "ERROR_NO_ASSOCIATION",
    "ERROR_PATH_NOT_FOUND",
    "ERROR_SHARING_VIOLATION",
    "INFINITE",
    "SEE_MASK_FLAG_NO_UI",
    "SEE_MASK_NOASYNC",
    "SEE_MASK_NOCLOSEPROCESS",
    "SHELLEXECUTEINFOW",
    "SW_HIDE",
    "SW_SHOWNORMAL",
    "WAIT_FAILED",
    "WAIT_OBJECT_0",
    "Win32Api",
]
