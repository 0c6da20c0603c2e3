"""Elevation backends for Linux (polkit helpers) and macOS (``osascript``).

The pre-launch check runs as the unprivileged caller, so it only rejects a
command when it can prove the command is unusable. Anything it cannot inspect
is handed to the elevated helper, which sees the filesystem as root.
"""
from __future__ import annotations

import logging
import os
import shlex
import stat
import subprocess
from collections import deque
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from .config import DEFAULT_POSIX_HELPERS
from .outcome import ElevationOutcome
from .request import ElevationRequest

logger = logging.getLogger(__name__)

AUTH_MARKER = "AUTHENTICATION SUCCEEDED"

# pkexec exit statuses when the target never ran
PKEXEC_DISMISSED = 126
PKEXEC_NOT_AUTHORIZED = 127

# directories root resolves commands from, whatever the caller's PATH says
SYSTEM_PATH = ("/usr/local/sbin", "/usr/local/bin", "/usr/sbin", "/usr/bin", "/sbin", "/bin")

# lines of the elevated command's output kept for error reports
OUTPUT_TAIL_LINES = 20

OSASCRIPT = "/usr/bin/osascript"
APPLESCRIPT_USER_CANCELED = "-128"

_ANY_EXECUTE = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


@dataclass(frozen=True)
class RunResult:
    code: int
    out: str
    err: str


@dataclass(frozen=True)
class MarkedRunResult:
    """Exit status of a helper run plus whether the auth marker was printed."""

    code: int
    authenticated: bool
    tail: tuple[str, ...]


def run_command(cmd: list[str]) -> RunResult:
    """Run *cmd* to completion with captured output and no stdin."""

    with subprocess.Popen(
        cmd,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        stdin=subprocess.DEVNULL,
        text=True,
        encoding="utf-8",
        errors="replace",
    ) as proc:
        out, err = proc.communicate()
    return RunResult(proc.returncode, out.strip(), err.strip())


def run_marked_command(cmd: list[str], marker: str = AUTH_MARKER) -> MarkedRunResult:
    """Run *cmd*, watching its merged output for *marker*.

    Output is streamed line by line to the DEBUG log and only the last
    :data:`OUTPUT_TAIL_LINES` lines are retained.
    """

    tail: deque[str] = deque(maxlen=OUTPUT_TAIL_LINES)
    authenticated = False
    with subprocess.Popen(
        cmd,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        stdin=subprocess.DEVNULL,
        text=True,
        encoding="utf-8",
        errors="replace",
        bufsize=1,
    ) as proc:
        assert proc.stdout is not None
        for line in proc.stdout:
            line = line.rstrip("\n")
            if not authenticated and line.strip() == marker:
                authenticated = True
                continue
            tail.append(line)
            logger.debug("%s", line)
        code = proc.wait()
    return MarkedRunResult(code, authenticated, tuple(tail))


def search_path(env: Optional[dict[str, str]] = None) -> list[str]:
    """Return the caller's ``PATH`` entries followed by the system directories."""

    env = os.environ if env is None else env
    entries = [entry for entry in env.get("PATH", os.defpath).split(os.pathsep) if entry]
    for directory in SYSTEM_PATH:
        if directory not in entries:
            entries.append(directory)
    return entries


def resolve_command(name: str) -> Optional[str]:
    for directory in search_path():
        candidate = os.path.join(directory, name)
        if os.path.isfile(candidate):
            return candidate
    return None


def check_command(command: str) -> Optional[ElevationOutcome]:
    """Return a failure outcome when *command* cannot be launched, else ``None``.

    Execute permission is judged from the mode bits alone: a file that only
    root may run is still a valid target.
    """

    if os.sep not in command:
        if resolve_command(command) is None:
            return ElevationOutcome.FILE_NOT_FOUND
        return None

    path = Path(command).expanduser()
    try:
        info = os.stat(path)
    except FileNotFoundError:
        return _missing_target(path)
    except NotADirectoryError:
        return ElevationOutcome.PATH_NOT_FOUND
    except OSError as exc:
        logger.debug("Cannot inspect %s (%s); leaving it to the helper", path, exc)
        return None

    if stat.S_ISDIR(info.st_mode) or not info.st_mode & _ANY_EXECUTE:
        return ElevationOutcome.ACCESS_DENIED
    return None


def _missing_target(path: Path) -> Optional[ElevationOutcome]:
    try:
        parent = os.stat(path.parent)
    except (FileNotFoundError, NotADirectoryError):
        return ElevationOutcome.PATH_NOT_FOUND
    except OSError:
        return None
    if not stat.S_ISDIR(parent.st_mode):
        return ElevationOutcome.PATH_NOT_FOUND
    return ElevationOutcome.FILE_NOT_FOUND


def shell_line(request: ElevationRequest) -> str:
    """Render *request* as a shell line; only the command itself is quoted."""

    command = shlex.quote(request.command)
    if not request.arguments:
        return command
    return f"{command} {request.parameters}"


class PolkitBackend:
    """Elevate through ``pkexec`` or ``kdesudo`` and wait for the command."""

    def __init__(self, helpers: Iterable[str] = DEFAULT_POSIX_HELPERS) -> None:
        self.helpers = tuple(helpers)

    def find_helper(self) -> Optional[str]:
        for helper in self.helpers:
            if os.path.isfile(helper) and os.access(helper, os.X_OK):
                return helper
        return None

    def build_command(self, helper: str, request: ElevationRequest) -> list[str]:
        cmd = [helper]
        if "pkexec" in os.path.basename(helper).lower():
            cmd.append("--disable-internal-agent")
        cmd.extend(["/bin/bash", "-c", f"echo {AUTH_MARKER} && {shell_line(request)}"])
        return cmd

    def run(self, request: ElevationRequest) -> ElevationOutcome:
        helper = self.find_helper()
        if helper is None:
            logger.warning("No polkit helper found among %s", ", ".join(self.helpers))
            return ElevationOutcome.DEPENDENCY_NOT_FOUND
        failure = check_command(request.command)
        if failure is not None:
            logger.warning("Cannot launch %s: %s", request.command, failure.description)
            return failure

        result = run_marked_command(self.build_command(helper, request))
        if result.authenticated:
            logger.debug("Elevated %s exited with %d", request.command, result.code)
            return ElevationOutcome.SUCCESS
        if result.code == PKEXEC_DISMISSED:
            logger.info("Elevation of %s was declined", request.command)
            return ElevationOutcome.CANCELLED
        if result.code == PKEXEC_NOT_AUTHORIZED:
            logger.warning("%s refused to authorize %s", helper, request.command)
            return ElevationOutcome.ACCESS_DENIED
        logger.warning(
            "%s failed for %s (rc=%d): %s",
            helper,
            request.command,
            result.code,
            " | ".join(result.tail),
        )
        return ElevationOutcome.UNKNOWN_ERROR


def applescript_string(text: str) -> str:
    return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'


class OsascriptBackend:
    """Elevate through AppleScript's ``with administrator privileges`` prompt."""

    def __init__(self, osascript: str = OSASCRIPT) -> None:
        self.osascript = osascript

    def build_command(self, request: ElevationRequest) -> list[str]:
        # the target's own exit status is not reported
        script = (
            f"do shell script {applescript_string(shell_line(request) + '; true')} "
            "with administrator privileges"
        )
        return [self.osascript, "-e", script]

    def run(self, request: ElevationRequest) -> ElevationOutcome:
        if not (os.path.isfile(self.osascript) and os.access(self.osascript, os.X_OK)):
            logger.warning("%s is not available", self.osascript)
            return ElevationOutcome.DEPENDENCY_NOT_FOUND
        failure = check_command(request.command)
        if failure is not None:
            logger.warning("Cannot launch %s: %s", request.command, failure.description)
            return failure

        result = run_command(self.build_command(request))
        if result.code == 0:
            return ElevationOutcome.SUCCESS
        if APPLESCRIPT_USER_CANCELED in result.err:
            logger.info("Elevation of %s was declined", request.command)
            return ElevationOutcome.CANCELLED
        logger.warning("osascript failed for %s (rc=%d): %s", request.command, result.code, result.err)
        return ElevationOutcome.UNKNOWN_ERROR


__all__ = [
    "AUTH_MARKER",
    "MarkedRunResult",
    "OsascriptBackend",
    "PolkitBackend",
    "RunResult",
    "SYSTEM_PATH",
    "applescript_string",
    "check_command",
    "resolve_command",
    "run_command",
    "run_marked_command",
    "search_path",
    "shell_line",
]
