"""Caller-facing surface around the blocking executor.

Accepts a flat argv whose first element is the command, rejects malformed
input before touching the OS, and turns the outcome into either an
:class:`ElevationResult` (success or user cancellation) or an
:class:`~elevator.errors.ElevationError`. The blocking call can be offloaded
to a worker pool as a future, a callback, or a coroutine.
"""
from __future__ import annotations

import asyncio
import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from .config import get_settings
from .errors import ElevationError, InvalidRequestError
from .executor import ElevationBackend, default_backend
from .outcome import ElevationOutcome
from .request import ElevationRequest

logger = logging.getLogger(__name__)

Callback = Callable[[Optional[BaseException], Optional["ElevationResult"]], object]


@dataclass(frozen=True)
class ElevationResult:
    """Non-error result of an elevation: it either ran or the user declined."""

    cancelled: bool
    outcome: ElevationOutcome

    @classmethod
    def from_outcome(cls, outcome: ElevationOutcome) -> "ElevationResult":
        return cls(cancelled=outcome is ElevationOutcome.CANCELLED, outcome=outcome)


_pool: ThreadPoolExecutor | None = None
_pool_lock = threading.Lock()


def _shared_pool() -> ThreadPoolExecutor:
    global _pool
    with _pool_lock:
        if _pool is None:
            _pool = ThreadPoolExecutor(
                max_workers=get_settings().max_workers,
                thread_name_prefix="elevator",
            )
        return _pool


def shutdown(wait: bool = True) -> None:
    """Stop the shared worker pool; a new one is created on next use."""

    global _pool
    with _pool_lock:
        pool, _pool = _pool, None
    if pool is not None:
        pool.shutdown(wait=wait)


def _run(request: ElevationRequest, backend: ElevationBackend | None) -> ElevationResult:
    outcome = (backend or default_backend()).run(request)
    if outcome.is_error:
        logger.error("Elevation of %s failed: %s", request.command, outcome.description)
        raise ElevationError(outcome, request.command)
    return ElevationResult.from_outcome(outcome)


def execute(argv: Sequence[str], *, backend: ElevationBackend | None = None) -> ElevationResult:
    """Elevate ``argv[0]`` with ``argv[1:]`` and block until it exits."""

    return _run(ElevationRequest.from_argv(argv), backend)


def execute_async(
    argv: Sequence[str],
    *,
    backend: ElevationBackend | None = None,
    executor: ThreadPoolExecutor | None = None,
) -> "Future[ElevationResult]":
    """Like :func:`execute` but run on a worker thread.

    Malformed input raises :class:`InvalidRequestError` here, synchronously;
    everything else is delivered through the returned future.
    """

    request = ElevationRequest.from_argv(argv)
    pool = executor or _shared_pool()
    return pool.submit(_run, request, backend)


def execute_with_callback(
    argv: Sequence[str],
    callback: Callback,
    *,
    backend: ElevationBackend | None = None,
    executor: ThreadPoolExecutor | None = None,
) -> None:
    """Run the elevation off-thread and call ``callback(error, result)`` once."""

    if not callable(callback):
        raise InvalidRequestError("Callback must be callable")
    future = execute_async(argv, backend=backend, executor=executor)

    def _deliver(done: "Future[ElevationResult]") -> None:
        error = done.exception()
        if error is not None:
            callback(error, None)
        else:
            callback(None, done.result())

    future.add_done_callback(_deliver)


async def elevate_async(
    argv: Sequence[str], *, backend: ElevationBackend | None = None
) -> ElevationResult:
    """Coroutine form of :func:`execute` that waits on a worker thread."""

    request = ElevationRequest.from_argv(argv)
    return await asyncio.to_thread(_run, request, backend)


__all__ = [
    "Callback",
    "ElevationResult",
    "elevate_async",
    "execute",
    "execute_async",
    "execute_with_callback",
    "shutdown",
]
