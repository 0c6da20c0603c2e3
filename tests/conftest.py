import asyncio
import inspect
import threading
import time

import pytest

from elevator.config import reset_settings
from elevator.outcome import ElevationOutcome


def pytest_pyfunc_call(pyfuncitem):
    if inspect.iscoroutinefunction(pyfuncitem.obj):
        sig = inspect.signature(pyfuncitem.obj)
        kwargs = {
            name: pyfuncitem.funcargs[name]
            for name in sig.parameters
            if name in pyfuncitem.funcargs
        }
        asyncio.run(pyfuncitem.obj(**kwargs))
        return True
    return None


class FakeBackend:
    """Backend double that records requests and returns a fixed outcome."""

    def __init__(self, outcome=ElevationOutcome.SUCCESS, delay=0.0):
        self.outcome = outcome
        self.delay = delay
        self.requests = []
        self.threads = []
        self._lock = threading.Lock()

    def run(self, request):
        with self._lock:
            self.requests.append(request)
            self.threads.append(threading.get_ident())
        if self.delay:
            time.sleep(self.delay)
        return self.outcome


@pytest.fixture
def fake_backend():
    return FakeBackend()


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    for name in (
        "ELEVATOR_SHOW_WINDOW",
        "ELEVATOR_MAX_WORKERS",
        "ELEVATOR_POSIX_HELPERS",
        "ELEVATOR_LOG_FILE",
        "ELEVATOR_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()
