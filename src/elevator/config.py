"""Environment-driven settings for elevation requests."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Mapping

logger = logging.getLogger(__name__)

DEFAULT_POSIX_HELPERS: tuple[str, ...] = ("/usr/bin/kdesudo", "/usr/bin/pkexec")
DEFAULT_MAX_WORKERS = 4

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


def _env_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer %s=%r", name, raw)
        return default
    if value < 1:
        logger.warning("Ignoring %s=%d, must be at least 1", name, value)
        return default
    return value


def _env_list(env: Mapping[str, str], name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = env.get(name)
    if not raw:
        return default
    items = tuple(part.strip() for part in raw.split(",") if part.strip())
    return items or default


@dataclass(frozen=True)
class ElevatorSettings:
    """Resolved configuration for the executor and its boundary layer."""

    show_window: bool = False
    max_workers: int = DEFAULT_MAX_WORKERS
    posix_helpers: tuple[str, ...] = DEFAULT_POSIX_HELPERS
    log_file: str | None = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "ElevatorSettings":
        """Build settings from ``ELEVATOR_*`` variables in *env* (``os.environ`` by default)."""

        source = os.environ if env is None else env
        return cls(
            show_window=_env_flag(source, "ELEVATOR_SHOW_WINDOW", False),
            max_workers=_env_int(source, "ELEVATOR_MAX_WORKERS", DEFAULT_MAX_WORKERS),
            posix_helpers=_env_list(source, "ELEVATOR_POSIX_HELPERS", DEFAULT_POSIX_HELPERS),
            log_file=source.get("ELEVATOR_LOG_FILE") or None,
            log_level=(source.get("ELEVATOR_LOG_LEVEL") or "INFO").upper(),
        )

    @property
    def log_level_value(self) -> int:
        level = logging.getLevelName(self.log_level)
        return level if isinstance(level, int) else logging.INFO


@lru_cache(maxsize=1)
def get_settings() -> ElevatorSettings:
    """Return process-wide settings read once from the environment."""

    return ElevatorSettings.from_env()


def reset_settings() -> None:
    """Forget cached settings so the next lookup re-reads the environment."""

    get_settings.cache_clear()


__all__ = [
    "DEFAULT_MAX_WORKERS",
    "DEFAULT_POSIX_HELPERS",
    "ElevatorSettings",
    "get_settings",
    "reset_settings",
]
