"""Module executed when running ``python -m elevator``."""
from __future__ import annotations

import sys

from .cli import main


def run() -> None:
    """Entrypoint wrapper to make ``python -m elevator`` explicit."""

    sys.exit(main())


if __name__ == "__main__":  # pragma: no cover - exercised via CLI
    run()
