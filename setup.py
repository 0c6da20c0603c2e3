#!/usr/bin/env python3
"""elevator: run commands with administrator privileges and report how it went."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable

from setuptools import find_packages, setup

ROOT_DIR = Path(__file__).resolve().parent
SRC_DIR = ROOT_DIR / "src"
REQUIREMENTS_FILE = ROOT_DIR / "requirements.txt"
DEV_REQUIREMENTS_FILE = ROOT_DIR / "requirements-dev.txt"


def _parse_requirements(req_path: Path) -> Iterable[str]:
    """Yield requirement specifiers from ``req_path``, skipping comments and includes."""

    if not req_path.is_file():
        return ()
    lines = []
    for line in req_path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith(("#", "-")):
            continue
        lines.append(line)
    return lines


def _read_version() -> str:
    text = (SRC_DIR / "elevator" / "__init__.py").read_text(encoding="utf-8")
    match = re.search(r'^__version__ = "([^"]+)"', text, re.MULTILINE)
    if match is None:
        raise RuntimeError("Unable to find __version__ in src/elevator/__init__.py")
    return match.group(1)


setup(
    name="elevator",
    version=_read_version(),
    description="Run a command with administrator privileges and wait for it to exit",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.10",
    install_requires=list(_parse_requirements(REQUIREMENTS_FILE)),
    extras_require={"test": list(_parse_requirements(DEV_REQUIREMENTS_FILE))},
    entry_points={"console_scripts": ["elevator=elevator.cli:main"]},
)
