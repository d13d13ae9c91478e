"""Environment helper utilities."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional


_FALSE_VALUES = {"0", "false", "no", "off"}


def get_bool_env(name: str, *, default: bool = False) -> bool:
    """Return True/False for an environment flag."""
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if not value:
        return default
    return value not in _FALSE_VALUES


def get_path_env(name: str, *, default: Optional[Path] = None) -> Optional[Path]:
    """Read a filesystem path from the environment, expanding ``~``."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return Path(raw.strip()).expanduser()
