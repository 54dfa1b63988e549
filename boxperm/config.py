# boxperm/config.py
"""
Runtime configuration read from the environment.

Variables:
- BOXPERM_LOG_LEVEL: logging level name for the API process (default INFO)
- BOXPERM_MAX_PAGE_SIZE: largest `limit` accepted by POST /enumerate (default 1000)
- BOXPERM_DEFAULT_PAGE_SIZE: `limit` used when a request omits it (default 100)
- BOXPERM_ROTATE_3D: default rotation mode for API requests (default true)
"""

from __future__ import annotations

import os

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < 1:
        raise ValueError(f"{name} must be >= 1, got {value}")
    return value


def _bool_from_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in _TRUE_VALUES


LOG_LEVEL: str = os.getenv("BOXPERM_LOG_LEVEL", "INFO").upper()
MAX_PAGE_SIZE: int = _int_from_env("BOXPERM_MAX_PAGE_SIZE", 1000)
DEFAULT_PAGE_SIZE: int = min(_int_from_env("BOXPERM_DEFAULT_PAGE_SIZE", 100), MAX_PAGE_SIZE)
DEFAULT_ROTATE_3D: bool = _bool_from_env("BOXPERM_ROTATE_3D", True)
