"""
Environment value helpers.
"""

from __future__ import annotations

import os


def sanitize_env_value(raw: str | None, fallback: str = "") -> str:
    value = (raw if raw is not None else fallback).strip()
    if len(value) >= 2 and ((value[0] == '"' and value[-1] == '"') or (value[0] == "'" and value[-1] == "'")):
        value = value[1:-1]
    # Guard against literal escaped control chars leaked by some env providers.
    value = value.replace("\\n", "").replace("\\r", "").strip()
    return value or fallback


def env_int(name: str, default: int) -> int:
    """Read a positive int from the environment, falling back on junk or non-positive values."""
    raw = sanitize_env_value(os.getenv(name))
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default
