"""Helpers for settings access backed by environment variables."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv


def load_settings_env(env_path: str | Path | None = None) -> bool:
    """Load a .env file into the process environment.

    Existing environment variables are not overridden.
    """
    if env_path is not None:
        return load_dotenv(env_path)
    return load_dotenv()


def _coerce_value(raw: str | None, value_type: str, default: Any) -> Any:
    if raw is None or raw == "":
        return default
    try:
        if value_type == "int":
            return int(raw)
        if value_type == "float":
            return float(raw)
        if value_type == "bool":
            return raw.lower() in ("true", "1", "yes", "on")
        return raw
    except ValueError:
        return default


def get_setting(env_name: str, default: Any, value_type: str = "string") -> Any:
    """Get a setting value from the environment, coerced to value_type."""
    return _coerce_value(os.getenv(env_name), value_type, default)


def get_int_setting(env_name: str, default: int) -> int:
    return int(get_setting(env_name, default, "int"))


def get_float_setting(env_name: str, default: float) -> float:
    return float(get_setting(env_name, default, "float"))


def get_bool_setting(env_name: str, default: bool) -> bool:
    value = get_setting(env_name, default, "bool")
    if isinstance(value, str):
        return value.lower() in ("true", "1", "yes", "on")
    return bool(value)
