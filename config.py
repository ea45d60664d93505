"""Central settings for the dungeon structure loader.

All tunable parameters live here (log level, where structure documents are
read from, schema checks, validation strictness). Every value has a sensible
default and can be overridden through environment variables.
"""
from __future__ import annotations
import logging
import os
from pathlib import Path


def _get_bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    val = raw.strip().lower()
    return val in {"1", "true", "yes", "on"}


def _get_str_env(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


# ---------------- Logging ----------------
DEFAULT_LOG_LEVEL = "WARNING"
ENV_LOG_LEVEL = "DUNGEON_LOG_LEVEL"


def resolve_log_level(name: str) -> int:
    """Numeric level for a standard level name, DEFAULT_LOG_LEVEL if unknown."""
    level = logging.getLevelName(name.strip().upper())
    if isinstance(level, int):
        return level
    return logging.getLevelName(DEFAULT_LOG_LEVEL)


def get_log_level() -> int:
    """Return the numeric log level.

    Order of precedence:
    1. Environment variable DUNGEON_LOG_LEVEL (a standard level name)
    2. DEFAULT_LOG_LEVEL
    """
    return resolve_log_level(_get_str_env(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL))


# ---------------- Structure documents ----------------
DEFAULT_CONFIG_DIR = Path(__file__).resolve().parent / "assets" / "structures"


def get_config_dir() -> Path:
    """Directory holding the structure JSON documents. Var: DUNGEON_CONFIG_DIR."""
    raw = os.getenv("DUNGEON_CONFIG_DIR")
    if raw is None or not raw.strip():
        return DEFAULT_CONFIG_DIR
    return Path(raw.strip())


def is_schema_check_enabled() -> bool:
    """Check structure documents against the JSON schema before building. Var: DUNGEON_SCHEMA_CHECK."""
    return _get_bool_env("DUNGEON_SCHEMA_CHECK", True)


def get_path_separator() -> str:
    """Separator splitting a nested reference name into config path segments. Var: DUNGEON_PATH_SEPARATOR."""
    return _get_str_env("DUNGEON_PATH_SEPARATOR", ".")


# ---------------- Validation ----------------

def is_strict_percent() -> bool:
    """Require branch percentages to be fractions in [0, 1]. Var: DUNGEON_STRICT_PERCENT."""
    return _get_bool_env("DUNGEON_STRICT_PERCENT", True)


__all__ = [
    "DEFAULT_LOG_LEVEL", "ENV_LOG_LEVEL", "resolve_log_level", "get_log_level",
    "DEFAULT_CONFIG_DIR", "get_config_dir", "is_schema_check_enabled", "get_path_separator",
    "is_strict_percent",
]
