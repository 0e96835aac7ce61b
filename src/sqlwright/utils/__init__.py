"""Utility functions for SQL Wright."""

from sqlwright.utils.config import (
    ConfigSettings,
    DbConfig,
    find_config_file,
    load_config,
    resolve_db_config,
)

__all__ = [
    "ConfigSettings",
    "DbConfig",
    "find_config_file",
    "load_config",
    "resolve_db_config",
]
