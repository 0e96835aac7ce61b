"""Configuration management for SQL Wright.

Loads configuration from sqlwright.toml in the current working directory.
"""

import tomllib
from pathlib import Path
from typing import Optional

from pydantic import BaseModel
from rich.console import Console

from sqlwright.params import DEFAULT_PARAM_PREFIX

console = Console(stderr=True)

CONFIG_FILENAME = "sqlwright.toml"


class DbConfig(BaseModel):
    """Static database configuration consumed by statement builders.

    Builders receive this explicitly; there is no process-wide default
    lookup.
    """

    charset: str = "utf8"
    collation: Optional[str] = None
    table_prefix: str = ""
    param_prefix: str = DEFAULT_PARAM_PREFIX


class ConfigSettings(BaseModel):
    """Configuration settings for SQL Wright.

    All fields are optional. None values indicate the setting was not
    specified in the config file.
    """

    dialect: Optional[str] = None
    output_format: Optional[str] = None
    db: Optional[DbConfig] = None


def find_config_file(start_path: Optional[Path] = None) -> Optional[Path]:
    """Find sqlwright.toml in the current working directory.

    Args:
        start_path: Starting directory to search for config file.
                   Defaults to current working directory.

    Returns:
        Path to config file if found, None otherwise.
    """
    if start_path is None:
        start_path = Path.cwd()

    config_path = start_path / CONFIG_FILENAME

    if config_path.exists() and config_path.is_file():
        return config_path

    return None


def load_config(config_path: Optional[Path] = None) -> ConfigSettings:
    """Load configuration from sqlwright.toml.

    Priority order:
    1. Explicit config_path parameter
    2. sqlwright.toml in current working directory
    3. Empty ConfigSettings (all None)

    Args:
        config_path: Optional explicit path to config file.
                    If not provided, searches current working directory.

    Returns:
        ConfigSettings with values from the [sqlwright] table, or None for
        unset fields. Always returns a valid ConfigSettings object.

    Error Handling:
        - Missing file: Returns empty ConfigSettings (silent)
        - Malformed TOML: Warns user and returns empty ConfigSettings
        - Invalid values: Warns user and returns empty ConfigSettings
        - Unknown keys: Ignored (forward compatibility)
    """
    if config_path is None:
        config_path = find_config_file()

    if config_path is None:
        return ConfigSettings()

    try:
        with open(config_path, "rb") as f:
            toml_data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        console.print(
            f"[yellow]Warning:[/yellow] Failed to parse {config_path}: {e}",
        )
        console.print("[yellow]Using default settings[/yellow]")
        return ConfigSettings()
    except OSError as e:
        console.print(
            f"[yellow]Warning:[/yellow] Could not read {config_path}: {e}",
        )
        console.print("[yellow]Using default settings[/yellow]")
        return ConfigSettings()

    sqlwright_config = toml_data.get("sqlwright", {})

    try:
        return ConfigSettings(**sqlwright_config)
    except Exception as e:
        console.print(
            f"[yellow]Warning:[/yellow] Invalid configuration in {config_path}: {e}",
        )
        console.print("[yellow]Using default settings[/yellow]")
        return ConfigSettings()


def resolve_db_config(
    settings: ConfigSettings,
    charset: Optional[str] = None,
    collation: Optional[str] = None,
    table_prefix: Optional[str] = None,
) -> DbConfig:
    """Merge CLI overrides on top of the [sqlwright.db] settings.

    Args:
        settings: Loaded configuration.
        charset: Overrides ``db.charset`` when given.
        collation: Overrides ``db.collation`` when given.
        table_prefix: Overrides ``db.table_prefix`` when given.

    Returns:
        A new DbConfig; the loaded settings are left untouched.
    """
    db = settings.db or DbConfig()
    overrides = {
        key: value
        for key, value in (
            ("charset", charset),
            ("collation", collation),
            ("table_prefix", table_prefix),
        )
        if value is not None
    }
    return db.model_copy(update=overrides)
