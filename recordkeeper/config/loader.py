"""Layered TOML configuration.

``config/default.toml`` is the base layer and must exist; an optional
``config/{environment}.toml`` is merged on top of it. Environment
variables are applied later by ``Settings``.
"""

import os
import tomllib
from pathlib import Path
from typing import Any

ENV_PREFIX = "RECORDKEEPER_"

# How many parent directories to search for a config/ directory
SEARCH_DEPTH = 5


def get_config_dir() -> Path:
    """Locate the configuration directory.

    RECORDKEEPER_CONFIG_DIR wins when set and must exist. Otherwise the
    nearest ``config/`` in the working directory or its parents is used.
    """
    explicit = os.environ.get(f"{ENV_PREFIX}CONFIG_DIR")
    if explicit:
        path = Path(explicit)
        if not path.exists():
            raise FileNotFoundError(f"Config directory not found: {explicit}")
        return path

    cwd = Path.cwd()
    for directory in [cwd, *cwd.parents][:SEARCH_DEPTH]:
        if (directory / "config").exists():
            return directory / "config"

    return Path("config")


def get_environment() -> str:
    """Name of the active environment layer (RECORDKEEPER_ENV, default 'development')."""
    return os.environ.get(f"{ENV_PREFIX}ENV", "development")


def load_toml(file_path: Path) -> dict[str, Any]:
    """Parse one TOML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        tomllib.TOMLDecodeError: If the TOML syntax is invalid
    """
    try:
        with file_path.open("rb") as f:
            return tomllib.load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Configuration file not found: {file_path}") from None


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge ``override`` into a copy of ``base``.

    Tables present on both sides merge recursively; any other value from
    ``override`` replaces the base value. Neither argument is modified.
    """
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def load_config() -> dict[str, Any]:
    """Read the default layer and merge the environment layer over it.

    Raises:
        FileNotFoundError: If default.toml is missing
    """
    config_dir = get_config_dir()

    default_path = config_dir / "default.toml"
    if not default_path.exists():
        raise FileNotFoundError(
            f"Default configuration file not found: {default_path}. "
            f"Create config/default.toml or set {ENV_PREFIX}CONFIG_DIR."
        )
    config = load_toml(default_path)

    environment_path = config_dir / f"{get_environment()}.toml"
    if environment_path.exists():
        config = deep_merge(config, load_toml(environment_path))

    return config
