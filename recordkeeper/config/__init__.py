"""Configuration loading for recordkeeper.

Usage:
    from recordkeeper.config import get_settings

    settings = get_settings()
    backend = settings.storage.records.backend
"""

from functools import lru_cache

from recordkeeper.config.loader import load_config
from recordkeeper.config.settings import Settings, set_toml_config
from recordkeeper.observability.logging import get_logger

logger = get_logger(__name__)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the process-wide settings instance.

    Falls back to code defaults (plus environment overrides) when no
    config/default.toml can be found. Call ``get_settings.cache_clear()``
    to reload.
    """
    try:
        set_toml_config(load_config())
    except FileNotFoundError as e:
        logger.warning("config_file_not_found", error=str(e))
        set_toml_config({})

    return Settings()


def reload_settings() -> Settings:
    """Clear the settings cache and reload configuration."""
    get_settings.cache_clear()
    return get_settings()


__all__ = ["get_settings", "reload_settings", "Settings"]
