"""Root settings model for recordkeeper configuration."""

from typing import Any

from pydantic import Field, model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from recordkeeper.config.loader import ENV_PREFIX
from recordkeeper.config.models.api import APIConfig
from recordkeeper.config.models.observability import ObservabilityConfig
from recordkeeper.config.models.storage import StorageConfig

# Merged TOML layers, installed by get_settings() before Settings() is built
_toml_layer: dict[str, Any] = {}


def set_toml_config(config: dict[str, Any]) -> None:
    """Install the merged TOML configuration read by Settings."""
    global _toml_layer
    _toml_layer = dict(config)


class TomlConfigSettingsSource(PydanticBaseSettingsSource):
    """Settings source backed by the installed TOML layer."""

    def get_field_value(
        self, field: Any, field_name: str  # noqa: ARG002
    ) -> tuple[Any, str, bool]:
        value = _toml_layer.get(field_name)
        return value, field_name, value is not None

    def __call__(self) -> dict[str, Any]:
        return {
            name: _toml_layer[name]
            for name in self.settings_cls.model_fields
            if name in _toml_layer
        }


class Settings(BaseSettings):
    """Root configuration object.

    Sources, highest priority first: constructor arguments,
    RECORDKEEPER_* environment variables (``__`` separates nested keys),
    the TOML layer, then the defaults below.
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(default="recordkeeper", description="Application name for logging")
    debug: bool = Field(default=False, description="Enable debug mode")

    api: APIConfig = Field(default_factory=APIConfig, description="API server")
    storage: StorageConfig = Field(default_factory=StorageConfig, description="Record store")
    observability: ObservabilityConfig = Field(
        default_factory=ObservabilityConfig,
        description="Logging, tracing and metrics",
    )

    @model_validator(mode="after")
    def check_pool_bounds(self) -> "Settings":
        postgres = self.storage.records.postgres
        if postgres.min_pool_size > postgres.max_pool_size:
            raise ValueError(
                f"storage.records.postgres.min_pool_size ({postgres.min_pool_size}) "
                f"exceeds max_pool_size ({postgres.max_pool_size})"
            )
        return self

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            TomlConfigSettingsSource(settings_cls),
        )
