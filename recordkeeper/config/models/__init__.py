"""Configuration section models."""

from recordkeeper.config.models.api import APIConfig
from recordkeeper.config.models.observability import (
    LoggingConfig,
    MetricsConfig,
    ObservabilityConfig,
    TracingConfig,
)
from recordkeeper.config.models.storage import PostgresConfig, RecordStoreConfig, StorageConfig

__all__ = [
    "APIConfig",
    "LoggingConfig",
    "MetricsConfig",
    "ObservabilityConfig",
    "PostgresConfig",
    "RecordStoreConfig",
    "StorageConfig",
    "TracingConfig",
]
