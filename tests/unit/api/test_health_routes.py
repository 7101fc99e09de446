"""Tests for health and metrics endpoints."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from recordkeeper.api.app import create_app
from recordkeeper.api.dependencies import get_record_store
from recordkeeper.config import Settings
from recordkeeper.config.models.observability import MetricsConfig, ObservabilityConfig
from recordkeeper.records.stores.inmemory import InMemoryRecordStore


class UnreachableStore(InMemoryRecordStore):
    async def health_check(self) -> bool:
        return False


@pytest.fixture
def app(store: InMemoryRecordStore) -> FastAPI:
    app = create_app(Settings())
    app.dependency_overrides[get_record_store] = lambda: store
    return app


class TestHealth:
    """Tests for GET /health."""

    def test_healthy(self, app: FastAPI) -> None:
        response = TestClient(app).get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["version"] == "1.0.0"
        assert body["components"][0]["name"] == "record_store"

    def test_unreachable_store(self, app: FastAPI) -> None:
        app.dependency_overrides[get_record_store] = UnreachableStore

        body = TestClient(app).get("/health").json()

        assert body["status"] == "unhealthy"
        assert body["components"][0]["message"] == "Record store unreachable"


class TestMetrics:
    """Tests for the Prometheus endpoint."""

    def test_exposes_record_metrics(self, app: FastAPI) -> None:
        response = TestClient(app).get("/metrics")

        assert response.status_code == 200
        assert "recordkeeper_record_queries_total" in response.text

    def test_disabled(self) -> None:
        settings = Settings(
            observability=ObservabilityConfig(metrics=MetricsConfig(enabled=False))
        )

        response = TestClient(create_app(settings)).get("/metrics")

        assert response.status_code == 404
