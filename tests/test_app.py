"""
Tests for application wiring: health check and error envelope.
"""

import pytest
from fastapi.testclient import TestClient

from catalog_api.config import Settings, check_settings, DEFAULT_SECRET_KEY


class TestHealthCheck:
    """Tests for the health check endpoint."""

    def test_health_check(self, client: TestClient) -> None:
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestErrorEnvelope:
    """Every error is {"message", "stack"}."""

    def test_unknown_route(self, client: TestClient) -> None:
        response = client.get("/api/v1/nothing-here")
        assert response.status_code == 404
        assert set(response.json()) == {"message", "stack"}

    def test_non_object_json_body(self, client: TestClient, user_headers: dict) -> None:
        response = client.post("/api/v1/playlists", json=["not", "an", "object"], headers=user_headers)
        assert response.status_code == 400
        assert response.json()["message"] == "Request body must be a JSON object"


class TestSettings:
    """Tests for startup configuration checks."""

    def test_production_requires_secret(self) -> None:
        config = Settings(ENVIRONMENT="production", SECRET_KEY=DEFAULT_SECRET_KEY)
        with pytest.raises(RuntimeError, match="SECRET_KEY"):
            check_settings(config)

    def test_development_allows_default_secret(self) -> None:
        check_settings(Settings(ENVIRONMENT="development", SECRET_KEY=DEFAULT_SECRET_KEY))
