"""
Notekeeper Backend — Application Wiring Tests
===============================================

What:  Health check, request id propagation, access log levels and config.
"""

import logging
from unittest.mock import AsyncMock, patch

import pytest
from httpx import ASGITransport, AsyncClient
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import create_async_engine

from notekeeper import database
from notekeeper.config import Settings
from notekeeper.database import build_engine
from notekeeper.middleware.logging import level_for_status


class TestHealth:

    @pytest.mark.asyncio
    async def test_health_reports_database(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
        assert body["version"] == "1.0.0"

    @pytest.mark.asyncio
    async def test_unreachable_database_is_unhealthy(self, test_client, monkeypatch):
        unreachable = create_async_engine("sqlite+aiosqlite:////nonexistent-dir/notes.db")
        monkeypatch.setattr(database, "engine", unreachable)

        response = await test_client.get("/health")

        assert response.status_code == 503
        body = response.json()
        assert body["status"] == "unhealthy"
        assert body["database"] == "disconnected"
        await unreachable.dispose()


class TestRequestID:

    @pytest.mark.asyncio
    async def test_generated_request_id(self, test_client):
        response = await test_client.get("/notes")

        rid = response.headers["X-Request-ID"]
        assert len(rid) == 8
        assert response.json()["request_id"] == rid

    @pytest.mark.asyncio
    async def test_client_request_id_is_echoed(self, test_client):
        response = await test_client.get("/notes", headers={"X-Request-ID": "trace-123"})

        assert response.headers["X-Request-ID"] == "trace-123"
        assert response.json()["request_id"] == "trace-123"

    @pytest.mark.asyncio
    async def test_unexpected_error_carries_request_id(self):
        from notekeeper.main import create_app

        transport = ASGITransport(app=create_app(), raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            with patch(
                "notekeeper.routes.notes.note_service.list_notes",
                AsyncMock(side_effect=RuntimeError("boom")),
            ):
                response = await client.get("/notes", headers={"X-Request-ID": "trace-500"})

        assert response.status_code == 500
        assert response.json()["error"] == "internal_server_error"
        assert response.headers["X-Request-ID"] == "trace-500"
        assert response.json()["request_id"] == "trace-500"


class TestAccessLogLevels:

    @pytest.mark.parametrize(
        "status,level",
        [(200, logging.INFO), (201, logging.INFO), (400, logging.WARNING),
         (409, logging.WARNING), (503, logging.ERROR)],
    )
    def test_level_for_status(self, status, level):
        assert level_for_status(status) == level


class TestSettings:

    def test_log_level_normalized(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level_rejected(self):
        with pytest.raises(ValidationError):
            Settings(log_level="verbose")

    def test_cors_origins_list(self):
        settings = Settings(cors_origins="http://a.test, http://b.test,")
        assert settings.cors_origins_list == ["http://a.test", "http://b.test"]

    def test_sqlite_engine_skips_pool_sizing(self):
        engine = build_engine(Settings(database_url="sqlite+aiosqlite://"))
        assert engine.url.drivername == "sqlite+aiosqlite"
