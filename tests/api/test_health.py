"""Tests for health endpoints."""

from unittest.mock import AsyncMock

from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.api.dependencies import get_sheets_row_source
from src.core.exceptions import RowSourceUnavailableError
from src.core.interfaces import SheetData


class TestHealth:
    def test_root_health(self, client: TestClient):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "version": "1.0.0"}

    def test_api_health(self, client: TestClient):
        response = client.get("/api/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["environment"] == "development"
        assert data["report_font"] == "core"
        assert data["stock_locations"] == 5
        assert data["sheets"] is None

    def test_request_id_header(self, client: TestClient):
        response = client.get("/api/health")
        assert "X-Request-ID" in response.headers

    def test_incoming_request_id_is_kept(self, client: TestClient):
        response = client.get("/api/health", headers={"X-Request-ID": "abc123"})
        assert response.headers["X-Request-ID"] == "abc123"


class TestSheetsHealth:
    def test_proxy_available(self, app: FastAPI, client: TestClient):
        source = AsyncMock()
        source.get_sheet.return_value = SheetData()
        app.dependency_overrides[get_sheets_row_source] = lambda: source

        data = client.get("/api/health/sheets").json()

        assert data["status"] == "healthy"
        assert data["sheets"]["available"] is True
        assert data["sheets"]["latency_ms"] >= 0
        source.get_sheet.assert_awaited_once_with("EstoqueCanteiro01")
        app.dependency_overrides.clear()

    def test_proxy_down_is_degraded(self, app: FastAPI, client: TestClient):
        source = AsyncMock()
        source.get_sheet.side_effect = RowSourceUnavailableError("EstoqueCanteiro01", "timeout")
        app.dependency_overrides[get_sheets_row_source] = lambda: source

        response = client.get("/api/health/sheets")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "degraded"
        assert data["sheets"]["available"] is False
        assert "timeout" in data["sheets"]["error"]
        app.dependency_overrides.clear()
