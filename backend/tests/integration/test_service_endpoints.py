"""
Integration Tests for Service Endpoints

Tests the status endpoints and the storage sweeper state reported by /health.
"""

from datetime import datetime

from memberhub.config import settings


def test_root_identifies_service(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "service": "MemberHub API", "version": "1.0.0"}


def test_health_reports_sweeper_state(client):
    response = client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert datetime.fromisoformat(data["timestamp"]).tzinfo is not None

    cleanup = data["cleanup"]
    assert set(cleanup) == {
        "running",
        "job_scheduled",
        "next_run",
        "interval_hours",
        "temp_file_ttl_minutes",
    }
    assert isinstance(cleanup["running"], bool)
    assert isinstance(cleanup["job_scheduled"], bool)
    assert cleanup["next_run"] is None or isinstance(cleanup["next_run"], str)
    assert cleanup["interval_hours"] == settings.CLEANUP_INTERVAL_HOURS
    assert cleanup["temp_file_ttl_minutes"] == settings.TEMP_FILE_TTL_MINUTES


def test_health_follows_configured_sweep_timing(client, monkeypatch):
    monkeypatch.setattr(settings, "CLEANUP_INTERVAL_HOURS", 6)
    monkeypatch.setattr(settings, "TEMP_FILE_TTL_MINUTES", 90)

    cleanup = client.get("/health").json()["cleanup"]

    assert cleanup["interval_hours"] == 6
    assert cleanup["temp_file_ttl_minutes"] == 90


def test_openapi_lists_every_router(client):
    paths = client.get("/openapi.json").json()["paths"]

    assert "/api/upload/profile-picture" in paths
    assert "/api/users/{userId}" in paths
    assert "/api/bookings/system" in paths
    assert "/api/users/{userId}/bookings" in paths
