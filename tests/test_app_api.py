import pytest
from fastapi.testclient import TestClient

from db.init_db import seed_app_config

API = "/api/v1"


def test_home(client: TestClient) -> None:
    response = client.get(f"{API}/")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "OK"
    assert body["environment"] == "test"
    assert body["message"].startswith("Welcome to")
    assert body["version"]
    assert body["timestamp"]


def test_info_reports_build_and_runtime(client: TestClient) -> None:
    response = client.get(f"{API}/info")

    assert response.status_code == 200
    body = response.json()
    assert body["environment"] == "test"
    assert set(body["build"]) == {"version", "date", "revision"}
    assert body["runtime"]["pythonVersion"]


def test_health_up(client: TestClient) -> None:
    response = client.get(f"{API}/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "UP"
    assert body["checks"]["database"] == "UP"
    assert body["checks"]["userStore"] == "UP"
    assert body["environment"] == "test"


def test_health_down_when_database_unreachable(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        "api.health_api.get_database_health",
        lambda: {"status": "unhealthy", "error": "connection refused"},
    )

    response = client.get(f"{API}/health")

    assert response.status_code == 503
    body = response.json()
    assert body["status"] == "DOWN"
    assert body["checks"]["database"] == "DOWN"
    assert "userStore" not in body["checks"]


def test_config_hides_secrets(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("JWT_SECRET", "super-secret-signing-key")
    monkeypatch.setenv("DB_PASSWORD", "db-password-value")

    from core.config import get_settings
    get_settings.cache_clear()

    response = client.get(f"{API}/config")

    assert response.status_code == 200
    body = response.json()
    assert set(body) == {"features", "monitoring", "database", "security"}
    assert body["security"]["jwtSecretConfigured"] is True
    assert "super-secret-signing-key" not in response.text
    assert "db-password-value" not in response.text


def test_config_reload_picks_up_environment_changes(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FEATURE_CACHE_ENABLED", "false")
    client.post(f"{API}/config/reload")
    assert client.get(f"{API}/config").json()["features"]["cacheEnabled"] is False

    monkeypatch.setenv("FEATURE_CACHE_ENABLED", "true")
    response = client.post(f"{API}/config/reload")

    assert response.status_code == 200
    assert response.json()["features"]["cacheEnabled"] is True
    assert client.get(f"{API}/config").json()["features"]["cacheEnabled"] is True


def test_environment_reports_pod_metadata(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("POD_NAME", "user-service-7d9f")
    monkeypatch.setenv("POD_NAMESPACE", "users-staging")

    body = client.get(f"{API}/environment").json()

    assert body["environment"] == "test"
    assert body["podName"] == "user-service-7d9f"
    assert body["namespace"] == "users-staging"
    assert body["hostname"]


def test_echo_returns_payload(client: TestClient) -> None:
    response = client.post(f"{API}/echo", json={"hello": "world", "count": 2})

    assert response.status_code == 200
    body = response.json()
    assert body["receivedPayload"] == {"hello": "world", "count": 2}
    assert body["environment"] == "test"
    assert "cacheEnabled" in body["featuresEnabled"]


def test_app_config_by_environment(client: TestClient, db_session) -> None:
    seed_app_config(db_session)
    db_session.commit()

    response = client.get(f"{API}/app-config/dev")

    assert response.status_code == 200
    assert [entry["config_key"] for entry in response.json()] == [
        "debug_enabled",
        "feature_toggle_cache",
        "max_users",
    ]


def test_app_config_single_key(client: TestClient, db_session) -> None:
    seed_app_config(db_session)
    db_session.commit()

    response = client.get(f"{API}/app-config/prod/max_users")

    assert response.status_code == 200
    assert response.json()["config_value"] == "100000"
    assert client.get(f"{API}/app-config/prod/unknown_key").status_code == 404
    assert client.get(f"{API}/app-config/nowhere").json() == []


def test_config_reload_accepts_get(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FEATURE_AUDIT_ENABLED", "true")

    response = client.get(f"{API}/config/reload")

    assert response.status_code == 200
    assert response.json()["features"]["auditEnabled"] is True


def test_legacy_test_path_echoes_payload(client: TestClient) -> None:
    response = client.post(f"{API}/test", json={"ping": "pong"})

    assert response.status_code == 200
    assert response.json()["receivedPayload"] == {"ping": "pong"}
    assert response.json()["message"] == "Echo endpoint called successfully"
