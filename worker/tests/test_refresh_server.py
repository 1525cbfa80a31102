import pytest

from pizza_worker.core import config
from pizza_worker.jobs import refresh_server


@pytest.fixture
def client():
    return refresh_server.app.test_client()


def test_health_endpoint(client, monkeypatch):
    monkeypatch.setattr(refresh_server, "refresh_catalog", lambda: pytest.fail("health must not refresh"))

    response = client.get("/healthz")

    assert response.status_code == 200
    assert response.get_json()["status"] == "ok"


@pytest.mark.parametrize("method", ["get", "post"])
def test_scrape_success(client, monkeypatch, method):
    monkeypatch.setattr(
        refresh_server,
        "refresh_catalog",
        lambda: ({"success": True, "message": "Данные обновлены!", "updated": 3}, 200),
    )

    response = getattr(client, method)("/api/scrape")

    assert response.status_code == 200
    assert response.get_json() == {"success": True, "message": "Данные обновлены!", "updated": 3}


def test_scrape_failure_returns_500(client, monkeypatch):
    monkeypatch.setattr(
        refresh_server,
        "refresh_catalog",
        lambda: ({"error": "DATABASE_URL must be set in the environment for the refresh to run."}, 500),
    )

    response = client.post("/api/scrape")

    assert response.status_code == 500
    assert "DATABASE_URL" in response.get_json()["error"]


def test_scrape_with_missing_env_is_config_error(client, monkeypatch):
    monkeypatch.setattr(config, "load_dotenv", lambda: None)
    for key in ("DATABASE_URL", "DATABASE_KEY", "YANDEX_API_KEY"):
        monkeypatch.delenv(key, raising=False)

    response = client.get("/api/scrape")

    assert response.status_code == 500
    assert "YANDEX_API_KEY" in response.get_json()["error"]
