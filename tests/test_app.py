"""
Application-level tests: startup against the durable store, health
endpoints and front-end serving.
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from civic_reports.core.errors import PersistenceError
from civic_reports.core.settings import settings
from civic_reports.main import app, mount_frontend


def test_health_check():
    response = TestClient(app).get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["service"] == settings.APP_NAME


def test_api_info():
    response = TestClient(app).get("/api")
    assert response.json()["reports"] == "/api/reports"


def test_store_health_reports_count(fresh_store_config, tmp_path):
    path = tmp_path / "reports.json"
    fresh_store_config.initialize_store(str(path))

    response = TestClient(app).get("/health/store")

    assert response.status_code == 200
    body = response.json()
    assert body["exists"] is True
    assert body["reports_count"] == 0
    assert body["path"] == str(path)


def test_store_health_unavailable_on_corrupt_file(fresh_store_config, tmp_path, monkeypatch):
    path = tmp_path / "reports.json"
    path.write_text("not json", encoding="utf-8")
    monkeypatch.setattr(settings, "REPORTS_DB_PATH", str(path))

    response = TestClient(app).get("/health/store")

    assert response.status_code == 503


def test_initialize_store_refuses_corrupt_file(fresh_store_config, tmp_path):
    path = tmp_path / "reports.json"
    path.write_text('{"oops": true}', encoding="utf-8")

    with pytest.raises(PersistenceError):
        fresh_store_config.initialize_store(str(path))

    assert fresh_store_config._store is None


def test_startup_fails_on_corrupt_store(fresh_store_config, tmp_path, monkeypatch):
    path = tmp_path / "reports.json"
    path.write_text("[{]", encoding="utf-8")
    monkeypatch.setattr(settings, "REPORTS_DB_PATH", str(path))

    with pytest.raises(PersistenceError):
        with TestClient(app):
            pass


def test_startup_serves_reports_from_configured_store(fresh_store_config, tmp_path, monkeypatch, valid_report):
    path = tmp_path / "reports.json"
    monkeypatch.setattr(settings, "REPORTS_DB_PATH", str(path))

    with TestClient(app) as client:
        created = client.post("/api/reports", json=valid_report)
        assert created.status_code == 201

    fresh_store_config.reset_store()
    with TestClient(app) as client:
        assert [r["id"] for r in client.get("/api/reports").json()] == [created.json()["id"]]


# ────────────────────────────────
# Front end
# ────────────────────────────────
@pytest.fixture
def frontend_dir(tmp_path):
    site = tmp_path / "site"
    site.mkdir()
    (site / "index.html").write_text("<html>Civic Report Hub</html>", encoding="utf-8")
    (site / "app.js").write_text("console.log('hub');", encoding="utf-8")
    return site


def test_frontend_serves_files_and_index_fallback(frontend_dir):
    site_app = FastAPI()

    @site_app.get("/api/ping")
    def ping():
        return {"pong": True}

    assert mount_frontend(site_app, str(frontend_dir))
    client = TestClient(site_app)

    assert client.get("/api/ping").json() == {"pong": True}
    assert client.get("/app.js").text == "console.log('hub');"
    assert client.get("/static/app.js").status_code == 200
    assert "Civic Report Hub" in client.get("/").text
    assert "Civic Report Hub" in client.get("/admin/dashboard").text


def test_frontend_missing_directory(tmp_path):
    assert mount_frontend(FastAPI(), str(tmp_path / "missing")) is False


def test_frontend_without_index(tmp_path):
    site = tmp_path / "site"
    site.mkdir()
    site_app = FastAPI()
    mount_frontend(site_app, str(site))
    assert TestClient(site_app).get("/anything").status_code == 404
