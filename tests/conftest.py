"""
Shared fixtures: a store on a temp file, a lifecycle with a controllable
clock, and a TestClient wired to both through dependency overrides.
"""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from civic_reports.config import store as store_config
from civic_reports.main import app
from civic_reports.services.report_lifecycle import ReportLifecycle
from civic_reports.services.report_store import ReportStore


class FakeClock:
    """Deterministic clock; each call returns the current time then advances one second."""

    def __init__(self, start=None):
        self.now = start or datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)

    def __call__(self):
        current = self.now
        self.now = self.now + timedelta(seconds=1)
        return current


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "data" / "reports.json"


@pytest.fixture
def store(db_path):
    report_store = ReportStore(db_path)
    report_store.load()
    return report_store


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def lifecycle(store, clock):
    return ReportLifecycle(
        store,
        fine_amount=600,
        reward_amount=500,
        strict_submission=True,
        allow_status_override=False,
        clock=clock,
    )


@pytest.fixture
def valid_report():
    return {
        "title": "Pothole",
        "description": "Large pothole",
        "location": "MG Road",
        "category": "Infrastructure",
    }


@pytest.fixture
def client(lifecycle):
    """TestClient whose report routes use the temp-file lifecycle."""
    app.dependency_overrides[store_config.get_report_lifecycle] = lambda: lifecycle
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def fresh_store_config():
    """Reset the process-wide store instances around a test."""
    store_config.reset_store()
    yield store_config
    store_config.reset_store()
