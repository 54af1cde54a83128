"""
Tests for the JSON report store:
- initialization of a missing store
- decode failures reported as PersistenceError
- atomic whole-file persistence and in-memory consistency
"""

import json
import os
from datetime import datetime, timezone

import pytest

from civic_reports.core.errors import PersistenceError
from civic_reports.models.report import Report, ReportStatus
from civic_reports.services.report_store import ReportStore


def make_report(report_id, **extra):
    fields = {
        "id": report_id,
        "title": f"Report {report_id}",
        "description": "Overflowing garbage bin",
        "location": "Sadar Bazaar",
        "category": "Waste Management",
        "created_at": datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc),
    }
    fields.update(extra)
    return Report(**fields)


# ────────────────────────────────
# Load
# ────────────────────────────────
def test_load_missing_file_initializes_empty_store(db_path):
    store = ReportStore(db_path)
    assert store.load() == []
    assert db_path.exists()
    assert json.loads(db_path.read_text(encoding="utf-8")) == []
    assert store.loaded


def test_load_blank_file_is_empty_collection(db_path):
    db_path.parent.mkdir(parents=True)
    db_path.write_text("  \n", encoding="utf-8")
    assert ReportStore(db_path).load() == []


def test_load_invalid_json_raises(db_path):
    db_path.parent.mkdir(parents=True)
    db_path.write_text("[{not json", encoding="utf-8")
    with pytest.raises(PersistenceError, match="not valid JSON"):
        ReportStore(db_path).load()


def test_load_non_list_raises(db_path):
    db_path.parent.mkdir(parents=True)
    db_path.write_text('{"reports": []}', encoding="utf-8")
    with pytest.raises(PersistenceError, match="must contain a list"):
        ReportStore(db_path).load()


def test_load_unknown_status_raises(db_path):
    db_path.parent.mkdir(parents=True)
    record = make_report("r1").to_record()
    record["status"] = "in-progress"
    db_path.write_text(json.dumps([record]), encoding="utf-8")
    with pytest.raises(PersistenceError, match="position 0"):
        ReportStore(db_path).load()


def test_load_duplicate_ids_raises(db_path):
    db_path.parent.mkdir(parents=True)
    record = make_report("r1").to_record()
    db_path.write_text(json.dumps([record, record]), encoding="utf-8")
    with pytest.raises(PersistenceError, match="Duplicate report id r1"):
        ReportStore(db_path).load()


def test_load_fine_without_reward_raises(db_path):
    db_path.parent.mkdir(parents=True)
    record = make_report("r1").to_record()
    record["fineCollected"] = 600
    db_path.write_text(json.dumps([record]), encoding="utf-8")
    with pytest.raises(PersistenceError):
        ReportStore(db_path).load()


def test_load_record_written_by_previous_server(db_path):
    """Records with millisecond Z timestamps and missing optional fields load."""
    db_path.parent.mkdir(parents=True)
    legacy = [{
        "id": "8c7a4d0e-1f1b-4d7e-9a0c-3b2f5e6d7c8b",
        "title": "Garbage dump",
        "description": "Garbage near the market",
        "location": "Kinari Bazaar",
        "category": "Waste Management",
        "status": "resolved",
        "createdAt": "2024-03-02T08:15:30.123Z",
        "verifiedAt": "2024-03-02T09:00:00.000Z",
        "fineCollected": 600,
        "rewardDisbursed": 500,
        "resolvedAt": "2024-03-03T10:00:00.000Z",
    }]
    db_path.write_text(json.dumps(legacy), encoding="utf-8")

    reports = ReportStore(db_path).load()
    assert len(reports) == 1
    assert reports[0].status == ReportStatus.RESOLVED
    assert reports[0].fine_collected == 600
    assert reports[0].image is None


# ────────────────────────────────
# Persist
# ────────────────────────────────
def test_persist_writes_camel_case_and_omits_absent_fields(store, db_path):
    store.persist_all([make_report("r1")])
    stored = json.loads(db_path.read_text(encoding="utf-8"))
    assert stored == [{
        "id": "r1",
        "title": "Report r1",
        "description": "Overflowing garbage bin",
        "location": "Sadar Bazaar",
        "category": "Waste Management",
        "status": "pending",
        "createdAt": "2024-01-15T10:30:00Z",
    }]


def test_persist_preserves_insertion_order(store, db_path):
    store.persist_all([make_report("c"), make_report("a"), make_report("b")])
    assert [r["id"] for r in json.loads(db_path.read_text(encoding="utf-8"))] == ["c", "a", "b"]
    assert [r.id for r in store.list_reports()] == ["c", "a", "b"]


def test_round_trip_is_identical(store, db_path):
    reports = [
        make_report("r1"),
        make_report(
            "r2",
            status=ReportStatus.RESOLVED,
            image="aGVsbG8=",
            verified_at=datetime(2024, 1, 15, 11, 0, 0, 123456, tzinfo=timezone.utc),
            resolved_at=datetime(2024, 1, 16, 9, 15, tzinfo=timezone.utc),
            fine_collected=600,
            reward_disbursed=500,
        ),
    ]
    store.persist_all(reports)

    first = ReportStore(db_path).load()
    ReportStore(db_path).persist_all(first)
    second = ReportStore(db_path).load()

    assert first == reports
    assert second == first


def test_find_by_id(store):
    store.persist_all([make_report("r1"), make_report("r2")])
    assert store.find_by_id("r2").id == "r2"
    assert store.find_by_id("missing") is None
    assert store.count() == 2


def test_write_failure_leaves_memory_and_file_unchanged(store, db_path, monkeypatch):
    store.persist_all([make_report("r1")])
    before = db_path.read_text(encoding="utf-8")

    def broken_replace(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(os, "replace", broken_replace)

    with pytest.raises(PersistenceError, match="disk full"):
        store.persist_all([make_report("r1"), make_report("r2")])

    assert [r.id for r in store.list_reports()] == ["r1"]
    assert store.find_by_id("r2") is None
    assert db_path.read_text(encoding="utf-8") == before
    # temp file cleaned up
    assert sorted(p.name for p in db_path.parent.iterdir()) == ["reports.json"]


def test_list_reports_returns_snapshot_copy(store):
    store.persist_all([make_report("r1")])
    snapshot = store.list_reports()
    snapshot.append(make_report("r2"))
    assert store.count() == 1
