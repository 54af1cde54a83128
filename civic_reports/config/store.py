"""
Report store initialization.
Single-source-of-truth store and lifecycle instances for Civic Report Hub.
"""

from typing import Optional
import logging

from civic_reports.core.settings import settings
from civic_reports.services.report_lifecycle import ReportLifecycle
from civic_reports.services.report_store import ReportStore

logger = logging.getLogger(__name__)

_store: Optional[ReportStore] = None
_lifecycle: Optional[ReportLifecycle] = None


def initialize_store(path: Optional[str] = None) -> ReportStore:
    """
    Load the durable store once per process.

    Raises:
        PersistenceError: If the store exists but cannot be read or decoded.
        The server must not start against an unknown store.
    """
    global _store, _lifecycle

    if _store is not None:
        return _store

    store = ReportStore(path or settings.REPORTS_DB_PATH)
    store.load()

    _store = store
    _lifecycle = ReportLifecycle(store)
    logger.info(f"[STORE] Using report store at {store.path.resolve()}")
    return _store


def get_report_store() -> ReportStore:
    """FastAPI dependency: the initialized report store."""
    if _store is None:
        initialize_store()
    return _store


def get_report_lifecycle() -> ReportLifecycle:
    """FastAPI dependency: the lifecycle bound to the report store."""
    if _lifecycle is None:
        initialize_store()
    return _lifecycle


def reset_store() -> None:
    """Forget the current instances (next access reloads from disk)."""
    global _store, _lifecycle
    _store = None
    _lifecycle = None
