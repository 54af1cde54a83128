"""
Health check endpoints.
Used for monitoring, deployment readiness checks, and basic store checks.
"""

from fastapi import APIRouter, HTTPException
from civic_reports.config.store import get_report_store
from civic_reports.core.errors import PersistenceError
from civic_reports.core.settings import settings
from datetime import datetime


router = APIRouter(prefix="/health", tags=["Health"])


@router.get("")
def health_check():
    """
    Basic health check endpoint.
    Returns 200 if service is running.
    """
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "timestamp": datetime.utcnow().isoformat()
    }


@router.get("/store")
def store_health():
    """
    Report store check: path of the JSON file and number of reports held.
    """
    try:
        store = get_report_store()
    except PersistenceError as e:
        raise HTTPException(
            status_code=503,
            detail=f"Report store unavailable: {str(e)}"
        )

    return {
        "status": "healthy",
        "database": "json-file",
        "path": str(store.path),
        "exists": store.path.exists(),
        "reports_count": store.count(),
        "timestamp": datetime.utcnow().isoformat()
    }
