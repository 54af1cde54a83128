"""
Report endpoints - citizen submission and staff workflow actions.

Every mutating endpoint answers only after the report collection has been
written to disk.
"""

from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
import logging

from civic_reports.config.store import get_report_lifecycle
from civic_reports.core.errors import NotFoundError, PersistenceError, ReportError, ValidationError
from civic_reports.models.report import Report, ReportCreate, StatusUpdateRequest
from civic_reports.services.report_lifecycle import ReportLifecycle

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/reports", tags=["Reports"])


def _to_http_error(exc: ReportError, action: str) -> HTTPException:
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, ValidationError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    if isinstance(exc, PersistenceError):
        logger.error(f"❌ {action} failed: {exc}")
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"{action} failed: changes were not saved ({exc})",
        )
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"{action} failed: {exc}")


@router.get("", response_model=List[Report], response_model_exclude_none=True)
def list_reports(lifecycle: ReportLifecycle = Depends(get_report_lifecycle)):
    """All reports in submission order."""
    return lifecycle.list_reports()


@router.get("/{report_id}", response_model=Report, response_model_exclude_none=True)
def get_report(report_id: str, lifecycle: ReportLifecycle = Depends(get_report_lifecycle)):
    try:
        return lifecycle.get_report(report_id)
    except ReportError as e:
        raise _to_http_error(e, "Report lookup")


@router.post(
    "",
    response_model=Report,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
def submit_report(report: ReportCreate, lifecycle: ReportLifecycle = Depends(get_report_lifecycle)):
    """
    Submit a new citizen report.

    Title, description, location and category are required (unless lenient
    submission is configured). Returns the created report with status pending.
    """
    try:
        return lifecycle.submit(
            title=report.title,
            description=report.description,
            location=report.location,
            image=report.image,
            category=report.category,
        )
    except ReportError as e:
        raise _to_http_error(e, "Report creation")


@router.put("/{report_id}", response_model=Report, response_model_exclude_none=True)
def update_report_status(
    report_id: str,
    request: StatusUpdateRequest,
    lifecycle: ReportLifecycle = Depends(get_report_lifecycle),
):
    """
    Change report status.

    Allowed: pending → verified | rejected, verified → resolved.
    """
    try:
        return lifecycle.update_status(report_id, request.status, override=request.override)
    except ReportError as e:
        raise _to_http_error(e, "Status update")


@router.put("/{report_id}/fine", response_model=Report, response_model_exclude_none=True)
def issue_fine(report_id: str, lifecycle: ReportLifecycle = Depends(get_report_lifecycle)):
    """Resolve a verified report and record the fine collected and reward disbursed."""
    try:
        return lifecycle.issue_fine(report_id)
    except ReportError as e:
        raise _to_http_error(e, "Fine issuance")


@router.put("/{report_id}/resolve", response_model=Report, response_model_exclude_none=True)
def resolve_report(report_id: str, lifecycle: ReportLifecycle = Depends(get_report_lifecycle)):
    """Resolve a verified report without a fine."""
    try:
        return lifecycle.resolve(report_id)
    except ReportError as e:
        raise _to_http_error(e, "Report resolution")
