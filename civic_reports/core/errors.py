"""
Error taxonomy for the report lifecycle and store.

Routes translate these into HTTP responses:
- ValidationError  -> 400
- NotFoundError    -> 404
- PersistenceError -> 500
"""

from typing import Optional


class ReportError(Exception):
    """Base class for every error raised by the report core."""


class ValidationError(ReportError):
    """Missing/empty required field, unknown status, or disallowed transition."""


class NotFoundError(ReportError):
    """Operation references a report id absent from the store."""

    def __init__(self, report_id: str, message: Optional[str] = None):
        self.report_id = report_id
        super().__init__(message or f"Report {report_id} not found")


class PersistenceError(ReportError):
    """Reading or writing the durable store failed."""
