"""
Report Lifecycle - submission, verification and resolution of reports.

DESIGN PRINCIPLES:
- Every mutation runs inside the store's critical section
- Records are copied, never mutated in place
- The operation returns only after the whole collection is persisted
- A failed persist leaves the in-memory collection untouched
- verifiedAt / resolvedAt are set once and never cleared
"""

from datetime import datetime, timezone
from typing import Callable, List, Optional, Union
import logging
import uuid

from civic_reports.core.errors import NotFoundError, ValidationError
from civic_reports.core.settings import settings
from civic_reports.models.report import Report, ReportStatus
from civic_reports.services.report_store import ReportStore
from civic_reports.services.status_workflow import StatusWorkflowEngine

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("title", "description", "location", "category")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ReportLifecycle:
    """
    Enforces the report state machine and coordinates each transition
    with the ReportStore.
    """

    def __init__(
        self,
        store: ReportStore,
        fine_amount: Optional[Union[int, float]] = None,
        reward_amount: Optional[Union[int, float]] = None,
        strict_submission: Optional[bool] = None,
        allow_status_override: Optional[bool] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.store = store
        self.workflow = StatusWorkflowEngine()
        self.fine_amount = settings.FINE_AMOUNT if fine_amount is None else fine_amount
        self.reward_amount = settings.REWARD_AMOUNT if reward_amount is None else reward_amount
        self.strict_submission = (
            settings.STRICT_SUBMISSION if strict_submission is None else strict_submission
        )
        self.allow_status_override = (
            settings.ALLOW_STATUS_OVERRIDE if allow_status_override is None else allow_status_override
        )
        self.clock = clock

        if self.fine_amount < 0 or self.reward_amount < 0:
            raise ValueError("Fine and reward amounts must be non-negative")

    def list_reports(self) -> List[Report]:
        return self.store.list_reports()

    def get_report(self, report_id: str) -> Report:
        report = self.store.find_by_id(report_id)
        if report is None:
            raise NotFoundError(report_id)
        return report

    def submit(
        self,
        title: Optional[str],
        description: Optional[str],
        location: Optional[str],
        image: Optional[str] = None,
        category: Optional[str] = None,
    ) -> Report:
        """
        Create a new pending report and persist it.

        Raises:
            ValidationError: If strict submission is on and a required field is empty
            PersistenceError: If the store could not be written
        """
        fields = {
            "title": _clean(title),
            "description": _clean(description),
            "location": _clean(location),
            "category": _clean(category),
        }

        missing = [name for name in REQUIRED_FIELDS if not fields[name]]
        if missing and self.strict_submission:
            raise ValidationError(f"Missing required field(s): {', '.join(missing)}")
        if missing:
            logger.warning(f"Accepting report with empty field(s) {missing} (lenient submission)")
        if image and len(image) > settings.max_image_chars:
            raise ValidationError(f"Image exceeds {settings.MAX_REQUEST_BODY_MB} MB limit")

        with self.store.transaction():
            reports = self.store.list_reports()
            report_id = self._new_id()
            report = Report(
                id=report_id,
                image=image or None,
                status=ReportStatus.PENDING,
                created_at=self.clock(),
                **{name: value or None for name, value in fields.items()},
            )
            self.store.persist_all(reports + [report])

        logger.info(f"New report {report.id} submitted with category: {report.category}")
        return report

    def _new_id(self) -> str:
        while True:
            report_id = str(uuid.uuid4())
            if self.store.find_by_id(report_id) is None:
                return report_id

    def update_status(self, report_id: str, new_status: str, override: bool = False) -> Report:
        """
        Move a report to new_status.

        Entering verified/resolved stamps verifiedAt/resolvedAt the first
        time only. With override=True (and ALLOW_STATUS_OVERRIDE enabled) any
        known status is accepted regardless of the transition table.

        Raises:
            NotFoundError: If the report does not exist
            ValidationError: If the status is unknown or the transition is not allowed
            PersistenceError: If the store could not be written
        """
        with self.store.transaction():
            current = self.get_report(report_id)

            if override:
                if not self.allow_status_override:
                    raise ValidationError("Status override is disabled (ALLOW_STATUS_OVERRIDE=false)")
                target = self.workflow.parse_status(new_status)
                logger.warning(f"Status override on report {report_id}: {current.status.value} → {target.value}")
            else:
                target = self.workflow.validate_transition(current.status.value, new_status)

            now = self.clock()
            update = {"status": target}
            if target == ReportStatus.VERIFIED and current.verified_at is None:
                update["verified_at"] = now
            if target == ReportStatus.RESOLVED and current.resolved_at is None:
                update["resolved_at"] = now

            updated = self._replace(current, update)

        logger.info(f"Report {report_id} updated to {updated.status.value}")
        return updated

    def issue_fine(self, report_id: str) -> Report:
        """
        Resolve a verified report, recording the configured fine and reward.

        Already-resolved reports are returned unchanged.

        Raises:
            NotFoundError: If the report does not exist
            ValidationError: If the report has not been verified
            PersistenceError: If the store could not be written
        """
        with self.store.transaction():
            current = self.get_report(report_id)
            if current.status == ReportStatus.RESOLVED:
                logger.info(f"Report {report_id} already resolved, fine not re-applied")
                return current

            self.workflow.validate_transition(current.status.value, ReportStatus.RESOLVED.value)
            update = self._resolution(current)
            update["fine_collected"] = self.fine_amount
            update["reward_disbursed"] = self.reward_amount
            updated = self._replace(current, update)

        logger.info(f"Fine issued for report {report_id}")
        return updated

    def resolve(self, report_id: str) -> Report:
        """
        Resolve a verified report without a fine.

        Already-resolved reports are returned unchanged.

        Raises:
            NotFoundError: If the report does not exist
            ValidationError: If the report has not been verified
            PersistenceError: If the store could not be written
        """
        with self.store.transaction():
            current = self.get_report(report_id)
            if current.status == ReportStatus.RESOLVED:
                logger.info(f"Report {report_id} already resolved")
                return current

            self.workflow.validate_transition(current.status.value, ReportStatus.RESOLVED.value)
            updated = self._replace(current, self._resolution(current))

        logger.info(f"Report {report_id} marked as resolved (no fine)")
        return updated

    def _resolution(self, current: Report) -> dict:
        update = {"status": ReportStatus.RESOLVED}
        if current.resolved_at is None:
            update["resolved_at"] = self.clock()
        return update

    def _replace(self, current: Report, update: dict) -> Report:
        # Caller holds the store transaction
        updated = current.model_copy(update=update)
        reports = [updated if report.id == current.id else report for report in self.store.list_reports()]
        self.store.persist_all(reports)
        return updated


def _clean(value: Optional[str]) -> str:
    return value.strip() if isinstance(value, str) else ""
