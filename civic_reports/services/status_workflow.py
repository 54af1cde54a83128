"""
Status Workflow Engine - strict report state machine.

DESIGN PRINCIPLES:
- Closed set of statuses (ReportStatus)
- No backward transitions, no skipping verification
- Re-applying the current status is a no-op
- Invalid transitions rejected programmatically
"""

from typing import Dict, List
import logging

from civic_reports.core.errors import ValidationError
from civic_reports.models.report import ReportStatus

logger = logging.getLogger(__name__)


class StatusWorkflowEngine:
    """
    Strict state machine for report status transitions.

    Rules:
    - pending may be verified or rejected
    - only verified reports may be resolved
    - rejected and resolved are terminal
    """

    # Allowed transitions map: {from_status: [to_status, ...]}
    ALLOWED_TRANSITIONS: Dict[ReportStatus, List[ReportStatus]] = {
        ReportStatus.PENDING: [ReportStatus.VERIFIED, ReportStatus.REJECTED],
        ReportStatus.VERIFIED: [ReportStatus.RESOLVED],
        ReportStatus.REJECTED: [],  # Terminal state
        ReportStatus.RESOLVED: [],  # Terminal state
    }

    @classmethod
    def parse_status(cls, value: str) -> ReportStatus:
        """
        Convert a raw status value into a ReportStatus.

        Raises:
            ValidationError: If the value is not a known status
        """
        try:
            return ReportStatus(value)
        except ValueError:
            allowed = [status.value for status in ReportStatus]
            raise ValidationError(f"Invalid status '{value}'. Allowed values: {allowed}")

    @classmethod
    def is_valid_transition(cls, from_status: str, to_status: str) -> bool:
        """
        Check if a status transition is valid.

        Args:
            from_status: Current status
            to_status: Desired new status

        Returns:
            True if transition is allowed, False otherwise
        """
        try:
            from_enum = ReportStatus(from_status)
            to_enum = ReportStatus(to_status)
        except ValueError:
            return False

        # Same status is always valid (no-op)
        if from_enum == to_enum:
            return True

        return to_enum in cls.ALLOWED_TRANSITIONS.get(from_enum, [])

    @classmethod
    def get_allowed_transitions(cls, current_status: str) -> List[str]:
        """List of allowed next statuses from current status."""
        try:
            current_enum = ReportStatus(current_status)
        except ValueError:
            return []
        return [status.value for status in cls.ALLOWED_TRANSITIONS.get(current_enum, [])]

    @classmethod
    def validate_transition(cls, current_status: str, new_status: str) -> ReportStatus:
        """
        Validate a transition and return the target status.

        Raises:
            ValidationError: If new_status is unknown or the transition is not allowed
        """
        target = cls.parse_status(new_status)
        current = cls.parse_status(current_status)

        if not cls.is_valid_transition(current.value, target.value):
            allowed = cls.get_allowed_transitions(current.value)
            raise ValidationError(
                f"Invalid status transition: {current.value} → {target.value}. "
                f"Allowed transitions from {current.value}: {allowed}"
            )

        return target
