"""
Tests for the report status state machine.
"""

import pytest

from civic_reports.core.errors import ValidationError
from civic_reports.models.report import ReportStatus
from civic_reports.services.status_workflow import StatusWorkflowEngine


@pytest.mark.parametrize("from_status,to_status", [
    ("pending", "verified"),
    ("pending", "rejected"),
    ("verified", "resolved"),
    ("verified", "verified"),
    ("resolved", "resolved"),
])
def test_allowed_transitions(from_status, to_status):
    assert StatusWorkflowEngine.is_valid_transition(from_status, to_status)


@pytest.mark.parametrize("from_status,to_status", [
    ("pending", "resolved"),
    ("verified", "pending"),
    ("verified", "rejected"),
    ("resolved", "verified"),
    ("rejected", "verified"),
    ("pending", "closed"),
])
def test_rejected_transitions(from_status, to_status):
    assert not StatusWorkflowEngine.is_valid_transition(from_status, to_status)


def test_terminal_states_have_no_transitions():
    assert StatusWorkflowEngine.get_allowed_transitions("resolved") == []
    assert StatusWorkflowEngine.get_allowed_transitions("rejected") == []
    assert StatusWorkflowEngine.get_allowed_transitions("bogus") == []


def test_validate_transition_returns_enum():
    assert StatusWorkflowEngine.validate_transition("pending", "verified") == ReportStatus.VERIFIED


def test_validate_transition_lists_allowed_targets():
    with pytest.raises(ValidationError) as exc_info:
        StatusWorkflowEngine.validate_transition("pending", "resolved")
    assert "['verified', 'rejected']" in str(exc_info.value)


def test_parse_status_rejects_unknown_value():
    with pytest.raises(ValidationError, match="Invalid status 'done'"):
        StatusWorkflowEngine.parse_status("done")
