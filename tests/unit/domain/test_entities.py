"""Tests for domain entities."""

from datetime import date, datetime, timezone

from phone_collection.domain.entities.agent import Agent
from phone_collection.domain.entities.assignment import AssignmentPair, AssignmentSummary
from phone_collection.domain.entities.collection_case import CollectionCase
from phone_collection.domain.entities.duty_roster import DutyRosterEntry
from phone_collection.domain.value_objects.enums import CaseStatus

NOW = datetime(2024, 1, 1, tzinfo=timezone.utc)


def test_pending_unassigned_case_is_eligible():
    assert CollectionCase(id=1, created_at=NOW).is_eligible()


def test_completed_case_is_not_eligible():
    c = CollectionCase(id=1, created_at=NOW, status=CaseStatus.COMPLETED)
    assert not c.is_eligible()


def test_assigned_case_is_not_eligible():
    c = CollectionCase(id=1, created_at=NOW, status=CaseStatus.IN_PROGRESS, assigned_to=5)
    assert not c.is_eligible()


def test_failed_unassigned_case_is_eligible():
    c = CollectionCase(id=1, created_at=NOW, status=CaseStatus.FAILED)
    assert c.is_eligible()


def test_case_flags():
    c = CollectionCase(id=1, created_at=NOW, segment_type="dslp")
    assert c.is_dslp()
    assert not c.was_called()
    c.last_attempt_at = NOW
    assert c.was_called()


def test_roster_entry_on_duty():
    entry = DutyRosterEntry(id=1, agent_id=3, work_date=date(2024, 1, 2), is_working=True)
    assert entry.is_on_duty()
    entry.deleted_at = NOW
    assert not entry.is_on_duty()


def test_summary_audit_record():
    agent = Agent(id=7, full_name="Su Su")
    pair = AssignmentPair(case=CollectionCase(id=1, created_at=NOW), agent=agent, sequence=1)
    summary = AssignmentSummary(
        assignment_date=date(2024, 1, 2), assigned_by=2, total_agents=1,
        pairs=[pair], per_agent_counts={7: 1},
    )
    assert summary.total_cases == 1
    assert summary.to_audit_record() == {
        "assignmentDate": "2024-01-02",
        "totalCases": 1,
        "totalAgents": 1,
        "assignedBy": 2,
        "perAgentCounts": {7: 1},
    }
