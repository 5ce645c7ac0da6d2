"""Tests for RosterPolicy."""

from datetime import date, datetime, timezone

from phone_collection.domain.entities.agent import Agent
from phone_collection.domain.entities.duty_roster import DutyRosterEntry
from phone_collection.domain.policies.roster import on_duty_agent_ids, select_available

DAY = date(2024, 1, 2)


def _entry(agent_id: int, working: bool = True, work_date: date = DAY, deleted: bool = False):
    return DutyRosterEntry(
        id=None, agent_id=agent_id, work_date=work_date, is_working=working,
        deleted_at=datetime(2024, 1, 1, tzinfo=timezone.utc) if deleted else None,
    )


def test_on_duty_ids_sorted_and_deduplicated():
    entries = [_entry(30), _entry(10), _entry(20), _entry(10)]
    assert on_duty_agent_ids(entries, DAY) == [10, 20, 30]


def test_on_duty_ignores_off_deleted_and_other_dates():
    entries = [
        _entry(1),
        _entry(2, working=False),
        _entry(3, deleted=True),
        _entry(4, work_date=date(2024, 1, 3)),
    ]
    assert on_duty_agent_ids(entries, DAY) == [1]


def test_on_duty_empty():
    assert on_duty_agent_ids([], DAY) == []


def test_select_available_drops_inactive_and_unknown():
    agents = [
        Agent(id=3, full_name="C"),
        Agent(id=1, full_name="A"),
        Agent(id=2, full_name="B", is_active=False),
        Agent(id=99, full_name="Not rostered"),
    ]
    chosen = select_available([1, 2, 3, 4], agents)
    assert [a.id for a in chosen] == [1, 3]
