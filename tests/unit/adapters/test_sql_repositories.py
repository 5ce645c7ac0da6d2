"""Tests for the SQLAlchemy repositories against an in-memory SQLite schema.

Only the Postgres advisory lock is left to the in-memory fakes.
"""

from datetime import date, datetime, timedelta

import pytest

from phone_collection.adapters.persistence.models import (
    CallAttemptModel,
    CollectionCaseModel,
    DutyRosterModel,
    PromiseHistoryModel,
    ReasonModel,
    UserModel,
)
from phone_collection.adapters.persistence.repositories import (
    SqlAssignmentTransaction,
    SqlCaseRepository,
    SqlReportDataRepository,
    SqlRosterRepository,
    SqlUserRepository,
)
from phone_collection.domain.entities.agent import Agent
from phone_collection.domain.entities.assignment import AssignmentPair
from phone_collection.domain.entities.collection_case import CollectionCase
from phone_collection.domain.errors import CaseNotFoundError
from phone_collection.domain.value_objects.business_time import window_bounds
from phone_collection.domain.value_objects.enums import CaseStatus

# SQLite drops tzinfo, so rows are written and compared as naive UTC.
T0 = datetime(2024, 1, 1, 8, 0)
NOW = datetime(2024, 1, 2, 1, 0)
TZ = "Asia/Yangon"


def _case(id: int, minutes: int = 0, **kw) -> CollectionCaseModel:
    return CollectionCaseModel(id=id, created_at=T0 + timedelta(minutes=minutes), **kw)


def _attempt(id: int, case_id: int, started_at=None, **kw) -> CallAttemptModel:
    return CallAttemptModel(id=id, case_id=case_id, started_at=started_at, **kw)


async def _seed(session, *rows):
    session.add_all(rows)
    await session.commit()


# ─── Users and rosters ──────────────────────────────────────────────


@pytest.mark.asyncio
async def test_roster_entries_skip_deleted_and_other_dates(db_session):
    await _seed(
        db_session,
        UserModel(id=101, username="aung", full_name="Aung Aung"),
        UserModel(id=102, username="bobo", full_name="Bo Bo"),
        DutyRosterModel(id=1, user_id=101, work_date=date(2024, 1, 2), created_at=T0),
        DutyRosterModel(
            id=2, user_id=102, work_date=date(2024, 1, 2), created_at=T0, deleted_at=T0
        ),
        DutyRosterModel(id=3, user_id=102, work_date=date(2024, 1, 3), created_at=T0),
    )

    entries = await SqlRosterRepository(db_session).get_entries_for_date(date(2024, 1, 2))

    assert [e.agent_id for e in entries] == [101]


@pytest.mark.asyncio
async def test_get_many_orders_by_id_and_ignores_unknown(db_session):
    await _seed(
        db_session,
        UserModel(id=102, username="bobo", full_name="Bo Bo", is_active=False),
        UserModel(id=101, username="aung", full_name="Aung Aung"),
    )
    users = SqlUserRepository(db_session)

    agents = await users.get_many({102, 101, 999})

    assert [(a.id, a.is_active) for a in agents] == [(101, True), (102, False)]
    assert await users.get_by_id(999) is None


# ─── Eligible cases and writes ──────────────────────────────────────


@pytest.mark.asyncio
async def test_eligible_cases_keep_unrecognised_status(db_session):
    await _seed(
        db_session,
        _case(1, minutes=5, status="open"),
        _case(2, minutes=1, status="completed"),
        _case(3, minutes=2, status="pending", assigned_to=None),
        _case(4, minutes=3, status="in_progress", deleted_at=T0),
    )

    cases = await SqlCaseRepository(db_session).get_eligible()

    assert [c.id for c in cases] == [3, 1]
    assert cases[0].status is CaseStatus.PENDING
    assert cases[1].status == "open"
    assert cases[1].is_eligible()


@pytest.mark.asyncio
async def test_assign_many_stamps_every_field(db_session):
    await _seed(
        db_session,
        UserModel(id=101, username="aung", full_name="Aung Aung"),
        UserModel(id=900, username="ops", full_name="Ops Manager"),
        _case(1), _case(2, minutes=1, status="open"),
    )
    repo = SqlCaseRepository(db_session)
    agent = Agent(id=101, full_name="Aung Aung")
    pairs = [
        AssignmentPair(case=CollectionCase(id=cid, created_at=T0), agent=agent, sequence=n)
        for n, cid in enumerate((1, 2), start=1)
    ]

    await repo.assign_many(pairs, assigned_by=900, assigned_at=NOW)
    await SqlAssignmentTransaction(db_session).commit()

    # Core select so the identity map does not serve the pre-update objects
    rows = (await db_session.execute(CollectionCaseModel.__table__.select())).all()
    assert len(rows) == 2
    for row in rows:
        assert row.assigned_to == 101
        assert row.assigned_by == 900
        assert row.updated_by == 900
        assert row.assigned_at == NOW
        assert row.status == CaseStatus.ASSIGNED.value
    assert await repo.get_eligible() == []


@pytest.mark.asyncio
async def test_assign_many_rejects_case_taken_since_read(db_session):
    await _seed(db_session, _case(1), _case(2, minutes=1, assigned_to=555))
    repo = SqlCaseRepository(db_session)
    agent = Agent(id=101, full_name="Aung Aung")
    pairs = [
        AssignmentPair(case=CollectionCase(id=cid, created_at=T0), agent=agent, sequence=n)
        for n, cid in enumerate((1, 2, 3), start=1)
    ]

    with pytest.raises(CaseNotFoundError) as exc:
        await repo.assign_many(pairs, assigned_by=900, assigned_at=NOW)
    assert exc.value.case_ids == [2, 3]

    await SqlAssignmentTransaction(db_session).rollback()
    untouched = await db_session.get(CollectionCaseModel, 1)
    assert untouched.assigned_to is None
    assert untouched.status == CaseStatus.PENDING.value


# ─── Report reads ───────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_report_window_keeps_unrecognised_status(db_session):
    # 2024-01-02 in Yangon (UTC+06:30) starts at 2024-01-01 17:30 UTC.
    await _seed(
        db_session,
        _case(1, status="open", assigned_at=datetime(2024, 1, 1, 17, 30)),
        _case(2, status="assigned", assigned_at=datetime(2024, 1, 2, 17, 29)),
        _case(3, status="assigned", assigned_at=datetime(2024, 1, 2, 17, 30)),
        _case(4, status="assigned", assigned_at=datetime(2024, 1, 1, 17, 29)),
        _case(5, status="assigned", assigned_at=datetime(2024, 1, 2, 9, 0), deleted_at=T0),
    )
    start, end = window_bounds(date(2024, 1, 2), date(2024, 1, 2), TZ)

    cases = await SqlReportDataRepository(db_session).get_cases_assigned_between(start, end)

    assert [c.id for c in cases] == [1, 2]
    assert cases[0].status == "open"
    assert cases[1].status is CaseStatus.ASSIGNED


@pytest.mark.asyncio
async def test_latest_attempt_breaks_ties_on_highest_id(db_session):
    started = datetime(2024, 1, 2, 3, 0)
    await _seed(
        db_session,
        _case(1), _case(2),
        _attempt(7, 1, started),
        _attempt(9, 1, started),
        _attempt(8, 1, started),
        _attempt(10, 1, None),
        _attempt(11, 1, started + timedelta(hours=1), deleted_at=T0),
        _attempt(12, 2, None),
    )

    latest = await SqlReportDataRepository(db_session).get_latest_attempts([1, 2])

    assert latest[1].id == 9
    assert latest[2].id == 12


@pytest.mark.asyncio
async def test_latest_active_promise_per_payment(db_session):
    t1, t2, t3 = T0, T0 + timedelta(days=1), T0 + timedelta(days=2)
    await _seed(
        db_session,
        PromiseHistoryModel(id=1, payment_id=500, created_at=t1),
        PromiseHistoryModel(id=2, payment_id=500, created_at=t2,
                            promised_payment_date=date(2024, 1, 10)),
        PromiseHistoryModel(id=3, payment_id=500, created_at=t2,
                            promised_payment_date=date(2024, 1, 12)),
        PromiseHistoryModel(id=4, payment_id=500, created_at=t3, is_active=False),
        PromiseHistoryModel(id=5, payment_id=600, created_at=t3, is_active=False),
    )

    promises = await SqlReportDataRepository(db_session).get_latest_active_promises([500, 600])

    assert list(promises) == [500]
    assert promises[500].id == 3
    assert promises[500].promised_payment_date == date(2024, 1, 12)


@pytest.mark.asyncio
async def test_postpone_counts_group_by_contract(db_session):
    await _seed(
        db_session,
        _case(1, contract_id=70), _case(2, contract_id=70), _case(3, contract_id=71),
        _case(4, contract_id=72),
        _attempt(1, 1, asked_to_postpone=True),
        _attempt(2, 2, asked_to_postpone=True),
        _attempt(3, 2, asked_to_postpone=False),
        _attempt(4, 2, asked_to_postpone=True, deleted_at=T0),
        _attempt(5, 3, asked_to_postpone=True),
        _attempt(6, 4, asked_to_postpone=False),
    )

    counts = await SqlReportDataRepository(db_session).get_postpone_counts([70, 71, 72])

    assert counts == {70: 2, 71: 1}


@pytest.mark.asyncio
async def test_remarks_and_reasons_come_back_in_attempt_order(db_session):
    await _seed(
        db_session,
        _case(1),
        ReasonModel(id=1, name="No money"),
        ReasonModel(id=2, name="Travelling"),
        _attempt(3, 1, remark="B", reason_id=2),
        _attempt(1, 1, remark="A", reason_id=1),
        _attempt(2, 1, remark="", reason_id=None),
        _attempt(4, 1, remark=None, reason_id=1),
    )
    repo = SqlReportDataRepository(db_session)

    assert await repo.get_attempt_remarks([1]) == [(1, "A"), (1, "B")]
    assert await repo.get_attempt_reason_names([1]) == [
        (1, "No money"), (1, "Travelling"), (1, "No money"),
    ]
    assert await repo.get_reason_names([2]) == {2: "Travelling"}
