"""Tests for the health payload against the in-memory SQLite schema."""

from datetime import date

import pytest

from phone_collection.adapters.persistence.models import DutyRosterModel, UserModel
from phone_collection.config import settings
from phone_collection.infrastructure.api.routes_health import collect_health

DAY = date(2024, 1, 2)


@pytest.mark.asyncio
async def test_ready_when_roster_and_operator_exist(db_session, monkeypatch):
    monkeypatch.setattr(settings, "assignment_operator_id", 900)
    db_session.add_all([
        UserModel(id=101, username="aung", full_name="Aung Aung"),
        UserModel(id=900, username="ops", full_name="Ops Manager"),
        DutyRosterModel(id=1, user_id=101, work_date=DAY),
    ])
    await db_session.commit()

    health = await collect_health(db_session, DAY)

    assert health["status"] == "ok"
    assert health["database"] == "connected"
    assert health["agents_on_duty"] == 1
    assert health["business_date"] == "2024-01-02"
    assert health["warnings"] == []


@pytest.mark.asyncio
async def test_degraded_without_roster_or_operator(db_session, monkeypatch):
    monkeypatch.setattr(settings, "assignment_operator_id", 4242)

    health = await collect_health(db_session, DAY)

    assert health["status"] == "degraded"
    assert health["agents_on_duty"] == 0
    assert health["warnings"] == [
        "operator 4242 does not exist",
        "no agents on duty for 2024-01-02",
    ]
