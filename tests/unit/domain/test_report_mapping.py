"""Tests for ReportRowMapper."""

from datetime import date, datetime, timezone

import pytest

from phone_collection.domain.entities.call_attempt import CallAttempt
from phone_collection.domain.entities.collection_case import CollectionCase
from phone_collection.domain.entities.lookup_bundle import LookupBundle
from phone_collection.domain.entities.promise import PromiseRecord
from phone_collection.domain.policies.report_mapping import (
    ReportRowMapper,
    duration_seconds,
    segment_label,
)

UTC = timezone.utc
SYSTEM_ID = 1


@pytest.fixture
def mapper():
    return ReportRowMapper(tz_name="Asia/Yangon", system_user_id=SYSTEM_ID)


def _case(**kwargs) -> CollectionCase:
    defaults = dict(
        id=10,
        created_at=datetime(2023, 12, 30, tzinfo=UTC),
        assigned_to=5,
        assigned_by=SYSTEM_ID,
        assigned_at=datetime(2024, 1, 1, 23, 50, tzinfo=UTC),
        contract_id=900,
        payment_id=77,
        segment_type="past-due",
    )
    defaults.update(kwargs)
    return CollectionCase(**defaults)


@pytest.mark.parametrize(
    "code,label",
    [("pre-due", "Pre-due"), ("past-due", "Past-due"), ("dslp", "DSLP"),
     ("write-off", "write-off"), (None, None)],
)
def test_segment_label(code, label):
    assert segment_label(code) == label


def test_duration_whole_seconds():
    start = datetime(2024, 1, 1, 10, 0, 0, tzinfo=UTC)
    end = datetime(2024, 1, 1, 10, 2, 5, 900000, tzinfo=UTC)
    assert duration_seconds(start, end) == 125


@pytest.mark.parametrize(
    "start,end",
    [
        (None, datetime(2024, 1, 1, tzinfo=UTC)),
        (datetime(2024, 1, 1, tzinfo=UTC), None),
        ("garbage", datetime(2024, 1, 1, tzinfo=UTC)),
        (datetime(2024, 1, 1, 10, tzinfo=UTC), datetime(2024, 1, 1, 9, tzinfo=UTC)),
        (datetime(2024, 1, 1, 10), datetime(2024, 1, 1, 11, tzinfo=UTC)),
    ],
)
def test_duration_absent_when_unusable(start, end):
    assert duration_seconds(start, end) is None


def test_map_full_row(mapper):
    attempt = CallAttempt(
        id=3, case_id=10,
        started_at=datetime(2024, 1, 2, 3, 0, 0, tzinfo=UTC),
        ended_at=datetime(2024, 1, 2, 3, 1, 30, tzinfo=UTC),
        call_status="answered", outcome_id=4, reason_id=8,
        remark="will pay friday", standard_remark="PTP",
    )
    bundle = LookupBundle(
        latest_attempts={10: attempt},
        outcome_names={4: "Promise to pay"},
        reason_names={8: "Lost job"},
        user_names={5: "Agent Five"},
        postpone_counts={900: 2},
        remarks={10: "A; B"},
        reasons={10: "Lost job, Sick"},
        latest_promises={77: PromiseRecord(
            id=1, payment_id=77, created_at=datetime(2024, 1, 1, tzinfo=UTC),
            promised_payment_date=date(2024, 1, 5),
        )},
    )

    row = mapper.map(_case(), bundle)

    assert row.assigned_by_name == "System"
    assert row.assigned_to_name == "Agent Five"
    assert row.assigned_at.date() == date(2024, 1, 2)
    assert (row.assigned_at.hour, row.assigned_at.minute) == (6, 20)
    assert row.call_started.hour == 9 and row.call_started.minute == 30
    assert row.duration_seconds == 90
    assert row.call_result == "Promise to pay"
    assert row.not_paying_reason == "Lost job"
    assert row.detailed_remark == "will pay friday"
    assert row.standard_remark == "PTP"
    assert row.remarks == "A; B"
    assert row.reasons == "Lost job, Sick"
    assert row.collection_status == "Past-due"
    assert row.source == "phone-collection"
    assert row.promised_payment_date == date(2024, 1, 5)
    assert row.postpone_count == 2
    assert row.uncalled is True


def test_map_without_lookups(mapper):
    row = mapper.map(_case(assigned_by=42, segment_type="dslp", days_overdue=None), LookupBundle())
    assert row.assigned_by_name is None
    assert row.assigned_to_name is None
    assert row.call_started is None
    assert row.duration_seconds is None
    assert row.call_result is None
    assert row.remarks == ""
    assert row.reasons == ""
    assert row.promised_payment_date is None
    assert row.postpone_count == 0
    assert row.dpd == 0
    assert row.source == "dslp"
    assert row.collection_status == "DSLP"


def test_malformed_attempt_timestamp_degrades_field(mapper):
    attempt = CallAttempt(id=1, case_id=10, started_at="31/12/2023 10:00", ended_at=None)
    row = mapper.map(_case(), LookupBundle(latest_attempts={10: attempt}))
    assert row.call_started is None
    assert row.duration_seconds is None


def test_custom_system_label():
    mapper = ReportRowMapper(tz_name="UTC", system_user_id=99, system_label="Scheduler")
    row = mapper.map(_case(assigned_by=99), LookupBundle())
    assert row.assigned_by_name == "Scheduler"
