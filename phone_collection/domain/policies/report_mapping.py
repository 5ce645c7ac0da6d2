"""ReportRowMapper — one case plus preloaded lookups → one report row.

No I/O happens here. Everything a row needs is already in the
``LookupBundle``; data problems degrade a single field instead of failing
the report.
"""

from __future__ import annotations

from datetime import datetime

from phone_collection.domain.entities.collection_case import CollectionCase
from phone_collection.domain.entities.lookup_bundle import LookupBundle
from phone_collection.domain.entities.report_row import ReportRow
from phone_collection.domain.value_objects.business_time import (
    parse_timestamp,
    to_business_local,
)

SEGMENT_LABELS: dict[str, str] = {
    "pre-due": "Pre-due",
    "past-due": "Past-due",
    "dslp": "DSLP",
}

SOURCE_DSLP = "dslp"
SOURCE_PHONE_COLLECTION = "phone-collection"


def segment_label(code: str | None) -> str | None:
    """Human label for a segment code; unknown codes pass through."""
    if code is None:
        return None
    return SEGMENT_LABELS.get(code, code)


def duration_seconds(started: object, ended: object) -> int | None:
    """Whole seconds between two timestamps, or None if either is unusable."""
    start = parse_timestamp(started)
    end = parse_timestamp(ended)
    if start is None or end is None:
        return None
    try:
        seconds = int((end - start).total_seconds())
    except TypeError:
        # naive vs aware
        return None
    return seconds if seconds >= 0 else None


class ReportRowMapper:
    def __init__(self, tz_name: str, system_user_id: int, system_label: str = "System"):
        self._tz = tz_name
        self._system_user_id = system_user_id
        self._system_label = system_label

    def local(self, value: object) -> datetime | None:
        ts = parse_timestamp(value)
        return to_business_local(ts, self._tz) if ts is not None else None

    def user_label(self, user_id: int | None, bundle: LookupBundle) -> str | None:
        if user_id is None:
            return None
        if user_id == self._system_user_id:
            return self._system_label
        return bundle.user_names.get(user_id)

    def map(self, case: CollectionCase, bundle: LookupBundle) -> ReportRow:
        attempt = bundle.latest_attempts.get(case.id)
        promise = (
            bundle.latest_promises.get(case.payment_id)
            if case.payment_id is not None
            else None
        )

        call_result = None
        not_paying_reason = None
        if attempt is not None:
            if attempt.outcome_id is not None:
                call_result = bundle.outcome_names.get(attempt.outcome_id)
            if attempt.reason_id is not None:
                not_paying_reason = bundle.reason_names.get(attempt.reason_id)

        return ReportRow(
            case_id=case.id,
            sales_area=case.sales_area,
            customer_id=case.customer_id,
            customer_name=case.customer_name,
            contract_no=case.contract_no,
            contract_date=case.contract_date,
            product_type=case.product_type,
            payment_no=case.payment_no,
            collection_status=segment_label(case.segment_type),
            due_date=case.due_date,
            days_since_last_payment=case.days_since_last_payment,
            dpd=case.days_overdue or 0,
            amount_unpaid=case.amount_unpaid,
            assigned_by_name=self.user_label(case.assigned_by, bundle),
            assigned_to_name=self.user_label(case.assigned_to, bundle),
            assigned_at=self.local(case.assigned_at),
            last_attempt_by_name=self.user_label(case.last_attempt_by, bundle),
            call_started=self.local(attempt.started_at) if attempt else None,
            call_ended=self.local(attempt.ended_at) if attempt else None,
            duration_seconds=(
                duration_seconds(attempt.started_at, attempt.ended_at) if attempt else None
            ),
            call_status=attempt.call_status if attempt else None,
            call_result=call_result,
            not_paying_reason=not_paying_reason,
            standard_remark=attempt.standard_remark if attempt else None,
            detailed_remark=attempt.remark if attempt else None,
            remarks=bundle.remarks.get(case.id, ""),
            reasons=bundle.reasons.get(case.id, ""),
            uncalled=not case.was_called(),
            rescheduled=case.reschedule,
            phone_no_1=case.phone_no_1,
            phone_no_2=case.phone_no_2,
            phone_no_3=case.phone_no_3,
            home_address=case.home_address,
            promised_payment_date=promise.promised_payment_date if promise else None,
            call_later_at=self.local(promise.call_later_at) if promise else None,
            postpone_count=(
                bundle.postpone_counts.get(case.contract_id, 0)
                if case.contract_id is not None
                else 0
            ),
            source=SOURCE_DSLP if case.is_dslp() else SOURCE_PHONE_COLLECTION,
            risk_type=case.risk_type,
        )
