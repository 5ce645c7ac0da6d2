"""Report row — a denormalized, read-only projection of one case."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal


@dataclass(frozen=True)
class ReportRow:
    case_id: int
    sales_area: str | None
    customer_id: str | None
    customer_name: str | None
    contract_no: str | None
    contract_date: date | None
    product_type: str | None
    payment_no: str | None
    collection_status: str | None
    due_date: date | None
    days_since_last_payment: int | None
    dpd: int
    amount_unpaid: Decimal | None
    assigned_by_name: str | None
    assigned_to_name: str | None
    assigned_at: datetime | None
    last_attempt_by_name: str | None
    call_started: datetime | None
    call_ended: datetime | None
    duration_seconds: int | None
    call_status: str | None
    call_result: str | None
    not_paying_reason: str | None
    standard_remark: str | None
    detailed_remark: str | None
    remarks: str
    reasons: str
    uncalled: bool
    rescheduled: bool
    phone_no_1: str | None
    phone_no_2: str | None
    phone_no_3: str | None
    home_address: str | None
    promised_payment_date: date | None
    call_later_at: datetime | None
    postpone_count: int
    source: str
    risk_type: str | None
