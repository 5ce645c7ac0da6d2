"""Collection case — one overdue payment to be worked by an agent."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from phone_collection.domain.value_objects.enums import CaseStatus, SegmentType


@dataclass
class CollectionCase:
    id: int
    created_at: datetime
    # Statuses outside CaseStatus are kept as the raw column value
    status: CaseStatus | str = CaseStatus.PENDING
    assigned_to: int | None = None
    assigned_by: int | None = None
    assigned_at: datetime | None = None
    updated_by: int | None = None

    # Contract / payment references, reporting only
    contract_id: int | None = None
    payment_id: int | None = None
    contract_no: str | None = None
    contract_date: date | None = None
    payment_no: str | None = None
    segment_type: str | None = None
    customer_id: str | None = None
    customer_name: str | None = None
    sales_area: str | None = None
    product_type: str | None = None
    due_date: date | None = None
    days_since_last_payment: int | None = None
    days_overdue: int | None = None
    amount_unpaid: Decimal | None = None
    phone_no_1: str | None = None
    phone_no_2: str | None = None
    phone_no_3: str | None = None
    home_address: str | None = None
    risk_type: str | None = None
    reschedule: bool = False
    last_attempt_at: datetime | None = None
    last_attempt_by: int | None = None

    def is_eligible(self) -> bool:
        """Open for distribution: not completed and nobody holds it yet."""
        return self.status != CaseStatus.COMPLETED and self.assigned_to is None

    def is_dslp(self) -> bool:
        return self.segment_type == SegmentType.DSLP.value

    def was_called(self) -> bool:
        return self.last_attempt_at is not None
