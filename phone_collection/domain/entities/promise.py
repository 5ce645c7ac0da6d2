"""Promise-to-pay record, append-only per payment."""

from dataclasses import dataclass
from datetime import date, datetime


@dataclass
class PromiseRecord:
    id: int
    payment_id: int
    created_at: datetime
    is_active: bool = True
    promised_payment_date: date | None = None
    call_later_at: datetime | None = None
