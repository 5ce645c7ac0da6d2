"""Call attempt — one logged contact against a collection case."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class CallAttempt:
    id: int
    case_id: int
    started_at: datetime | str | None
    ended_at: datetime | str | None = None
    call_status: str | None = None
    outcome_id: int | None = None
    reason_id: int | None = None
    remark: str | None = None
    standard_remark: str | None = None
    asked_to_postpone: bool = False
    deleted_at: datetime | None = None
