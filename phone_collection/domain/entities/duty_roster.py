"""Duty roster entry — one agent's working flag for one business date."""

from dataclasses import dataclass
from datetime import date, datetime


@dataclass
class DutyRosterEntry:
    id: int | None
    agent_id: int
    work_date: date
    is_working: bool
    created_by: int | None = None
    deleted_at: datetime | None = None

    def is_on_duty(self) -> bool:
        return self.is_working and self.deleted_at is None
