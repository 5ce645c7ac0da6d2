"""Port interface for duty roster lookups."""

from abc import ABC, abstractmethod
from datetime import date

from phone_collection.domain.entities.duty_roster import DutyRosterEntry


class RosterRepository(ABC):
    @abstractmethod
    async def get_entries_for_date(self, work_date: date) -> list[DutyRosterEntry]:
        """Non-deleted roster entries for *work_date*, in no particular order."""
        ...
