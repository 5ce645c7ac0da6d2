"""Port interface for the assignment run's unit of work."""

from abc import ABC, abstractmethod
from datetime import date


class AssignmentTransaction(ABC):
    @abstractmethod
    async def lock_assignment_date(self, assignment_date: date) -> None:
        """Block until this run is the only one holding *assignment_date*.

        The lock lives until ``commit`` or ``rollback``.
        """
        ...

    @abstractmethod
    async def commit(self) -> None:
        ...

    @abstractmethod
    async def rollback(self) -> None:
        ...
