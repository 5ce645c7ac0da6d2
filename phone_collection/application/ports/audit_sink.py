"""Port interface for assignment audit records."""

from abc import ABC, abstractmethod

from phone_collection.domain.entities.assignment import AssignmentSummary


class AuditSink(ABC):
    @abstractmethod
    async def publish(self, summary: AssignmentSummary) -> None:
        ...
