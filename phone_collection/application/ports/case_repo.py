"""Port interface for collection case persistence."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from datetime import datetime

from phone_collection.domain.entities.assignment import AssignmentPair
from phone_collection.domain.entities.collection_case import CollectionCase


class CaseRepository(ABC):
    @abstractmethod
    async def get_eligible(self) -> list[CollectionCase]:
        """Cases that are not completed and not assigned, oldest first."""
        ...

    @abstractmethod
    async def assign_many(
        self,
        pairs: Sequence[AssignmentPair],
        assigned_by: int,
        assigned_at: datetime,
    ) -> None:
        """Stamp assigned_to/assigned_by/assigned_at/updated_by for every pair.

        Each case's fields are written in a single statement. Must raise
        ``CaseNotFoundError`` if any case is gone or already assigned; the
        caller rolls back.
        """
        ...
