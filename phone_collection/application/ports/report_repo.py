"""Port interface for bulk report lookups.

Every method is a single bulk query keyed by the ids passed in.
"""

from abc import ABC, abstractmethod
from collections.abc import Collection
from datetime import datetime

from phone_collection.domain.entities.call_attempt import CallAttempt
from phone_collection.domain.entities.collection_case import CollectionCase
from phone_collection.domain.entities.promise import PromiseRecord


class ReportDataRepository(ABC):
    @abstractmethod
    async def get_cases_assigned_between(
        self, start: datetime, end: datetime
    ) -> list[CollectionCase]:
        """Non-deleted cases with start <= assigned_at < end (UTC), ordered by assigned_at."""
        ...

    @abstractmethod
    async def get_latest_attempts(self, case_ids: Collection[int]) -> dict[int, CallAttempt]:
        """Latest attempt per case: max started_at, then max attempt id."""
        ...

    @abstractmethod
    async def get_outcome_names(self, outcome_ids: Collection[int]) -> dict[int, str]:
        ...

    @abstractmethod
    async def get_reason_names(self, reason_ids: Collection[int]) -> dict[int, str]:
        ...

    @abstractmethod
    async def get_user_names(self, user_ids: Collection[int]) -> dict[int, str]:
        ...

    @abstractmethod
    async def get_postpone_counts(self, contract_ids: Collection[int]) -> dict[int, int]:
        ...

    @abstractmethod
    async def get_attempt_remarks(self, case_ids: Collection[int]) -> list[tuple[int, str]]:
        """(case_id, remark) for non-deleted, non-empty remarks, in attempt order."""
        ...

    @abstractmethod
    async def get_attempt_reason_names(
        self, case_ids: Collection[int]
    ) -> list[tuple[int, str]]:
        """(case_id, reason name) for non-deleted attempts, in attempt order."""
        ...

    @abstractmethod
    async def get_latest_active_promises(
        self, payment_ids: Collection[int]
    ) -> dict[int, PromiseRecord]:
        ...
