"""Port interface for the identity provider."""

from abc import ABC, abstractmethod
from collections.abc import Collection

from phone_collection.domain.entities.agent import Agent


class UserRepository(ABC):
    @abstractmethod
    async def get_by_id(self, user_id: int) -> Agent | None:
        ...

    @abstractmethod
    async def get_many(self, user_ids: Collection[int]) -> list[Agent]:
        ...
