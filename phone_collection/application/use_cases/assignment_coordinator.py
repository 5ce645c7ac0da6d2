"""AssignmentTransactionCoordinator — writes a case→agent mapping atomically."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from datetime import date, datetime, timezone

from phone_collection.application.ports.assignment_tx import AssignmentTransaction
from phone_collection.application.ports.case_repo import CaseRepository
from phone_collection.application.ports.user_repo import UserRepository
from phone_collection.domain.entities.agent import Agent
from phone_collection.domain.entities.assignment import AssignmentPair, AssignmentSummary
from phone_collection.domain.errors import OperatorNotFoundError
from phone_collection.domain.policies.round_robin import count_per_agent

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AssignmentTransactionCoordinator:
    def __init__(
        self,
        case_repo: CaseRepository,
        user_repo: UserRepository,
        transaction: AssignmentTransaction,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._cases = case_repo
        self._users = user_repo
        self._tx = transaction
        self._clock = clock

    async def resolve_operator(self, operator_id: int | None) -> Agent:
        if operator_id is None:
            raise OperatorNotFoundError(None)
        operator = await self._users.get_by_id(operator_id)
        if operator is None:
            raise OperatorNotFoundError(operator_id)
        return operator

    async def apply(
        self,
        pairs: Sequence[AssignmentPair],
        assigned_by: int | None,
        assignment_date: date,
        agents: Sequence[Agent] | None = None,
    ) -> AssignmentSummary:
        """Persist *pairs* in one transaction and summarize the run.

        The operator is resolved before anything is written. Any failure
        while writing rolls the whole batch back and re-raises.

        Args:
            pairs: output of ``distribute``.
            assigned_by: operator id stamped on every case.
            assignment_date: business date of the run.
            agents: full roster, so agents that got nothing still show a 0.
        """
        operator = await self.resolve_operator(assigned_by)
        roster = list(agents) if agents is not None else _agents_of(pairs)
        assigned_at = self._clock()

        try:
            await self._cases.assign_many(pairs, operator.id, assigned_at)
            await self._tx.commit()
        except Exception:
            logger.error(
                "Rolling back assignment for %s: %d pairs, operator %s",
                assignment_date, len(pairs), operator.id,
            )
            await self._tx.rollback()
            raise

        return AssignmentSummary(
            assignment_date=assignment_date,
            assigned_by=operator.id,
            total_agents=len(roster),
            pairs=list(pairs),
            per_agent_counts=count_per_agent(pairs, roster),
        )


def _agents_of(pairs: Sequence[AssignmentPair]) -> list[Agent]:
    seen: dict[int, Agent] = {}
    for pair in pairs:
        seen.setdefault(pair.agent.id, pair.agent)
    return list(seen.values())
