"""AssignDailyCasesUseCase — daily run: roster → eligible cases → round-robin → write."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import date

from phone_collection.application.ports.assignment_tx import AssignmentTransaction
from phone_collection.application.ports.audit_sink import AuditSink
from phone_collection.application.ports.case_repo import CaseRepository
from phone_collection.application.use_cases.assignment_coordinator import (
    AssignmentTransactionCoordinator,
)
from phone_collection.application.use_cases.roster_availability import (
    RosterAvailabilityResolver,
)
from phone_collection.domain.entities.assignment import AssignmentSummary
from phone_collection.domain.errors import AssignmentTimeoutError
from phone_collection.domain.policies.round_robin import (
    distribute,
    order_agents,
    order_cases,
)
from phone_collection.domain.value_objects.enums import SkipReason

logger = logging.getLogger(__name__)


@dataclass
class AssignmentRunResult:
    """Outcome of one run: success (possibly a no-op) or failure, never partial."""

    assignment_date: date
    summary: AssignmentSummary | None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def skipped(self) -> SkipReason | None:
        return self.summary.skipped if self.summary else None


class AssignDailyCasesUseCase:
    """Distributes every eligible case across the agents on duty for a date."""

    def __init__(
        self,
        roster: RosterAvailabilityResolver,
        case_repo: CaseRepository,
        coordinator: AssignmentTransactionCoordinator,
        transaction: AssignmentTransaction,
        audit: AuditSink,
        timeout_seconds: float = 600.0,
    ):
        self._roster = roster
        self._cases = case_repo
        self._coordinator = coordinator
        self._tx = transaction
        self._audit = audit
        self._timeout = timeout_seconds

    async def execute(
        self, assignment_date: date, operator_id: int | None
    ) -> AssignmentRunResult:
        """Run the assignment for *assignment_date*.

        Pipeline:
        1. Resolve the operator (fails before any lock or write)
        2. Lock the assignment date
        3. Load on-duty agents and eligible cases, fix their order
        4. Round-robin mapping
        5. Write all assignments and commit
        """
        logger.info("Starting case assignment for %s (operator=%s)", assignment_date, operator_id)

        try:
            operator = await self._coordinator.resolve_operator(operator_id)
        except Exception as e:
            logger.error("Assignment for %s aborted: %s", assignment_date, e)
            return AssignmentRunResult(assignment_date=assignment_date, summary=None, error=str(e))

        try:
            summary = await asyncio.wait_for(
                self._run_locked(assignment_date, operator.id),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError:
            await self._safe_rollback(assignment_date)
            err = AssignmentTimeoutError(assignment_date, self._timeout)
            logger.error("%s; rolled back", err)
            return AssignmentRunResult(assignment_date=assignment_date, summary=None, error=str(err))
        except Exception as e:
            await self._safe_rollback(assignment_date)
            logger.exception(
                "Case assignment failed for %s (operator=%s)", assignment_date, operator.id
            )
            return AssignmentRunResult(assignment_date=assignment_date, summary=None, error=str(e))

        await self._audit.publish(summary)
        if summary.skipped is None:
            logger.info(
                "Case assignment complete for %s: %d cases across %d agents",
                assignment_date, summary.total_cases, summary.total_agents,
            )
        else:
            logger.info("Case assignment for %s skipped: %s", assignment_date, summary.skipped.value)
        return AssignmentRunResult(assignment_date=assignment_date, summary=summary)

    async def _safe_rollback(self, assignment_date: date) -> None:
        # The connection may already be unusable after a cancelled statement.
        try:
            await self._tx.rollback()
        except Exception:
            logger.exception("Rollback failed for assignment on %s", assignment_date)

    async def _run_locked(self, assignment_date: date, operator_id: int) -> AssignmentSummary:
        await self._tx.lock_assignment_date(assignment_date)

        agents = order_agents(await self._roster.available_agents(assignment_date))
        if not agents:
            logger.warning("No agents available for assignment on %s", assignment_date)
            await self._tx.rollback()
            return AssignmentSummary(
                assignment_date=assignment_date,
                assigned_by=operator_id,
                total_agents=0,
                skipped=SkipReason.NO_AGENTS,
            )
        logger.info("Found %d available agents for %s", len(agents), assignment_date)

        cases = order_cases(await self._cases.get_eligible())
        if not cases:
            logger.warning("No eligible cases to assign on %s", assignment_date)
            await self._tx.rollback()
            return AssignmentSummary(
                assignment_date=assignment_date,
                assigned_by=operator_id,
                total_agents=len(agents),
                per_agent_counts={a.id: 0 for a in agents},
                skipped=SkipReason.NO_ELIGIBLE_CASES,
            )
        logger.info("Found %d eligible cases for %s", len(cases), assignment_date)

        pairs = distribute(cases, agents)
        return await self._coordinator.apply(pairs, operator_id, assignment_date, agents=agents)
