"""RosterAvailabilityResolver — on-duty agents for a business date."""

from __future__ import annotations

import logging
from datetime import date

from phone_collection.application.ports.roster_repo import RosterRepository
from phone_collection.application.ports.user_repo import UserRepository
from phone_collection.domain.entities.agent import Agent
from phone_collection.domain.policies.roster import on_duty_agent_ids, select_available

logger = logging.getLogger(__name__)


class RosterAvailabilityResolver:
    def __init__(self, roster_repo: RosterRepository, user_repo: UserRepository):
        self._roster = roster_repo
        self._users = user_repo

    async def available_agents(self, work_date: date) -> list[Agent]:
        """Working, active agents for *work_date*, ascending by id.

        An empty list means nobody is rostered; callers treat it as a no-op.
        """
        entries = await self._roster.get_entries_for_date(work_date)
        agent_ids = on_duty_agent_ids(entries, work_date)
        if not agent_ids:
            logger.info("No roster entries marked working for %s", work_date)
            return []

        agents = select_available(agent_ids, await self._users.get_many(agent_ids))
        if len(agents) < len(agent_ids):
            logger.warning(
                "Roster %s: %d of %d rostered agents inactive or unknown",
                work_date, len(agent_ids) - len(agents), len(agent_ids),
            )
        return agents
