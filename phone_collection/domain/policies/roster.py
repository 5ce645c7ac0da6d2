"""RosterPolicy — which rostered agents may receive work on a date."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date

from phone_collection.domain.entities.agent import Agent
from phone_collection.domain.entities.duty_roster import DutyRosterEntry


def on_duty_agent_ids(entries: Iterable[DutyRosterEntry], work_date: date) -> list[int]:
    """Distinct ids of agents working on *work_date*, ascending."""
    ids = {
        e.agent_id
        for e in entries
        if e.work_date == work_date and e.is_on_duty()
    }
    return sorted(ids)


def select_available(agent_ids: Sequence[int], agents: Iterable[Agent]) -> list[Agent]:
    """Keep active agents among *agent_ids*, ordered by id.

    Ids without a matching agent record are dropped.
    """
    wanted = set(agent_ids)
    by_id = {a.id: a for a in agents if a.id in wanted and a.is_active}
    return [by_id[i] for i in sorted(by_id)]
