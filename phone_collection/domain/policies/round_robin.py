"""RoundRobinPolicy — deterministic fair distribution of cases to agents."""

from __future__ import annotations

from collections.abc import Sequence

from phone_collection.domain.entities.agent import Agent
from phone_collection.domain.entities.assignment import AssignmentPair
from phone_collection.domain.entities.collection_case import CollectionCase


def order_cases(cases: Sequence[CollectionCase]) -> list[CollectionCase]:
    """Oldest case first; id breaks ties between identical timestamps."""
    return sorted(cases, key=lambda c: (c.created_at, c.id))


def order_agents(agents: Sequence[Agent]) -> list[Agent]:
    return sorted(agents, key=lambda a: a.id)


def distribute(
    cases: Sequence[CollectionCase], agents: Sequence[Agent]
) -> list[AssignmentPair]:
    """Pair every case with ``agents[i mod len(agents)]`` in input order.

    Both sequences are taken as given: callers fix the case order
    (creation time ascending) and the agent order (id ascending) once,
    before calling. The result depends on nothing else, so two calls with
    the same inputs yield the same mapping and per-agent counts never
    differ by more than one.

    Args:
        cases: eligible cases, already ordered.
        agents: on-duty agents, already ordered.

    Returns:
        One ``AssignmentPair`` per case, in case order. Empty when there
        are no agents.
    """
    if not agents:
        return []

    pairs = []
    cursor = 0
    for case in cases:
        agent = agents[cursor % len(agents)]
        pairs.append(AssignmentPair(case=case, agent=agent, sequence=cursor + 1))
        cursor += 1
    return pairs


def count_per_agent(
    pairs: Sequence[AssignmentPair], agents: Sequence[Agent]
) -> dict[int, int]:
    """Assignment count per agent id; rostered agents with nothing get 0."""
    counts = {agent.id: 0 for agent in agents}
    for pair in pairs:
        counts[pair.agent.id] = counts.get(pair.agent.id, 0) + 1
    return counts
