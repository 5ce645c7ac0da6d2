"""Assignment results — the case→agent mapping and its run summary."""

from dataclasses import dataclass, field
from datetime import date

from phone_collection.domain.entities.agent import Agent
from phone_collection.domain.entities.collection_case import CollectionCase
from phone_collection.domain.value_objects.enums import SkipReason


@dataclass(frozen=True)
class AssignmentPair:
    case: CollectionCase
    agent: Agent
    sequence: int


@dataclass
class AssignmentSummary:
    assignment_date: date
    assigned_by: int | None
    total_agents: int
    pairs: list[AssignmentPair] = field(default_factory=list)
    per_agent_counts: dict[int, int] = field(default_factory=dict)
    skipped: SkipReason | None = None

    @property
    def total_cases(self) -> int:
        return len(self.pairs)

    def to_audit_record(self) -> dict:
        return {
            "assignmentDate": self.assignment_date.isoformat(),
            "totalCases": self.total_cases,
            "totalAgents": self.total_agents,
            "assignedBy": self.assigned_by,
            "perAgentCounts": dict(self.per_agent_counts),
        }
