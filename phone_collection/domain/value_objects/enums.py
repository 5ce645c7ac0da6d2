"""Domain enums — pure Python, no external dependencies."""

from enum import Enum


class CaseStatus(str, Enum):
    PENDING = "pending"
    ASSIGNED = "assigned"
    REASSIGNED = "reassigned"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


class SegmentType(str, Enum):
    PRE_DUE = "pre-due"
    PAST_DUE = "past-due"
    DSLP = "dslp"


class SkipReason(str, Enum):
    NO_AGENTS = "no_agents"
    NO_ELIGIBLE_CASES = "no_eligible_cases"


class ReportLayout(str, Enum):
    DAILY = "daily"
    DETAILED = "detailed"
