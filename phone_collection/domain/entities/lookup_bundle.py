"""Lookup bundle — id-keyed tables preloaded for one report window."""

from dataclasses import dataclass, field

from phone_collection.domain.entities.call_attempt import CallAttempt
from phone_collection.domain.entities.promise import PromiseRecord


@dataclass
class LookupBundle:
    latest_attempts: dict[int, CallAttempt] = field(default_factory=dict)
    outcome_names: dict[int, str] = field(default_factory=dict)
    reason_names: dict[int, str] = field(default_factory=dict)
    user_names: dict[int, str] = field(default_factory=dict)
    postpone_counts: dict[int, int] = field(default_factory=dict)
    remarks: dict[int, str] = field(default_factory=dict)
    reasons: dict[int, str] = field(default_factory=dict)
    latest_promises: dict[int, PromiseRecord] = field(default_factory=dict)
