"""Exception taxonomy for the assignment and reporting engine."""

from __future__ import annotations

from datetime import date


class CollectionEngineError(Exception):
    """Base class for engine errors."""


class OperatorNotFoundError(CollectionEngineError):
    """The assigning operator is missing or does not resolve to a user."""

    def __init__(self, operator_id: int | None):
        self.operator_id = operator_id
        if operator_id is None:
            msg = "No operator identity supplied for assignment"
        else:
            msg = f"Operator {operator_id} does not resolve to a known user"
        super().__init__(msg)


class CaseNotFoundError(CollectionEngineError):
    """Cases vanished or stopped being eligible between read and write."""

    def __init__(self, case_ids: list[int]):
        self.case_ids = case_ids
        super().__init__(f"Cases missing or no longer eligible at write time: {case_ids}")


class AssignmentTimeoutError(CollectionEngineError):
    def __init__(self, assignment_date: date, timeout_seconds: float):
        self.assignment_date = assignment_date
        self.timeout_seconds = timeout_seconds
        super().__init__(
            f"Assignment run for {assignment_date} exceeded {timeout_seconds}s"
        )
