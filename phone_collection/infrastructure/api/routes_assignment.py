"""Assignment endpoints — on-demand trigger for the daily round-robin run."""

from __future__ import annotations

import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from phone_collection.application.use_cases.assign_daily_cases import (
    AssignDailyCasesUseCase,
    AssignmentRunResult,
)
from phone_collection.config import settings
from phone_collection.domain.value_objects.business_time import today_in
from phone_collection.infrastructure.api.dependencies import get_assign_daily_uc

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/assignments", tags=["assignments"])


class AssignmentRunRequest(BaseModel):
    assignment_date: date | None = None
    operator_id: int | None = None


@router.post("/run")
async def run_assignment(
    body: AssignmentRunRequest,
    uc: AssignDailyCasesUseCase = Depends(get_assign_daily_uc),
):
    """Distribute eligible cases across agents on duty for the date."""
    assignment_date = body.assignment_date or today_in(settings.business_timezone)
    operator_id = body.operator_id if body.operator_id is not None else settings.assignment_operator_id

    result = await uc.execute(assignment_date, operator_id)
    if not result.ok:
        raise HTTPException(status_code=500, detail=result.error)
    return _result_to_dict(result)


def _result_to_dict(r: AssignmentRunResult) -> dict:
    summary = r.summary
    return {
        "status": "ok",
        "assignment_date": r.assignment_date.isoformat(),
        "skipped": r.skipped.value if r.skipped else None,
        "total_cases": summary.total_cases,
        "total_agents": summary.total_agents,
        "assigned_by": summary.assigned_by,
        "per_agent_counts": summary.per_agent_counts,
        "assignments": [
            {
                "sequence": p.sequence,
                "case_id": p.case.id,
                "agent_id": p.agent.id,
                "agent_name": p.agent.full_name,
            }
            for p in summary.pairs
        ],
    }
