"""Report endpoints — denormalized rows for a business date or window."""

from __future__ import annotations

import dataclasses
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query

from phone_collection.application.use_cases.generate_report import (
    GenerateReportUseCase,
    ReportResult,
)
from phone_collection.config import settings
from phone_collection.domain.value_objects.business_time import today_in
from phone_collection.domain.value_objects.enums import ReportLayout
from phone_collection.infrastructure.api.dependencies import get_report_uc

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("/daily")
async def daily_report(
    report_date: date | None = Query(default=None, alias="date"),
    uc: GenerateReportUseCase = Depends(get_report_uc),
):
    """QC rows for one business date (defaults to today, business time)."""
    report_date = report_date or today_in(settings.business_timezone)
    result = await uc.execute(report_date, layout=ReportLayout.DAILY)
    return _result_to_dict(result)


@router.get("/window")
async def window_report(
    from_date: date = Query(alias="from"),
    to_date: date = Query(alias="to"),
    uc: GenerateReportUseCase = Depends(get_report_uc),
):
    """Detailed rows for cases assigned between two business dates, inclusive."""
    if to_date < from_date:
        raise HTTPException(status_code=400, detail="'to' must not be before 'from'")
    result = await uc.execute(from_date, to_date, layout=ReportLayout.DETAILED)
    return _result_to_dict(result)


def _result_to_dict(r: ReportResult) -> dict:
    return {
        "title": r.title,
        "layout": r.layout.value,
        "total_rows": len(r.rows),
        "rows": [dataclasses.asdict(row) for row in r.rows],
    }
