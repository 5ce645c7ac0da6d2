"""GenerateReportUseCase — cases assigned in a business-date window → report rows."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date

from phone_collection.application.ports.report_repo import ReportDataRepository
from phone_collection.application.ports.report_sink import ReportSink
from phone_collection.application.use_cases.report_preloader import ReportDataPreloader
from phone_collection.domain.entities.report_row import ReportRow
from phone_collection.domain.policies.report_mapping import ReportRowMapper
from phone_collection.domain.value_objects.business_time import window_bounds
from phone_collection.domain.value_objects.enums import ReportLayout

logger = logging.getLogger(__name__)


@dataclass
class ReportResult:
    title: str
    layout: ReportLayout
    rows: list[ReportRow] = field(default_factory=list)
    location: str | None = None


def report_title(start: date, end: date) -> str:
    if start == end:
        return f"Phone_Collection_Report_{start.isoformat()}"
    return f"Phone_Collection_Report_{start.isoformat()}_{end.isoformat()}"


class GenerateReportUseCase:
    def __init__(
        self,
        report_repo: ReportDataRepository,
        mapper: ReportRowMapper,
        tz_name: str,
        sink: ReportSink | None = None,
    ):
        self._repo = report_repo
        self._preloader = ReportDataPreloader(report_repo)
        self._mapper = mapper
        self._tz = tz_name
        self._sink = sink

    async def execute(
        self,
        start: date,
        end: date | None = None,
        layout: ReportLayout = ReportLayout.DAILY,
    ) -> ReportResult:
        """Build rows for cases whose local assignment date is in [start, end].

        Rows are handed to the sink when one is configured; otherwise they
        are only returned.
        """
        end = end or start
        lower, upper = window_bounds(start, end, self._tz)
        cases = await self._repo.get_cases_assigned_between(lower, upper)
        logger.info(
            "Report %s..%s (%s): %d cases assigned between %s and %s UTC",
            start, end, self._tz, len(cases), lower.isoformat(), upper.isoformat(),
        )

        bundle = await self._preloader.preload(cases)
        rows = [self._mapper.map(case, bundle) for case in cases]

        result = ReportResult(title=report_title(start, end), layout=layout, rows=rows)
        if self._sink is not None:
            result.location = await self._sink.write(result.title, layout, rows)
            logger.info("Report %s written to %s (%d rows)", result.title, result.location, len(rows))
        return result
