"""Generate the phone collection report file for a business date.

Usage:
    python -m phone_collection.tools.send_daily_report
    python -m phone_collection.tools.send_daily_report --date 2024-01-02
    python -m phone_collection.tools.send_daily_report --date 2024-01-01 --to 2024-01-07 --layout detailed

Delivery of the written file is left to the caller.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from datetime import date, timedelta

from phone_collection.adapters.persistence.database import async_session_factory, engine
from phone_collection.adapters.report.csv_writer import CsvReportSink
from phone_collection.application.use_cases.generate_report import ReportResult
from phone_collection.config import settings
from phone_collection.domain.value_objects.business_time import today_in
from phone_collection.domain.value_objects.enums import ReportLayout
from phone_collection.infrastructure.api.dependencies import build_report_uc

logging.basicConfig(level=logging.INFO, format="%(levelname)s | %(message)s")
logger = logging.getLogger(__name__)


async def run(
    start: date, end: date, layout: ReportLayout, output_dir: str
) -> ReportResult:
    try:
        async with async_session_factory() as session:
            uc = build_report_uc(session, sink=CsvReportSink(output_dir))
            return await uc.execute(start, end, layout=layout)
    finally:
        await engine.dispose()


def main():
    parser = argparse.ArgumentParser(description="Write the phone collection report")
    parser.add_argument(
        "--date", type=date.fromisoformat, default=None,
        help="Report date YYYY-MM-DD (default: yesterday in business time)",
    )
    parser.add_argument(
        "--to", type=date.fromisoformat, default=None,
        help="Last date of a multi-day window (default: same as --date)",
    )
    parser.add_argument(
        "--layout", choices=[layout.value for layout in ReportLayout], default=ReportLayout.DAILY.value,
    )
    parser.add_argument("--output-dir", default=settings.report_output_dir)
    args = parser.parse_args()

    start = args.date or today_in(settings.business_timezone) - timedelta(days=1)
    end = args.to or start
    if end < start:
        logger.error("--to %s is before --date %s", end, start)
        sys.exit(1)

    try:
        result = asyncio.run(run(start, end, ReportLayout(args.layout), args.output_dir))
    except Exception:
        logger.exception("Failed to generate phone collection report for %s..%s", start, end)
        sys.exit(1)
    print(f"Report written: {result.location} ({len(result.rows)} rows)")


if __name__ == "__main__":
    main()
