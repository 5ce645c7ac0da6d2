"""CSV report sink — writes report rows in the daily or detailed layout."""

from __future__ import annotations

import csv
import logging
from collections.abc import Callable, Sequence
from datetime import date, datetime
from pathlib import Path

from phone_collection.application.ports.report_sink import ReportSink
from phone_collection.domain.entities.report_row import ReportRow
from phone_collection.domain.value_objects.enums import ReportLayout

logger = logging.getLogger(__name__)

Column = tuple[str, Callable[[ReportRow], object]]


def _fmt(value: object) -> str:
    """Cell text: dates as ISO, local timestamps without offset, None as empty."""
    if value is None:
        return ""
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d %H:%M:%S")
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, bool):
        return "Yes" if value else "No"
    return str(value)


DAILY_COLUMNS: list[Column] = [
    ("SALES AREA", lambda r: r.sales_area),
    ("Customer", lambda r: r.customer_name),
    ("CONTRACT NO", lambda r: r.contract_no),
    ("CONTRACT DATE", lambda r: r.contract_date),
    ("Product Type", lambda r: r.product_type),
    ("PAYMENT NO", lambda r: r.payment_no),
    ("COLLECTION STATUS", lambda r: r.collection_status),
    ("DUE DATE", lambda r: r.due_date),
    ("Days Since Last Payment", lambda r: r.days_since_last_payment),
    ("P2P", lambda r: r.promised_payment_date),
    ("AMOUNT UNPAID", lambda r: r.amount_unpaid),
    ("ASSIGNED TO", lambda r: r.assigned_to_name),
    ("DT ASSIGNED", lambda r: r.assigned_at),
    ("PHONE 1", lambda r: r.phone_no_1),
    ("PHONE 2", lambda r: r.phone_no_2),
    ("PHONE 3", lambda r: r.phone_no_3),
    ("REMARK", lambda r: r.remarks),
    ("NOT PAYING REASONS", lambda r: r.reasons),
    ("Source", lambda r: r.source),
    ("RiskType", lambda r: r.risk_type),
]

DETAILED_COLUMNS: list[Column] = [
    ("Sales Area", lambda r: r.sales_area),
    ("Customer ID", lambda r: r.customer_id),
    ("Customer", lambda r: r.customer_name),
    ("Contract No", lambda r: r.contract_no),
    ("Contract Date", lambda r: r.contract_date),
    ("Product Type", lambda r: r.product_type),
    ("Payment No", lambda r: r.payment_no),
    ("Collection Status", lambda r: r.collection_status),
    ("Due Date", lambda r: r.due_date),
    ("Amount Unpaid", lambda r: r.amount_unpaid),
    ("DPD", lambda r: r.dpd),
    ("Assigned By", lambda r: r.assigned_by_name),
    ("Assigned To", lambda r: r.assigned_to_name),
    ("Assigned At", lambda r: r.assigned_at),
    ("Last Attempt By", lambda r: r.last_attempt_by_name),
    ("Call Started", lambda r: r.call_started),
    ("Call Ended", lambda r: r.call_ended),
    ("Duration (seconds)", lambda r: r.duration_seconds),
    ("Call Status", lambda r: r.call_status),
    ("Call Result", lambda r: r.call_result),
    ("Not Paying Reason", lambda r: r.not_paying_reason),
    ("Standard Remark", lambda r: r.standard_remark),
    ("Detailed Remark", lambda r: r.detailed_remark),
    ("Uncall", lambda r: r.uncalled),
    ("Reschedule", lambda r: r.rescheduled),
    ("Phone No 1", lambda r: r.phone_no_1),
    ("Phone No 2", lambda r: r.phone_no_2),
    ("Phone No 3", lambda r: r.phone_no_3),
    ("Home Address", lambda r: r.home_address),
    ("Promised Payment Date", lambda r: r.promised_payment_date),
    ("Call Later Date", lambda r: r.call_later_at),
    ("No Of Asking Postpone Payment", lambda r: r.postpone_count),
]

LAYOUTS: dict[ReportLayout, list[Column]] = {
    ReportLayout.DAILY: DAILY_COLUMNS,
    ReportLayout.DETAILED: DETAILED_COLUMNS,
}


def render_rows(layout: ReportLayout, rows: Sequence[ReportRow]) -> list[list[str]]:
    """Header row followed by one formatted row per report row."""
    columns = LAYOUTS[layout]
    table = [[heading for heading, _ in columns]]
    for row in rows:
        table.append([_fmt(getter(row)) for _, getter in columns])
    return table


class CsvReportSink(ReportSink):
    def __init__(self, output_dir: Path | str, encoding: str = "utf-8-sig"):
        # utf-8-sig so Excel picks up the encoding
        self._dir = Path(output_dir)
        self._encoding = encoding

    async def write(
        self, title: str, layout: ReportLayout, rows: Sequence[ReportRow]
    ) -> str:
        self._dir.mkdir(parents=True, exist_ok=True)
        path = self._dir / f"{title}.csv"
        with open(path, "w", encoding=self._encoding, newline="") as f:
            writer = csv.writer(f)
            writer.writerows(render_rows(layout, rows))
        logger.info("Wrote %d rows to %s", len(rows), path)
        return str(path)
