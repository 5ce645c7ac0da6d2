"""ReportDataPreloader — bulk-fetch every lookup a report window needs.

Ids referenced by the cases are collected first, then each relation is
loaded with one query. The number of queries does not grow with the number
of rows.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from phone_collection.application.ports.report_repo import ReportDataRepository
from phone_collection.domain.entities.collection_case import CollectionCase
from phone_collection.domain.entities.lookup_bundle import LookupBundle

logger = logging.getLogger(__name__)

REMARK_DELIMITER = "; "
REASON_DELIMITER = ", "


def join_distinct(pairs: Iterable[tuple[int, str]], delimiter: str) -> dict[int, str]:
    """Group values by case id, drop duplicates (first occurrence wins), join."""
    grouped: dict[int, list[str]] = {}
    for case_id, value in pairs:
        if not value:
            continue
        values = grouped.setdefault(case_id, [])
        if value not in values:
            values.append(value)
    return {case_id: delimiter.join(values) for case_id, values in grouped.items()}


def _ids(values: Iterable[int | None]) -> set[int]:
    return {v for v in values if v is not None}


class ReportDataPreloader:
    def __init__(self, report_repo: ReportDataRepository):
        self._repo = report_repo

    async def preload(self, cases: Sequence[CollectionCase]) -> LookupBundle:
        bundle = LookupBundle()
        if not cases:
            return bundle

        case_ids = [c.id for c in cases]
        queries = 0

        bundle.latest_attempts = await self._repo.get_latest_attempts(case_ids)
        queries += 1
        attempts = bundle.latest_attempts.values()

        user_ids = _ids(
            uid
            for c in cases
            for uid in (c.assigned_to, c.assigned_by, c.last_attempt_by)
        )
        if user_ids:
            bundle.user_names = await self._repo.get_user_names(user_ids)
            queries += 1

        outcome_ids = _ids(a.outcome_id for a in attempts)
        if outcome_ids:
            bundle.outcome_names = await self._repo.get_outcome_names(outcome_ids)
            queries += 1

        reason_ids = _ids(a.reason_id for a in attempts)
        if reason_ids:
            bundle.reason_names = await self._repo.get_reason_names(reason_ids)
            queries += 1

        contract_ids = _ids(c.contract_id for c in cases)
        if contract_ids:
            bundle.postpone_counts = await self._repo.get_postpone_counts(contract_ids)
            queries += 1

        payment_ids = _ids(c.payment_id for c in cases)
        if payment_ids:
            bundle.latest_promises = await self._repo.get_latest_active_promises(payment_ids)
            queries += 1

        bundle.remarks = join_distinct(
            await self._repo.get_attempt_remarks(case_ids), REMARK_DELIMITER
        )
        bundle.reasons = join_distinct(
            await self._repo.get_attempt_reason_names(case_ids), REASON_DELIMITER
        )
        queries += 2

        logger.info("Preloaded lookups for %d cases with %d bulk queries", len(cases), queries)
        return bundle
