"""Assign today's eligible cases to on-duty agents (cron entry point).

Usage:
    python -m phone_collection.tools.assign_daily
    python -m phone_collection.tools.assign_daily --date 2024-01-02 --operator 7
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from datetime import date

from phone_collection.adapters.persistence.database import async_session_factory, engine
from phone_collection.application.use_cases.assign_daily_cases import AssignmentRunResult
from phone_collection.config import settings
from phone_collection.domain.value_objects.business_time import today_in
from phone_collection.infrastructure.api.dependencies import build_assign_daily_uc

logging.basicConfig(level=logging.INFO, format="%(levelname)s | %(message)s")
logger = logging.getLogger(__name__)


async def run(assignment_date: date, operator_id: int | None) -> AssignmentRunResult:
    try:
        async with async_session_factory() as session:
            uc = build_assign_daily_uc(session)
            return await uc.execute(assignment_date, operator_id)
    finally:
        await engine.dispose()


def print_results(result: AssignmentRunResult) -> None:
    summary = result.summary
    if summary is None:
        return
    if result.skipped is not None:
        print(f"Nothing assigned for {result.assignment_date}: {result.skipped.value}")
        return

    names = {p.agent.id: p.agent.full_name for p in summary.pairs}
    print(f"\n{'='*60}")
    print(f"Assignment results for {result.assignment_date}")
    print(f"{'-'*60}")
    print(f"{'Agent ID':>10}  {'Agent Name':<32}  {'Cases':>6}")
    for agent_id, count in summary.per_agent_counts.items():
        print(f"{agent_id:>10}  {names.get(agent_id, ''):<32}  {count:>6}")
    print(f"{'-'*60}")
    print(f"Total assignments made: {summary.total_cases}")
    if summary.total_agents:
        print(f"Average cases per agent: {summary.total_cases / summary.total_agents:.1f}")
    print(f"{'='*60}\n")


def main():
    parser = argparse.ArgumentParser(
        description="Assign eligible collection cases to on-duty agents (round-robin)"
    )
    parser.add_argument(
        "--date", type=date.fromisoformat, default=None,
        help="Assignment date YYYY-MM-DD (default: today in business time)",
    )
    parser.add_argument(
        "--operator", type=int, default=None,
        help="User id recorded as assigned_by (default: ASSIGNMENT_OPERATOR_ID)",
    )
    args = parser.parse_args()

    assignment_date = args.date or today_in(settings.business_timezone)
    operator_id = args.operator if args.operator is not None else settings.assignment_operator_id

    result = asyncio.run(run(assignment_date, operator_id))
    if not result.ok:
        logger.error("Case assignment failed for %s: %s", assignment_date, result.error)
        sys.exit(1)
    print_results(result)


if __name__ == "__main__":
    main()
