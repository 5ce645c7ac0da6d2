"""FastAPI dependency injection — wires adapters into use cases."""

from __future__ import annotations

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from phone_collection.adapters.audit.logging_sink import LoggingAuditSink
from phone_collection.adapters.persistence.database import get_session
from phone_collection.adapters.persistence.repositories import (
    SqlAssignmentTransaction,
    SqlCaseRepository,
    SqlReportDataRepository,
    SqlRosterRepository,
    SqlUserRepository,
)
from phone_collection.application.ports.report_sink import ReportSink
from phone_collection.application.use_cases.assign_daily_cases import AssignDailyCasesUseCase
from phone_collection.application.use_cases.assignment_coordinator import (
    AssignmentTransactionCoordinator,
)
from phone_collection.application.use_cases.generate_report import GenerateReportUseCase
from phone_collection.application.use_cases.roster_availability import (
    RosterAvailabilityResolver,
)
from phone_collection.config import settings
from phone_collection.domain.policies.report_mapping import ReportRowMapper

# Stateless singletons
_audit_sink = LoggingAuditSink()
_row_mapper = ReportRowMapper(
    tz_name=settings.business_timezone,
    system_user_id=settings.system_user_id,
    system_label=settings.system_user_label,
)


def build_assign_daily_uc(session: AsyncSession) -> AssignDailyCasesUseCase:
    """All repositories share *session*, so the run is one transaction."""
    users = SqlUserRepository(session)
    cases = SqlCaseRepository(session)
    tx = SqlAssignmentTransaction(session)
    return AssignDailyCasesUseCase(
        roster=RosterAvailabilityResolver(SqlRosterRepository(session), users),
        case_repo=cases,
        coordinator=AssignmentTransactionCoordinator(cases, users, tx),
        transaction=tx,
        audit=_audit_sink,
        timeout_seconds=settings.assignment_timeout_seconds,
    )


def build_report_uc(
    session: AsyncSession, sink: ReportSink | None = None
) -> GenerateReportUseCase:
    return GenerateReportUseCase(
        report_repo=SqlReportDataRepository(session),
        mapper=_row_mapper,
        tz_name=settings.business_timezone,
        sink=sink,
    )


def get_assign_daily_uc(
    session: AsyncSession = Depends(get_session),
) -> AssignDailyCasesUseCase:
    return build_assign_daily_uc(session)


def get_report_uc(
    session: AsyncSession = Depends(get_session),
) -> GenerateReportUseCase:
    return build_report_uc(session)
