"""SQLAlchemy repository implementations."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Collection, Sequence
from datetime import date, datetime

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from phone_collection.adapters.persistence.models import (
    CallAttemptModel,
    CaseResultModel,
    CollectionCaseModel,
    DutyRosterModel,
    PromiseHistoryModel,
    ReasonModel,
    UserModel,
)
from phone_collection.application.ports.assignment_tx import AssignmentTransaction
from phone_collection.application.ports.case_repo import CaseRepository
from phone_collection.application.ports.report_repo import ReportDataRepository
from phone_collection.application.ports.roster_repo import RosterRepository
from phone_collection.application.ports.user_repo import UserRepository
from phone_collection.domain.entities.agent import Agent
from phone_collection.domain.entities.assignment import AssignmentPair
from phone_collection.domain.entities.call_attempt import CallAttempt
from phone_collection.domain.entities.collection_case import CollectionCase
from phone_collection.domain.entities.duty_roster import DutyRosterEntry
from phone_collection.domain.entities.promise import PromiseRecord
from phone_collection.domain.errors import CaseNotFoundError
from phone_collection.domain.value_objects.enums import CaseStatus

# First key of the two-int advisory lock; the second is the date as YYYYMMDD.
ASSIGNMENT_LOCK_NAMESPACE = 7301

# ─── Mappers ─────────────────────────────────────────────────────────


def _user_to_domain(m: UserModel) -> Agent:
    return Agent(id=m.id, full_name=m.full_name, is_active=m.is_active)


def _roster_to_domain(m: DutyRosterModel) -> DutyRosterEntry:
    return DutyRosterEntry(
        id=m.id,
        agent_id=m.user_id,
        work_date=m.work_date,
        is_working=m.is_working,
        created_by=m.created_by,
        deleted_at=m.deleted_at,
    )


def _status_to_domain(raw: str) -> CaseStatus | str:
    if raw in CaseStatus._value2member_map_:
        return CaseStatus(raw)
    return raw


def _case_to_domain(m: CollectionCaseModel) -> CollectionCase:
    return CollectionCase(
        id=m.id,
        created_at=m.created_at,
        status=_status_to_domain(m.status),
        assigned_to=m.assigned_to,
        assigned_by=m.assigned_by,
        assigned_at=m.assigned_at,
        updated_by=m.updated_by,
        contract_id=m.contract_id,
        payment_id=m.payment_id,
        contract_no=m.contract_no,
        contract_date=m.contract_date,
        payment_no=m.payment_no,
        segment_type=m.segment_type,
        customer_id=m.customer_id,
        customer_name=m.customer_name,
        sales_area=m.sales_area,
        product_type=m.product_type,
        due_date=m.due_date,
        days_since_last_payment=m.days_since_last_payment,
        days_overdue=m.days_overdue,
        amount_unpaid=m.amount_unpaid,
        phone_no_1=m.phone_no_1,
        phone_no_2=m.phone_no_2,
        phone_no_3=m.phone_no_3,
        home_address=m.home_address,
        risk_type=m.risk_type,
        reschedule=m.reschedule,
        last_attempt_at=m.last_attempt_at,
        last_attempt_by=m.last_attempt_by,
    )


def _attempt_to_domain(m: CallAttemptModel) -> CallAttempt:
    return CallAttempt(
        id=m.id,
        case_id=m.case_id,
        started_at=m.started_at,
        ended_at=m.ended_at,
        call_status=m.call_status,
        outcome_id=m.outcome_id,
        reason_id=m.reason_id,
        remark=m.remark,
        standard_remark=m.standard_remark,
        asked_to_postpone=m.asked_to_postpone,
        deleted_at=m.deleted_at,
    )


def _promise_to_domain(m: PromiseHistoryModel) -> PromiseRecord:
    return PromiseRecord(
        id=m.id,
        payment_id=m.payment_id,
        created_at=m.created_at,
        is_active=m.is_active,
        promised_payment_date=m.promised_payment_date,
        call_later_at=m.call_later_at,
    )


def _eligible_clause():
    return (
        CollectionCaseModel.status != CaseStatus.COMPLETED.value,
        CollectionCaseModel.assigned_to.is_(None),
        CollectionCaseModel.deleted_at.is_(None),
    )


# ─── Repositories ────────────────────────────────────────────────────


class SqlUserRepository(UserRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def get_by_id(self, user_id: int) -> Agent | None:
        m = await self._s.get(UserModel, user_id)
        return _user_to_domain(m) if m else None

    async def get_many(self, user_ids: Collection[int]) -> list[Agent]:
        if not user_ids:
            return []
        result = await self._s.execute(
            select(UserModel).where(UserModel.id.in_(list(user_ids))).order_by(UserModel.id)
        )
        return [_user_to_domain(m) for m in result.scalars()]


class SqlRosterRepository(RosterRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def get_entries_for_date(self, work_date: date) -> list[DutyRosterEntry]:
        result = await self._s.execute(
            select(DutyRosterModel).where(
                DutyRosterModel.work_date == work_date,
                DutyRosterModel.deleted_at.is_(None),
            )
        )
        return [_roster_to_domain(m) for m in result.scalars()]


class SqlCaseRepository(CaseRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def get_eligible(self) -> list[CollectionCase]:
        result = await self._s.execute(
            select(CollectionCaseModel)
            .where(*_eligible_clause())
            .order_by(CollectionCaseModel.created_at, CollectionCaseModel.id)
        )
        return [_case_to_domain(m) for m in result.scalars()]

    async def assign_many(
        self,
        pairs: Sequence[AssignmentPair],
        assigned_by: int,
        assigned_at: datetime,
    ) -> None:
        by_agent: dict[int, list[int]] = defaultdict(list)
        for pair in pairs:
            by_agent[pair.agent.id].append(pair.case.id)

        missing: list[int] = []
        for agent_id, case_ids in by_agent.items():
            # One statement per agent; each row gets all fields at once.
            result = await self._s.execute(
                update(CollectionCaseModel)
                .where(CollectionCaseModel.id.in_(case_ids), *_eligible_clause())
                .values(
                    assigned_to=agent_id,
                    assigned_by=assigned_by,
                    assigned_at=assigned_at,
                    updated_by=assigned_by,
                    status=CaseStatus.ASSIGNED.value,
                )
                .returning(CollectionCaseModel.id)
                .execution_options(synchronize_session=False)
            )
            updated = set(result.scalars())
            missing.extend(cid for cid in case_ids if cid not in updated)

        if missing:
            raise CaseNotFoundError(sorted(missing))
        await self._s.flush()


class SqlAssignmentTransaction(AssignmentTransaction):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def lock_assignment_date(self, assignment_date: date) -> None:
        day_key = int(assignment_date.strftime("%Y%m%d"))
        await self._s.execute(
            select(func.pg_advisory_xact_lock(ASSIGNMENT_LOCK_NAMESPACE, day_key))
        )

    async def commit(self) -> None:
        await self._s.commit()

    async def rollback(self) -> None:
        await self._s.rollback()


class SqlReportDataRepository(ReportDataRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def get_cases_assigned_between(
        self, start: datetime, end: datetime
    ) -> list[CollectionCase]:
        result = await self._s.execute(
            select(CollectionCaseModel)
            .where(
                CollectionCaseModel.deleted_at.is_(None),
                CollectionCaseModel.assigned_at.is_not(None),
                CollectionCaseModel.assigned_at >= start,
                CollectionCaseModel.assigned_at < end,
            )
            .order_by(CollectionCaseModel.assigned_at, CollectionCaseModel.id)
        )
        return [_case_to_domain(m) for m in result.scalars()]

    async def get_latest_attempts(self, case_ids: Collection[int]) -> dict[int, CallAttempt]:
        ranked = (
            select(
                CallAttemptModel.id,
                func.row_number()
                .over(
                    partition_by=CallAttemptModel.case_id,
                    order_by=(
                        CallAttemptModel.started_at.desc().nulls_last(),
                        CallAttemptModel.id.desc(),
                    ),
                )
                .label("rn"),
            )
            .where(
                CallAttemptModel.case_id.in_(list(case_ids)),
                CallAttemptModel.deleted_at.is_(None),
            )
            .subquery()
        )
        result = await self._s.execute(
            select(CallAttemptModel).join(
                ranked, (ranked.c.id == CallAttemptModel.id) & (ranked.c.rn == 1)
            )
        )
        return {m.case_id: _attempt_to_domain(m) for m in result.scalars()}

    async def get_outcome_names(self, outcome_ids: Collection[int]) -> dict[int, str]:
        result = await self._s.execute(
            select(CaseResultModel.id, CaseResultModel.name).where(
                CaseResultModel.id.in_(list(outcome_ids))
            )
        )
        return {row.id: row.name for row in result}

    async def get_reason_names(self, reason_ids: Collection[int]) -> dict[int, str]:
        result = await self._s.execute(
            select(ReasonModel.id, ReasonModel.name).where(ReasonModel.id.in_(list(reason_ids)))
        )
        return {row.id: row.name for row in result}

    async def get_user_names(self, user_ids: Collection[int]) -> dict[int, str]:
        result = await self._s.execute(
            select(UserModel.id, UserModel.full_name).where(UserModel.id.in_(list(user_ids)))
        )
        return {row.id: row.full_name for row in result}

    async def get_postpone_counts(self, contract_ids: Collection[int]) -> dict[int, int]:
        result = await self._s.execute(
            select(CollectionCaseModel.contract_id, func.count(CallAttemptModel.id))
            .join(CollectionCaseModel, CollectionCaseModel.id == CallAttemptModel.case_id)
            .where(
                CollectionCaseModel.contract_id.in_(list(contract_ids)),
                CallAttemptModel.asked_to_postpone.is_(True),
                CallAttemptModel.deleted_at.is_(None),
            )
            .group_by(CollectionCaseModel.contract_id)
        )
        return {contract_id: count for contract_id, count in result.all()}

    async def get_attempt_remarks(self, case_ids: Collection[int]) -> list[tuple[int, str]]:
        result = await self._s.execute(
            select(CallAttemptModel.case_id, CallAttemptModel.remark)
            .where(
                CallAttemptModel.case_id.in_(list(case_ids)),
                CallAttemptModel.deleted_at.is_(None),
                CallAttemptModel.remark.is_not(None),
                CallAttemptModel.remark != "",
            )
            .order_by(CallAttemptModel.id)
        )
        return [(case_id, remark) for case_id, remark in result.all()]

    async def get_attempt_reason_names(
        self, case_ids: Collection[int]
    ) -> list[tuple[int, str]]:
        result = await self._s.execute(
            select(CallAttemptModel.case_id, ReasonModel.name)
            .join(ReasonModel, ReasonModel.id == CallAttemptModel.reason_id)
            .where(
                CallAttemptModel.case_id.in_(list(case_ids)),
                CallAttemptModel.deleted_at.is_(None),
            )
            .order_by(CallAttemptModel.id)
        )
        return [(case_id, name) for case_id, name in result.all()]

    async def get_latest_active_promises(
        self, payment_ids: Collection[int]
    ) -> dict[int, PromiseRecord]:
        ranked = (
            select(
                PromiseHistoryModel.id,
                func.row_number()
                .over(
                    partition_by=PromiseHistoryModel.payment_id,
                    order_by=(PromiseHistoryModel.created_at.desc(), PromiseHistoryModel.id.desc()),
                )
                .label("rn"),
            )
            .where(
                PromiseHistoryModel.payment_id.in_(list(payment_ids)),
                PromiseHistoryModel.is_active.is_(True),
            )
            .subquery()
        )
        result = await self._s.execute(
            select(PromiseHistoryModel).join(
                ranked, (ranked.c.id == PromiseHistoryModel.id) & (ranked.c.rn == 1)
            )
        )
        return {m.payment_id: _promise_to_domain(m) for m in result.scalars()}
