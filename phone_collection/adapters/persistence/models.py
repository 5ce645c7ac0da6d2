"""SQLAlchemy ORM models — maps to PostgreSQL tables."""

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from phone_collection.adapters.persistence.database import Base


class UserModel(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    full_name: Mapped[str] = mapped_column(String(200), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class DutyRosterModel(Base):
    __tablename__ = "duty_rosters"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    work_date: Mapped[date] = mapped_column(Date, nullable=False)
    is_working: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_by: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        UniqueConstraint("user_id", "work_date", name="uq_duty_rosters_user_date"),
        Index("idx_duty_rosters_work_date", "work_date"),
    )


class CollectionCaseModel(Base):
    __tablename__ = "collection_cases"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")
    assigned_to: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=True
    )
    assigned_by: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=True
    )
    assigned_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    updated_by: Mapped[int | None] = mapped_column(Integer, nullable=True)

    contract_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    payment_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    contract_no: Mapped[str | None] = mapped_column(String(50), nullable=True)
    contract_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    payment_no: Mapped[str | None] = mapped_column(String(50), nullable=True)
    segment_type: Mapped[str | None] = mapped_column(String(20), nullable=True)
    customer_id: Mapped[str | None] = mapped_column(String(50), nullable=True)
    customer_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    sales_area: Mapped[str | None] = mapped_column(String(100), nullable=True)
    product_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    due_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    days_since_last_payment: Mapped[int | None] = mapped_column(Integer, nullable=True)
    days_overdue: Mapped[int | None] = mapped_column(Integer, nullable=True)
    amount_unpaid: Mapped[Decimal | None] = mapped_column(Numeric(14, 2), nullable=True)
    phone_no_1: Mapped[str | None] = mapped_column(String(30), nullable=True)
    phone_no_2: Mapped[str | None] = mapped_column(String(30), nullable=True)
    phone_no_3: Mapped[str | None] = mapped_column(String(30), nullable=True)
    home_address: Mapped[str | None] = mapped_column(Text, nullable=True)
    risk_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    reschedule: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    last_attempt_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    last_attempt_by: Mapped[int | None] = mapped_column(Integer, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        Index("idx_cases_assigned_to", "assigned_to"),
        Index("idx_cases_assigned_at", "assigned_at"),
        Index("idx_cases_status_created", "status", "created_at"),
        Index("idx_cases_contract", "contract_id"),
        Index("idx_cases_payment", "payment_id"),
    )


class CaseResultModel(Base):
    __tablename__ = "case_results"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)


class ReasonModel(Base):
    __tablename__ = "reasons"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)


class CallAttemptModel(Base):
    __tablename__ = "call_attempts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    case_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("collection_cases.id", ondelete="CASCADE"), nullable=False
    )
    started_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    ended_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    call_status: Mapped[str | None] = mapped_column(String(50), nullable=True)
    outcome_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("case_results.id"), nullable=True
    )
    reason_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("reasons.id"), nullable=True
    )
    remark: Mapped[str | None] = mapped_column(Text, nullable=True)
    standard_remark: Mapped[str | None] = mapped_column(Text, nullable=True)
    asked_to_postpone: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_by: Mapped[int | None] = mapped_column(Integer, nullable=True)
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    __table_args__ = (Index("idx_call_attempts_case_started", "case_id", "started_at"),)


class PromiseHistoryModel(Base):
    __tablename__ = "promise_history"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    payment_id: Mapped[int] = mapped_column(Integer, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    promised_payment_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    call_later_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    __table_args__ = (Index("idx_promise_history_payment", "payment_id", "created_at"),)
