"""Initial schema — users, rosters, cases, attempts, lookups, promises.

Revision ID: 001
Revises: None
Create Date: 2024-01-02
"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Users
    op.create_table(
        "users",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("username", sa.String(100), unique=True, nullable=False),
        sa.Column("full_name", sa.String(200), nullable=False),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
    )

    # Duty rosters
    op.create_table(
        "duty_rosters",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.Integer, sa.ForeignKey("users.id"), nullable=False),
        sa.Column("work_date", sa.Date, nullable=False),
        sa.Column("is_working", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("created_by", sa.Integer, sa.ForeignKey("users.id"), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint("user_id", "work_date", name="uq_duty_rosters_user_date"),
    )
    op.create_index("idx_duty_rosters_work_date", "duty_rosters", ["work_date"])

    # Collection cases
    op.create_table(
        "collection_cases",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("assigned_to", sa.Integer, sa.ForeignKey("users.id"), nullable=True),
        sa.Column("assigned_by", sa.Integer, sa.ForeignKey("users.id"), nullable=True),
        sa.Column("assigned_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_by", sa.Integer, nullable=True),
        sa.Column("contract_id", sa.Integer, nullable=True),
        sa.Column("payment_id", sa.Integer, nullable=True),
        sa.Column("contract_no", sa.String(50), nullable=True),
        sa.Column("contract_date", sa.Date, nullable=True),
        sa.Column("payment_no", sa.String(50), nullable=True),
        sa.Column("segment_type", sa.String(20), nullable=True),
        sa.Column("customer_id", sa.String(50), nullable=True),
        sa.Column("customer_name", sa.String(200), nullable=True),
        sa.Column("sales_area", sa.String(100), nullable=True),
        sa.Column("product_type", sa.String(100), nullable=True),
        sa.Column("due_date", sa.Date, nullable=True),
        sa.Column("days_since_last_payment", sa.Integer, nullable=True),
        sa.Column("days_overdue", sa.Integer, nullable=True),
        sa.Column("amount_unpaid", sa.Numeric(14, 2), nullable=True),
        sa.Column("phone_no_1", sa.String(30), nullable=True),
        sa.Column("phone_no_2", sa.String(30), nullable=True),
        sa.Column("phone_no_3", sa.String(30), nullable=True),
        sa.Column("home_address", sa.Text, nullable=True),
        sa.Column("risk_type", sa.String(50), nullable=True),
        sa.Column("reschedule", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("last_attempt_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("last_attempt_by", sa.Integer, nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("idx_cases_assigned_to", "collection_cases", ["assigned_to"])
    op.create_index("idx_cases_assigned_at", "collection_cases", ["assigned_at"])
    op.create_index("idx_cases_status_created", "collection_cases", ["status", "created_at"])
    op.create_index("idx_cases_contract", "collection_cases", ["contract_id"])
    op.create_index("idx_cases_payment", "collection_cases", ["payment_id"])

    # Lookups
    op.create_table(
        "case_results",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(200), nullable=False),
    )
    op.create_table(
        "reasons",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(200), nullable=False),
    )

    # Call attempts
    op.create_table(
        "call_attempts",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "case_id",
            sa.Integer,
            sa.ForeignKey("collection_cases.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("started_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("ended_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("call_status", sa.String(50), nullable=True),
        sa.Column("outcome_id", sa.Integer, sa.ForeignKey("case_results.id"), nullable=True),
        sa.Column("reason_id", sa.Integer, sa.ForeignKey("reasons.id"), nullable=True),
        sa.Column("remark", sa.Text, nullable=True),
        sa.Column("standard_remark", sa.Text, nullable=True),
        sa.Column(
            "asked_to_postpone", sa.Boolean, nullable=False, server_default=sa.false()
        ),
        sa.Column("created_by", sa.Integer, nullable=True),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index(
        "idx_call_attempts_case_started", "call_attempts", ["case_id", "started_at"]
    )

    # Promise history
    op.create_table(
        "promise_history",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("payment_id", sa.Integer, nullable=False),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("promised_payment_date", sa.Date, nullable=True),
        sa.Column("call_later_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    )
    op.create_index(
        "idx_promise_history_payment", "promise_history", ["payment_id", "created_at"]
    )


def downgrade() -> None:
    op.drop_table("promise_history")
    op.drop_table("call_attempts")
    op.drop_table("reasons")
    op.drop_table("case_results")
    op.drop_table("collection_cases")
    op.drop_table("duty_rosters")
    op.drop_table("users")
