"""Initial schema: users, schedules and schedule days.

Revision ID: 001_initial
Revises:
Create Date: 2026-10-19

Changes:
- users: staff display profile and administrator capability
- schedules: one weekly plan per owner per business week
  (unique constraint on owner_id + year + month + week_number)
- schedule_days: the 7 day entries of a schedule
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # ==========================================================================
    # USERS TABLE
    # ==========================================================================
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(40), nullable=True),
        sa.Column("is_administrator", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_users_phone", "users", ["phone"])

    # ==========================================================================
    # SCHEDULES TABLE
    # ==========================================================================
    op.create_table(
        "schedules",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("owner_id", sa.Integer(), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("month", sa.Integer(), nullable=False),
        sa.Column("week_number", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint(
            "owner_id", "year", "month", "week_number", name="unique_owner_week_schedule"
        ),
        sa.CheckConstraint("month BETWEEN 1 AND 12", name="check_schedule_month"),
        sa.CheckConstraint("week_number >= 1", name="check_schedule_week_number"),
    )
    op.create_index("ix_schedules_owner_id", "schedules", ["owner_id"])
    op.create_index("idx_schedules_year_month", "schedules", ["year", "month"])

    # ==========================================================================
    # SCHEDULE DAYS TABLE
    # ==========================================================================
    op.create_table(
        "schedule_days",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "schedule_id",
            sa.Integer(),
            sa.ForeignKey("schedules.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("day_number", sa.Integer(), nullable=False),
        sa.Column("day_name", sa.String(20), nullable=False),
        sa.Column("schedule_date", sa.Date(), nullable=False),
        sa.Column("in_target_month", sa.Boolean(), nullable=False),
        sa.Column("is_day_off", sa.Boolean(), nullable=False),
        sa.Column("morning_text", sa.String(500), nullable=True),
        sa.Column("afternoon_text", sa.String(500), nullable=True),
        sa.Column("remark", sa.String(500), nullable=True),
        sa.UniqueConstraint("schedule_id", "day_number", name="unique_schedule_day_number"),
        sa.CheckConstraint("day_number BETWEEN 1 AND 7", name="check_schedule_day_number"),
    )
    op.create_index("ix_schedule_days_schedule_id", "schedule_days", ["schedule_id"])
    op.create_index("idx_schedule_days_date", "schedule_days", ["schedule_date"])


def downgrade() -> None:
    op.drop_index("idx_schedule_days_date", table_name="schedule_days")
    op.drop_index("ix_schedule_days_schedule_id", table_name="schedule_days")
    op.drop_table("schedule_days")
    op.drop_index("idx_schedules_year_month", table_name="schedules")
    op.drop_index("ix_schedules_owner_id", table_name="schedules")
    op.drop_table("schedules")
    op.drop_index("ix_users_phone", table_name="users")
    op.drop_table("users")
