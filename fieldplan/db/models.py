"""
SQLAlchemy 2.0 Models for Fieldplan.

Uses modern declarative syntax with Mapped[] type annotations.
Owner ids are opaque integer keys: schedules do not reference the users
table, so staff directories living in another service work the same way.
"""

import datetime as dt
from datetime import datetime
from enum import Enum as PyEnum
from typing import Optional

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
    false,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fieldplan.db.base import Base


# =============================================================================
# ENUMS
# =============================================================================


class DayOfWeek(str, PyEnum):
    """Day of the week, Monday first."""

    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @classmethod
    def for_date(cls, value: dt.date) -> "DayOfWeek":
        """Return the weekday of a calendar date."""
        return list(cls)[value.weekday()]


# =============================================================================
# MODELS
# =============================================================================


class User(Base):
    """
    Staff member as seen by the scheduling service.

    Only carries what schedules need: a display name and phone for listings,
    and the administrator capability that bypasses ownership checks.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[Optional[str]] = mapped_column(String(40), nullable=True, index=True)
    is_administrator: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )


class Schedule(Base):
    """
    Weekly work plan of one owner for one business week.

    Keyed by (owner_id, year, month, week_number); the unique constraint is
    what makes creation an atomic insert-if-absent.
    """

    __tablename__ = "schedules"
    __table_args__ = (
        UniqueConstraint(
            "owner_id", "year", "month", "week_number", name="unique_owner_week_schedule"
        ),
        CheckConstraint("month BETWEEN 1 AND 12", name="check_schedule_month"),
        CheckConstraint("week_number >= 1", name="check_schedule_week_number"),
        Index("idx_schedules_year_month", "year", "month"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    owner_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    month: Mapped[int] = mapped_column(Integer, nullable=False)
    week_number: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    # Relationships
    entries: Mapped[list["ScheduleDay"]] = relationship(
        "ScheduleDay",
        back_populates="schedule",
        cascade="all, delete-orphan",
        order_by="ScheduleDay.day_number",
        lazy="selectin",
    )


class ScheduleDay(Base):
    """
    One day slot of a weekly schedule.

    Date, day name and in-month flag are a snapshot of the calendar day the
    entry was submitted for.
    """

    __tablename__ = "schedule_days"
    __table_args__ = (
        UniqueConstraint("schedule_id", "day_number", name="unique_schedule_day_number"),
        CheckConstraint("day_number BETWEEN 1 AND 7", name="check_schedule_day_number"),
        Index("idx_schedule_days_date", "schedule_date"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    schedule_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("schedules.id", ondelete="CASCADE"), nullable=False, index=True
    )
    day_number: Mapped[int] = mapped_column(Integer, nullable=False)
    day_name: Mapped[str] = mapped_column(String(20), nullable=False)
    date: Mapped[dt.date] = mapped_column("schedule_date", nullable=False)
    in_target_month: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_day_off: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    morning_text: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    afternoon_text: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    remark: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    # Relationships
    schedule: Mapped["Schedule"] = relationship("Schedule", back_populates="entries")
