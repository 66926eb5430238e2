"""Weekly schedule schemas."""

import datetime as dt

from pydantic import ConfigDict, Field

from fieldplan.db.models import DayOfWeek
from fieldplan.schemas.base import BaseSchema, TimestampMixin
from fieldplan.schemas.calendar import MAX_YEAR, MIN_YEAR
from fieldplan.schemas.user import OwnerProfile

ENTRY_TEXT_MAX_LENGTH = 500


class ScheduleEntry(BaseSchema):
    """One day of a weekly schedule.

    day_name, date and in_target_month are copied from the CalendarDay the
    entry was filled in for. Morning/afternoon text is kept as submitted even
    when is_day_off is set.
    """

    day_number: int = Field(..., ge=1, le=7)
    day_name: DayOfWeek
    date: dt.date
    in_target_month: bool = False
    is_day_off: bool = False
    morning_text: str | None = Field(None, max_length=ENTRY_TEXT_MAX_LENGTH)
    afternoon_text: str | None = Field(None, max_length=ENTRY_TEXT_MAX_LENGTH)
    remark: str | None = Field(None, max_length=ENTRY_TEXT_MAX_LENGTH)


class ScheduleCreate(BaseSchema):
    """Schema for creating a schedule. The owner is always the caller."""

    year: int = Field(..., ge=MIN_YEAR, le=MAX_YEAR)
    month: int = Field(..., ge=1, le=12)
    week_number: int = Field(..., ge=1)
    entries: list[ScheduleEntry]


class ScheduleUpdate(BaseSchema):
    """Schema for updating a schedule.

    Only the day entries can change; owner, coordinates and timestamps are
    rejected as unknown fields.
    """

    model_config = ConfigDict(extra="forbid")

    entries: list[ScheduleEntry]


class ScheduleRead(TimestampMixin, BaseSchema):
    """Schema for reading a schedule."""

    id: int
    owner_id: int
    owner: OwnerProfile | None = None
    year: int
    month: int
    week_number: int
    entries: list[ScheduleEntry]
