"""Pydantic schemas for API request/response validation."""

from fieldplan.schemas.calendar import CalendarDay, CalendarWeek
from fieldplan.schemas.schedules import (
    ScheduleCreate,
    ScheduleEntry,
    ScheduleRead,
    ScheduleUpdate,
)
from fieldplan.schemas.user import OwnerProfile

__all__ = [
    # Calendar
    "CalendarDay",
    "CalendarWeek",
    # Schedules
    "ScheduleCreate",
    "ScheduleEntry",
    "ScheduleRead",
    "ScheduleUpdate",
    # Owners
    "OwnerProfile",
]
