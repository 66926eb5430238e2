"""Scheduling core services."""

from fieldplan.services.calendar import generate_month, week_count
from fieldplan.services.identity import DatabaseIdentityDirectory, IdentityDirectory
from fieldplan.services.schedule_store import ScheduleStore

__all__ = [
    "generate_month",
    "week_count",
    "DatabaseIdentityDirectory",
    "IdentityDirectory",
    "ScheduleStore",
]
