"""
Weekly schedule lifecycle: create, list, update and delete.

Invariants enforced here:
- one schedule per (owner, year, month, week number), guarded by the
  database unique constraint so concurrent creates cannot both succeed;
- every schedule has exactly 7 entries, day numbers 1-7 in week-day order,
  each one matching the generated calendar day of its week;
- only the owner or an administrator may update or delete a schedule.

The store keeps no cache; every call reads through the session.
"""

import logging
from collections.abc import Iterable, Sequence
from datetime import timedelta
from typing import Any

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from fieldplan.db.models import DayOfWeek, Schedule, ScheduleDay
from fieldplan.exceptions import (
    ConflictError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from fieldplan.schemas.schedules import ScheduleEntry, ScheduleRead
from fieldplan.services.calendar import DAYS_PER_WEEK, generate_month, validate_month, week_count
from fieldplan.services.identity import IdentityDirectory

logger = logging.getLogger(__name__)

EntryInput = ScheduleEntry | dict[str, Any]


def validate_coordinates(year: int, month: int, week_number: int | None = None) -> None:
    """Reject years, months and week numbers the business calendar cannot produce."""
    validate_month(year, month)
    if week_number is not None:
        weeks = week_count(year, month)
        if not 1 <= week_number <= weeks:
            raise ValidationError(
                "week_number",
                week_number,
                f"{year}-{month:02d} has business weeks 1 to {weeks}",
            )


def validate_entries(entries: Sequence[EntryInput]) -> list[ScheduleEntry]:
    """
    Check that entries form one complete Monday-to-Sunday week.

    Returns the entries ordered by day number.
    """
    if entries is None or len(entries) != DAYS_PER_WEEK:
        count = 0 if entries is None else len(entries)
        raise ValidationError(
            "entries", count, f"a weekly schedule needs exactly {DAYS_PER_WEEK} day entries"
        )

    parsed = []
    for entry in entries:
        if isinstance(entry, ScheduleEntry):
            parsed.append(entry)
            continue
        try:
            parsed.append(ScheduleEntry.model_validate(entry))
        except PydanticValidationError as e:
            raise ValidationError("entries", None, str(e)) from e

    numbers = sorted(entry.day_number for entry in parsed)
    if numbers != list(range(1, DAYS_PER_WEEK + 1)):
        raise ValidationError(
            "entries.day_number",
            ",".join(str(n) for n in numbers),
            "day numbers must be 1 to 7, each exactly once",
        )

    ordered = sorted(parsed, key=lambda entry: entry.day_number)
    weekdays = list(DayOfWeek)
    monday = ordered[0].date
    for entry in ordered:
        if entry.day_name != weekdays[entry.day_number - 1]:
            raise ValidationError(
                "entries.day_name",
                entry.day_name.value,
                f"day {entry.day_number} must be {weekdays[entry.day_number - 1].value}",
            )
        if entry.date != monday + timedelta(days=entry.day_number - 1):
            raise ValidationError(
                "entries.date",
                entry.date.isoformat(),
                "entry dates must be the consecutive days of one Monday-to-Sunday week",
            )
    return ordered


def match_calendar_week(
    ordered: Sequence[ScheduleEntry], year: int, month: int, week_number: int
) -> None:
    """Check that ordered entries snapshot the generated days of their week."""
    week = generate_month(year, month)[week_number - 1]
    for entry, day in zip(ordered, week.days):
        if entry.date != day.date:
            raise ValidationError(
                "entries.date",
                entry.date.isoformat(),
                f"{year}-{month:02d} week {week_number} runs from "
                f"{week.start_date.isoformat()} to {week.end_date.isoformat()}",
            )
        if entry.in_target_month != day.in_target_month:
            raise ValidationError(
                "entries.in_target_month",
                entry.in_target_month,
                f"{day.date.isoformat()} is "
                + ("inside" if day.in_target_month else "outside")
                + f" {year}-{month:02d}",
            )


def _day_values(entry: ScheduleEntry) -> dict[str, Any]:
    values = entry.model_dump()
    values["day_name"] = entry.day_name.value
    return values


class ScheduleStore:
    """Owns the lifecycle of weekly schedules."""

    def __init__(self, db: AsyncSession, identity: IdentityDirectory):
        self.db = db
        self.identity = identity

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    async def get(self, schedule_id: int) -> ScheduleRead:
        """Get one schedule by id."""
        schedule = await self._load(schedule_id)
        return (await self._to_read([schedule]))[0]

    async def list_schedules(
        self,
        year: int,
        month: int,
        owner_id: int | None = None,
        week_number: int | None = None,
        search: str | None = None,
    ) -> list[ScheduleRead]:
        """
        List schedules of one business month.

        Filters:
        - owner_id: only this owner's schedules
        - week_number: only this week of the month
        - search: owner name or phone contains the text

        Ordered by owner id, week number, then id.
        """
        validate_coordinates(year, month)

        query = select(Schedule).where(Schedule.year == year, Schedule.month == month)
        if owner_id is not None:
            query = query.where(Schedule.owner_id == owner_id)
        if week_number is not None:
            query = query.where(Schedule.week_number == week_number)
        if search and search.strip():
            owner_ids = await self.identity.search(search)
            if not owner_ids:
                return []
            query = query.where(Schedule.owner_id.in_(owner_ids))
        query = query.order_by(
            Schedule.owner_id, Schedule.week_number, Schedule.id
        ).execution_options(populate_existing=True)

        result = await self.db.execute(query)
        return await self._to_read(result.scalars().all())

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    async def create(
        self,
        owner_id: int,
        year: int,
        month: int,
        week_number: int,
        entries: Sequence[EntryInput],
    ) -> ScheduleRead:
        """
        Create the schedule of one owner for one business week.

        Raises:
            ValidationError: entries or coordinates are invalid
            ConflictError: the owner already has a schedule for that week
        """
        ordered = validate_entries(entries)
        validate_coordinates(year, month, week_number)
        match_calendar_week(ordered, year, month, week_number)

        schedule = Schedule(
            owner_id=owner_id,
            year=year,
            month=month,
            week_number=week_number,
            entries=[ScheduleDay(**_day_values(entry)) for entry in ordered],
        )
        self.db.add(schedule)
        try:
            await self.db.flush()
        except IntegrityError:
            await self.db.rollback()
            logger.warning(
                "Schedule already exists for owner=%s %d-%02d week %d",
                owner_id, year, month, week_number,
            )
            raise ConflictError(owner_id, year, month, week_number) from None
        await self.db.commit()

        logger.info(
            "Created schedule id=%s for owner=%s %d-%02d week %d",
            schedule.id, owner_id, year, month, week_number,
        )
        return await self.get(schedule.id)

    async def update(
        self,
        schedule_id: int,
        caller_id: int,
        entries: Sequence[EntryInput],
    ) -> ScheduleRead:
        """
        Replace the day entries of a schedule.

        Owner, year, month, week number and created_at never change.

        Raises:
            NotFoundError: no schedule with that id
            UnauthorizedError: caller is neither owner nor administrator
            ValidationError: entries are invalid
        """
        schedule = await self._load(schedule_id)
        await self._authorize(schedule, caller_id)
        ordered = validate_entries(entries)
        match_calendar_week(ordered, schedule.year, schedule.month, schedule.week_number)

        existing = {day.day_number: day for day in schedule.entries}
        for entry in ordered:
            values = _day_values(entry)
            day = existing.get(entry.day_number)
            if day is None:
                schedule.entries.append(ScheduleDay(**values))
                continue
            for key, value in values.items():
                setattr(day, key, value)
        schedule.updated_at = func.now()
        await self.db.commit()

        logger.info("Updated schedule id=%s by caller=%s", schedule_id, caller_id)
        return await self.get(schedule_id)

    async def delete(self, schedule_id: int, caller_id: int) -> None:
        """
        Permanently delete a schedule and its entries.

        Raises:
            NotFoundError: no schedule with that id
            UnauthorizedError: caller is neither owner nor administrator
        """
        schedule = await self._load(schedule_id)
        await self._authorize(schedule, caller_id)
        await self.db.delete(schedule)
        await self.db.commit()
        logger.info("Deleted schedule id=%s by caller=%s", schedule_id, caller_id)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    async def _load(self, schedule_id: int) -> Schedule:
        result = await self.db.execute(
            select(Schedule)
            .where(Schedule.id == schedule_id)
            .execution_options(populate_existing=True)
        )
        schedule = result.scalar_one_or_none()
        if schedule is None:
            raise NotFoundError(schedule_id)
        return schedule

    async def _authorize(self, schedule: Schedule, caller_id: int) -> None:
        if schedule.owner_id == caller_id:
            return
        if await self.identity.is_administrator(caller_id):
            return
        logger.warning(
            "Denied change to schedule id=%s owned by %s for caller=%s",
            schedule.id, schedule.owner_id, caller_id,
        )
        raise UnauthorizedError(schedule.id, caller_id)

    async def _to_read(self, schedules: Iterable[Schedule]) -> list[ScheduleRead]:
        schedules = list(schedules)
        profiles = await self.identity.resolve(s.owner_id for s in schedules)
        reads = []
        for schedule in schedules:
            read = ScheduleRead.model_validate(schedule)
            read.owner = profiles.get(schedule.owner_id)
            reads.append(read)
        return reads
