"""
Business-month calendar generation.

A business month is the run of Monday-to-Sunday weeks attributed to one
calendar month:

- Week 1 is the week starting on the first Monday on or after the 1st.
  Days before that Monday belong to the previous month's last week.
- Weeks keep coming while their Monday is on or before the month's last day,
  so the final week may end in the following month.
- Week numbers restart at 1 every month.
"""

import calendar
from datetime import date, timedelta
from functools import lru_cache

from fieldplan.db.models import DayOfWeek
from fieldplan.exceptions import ValidationError
from fieldplan.schemas.calendar import MAX_YEAR, MIN_YEAR, CalendarDay, CalendarWeek

DAYS_PER_WEEK = 7


def validate_month(year: int, month: int) -> None:
    """Reject months the calendar cannot lay out in whole weeks."""
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise ValidationError("year", year, f"must be between {MIN_YEAR} and {MAX_YEAR}")
    if not 1 <= month <= 12:
        raise ValidationError("month", month, "must be between 1 and 12")
    # The last week of December 9999 ends past date.max
    if (year, month) == (MAX_YEAR, 12):
        raise ValidationError("month", month, f"December {MAX_YEAR} runs past the last supported date")


def first_monday(year: int, month: int) -> date:
    """Return the first Monday on or after the 1st of the month."""
    first = date(year, month, 1)
    return first + timedelta(days=(DAYS_PER_WEEK - first.weekday()) % DAYS_PER_WEEK)


def last_day(year: int, month: int) -> date:
    """Return the last calendar date of the month."""
    return date(year, month, calendar.monthrange(year, month)[1])


def _build_week(year: int, month: int, week_number: int, monday: date) -> CalendarWeek:
    days = []
    for offset in range(DAYS_PER_WEEK):
        day = monday + timedelta(days=offset)
        days.append(
            CalendarDay(
                date=day,
                day_name=DayOfWeek.for_date(day),
                in_target_month=(day.year == year and day.month == month),
            )
        )
    return CalendarWeek(year=year, month=month, week_number=week_number, days=tuple(days))


@lru_cache(maxsize=256)
def _generate(year: int, month: int) -> tuple[CalendarWeek, ...]:
    month_end = last_day(year, month)
    weeks = []
    monday = first_monday(year, month)
    week_number = 1
    while monday <= month_end:
        weeks.append(_build_week(year, month, week_number, monday))
        monday += timedelta(days=DAYS_PER_WEEK)
        week_number += 1
    return tuple(weeks)


def generate_month(year: int, month: int) -> list[CalendarWeek]:
    """
    Generate the business weeks of a month.

    Args:
        year: Calendar year
        month: Month, 1-12

    Returns:
        Weeks ordered by week number, starting at 1

    Raises:
        ValidationError: year or month outside the supported calendar
    """
    validate_month(year, month)
    return list(_generate(year, month))


def week_count(year: int, month: int) -> int:
    """Number of business weeks attributed to the month."""
    validate_month(year, month)
    return len(_generate(year, month))
