"""Business-month calendar schemas."""

import datetime as dt

from pydantic import Field, computed_field

from fieldplan.db.models import DayOfWeek
from fieldplan.schemas.base import FrozenSchema

MIN_YEAR = 1
MAX_YEAR = 9999


class CalendarDay(FrozenSchema):
    """One calendar date inside a generated week."""

    date: dt.date
    day_name: DayOfWeek
    in_target_month: bool


class CalendarWeek(FrozenSchema):
    """A Monday-to-Sunday week attributed to one business month."""

    year: int
    month: int
    week_number: int = Field(..., ge=1)
    days: tuple[CalendarDay, ...] = Field(..., min_length=7, max_length=7)

    @computed_field
    @property
    def start_date(self) -> dt.date:
        return self.days[0].date

    @computed_field
    @property
    def end_date(self) -> dt.date:
        return self.days[-1].date
