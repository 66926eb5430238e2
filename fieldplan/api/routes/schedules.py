"""Weekly schedule routes."""

from typing import Annotated

from fastapi import APIRouter, Query, status

from fieldplan.api.deps import CurrentUser, Store
from fieldplan.schemas.calendar import MAX_YEAR, MIN_YEAR, CalendarWeek
from fieldplan.schemas.schedules import ScheduleCreate, ScheduleRead, ScheduleUpdate
from fieldplan.services.calendar import generate_month

router = APIRouter(prefix="/schedules", tags=["schedules"])

Year = Annotated[int, Query(ge=MIN_YEAR, le=MAX_YEAR)]
Month = Annotated[int, Query(ge=1, le=12)]


@router.get("/generate", response_model=list[CalendarWeek])
async def generate_business_month(year: Year, month: Month) -> list[CalendarWeek]:
    """
    Generate the business weeks of a month.

    Week 1 starts on the first Monday of the month; the last week may end
    in the following month.
    """
    return generate_month(year, month)


@router.get("/", response_model=list[ScheduleRead])
async def list_schedules(
    current_user: CurrentUser,
    store: Store,
    year: Year,
    month: Month,
    owner_id: int | None = None,
    week_number: Annotated[int | None, Query(ge=1)] = None,
    search: Annotated[str | None, Query(max_length=255)] = None,
) -> list[ScheduleRead]:
    """
    List schedules of a business month.

    Filters:
    - owner_id: Only this owner's schedules
    - week_number: Only this week of the month
    - search: Owner name or phone contains the text
    """
    return await store.list_schedules(
        year, month, owner_id=owner_id, week_number=week_number, search=search
    )


@router.post("/", response_model=ScheduleRead, status_code=status.HTTP_201_CREATED)
async def create_schedule(
    data: ScheduleCreate,
    current_user: CurrentUser,
    store: Store,
) -> ScheduleRead:
    """Create a schedule for the current user. Returns 409 if the week is taken."""
    return await store.create(
        current_user.id,  # From auth, NEVER from request
        data.year,
        data.month,
        data.week_number,
        data.entries,
    )


@router.get("/{schedule_id}", response_model=ScheduleRead)
async def get_schedule(
    schedule_id: int,
    current_user: CurrentUser,
    store: Store,
) -> ScheduleRead:
    """Get a specific schedule by ID."""
    return await store.get(schedule_id)


@router.put("/{schedule_id}", response_model=ScheduleRead)
async def update_schedule(
    schedule_id: int,
    data: ScheduleUpdate,
    current_user: CurrentUser,
    store: Store,
) -> ScheduleRead:
    """Replace the day entries of a schedule. Owner or administrator only."""
    return await store.update(schedule_id, current_user.id, data.entries)


@router.delete("/{schedule_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_schedule(
    schedule_id: int,
    current_user: CurrentUser,
    store: Store,
) -> None:
    """Delete a schedule. Owner or administrator only."""
    await store.delete(schedule_id, current_user.id)
