# app/api/routes/week_grid.py
from datetime import date as date_type, timedelta
from http import HTTPStatus

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies.query_params import OccurrenceFilters, get_occurrence_filters
from app.core.exceptions import InvalidRangeError
from app.core.config import get_settings
from app.db.session import get_db
from app.schemas.temporal import monday_of
from app.schemas.week_grid import WeekGrid
from app.services.timetable import collect_occurrences, load_snapshot
from app.services.week_grid import GridSlots, assemble_week

router = APIRouter(tags=["Week grid"])


@router.get(
    "/week-grid",
    response_model=WeekGrid,
    status_code=HTTPStatus.OK,
    summary="Get the day x time-slot grid for one week",
    description=(
        "Assemble the Monday-to-Sunday timetable grid of the week containing "
        "`weekStart`. Any date may be passed; it is normalized to its Monday.\n\n"
        "The grid always has 7 day columns. Slot layout comes from the "
        "`GRID_*` settings (default: hourly from 08:00, 12 slots).\n\n"
        "Meetings that do not start on a slot boundary are returned under "
        "`unaligned` together with an `UNALIGNED_OCCURRENCE` warning.\n\n"
        "Accepts the same `room`, `professor`, `course` and `student` filters "
        "as `/occurrences` (e.g. for a personal schedule)."
    ),
    responses={
        400: {"description": "The week would run past 9999-12-31."},
        422: {"description": "Malformed date."},
    },
)
async def get_week_grid(
    week_start: date_type = Query(
        ...,
        alias="weekStart",
        description="Any date of the requested week, YYYY-MM-DD.",
        examples=["2025-01-08"],
    ),
    filters: OccurrenceFilters = Depends(get_occurrence_filters),
    db: AsyncSession = Depends(get_db),
) -> WeekGrid:
    """
    Weekly grid view for the public timetable or a personal schedule.
    """
    monday = monday_of(week_start)
    if monday > date_type.max - timedelta(days=6):
        raise InvalidRangeError(
            "The requested week extends past the last representable date",
            details={"weekStart": week_start.isoformat()},
        )
    sunday = monday + timedelta(days=6)

    snapshot = await load_snapshot(db, monday, sunday)
    index = collect_occurrences(snapshot, monday, sunday)
    index = await filters.apply(db, index)

    return assemble_week(index, monday, GridSlots.from_settings(get_settings()))
