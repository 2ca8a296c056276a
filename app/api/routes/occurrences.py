# app/api/routes/occurrences.py
from datetime import date as date_type
from http import HTTPStatus

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies.query_params import (
    OccurrenceFilters,
    get_occurrence_filters,
    validate_window,
)
from app.db.session import get_db
from app.schemas.occurrence import Occurrence
from app.services.timetable import collect_occurrences, load_snapshot

router = APIRouter(tags=["Occurrences"])


@router.get(
    "/occurrences",
    response_model=list[Occurrence],
    status_code=HTTPStatus.OK,
    summary="List concrete meeting occurrences in a date window",
    description=(
        "Expand all recurring rules active in the window, apply their "
        "cancellations and reschedules, and merge the result with one-off "
        "meetings.\n\n"
        "The window is **inclusive** of both `from` and `to`.\n\n"
        "Optional filters (`room`, `professor`, `course`, `student`) narrow the "
        "listing; `student` selects the courses the student is enrolled in.\n\n"
        "Each occurrence carries its provenance: the recurring rule and original "
        "date it was derived from, or the one-off meeting id."
    ),
    responses={
        200: {
            "description": "Occurrences sorted by date, then start time.",
            "content": {
                "application/json": {
                    "example": [
                        {
                            "course_id": 12,
                            "room_id": 3,
                            "professor_id": "prof-42",
                            "occurrence_date": "2025-01-06",
                            "start_time": "10:00:00",
                            "end_time": "11:00:00",
                            "provenance": {
                                "kind": "rule",
                                "rule_id": 7,
                                "original_date": "2025-01-06",
                            },
                        }
                    ]
                }
            },
        },
        400: {"description": "`to` is before `from`, or the window is too long."},
        422: {"description": "Validation error (e.g. malformed dates)."},
    },
)
async def list_occurrences(
    window_start: date_type = Query(
        ...,
        alias="from",
        description="Start date (inclusive) of the window, YYYY-MM-DD.",
        examples=["2025-01-01"],
    ),
    window_end: date_type = Query(
        ...,
        alias="to",
        description="End date (inclusive) of the window, YYYY-MM-DD.",
        examples=["2025-01-31"],
    ),
    filters: OccurrenceFilters = Depends(get_occurrence_filters),
    db: AsyncSession = Depends(get_db),
) -> list[Occurrence]:
    """
    Return the merged, filtered occurrence list for the window.
    """
    validate_window(window_start, window_end)

    snapshot = await load_snapshot(db, window_start, window_end)
    index = collect_occurrences(snapshot, window_start, window_end)
    index = await filters.apply(db, index)
    return index.all()
