# app/api/routes/rooms.py
from datetime import date as date_type
from http import HTTPStatus

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies.query_params import build_interval
from app.db.session import get_db
from app.schemas.room import Room
from app.services.availability import free_rooms
from app.services.timetable import collect_occurrences, load_snapshot

router = APIRouter(tags=["Rooms"])


@router.get(
    "/free-rooms",
    response_model=list[Room],
    status_code=HTTPStatus.OK,
    summary="Find rooms that are free on a date and time interval",
    description=(
        "Return every room that has no meeting overlapping the half-open "
        "interval [`start`, `end`) on `date`.\n\n"
        "A meeting ending exactly at `start` (or starting exactly at `end`) "
        "does not block the room.\n\n"
        "Times accept `HH:MM` or `HH:MM:SS`. Optional `min_capacity` and "
        "`room_type` narrow the result."
    ),
    responses={
        200: {
            "description": "Free rooms, ordered by id.",
            "content": {
                "application/json": {
                    "example": [
                        {
                            "id": 3,
                            "name": "A-101",
                            "capacity": 40,
                            "room_type": "Lecture",
                            "description": None,
                        }
                    ]
                }
            },
        },
        400: {"description": "`end` is not later than `start`."},
        422: {"description": "Malformed date or time."},
    },
)
async def get_free_rooms(
    on_date: date_type = Query(
        ...,
        alias="date",
        description="Date to check, YYYY-MM-DD.",
        examples=["2025-02-03"],
    ),
    start: str = Query(
        ...,
        description="Start of the interval (inclusive), HH:MM or HH:MM:SS.",
        examples=["14:30"],
    ),
    end: str = Query(
        ...,
        description="End of the interval (exclusive), HH:MM or HH:MM:SS.",
        examples=["15:30"],
    ),
    min_capacity: int | None = Query(
        default=None,
        ge=0,
        description="Only rooms with at least this many seats.",
    ),
    room_type: str | None = Query(
        default=None,
        description="Only rooms of this type (case-insensitive).",
    ),
    db: AsyncSession = Depends(get_db),
) -> list[Room]:
    """
    Free-room search for a single date and interval.
    """
    interval = build_interval(start, end)

    snapshot = await load_snapshot(db, on_date, on_date)
    index = collect_occurrences(snapshot, on_date, on_date)

    return list(
        free_rooms(
            snapshot.rooms,
            index.on_date(on_date),
            on_date,
            interval,
            min_capacity=min_capacity,
            room_type=room_type,
        )
    )
