# app/api/dependencies/query_params.py
from dataclasses import dataclass
from datetime import date as date_type, time

from fastapi import HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.exceptions import InvalidRangeError
from app.schemas.temporal import TimeInterval, parse_clock_time
from app.services.occurrence_index import OccurrenceIndex
from app.services.timetable import load_enrolled_course_ids


def parse_time_param(value: str, name: str) -> time:
    """
    Parse a HH:MM or HH:MM:SS query parameter.

    Malformed input is a validation error (422), in line with how FastAPI
    reports malformed dates.
    """
    try:
        return parse_clock_time(value)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Invalid time for '{name}': {exc}",
        )


def validate_window(window_start: date_type, window_end: date_type) -> None:
    """
    Reject inverted or overly long date windows before they reach the engine.
    """
    if window_end < window_start:
        raise InvalidRangeError(
            "'to' must be greater than or equal to 'from'",
            details={"from": window_start.isoformat(), "to": window_end.isoformat()},
        )

    max_days = get_settings().MAX_WINDOW_DAYS
    span = (window_end - window_start).days + 1
    if span > max_days:
        raise InvalidRangeError(
            f"Date window spans {span} days; at most {max_days} are allowed",
            details={"from": window_start.isoformat(), "to": window_end.isoformat()},
        )


def build_interval(start: str, end: str) -> TimeInterval:
    """
    Build the query interval from raw `start`/`end` parameters, rejecting
    empty or inverted intervals.
    """
    start_time = parse_time_param(start, "start")
    end_time = parse_time_param(end, "end")
    if end_time <= start_time:
        raise InvalidRangeError(
            "'end' must be later than 'start'",
            details={"start": start_time.isoformat(), "end": end_time.isoformat()},
        )
    return TimeInterval(start=start_time, end=end_time)


@dataclass(frozen=True)
class OccurrenceFilters:
    """
    Optional narrowing of an occurrence listing. All set filters must match.
    """

    room_id: int | None = None
    professor_id: str | None = None
    course_id: int | None = None
    student_id: str | None = None

    async def apply(self, db: AsyncSession, index: OccurrenceIndex) -> OccurrenceIndex:
        course_ids = None
        if self.student_id is not None:
            course_ids = await load_enrolled_course_ids(db, self.student_id)

        return index.filter(
            room_id=self.room_id,
            professor_id=self.professor_id,
            course_id=self.course_id,
            course_ids=course_ids,
        )


async def get_occurrence_filters(
    room: int | None = Query(
        default=None,
        description="Only occurrences held in this room.",
        examples=[3],
    ),
    professor: str | None = Query(
        default=None,
        description="Only occurrences taught by this professor.",
        examples=["prof-42"],
    ),
    course: int | None = Query(
        default=None,
        description="Only occurrences of this course.",
        examples=[12],
    ),
    student: str | None = Query(
        default=None,
        description="Only occurrences of courses this student is enrolled in.",
        examples=["student-7"],
    ),
) -> OccurrenceFilters:
    return OccurrenceFilters(
        room_id=room,
        professor_id=professor,
        course_id=course,
        student_id=student,
    )
