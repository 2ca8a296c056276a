# tests/conftest.py
import os
import tempfile
from datetime import date, datetime, time, timezone
from pathlib import Path

# Must be set before the app (and its cached settings / engine) is imported.
_TEST_DB = Path(tempfile.mkdtemp(prefix="timetable-tests-")) / "timetable_test.db"
os.environ["APP_ENV"] = "test"
os.environ["DB_URL"] = f"sqlite+aiosqlite:///{_TEST_DB}"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session  # noqa: E402

from app.core.config import get_settings  # noqa: E402
from app.db.session import build_sync_db_url, reset_schema_sync  # noqa: E402
from app.main import create_app  # noqa: E402
from app.models import (  # noqa: E402
    Enrollment,
    RecurringRule as RecurringRuleRow,
    Room as RoomRow,
    ScheduleException as ScheduleExceptionRow,
    StandaloneSchedule,
)


@pytest.fixture(scope="session")
def client() -> TestClient:
    """
    Shared TestClient fixture for all API tests.

    Uses the application factory so configuration (DB, logging, etc.)
    remains test-friendly.
    """
    app = create_app()
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def seed_db():
    """
    Reset the schema and return a callable that inserts ORM rows.

    Seeding goes through a synchronous engine so it can be used from plain
    tests as well as from async ones.
    """
    reset_schema_sync()
    engine = create_engine(build_sync_db_url(get_settings().DB_URL), future=True)

    def _seed(*rows) -> None:
        with Session(engine) as session:
            session.add_all(rows)
            session.commit()

    yield _seed
    engine.dispose()


@pytest.fixture()
def campus(seed_db):
    """
    Small timetable used by the API tests.

    Rooms:
        1 A-101 (40, Lecture), 2 B-202 (20, Lab), 3 C-303 (120, Lecture)
    Rule 1: course 10, room 1, prof-1, Mondays 10:00-11:00, 2025-01-06..2025-01-27
        cancelled on 2025-01-13
    Rule 2: course 20, room 2, prof-2, Mondays 14:00-15:00, 2025-01-06..2025-06-30
        2025-01-20 moved to 15:00-16:00 in room 3
    Standalone 1: course 30, room 1, prof-3, 2025-02-03 09:30-10:30
    Enrollments: student-1 -> courses 10 and 30
    """
    seed_db(
        RoomRow(id=1, name="A-101", capacity=40, room_type="Lecture"),
        RoomRow(id=2, name="B-202", capacity=20, room_type="Lab"),
        RoomRow(id=3, name="C-303", capacity=120, room_type="Lecture"),
        RecurringRuleRow(
            id=1,
            course_id=10,
            room_id=1,
            professor_id="prof-1",
            day_of_week=1,
            start_time=time(10, 0),
            end_time=time(11, 0),
            start_date=date(2025, 1, 6),
            end_date=date(2025, 1, 27),
        ),
        RecurringRuleRow(
            id=2,
            course_id=20,
            room_id=2,
            professor_id="prof-2",
            day_of_week=1,
            start_time=time(14, 0),
            end_time=time(15, 0),
            start_date=date(2025, 1, 6),
            end_date=date(2025, 6, 30),
        ),
        ScheduleExceptionRow(
            id=1,
            rule_id=1,
            exception_date=date(2025, 1, 13),
            kind="CANCELLED",
            created_at=datetime(2025, 1, 2, 9, 0, tzinfo=timezone.utc),
        ),
        ScheduleExceptionRow(
            id=2,
            rule_id=2,
            exception_date=date(2025, 1, 20),
            kind="RESCHEDULED",
            new_start_time=time(15, 0),
            new_end_time=time(16, 0),
            new_room_id=3,
            created_at=datetime(2025, 1, 2, 9, 5, tzinfo=timezone.utc),
        ),
        StandaloneSchedule(
            id=1,
            course_id=30,
            room_id=1,
            professor_id="prof-3",
            occurrence_date=date(2025, 2, 3),
            start_time=time(9, 30),
            end_time=time(10, 30),
        ),
        Enrollment(student_id="student-1", course_id=10),
        Enrollment(student_id="student-1", course_id=30),
    )
