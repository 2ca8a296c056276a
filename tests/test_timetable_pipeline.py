# tests/test_timetable_pipeline.py
from datetime import date, datetime, time

from app.schemas.occurrence import RuleProvenance, StandaloneOccurrence
from app.schemas.recurring_rule import ExceptionKind, ScheduleException
from app.services.timetable import TimetableSnapshot, collect_occurrences
from tests.factories import make_rule


def _exception(exc_id, rule_id, on, kind, **changes):
    return ScheduleException(
        id=exc_id,
        rule_id=rule_id,
        exception_date=on,
        kind=kind,
        created_at=datetime(2025, 1, 1, 12, 0),
        **changes,
    )


def test_january_scenario_with_cancellation_and_standalone():
    snapshot = TimetableSnapshot(
        rules=(make_rule(),),
        exceptions=(_exception(1, 1, date(2025, 1, 13), ExceptionKind.CANCELLED),),
        standalone=(
            StandaloneOccurrence(
                id=4,
                course_id=30,
                room_id=2,
                professor_id="prof-3",
                occurrence_date=date(2025, 1, 15),
                start_time="09:00",
                end_time="10:00",
            ),
        ),
    )

    index = collect_occurrences(snapshot, date(2025, 1, 1), date(2025, 1, 31))

    assert [(o.occurrence_date, o.course_id) for o in index] == [
        (date(2025, 1, 6), 10),
        (date(2025, 1, 15), 30),
        (date(2025, 1, 20), 10),
        (date(2025, 1, 27), 10),
    ]


def test_reschedule_out_of_window_removes_occurrence():
    snapshot = TimetableSnapshot(
        rules=(make_rule(),),
        exceptions=(
            _exception(1, 1, date(2025, 1, 13), ExceptionKind.RESCHEDULED, new_date=date(2025, 2, 4)),
        ),
    )

    index = collect_occurrences(snapshot, date(2025, 1, 13), date(2025, 1, 19))

    assert len(index) == 0


def test_reschedule_into_window_adds_occurrence():
    snapshot = TimetableSnapshot(
        rules=(make_rule(),),
        exceptions=(
            _exception(
                1,
                1,
                date(2025, 1, 13),
                ExceptionKind.RESCHEDULED,
                new_date=date(2025, 2, 4),
                new_start_time="12:00",
                new_end_time="13:00",
            ),
        ),
    )

    index = collect_occurrences(snapshot, date(2025, 2, 1), date(2025, 2, 28))

    assert len(index) == 1
    moved = index.all()[0]
    assert moved.occurrence_date == date(2025, 2, 4)
    assert moved.start_time == time(12, 0)
    assert moved.provenance == RuleProvenance(rule_id=1, original_date=date(2025, 1, 13))


def test_reschedule_within_window_keeps_count():
    snapshot = TimetableSnapshot(
        rules=(make_rule(),),
        exceptions=(
            _exception(1, 1, date(2025, 1, 13), ExceptionKind.RESCHEDULED, new_date=date(2025, 1, 14), new_room_id=4),
        ),
    )

    index = collect_occurrences(snapshot, date(2025, 1, 1), date(2025, 1, 31))

    assert len(index) == 4
    assert [o.room_id for o in index.on_date(date(2025, 1, 14))] == [4]
    assert index.on_date(date(2025, 1, 13)) == []


def test_standalone_outside_window_is_dropped_and_inverted_window_is_empty():
    standalone = StandaloneOccurrence(
        id=1,
        course_id=30,
        room_id=1,
        professor_id="prof-3",
        occurrence_date=date(2025, 3, 1),
        start_time="09:00",
        end_time="10:00",
    )
    snapshot = TimetableSnapshot(rules=(make_rule(),), standalone=(standalone,))

    assert len(collect_occurrences(snapshot, date(2025, 1, 1), date(2025, 1, 31))) == 4
    assert len(collect_occurrences(snapshot, date(2025, 1, 31), date(2025, 1, 1))) == 0


def test_rule_and_standalone_on_same_slot_are_both_kept():
    standalone = StandaloneOccurrence(
        id=1,
        course_id=10,
        room_id=1,
        professor_id="prof-1",
        occurrence_date=date(2025, 1, 6),
        start_time="10:00",
        end_time="11:00",
    )
    snapshot = TimetableSnapshot(rules=(make_rule(),), standalone=(standalone,))

    index = collect_occurrences(snapshot, date(2025, 1, 6), date(2025, 1, 6))

    assert sorted(o.provenance.kind for o in index) == ["rule", "standalone"]
