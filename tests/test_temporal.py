# tests/test_temporal.py
from datetime import date, time, timezone

import pytest

from app.schemas.temporal import (
    TimeInterval,
    format_clock_time,
    iso_weekday,
    monday_of,
    parse_clock_time,
)


def test_parse_clock_time_accepts_both_forms_and_normalizes():
    assert parse_clock_time("10:00") == time(10, 0)
    assert parse_clock_time("10:00:00") == time(10, 0)
    assert parse_clock_time("10:00") == parse_clock_time("10:00:00")
    assert parse_clock_time("09:05:30") == time(9, 5, 30)


def test_parse_clock_time_drops_microseconds_from_time_objects():
    assert parse_clock_time(time(8, 15, 0, 123456)) == time(8, 15)


@pytest.mark.parametrize(
    "raw",
    ["10", "1:00", "25:00", "10:60", "10:00:61", "10:00:00:00", "ten", "10:00Z", "", None, 1000],
)
def test_parse_clock_time_rejects_malformed_values(raw):
    with pytest.raises(ValueError):
        parse_clock_time(raw)


def test_parse_clock_time_rejects_timezone_aware_time():
    with pytest.raises(ValueError):
        parse_clock_time(time(10, 0, tzinfo=timezone.utc))


def test_format_clock_time_is_canonical():
    assert format_clock_time(parse_clock_time("07:30")) == "07:30:00"


def test_iso_weekday_is_monday_first_and_sunday_is_seven():
    """
    The platform's 0-based weekday() would give 0 for Monday and 6 for Sunday;
    the engine only uses the ISO convention.
    """
    assert iso_weekday(date(2025, 1, 6)) == 1  # Monday
    assert iso_weekday(date(2025, 1, 8)) == 3  # Wednesday
    assert iso_weekday(date(2025, 1, 11)) == 6  # Saturday
    assert iso_weekday(date(2025, 1, 12)) == 7  # Sunday
    assert date(2025, 1, 12).weekday() == 6


@pytest.mark.parametrize(
    "given, expected",
    [
        (date(2025, 1, 6), date(2025, 1, 6)),  # Monday stays
        (date(2025, 1, 8), date(2025, 1, 6)),  # Wednesday
        (date(2025, 1, 12), date(2025, 1, 6)),  # Sunday belongs to the week before
        (date(2025, 3, 2), date(2025, 2, 24)),  # across a month boundary
        (date(2025, 1, 1), date(2024, 12, 30)),  # across a year boundary
    ],
)
def test_monday_of(given, expected):
    assert monday_of(given) == expected


def test_adjacent_intervals_do_not_overlap():
    first = TimeInterval(start="09:00", end="10:00")
    second = TimeInterval(start="10:00", end="11:00")

    assert first.overlaps(second) is False
    assert second.overlaps(first) is False


def test_partially_overlapping_intervals_overlap():
    first = TimeInterval(start="09:00", end="10:30")
    second = TimeInterval(start="10:00", end="11:00")

    assert first.overlaps(second) is True
    assert second.overlaps(first) is True


def test_contained_and_identical_intervals_overlap():
    outer = TimeInterval(start="08:00", end="12:00")
    inner = TimeInterval(start="09:00", end="10:00")

    assert outer.overlaps(inner)
    assert inner.overlaps(outer)
    assert inner.overlaps(TimeInterval(start="09:00:00", end="10:00:00"))


def test_empty_or_inverted_interval_overlaps_nothing():
    empty = TimeInterval(start="10:00", end="10:00")
    inverted = TimeInterval(start="11:00", end="10:00")
    wide = TimeInterval(start="08:00", end="18:00")

    assert empty.is_empty
    assert inverted.is_empty
    assert not empty.overlaps(wide)
    assert not wide.overlaps(inverted)
