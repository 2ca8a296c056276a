# app/schemas/temporal.py
from __future__ import annotations

from datetime import date, time, timedelta

from pydantic import BaseModel, ConfigDict, Field, field_validator

MONDAY = 1
SUNDAY = 7


def parse_clock_time(value: str | time) -> time:
    """
    Normalize a clock time to a naive `time` with whole seconds.

    Accepts `HH:MM` and `HH:MM:SS` strings (or an existing `time`). Both
    forms map to the same canonical value, so "10:00" == "10:00:00".
    """
    if isinstance(value, time):
        if value.tzinfo is not None:
            raise ValueError("clock times must not carry a timezone")
        return value.replace(microsecond=0)

    if not isinstance(value, str):
        raise ValueError(f"expected HH:MM or HH:MM:SS, got {value!r}")

    parts = value.strip().split(":")
    if len(parts) not in (2, 3) or not all(p.isdigit() and len(p) == 2 for p in parts):
        raise ValueError(f"expected HH:MM or HH:MM:SS, got {value!r}")

    hour, minute = int(parts[0]), int(parts[1])
    second = int(parts[2]) if len(parts) == 3 else 0
    # time() raises ValueError for out-of-range components
    return time(hour, minute, second)


def format_clock_time(value: time) -> str:
    """Canonical wire form: HH:MM:SS."""
    return value.strftime("%H:%M:%S")


def iso_weekday(d: date) -> int:
    """Day of week as 1 (Monday) .. 7 (Sunday)."""
    return d.isoweekday()


def monday_of(d: date) -> date:
    """Monday of the ISO week containing `d` (Sunday belongs to the week before)."""
    return d - timedelta(days=iso_weekday(d) - 1)


class TimeInterval(BaseModel):
    """
    Half-open clock interval [start, end) on a single calendar date.

    Two intervals touching at a boundary (one ends at 10:00, the next starts
    at 10:00) do not overlap. An empty or inverted interval overlaps nothing.
    """

    model_config = ConfigDict(frozen=True)

    start: time = Field(..., description="Inclusive start of the interval.")
    end: time = Field(..., description="Exclusive end of the interval.")

    @field_validator("start", "end", mode="before")
    @classmethod
    def _normalize_time(cls, value):
        return parse_clock_time(value)

    @property
    def is_empty(self) -> bool:
        return self.end <= self.start

    def overlaps(self, other: TimeInterval) -> bool:
        if self.is_empty or other.is_empty:
            return False
        return self.start < other.end and other.start < self.end
