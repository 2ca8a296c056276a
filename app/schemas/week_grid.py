# app/schemas/week_grid.py
from datetime import date, time

from pydantic import BaseModel, Field

from app.schemas.occurrence import Occurrence


class GridSlot(BaseModel):
    """
    One fixed-width time bucket of a day column.
    """

    start: time = Field(..., description="Slot start (inclusive).", examples=["08:00:00"])
    end: time = Field(
        ...,
        description="Slot end (exclusive). 00:00:00 on a day's last slot means midnight.",
        examples=["09:00:00"],
    )
    occurrences: list[Occurrence] = Field(
        default_factory=list,
        description="Occurrences whose start time equals the slot start.",
    )


class GridDay(BaseModel):
    day_of_week: int = Field(..., ge=1, le=7, description="ISO day of week, Monday=1.")
    on_date: date = Field(..., description="Calendar date of this column.")
    slots: list[GridSlot]


class GridWarning(BaseModel):
    """
    Non-fatal data-quality condition found while assembling the grid.
    """

    code: str = Field(..., examples=["UNALIGNED_OCCURRENCE"])
    message: str
    occurrence: Occurrence | None = None


class WeekGrid(BaseModel):
    """
    Day x slot view of one Monday-to-Sunday week.

    `days` always holds exactly 7 entries. Occurrences that do not start on a
    slot boundary are listed in `unaligned` and reported in `warnings`.
    """

    week_start: date = Field(..., description="Monday of the week.", examples=["2025-01-06"])
    week_end: date = Field(..., description="Sunday of the week.", examples=["2025-01-12"])
    slot_minutes: int = Field(..., examples=[60])
    days: list[GridDay]
    unaligned: list[Occurrence] = Field(default_factory=list)
    warnings: list[GridWarning] = Field(default_factory=list)

    def cell(self, day_of_week: int, slot_start: time) -> list[Occurrence]:
        """Occurrences in the (day, slot) bucket; empty if no such slot."""
        day = self.days[day_of_week - 1]
        for slot in day.slots:
            if slot.start == slot_start:
                return slot.occurrences
        return []
