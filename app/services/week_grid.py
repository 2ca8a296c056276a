# app/services/week_grid.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date as date_type, time, timedelta
from typing import Dict, Iterable, List, Tuple

from app.core.config import Settings
from app.schemas.occurrence import Occurrence
from app.schemas.temporal import format_clock_time, iso_weekday, monday_of
from app.schemas.week_grid import GridDay, GridSlot, GridWarning, WeekGrid

logger = logging.getLogger(__name__)

UNALIGNED_OCCURRENCE = "UNALIGNED_OCCURRENCE"


@dataclass(frozen=True)
class GridSlots:
    """
    Fixed-width slot layout of a day column: `slot_count` slots of
    `slot_minutes` each, the first starting at `first_hour`:00.
    Slots never run past midnight.
    """

    first_hour: int = 8
    slot_minutes: int = 60
    slot_count: int = 12

    @classmethod
    def from_settings(cls, settings: Settings) -> GridSlots:
        return cls(
            first_hour=settings.GRID_FIRST_HOUR,
            slot_minutes=settings.GRID_SLOT_MINUTES,
            slot_count=settings.GRID_SLOT_COUNT,
        )

    def boundaries(self) -> List[Tuple[time, time]]:
        result: List[Tuple[time, time]] = []
        day_minutes = 24 * 60
        for idx in range(self.slot_count):
            start = self.first_hour * 60 + idx * self.slot_minutes
            if start >= day_minutes:
                break
            end = min(start + self.slot_minutes, day_minutes)
            # A slot closing at midnight reports 00:00 as its end.
            end_time = time(0, 0) if end == day_minutes else time(end // 60, end % 60)
            result.append((time(start // 60, start % 60), end_time))
        return result


def assemble_week(
    occurrences: Iterable[Occurrence],
    week_start: date_type,
    slots: GridSlots = GridSlots(),
) -> WeekGrid:
    """
    Bucket occurrences into a Monday-to-Sunday grid of day x slot cells.

    Behavior
    --------
    - `week_start` is normalized to the Monday of its week.
    - The grid always has 7 day columns, each with every configured slot.
    - An occurrence lands in the slot whose start equals its start time.
    - Occurrences outside the week are not part of the grid.
    - Occurrences that start between slot boundaries are listed under
      `unaligned` and reported as UNALIGNED_OCCURRENCE warnings.

    Pure function: the same inputs always produce the same grid.
    """
    monday = monday_of(week_start)
    sunday = monday + timedelta(days=6)
    boundaries = slots.boundaries()

    cells: Dict[Tuple[int, time], List[Occurrence]] = {
        (day, start): [] for day in range(1, 8) for start, _ in boundaries
    }
    unaligned: List[Occurrence] = []
    warnings: List[GridWarning] = []

    in_week = sorted(
        (o for o in occurrences if monday <= o.occurrence_date <= sunday),
        key=lambda o: o.sort_key,
    )

    for occurrence in in_week:
        key = (iso_weekday(occurrence.occurrence_date), occurrence.start_time)
        bucket = cells.get(key)
        if bucket is not None:
            bucket.append(occurrence)
            continue

        logger.debug(
            "Occurrence on %s at %s does not start on a grid slot",
            occurrence.occurrence_date.isoformat(),
            occurrence.start_time,
        )
        unaligned.append(occurrence)
        warnings.append(
            GridWarning(
                code=UNALIGNED_OCCURRENCE,
                message=(
                    f"Occurrence on {occurrence.occurrence_date.isoformat()} starting at "
                    f"{format_clock_time(occurrence.start_time)} does not match any grid slot."
                ),
                occurrence=occurrence,
            )
        )

    days = [
        GridDay(
            day_of_week=day,
            on_date=monday + timedelta(days=day - 1),
            slots=[
                GridSlot(start=start, end=end, occurrences=cells[(day, start)])
                for start, end in boundaries
            ],
        )
        for day in range(1, 8)
    ]

    return WeekGrid(
        week_start=monday,
        week_end=sunday,
        slot_minutes=slots.slot_minutes,
        days=days,
        unaligned=unaligned,
        warnings=warnings,
    )
