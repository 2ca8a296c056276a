# app/services/occurrence_index.py
from __future__ import annotations

from datetime import date as date_type
from typing import Collection, Iterable, Iterator, List

from app.schemas.occurrence import Occurrence


class OccurrenceIndex:
    """
    Merged, de-duplicated view of the occurrences inside one query window.

    Lookups are linear scans: a window holds at most one semester of meetings,
    so a secondary index would not pay for itself.
    """

    def __init__(self, occurrences: List[Occurrence]) -> None:
        self._occurrences = occurrences

    @classmethod
    def build(
        cls,
        rule_occurrences: Iterable[Occurrence],
        standalone_occurrences: Iterable[Occurrence] = (),
    ) -> OccurrenceIndex:
        """
        Concatenate both sources, drop exact duplicates (first one wins) and
        sort by date, then start/end time, then room/course/professor.

        No rule-vs-standalone conflict resolution happens here; overlapping
        meetings are all kept and can be reported by the availability checks.
        """
        seen: set[Occurrence] = set()
        merged: List[Occurrence] = []

        for source in (rule_occurrences, standalone_occurrences):
            for occurrence in source:
                if occurrence in seen:
                    continue
                seen.add(occurrence)
                merged.append(occurrence)

        merged.sort(key=lambda o: o.sort_key)
        return cls(merged)

    def __iter__(self) -> Iterator[Occurrence]:
        return iter(self._occurrences)

    def __len__(self) -> int:
        return len(self._occurrences)

    def all(self) -> List[Occurrence]:
        return list(self._occurrences)

    def on_date(self, on: date_type) -> List[Occurrence]:
        return [o for o in self._occurrences if o.occurrence_date == on]

    def by_room(self, room_id: int, on: date_type | None = None) -> List[Occurrence]:
        return [
            o
            for o in self._occurrences
            if o.room_id == room_id and (on is None or o.occurrence_date == on)
        ]

    def by_professor(self, professor_id: str, on: date_type | None = None) -> List[Occurrence]:
        return [
            o
            for o in self._occurrences
            if o.professor_id == professor_id and (on is None or o.occurrence_date == on)
        ]

    def by_course(self, course_id: int, on: date_type | None = None) -> List[Occurrence]:
        return [
            o
            for o in self._occurrences
            if o.course_id == course_id and (on is None or o.occurrence_date == on)
        ]

    def by_courses(self, course_ids: Collection[int]) -> List[Occurrence]:
        """Occurrences of any of the given courses (e.g. a student's enrollments)."""
        wanted = set(course_ids)
        return [o for o in self._occurrences if o.course_id in wanted]

    def filter(
        self,
        room_id: int | None = None,
        professor_id: str | None = None,
        course_id: int | None = None,
        course_ids: Collection[int] | None = None,
    ) -> OccurrenceIndex:
        """
        Narrow the index by any combination of room, professor and course(s).
        Filters that are None are not applied.
        """
        result = self._occurrences
        if room_id is not None:
            result = [o for o in result if o.room_id == room_id]
        if professor_id is not None:
            result = [o for o in result if o.professor_id == professor_id]
        if course_id is not None:
            result = [o for o in result if o.course_id == course_id]
        if course_ids is not None:
            wanted = set(course_ids)
            result = [o for o in result if o.course_id in wanted]
        return OccurrenceIndex(list(result))
