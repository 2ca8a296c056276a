# app/services/availability.py
from __future__ import annotations

from datetime import date as date_type
from typing import Iterable, Iterator, Tuple

from app.schemas.occurrence import Occurrence, StandaloneProvenance
from app.schemas.recurring_rule import RecurringRuleBase
from app.schemas.room import Room
from app.schemas.temporal import TimeInterval
from app.services.rule_expander import candidate_occurrences


def free_rooms(
    all_rooms: Iterable[Room],
    occurrences_on_date: Iterable[Occurrence],
    query_date: date_type,
    query_interval: TimeInterval,
    min_capacity: int | None = None,
    room_type: str | None = None,
) -> Iterator[Room]:
    """
    Yield the rooms that have no occurrence overlapping `query_interval` on
    `query_date`, in the order of `all_rooms`.

    Occurrences on other dates are ignored, so callers may pass a wider set.
    `min_capacity` and `room_type` (case-insensitive) narrow the candidate
    rooms further. An empty query interval makes every room free.
    """
    busy: set[int] = set()
    for occurrence in occurrences_on_date:
        if occurrence.occurrence_date != query_date:
            continue
        if occurrence.interval.overlaps(query_interval):
            busy.add(occurrence.room_id)

    wanted_type = room_type.lower() if room_type else None

    for room in all_rooms:
        if room.id in busy:
            continue
        if min_capacity is not None and room.capacity < min_capacity:
            continue
        if wanted_type is not None and room.room_type.lower() != wanted_type:
            continue
        yield room


def _is_same_meeting(existing: Occurrence, candidate: Occurrence) -> bool:
    # A candidate without a stored id cannot be an existing meeting.
    provenance = candidate.provenance
    if isinstance(provenance, StandaloneProvenance) and provenance.standalone_id is None:
        return False
    return existing.provenance == provenance


def _collides(existing: Occurrence, candidate: Occurrence) -> bool:
    if existing.occurrence_date != candidate.occurrence_date:
        return False
    if existing.room_id != candidate.room_id and existing.professor_id != candidate.professor_id:
        return False
    return existing.interval.overlaps(candidate.interval)


def find_conflicts(
    existing_occurrences: Iterable[Occurrence],
    candidate: Occurrence,
) -> Iterator[Occurrence]:
    """
    Yield existing occurrences on the candidate's date that share its room or
    its professor and overlap its interval.

    An existing occurrence with the same provenance as the candidate is the
    candidate itself (an edit being re-checked) and is skipped.
    """
    for existing in existing_occurrences:
        if _is_same_meeting(existing, candidate):
            continue
        if _collides(existing, candidate):
            yield existing


def has_conflict(existing_occurrences: Iterable[Occurrence], candidate: Occurrence) -> bool:
    """
    True if any existing occurrence double-books the candidate's room or
    professor. This only answers the query; rejecting the write is up to the
    caller.
    """
    return next(find_conflicts(existing_occurrences, candidate), None) is not None


def find_rule_conflicts(
    existing_occurrences: Iterable[Occurrence],
    rule: RecurringRuleBase,
    rule_id: int | None = None,
) -> Iterator[Tuple[Occurrence, Occurrence]]:
    """
    Expand a proposed recurring rule over its own date range and yield
    `(candidate, existing)` pairs for every collision.

    When `rule_id` is given (editing an existing rule), occurrences already
    derived from that rule are not counted against it.
    """
    existing = list(existing_occurrences)
    if rule_id is not None:
        existing = [
            o
            for o in existing
            if getattr(o.provenance, "rule_id", None) != rule_id
        ]

    for candidate in candidate_occurrences(rule, rule.start_date, rule.end_date, rule_id=rule_id):
        for clash in find_conflicts(existing, candidate):
            yield candidate, clash
