# app/services/exception_resolver.py
from __future__ import annotations

import logging
from datetime import date as date_type, datetime, timezone
from typing import Dict, Iterable, Iterator, Tuple

from app.schemas.occurrence import Occurrence, RuleProvenance
from app.schemas.recurring_rule import ExceptionKind, ScheduleException

logger = logging.getLogger(__name__)

ExceptionKey = Tuple[int, date_type]


def _recency(exc: ScheduleException) -> tuple[datetime, int]:
    # Records without a timestamp sort before any timestamped one.
    created = exc.created_at
    if created is None:
        return (datetime.min, exc.id)
    if created.tzinfo is not None:
        created = created.astimezone(timezone.utc).replace(tzinfo=None)
    return (created, exc.id)


def index_exceptions(
    exceptions: Iterable[ScheduleException],
) -> Dict[ExceptionKey, ScheduleException]:
    """
    Index exceptions by (rule_id, original date).

    The owning collaborator rejects duplicates on write; if stale data still
    contains several exceptions for one key, the most recently created one
    wins (ties broken by the higher id) and the anomaly is logged.
    """
    index: Dict[ExceptionKey, ScheduleException] = {}

    for exc in exceptions:
        current = index.get(exc.key)
        if current is None:
            index[exc.key] = exc
            continue

        winner = exc if _recency(exc) > _recency(current) else current
        logger.warning(
            "Ambiguous schedule exceptions for rule %s on %s: ids %s and %s; using %s",
            exc.rule_id,
            exc.exception_date.isoformat(),
            current.id,
            exc.id,
            winner.id,
        )
        index[exc.key] = winner

    return index


class ExceptionResolver:
    """
    Applies cancellations and reschedules to rule-derived candidate occurrences.

    Rules
    -----
    1) Candidate without an exception        => passes through unchanged
    2) CANCELLED exception                   => candidate dropped
    3) RESCHEDULED exception                 => date/time/room replaced by the
                                                override values that are set;
                                                provenance kept as-is

    Standalone occurrences always pass through. Exceptions that match no
    candidate are ignored.
    """

    @staticmethod
    def apply(occurrence: Occurrence, exc: ScheduleException) -> Occurrence | None:
        """
        Apply one exception to one occurrence. Returns None when cancelled.
        """
        if exc.kind == ExceptionKind.CANCELLED:
            return None

        changes = {}
        if exc.new_date is not None:
            changes["occurrence_date"] = exc.new_date
        if exc.new_start_time is not None:
            changes["start_time"] = exc.new_start_time
        if exc.new_end_time is not None:
            changes["end_time"] = exc.new_end_time
        if exc.new_room_id is not None:
            changes["room_id"] = exc.new_room_id

        if not changes:
            return occurrence

        moved = occurrence.model_copy(update=changes)
        if moved.interval.is_empty:
            logger.warning(
                "Rescheduled occurrence of rule %s (original %s) has an empty interval %s-%s",
                exc.rule_id,
                exc.exception_date.isoformat(),
                moved.start_time,
                moved.end_time,
            )
        return moved

    @classmethod
    def resolve(
        cls,
        candidates: Iterable[Occurrence],
        exceptions: Iterable[ScheduleException] | Dict[ExceptionKey, ScheduleException],
    ) -> Iterator[Occurrence]:
        """
        Yield the effective occurrences, preserving the candidates' order.
        """
        if isinstance(exceptions, dict):
            by_key = exceptions
        else:
            by_key = index_exceptions(exceptions)

        for occurrence in candidates:
            provenance = occurrence.provenance
            if not isinstance(provenance, RuleProvenance):
                yield occurrence
                continue

            exc = by_key.get((provenance.rule_id, provenance.original_date))
            if exc is None:
                yield occurrence
                continue

            resolved = cls.apply(occurrence, exc)
            if resolved is not None:
                yield resolved
