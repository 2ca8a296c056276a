# app/services/timetable.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date as date_type
from typing import List, Tuple

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.enrollment import Enrollment as EnrollmentModel
from app.models.recurring_rule import RecurringRule as RecurringRuleModel
from app.models.room import Room as RoomModel
from app.models.schedule_exception import ScheduleException as ScheduleExceptionModel
from app.models.standalone_schedule import StandaloneSchedule as StandaloneScheduleModel
from app.schemas.occurrence import Occurrence, StandaloneOccurrence
from app.schemas.recurring_rule import ExceptionKind, RecurringRule, ScheduleException
from app.schemas.room import Room
from app.services.exception_resolver import ExceptionResolver, index_exceptions
from app.services.occurrence_index import OccurrenceIndex
from app.services.rule_expander import candidate_occurrences, rule_occurrence_on

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TimetableSnapshot:
    """
    Immutable, request-scoped copy of the collaborator records needed to
    answer one query. Fetched once at the start of a request; the engine
    never reads storage after that.
    """

    rules: Tuple[RecurringRule, ...] = ()
    exceptions: Tuple[ScheduleException, ...] = ()
    standalone: Tuple[StandaloneOccurrence, ...] = ()
    rooms: Tuple[Room, ...] = ()


async def load_rooms(db: AsyncSession) -> List[Room]:
    result = await db.execute(select(RoomModel).order_by(RoomModel.id.asc()))
    return [Room.model_validate(r) for r in result.scalars().all()]


async def load_enrolled_course_ids(db: AsyncSession, student_id: str) -> List[int]:
    """
    Course ids a student is enrolled in. Unknown students simply have none.
    """
    stmt = (
        select(EnrollmentModel.course_id)
        .where(EnrollmentModel.student_id == student_id)
        .order_by(EnrollmentModel.course_id)
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def load_snapshot(
    db: AsyncSession,
    window_start: date_type,
    window_end: date_type,
) -> TimetableSnapshot:
    """
    Fetch everything needed to expand occurrences in [window_start, window_end].

    Steps
    -----
    1) Rules whose active range intersects the window.
    2) Rules with a reschedule that moves an occurrence into the window from
       outside it (their own range may not touch the window).
    3) All exceptions of those rules.
    4) Standalone meetings dated inside the window.
    5) The full room directory.
    """
    rooms = await load_rooms(db)
    if window_start > window_end:
        return TimetableSnapshot(rooms=tuple(rooms))

    inbound_stmt = select(ScheduleExceptionModel.rule_id).where(
        and_(
            ScheduleExceptionModel.kind == ExceptionKind.RESCHEDULED.value,
            ScheduleExceptionModel.new_date >= window_start,
            ScheduleExceptionModel.new_date <= window_end,
        )
    )
    inbound_rule_ids = set((await db.execute(inbound_stmt)).scalars().all())

    rules_stmt = (
        select(RecurringRuleModel)
        .where(
            and_(
                RecurringRuleModel.start_date <= window_end,
                RecurringRuleModel.end_date >= window_start,
            )
        )
        .order_by(RecurringRuleModel.id)
    )
    rule_rows = list((await db.execute(rules_stmt)).scalars().all())

    missing_ids = inbound_rule_ids - {r.id for r in rule_rows}
    if missing_ids:
        extra_stmt = (
            select(RecurringRuleModel)
            .where(RecurringRuleModel.id.in_(missing_ids))
            .order_by(RecurringRuleModel.id)
        )
        rule_rows.extend((await db.execute(extra_stmt)).scalars().all())

    rules = tuple(RecurringRule.model_validate(r) for r in rule_rows)

    exceptions: Tuple[ScheduleException, ...] = ()
    if rules:
        exc_stmt = (
            select(ScheduleExceptionModel)
            .where(ScheduleExceptionModel.rule_id.in_([r.id for r in rules]))
            .order_by(ScheduleExceptionModel.id)
        )
        exceptions = tuple(
            ScheduleException.model_validate(e)
            for e in (await db.execute(exc_stmt)).scalars().all()
        )

    standalone_stmt = (
        select(StandaloneScheduleModel)
        .where(
            and_(
                StandaloneScheduleModel.occurrence_date >= window_start,
                StandaloneScheduleModel.occurrence_date <= window_end,
            )
        )
        .order_by(StandaloneScheduleModel.occurrence_date, StandaloneScheduleModel.id)
    )
    standalone = tuple(
        StandaloneOccurrence.model_validate(s)
        for s in (await db.execute(standalone_stmt)).scalars().all()
    )

    logger.debug(
        "Loaded snapshot for %s..%s: %d rules, %d exceptions, %d standalone, %d rooms",
        window_start.isoformat(),
        window_end.isoformat(),
        len(rules),
        len(exceptions),
        len(standalone),
        len(rooms),
    )

    return TimetableSnapshot(
        rules=rules,
        exceptions=exceptions,
        standalone=standalone,
        rooms=tuple(rooms),
    )


def collect_occurrences(
    snapshot: TimetableSnapshot,
    window_start: date_type,
    window_end: date_type,
) -> OccurrenceIndex:
    """
    Run the expansion pipeline over a snapshot and return the merged index of
    occurrences whose effective date lies in [window_start, window_end].

    Window membership is decided by the effective (possibly rescheduled)
    date: a reschedule moving an occurrence out of the window removes it, one
    moving an occurrence in from outside the window adds it.
    """
    if window_start > window_end:
        return OccurrenceIndex([])

    exceptions_by_key = index_exceptions(snapshot.exceptions)
    rules_by_id = {rule.id: rule for rule in snapshot.rules}

    candidates: List[Occurrence] = []
    for rule in snapshot.rules:
        candidates.extend(candidate_occurrences(rule, window_start, window_end))

    for (rule_id, original_date), exc in exceptions_by_key.items():
        if exc.kind != ExceptionKind.RESCHEDULED or exc.new_date is None:
            continue
        if window_start <= original_date <= window_end:
            continue
        if not window_start <= exc.new_date <= window_end:
            continue
        rule = rules_by_id.get(rule_id)
        if rule is None:
            continue
        inbound = rule_occurrence_on(rule, original_date)
        if inbound is not None:
            candidates.append(inbound)

    resolved = (
        o
        for o in ExceptionResolver.resolve(candidates, exceptions_by_key)
        if window_start <= o.occurrence_date <= window_end
    )
    standalone = (
        s.to_occurrence()
        for s in snapshot.standalone
        if window_start <= s.occurrence_date <= window_end
    )
    return OccurrenceIndex.build(resolved, standalone)
