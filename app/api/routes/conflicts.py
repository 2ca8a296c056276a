# app/api/routes/conflicts.py
from http import HTTPStatus

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies.query_params import validate_window
from app.db.session import get_db
from app.schemas.conflict import (
    ConflictCheckResult,
    ProposedMeeting,
    RuleConflict,
    RuleConflictCheckResult,
)
from app.schemas.recurring_rule import RecurringRuleDraft
from app.services.availability import find_conflicts, find_rule_conflicts
from app.services.timetable import collect_occurrences, load_snapshot

router = APIRouter(prefix="/conflicts", tags=["Conflicts"])


@router.post(
    "/check",
    response_model=ConflictCheckResult,
    status_code=HTTPStatus.OK,
    summary="Check a proposed one-off meeting for room or professor conflicts",
    description=(
        "Report every existing meeting on the same date that uses the same room "
        "or the same professor at an overlapping time.\n\n"
        "This endpoint only answers the question; it never stores or rejects "
        "anything. Pass `standalone_id` when re-checking an edit of an existing "
        "meeting so it is not reported against itself."
    ),
    responses={
        422: {"description": "Invalid payload (e.g. end_time not after start_time)."},
    },
)
async def check_meeting_conflicts(
    payload: ProposedMeeting,
    db: AsyncSession = Depends(get_db),
) -> ConflictCheckResult:
    day = payload.occurrence_date
    snapshot = await load_snapshot(db, day, day)
    index = collect_occurrences(snapshot, day, day)

    conflicts = list(find_conflicts(index, payload.to_occurrence()))
    return ConflictCheckResult(has_conflict=bool(conflicts), conflicts=conflicts)


@router.post(
    "/check-rule",
    response_model=RuleConflictCheckResult,
    status_code=HTTPStatus.OK,
    summary="Check a proposed recurring rule for conflicts over its whole range",
    description=(
        "Expand the proposed weekly rule between its `start_date` and `end_date` "
        "and report, for each generated meeting, the existing meetings it would "
        "collide with (same room or same professor, overlapping time).\n\n"
        "Pass `id` when re-checking an edit of an existing rule so its own "
        "meetings are not reported."
    ),
    responses={
        400: {"description": "Rule range longer than the allowed window."},
        422: {"description": "Invalid payload."},
    },
)
async def check_rule_conflicts(
    payload: RecurringRuleDraft,
    db: AsyncSession = Depends(get_db),
) -> RuleConflictCheckResult:
    validate_window(payload.start_date, payload.end_date)

    snapshot = await load_snapshot(db, payload.start_date, payload.end_date)
    index = collect_occurrences(snapshot, payload.start_date, payload.end_date)

    conflicts = [
        RuleConflict(candidate=candidate, existing=existing)
        for candidate, existing in find_rule_conflicts(index, payload, rule_id=payload.id)
    ]
    return RuleConflictCheckResult(has_conflict=bool(conflicts), conflicts=conflicts)
