# app/services/rule_expander.py
from __future__ import annotations

from datetime import date as date_type, datetime, time
from typing import Iterator

from dateutil.rrule import WEEKLY, rrule

from app.schemas.occurrence import Occurrence, RuleProvenance
from app.schemas.recurring_rule import RecurringRuleBase
from app.schemas.temporal import iso_weekday


def expand_rule(
    rule: RecurringRuleBase,
    window_start: date_type,
    window_end: date_type,
) -> Iterator[date_type]:
    """
    Yield every date in `window_start..window_end` (inclusive) on which the
    rule produces a meeting, in ascending order.

    Steps
    -----
    1) Clamp the window to the rule's active range.
    2) Let a weekly rrule on the rule's weekday walk the clamped range.

    An inverted window, or one that does not intersect the rule's range,
    yields nothing.
    """
    first = max(rule.start_date, window_start)
    last = min(rule.end_date, window_end)
    if first > last:
        return

    # rrule weekdays are 0-based (MO=0). With wkst on the rule's weekday every
    # weekly set starts on a meeting date, so none reaches past date.max.
    weekday = rule.day_of_week - 1
    dates = rrule(
        WEEKLY,
        byweekday=weekday,
        wkst=weekday,
        dtstart=datetime.combine(first, time.min),
        until=datetime.combine(last, time.min),
    )
    for occurrence_start in dates:
        yield occurrence_start.date()


def is_rule_date(rule: RecurringRuleBase, d: date_type) -> bool:
    """True if the rule produces a meeting on `d`."""
    return rule.start_date <= d <= rule.end_date and iso_weekday(d) == rule.day_of_week


def _occurrence_for(rule: RecurringRuleBase, rule_id: int, d: date_type) -> Occurrence:
    return Occurrence(
        course_id=rule.course_id,
        room_id=rule.room_id,
        professor_id=rule.professor_id,
        occurrence_date=d,
        start_time=rule.start_time,
        end_time=rule.end_time,
        provenance=RuleProvenance(rule_id=rule_id, original_date=d),
    )


def candidate_occurrences(
    rule: RecurringRuleBase,
    window_start: date_type,
    window_end: date_type,
    rule_id: int | None = None,
) -> Iterator[Occurrence]:
    """
    Pair each expanded date with the rule's course/room/professor/times.

    `rule_id` defaults to `rule.id`; drafts without an id use 0.
    """
    if rule_id is None:
        rule_id = getattr(rule, "id", None) or 0

    for d in expand_rule(rule, window_start, window_end):
        yield _occurrence_for(rule, rule_id, d)


def rule_occurrence_on(rule: RecurringRuleBase, original_date: date_type) -> Occurrence | None:
    """
    The candidate occurrence the rule produces on `original_date`, or None if
    that date is not one of the rule's dates.
    """
    if not is_rule_date(rule, original_date):
        return None
    return _occurrence_for(rule, getattr(rule, "id", None) or 0, original_date)
