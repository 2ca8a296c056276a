# app/schemas/recurring_rule.py
from __future__ import annotations

from datetime import date, datetime, time
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from app.schemas.temporal import MONDAY, SUNDAY, parse_clock_time


class RecurringRuleBase(BaseModel):
    """
    Weekly-repeating template for a course meeting.

    The rule is active on every `day_of_week` (ISO, Monday=1) between
    `start_date` and `end_date`, both inclusive.
    """

    model_config = ConfigDict(frozen=True, from_attributes=True)

    course_id: int = Field(..., description="Identifier of the course taught.", examples=[12])
    room_id: int = Field(..., description="Identifier of the room used.", examples=[3])
    professor_id: str = Field(
        ...,
        description="Identifier of the professor teaching the meeting.",
        examples=["prof-42"],
    )
    day_of_week: int = Field(
        ...,
        ge=MONDAY,
        le=SUNDAY,
        description="ISO day of week: 1 (Monday) .. 7 (Sunday).",
        examples=[1],
    )
    start_time: time = Field(..., description="Meeting start (HH:MM or HH:MM:SS).", examples=["10:00:00"])
    end_time: time = Field(..., description="Meeting end, exclusive.", examples=["11:00:00"])
    start_date: date = Field(..., description="First date (inclusive) the rule is active.", examples=["2025-01-06"])
    end_date: date = Field(..., description="Last date (inclusive) the rule is active.", examples=["2025-01-27"])

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def _normalize_time(cls, value):
        return parse_clock_time(value)

    @model_validator(mode="after")
    def _check_ranges(self):
        if self.start_time >= self.end_time:
            raise ValueError("start_time must be earlier than end_time")
        if self.start_date > self.end_date:
            raise ValueError("start_date must not be after end_date")
        return self


class RecurringRuleDraft(RecurringRuleBase):
    """
    A proposed rule that has not been persisted yet (used by conflict checks).
    """

    id: int | None = Field(
        None,
        description="Identifier of the rule being edited, if it already exists.",
    )


class RecurringRule(RecurringRuleBase):
    id: int = Field(..., description="Identifier of the recurring rule.", examples=[7])


class ExceptionKind(str, Enum):
    """
    What a ScheduleException does to the occurrence it targets.
    """

    CANCELLED = "CANCELLED"
    RESCHEDULED = "RESCHEDULED"


class ScheduleException(BaseModel):
    """
    Per-date override of a recurring rule.

    `exception_date` is the rule's original occurrence date. For RESCHEDULED
    exceptions, every `new_*` field that is set replaces the corresponding
    value of the occurrence; unset fields keep the rule's value.
    """

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: int = Field(..., description="Identifier of the exception record.")
    rule_id: int = Field(..., description="Recurring rule this exception applies to.")
    exception_date: date = Field(
        ...,
        description="Original occurrence date targeted by this exception.",
        examples=["2025-01-13"],
    )
    kind: ExceptionKind = Field(..., examples=["CANCELLED"])
    new_date: date | None = Field(None, description="Replacement date, if moved.")
    new_start_time: time | None = Field(None, description="Replacement start time.")
    new_end_time: time | None = Field(None, description="Replacement end time.")
    new_room_id: int | None = Field(None, description="Replacement room.")
    reason: str | None = Field(None, description="Free-text note from the administrator.")
    created_at: datetime | None = Field(
        None,
        description="Creation timestamp; the most recent wins if duplicates exist.",
    )

    @field_validator("new_start_time", "new_end_time", mode="before")
    @classmethod
    def _normalize_time(cls, value):
        if value is None:
            return None
        return parse_clock_time(value)

    @property
    def key(self) -> tuple[int, date]:
        return (self.rule_id, self.exception_date)
