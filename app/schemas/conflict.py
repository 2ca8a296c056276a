# app/schemas/conflict.py
from __future__ import annotations

from datetime import date, time

from pydantic import BaseModel, Field, field_validator, model_validator

from app.schemas.occurrence import Occurrence, StandaloneProvenance
from app.schemas.temporal import parse_clock_time


class ProposedMeeting(BaseModel):
    """
    A one-off meeting that a collaborator wants to create or move.

    If `standalone_id` is given, the stored meeting with that id is ignored
    during the check so that editing a meeting does not conflict with itself.
    """

    standalone_id: int | None = Field(None, description="Id of the meeting being edited, if any.")
    course_id: int = Field(..., examples=[12])
    room_id: int = Field(..., examples=[3])
    professor_id: str = Field(..., examples=["prof-42"])
    occurrence_date: date = Field(..., examples=["2025-02-03"])
    start_time: time = Field(..., examples=["14:00"])
    end_time: time = Field(..., examples=["15:00"])

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def _normalize_time(cls, value):
        return parse_clock_time(value)

    @model_validator(mode="after")
    def _check_interval(self):
        if self.start_time >= self.end_time:
            raise ValueError("start_time must be earlier than end_time")
        return self

    def to_occurrence(self) -> Occurrence:
        return Occurrence(
            course_id=self.course_id,
            room_id=self.room_id,
            professor_id=self.professor_id,
            occurrence_date=self.occurrence_date,
            start_time=self.start_time,
            end_time=self.end_time,
            provenance=StandaloneProvenance(standalone_id=self.standalone_id),
        )


class ConflictCheckResult(BaseModel):
    """
    Outcome of checking one proposed meeting against the timetable.
    """

    has_conflict: bool = Field(..., examples=[True])
    conflicts: list[Occurrence] = Field(
        ...,
        description="Existing occurrences sharing the room or professor at an overlapping time.",
    )


class RuleConflict(BaseModel):
    candidate: Occurrence = Field(..., description="Occurrence the proposed rule would create.")
    existing: Occurrence = Field(..., description="Existing occurrence it collides with.")


class RuleConflictCheckResult(BaseModel):
    """
    Outcome of checking a proposed recurring rule over its whole date range.
    """

    has_conflict: bool
    conflicts: list[RuleConflict]
