# app/schemas/occurrence.py
from __future__ import annotations

from datetime import date, time
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.schemas.temporal import TimeInterval, parse_clock_time


class RuleProvenance(BaseModel):
    """
    Occurrence derived from a recurring rule.

    `original_date` is the date the rule produced, which stays stable even
    when a reschedule moves the occurrence to another date.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["rule"] = "rule"
    rule_id: int
    original_date: date


class StandaloneProvenance(BaseModel):
    """
    Occurrence coming from a one-off meeting. `standalone_id` is None for a
    proposed meeting that has not been stored yet.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["standalone"] = "standalone"
    standalone_id: int | None = None


Provenance = Annotated[
    Union[RuleProvenance, StandaloneProvenance],
    Field(discriminator="kind"),
]


class Occurrence(BaseModel):
    """
    One concrete, dated instance of a course meeting.

    Value object: two occurrences are equal iff all fields match, so they can
    be de-duplicated through a set.
    """

    model_config = ConfigDict(frozen=True)

    course_id: int = Field(..., examples=[12])
    room_id: int = Field(..., examples=[3])
    professor_id: str = Field(..., examples=["prof-42"])
    occurrence_date: date = Field(..., examples=["2025-01-06"])
    start_time: time = Field(..., examples=["10:00:00"])
    end_time: time = Field(..., examples=["11:00:00"])
    provenance: Provenance

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def _normalize_time(cls, value):
        return parse_clock_time(value)

    @property
    def interval(self) -> TimeInterval:
        return TimeInterval(start=self.start_time, end=self.end_time)

    @property
    def sort_key(self) -> tuple:
        return (
            self.occurrence_date,
            self.start_time,
            self.end_time,
            self.room_id,
            self.course_id,
            self.professor_id,
        )


class StandaloneOccurrence(BaseModel):
    """
    A single non-recurring meeting as stored by the scheduling collaborator.
    """

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: int
    course_id: int
    room_id: int
    professor_id: str
    occurrence_date: date
    start_time: time
    end_time: time

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def _normalize_time(cls, value):
        return parse_clock_time(value)

    def to_occurrence(self) -> Occurrence:
        return Occurrence(
            course_id=self.course_id,
            room_id=self.room_id,
            professor_id=self.professor_id,
            occurrence_date=self.occurrence_date,
            start_time=self.start_time,
            end_time=self.end_time,
            provenance=StandaloneProvenance(standalone_id=self.id),
        )
