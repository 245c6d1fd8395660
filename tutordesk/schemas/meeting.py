# tutordesk/schemas/meeting.py
from __future__ import annotations

from datetime import date, datetime, time
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RepeatCadence(str, Enum):
    """
    Interval between occurrences of a repeating meeting.
    """

    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"


# --------------------------------------------------------------------------
# Form input (POST /meetings)
# --------------------------------------------------------------------------

class MeetingCreate(BaseModel):
    """
    Meeting form as submitted by the calendar UI.

    Required fields are typed as optional on purpose: the meeting service
    reports every missing field in one descriptive 400 instead of a
    framework-level 422.
    """

    title: str | None = Field(
        default=None,
        description="Meeting title shown in the calendar.",
        json_schema_extra={"example": "Algebra review"},
    )
    student_id: int | None = Field(
        default=None,
        description="Identifier of the student attending the meeting.",
        json_schema_extra={"example": 1},
    )
    meeting_date: date | None = Field(
        default=None,
        description="Calendar date of the (first) meeting.",
        json_schema_extra={"example": "2024-03-04"},
    )
    start_time: time | None = Field(
        default=None,
        description="Local start time (HH:MM).",
        json_schema_extra={"example": "09:00"},
    )
    end_time: time | None = Field(
        default=None,
        description="Local end time (HH:MM). Must be after start_time.",
        json_schema_extra={"example": "10:00"},
    )
    description: str | None = Field(default=None)
    is_completed: bool = Field(
        default=False,
        description="Only honoured for single, non-repeating meetings.",
    )
    is_repeating: bool = Field(default=False)
    repeat_type: RepeatCadence | None = Field(
        default=None,
        description="Repeat cadence: weekly, biweekly or monthly.",
    )
    repeat_count: int = Field(
        default=1,
        description="Total number of occurrences (2..52 when repeating).",
        json_schema_extra={"example": 4},
    )


# --------------------------------------------------------------------------
# Expander input / output
# --------------------------------------------------------------------------

class MeetingDraft(BaseModel):
    """
    Validated-shape, not-yet-persisted description of a meeting to create.

    Cross-field rules (non-empty title, end after start, repeat count range)
    are checked by `validate_draft` so that they surface as
    `MeetingValidationError` with a descriptive message.
    """

    model_config = ConfigDict(frozen=True)

    title: str
    description: str | None = None
    start: datetime
    end: datetime
    repeat: bool = False
    cadence: RepeatCadence | None = None
    repeat_count: int = 1
    completed: bool = False
    user_id: int | None = None
    student_id: int | None = None


class GeneratedMeeting(BaseModel):
    """
    One concrete occurrence produced by expanding a MeetingDraft.
    """

    model_config = ConfigDict(frozen=True)

    title: str
    description: str | None = None
    start: datetime
    end: datetime
    completed: bool = False
    user_id: int | None = None
    student_id: int | None = None


# --------------------------------------------------------------------------
# Read / update
# --------------------------------------------------------------------------

class MeetingRead(BaseModel):
    """
    Public representation of a stored meeting.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., json_schema_extra={"example": 12})
    student_id: int = Field(..., json_schema_extra={"example": 1})
    title: str = Field(..., json_schema_extra={"example": "Algebra review (2/4)"})
    description: str | None = None
    start_time: datetime = Field(..., json_schema_extra={"example": "2024-03-11T09:00:00"})
    end_time: datetime = Field(..., json_schema_extra={"example": "2024-03-11T10:00:00"})
    is_completed: bool = False


class MeetingUpdate(BaseModel):
    """
    Partial update of a single meeting. Only provided fields are changed.
    """

    title: str | None = Field(default=None)
    description: str | None = Field(default=None)
    start_time: datetime | None = Field(default=None)
    end_time: datetime | None = Field(default=None)
    is_completed: bool | None = Field(default=None)

    @field_validator("start_time", "end_time")
    @classmethod
    def _naive_local_time(cls, value: datetime | None) -> datetime | None:
        # Stored meetings are naive local wall-clock times.
        if value is not None and value.tzinfo is not None:
            raise ValueError("must be a local time without a timezone offset")
        return value
