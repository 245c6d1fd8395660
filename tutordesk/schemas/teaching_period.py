# tutordesk/schemas/teaching_period.py
from __future__ import annotations

from datetime import date
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


# --------------------------------------------------------------------------
# Create / update payloads
# --------------------------------------------------------------------------

class PeriodBase(BaseModel):
    """
    Fields shared by term and holiday payloads.
    """

    name: str = Field(
        ...,
        min_length=1,
        description="Display name, e.g. 'Spring Term' or 'Half Term'.",
        json_schema_extra={"example": "Spring Term"},
    )
    start_date: date = Field(..., json_schema_extra={"example": "2024-01-08"})
    end_date: date = Field(
        ...,
        description="Inclusive end date. Must not be before start_date.",
        json_schema_extra={"example": "2024-03-28"},
    )
    year: int = Field(..., ge=1900, le=9999, json_schema_extra={"example": 2024})
    color: str | None = Field(
        default=None,
        description="Display colour; a per-type default is used when omitted.",
    )

    @model_validator(mode="after")
    def _check_range(self) -> "PeriodBase":
        if not self.name.strip():
            raise ValueError("name must not be blank")
        if self.end_date < self.start_date:
            raise ValueError("end_date must be on or after start_date")
        return self


class TermCreate(PeriodBase):
    is_active: bool = Field(
        default=True,
        description="Inactive terms are ignored by the current-term lookup.",
    )


class HolidayCreate(PeriodBase):
    pass


# --------------------------------------------------------------------------
# Tagged union returned to clients
# --------------------------------------------------------------------------

class TermPeriod(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    type: Literal["term"] = "term"
    id: int
    name: str
    start_date: date
    end_date: date
    year: int
    color: str
    is_active: bool = True


class HolidayPeriod(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    type: Literal["holiday"] = "holiday"
    id: int
    name: str
    start_date: date
    end_date: date
    year: int
    color: str


TeachingPeriod = Annotated[
    Union[TermPeriod, HolidayPeriod],
    Field(discriminator="type"),
]


# --------------------------------------------------------------------------
# Derived values
# --------------------------------------------------------------------------

class Gap(BaseModel):
    """
    Uncovered date range between two chronologically adjacent periods.
    Both bounds are inclusive.
    """

    model_config = ConfigDict(frozen=True)

    start_date: date = Field(..., json_schema_extra={"example": "2024-02-15"})
    end_date: date = Field(..., json_schema_extra={"example": "2024-02-29"})


class CurrentTermStatus(BaseModel):
    """
    Active term containing `today`, if any, with the week position in it.
    """

    today: date
    term: TermPeriod | None = None
    week: int | None = Field(
        default=None,
        description="1-based week number within the current term.",
    )
    total_weeks: int | None = Field(
        default=None,
        description="Number of (possibly partial) weeks in the current term.",
    )


class WeekInfo(BaseModel):
    """
    Week label for one calendar day: the first period that contains it.
    """

    day: date
    period_name: str
    period_type: Literal["term", "holiday"]
    week: int
    total_weeks: int


class TeachingOverview(BaseModel):
    """
    Everything the calendar needs to render the academic year banner.
    """

    periods: list[TeachingPeriod] = Field(
        ...,
        description="Terms and holidays merged and sorted by start date.",
    )
    gaps: list[Gap] = Field(
        ...,
        description="Uncovered ranges between consecutive periods.",
    )
    current: CurrentTermStatus
