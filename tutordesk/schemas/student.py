# tutordesk/schemas/student.py
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


# --------------------------------------------------------------------------
# Base schema shared by create/read
# --------------------------------------------------------------------------

class StudentBase(BaseModel):
    """
    Shared profile fields.
    """

    first_name: str = Field(..., min_length=1, json_schema_extra={"example": "Alice"})
    last_name: str = Field(..., min_length=1, json_schema_extra={"example": "Nguyen"})
    email: EmailStr = Field(..., json_schema_extra={"example": "alice@example.com"})
    phone: str | None = Field(default=None, json_schema_extra={"example": "555-123-4567"})
    subjects: str = Field(
        default="",
        description="Comma-separated subject list.",
        json_schema_extra={"example": "Math, Physics"},
    )
    year: int | None = Field(default=None, ge=1, le=13, description="School year.")
    notes: str | None = Field(default=None)
    parent_name: str | None = Field(default=None)
    parent_email: EmailStr | None = Field(default=None)
    parent_phone: str | None = Field(default=None)


# --------------------------------------------------------------------------
# Create schema (POST /students)
# --------------------------------------------------------------------------

class StudentCreate(StudentBase):
    """
    Schema for creating a student. The rate is given in currency units and
    stored in cents.
    """

    hourly_rate: float = Field(
        default=0.0,
        ge=0,
        description="Hourly rate in currency units, e.g. 50.0.",
        json_schema_extra={"example": 50.0},
    )


# --------------------------------------------------------------------------
# Update schema (PATCH /students/{id})
# --------------------------------------------------------------------------

class StudentUpdate(BaseModel):
    """
    All fields are optional; only provided fields are updated.
    """

    first_name: str | None = Field(default=None, min_length=1)
    last_name: str | None = Field(default=None, min_length=1)
    email: EmailStr | None = Field(default=None)
    phone: str | None = Field(default=None)
    subjects: str | None = Field(default=None)
    year: int | None = Field(default=None, ge=1, le=13)
    hourly_rate: float | None = Field(default=None, ge=0)
    notes: str | None = Field(default=None)
    parent_name: str | None = Field(default=None)
    parent_email: EmailStr | None = Field(default=None)
    parent_phone: str | None = Field(default=None)
    is_active: bool | None = Field(default=None)


# --------------------------------------------------------------------------
# Read schema
# --------------------------------------------------------------------------

class StudentRead(StudentBase):
    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., json_schema_extra={"example": 3})
    email: str
    parent_email: str | None = None
    hourly_rate_cents: int = Field(..., json_schema_extra={"example": 5000})
    is_active: bool = True
    is_archived: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None
