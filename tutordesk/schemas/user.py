# tutordesk/schemas/user.py
from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserCreate(BaseModel):
    email: EmailStr = Field(..., json_schema_extra={"example": "tutor@example.com"})
    name: str | None = Field(default=None, json_schema_extra={"example": "Default Tutor"})


class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str | None = None
    created_at: datetime | None = None


class UserSettingsPayload(BaseModel):
    """
    Subject list and subject colour mapping for one tutor.
    """

    subjects: list[str] = Field(
        default_factory=list,
        json_schema_extra={"example": ["Math", "Physics"]},
    )
    subject_colors: dict[str, str] = Field(
        default_factory=dict,
        description="Subject name to colour name, e.g. {'Math': 'Blue'}.",
    )
