# tutordesk/services/user_service.py
from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tutordesk.models.user import User
from tutordesk.models.user_settings import UserSettings
from tutordesk.schemas.user import UserCreate, UserSettingsPayload

logger = logging.getLogger(__name__)

DEFAULT_SUBJECT_COLORS: dict[str, str] = {
    "Math": "Blue",
    "English": "Green",
    "Science": "Purple",
    "Physics": "Indigo",
    "Chemistry": "Pink",
    "Biology": "Emerald",
    "History": "Amber",
    "Geography": "Teal",
    "Art": "Rose",
    "Music": "Violet",
    "PE": "Orange",
    "Computer Science": "Cyan",
    "Economics": "Lime",
    "Spanish": "Red",
    "French": "Blue",
    "German": "Yellow",
}

DEFAULT_SUBJECTS: list[str] = list(DEFAULT_SUBJECT_COLORS)


async def create_user(db: AsyncSession, payload: UserCreate) -> User:
    """
    Register a tutor account. Emails are stored lowercased and must be unique.
    """
    email = str(payload.email).strip().lower()

    existing = await db.execute(select(User).where(User.email == email))
    if existing.scalar_one_or_none() is not None:
        raise ValueError(f"User with email '{email}' already exists.")

    user = User(email=email, name=(payload.name or "").strip() or None)
    db.add(user)
    await db.commit()
    await db.refresh(user)

    logger.info("Registered user id=%s", user.id)
    return user


async def get_user(db: AsyncSession, user_id: int) -> User | None:
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def get_settings_for(db: AsyncSession, user_id: int) -> UserSettingsPayload:
    """
    Stored preferences of a user, or the defaults when none were saved.
    """
    result = await db.execute(select(UserSettings).where(UserSettings.user_id == user_id))
    row = result.scalar_one_or_none()
    if row is None:
        return UserSettingsPayload(
            subjects=list(DEFAULT_SUBJECTS),
            subject_colors=dict(DEFAULT_SUBJECT_COLORS),
        )
    return UserSettingsPayload(subjects=row.subjects, subject_colors=row.subject_colors)


async def save_settings_for(
    db: AsyncSession,
    user_id: int,
    payload: UserSettingsPayload,
) -> UserSettingsPayload:
    """
    Replace the stored preferences of a user (insert on first save).
    """
    subjects: list[str] = []
    for subject in payload.subjects:
        name = subject.strip()
        if name and name not in subjects:
            subjects.append(name)
    colors = {k.strip(): v.strip() for k, v in payload.subject_colors.items() if k.strip()}

    result = await db.execute(select(UserSettings).where(UserSettings.user_id == user_id))
    row = result.scalar_one_or_none()
    if row is None:
        row = UserSettings(user_id=user_id)
        db.add(row)

    row.subjects = subjects
    row.subject_colors = colors

    await db.commit()
    return UserSettingsPayload(subjects=subjects, subject_colors=colors)
