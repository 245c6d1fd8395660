# tutordesk/services/meeting_service.py
from __future__ import annotations

import logging
from datetime import datetime, timedelta

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tutordesk.core.config import get_settings
from tutordesk.models.meeting import Meeting
from tutordesk.models.student import Student
from tutordesk.schemas.meeting import MeetingCreate, MeetingDraft, MeetingUpdate
from tutordesk.services.recurrence import (
    MIN_REPEAT_COUNT,
    MeetingValidationError,
    expand_meeting,
)

logger = logging.getLogger(__name__)


class MeetingPersistenceError(RuntimeError):
    """
    Raised when a batch of meetings could not be stored. The transaction has
    been rolled back, so none of the batch exists.
    """


def build_draft(payload: MeetingCreate, user_id: int) -> MeetingDraft:
    """
    Turn submitted form input into a MeetingDraft.

    Raises
    ------
    MeetingValidationError
        If a required field is missing, or the repeat count is out of range
        for a repeating meeting.
    """
    missing = [
        name
        for name in ("title", "student_id", "meeting_date", "start_time", "end_time")
        if getattr(payload, name) in (None, "")
    ]
    if payload.title is not None and not payload.title.strip() and "title" not in missing:
        missing.insert(0, "title")
    if missing:
        raise MeetingValidationError(
            f"All required fields must be filled (missing: {', '.join(missing)})."
        )

    max_count = get_settings().MAX_REPEAT_COUNT
    if payload.is_repeating:
        if payload.repeat_type is None:
            raise MeetingValidationError("A repeat type is required for repeating meetings.")
        if not MIN_REPEAT_COUNT <= payload.repeat_count <= max_count:
            raise MeetingValidationError(
                f"Repeat count must be between {MIN_REPEAT_COUNT} and {max_count}."
            )

    return MeetingDraft(
        title=payload.title.strip(),
        description=(payload.description or "").strip() or None,
        start=datetime.combine(payload.meeting_date, payload.start_time),
        end=datetime.combine(payload.meeting_date, payload.end_time),
        repeat=payload.is_repeating,
        cadence=payload.repeat_type,
        repeat_count=payload.repeat_count,
        completed=payload.is_completed,
        user_id=user_id,
        student_id=payload.student_id,
    )


async def _get_owned_student(db: AsyncSession, student_id: int, user_id: int) -> Student:
    result = await db.execute(
        select(Student).where(Student.id == student_id, Student.user_id == user_id)
    )
    student = result.scalar_one_or_none()
    if student is None:
        raise LookupError(f"Student with id={student_id} not found.")
    return student


async def create_meetings(
    db: AsyncSession,
    user_id: int,
    payload: MeetingCreate,
) -> list[Meeting]:
    """
    Validate, expand and store a meeting (or a repeating series).

    Steps
    -----
    1) Build and validate the draft (no database access yet).
    2) Check that the student belongs to the user.
    3) Expand the draft into its occurrences.
    4) Insert every occurrence in a single transaction.

    Raises
    ------
    MeetingValidationError
        Invalid input; nothing was stored.
    LookupError
        Unknown student (or one owned by another user).
    MeetingPersistenceError
        The batch insert failed and was rolled back.
    """
    try:
        draft = build_draft(payload, user_id=user_id)
        occurrences = expand_meeting(draft, max_repeat_count=get_settings().MAX_REPEAT_COUNT)
    except MeetingValidationError as exc:
        logger.warning("Rejected meeting for user_id=%s: %s", user_id, exc)
        raise

    await _get_owned_student(db, draft.student_id, user_id)

    meetings = [
        Meeting(
            user_id=user_id,
            student_id=occ.student_id,
            title=occ.title,
            description=occ.description,
            start_time=occ.start,
            end_time=occ.end,
            is_completed=occ.completed,
        )
        for occ in occurrences
    ]

    try:
        db.add_all(meetings)
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.exception(
            "Failed to store %d meeting(s) for user_id=%s", len(meetings), user_id
        )
        raise MeetingPersistenceError(
            f"Could not save meetings: {exc.__class__.__name__}"
        ) from exc

    logger.info(
        "Created %d meeting(s) %r for user_id=%s student_id=%s",
        len(meetings),
        draft.title,
        user_id,
        draft.student_id,
    )
    return meetings


async def list_meetings_between(
    db: AsyncSession,
    user_id: int,
    start: datetime,
    end: datetime,
) -> list[Meeting]:
    """
    Meetings of a user whose start lies in [start, end], ordered by start.
    """
    if end < start:
        raise ValueError("end must be greater than or equal to start")

    stmt = (
        select(Meeting)
        .where(
            Meeting.user_id == user_id,
            Meeting.start_time >= start,
            Meeting.start_time <= end,
        )
        .order_by(Meeting.start_time.asc(), Meeting.id.asc())
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


def month_bounds(year: int, month: int) -> tuple[datetime, datetime]:
    """
    First instant and last instant (inclusive) of a calendar month.
    """
    if not 1 <= month <= 12:
        raise ValueError("month must be between 1 and 12")
    first = datetime(year, month, 1)
    if month == 12:
        next_first = datetime(year + 1, 1, 1)
    else:
        next_first = datetime(year, month + 1, 1)
    return first, next_first - timedelta(microseconds=1)


async def list_month(db: AsyncSession, user_id: int, year: int, month: int) -> list[Meeting]:
    start, end = month_bounds(year, month)
    return await list_meetings_between(db, user_id, start, end)


async def list_upcoming(
    db: AsyncSession,
    user_id: int,
    now: datetime,
    days: int,
) -> list[Meeting]:
    return await list_meetings_between(db, user_id, now, now + timedelta(days=days))


async def list_recent(db: AsyncSession, user_id: int, limit: int) -> list[Meeting]:
    """
    Latest meetings by start time, newest first.
    """
    stmt = (
        select(Meeting)
        .where(Meeting.user_id == user_id)
        .order_by(Meeting.start_time.desc(), Meeting.id.desc())
        .limit(limit)
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def get_meeting(db: AsyncSession, user_id: int, meeting_id: int) -> Meeting:
    result = await db.execute(
        select(Meeting).where(Meeting.id == meeting_id, Meeting.user_id == user_id)
    )
    meeting = result.scalar_one_or_none()
    if meeting is None:
        raise LookupError(f"Meeting with id={meeting_id} not found.")
    return meeting


async def update_meeting(
    db: AsyncSession,
    user_id: int,
    meeting_id: int,
    payload: MeetingUpdate,
) -> Meeting:
    """
    Apply a partial update. The resulting end must still be after the start.
    """
    meeting = await get_meeting(db, user_id, meeting_id)
    update_data = payload.model_dump(exclude_unset=True)

    # Explicit nulls on NOT NULL columns mean "leave unchanged".
    for field in ("start_time", "end_time", "is_completed"):
        if field in update_data and update_data[field] is None:
            del update_data[field]

    if "title" in update_data and not (update_data["title"] or "").strip():
        raise MeetingValidationError("Meeting title is required.")

    start = update_data.get("start_time") or meeting.start_time
    end = update_data.get("end_time") or meeting.end_time
    if end <= start:
        raise MeetingValidationError("End time must be after start time.")

    for field, value in update_data.items():
        setattr(meeting, field, value)

    await db.commit()
    await db.refresh(meeting)
    return meeting


async def delete_meeting(db: AsyncSession, user_id: int, meeting_id: int) -> None:
    meeting = await get_meeting(db, user_id, meeting_id)
    await db.delete(meeting)
    await db.commit()
    logger.info("Deleted meeting id=%s for user_id=%s", meeting_id, user_id)
