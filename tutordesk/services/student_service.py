# tutordesk/services/student_service.py
from __future__ import annotations

import logging

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from tutordesk.models.meeting import Meeting
from tutordesk.models.student import Student
from tutordesk.schemas.student import StudentCreate, StudentUpdate

logger = logging.getLogger(__name__)


def rate_to_cents(rate: float) -> int:
    return int(round(rate * 100))


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None


async def create_student(db: AsyncSession, user_id: int, payload: StudentCreate) -> Student:
    student = Student(
        user_id=user_id,
        first_name=payload.first_name.strip(),
        last_name=payload.last_name.strip(),
        email=str(payload.email),
        phone=_clean(payload.phone),
        subjects=payload.subjects.strip(),
        year=payload.year,
        hourly_rate_cents=rate_to_cents(payload.hourly_rate),
        notes=_clean(payload.notes),
        parent_name=_clean(payload.parent_name),
        parent_email=str(payload.parent_email) if payload.parent_email else None,
        parent_phone=_clean(payload.parent_phone),
    )
    db.add(student)
    await db.commit()
    await db.refresh(student)

    logger.info("Created student id=%s for user_id=%s", student.id, user_id)
    return student


async def list_students(
    db: AsyncSession,
    user_id: int,
    include_archived: bool = False,
) -> list[Student]:
    """
    Students of a user ordered by first name. Archived students are hidden
    unless `include_archived` is set.
    """
    stmt = select(Student).where(Student.user_id == user_id)
    if not include_archived:
        stmt = stmt.where(Student.is_archived.is_(False))

    result = await db.execute(stmt.order_by(Student.first_name.asc(), Student.id.asc()))
    return list(result.scalars().all())


async def get_student(db: AsyncSession, user_id: int, student_id: int) -> Student:
    result = await db.execute(
        select(Student).where(Student.id == student_id, Student.user_id == user_id)
    )
    student = result.scalar_one_or_none()
    if student is None:
        raise LookupError(f"Student with id={student_id} not found.")
    return student


async def update_student(
    db: AsyncSession,
    user_id: int,
    student_id: int,
    payload: StudentUpdate,
) -> Student:
    student = await get_student(db, user_id, student_id)
    update_data = payload.model_dump(exclude_unset=True)

    if "hourly_rate" in update_data:
        rate = update_data.pop("hourly_rate")
        if rate is not None:
            student.hourly_rate_cents = rate_to_cents(rate)

    for field in ("email", "parent_email"):
        if update_data.get(field) is not None:
            update_data[field] = str(update_data[field])

    for field, value in update_data.items():
        if field in ("first_name", "last_name") and value is None:
            continue
        setattr(student, field, value)

    await db.commit()
    await db.refresh(student)
    return student


async def archive_student(db: AsyncSession, user_id: int, student_id: int) -> Student:
    """
    Hide a student from default listings without deleting their history.
    """
    student = await get_student(db, user_id, student_id)
    student.is_archived = True
    await db.commit()
    await db.refresh(student)

    logger.info("Archived student id=%s for user_id=%s", student_id, user_id)
    return student


async def delete_student(db: AsyncSession, user_id: int, student_id: int) -> None:
    """
    Delete a student together with their meetings.
    """
    student = await get_student(db, user_id, student_id)
    await db.execute(delete(Meeting).where(Meeting.student_id == student.id))
    await db.delete(student)
    await db.commit()
    logger.info("Deleted student id=%s for user_id=%s", student_id, user_id)
