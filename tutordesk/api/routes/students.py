# tutordesk/api/routes/students.py
from http import HTTPStatus

from fastapi import APIRouter, Depends, HTTPException, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from tutordesk.api.dependencies.current_user import get_current_user
from tutordesk.db.session import get_db
from tutordesk.models.user import User
from tutordesk.schemas.student import StudentCreate, StudentRead, StudentUpdate
from tutordesk.services import student_service

router = APIRouter(prefix="/students", tags=["Students"])

_NOT_FOUND = {404: {"description": "No student with that id for the current user."}}


@router.post(
    "",
    response_model=StudentRead,
    status_code=HTTPStatus.CREATED,
    summary="Add a student",
    description=(
        "Create a student profile owned by the current tutor.\n\n"
        "`hourly_rate` is given in currency units and stored as whole cents."
    ),
)
async def create_student(
    payload: StudentCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> StudentRead:
    student = await student_service.create_student(db, user_id=user.id, payload=payload)
    return StudentRead.model_validate(student)


@router.get(
    "",
    response_model=list[StudentRead],
    summary="List students",
    description="Students ordered by first name. Archived students are hidden by default.",
)
async def list_students(
    include_archived: bool = Query(default=False),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> list[StudentRead]:
    students = await student_service.list_students(
        db,
        user_id=user.id,
        include_archived=include_archived,
    )
    return [StudentRead.model_validate(s) for s in students]


@router.get(
    "/{student_id}",
    response_model=StudentRead,
    summary="Get a student profile",
    responses=_NOT_FOUND,
)
async def get_student(
    student_id: int = Path(..., ge=1),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> StudentRead:
    try:
        student = await student_service.get_student(db, user_id=user.id, student_id=student_id)
    except LookupError as exc:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail=str(exc))
    return StudentRead.model_validate(student)


@router.patch(
    "/{student_id}",
    response_model=StudentRead,
    summary="Partially update a student profile",
    description="Only fields provided in the request body are modified.",
    responses=_NOT_FOUND,
)
async def update_student(
    student_id: int = Path(..., ge=1),
    payload: StudentUpdate | None = None,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> StudentRead:
    try:
        student = await student_service.update_student(
            db,
            user_id=user.id,
            student_id=student_id,
            payload=payload or StudentUpdate(),
        )
    except LookupError as exc:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail=str(exc))
    return StudentRead.model_validate(student)


@router.post(
    "/{student_id}/archive",
    response_model=StudentRead,
    summary="Archive a student",
    description="Hide the student from the default list and the meeting form; history is kept.",
    responses=_NOT_FOUND,
)
async def archive_student(
    student_id: int = Path(..., ge=1),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> StudentRead:
    try:
        student = await student_service.archive_student(db, user_id=user.id, student_id=student_id)
    except LookupError as exc:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail=str(exc))
    return StudentRead.model_validate(student)


@router.delete(
    "/{student_id}",
    status_code=HTTPStatus.NO_CONTENT,
    summary="Delete a student and their meetings",
    responses=_NOT_FOUND,
)
async def delete_student(
    student_id: int = Path(..., ge=1),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> None:
    try:
        await student_service.delete_student(db, user_id=user.id, student_id=student_id)
    except LookupError as exc:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail=str(exc))
