# tutordesk/api/routes/meetings.py
from datetime import date as date_type, datetime
from http import HTTPStatus

from fastapi import APIRouter, Depends, HTTPException, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from tutordesk.api.dependencies.current_user import get_current_user
from tutordesk.core.config import get_settings
from tutordesk.db.session import get_db
from tutordesk.models.user import User
from tutordesk.schemas.meeting import MeetingCreate, MeetingRead, MeetingUpdate
from tutordesk.services import meeting_service
from tutordesk.services.meeting_service import MeetingPersistenceError
from tutordesk.services.recurrence import MeetingValidationError

router = APIRouter(prefix="/meetings", tags=["Meetings"])


@router.post(
    "",
    response_model=list[MeetingRead],
    status_code=HTTPStatus.CREATED,
    summary="Create a meeting or a repeating series",
    description=(
        "Create one meeting from the calendar form, or a whole repeating series "
        "when `is_repeating` is set.\n\n"
        "Repeating rules:\n"
        "- `repeat_type` is one of `weekly`, `biweekly`, `monthly`\n"
        "- `repeat_count` is the total number of occurrences (2..52)\n"
        "- occurrences after the first are titled `\"<title> (k/N)\"`\n"
        "- `monthly` keeps the day of month; short months roll over "
        "(Jan 31 + 1 month = Mar 2 in a leap year)\n"
        "- none of the series is marked completed\n\n"
        "All occurrences are stored in one transaction: either every meeting "
        "is created or none is."
    ),
    responses={
        201: {
            "description": "Meetings created. Returned in chronological order.",
            "content": {
                "application/json": {
                    "example": [
                        {
                            "id": 1,
                            "student_id": 1,
                            "title": "Algebra",
                            "description": None,
                            "start_time": "2024-03-04T09:00:00",
                            "end_time": "2024-03-04T10:00:00",
                            "is_completed": False,
                        },
                        {
                            "id": 2,
                            "student_id": 1,
                            "title": "Algebra (2/2)",
                            "description": None,
                            "start_time": "2024-03-11T09:00:00",
                            "end_time": "2024-03-11T10:00:00",
                            "is_completed": False,
                        },
                    ]
                }
            },
        },
        400: {
            "description": "Missing fields, end before start, or repeat count out of range.",
            "content": {
                "application/json": {
                    "example": {"detail": "End time must be after start time."}
                }
            },
        },
        404: {"description": "Student not found for the current user."},
        500: {"description": "The batch could not be stored; nothing was created."},
    },
)
async def create_meeting(
    payload: MeetingCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> list[MeetingRead]:
    try:
        meetings = await meeting_service.create_meetings(db, user_id=user.id, payload=payload)
    except MeetingValidationError as exc:
        raise HTTPException(status_code=HTTPStatus.BAD_REQUEST, detail=str(exc))
    except LookupError:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail="Student not found.")
    except MeetingPersistenceError as exc:
        raise HTTPException(status_code=HTTPStatus.INTERNAL_SERVER_ERROR, detail=str(exc))

    return [MeetingRead.model_validate(m) for m in meetings]


@router.get(
    "",
    response_model=list[MeetingRead],
    summary="List meetings for a calendar month",
    description=(
        "Return the caller's meetings starting within the given month, ordered "
        "by start time. Defaults to the current month (server local time)."
    ),
)
async def list_month(
    year: int | None = Query(default=None, ge=1900, le=9999, examples=[2024]),
    month: int | None = Query(default=None, ge=1, le=12, examples=[3]),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> list[MeetingRead]:
    today = date_type.today()
    meetings = await meeting_service.list_month(
        db,
        user_id=user.id,
        year=year if year is not None else today.year,
        month=month if month is not None else today.month,
    )
    return [MeetingRead.model_validate(m) for m in meetings]


@router.get(
    "/upcoming",
    response_model=list[MeetingRead],
    summary="List upcoming meetings",
    description="Meetings starting between now and `days` days from now.",
)
async def list_upcoming(
    days: int | None = Query(
        default=None,
        ge=1,
        le=366,
        description="Look-ahead window; defaults to UPCOMING_DAYS.",
    ),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> list[MeetingRead]:
    window = days if days is not None else get_settings().UPCOMING_DAYS
    meetings = await meeting_service.list_upcoming(
        db,
        user_id=user.id,
        now=datetime.now(),
        days=window,
    )
    return [MeetingRead.model_validate(m) for m in meetings]


@router.get(
    "/recent",
    response_model=list[MeetingRead],
    summary="List the most recent meetings",
    description="Latest meetings by start time (past or future), newest first.",
)
async def list_recent(
    limit: int = Query(default=5, ge=1, le=100),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> list[MeetingRead]:
    meetings = await meeting_service.list_recent(db, user_id=user.id, limit=limit)
    return [MeetingRead.model_validate(m) for m in meetings]


@router.patch(
    "/{meeting_id}",
    response_model=MeetingRead,
    summary="Update a single meeting",
    description="Change the title, description, times or completion flag of one meeting.",
    responses={
        400: {"description": "Blank title or end not after start."},
        404: {"description": "No meeting with that id for the current user."},
    },
)
async def update_meeting(
    meeting_id: int = Path(..., ge=1),
    payload: MeetingUpdate | None = None,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> MeetingRead:
    try:
        meeting = await meeting_service.update_meeting(
            db,
            user_id=user.id,
            meeting_id=meeting_id,
            payload=payload or MeetingUpdate(),
        )
    except LookupError as exc:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail=str(exc))
    except MeetingValidationError as exc:
        raise HTTPException(status_code=HTTPStatus.BAD_REQUEST, detail=str(exc))

    return MeetingRead.model_validate(meeting)


@router.delete(
    "/{meeting_id}",
    status_code=HTTPStatus.NO_CONTENT,
    summary="Delete a single meeting",
    responses={404: {"description": "No meeting with that id for the current user."}},
)
async def delete_meeting(
    meeting_id: int = Path(..., ge=1),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> None:
    try:
        await meeting_service.delete_meeting(db, user_id=user.id, meeting_id=meeting_id)
    except LookupError as exc:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail=str(exc))
