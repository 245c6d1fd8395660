# tutordesk/api/routes/teaching_periods.py
from datetime import date as date_type
from http import HTTPStatus

from fastapi import APIRouter, Depends, HTTPException, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from tutordesk.api.dependencies.current_user import get_current_user
from tutordesk.db.session import get_db
from tutordesk.models.user import User
from tutordesk.schemas.teaching_period import (
    HolidayCreate,
    HolidayPeriod,
    TeachingOverview,
    TermCreate,
    TermPeriod,
    WeekInfo,
)
from tutordesk.services import period_service

terms_router = APIRouter(prefix="/terms", tags=["Teaching periods"])
holidays_router = APIRouter(prefix="/holidays", tags=["Teaching periods"])
router = APIRouter(prefix="/teaching-periods", tags=["Teaching periods"])


# --------------------------------------------------------------------------
# Terms
# --------------------------------------------------------------------------

@terms_router.get(
    "",
    response_model=list[TermPeriod],
    summary="List terms",
    description="Terms of the current tutor, newest year first, then by start date.",
)
async def list_terms(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> list[TermPeriod]:
    terms = await period_service.list_terms(db, user_id=user.id)
    return [TermPeriod.model_validate(t) for t in terms]


@terms_router.post(
    "",
    response_model=TermPeriod,
    status_code=HTTPStatus.CREATED,
    summary="Create a term",
    responses={422: {"description": "Blank name or end_date before start_date."}},
)
async def create_term(
    payload: TermCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> TermPeriod:
    term = await period_service.create_term(db, user_id=user.id, payload=payload)
    return TermPeriod.model_validate(term)


@terms_router.put(
    "/{term_id}",
    response_model=TermPeriod,
    summary="Replace a term",
    responses={404: {"description": "No term with that id for the current user."}},
)
async def update_term(
    payload: TermCreate,
    term_id: int = Path(..., ge=1),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> TermPeriod:
    try:
        term = await period_service.update_term(db, user.id, term_id, payload)
    except LookupError as exc:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail=str(exc))
    return TermPeriod.model_validate(term)


@terms_router.delete(
    "/{term_id}",
    status_code=HTTPStatus.NO_CONTENT,
    summary="Delete a term",
    responses={404: {"description": "No term with that id for the current user."}},
)
async def delete_term(
    term_id: int = Path(..., ge=1),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> None:
    try:
        await period_service.delete_term(db, user.id, term_id)
    except LookupError as exc:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail=str(exc))


# --------------------------------------------------------------------------
# Holidays
# --------------------------------------------------------------------------

@holidays_router.get(
    "",
    response_model=list[HolidayPeriod],
    summary="List holidays",
)
async def list_holidays(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> list[HolidayPeriod]:
    holidays = await period_service.list_holidays(db, user_id=user.id)
    return [HolidayPeriod.model_validate(h) for h in holidays]


@holidays_router.post(
    "",
    response_model=HolidayPeriod,
    status_code=HTTPStatus.CREATED,
    summary="Create a holiday",
)
async def create_holiday(
    payload: HolidayCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> HolidayPeriod:
    holiday = await period_service.create_holiday(db, user_id=user.id, payload=payload)
    return HolidayPeriod.model_validate(holiday)


@holidays_router.put(
    "/{holiday_id}",
    response_model=HolidayPeriod,
    summary="Replace a holiday",
    responses={404: {"description": "No holiday with that id for the current user."}},
)
async def update_holiday(
    payload: HolidayCreate,
    holiday_id: int = Path(..., ge=1),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> HolidayPeriod:
    try:
        holiday = await period_service.update_holiday(db, user.id, holiday_id, payload)
    except LookupError as exc:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail=str(exc))
    return HolidayPeriod.model_validate(holiday)


@holidays_router.delete(
    "/{holiday_id}",
    status_code=HTTPStatus.NO_CONTENT,
    summary="Delete a holiday",
    responses={404: {"description": "No holiday with that id for the current user."}},
)
async def delete_holiday(
    holiday_id: int = Path(..., ge=1),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> None:
    try:
        await period_service.delete_holiday(db, user.id, holiday_id)
    except LookupError as exc:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail=str(exc))


# --------------------------------------------------------------------------
# Combined view
# --------------------------------------------------------------------------

@router.get(
    "",
    response_model=TeachingOverview,
    summary="Academic calendar overview",
    description=(
        "Terms and holidays merged into one list sorted by start date, the "
        "uncovered gaps between consecutive periods, and the current term.\n\n"
        "- A gap runs from the day after one period ends to the day before the "
        "next starts, and is only reported if it covers at least one day.\n"
        "- The current term is the first active term containing `today`; the "
        "week number is `max(1, ceil(days_since_start / 7))`."
    ),
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "periods": [
                            {
                                "type": "term",
                                "id": 1,
                                "name": "Spring A",
                                "start_date": "2024-02-01",
                                "end_date": "2024-02-14",
                                "year": 2024,
                                "color": "#3B82F6",
                                "is_active": True,
                            },
                            {
                                "type": "holiday",
                                "id": 1,
                                "name": "Easter",
                                "start_date": "2024-03-01",
                                "end_date": "2024-03-14",
                                "year": 2024,
                                "color": "#F59E0B",
                            },
                        ],
                        "gaps": [{"start_date": "2024-02-15", "end_date": "2024-02-29"}],
                        "current": {
                            "today": "2024-02-08",
                            "term": {
                                "type": "term",
                                "id": 1,
                                "name": "Spring A",
                                "start_date": "2024-02-01",
                                "end_date": "2024-02-14",
                                "year": 2024,
                                "color": "#3B82F6",
                                "is_active": True,
                            },
                            "week": 1,
                            "total_weeks": 2,
                        },
                    }
                }
            }
        }
    },
)
async def get_overview(
    today: date_type | None = Query(
        default=None,
        description="Reference date; defaults to the server's current date.",
    ),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> TeachingOverview:
    return await period_service.build_overview(
        db,
        user_id=user.id,
        today=today or date_type.today(),
    )


@router.get(
    "/week-info",
    response_model=WeekInfo | None,
    summary="Week label for a calendar day",
    description=(
        "The first period containing `day` and the day's week within it "
        "(week 1 is the first seven days). Returns null outside all periods."
    ),
)
async def get_week_info(
    day: date_type = Query(..., examples=["2024-02-10"]),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> WeekInfo | None:
    return await period_service.get_week_info(db, user_id=user.id, day=day)
