# tutordesk/services/period_service.py
from __future__ import annotations

import logging
from datetime import date as date_type
from typing import Type, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tutordesk.core.config import get_settings
from tutordesk.models.holiday import Holiday
from tutordesk.models.term import Term
from tutordesk.schemas.teaching_period import (
    HolidayCreate,
    TeachingOverview,
    TermCreate,
    WeekInfo,
)
from tutordesk.services.teaching_periods import (
    current_term_status,
    find_gaps,
    merge_periods,
    week_info,
)

logger = logging.getLogger(__name__)

PeriodModel = TypeVar("PeriodModel", Term, Holiday)


async def _list(db: AsyncSession, model: Type[PeriodModel], user_id: int) -> list[PeriodModel]:
    stmt = (
        select(model)
        .where(model.user_id == user_id)
        .order_by(model.year.desc(), model.start_date.asc(), model.id.asc())
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def _get(
    db: AsyncSession,
    model: Type[PeriodModel],
    user_id: int,
    period_id: int,
) -> PeriodModel:
    result = await db.execute(
        select(model).where(model.id == period_id, model.user_id == user_id)
    )
    period = result.scalar_one_or_none()
    if period is None:
        raise LookupError(f"{model.__name__} with id={period_id} not found.")
    return period


async def list_terms(db: AsyncSession, user_id: int) -> list[Term]:
    return await _list(db, Term, user_id)


async def list_holidays(db: AsyncSession, user_id: int) -> list[Holiday]:
    return await _list(db, Holiday, user_id)


async def create_term(db: AsyncSession, user_id: int, payload: TermCreate) -> Term:
    term = Term(
        user_id=user_id,
        name=payload.name.strip(),
        start_date=payload.start_date,
        end_date=payload.end_date,
        year=payload.year,
        is_active=payload.is_active,
        color=payload.color or get_settings().DEFAULT_TERM_COLOR,
    )
    db.add(term)
    await db.commit()
    await db.refresh(term)

    logger.info("Created term id=%s %r for user_id=%s", term.id, term.name, user_id)
    return term


async def update_term(
    db: AsyncSession,
    user_id: int,
    term_id: int,
    payload: TermCreate,
) -> Term:
    term = await _get(db, Term, user_id, term_id)
    term.name = payload.name.strip()
    term.start_date = payload.start_date
    term.end_date = payload.end_date
    term.year = payload.year
    term.is_active = payload.is_active
    if payload.color:
        term.color = payload.color

    await db.commit()
    await db.refresh(term)
    return term


async def delete_term(db: AsyncSession, user_id: int, term_id: int) -> None:
    term = await _get(db, Term, user_id, term_id)
    await db.delete(term)
    await db.commit()
    logger.info("Deleted term id=%s for user_id=%s", term_id, user_id)


async def create_holiday(db: AsyncSession, user_id: int, payload: HolidayCreate) -> Holiday:
    holiday = Holiday(
        user_id=user_id,
        name=payload.name.strip(),
        start_date=payload.start_date,
        end_date=payload.end_date,
        year=payload.year,
        color=payload.color or get_settings().DEFAULT_HOLIDAY_COLOR,
    )
    db.add(holiday)
    await db.commit()
    await db.refresh(holiday)

    logger.info("Created holiday id=%s %r for user_id=%s", holiday.id, holiday.name, user_id)
    return holiday


async def update_holiday(
    db: AsyncSession,
    user_id: int,
    holiday_id: int,
    payload: HolidayCreate,
) -> Holiday:
    holiday = await _get(db, Holiday, user_id, holiday_id)
    holiday.name = payload.name.strip()
    holiday.start_date = payload.start_date
    holiday.end_date = payload.end_date
    holiday.year = payload.year
    if payload.color:
        holiday.color = payload.color

    await db.commit()
    await db.refresh(holiday)
    return holiday


async def delete_holiday(db: AsyncSession, user_id: int, holiday_id: int) -> None:
    holiday = await _get(db, Holiday, user_id, holiday_id)
    await db.delete(holiday)
    await db.commit()
    logger.info("Deleted holiday id=%s for user_id=%s", holiday_id, user_id)


async def build_overview(db: AsyncSession, user_id: int, today: date_type) -> TeachingOverview:
    """
    Load a user's terms and holidays and derive gaps and the current term.
    """
    terms = await list_terms(db, user_id)
    holidays = await list_holidays(db, user_id)
    periods = merge_periods(terms, holidays)

    return TeachingOverview(
        periods=periods,
        gaps=find_gaps(periods),
        current=current_term_status(periods, today),
    )


async def get_week_info(db: AsyncSession, user_id: int, day: date_type) -> WeekInfo | None:
    terms = await list_terms(db, user_id)
    holidays = await list_holidays(db, user_id)
    return week_info(merge_periods(terms, holidays), day)
