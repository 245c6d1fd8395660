# tutordesk/services/teaching_periods.py
from __future__ import annotations

import logging
import math
from datetime import date, timedelta
from typing import Iterable, Sequence

from tutordesk.models.holiday import Holiday
from tutordesk.models.term import Term
from tutordesk.schemas.teaching_period import (
    CurrentTermStatus,
    Gap,
    HolidayPeriod,
    TeachingPeriod,
    TermPeriod,
    WeekInfo,
)

logger = logging.getLogger(__name__)

ONE_DAY = timedelta(days=1)


def merge_periods(
    terms: Iterable[Term],
    holidays: Iterable[Holiday],
) -> list[TeachingPeriod]:
    """
    Combine stored terms and holidays into one list of tagged periods,
    sorted by start date (stable, terms before holidays on ties).
    """
    periods: list[TeachingPeriod] = [TermPeriod.model_validate(t) for t in terms]
    periods.extend(HolidayPeriod.model_validate(h) for h in holidays)
    return sorted(periods, key=lambda p: p.start_date)


def find_gaps(periods: Sequence[TeachingPeriod]) -> list[Gap]:
    """
    Find uncovered date ranges between chronologically adjacent periods.

    Rules
    -----
    - Periods are sorted by start_date (stable).
    - For each adjacent pair the candidate gap runs from the day after the
      first period ends to the day before the next one starts.
    - A gap is reported only if it spans at least one whole day, so
      contiguous or overlapping pairs yield nothing.
    """
    ordered = sorted(periods, key=lambda p: p.start_date)
    gaps: list[Gap] = []

    for current, nxt in zip(ordered, ordered[1:]):
        gap_start = current.end_date + ONE_DAY
        gap_end = nxt.start_date - ONE_DAY
        if gap_start <= gap_end:
            gaps.append(Gap(start_date=gap_start, end_date=gap_end))

    return gaps


def find_current_term(terms: Sequence[TermPeriod], today: date) -> TermPeriod | None:
    """
    Return the first active term (in input order) whose inclusive range
    contains `today`.

    Overlapping active terms are a data-entry error; the first match wins
    and the overlap is logged.
    """
    matches = [
        t for t in terms
        if t.is_active and t.start_date <= today <= t.end_date
    ]
    if not matches:
        return None

    if len(matches) > 1:
        logger.warning(
            "Multiple active terms contain %s: %s; using %r",
            today.isoformat(),
            [t.name for t in matches],
            matches[0].name,
        )
    return matches[0]


def current_week(term: TermPeriod, today: date) -> int:
    """
    1-based week number of `today` within `term`:
    max(1, ceil((today - start_date) / 7 days)).
    """
    days = (today - term.start_date).days
    return max(1, math.ceil(days / 7))


def total_weeks(start_date: date, end_date: date) -> int:
    return math.ceil((end_date - start_date).days / 7)


def current_term_status(periods: Sequence[TeachingPeriod], today: date) -> CurrentTermStatus:
    """
    Current-term banner data. Holidays are ignored.
    """
    terms = [p for p in periods if isinstance(p, TermPeriod)]
    term = find_current_term(terms, today)
    if term is None:
        return CurrentTermStatus(today=today)

    return CurrentTermStatus(
        today=today,
        term=term,
        week=current_week(term, today),
        total_weeks=total_weeks(term.start_date, term.end_date),
    )


def week_info(periods: Sequence[TeachingPeriod], day: date) -> WeekInfo | None:
    """
    Week label for a calendar day, taken from the first period (in input
    order) that contains it. Week 1 covers the first seven days.
    """
    for period in periods:
        if period.start_date <= day <= period.end_date:
            days_in = (day - period.start_date).days
            return WeekInfo(
                day=day,
                period_name=period.name,
                period_type=period.type,
                week=max(1, days_in // 7 + 1),
                total_weeks=total_weeks(period.start_date, period.end_date),
            )
    return None
