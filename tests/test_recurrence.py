# tests/test_recurrence.py
from datetime import datetime, timedelta

import pytest

from tutordesk.schemas.meeting import MeetingDraft, RepeatCadence
from tutordesk.services.recurrence import (
    MeetingValidationError,
    add_months,
    expand_meeting,
)


def _draft(**overrides) -> MeetingDraft:
    data = {
        "title": "Algebra",
        "description": "Chapter 4",
        "start": datetime(2024, 3, 4, 9, 0),
        "end": datetime(2024, 3, 4, 10, 0),
        "repeat": False,
        "cadence": None,
        "repeat_count": 1,
        "completed": False,
        "user_id": 1,
        "student_id": 7,
    }
    data.update(overrides)
    return MeetingDraft(**data)


def test_non_repeating_draft_yields_single_identical_meeting():
    draft = _draft(completed=True)

    result = expand_meeting(draft)

    assert len(result) == 1
    only = result[0]
    assert only.title == draft.title
    assert only.description == draft.description
    assert only.start == draft.start
    assert only.end == draft.end
    assert only.completed is True
    assert only.user_id == 1
    assert only.student_id == 7


def test_repeat_flag_without_cadence_is_single_meeting():
    result = expand_meeting(_draft(repeat=True, cadence=None, repeat_count=5))
    assert len(result) == 1


def test_repeat_count_of_one_is_single_meeting():
    result = expand_meeting(_draft(repeat=True, cadence=RepeatCadence.WEEKLY, repeat_count=1))
    assert len(result) == 1
    assert result[0].title == "Algebra"


def test_weekly_series_three_occurrences():
    """
    09:00-10:00 on 2024-03-04, weekly x3 -> 03-04, 03-11, 03-18 with
    numbered titles after the first.
    """
    draft = _draft(repeat=True, cadence=RepeatCadence.WEEKLY, repeat_count=3)

    result = expand_meeting(draft)

    assert [m.start for m in result] == [
        datetime(2024, 3, 4, 9, 0),
        datetime(2024, 3, 11, 9, 0),
        datetime(2024, 3, 18, 9, 0),
    ]
    assert [m.end for m in result] == [
        datetime(2024, 3, 4, 10, 0),
        datetime(2024, 3, 11, 10, 0),
        datetime(2024, 3, 18, 10, 0),
    ]
    assert [m.title for m in result] == ["Algebra", "Algebra (2/3)", "Algebra (3/3)"]


@pytest.mark.parametrize("count", [2, 5, 52])
def test_weekly_offsets_and_count(count):
    base = datetime(2024, 10, 21, 16, 30)
    draft = _draft(
        start=base,
        end=base + timedelta(minutes=45),
        repeat=True,
        cadence=RepeatCadence.WEEKLY,
        repeat_count=count,
    )

    result = expand_meeting(draft)

    assert len(result) == count
    for i, meeting in enumerate(result):
        assert meeting.start == base + timedelta(days=7 * i)


def test_biweekly_offsets():
    draft = _draft(repeat=True, cadence=RepeatCadence.BIWEEKLY, repeat_count=3)

    result = expand_meeting(draft)

    assert [m.start.date().isoformat() for m in result] == [
        "2024-03-04",
        "2024-03-18",
        "2024-04-01",
    ]


def test_monthly_rolls_over_short_month_in_leap_year():
    """
    2024-01-31 + 1 month rolls past February 29 into March 2.
    """
    draft = _draft(
        start=datetime(2024, 1, 31, 15, 0),
        end=datetime(2024, 1, 31, 16, 0),
        repeat=True,
        cadence=RepeatCadence.MONTHLY,
        repeat_count=2,
    )

    result = expand_meeting(draft)

    assert result[0].start == datetime(2024, 1, 31, 15, 0)
    assert result[1].start == datetime(2024, 3, 2, 15, 0)
    assert result[1].end == datetime(2024, 3, 2, 16, 0)
    assert result[1].title == "Algebra (2/2)"


def test_add_months_non_leap_year_and_year_boundary():
    assert add_months(datetime(2023, 1, 31, 8, 0), 1) == datetime(2023, 3, 3, 8, 0)
    assert add_months(datetime(2024, 11, 15, 8, 0), 2) == datetime(2025, 1, 15, 8, 0)
    assert add_months(datetime(2024, 5, 31), 1) == datetime(2024, 7, 1)


def test_monthly_series_is_anchored_on_the_first_occurrence():
    """
    Each occurrence is computed from the base, so a roll-over in one month
    does not shift the following ones.
    """
    draft = _draft(
        start=datetime(2024, 1, 31, 9, 0),
        end=datetime(2024, 1, 31, 10, 0),
        repeat=True,
        cadence=RepeatCadence.MONTHLY,
        repeat_count=4,
    )

    starts = [m.start.date().isoformat() for m in expand_meeting(draft)]

    assert starts == ["2024-01-31", "2024-03-02", "2024-03-31", "2024-05-01"]


@pytest.mark.parametrize(
    "cadence", [RepeatCadence.WEEKLY, RepeatCadence.BIWEEKLY, RepeatCadence.MONTHLY]
)
def test_every_occurrence_keeps_the_duration(cadence):
    start = datetime(2024, 1, 31, 23, 30)
    end = datetime(2024, 2, 1, 0, 45)
    draft = _draft(start=start, end=end, repeat=True, cadence=cadence, repeat_count=6)

    for meeting in expand_meeting(draft):
        assert meeting.end - meeting.start == end - start


def test_series_is_never_marked_completed():
    draft = _draft(
        repeat=True,
        cadence=RepeatCadence.WEEKLY,
        repeat_count=4,
        completed=True,
    )

    result = expand_meeting(draft)

    assert all(m.completed is False for m in result)


def test_expansion_is_pure():
    draft = _draft(repeat=True, cadence=RepeatCadence.MONTHLY, repeat_count=12)

    assert expand_meeting(draft) == expand_meeting(draft)


def test_end_not_after_start_is_rejected():
    draft = _draft(end=datetime(2024, 3, 4, 9, 0))

    with pytest.raises(MeetingValidationError) as exc_info:
        expand_meeting(draft)

    assert "after start" in str(exc_info.value)


def test_blank_title_is_rejected():
    with pytest.raises(MeetingValidationError):
        expand_meeting(_draft(title="   "))


def test_missing_student_is_rejected():
    with pytest.raises(MeetingValidationError) as exc_info:
        expand_meeting(_draft(student_id=None))

    assert "student" in str(exc_info.value)


def test_repeat_count_above_limit_is_rejected():
    draft = _draft(repeat=True, cadence=RepeatCadence.WEEKLY, repeat_count=53)

    with pytest.raises(MeetingValidationError) as exc_info:
        expand_meeting(draft)

    assert "between 2 and 52" in str(exc_info.value)


def test_repeat_limit_is_configurable():
    draft = _draft(repeat=True, cadence=RepeatCadence.WEEKLY, repeat_count=10)

    with pytest.raises(MeetingValidationError):
        expand_meeting(draft, max_repeat_count=8)
