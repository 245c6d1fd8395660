# tutordesk/services/recurrence.py
from __future__ import annotations

from datetime import datetime, timedelta

from tutordesk.schemas.meeting import GeneratedMeeting, MeetingDraft, RepeatCadence

MIN_REPEAT_COUNT = 2
MAX_REPEAT_COUNT = 52


class MeetingValidationError(ValueError):
    """
    Raised when a meeting draft cannot be expanded. No occurrence is
    produced when this is raised.
    """


def add_months(value: datetime, months: int) -> datetime:
    """
    Advance `value` by `months` calendar months, holding the day-of-month.

    When the target month is shorter than the original day-of-month the
    surplus days roll over into the following month instead of being
    clamped, e.g. 2024-01-31 + 1 month -> 2024-03-02 and
    2023-01-31 + 1 month -> 2023-03-03. Time of day is preserved.
    """
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    first_of_month = value.replace(year=year, month=month, day=1)
    return first_of_month + timedelta(days=value.day - 1)


def occurrence_start(base: datetime, cadence: RepeatCadence, index: int) -> datetime:
    """
    Start of occurrence `index`, always computed from the base occurrence.
    """
    if index == 0:
        return base
    if cadence is RepeatCadence.WEEKLY:
        return base + timedelta(days=7 * index)
    if cadence is RepeatCadence.BIWEEKLY:
        return base + timedelta(days=14 * index)
    if cadence is RepeatCadence.MONTHLY:
        return add_months(base, index)
    raise MeetingValidationError(f"Unsupported repeat cadence: {cadence!r}")


def validate_draft(draft: MeetingDraft, max_repeat_count: int = MAX_REPEAT_COUNT) -> None:
    """
    Check the cross-field rules of a draft.

    Rules
    -----
    - title must contain non-whitespace text
    - end must be strictly after start
    - a student must be referenced
    - when repeating with a cadence, repeat_count must not exceed
      `max_repeat_count`
    """
    if not draft.title or not draft.title.strip():
        raise MeetingValidationError("Meeting title is required.")
    if draft.end <= draft.start:
        raise MeetingValidationError("End time must be after start time.")
    if draft.student_id is None:
        raise MeetingValidationError("A student is required.")
    if draft.repeat and draft.cadence is not None and draft.repeat_count > max_repeat_count:
        raise MeetingValidationError(
            f"Repeat count must be between {MIN_REPEAT_COUNT} and {max_repeat_count}."
        )


def expand_meeting(
    draft: MeetingDraft,
    max_repeat_count: int = MAX_REPEAT_COUNT,
) -> list[GeneratedMeeting]:
    """
    Expand a draft into the concrete meetings to persist.

    - Not repeating, no cadence, or repeat_count <= 1: one meeting equal to
      the draft, keeping its `completed` flag.
    - Otherwise `repeat_count` meetings. Occurrence i is shifted from the
      base by the cadence offset for i (7*i days, 14*i days or i months),
      applied to start and end alike so the duration is unchanged. Titles
      after the first get a " (k/N)" suffix and no occurrence of a series
      is marked completed.

    Raises
    ------
    MeetingValidationError
        If the draft breaks a rule checked by `validate_draft`.
    """
    validate_draft(draft, max_repeat_count=max_repeat_count)

    if not draft.repeat or draft.cadence is None or draft.repeat_count <= 1:
        return [
            GeneratedMeeting(
                title=draft.title,
                description=draft.description,
                start=draft.start,
                end=draft.end,
                completed=draft.completed,
                user_id=draft.user_id,
                student_id=draft.student_id,
            )
        ]

    duration = draft.end - draft.start
    total = draft.repeat_count
    occurrences: list[GeneratedMeeting] = []

    for i in range(total):
        start = occurrence_start(draft.start, draft.cadence, i)
        # Same shift for the end; deriving it from the duration keeps
        # overnight meetings intact across month roll-over.
        end = start + duration

        occurrences.append(
            GeneratedMeeting(
                title=draft.title if i == 0 else f"{draft.title} ({i + 1}/{total})",
                description=draft.description,
                start=start,
                end=end,
                completed=False,
                user_id=draft.user_id,
                student_id=draft.student_id,
            )
        )

    return occurrences
