# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Optional

import pendulum

from daybook.model.day_entry import MOODS, DayEntry, Mood
from daybook.model.schedule_settings import ScheduleSettings
from daybook.service.answer_window import PolicyViolation, is_answerable
from daybook.template.day_entry import get_day_entry_template

SCORE_MIN = 1
SCORE_MAX = 10

# Hour of the synthetic window given to backfilled days
SYNTHETIC_WINDOW_HOUR = 12


class EntryValidationError(Exception):
    """Raised when a response payload is invalid."""

    pass


def reconcile(entry: DayEntry, now: pendulum.DateTime) -> DayEntry:
    """
    Apply lazy missed detection to a single entry.

    Returns a copy; a pending entry whose window closed before `now` comes
    back as missed. Every read path runs entries through this before use.
    """
    reconciled = deepcopy(entry)
    if reconciled["status"] == "pending" and now > reconciled["expires_at"]:
        reconciled["status"] = "missed"
    return reconciled


def reconcile_all(
    entries: list[DayEntry], now: pendulum.DateTime
) -> tuple[list[DayEntry], bool]:
    reconciled = [reconcile(entry, now) for entry in entries]
    changed = any(
        before["status"] != after["status"] for before, after in zip(entries, reconciled)
    )
    return reconciled, changed


def find_entry_index(entries: list[DayEntry], day: pendulum.Date) -> Optional[int]:
    for index, entry in enumerate(entries):
        if entry["day"] == day:
            return index
    return None


def apply_response(
    entry: DayEntry,
    now: pendulum.DateTime,
    text: str,
    mood: Optional[Mood] = None,
    score: Optional[int] = None,
    emoji_variant: Optional[str] = None,
    emoji_title: Optional[str] = None,
) -> DayEntry:
    """
    pending -> answered.

    Raises PolicyViolation when the entry is not pending or its window is
    closed, and EntryValidationError on a blank text or an out-of-range
    score. The passed entry is never modified; the answered copy is returned.
    """
    if entry["status"] != "pending":
        raise PolicyViolation(
            f"entry for {entry['day'].to_date_string()} is already {entry['status']}"
        )
    if not is_answerable(entry, now):
        raise PolicyViolation(
            f"entry for {entry['day'].to_date_string()} is outside its answer window"
        )

    trimmed_text = text.strip()
    if trimmed_text == "":
        raise EntryValidationError("An empty response cannot be saved.")
    if score is not None and not SCORE_MIN <= score <= SCORE_MAX:
        raise EntryValidationError(
            f"Score must be between {SCORE_MIN} and {SCORE_MAX}. Got: {score}"
        )
    if mood is not None and mood not in MOODS:
        raise EntryValidationError(
            f"Unknown mood '{mood}'. Valid moods: {', '.join(MOODS)}"
        )

    answered = deepcopy(entry)
    answered["text"] = trimmed_text
    answered["mood"] = mood
    answered["score"] = score
    if mood is not None:
        default_emoji, default_title = MOODS[mood]
        answered["emoji_variant"] = emoji_variant or default_emoji
        answered["emoji_title"] = emoji_title or default_title
    else:
        answered["emoji_variant"] = emoji_variant
        answered["emoji_title"] = emoji_title
    answered["status"] = "answered"
    answered["allow_early_answer"] = False
    return answered


def replan(
    entry: DayEntry,
    scheduled_at: pendulum.DateTime,
    expires_at: pendulum.DateTime,
    allow_early_answer: bool = False,
) -> None:
    """Reset `entry` in place to a fresh pending window."""
    entry["scheduled_at"] = scheduled_at
    entry["expires_at"] = expires_at
    entry["status"] = "pending"
    entry["text"] = None
    entry["mood"] = None
    entry["score"] = None
    entry["emoji_variant"] = None
    entry["emoji_title"] = None
    entry["allow_early_answer"] = allow_early_answer


def synthesize_missed(day: pendulum.Date, settings: ScheduleSettings) -> DayEntry:
    """A missed entry for a day nobody planned; its window never had an alert."""
    scheduled_at = pendulum.datetime(
        day.year, day.month, day.day, SYNTHETIC_WINDOW_HOUR, tz=settings["timezone"]
    ).in_tz("UTC")
    return get_day_entry_template(
        day=day,
        scheduled_at=scheduled_at,
        expires_at=scheduled_at + settings["window_duration"],
        status="missed",
    )
