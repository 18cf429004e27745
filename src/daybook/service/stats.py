# SPDX-License-Identifier: MIT

from typing import TypedDict

import pendulum

from daybook.model.day_entry import DayEntry
from daybook.service.streak import current_streak

SCORE_TIMELINE_DAYS = 30
HIGHLIGHT_COUNT = 3
WEEKDAY_NAMES = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


class MoodStat(TypedDict):
    emoji: str
    title: str
    count: int


class ScoreStat(TypedDict):
    day: pendulum.Date
    score: int


class WeekdayStat(TypedDict):
    weekday: str
    average_score: float


class EntryStats(TypedDict):
    total_answered: int
    total_missed: int
    pending_today: bool
    mood_stats: list[MoodStat]
    score_timeline: list[ScoreStat]
    average_score: float
    weekday_averages: list[WeekdayStat]
    highlights: list[DayEntry]
    current_streak: int


def compute_stats(entries: list[DayEntry], today: pendulum.Date) -> EntryStats:
    """
    Aggregate answered entries into the statistics shown to the user.

    Args:
        entries: Snapshot of the collection, already reconciled
        today: Reference day for the score timeline and the streak

    Returns:
        EntryStats; the input is not modified
    """
    answered_entries = [entry for entry in entries if entry["status"] == "answered"]
    timeline = get_score_timeline(answered_entries, today)

    return {
        "total_answered": len(answered_entries),
        "total_missed": len([entry for entry in entries if entry["status"] == "missed"]),
        "pending_today": any(
            entry["day"] == today and entry["status"] == "pending" for entry in entries
        ),
        "mood_stats": get_mood_stats(answered_entries),
        "score_timeline": timeline,
        "average_score": get_average_score(timeline),
        "weekday_averages": get_weekday_averages(answered_entries),
        "highlights": get_highlights(answered_entries),
        "current_streak": current_streak(entries, today),
    }


def get_mood_stats(answered_entries: list[DayEntry]) -> list[MoodStat]:
    """Count answered entries per emoji title, most frequent first."""
    mood_counts: dict[str, MoodStat] = {}
    for entry in answered_entries:
        title = entry["emoji_title"]
        emoji = entry["emoji_variant"]
        if title is None or emoji is None:
            continue
        if title in mood_counts:
            mood_counts[title]["count"] += 1
        else:
            mood_counts[title] = {"emoji": emoji, "title": title, "count": 1}
    return sorted(mood_counts.values(), key=lambda stat: stat["count"], reverse=True)


def get_score_timeline(
    answered_entries: list[DayEntry], today: pendulum.Date
) -> list[ScoreStat]:
    since = today.subtract(days=SCORE_TIMELINE_DAYS)
    timeline: list[ScoreStat] = [
        {"day": entry["day"], "score": entry["score"]}
        for entry in answered_entries
        if entry["score"] is not None and entry["day"] >= since
    ]
    return sorted(timeline, key=lambda stat: stat["day"])


def get_average_score(timeline: list[ScoreStat]) -> float:
    if len(timeline) == 0:
        return 0.0
    return sum(stat["score"] for stat in timeline) / len(timeline)


def get_weekday_averages(answered_entries: list[DayEntry]) -> list[WeekdayStat]:
    """Average score per weekday, Monday first; 0.0 where nothing was scored."""
    scores_by_weekday: dict[int, list[int]] = {}
    for entry in answered_entries:
        if entry["score"] is None:
            continue
        scores_by_weekday.setdefault(entry["day"].weekday(), []).append(entry["score"])

    weekday_stats: list[WeekdayStat] = []
    for weekday, weekday_name in enumerate(WEEKDAY_NAMES):
        scores = scores_by_weekday.get(weekday, [])
        average = sum(scores) / len(scores) if len(scores) > 0 else 0.0
        weekday_stats.append({"weekday": weekday_name, "average_score": average})
    return weekday_stats


def get_highlights(answered_entries: list[DayEntry]) -> list[DayEntry]:
    return sorted(
        answered_entries,
        key=lambda entry: entry["score"] if entry["score"] is not None else 0,
        reverse=True,
    )[:HIGHLIGHT_COUNT]
