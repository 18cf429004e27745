from __future__ import annotations

from copy import deepcopy

from conftest import TODAY, make_entry
from daybook.service.stats import compute_stats


def answered(days_ago, score, title=None, emoji=None):
    entry = make_entry(TODAY.subtract(days=days_ago), status="answered", score=score)
    entry["emoji_title"] = title
    entry["emoji_variant"] = emoji
    return entry


def test_totals_and_streak():
    entries = [
        answered(2, 5),
        make_entry(TODAY.subtract(days=1), status="missed"),
        answered(0, 7),
    ]

    stats = compute_stats(entries, TODAY)

    assert stats["total_answered"] == 2
    assert stats["total_missed"] == 1
    assert stats["pending_today"] is False
    assert stats["current_streak"] == 1


def test_pending_today_is_reported():
    stats = compute_stats([make_entry(TODAY)], TODAY)

    assert stats["pending_today"] is True
    assert stats["total_answered"] == 0
    assert stats["average_score"] == 0.0


def test_mood_stats_most_frequent_first():
    entries = [
        answered(3, 5, "Calm", "😌"),
        answered(2, 6, "Happy", "😊"),
        answered(1, 7, "Happy", "😊"),
        answered(0, None),
    ]

    mood_stats = compute_stats(entries, TODAY)["mood_stats"]

    assert mood_stats == [
        {"emoji": "😊", "title": "Happy", "count": 2},
        {"emoji": "😌", "title": "Calm", "count": 1},
    ]


def test_score_timeline_covers_last_thirty_days():
    entries = [answered(45, 2), answered(10, 6), answered(3, 8), answered(1, None)]

    stats = compute_stats(entries, TODAY)

    assert [stat["score"] for stat in stats["score_timeline"]] == [6, 8]
    assert stats["score_timeline"][0]["day"] == TODAY.subtract(days=10)
    assert stats["average_score"] == 7.0


def test_weekday_averages_start_on_monday():
    # TODAY is a Monday
    entries = [answered(0, 8), answered(7, 4), answered(1, 9)]

    weekday_averages = compute_stats(entries, TODAY)["weekday_averages"]

    assert [stat["weekday"] for stat in weekday_averages] == [
        "Mon",
        "Tue",
        "Wed",
        "Thu",
        "Fri",
        "Sat",
        "Sun",
    ]
    assert weekday_averages[0]["average_score"] == 6.0
    assert weekday_averages[6]["average_score"] == 9.0
    assert weekday_averages[3]["average_score"] == 0.0


def test_highlights_are_top_three_by_score():
    entries = [answered(4, 3), answered(3, 10), answered(2, 1), answered(1, 7), answered(0, 9)]

    highlights = compute_stats(entries, TODAY)["highlights"]

    assert [entry["score"] for entry in highlights] == [10, 9, 7]


def test_input_not_mutated():
    entries = [answered(1, 5, "Calm", "😌"), make_entry(TODAY)]
    original = deepcopy(entries)

    compute_stats(entries, TODAY)

    assert entries == original
