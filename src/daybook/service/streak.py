# SPDX-License-Identifier: MIT

import pendulum

from daybook.model.day_entry import DayEntry


def current_streak(entries: list[DayEntry], today: pendulum.Date) -> int:
    """
    Count consecutive answered days ending at `today`.

    An unanswered today yields 0, even when yesterday was answered.
    """
    answered_days = {entry["day"] for entry in entries if entry["status"] == "answered"}

    streak = 0
    day = today
    while day in answered_days:
        streak += 1
        day = day.subtract(days=1)
    return streak
