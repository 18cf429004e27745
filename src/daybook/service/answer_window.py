# SPDX-License-Identifier: MIT

import random
from typing import Optional

import pendulum

from daybook.model.day_entry import DayEntry
from daybook.model.schedule_settings import ScheduleSettings
from daybook.time import start_of_day


class PolicyViolation(Exception):
    """Raised when a response is submitted outside the entry's answer window."""

    pass


def is_answerable(entry: DayEntry, now: pendulum.DateTime) -> bool:
    """
    Whether `now` is a valid moment to accept a response for `entry`.

    The window is inclusive on both ends. Entries with `allow_early_answer`
    are always open. Evaluate this at submission time; never cache it.
    """
    if entry["allow_early_answer"]:
        return True
    return entry["scheduled_at"] <= now <= entry["expires_at"]


def random_fire_time(
    day: pendulum.Date,
    settings: ScheduleSettings,
    rng: random.Random,
) -> Optional[pendulum.DateTime]:
    """
    Draw a uniformly random prompt time on `day` within the daily window.

    The last `window_duration` of the daily window is left free so the whole
    answer window fits before `end_hour`. The result is truncated to the
    minute and returned in UTC; None when the daily window is too small.
    """
    # Wall-clock bounds, so DST days keep the configured local hours
    window_start = pendulum.datetime(
        day.year, day.month, day.day, settings["start_hour"], tz=settings["timezone"]
    )
    if settings["end_hour"] == 24:
        window_end = start_of_day(day.add(days=1), settings["timezone"])
    else:
        window_end = pendulum.datetime(
            day.year, day.month, day.day, settings["end_hour"], tz=settings["timezone"]
        )

    span = int((window_end - window_start).total_seconds()) - int(
        settings["window_duration"].total_seconds()
    )
    if span <= 0:
        return None

    offset = rng.randint(0, span)
    fire = window_start.add(seconds=offset).set(second=0, microsecond=0)
    return fire.in_tz("UTC")


def expiry_for(fire: pendulum.DateTime, settings: ScheduleSettings) -> pendulum.DateTime:
    return fire + settings["window_duration"]
