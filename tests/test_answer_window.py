from __future__ import annotations

import random

import pendulum
import pytest

from conftest import TODAY, make_entry
from daybook.service.answer_window import expiry_for, is_answerable, random_fire_time


def test_window_is_inclusive_on_both_ends():
    entry = make_entry(TODAY, hour=12)

    assert is_answerable(entry, entry["scheduled_at"])
    assert is_answerable(entry, entry["scheduled_at"].add(minutes=5))
    assert is_answerable(entry, entry["expires_at"])


def test_window_is_closed_just_outside():
    entry = make_entry(TODAY, hour=12)

    assert not is_answerable(entry, entry["scheduled_at"].subtract(seconds=1))
    assert not is_answerable(entry, entry["expires_at"].add(seconds=1))


def test_allow_early_answer_is_always_open():
    entry = make_entry(TODAY, hour=12, allow_early_answer=True)

    assert is_answerable(entry, entry["scheduled_at"].subtract(hours=5))
    assert is_answerable(entry, entry["expires_at"].add(hours=5))


def test_random_fire_time_stays_inside_daily_window(settings):
    rng = random.Random(7)
    earliest = pendulum.datetime(2025, 10, 6, 10, tz="UTC")
    latest = pendulum.datetime(2025, 10, 6, 21, 50, tz="UTC")

    for _ in range(200):
        fire = random_fire_time(TODAY, settings, rng)
        assert fire is not None
        assert earliest <= fire <= latest
        assert fire.second == 0 and fire.microsecond == 0
        assert expiry_for(fire, settings) <= pendulum.datetime(2025, 10, 6, 22, tz="UTC")


def test_random_fire_time_is_reproducible_with_a_seed(settings):
    first = random_fire_time(TODAY, settings, random.Random(42))
    second = random_fire_time(TODAY, settings, random.Random(42))

    assert first == second


def test_random_fire_time_none_when_answer_window_does_not_fit(settings):
    settings["start_hour"] = 10
    settings["end_hour"] = 11
    settings["window_duration"] = pendulum.duration(hours=2)

    assert random_fire_time(TODAY, settings, random.Random(1)) is None


def test_expiry_adds_window_duration(settings):
    fire = pendulum.datetime(2025, 10, 6, 15, 30, tz="UTC")

    assert expiry_for(fire, settings) == pendulum.datetime(2025, 10, 6, 15, 40, tz="UTC")


class EarliestDraw(random.Random):
    def randint(self, a, b):
        return a


class LatestDraw(random.Random):
    def randint(self, a, b):
        return b


@pytest.mark.parametrize("day", [pendulum.date(2025, 3, 30), pendulum.date(2025, 10, 26)])
def test_daily_window_keeps_local_hours_on_dst_days(settings, day):
    settings["timezone"] = "Europe/Paris"

    earliest = random_fire_time(day, settings, EarliestDraw())
    latest = random_fire_time(day, settings, LatestDraw())

    assert earliest.in_tz("Europe/Paris").format("HH:mm") == "10:00"
    assert latest.in_tz("Europe/Paris").format("HH:mm") == "21:50"
    assert expiry_for(latest, settings).in_tz("Europe/Paris").format("HH:mm") == "22:00"


def test_daily_window_may_end_at_midnight(settings):
    settings["start_hour"] = 0
    settings["end_hour"] = 24

    latest = random_fire_time(TODAY, settings, LatestDraw())

    assert latest == pendulum.datetime(2025, 10, 6, 23, 50, tz="UTC")
