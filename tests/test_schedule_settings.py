from __future__ import annotations

import pendulum
import pytest

from daybook.configuration import get_default_configuration
from daybook.template.schedule_settings import (
    get_schedule_settings_template,
    schedule_settings_from_config,
)


def test_defaults():
    settings = get_schedule_settings_template()

    assert settings["start_hour"] == 10
    assert settings["end_hour"] == 22
    assert settings["window_duration"] == pendulum.duration(minutes=10)
    assert settings["horizon_days"] == 14
    assert settings["one_shot_lead"] == pendulum.duration(seconds=60)
    assert settings["timezone"] == "local"


def test_whole_day_window_is_accepted():
    config = get_default_configuration()
    config["start_hour"] = 0
    config["end_hour"] = 24

    settings = schedule_settings_from_config(config)

    assert (settings["start_hour"], settings["end_hour"]) == (0, 24)


@pytest.mark.parametrize(
    "field, value",
    [
        ("start_hour", 22),
        ("start_hour", -1),
        ("end_hour", 25),
        ("window_minutes", 0),
        ("horizon_days", 0),
    ],
)
def test_invalid_settings_are_rejected(field, value):
    config = get_default_configuration()
    config[field] = value

    with pytest.raises(ValueError):
        schedule_settings_from_config(config)
