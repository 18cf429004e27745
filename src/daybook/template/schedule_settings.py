# SPDX-License-Identifier: MIT

import pendulum

from daybook.configuration import Configuration, get_default_configuration
from daybook.model.schedule_settings import ScheduleSettings


def schedule_settings_from_config(config: Configuration) -> ScheduleSettings:
    if not 0 <= config["start_hour"] < config["end_hour"] <= 24:
        raise ValueError(
            f"invalid daily window: start_hour={config['start_hour']}, end_hour={config['end_hour']}"
        )
    if config["window_minutes"] <= 0:
        raise ValueError(f"window_minutes must be positive, got {config['window_minutes']}")
    if config["horizon_days"] < 1:
        raise ValueError(f"horizon_days must be at least 1, got {config['horizon_days']}")

    return {
        "start_hour": config["start_hour"],
        "end_hour": config["end_hour"],
        "window_duration": pendulum.duration(minutes=config["window_minutes"]),
        "horizon_days": config["horizon_days"],
        "one_shot_lead": pendulum.duration(seconds=config["one_shot_lead_seconds"]),
        "timezone": config["timezone"],
    }


def get_schedule_settings_template() -> ScheduleSettings:
    return schedule_settings_from_config(get_default_configuration())
