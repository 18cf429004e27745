# SPDX-License-Identifier: MIT

from typing import TypedDict

import pendulum


class ScheduleSettings(TypedDict):
    start_hour: int  # Daily window opens
    end_hour: int  # Daily window closes
    window_duration: pendulum.Duration  # Answer window length
    horizon_days: int  # How many days ahead to plan
    one_shot_lead: pendulum.Duration  # Lead time for admin one-shot entries
    timezone: str
