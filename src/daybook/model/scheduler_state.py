# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum


class SchedulerState(TypedDict):
    last_plan_day_key: Optional[str]  # Day key of the last completed planning pass
    last_plan_timestamp: Optional[pendulum.DateTime]
    first_plan_date: Optional[pendulum.Date]  # Set once, lower bound for backfill
