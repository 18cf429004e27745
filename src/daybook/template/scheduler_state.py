# SPDX-License-Identifier: MIT

from daybook.model.scheduler_state import SchedulerState


def get_scheduler_state_template() -> SchedulerState:
    return {
        "last_plan_day_key": None,
        "last_plan_timestamp": None,
        "first_plan_date": None,
    }
