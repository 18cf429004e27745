# SPDX-License-Identifier: MIT

import pendulum

from daybook.model.day_entry import DayEntry, EntryStatus
from daybook.model.entity_id import generate_entity_id


def get_day_entry_template(
    day: pendulum.Date,
    scheduled_at: pendulum.DateTime,
    expires_at: pendulum.DateTime,
    status: EntryStatus = "pending",
    allow_early_answer: bool = False,
) -> DayEntry:
    return {
        "id": generate_entity_id(),
        "day": day,
        "scheduled_at": scheduled_at,
        "expires_at": expires_at,
        "status": status,
        "text": None,
        "mood": None,
        "score": None,
        "emoji_variant": None,
        "emoji_title": None,
        "allow_early_answer": allow_early_answer,
    }
