# SPDX-License-Identifier: MIT

from typing import Literal, Optional, TypedDict

import pendulum

from daybook.model.entity_id import EntityId

# "late" is reserved; no transition currently produces it
EntryStatus = Literal["pending", "answered", "missed", "late"]

Mood = Literal[
    "happy",
    "calm",
    "excited",
    "tired",
    "sick",
    "sad",
    "stressed",
    "angry",
    "anxious",
    "bored",
]

# mood -> (default emoji, title)
MOODS: dict[Mood, tuple[str, str]] = {
    "happy": ("😊", "Happy"),
    "calm": ("😌", "Calm"),
    "excited": ("🤩", "Excited"),
    "tired": ("🥱", "Tired"),
    "sick": ("🤒", "Sick"),
    "sad": ("😔", "Sad"),
    "stressed": ("😵‍💫", "Stressed"),
    "angry": ("😠", "Angry"),
    "anxious": ("😬", "Anxious"),
    "bored": ("😐", "Bored"),
}


class DayEntry(TypedDict):
    id: EntityId
    day: pendulum.Date  # Calendar day in the configured timezone
    scheduled_at: pendulum.DateTime  # Answer window opens
    expires_at: pendulum.DateTime  # Answer window closes
    status: EntryStatus

    # Response payload, only set once answered
    text: Optional[str]
    mood: Optional[Mood]
    score: Optional[int]  # 1..10
    emoji_variant: Optional[str]
    emoji_title: Optional[str]

    allow_early_answer: bool  # Window always open (admin/test entries)
