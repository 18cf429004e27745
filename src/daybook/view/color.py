# SPDX-License-Identifier: MIT

from daybook.model.day_entry import EntryStatus

STATUS_COLORS: dict[EntryStatus, str] = {
    "pending": "yellow",
    "answered": "green",
    "missed": "bright_black",
    "late": "dark_orange",
}


def status_markup(status: EntryStatus) -> str:
    color = STATUS_COLORS[status]
    return f"[{color}]{status}[/{color}]"
