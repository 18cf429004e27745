# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum
from rich import box
from rich.console import Console
from rich.table import Table

from daybook.model.day_entry import DayEntry
from daybook.time import (
    date_to_display_str,
    datetime_to_display_local_datetime_str,
    duration_to_display_str,
)
from daybook.view.color import status_markup
from daybook.view.header import header


def history_view(
    entries: list[DayEntry],
    tz: str = "local",
    columns: list[str] = ["day", "status", "window", "mood", "score", "text"],
) -> None:
    """Display the entry history, newest day first."""
    header("history")

    history_table = Table(box=box.SIMPLE)
    for column in columns:
        history_table.add_column(column)

    for entry in entries:
        row = []
        for column in columns:
            column_value = ""
            if column == "day":
                column_value = date_to_display_str(entry["day"])
            elif column == "status":
                column_value = status_markup(entry["status"])
            elif column == "window":
                column_value = format_window(entry, tz)
            elif column == "mood":
                if entry["emoji_variant"] is not None:
                    column_value = f"{entry['emoji_variant']} {entry['emoji_title'] or ''}"
            elif column == "score":
                column_value = str(entry["score"]) if entry["score"] is not None else ""
            elif column == "text":
                column_value = entry["text"] or ""
            row.append(column_value)
        history_table.add_row(*row)

    console = Console()
    console.print(history_table)


def single_entry_view(
    entry: Optional[DayEntry],
    remaining: pendulum.Duration,
    tz: str = "local",
) -> None:
    """Display today's entry."""
    header("today")

    console = Console()
    if entry is None:
        console.print("No prompt planned for today.")
        return

    entry_table = Table(box=box.SIMPLE)
    entry_table.add_column("property")
    entry_table.add_column("value")

    entry_table.add_row("day", date_to_display_str(entry["day"]))
    entry_table.add_row("status", status_markup(entry["status"]))
    entry_table.add_row("window", format_window(entry, tz))
    if entry["status"] == "pending":
        entry_table.add_row("remaining", duration_to_display_str(remaining))
    entry_table.add_row("early answer", "yes" if entry["allow_early_answer"] else "no")
    if entry["emoji_variant"] is not None:
        entry_table.add_row(
            "mood", f"{entry['emoji_variant']} {entry['emoji_title'] or ''}"
        )
    entry_table.add_row("score", str(entry["score"]) if entry["score"] is not None else "")
    entry_table.add_row("text", entry["text"] or "")

    console.print(entry_table)


def format_window(entry: DayEntry, tz: str = "local") -> str:
    opens = datetime_to_display_local_datetime_str(entry["scheduled_at"], tz)
    closes = entry["expires_at"].in_tz(tz).format("HH:mm")
    return f"{opens} - {closes}"
