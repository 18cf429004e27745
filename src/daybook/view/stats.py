# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.table import Table

from daybook.service.stats import EntryStats
from daybook.time import date_to_display_str
from daybook.view.header import header


def stats_view(stats: EntryStats) -> None:
    header("stats")

    console = Console()
    console.print(f" answered: [bold]{stats['total_answered']}[/bold]")
    console.print(f" missed: [bold]{stats['total_missed']}[/bold]")
    if stats["pending_today"]:
        console.print(" today: [yellow]pending[/yellow]")
    console.print(f" current streak: [bold]{stats['current_streak']}[/bold]")
    console.print(f" average score (30 days): [bold]{stats['average_score']:.1f}[/bold]")

    if len(stats["mood_stats"]) > 0:
        mood_table = Table(title="moods", box=box.SIMPLE)
        mood_table.add_column("mood")
        mood_table.add_column("count", justify="right")
        for mood_stat in stats["mood_stats"]:
            mood_table.add_row(
                f"{mood_stat['emoji']} {mood_stat['title']}", str(mood_stat["count"])
            )
        console.print(mood_table)

    weekday_table = Table(title="average score by weekday", box=box.SIMPLE)
    for weekday_stat in stats["weekday_averages"]:
        weekday_table.add_column(weekday_stat["weekday"], justify="right")
    weekday_table.add_row(
        *[f"{stat['average_score']:.1f}" for stat in stats["weekday_averages"]]
    )
    console.print(weekday_table)

    if len(stats["highlights"]) > 0:
        highlight_table = Table(title="highlights", box=box.SIMPLE)
        highlight_table.add_column("day")
        highlight_table.add_column("score", justify="right")
        highlight_table.add_column("text")
        for entry in stats["highlights"]:
            highlight_table.add_row(
                date_to_display_str(entry["day"]),
                str(entry["score"]) if entry["score"] is not None else "",
                entry["text"] or "",
            )
        console.print(highlight_table)
