# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from daybook.provider import get_notifier, get_schedule_settings, get_scheduling_engine
from daybook.repository.storage import StorageError
from daybook.terminal.custom_typer import AliasedTyperGroup
from daybook.terminal.parse import parse_moment, parse_seconds
from daybook.view.day_entry import single_entry_view

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("soon, s")
def soon(
    seconds: Annotated[
        Optional[int],
        typer.Option("--seconds", "-s", help="Lead time before the window opens"),
    ] = None,
) -> None:
    """Replace today's entry with one that opens shortly and accepts early answers."""
    try:
        entry = get_scheduling_engine().plan_one_shot_soon(parse_seconds(seconds))
    except StorageError as e:
        typer.echo(f"Could not save the entry: {e}")
        raise typer.Exit(1)

    single_entry_view(
        entry, entry["expires_at"] - entry["scheduled_at"], get_schedule_settings()["timezone"]
    )


@app.command("at", no_args_is_help=True)
def at(moment: str) -> None:
    """Plan the day containing MOMENT with a window opening at MOMENT."""
    settings = get_schedule_settings()
    try:
        entry = get_scheduling_engine().plan_at(parse_moment(moment, settings["timezone"]))
    except ValueError as e:
        typer.echo(str(e))
        raise typer.Exit(1)
    except StorageError as e:
        typer.echo(f"Could not save the entry: {e}")
        raise typer.Exit(1)

    single_entry_view(
        entry, entry["expires_at"] - entry["scheduled_at"], settings["timezone"]
    )


@app.command("purge-alerts, pa")
def purge_alerts() -> None:
    """Cancel every pending alert created by daybook."""
    removed = get_notifier().purge_app_pending()
    typer.echo(f"Cancelled {removed} alerts.")
