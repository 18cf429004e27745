# SPDX-License-Identifier: MIT

import logging
from typing import Annotated, NoReturn, Optional, cast

import typer

from daybook.model.day_entry import MOODS, Mood
from daybook.provider import (
    get_journal,
    get_notifier,
    get_schedule_settings,
    get_scheduling_engine,
)
from daybook.repository.storage import StorageError
from daybook.service.answer_window import PolicyViolation
from daybook.service.lifecycle import EntryValidationError
from daybook.terminal import admin, configuration
from daybook.terminal.custom_typer import AliasedTyperGroup
from daybook.time import now_utc
from daybook.view import state as view_state
from daybook.view.alert import alerts_view, delivered_alerts_view
from daybook.view.day_entry import history_view, single_entry_view
from daybook.view.stats import stats_view

app = typer.Typer(
    cls=AliasedTyperGroup,
    help="daybook - one random prompt a day",
    no_args_is_help=True,
)
app.add_typer(admin.app, name="admin, ad")
app.add_typer(configuration.app, name="config, c")


@app.callback()
def main_callback(
    no_header: Annotated[
        bool,
        typer.Option(
            "--no-header",
            "-nh",
            help="Suppress header output in reports",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log scheduling details"),
    ] = False,
) -> None:
    """
    daybook - one random prompt a day

    Global options that apply to all commands.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if no_header:
        view_state.set_show_header(False)


@app.command("active, ac")
def active() -> None:
    """Run the once-a-day planning pass and deliver due prompts."""
    engine = get_scheduling_engine()
    try:
        planned = engine.on_became_active()
    except StorageError as e:
        typer.echo(f"Planning failed, it will be retried next time: {e}")
        raise typer.Exit(1)

    try:
        delivered_alerts_view(get_notifier().pop_due(now_utc()))
        if planned:
            typer.echo(
                f"Planned the next {get_schedule_settings()['horizon_days']} days."
            )
        __show_today()
    except StorageError as e:
        __exit_on_read_failure(e)


@app.command("today, t")
def today() -> None:
    """Show today's entry and the time left to answer."""
    try:
        __show_today()
    except StorageError as e:
        __exit_on_read_failure(e)


@app.command("answer, a", no_args_is_help=True)
def answer(
    text: str,
    mood: Annotated[
        Optional[str],
        typer.Option("--mood", "-m", help=", ".join(MOODS)),
    ] = None,
    score: Annotated[
        Optional[int],
        typer.Option("--score", "-s", help="1 to 10"),
    ] = None,
    emoji: Annotated[
        Optional[str],
        typer.Option("--emoji", "-e", help="Emoji to show instead of the mood's"),
    ] = None,
) -> None:
    """Answer today's prompt."""
    journal = get_journal()
    try:
        answered = journal.submit_response(
            text, mood=cast(Optional[Mood], mood), score=score, emoji_variant=emoji
        )
    except LookupError:
        typer.echo("There is no prompt for today.")
        raise typer.Exit(1)
    except PolicyViolation as e:
        typer.echo(f"The answer window is not open: {e}")
        raise typer.Exit(1)
    except EntryValidationError as e:
        typer.echo(str(e))
        raise typer.Exit(1)
    except StorageError as e:
        typer.echo(f"Could not save the answer: {e}")
        raise typer.Exit(1)

    typer.echo("Saved.")
    try:
        remaining = journal.remaining()
    except StorageError as e:
        __exit_on_read_failure(e)
    single_entry_view(answered, remaining, get_schedule_settings()["timezone"])


@app.command("history, h")
def history() -> None:
    """List every day, newest first."""
    try:
        entries = get_journal().history()
    except StorageError as e:
        __exit_on_read_failure(e)
    history_view(entries, get_schedule_settings()["timezone"])


@app.command("stats, st")
def stats() -> None:
    """Show answered totals, moods, scores and the current streak."""
    try:
        entry_stats = get_journal().statistics()
    except StorageError as e:
        __exit_on_read_failure(e)
    stats_view(entry_stats)


@app.command("alerts, al")
def alerts() -> None:
    """List pending alerts."""
    try:
        pending = get_notifier().list_pending()
    except StorageError as e:
        __exit_on_read_failure(e)
    alerts_view(pending, get_schedule_settings()["timezone"])


def __show_today() -> None:
    journal = get_journal()
    single_entry_view(
        journal.today_entry(), journal.remaining(), get_schedule_settings()["timezone"]
    )


def __exit_on_read_failure(e: StorageError) -> NoReturn:
    typer.echo(f"Could not read saved data: {e}")
    raise typer.Exit(1)


def run() -> None:
    app()
