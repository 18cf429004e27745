# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from daybook import configuration
from daybook.repository.configuration import CONFIGURATION_REPO
from daybook.template.schedule_settings import schedule_settings_from_config
from daybook.terminal.custom_typer import AliasedTyperGroup

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("show, v")
def show() -> None:
    """Display current configuration settings."""
    config = CONFIGURATION_REPO.get_config()

    console = Console()
    table = Table()
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row("start_hour", str(config["start_hour"]))
    table.add_row("end_hour", str(config["end_hour"]))
    table.add_row("window_minutes", str(config["window_minutes"]))
    table.add_row("horizon_days", str(config["horizon_days"]))
    table.add_row("one_shot_lead_seconds", str(config["one_shot_lead_seconds"]))
    table.add_row("timezone", config["timezone"])
    table.add_row("data_path", str(configuration.DATA_PATH))

    console.print(table)


@app.command("set, s")
def set(
    start_hour: Annotated[
        Optional[int],
        typer.Option("--start-hour", help="Hour the daily prompt window opens"),
    ] = None,
    end_hour: Annotated[
        Optional[int],
        typer.Option("--end-hour", help="Hour the daily prompt window closes"),
    ] = None,
    window_minutes: Annotated[
        Optional[int],
        typer.Option("--window-minutes", help="Length of the answer window"),
    ] = None,
    horizon_days: Annotated[
        Optional[int],
        typer.Option("--horizon-days", help="How many days ahead to plan"),
    ] = None,
    one_shot_lead_seconds: Annotated[
        Optional[int],
        typer.Option("--one-shot-lead-seconds", help="Lead time of 'admin soon'"),
    ] = None,
    timezone: Annotated[
        Optional[str],
        typer.Option("--timezone", help="IANA timezone name, or 'local'"),
    ] = None,
    data_path: Annotated[
        Optional[str],
        typer.Option("--data-path", help="Directory path for storing data files"),
    ] = None,
    remove_data_path: Annotated[
        bool,
        typer.Option("--remove-data-path", help="Use the default data directory"),
    ] = False,
) -> None:
    """Change configuration settings."""
    CONFIGURATION_REPO.update_config(
        start_hour=start_hour,
        end_hour=end_hour,
        window_minutes=window_minutes,
        horizon_days=horizon_days,
        one_shot_lead_seconds=one_shot_lead_seconds,
        timezone=timezone,
        data_path=data_path,
        remove_data_path=remove_data_path,
    )

    try:
        schedule_settings_from_config(CONFIGURATION_REPO.get_config())
    except ValueError as e:
        typer.echo(f"Invalid configuration: {e}")
        CONFIGURATION_REPO.is_dirty = False
        raise typer.Exit(1)

    show()
