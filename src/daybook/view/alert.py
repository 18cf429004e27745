# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.table import Table

from daybook.model.alert import PendingAlert
from daybook.time import datetime_to_display_local_datetime_str
from daybook.view.header import header


def alerts_view(alerts: list[PendingAlert], tz: str = "local") -> None:
    header("pending alerts")

    alerts_table = Table(box=box.SIMPLE)
    alerts_table.add_column("id")
    alerts_table.add_column("fires at")
    for alert in alerts:
        alerts_table.add_row(
            alert["id"], datetime_to_display_local_datetime_str(alert["fire_at"], tz)
        )

    console = Console()
    console.print(alerts_table)


def delivered_alerts_view(alerts: list[PendingAlert]) -> None:
    console = Console()
    for alert in alerts:
        console.print(
            f"[bold cyan]How are you today?[/bold cyan] ({alert['id']}) "
            "Write a few words before the window closes."
        )
