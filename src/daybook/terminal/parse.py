# SPDX-License-Identifier: MIT

import re
from typing import Optional

import pendulum
import typer


def parse_moment(moment_param: str, tz: str = "local") -> pendulum.DateTime:
    """
    Parse a moment given on the command line into a UTC DateTime.

    Accepts 'YYYY-MM-DD HH:mm' (or any ISO-8601 datetime), '(H)H:mm' for
    today, and 'now'/'n'. Naive values are read in timezone `tz`.
    """
    moment = moment_param.strip()

    # Match (H)H:mm format (time only, use today's date)
    time_match = re.match(r"^(\d{1,2}):(\d{2})$", moment)
    if time_match:
        hour = int(time_match.group(1))
        minute = int(time_match.group(2))

        if hour < 0 or hour > 23:
            raise typer.BadParameter(f"Hour must be between 0 and 23, got {hour}")
        if minute < 0 or minute > 59:
            raise typer.BadParameter(f"Minute must be between 0 and 59, got {minute}")

        return (
            pendulum.today(tz)
            .set(hour=hour, minute=minute, second=0, microsecond=0)
            .in_tz("UTC")
        )

    if moment == "now" or moment == "n":
        return pendulum.now("UTC")

    # Match YYYY-MM-DD format (with optional time component)
    if re.match(r"\d{4}-\d{2}-\d{2}", moment):
        try:
            parsed = pendulum.parse(moment, tz=tz)
        except ValueError as e:
            raise typer.BadParameter(f"Incorrect datetime format: {e}")
        if isinstance(parsed, pendulum.DateTime):
            return parsed.in_tz("UTC")

    raise typer.BadParameter("Incorrect datetime format")


def parse_seconds(seconds: Optional[int]) -> Optional[pendulum.Duration]:
    if seconds is None:
        return None
    if seconds < 0:
        raise typer.BadParameter(f"Lead time cannot be negative, got {seconds}")
    return pendulum.duration(seconds=seconds)
