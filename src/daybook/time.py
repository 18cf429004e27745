# SPDX-License-Identifier: MIT

from typing import Optional, cast

import pendulum


def now_utc() -> pendulum.DateTime:
    return pendulum.now("UTC")


def datetime_to_iso_str(datetime: pendulum.DateTime) -> str:
    return datetime.isoformat()


def datetime_to_iso_str_optional(
    datetime: Optional[pendulum.DateTime],
) -> Optional[str]:
    if datetime is None:
        return None
    return datetime_to_iso_str(datetime)


def datetime_from_str(datetime: str) -> pendulum.DateTime:
    return cast(pendulum.DateTime, pendulum.parse(datetime))


def datetime_from_str_optional(datetime: Optional[str]) -> Optional[pendulum.DateTime]:
    if datetime is None:
        return None
    return datetime_from_str(datetime)


def date_to_str(date: pendulum.Date) -> str:
    return date.to_date_string()


def date_to_str_optional(date: Optional[pendulum.Date]) -> Optional[str]:
    if date is None:
        return None
    return date_to_str(date)


def date_from_str(date_str: str) -> pendulum.Date:
    """Parse a 'YYYY-MM-DD' string into a pendulum.Date."""
    return cast(pendulum.Date, pendulum.parse(date_str, exact=True))


def date_from_str_optional(date_str: Optional[str]) -> Optional[pendulum.Date]:
    if date_str is None:
        return None
    return date_from_str(date_str)


def day_key(date: pendulum.Date) -> str:
    """Calendar key of a day in 'YYYYMMDD' format, e.g. '20251006'."""
    return date.format("YYYYMMDD")


def local_day(datetime: pendulum.DateTime, tz: str = "local") -> pendulum.Date:
    """The calendar day containing `datetime` in timezone `tz`."""
    return datetime.in_tz(tz).date()


def start_of_day(date: pendulum.Date, tz: str = "local") -> pendulum.DateTime:
    return pendulum.datetime(date.year, date.month, date.day, tz=tz)


def datetime_to_display_local_datetime_str(
    datetime: pendulum.DateTime, tz: str = "local"
) -> str:
    return datetime.in_tz(tz).format("MMM-DD ddd HH:mm")


def date_to_display_str(date: pendulum.Date) -> str:
    return date.format("YYYY-MM-DD ddd")


def duration_to_display_str(duration: pendulum.Duration) -> str:
    total_seconds = max(0, int(duration.total_seconds()))
    minutes, seconds = divmod(total_seconds, 60)
    return f"{minutes}:{seconds:02d}"
