# SPDX-License-Identifier: MIT

from typing import Optional, cast

import pendulum


def now_local() -> pendulum.DateTime:
    return pendulum.now("local")


def today_local() -> pendulum.Date:
    return pendulum.today("local").date()


def datetime_to_iso_str(datetime: pendulum.DateTime) -> str:
    return datetime.isoformat()


def datetime_from_str(datetime: str) -> pendulum.DateTime:
    return cast(pendulum.DateTime, pendulum.parse(datetime))


def date_to_str(date: pendulum.Date) -> str:
    """Convert a pendulum.Date to a 'YYYY-MM-DD' string."""
    return date.to_date_string()


def date_to_str_optional(date: Optional[pendulum.Date]) -> Optional[str]:
    if date is None:
        return None
    return date_to_str(date)


def date_from_str(date_str: str) -> pendulum.Date:
    """Parse a 'YYYY-MM-DD' string (or a full timestamp) to a pendulum.Date."""
    parsed = pendulum.parse(date_str, exact=True)
    if isinstance(parsed, pendulum.DateTime):
        return parsed.date()
    return cast(pendulum.Date, parsed)


def date_from_str_optional(date_str: Optional[str]) -> Optional[pendulum.Date]:
    if date_str is None:
        return None
    return date_from_str(date_str)


def month_key(moment: pendulum.DateTime) -> str:
    """Bucket key used by monthly stats, e.g. '2026-03'."""
    return moment.format("YYYY-MM")


def datetime_to_display_str(datetime: pendulum.DateTime) -> str:
    return datetime.in_tz("local").format("MMM-DD ddd HH:mm")


def date_to_display_str(date: pendulum.Date) -> str:
    return date.format("YYYY-MM-DD ddd")


def date_to_display_str_optional(date: Optional[pendulum.Date]) -> Optional[str]:
    if date is None:
        return None
    return date_to_display_str(date)
