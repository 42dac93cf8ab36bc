"""Calendar arithmetic on canonical dates.

A canonical date is a plain calendar day with no time or timezone,
written as ``YYYY-MM-DD``. All date construction in the engine goes
through this module: strings are split into explicit year/month/day
components and never handed to a generic date parser.
"""

import re
from collections.abc import Callable
from datetime import date, datetime, timedelta

from cycletrack.core.exceptions import InvalidArgumentError

CANONICAL_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)

DAY_NAMES = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

DateLike = date | datetime | str
Clock = Callable[[], date]


def to_canonical(value: DateLike) -> str:
    """Format a date as ``YYYY-MM-DD``.

    Strings already in canonical form are returned unchanged. Dates and
    datetimes use their own (local) year/month/day fields.

    Args:
        value: Date, datetime or canonical date string.

    Returns:
        Canonical date string.

    Raises:
        InvalidArgumentError: If a string is not in canonical form.
    """
    if isinstance(value, str):
        if CANONICAL_PATTERN.fullmatch(value):
            return value
        raise InvalidArgumentError(f"Invalid canonical date: {value!r} (expected YYYY-MM-DD)")
    if isinstance(value, date):
        return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
    raise InvalidArgumentError(f"Cannot convert {type(value).__name__} to a date")


def from_canonical(value: DateLike) -> date:
    """Parse a canonical date string into a ``date``.

    Dates pass through unchanged; datetimes are truncated to their day.

    Raises:
        InvalidArgumentError: If the string is malformed or names an
            impossible day (e.g. 2025-02-30).
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = to_canonical(value)
    year, month, day = (int(part) for part in text.split("-"))
    try:
        return date(year, month, day)
    except ValueError as e:
        raise InvalidArgumentError(f"Invalid canonical date: {value!r} ({e})") from e


def same_day(a: DateLike, b: DateLike) -> bool:
    """Check whether two dates fall on the same calendar day."""
    return to_canonical(from_canonical(a)) == to_canonical(from_canonical(b))


def today(clock: Clock | None = None) -> date:
    """Get the current local calendar day.

    Args:
        clock: Optional zero-argument callable returning a date or
            datetime. Defaults to the system clock.
    """
    if clock is None:
        return date.today()
    return from_canonical(clock())


def add_days(value: date, days: int) -> date:
    """Shift a date by a whole number of days."""
    return value + timedelta(days=days)


def days_between(start: date, end: date) -> int:
    """Whole-day difference ``end - start`` (negative if end is earlier)."""
    return (from_canonical(end) - from_canonical(start)).days


def date_range(start: date, count: int) -> tuple[date, ...]:
    """Consecutive days starting at ``start`` (inclusive)."""
    return tuple(add_days(start, i) for i in range(count))


def day_name(value: DateLike) -> str:
    """English weekday name, e.g. ``Thursday``."""
    return DAY_NAMES[from_canonical(value).weekday()]


def month_name(value: DateLike) -> str:
    """English month name, e.g. ``June``."""
    return MONTH_NAMES[from_canonical(value).month - 1]


def format_for_display(value: DateLike) -> str:
    """Human readable day, e.g. ``Thursday 26 June``."""
    d = from_canonical(value)
    return f"{day_name(d)} {d.day} {month_name(d)}"


def format_short(value: DateLike) -> str:
    """Compact day label used in cycle labels, e.g. ``Thu 26 Jun``."""
    d = from_canonical(value)
    return f"{day_name(d)[:3]} {d.day:02d} {month_name(d)[:3]}"
