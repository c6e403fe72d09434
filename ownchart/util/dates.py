# ownchart/util/dates.py
from __future__ import annotations

import datetime as dt
import re
from typing import Iterator, Optional, Union

DateLike = Union[str, dt.date]

_YMD_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class InvalidDateError(ValueError):
    """Raised when a calendar-date string cannot be parsed."""


def parse_date_yyyy_mm_dd(s: str) -> dt.date:
    ss = str(s).strip() if s is not None else ""
    if not _YMD_RE.match(ss):
        raise InvalidDateError(f"Invalid date (expected YYYY-MM-DD): {s!r}")
    try:
        return dt.datetime.strptime(ss, "%Y-%m-%d").date()
    except ValueError as ex:
        raise InvalidDateError(f"Invalid date: {s!r}") from ex


def try_parse_date(s: object) -> Optional[dt.date]:
    """Parse a stored date field; None for missing or malformed values."""
    if isinstance(s, dt.datetime):
        return s.date()
    if isinstance(s, dt.date):
        return s
    if not isinstance(s, str) or not s.strip():
        return None
    try:
        return parse_date_yyyy_mm_dd(s)
    except InvalidDateError:
        return None


def coerce_date(d: DateLike) -> dt.date:
    if isinstance(d, dt.datetime):
        return d.date()
    if isinstance(d, dt.date):
        return d
    if isinstance(d, str):
        return parse_date_yyyy_mm_dd(d)
    raise InvalidDateError(f"Invalid date: {d!r}")


def format_date(d: dt.date) -> str:
    return d.isoformat()


def add_days(d: DateLike, days: int) -> str:
    """add_days('2025-01-01', 5) -> '2025-01-06'"""
    return format_date(coerce_date(d) + dt.timedelta(days=int(days)))


def calculate_duration(start: DateLike, end: DateLike) -> int:
    """Inclusive day count: calculate_duration('2025-01-01', '2025-01-05') -> 5"""
    return (coerce_date(end) - coerce_date(start)).days + 1


def is_weekend(d: DateLike) -> bool:
    return coerce_date(d).weekday() >= 5


def iter_days(start: dt.date, end: dt.date) -> Iterator[dt.date]:
    cur = start
    one = dt.timedelta(days=1)
    while cur <= end:
        yield cur
        cur += one
