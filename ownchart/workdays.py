# ownchart/workdays.py
from __future__ import annotations

import datetime as dt
from typing import Any, Callable, List, Optional, Union

from .holidays import HolidayLookup, normalize_region
from .model import DateEditResult, WorkingDaysConfig, WorkingDaysSummary
from .util.console import obs_warn
from .util.dates import (
    DateLike,
    InvalidDateError,
    calculate_duration,
    coerce_date,
    format_date,
    iter_days,
)

HolidaySource = Union[HolidayLookup, Callable[[dt.date, str], bool]]

ONE_DAY = dt.timedelta(days=1)

# add_working_days gives up after count*7 + this many calendar days when a
# holiday source blocks every date.
SEARCH_SLACK_DAYS = 3660


def _holiday_region(config: WorkingDaysConfig, region: Optional[str], holidays: Optional[HolidaySource]) -> Optional[str]:
    """Region code to consult, or None when holidays do not apply.

    An unknown region degrades to "no holidays".
    """
    if not config.exclude_holidays or holidays is None or not region:
        return None
    code = normalize_region(region)
    if code is None:
        obs_warn("workdays", f"invalid holiday region {region!r}; ignoring holidays")
        return None
    regions = getattr(holidays, "available_regions", None)
    if callable(regions):
        try:
            known = {str(r).upper() for r in regions()}
        except Exception as ex:
            obs_warn("workdays", f"holiday source failed to list regions: {ex!r}")
            return code
        if code not in known:
            obs_warn("workdays", f"unknown holiday region {code!r}; ignoring holidays")
            return None
    return code


def _is_holiday(d: dt.date, region: Optional[str], holidays: Optional[HolidaySource]) -> bool:
    if region is None or holidays is None:
        return False
    check = getattr(holidays, "is_holiday", holidays)
    try:
        return bool(check(d, region))
    except LookupError:
        obs_warn("workdays", f"holiday lookup failed for region {region!r}; treating {d.isoformat()} as a normal day")
        return False


def _is_working(d: dt.date, config: WorkingDaysConfig, region: Optional[str], holidays: Optional[HolidaySource]) -> bool:
    wd = d.weekday()
    if config.exclude_saturday and wd == 5:
        return False
    if config.exclude_sunday and wd == 6:
        return False
    if _is_holiday(d, region, holidays):
        return False
    return True


def is_working_day(
    date: DateLike,
    config: WorkingDaysConfig,
    region: Optional[str] = None,
    holidays: Optional[HolidaySource] = None,
) -> bool:
    """False for an excluded Saturday/Sunday or a holiday in ``region``.

    Raises InvalidDateError for an unparseable date.
    """
    d = coerce_date(date)
    return _is_working(d, config, _holiday_region(config, region, holidays), holidays)


def calculate_working_days(
    start: DateLike,
    end: DateLike,
    config: WorkingDaysConfig,
    region: Optional[str] = None,
    holidays: Optional[HolidaySource] = None,
) -> int:
    """Working days in [start, end], both inclusive.

    Without any exclusion this is the plain inclusive day count.
    """
    s = coerce_date(start)
    e = coerce_date(end)
    if not config.has_exclusions:
        return calculate_duration(s, e)

    code = _holiday_region(config, region, holidays)
    return sum(1 for d in iter_days(s, e) if _is_working(d, config, code, holidays))


def add_working_days(
    start: DateLike,
    count: int,
    config: WorkingDaysConfig,
    region: Optional[str] = None,
    holidays: Optional[HolidaySource] = None,
) -> str:
    """End date of a span of ``count`` working days beginning at ``start``.

    ``start`` counts as day 1 when it is itself a working day.
    """
    s = coerce_date(start)
    count = int(count)
    if not config.has_exclusions:
        return format_date(s + dt.timedelta(days=count - 1))

    code = _holiday_region(config, region, holidays)
    cur = s
    remaining = count
    if _is_working(cur, config, code, holidays):
        remaining -= 1

    limit = s + dt.timedelta(days=max(count, 0) * 7 + SEARCH_SLACK_DAYS)
    while remaining > 0:
        if cur >= limit:
            obs_warn("workdays", f"no working day found before {limit.isoformat()}; stopping")
            break
        cur += ONE_DAY
        if _is_working(cur, config, code, holidays):
            remaining -= 1

    return format_date(cur)


def calculate_end_date_from_working_days(
    start: DateLike,
    working_days: int,
    config: WorkingDaysConfig,
    region: Optional[str] = None,
    holidays: Optional[HolidaySource] = None,
) -> str:
    return add_working_days(start, working_days, config, region, holidays)


def get_holidays_in_range(
    start: DateLike,
    end: DateLike,
    region: str,
    holidays: Optional[HolidaySource],
) -> List[str]:
    """Holiday dates (YYYY-MM-DD) in [start, end] for ``region``."""
    s = coerce_date(start)
    e = coerce_date(end)
    code = _holiday_region(WorkingDaysConfig(False, False, True), region, holidays)
    return [format_date(d) for d in iter_days(s, e) if _is_holiday(d, code, holidays)]


def get_working_days_summary(
    start: DateLike,
    end: DateLike,
    config: WorkingDaysConfig,
    region: Optional[str] = None,
    holidays: Optional[HolidaySource] = None,
) -> WorkingDaysSummary:
    s = coerce_date(start)
    e = coerce_date(end)

    found: List[str] = []
    if config.exclude_holidays and region:
        found = get_holidays_in_range(s, e, region, holidays)

    weekend_days = sum(1 for d in iter_days(s, e) if d.weekday() >= 5)

    return WorkingDaysSummary(
        total_days=calculate_duration(s, e),
        working_days=calculate_working_days(s, e, config, region, holidays),
        weekend_days=weekend_days,
        holiday_count=len(found),
        holidays=tuple(found),
    )


# --- edit solvers ---------------------------------------------------------------
# The grid commits date/duration edits through these. They never raise:
# bad input comes back as ok=False with the fields the caller sent.


def _as_text(v: Any) -> str:
    if isinstance(v, dt.date):
        return v.isoformat()
    return "" if v is None else str(v)


def solve_end_date(
    start: DateLike,
    duration: Any,
    config: WorkingDaysConfig,
    region: Optional[str] = None,
    holidays: Optional[HolidaySource] = None,
) -> DateEditResult:
    """New end date after the duration cell was edited."""
    try:
        s = coerce_date(start)
    except InvalidDateError as ex:
        return DateEditResult(start_date=_as_text(start), end_date="", duration=0, ok=False, error=str(ex))

    if isinstance(duration, bool) or not isinstance(duration, (int, float)) or int(duration) < 1:
        return DateEditResult(
            start_date=format_date(s),
            end_date="",
            duration=0,
            ok=False,
            error=f"Invalid duration: {duration!r} (must be >= 1)",
        )

    n = int(duration)
    end = add_working_days(s, n, config, region, holidays)
    return DateEditResult(start_date=format_date(s), end_date=end, duration=n)


def solve_duration(
    start: DateLike,
    end: DateLike,
    config: WorkingDaysConfig,
    region: Optional[str] = None,
    holidays: Optional[HolidaySource] = None,
) -> DateEditResult:
    """New displayed duration after either date cell was edited."""
    try:
        s = coerce_date(start)
        e = coerce_date(end)
    except InvalidDateError as ex:
        return DateEditResult(start_date=_as_text(start), end_date=_as_text(end), duration=0, ok=False, error=str(ex))

    if e < s:
        return DateEditResult(
            start_date=format_date(s),
            end_date=format_date(e),
            duration=0,
            ok=False,
            error="End date is before start date",
        )

    n = calculate_working_days(s, e, config, region, holidays)
    return DateEditResult(start_date=format_date(s), end_date=format_date(e), duration=n)


__all__ = [
    "HolidaySource",
    "is_working_day",
    "calculate_working_days",
    "add_working_days",
    "calculate_end_date_from_working_days",
    "get_holidays_in_range",
    "get_working_days_summary",
    "solve_end_date",
    "solve_duration",
]
