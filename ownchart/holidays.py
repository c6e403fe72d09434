# ownchart/holidays.py
from __future__ import annotations

import datetime as dt
import re
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Protocol, runtime_checkable

from .util.dates import DateLike, coerce_date

_REGION_RE = re.compile(r"^[A-Za-z]{2}$")

# Offered first in region pickers.
POPULAR_REGIONS = ("DE", "AT", "CH", "US", "GB", "FR", "IT", "ES", "NL", "BE")


@runtime_checkable
class HolidayLookup(Protocol):
    """Holiday data source used by the working-day arithmetic.

    Implementations raise LookupError (KeyError) for a region they do not
    know; callers degrade that to "no holidays".
    """

    def is_holiday(self, date: dt.date, region: str) -> bool: ...

    def available_regions(self) -> List[str]: ...


def is_valid_region_code(region: Optional[str]) -> bool:
    return isinstance(region, str) and bool(_REGION_RE.match(region.strip()))


def normalize_region(region: Optional[str]) -> Optional[str]:
    if not is_valid_region_code(region):
        return None
    return str(region).strip().upper()


class StaticHolidayCalendar:
    """Set-backed HolidayLookup: region code -> holiday dates."""

    def __init__(self, holidays_by_region: Optional[Mapping[str, Iterable[DateLike]]] = None) -> None:
        self._by_region: Dict[str, FrozenSet[dt.date]] = {}
        for region, dates in (holidays_by_region or {}).items():
            code = normalize_region(region)
            if code is None:
                raise ValueError(f"Invalid region code: {region!r}")
            self._by_region[code] = frozenset(coerce_date(d) for d in dates)

    def is_holiday(self, date: dt.date, region: str) -> bool:
        code = normalize_region(region)
        if code is None or code not in self._by_region:
            raise KeyError(region)
        return date in self._by_region[code]

    def available_regions(self) -> List[str]:
        return sorted(self._by_region)

    def holidays_for(self, region: str) -> List[dt.date]:
        code = normalize_region(region)
        return sorted(self._by_region.get(code or "", ()))


__all__ = [
    "POPULAR_REGIONS",
    "HolidayLookup",
    "StaticHolidayCalendar",
    "is_valid_region_code",
    "normalize_region",
]
