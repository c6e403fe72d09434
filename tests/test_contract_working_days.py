from __future__ import annotations

import datetime as dt
import unittest

from ownchart.holidays import StaticHolidayCalendar
from ownchart.model import WorkingDaysConfig
from ownchart.util.dates import InvalidDateError
from ownchart.workdays import (
    add_working_days,
    calculate_working_days,
    get_holidays_in_range,
    get_working_days_summary,
    is_working_day,
)

NONE = WorkingDaysConfig(exclude_saturday=False, exclude_sunday=False, exclude_holidays=False)
WEEKENDS = WorkingDaysConfig(exclude_saturday=True, exclude_sunday=True, exclude_holidays=False)
SAT_ONLY = WorkingDaysConfig(exclude_saturday=True, exclude_sunday=False, exclude_holidays=False)
ALL = WorkingDaysConfig()

# 2025-03-05 is a Wednesday.
CAL = StaticHolidayCalendar({"DE": ["2025-03-05", dt.date(2025, 12, 25)], "AT": []})


class TestIsWorkingDayContract(unittest.TestCase):
    def test_weekday_rules(self) -> None:
        self.assertFalse(is_working_day("2025-03-01", WEEKENDS))  # Saturday
        self.assertFalse(is_working_day("2025-03-02", WEEKENDS))  # Sunday
        self.assertTrue(is_working_day("2025-03-02", SAT_ONLY))
        self.assertTrue(is_working_day("2025-03-01", NONE))
        self.assertTrue(is_working_day(dt.date(2025, 3, 3), WEEKENDS))

    def test_holidays_only_with_flag_and_region(self) -> None:
        self.assertFalse(is_working_day("2025-03-05", ALL, "DE", CAL))
        self.assertTrue(is_working_day("2025-03-05", ALL, None, CAL))
        self.assertTrue(is_working_day("2025-03-05", WEEKENDS, "DE", CAL))
        self.assertTrue(is_working_day("2025-03-05", ALL, "AT", CAL))

    def test_region_code_is_case_insensitive(self) -> None:
        self.assertFalse(is_working_day("2025-03-05", ALL, "de", CAL))

    def test_unknown_or_invalid_region_means_no_holidays(self) -> None:
        self.assertTrue(is_working_day("2025-03-05", ALL, "FR", CAL))
        self.assertTrue(is_working_day("2025-03-05", ALL, "DEU", CAL))

    def test_plain_callable_lookup(self) -> None:
        def lookup(d: dt.date, region: str) -> bool:
            return region == "US" and d == dt.date(2025, 7, 4)

        self.assertFalse(is_working_day("2025-07-04", ALL, "US", lookup))
        self.assertTrue(is_working_day("2025-07-03", ALL, "US", lookup))

    def test_invalid_date_is_signalled(self) -> None:
        with self.assertRaises(InvalidDateError):
            is_working_day("2025-02-30", WEEKENDS)
        with self.assertRaises(ValueError):
            is_working_day("03/01/2025", WEEKENDS)


class TestCalculateWorkingDaysContract(unittest.TestCase):
    def test_no_exclusions_is_inclusive_calendar_count(self) -> None:
        self.assertEqual(calculate_working_days("2025-03-01", "2025-03-31", NONE), 31)
        self.assertEqual(calculate_working_days("2025-03-01", "2025-03-01", NONE), 1)

    def test_monday_to_friday(self) -> None:
        self.assertEqual(calculate_working_days("2025-03-03", "2025-03-07", WEEKENDS), 5)
        self.assertEqual(calculate_working_days("2025-03-01", "2025-03-09", WEEKENDS), 5)
        self.assertEqual(calculate_working_days("2025-03-01", "2025-03-09", SAT_ONLY), 7)

    def test_holidays_reduce_count(self) -> None:
        self.assertEqual(calculate_working_days("2025-03-03", "2025-03-07", ALL, "DE", CAL), 4)
        self.assertEqual(calculate_working_days("2025-03-03", "2025-03-07", ALL, "FR", CAL), 5)

    def test_reversed_range_with_exclusions_is_zero(self) -> None:
        self.assertEqual(calculate_working_days("2025-03-07", "2025-03-03", WEEKENDS), 0)

    def test_invalid_date_is_signalled(self) -> None:
        with self.assertRaises(InvalidDateError):
            calculate_working_days("2025-03-01", "nope", WEEKENDS)
        with self.assertRaises(InvalidDateError):
            calculate_working_days("", "2025-03-01", NONE)


class TestAddWorkingDaysContract(unittest.TestCase):
    def test_fast_path(self) -> None:
        self.assertEqual(add_working_days("2025-03-01", 1, NONE), "2025-03-01")
        self.assertEqual(add_working_days("2025-03-01", 31, NONE), "2025-03-31")

    def test_skips_weekends_and_holidays(self) -> None:
        self.assertEqual(add_working_days("2025-03-03", 5, WEEKENDS), "2025-03-07")
        self.assertEqual(add_working_days("2025-03-03", 6, WEEKENDS), "2025-03-10")
        self.assertEqual(add_working_days("2025-03-03", 5, ALL, "DE", CAL), "2025-03-10")

    def test_non_working_start_is_not_day_one(self) -> None:
        self.assertEqual(add_working_days("2025-03-01", 1, WEEKENDS), "2025-03-03")

    def test_zero_count_with_exclusions_returns_start(self) -> None:
        self.assertEqual(add_working_days("2025-03-04", 0, WEEKENDS), "2025-03-04")

    def test_lookup_blocking_every_day_terminates(self) -> None:
        end = add_working_days("2025-03-03", 2, ALL, "XX", lambda d, r: True)
        self.assertGreater(end, "2025-03-03")

    def test_round_trip(self) -> None:
        start0 = dt.date(2025, 2, 24)
        configs = [
            (NONE, None, None),
            (WEEKENDS, None, None),
            (SAT_ONLY, None, None),
            (ALL, "DE", CAL),
        ]
        for cfg, region, cal in configs:
            for i in range(14):
                s = start0 + dt.timedelta(days=i)
                for span in range(0, 21):
                    e = s + dt.timedelta(days=span)
                    if not is_working_day(e, cfg, region, cal):
                        continue
                    n = calculate_working_days(s, e, cfg, region, cal)
                    with self.subTest(cfg=cfg, start=s, end=e):
                        self.assertEqual(add_working_days(s, n, cfg, region, cal), e.isoformat())


class TestWorkingDaysSummaryContract(unittest.TestCase):
    def test_summary_counts(self) -> None:
        s = get_working_days_summary("2025-03-01", "2025-03-09", ALL, "DE", CAL)
        self.assertEqual(s.total_days, 9)
        self.assertEqual(s.weekend_days, 4)
        self.assertEqual(s.holiday_count, 1)
        self.assertEqual(s.holidays, ("2025-03-05",))
        self.assertEqual(s.working_days, 4)

    def test_holidays_in_range(self) -> None:
        self.assertEqual(get_holidays_in_range("2025-01-01", "2025-12-31", "DE", CAL), ["2025-03-05", "2025-12-25"])
        self.assertEqual(get_holidays_in_range("2025-01-01", "2025-12-31", "FR", CAL), [])


if __name__ == "__main__":
    unittest.main(verbosity=2)
