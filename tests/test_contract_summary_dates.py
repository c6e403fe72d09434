from __future__ import annotations

import unittest

from ownchart.hierarchy import compute_summary_dates, derive_leaf_duration
from ownchart.model import SummaryDates

from tests._helpers import T


class TestSummaryDatesContract(unittest.TestCase):
    def test_min_start_max_end_inclusive_duration(self) -> None:
        tasks = [
            T("s", "summary"),
            T("a", parent="s", order=0, start="2025-03-01", end="2025-03-05"),
            T("b", parent="s", order=1, start="2025-03-10", end="2025-03-20"),
        ]
        self.assertEqual(
            compute_summary_dates(tasks, "s"),
            SummaryDates(start_date="2025-03-01", end_date="2025-03-20", duration=20),
        )

    def test_nested_summaries_resolve_recursively(self) -> None:
        tasks = [
            T("s", "summary"),
            T("a", parent="s", start="2025-03-01", end="2025-03-05"),
            T("s2", "summary", parent="s", order=1),
            T("c", parent="s2", start="2025-02-20", end="2025-02-22"),
        ]
        got = compute_summary_dates(tasks, "s")
        self.assertIsNotNone(got)
        self.assertEqual(got.start_date, "2025-02-20")
        self.assertEqual(got.end_date, "2025-03-05")
        self.assertEqual(got.duration, 14)

    def test_stored_summary_dates_are_not_trusted(self) -> None:
        tasks = [
            T("s", "summary"),
            T("s2", "summary", parent="s", start="2020-01-01", end="2030-01-01"),
            T("c", parent="s2", start="2025-02-20", end="2025-02-22"),
        ]
        got = compute_summary_dates(tasks, "s")
        self.assertEqual((got.start_date, got.end_date, got.duration), ("2025-02-20", "2025-02-22", 3))

    def test_no_dated_descendants_returns_none(self) -> None:
        tasks = [
            T("s", "summary"),
            T("a", parent="s"),
            T("b", parent="s", start="2025-03-01", end="not-a-date"),
            T("s2", "summary", parent="s"),
        ]
        self.assertIsNone(compute_summary_dates(tasks, "s"))
        self.assertIsNone(compute_summary_dates([T("s", "summary")], "s"))

    def test_unknown_id_and_non_summary_return_none(self) -> None:
        tasks = [
            T("t"),
            T("a", parent="t", start="2025-03-01", end="2025-03-05"),
        ]
        self.assertIsNone(compute_summary_dates(tasks, "missing"))
        self.assertIsNone(compute_summary_dates(tasks, "t"))

    def test_cyclic_summaries_terminate(self) -> None:
        tasks = [
            T("x", "summary", parent="y"),
            T("y", "summary", parent="x"),
            T("leaf", parent="x", start="2025-03-02", end="2025-03-04"),
        ]
        got = compute_summary_dates(tasks, "x")
        self.assertEqual((got.start_date, got.end_date, got.duration), ("2025-03-02", "2025-03-04", 3))

    def test_repeated_calls_are_identical(self) -> None:
        tasks = [
            T("s", "summary"),
            T("a", parent="s", start="2025-03-01", end="2025-03-05"),
        ]
        self.assertEqual(compute_summary_dates(tasks, "s"), compute_summary_dates(tasks, "s"))


class TestLeafDurationContract(unittest.TestCase):
    def test_recomputed_from_dates(self) -> None:
        self.assertEqual(derive_leaf_duration(T("a", start="2025-03-01", end="2025-03-07", duration=99)), 7)
        self.assertEqual(derive_leaf_duration(T("m", "milestone", start="2025-03-01", end="2025-03-01")), 1)

    def test_falls_back_to_stored_duration(self) -> None:
        self.assertEqual(derive_leaf_duration(T("a", start="2025-03-01", duration=4)), 4)
        self.assertEqual(derive_leaf_duration(T("a", start="2025-03-01", end="garbage", duration=2)), 2)
        self.assertEqual(derive_leaf_duration(T("s", "summary", start="2025-03-01", end="2025-03-07", duration=3)), 3)


if __name__ == "__main__":
    unittest.main(verbosity=2)
