"""ownchart.api

Stable *library* entrypoint for the derived-state core.

Policy:
  - Only names listed in __all__ are considered public API.
  - Everything else is internal and may change without notice.
"""

from __future__ import annotations

from typing import Any, Iterable, List

from ownchart.color_mode import assign_palette_indices, compute_task_color, compute_task_colors
from ownchart.config import (
    DEFAULT_COLOR_MODE_STATE,
    DEFAULT_WORKING_DAYS_CONFIG,
    ViewConfig,
    color_mode_state_from_dict,
    load_view_config,
    working_days_config_from_dict,
)
from ownchart.hierarchy import (
    build_flattened_task_list,
    compute_summary_dates,
    derive_leaf_duration,
    get_effective_tasks_to_move,
    get_task_descendants,
    get_task_level,
    recalculate_summary_ancestors,
    would_create_circular_hierarchy,
)
from ownchart.holidays import HolidayLookup, StaticHolidayCalendar
from ownchart.model import (
    ColorModeState,
    DateEditResult,
    FlattenedTask,
    HierarchyModeOptions,
    SummaryDates,
    SummaryModeOptions,
    Task,
    TaskTypeModeOptions,
    ThemeModeOptions,
    WorkingDaysConfig,
)
from ownchart.normalize import normalize_tasks
from ownchart.util.dates import InvalidDateError
from ownchart.workdays import (
    add_working_days,
    calculate_working_days,
    get_working_days_summary,
    is_working_day,
    solve_duration,
    solve_end_date,
)


def tasks_from_dicts(rows: Iterable[Any]) -> List[Task]:
    """Task snapshot from client-side dicts; rows without an id are dropped."""
    return normalize_tasks(rows)


# --- Public API exports (locked by contract tests) ------------------------
# Keep changes intentional and reviewable.
# Prefer append-only unless you are intentionally reshaping the public surface.
_PUBLIC_EXPORTS = (
    "ColorModeState",
    "DEFAULT_COLOR_MODE_STATE",
    "DEFAULT_WORKING_DAYS_CONFIG",
    "DateEditResult",
    "FlattenedTask",
    "HierarchyModeOptions",
    "HolidayLookup",
    "InvalidDateError",
    "StaticHolidayCalendar",
    "SummaryDates",
    "SummaryModeOptions",
    "Task",
    "TaskTypeModeOptions",
    "ThemeModeOptions",
    "ViewConfig",
    "WorkingDaysConfig",
    "add_working_days",
    "assign_palette_indices",
    "build_flattened_task_list",
    "calculate_working_days",
    "color_mode_state_from_dict",
    "compute_summary_dates",
    "compute_task_color",
    "compute_task_colors",
    "derive_leaf_duration",
    "get_effective_tasks_to_move",
    "get_task_descendants",
    "get_task_level",
    "get_working_days_summary",
    "is_working_day",
    "load_view_config",
    "recalculate_summary_ancestors",
    "solve_duration",
    "solve_end_date",
    "tasks_from_dicts",
    "working_days_config_from_dict",
    "would_create_circular_hierarchy",
)

__all__ = [n for n in _PUBLIC_EXPORTS if n in globals()]
# --- /Public API exports --------------------------------------------------
