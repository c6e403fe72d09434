# ownchart/model.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

TASK_TYPES: Tuple[str, ...] = ("task", "summary", "milestone")
COLOR_MODES: Tuple[str, ...] = ("manual", "theme", "summary", "taskType", "hierarchy")


@dataclass(frozen=True)
class Task:
    id: str
    type: str = "task"          # "task" | "summary" | "milestone"
    name: str = ""

    start_date: str = ""        # YYYY-MM-DD; "" when unset
    end_date: str = ""
    duration: int = 0

    color: str = "#0F6CBD"
    color_override: Optional[str] = None

    parent: Optional[str] = None
    order: float = 0
    open: Optional[bool] = None
    progress: int = 0


@dataclass(frozen=True)
class ThemeModeOptions:
    selected_palette_id: Optional[str] = None
    custom_monochrome_base: Optional[str] = None


@dataclass(frozen=True)
class SummaryModeOptions:
    use_milestone_accent: bool = True
    milestone_accent_color: str = "#CA8A04"


@dataclass(frozen=True)
class TaskTypeModeOptions:
    summary_color: str = "#0A2E4A"
    task_color: str = "#0F6CBD"
    milestone_color: str = "#CA8A04"


@dataclass(frozen=True)
class HierarchyModeOptions:
    base_color: str = "#0F6CBD"
    lighten_percent_per_level: float = 12
    max_lighten_percent: float = 36


@dataclass(frozen=True)
class ColorModeState:
    mode: str = "manual"
    theme_options: ThemeModeOptions = field(default_factory=ThemeModeOptions)
    summary_options: SummaryModeOptions = field(default_factory=SummaryModeOptions)
    task_type_options: TaskTypeModeOptions = field(default_factory=TaskTypeModeOptions)
    hierarchy_options: HierarchyModeOptions = field(default_factory=HierarchyModeOptions)


@dataclass(frozen=True)
class WorkingDaysConfig:
    exclude_saturday: bool = True
    exclude_sunday: bool = True
    exclude_holidays: bool = True

    @property
    def has_exclusions(self) -> bool:
        return self.exclude_saturday or self.exclude_sunday or self.exclude_holidays


@dataclass(frozen=True)
class FlattenedTask:
    task: Task
    level: int
    has_children: bool


@dataclass(frozen=True)
class SummaryDates:
    start_date: str
    end_date: str
    duration: int


@dataclass(frozen=True)
class SummaryCascadeEntry:
    id: str
    updates: SummaryDates
    previous_values: SummaryDates


@dataclass(frozen=True)
class WorkingDaysSummary:
    total_days: int
    working_days: int
    weekend_days: int
    holiday_count: int
    holidays: Tuple[str, ...] = ()


@dataclass(frozen=True)
class DateEditResult:
    start_date: str
    end_date: str
    duration: int

    ok: bool = True
    error: Optional[str] = None


__all__ = [
    "TASK_TYPES",
    "COLOR_MODES",
    "Task",
    "ThemeModeOptions",
    "SummaryModeOptions",
    "TaskTypeModeOptions",
    "HierarchyModeOptions",
    "ColorModeState",
    "WorkingDaysConfig",
    "FlattenedTask",
    "SummaryDates",
    "SummaryCascadeEntry",
    "WorkingDaysSummary",
    "DateEditResult",
]
