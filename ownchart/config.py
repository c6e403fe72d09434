# ownchart/config.py
from __future__ import annotations

import json
import math
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .holidays import normalize_region
from .model import (
    COLOR_MODES,
    ColorModeState,
    HierarchyModeOptions,
    SummaryModeOptions,
    TaskTypeModeOptions,
    ThemeModeOptions,
    WorkingDaysConfig,
)
from .util.console import obs_warn

DEFAULT_COLOR_MODE_STATE = ColorModeState()
DEFAULT_WORKING_DAYS_CONFIG = WorkingDaysConfig()
DEFAULT_HOLIDAY_REGION: Optional[str] = None


@dataclass(frozen=True)
class ViewConfig:
    color_mode: ColorModeState = field(default_factory=ColorModeState)
    working_days: WorkingDaysConfig = field(default_factory=WorkingDaysConfig)
    holiday_region: Optional[str] = DEFAULT_HOLIDAY_REGION


def _pick(d: Dict[str, Any], camel: str, snake: str) -> Any:
    if camel in d:
        return d.get(camel)
    return d.get(snake)


def _sub(d: Dict[str, Any], camel: str, snake: str) -> Dict[str, Any]:
    v = _pick(d, camel, snake)
    return v if isinstance(v, dict) else {}


def _bool(v: Any, default: bool) -> bool:
    return v if isinstance(v, bool) else default


def _color(v: Any, default: Optional[str]) -> Optional[str]:
    s = str(v).strip() if isinstance(v, str) else ""
    return s or default


def _percent(v: Any, default: float) -> float:
    if isinstance(v, bool) or not isinstance(v, (int, float)) or not math.isfinite(v):
        return default
    return float(min(100, max(0, v)))


def color_mode_state_from_dict(raw: Any) -> ColorModeState:
    """ColorModeState from the client's JSON shape.

    Unknown keys are ignored; missing or mistyped values keep defaults.
    """
    if not isinstance(raw, dict):
        return DEFAULT_COLOR_MODE_STATE
    dflt = DEFAULT_COLOR_MODE_STATE

    mode = str(raw.get("mode") or dflt.mode).strip()
    if mode not in COLOR_MODES:
        obs_warn("config", f"unknown color mode {mode!r}; using {dflt.mode!r}")
        mode = dflt.mode

    th = _sub(raw, "themeOptions", "theme_options")
    su = _sub(raw, "summaryOptions", "summary_options")
    tt = _sub(raw, "taskTypeOptions", "task_type_options")
    hi = _sub(raw, "hierarchyOptions", "hierarchy_options")

    return ColorModeState(
        mode=mode,
        theme_options=ThemeModeOptions(
            selected_palette_id=_color(_pick(th, "selectedPaletteId", "selected_palette_id"), None),
            custom_monochrome_base=_color(_pick(th, "customMonochromeBase", "custom_monochrome_base"), None),
        ),
        summary_options=SummaryModeOptions(
            use_milestone_accent=_bool(
                _pick(su, "useMilestoneAccent", "use_milestone_accent"),
                dflt.summary_options.use_milestone_accent,
            ),
            milestone_accent_color=_color(
                _pick(su, "milestoneAccentColor", "milestone_accent_color"),
                dflt.summary_options.milestone_accent_color,
            ),
        ),
        task_type_options=TaskTypeModeOptions(
            summary_color=_color(_pick(tt, "summaryColor", "summary_color"), dflt.task_type_options.summary_color),
            task_color=_color(_pick(tt, "taskColor", "task_color"), dflt.task_type_options.task_color),
            milestone_color=_color(_pick(tt, "milestoneColor", "milestone_color"), dflt.task_type_options.milestone_color),
        ),
        hierarchy_options=HierarchyModeOptions(
            base_color=_color(_pick(hi, "baseColor", "base_color"), dflt.hierarchy_options.base_color),
            lighten_percent_per_level=_percent(
                _pick(hi, "lightenPercentPerLevel", "lighten_percent_per_level"),
                dflt.hierarchy_options.lighten_percent_per_level,
            ),
            max_lighten_percent=_percent(
                _pick(hi, "maxLightenPercent", "max_lighten_percent"),
                dflt.hierarchy_options.max_lighten_percent,
            ),
        ),
    )


def working_days_config_from_dict(raw: Any) -> WorkingDaysConfig:
    if not isinstance(raw, dict):
        return DEFAULT_WORKING_DAYS_CONFIG
    dflt = DEFAULT_WORKING_DAYS_CONFIG
    return WorkingDaysConfig(
        exclude_saturday=_bool(_pick(raw, "excludeSaturday", "exclude_saturday"), dflt.exclude_saturday),
        exclude_sunday=_bool(_pick(raw, "excludeSunday", "exclude_sunday"), dflt.exclude_sunday),
        exclude_holidays=_bool(_pick(raw, "excludeHolidays", "exclude_holidays"), dflt.exclude_holidays),
    )


def view_config_from_dict(raw: Any) -> ViewConfig:
    if not isinstance(raw, dict):
        return ViewConfig()
    region_raw = _pick(raw, "holidayRegion", "holiday_region")
    region = normalize_region(region_raw) if region_raw else None
    if region_raw and region is None:
        obs_warn("config", f"invalid holidayRegion {region_raw!r}; ignoring")
    return ViewConfig(
        color_mode=color_mode_state_from_dict(_pick(raw, "colorMode", "color_mode")),
        working_days=working_days_config_from_dict(_pick(raw, "workingDays", "working_days")),
        holiday_region=region,
    )


def load_view_config(path: str) -> ViewConfig:
    """Load a view config JSON file.

    Shape:
      {
        "colorMode":   { "mode": "theme", "themeOptions": {...}, ... },
        "workingDays": { "excludeSaturday": true, ... },
        "holidayRegion": "DE"
      }

    A missing or unreadable file yields the defaults.
    """
    if not path:
        return ViewConfig()
    try:
        if not os.path.exists(path):
            return ViewConfig()
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, ValueError) as ex:
        obs_warn("config", f"could not read {path!r}: {ex}")
        return ViewConfig()
    return view_config_from_dict(raw)


__all__ = [
    "DEFAULT_COLOR_MODE_STATE",
    "DEFAULT_WORKING_DAYS_CONFIG",
    "DEFAULT_HOLIDAY_REGION",
    "ViewConfig",
    "color_mode_state_from_dict",
    "working_days_config_from_dict",
    "view_config_from_dict",
    "load_view_config",
]
