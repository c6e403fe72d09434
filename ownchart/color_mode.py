from __future__ import annotations

"""ownchart.color_mode

Display color of a task under the active color mode.

Modes:
- manual: the stored color; color_override is ignored.
- theme: palette slot of the task's color-giver, lightened per depth.
- summary: summaries keep their color; others take the nearest summary
  ancestor's color (milestones may use a fixed accent).
- taskType: one configured color per task type.
- hierarchy: a base color lightened per ancestor level, capped.

In every mode except manual a task's color_override wins outright.
Results depend only on (task, all_tasks, state); nothing is cached.
"""

from typing import Dict, List, Optional, Sequence

from .colors import HSL, generate_monochrome_palette, hex_to_hsl, hsl_to_hex, lighten_color, stable_hash
from .hierarchy import TaskIndex, build_task_index, iter_ancestors
from .model import ColorModeState, Task, ThemeModeOptions
from .palette import get_palette_by_id
from .util.console import obs_warn

# Theme-mode variant tuning for tasks below their color-giver.
THEME_LIGHTEN_PER_LEVEL = 7
THEME_JITTER_STEP = 2
THEME_MAX_LIGHTNESS = 88
THEME_HUE_SPREAD = 2  # degrees either way


def _is_root(task: Task, index: TaskIndex) -> bool:
    return not task.parent or task.parent not in index


def get_root_summaries(index: TaskIndex) -> List[Task]:
    return [t for t in index.values() if t.type == "summary" and _is_root(t, index)]


def get_color_giver_ids(all_tasks: Sequence[Task]) -> List[str]:
    """Ids whose palette slot colors their whole group.

    One root summary: its direct children. Otherwise: every root task.
    """
    return _color_giver_ids(build_task_index(all_tasks))


def _color_giver_ids(index: TaskIndex) -> List[str]:
    roots = get_root_summaries(index)
    if len(roots) == 1:
        rid = roots[0].id
        return [t.id for t in index.values() if t.parent == rid and t.id != rid]
    return [t.id for t in index.values() if _is_root(t, index)]


def get_theme_color_giver(task: Task, all_tasks: Sequence[Task]) -> Optional[Task]:
    index = build_task_index(all_tasks)
    return _theme_color_giver(task, index, get_root_summaries(index))


def _theme_color_giver(task: Task, index: TaskIndex, roots: List[Task]) -> Optional[Task]:
    if len(roots) == 1:
        rid = roots[0].id
        if task.id == rid:
            return None
        if task.parent == rid:
            return task
        for parent in iter_ancestors(task, index):
            if parent.parent == rid:
                return parent
        return None

    top = task
    for parent in iter_ancestors(task, index):
        top = parent
    if top.id == task.id:
        return None
    return top


def assign_palette_indices(color_giver_ids: Sequence[str], palette_size: int) -> Dict[str, int]:
    """Collision-avoiding, order-independent palette slots.

    1. preferred slot = stable_hash(id) % size
    2. process in hash order (not list order)
    3. free preferred slots are claimed first
    4. the rest scan forward (wrapping) for the nearest free slot
    5. once slots run out, leftovers reuse their preferred slot
    """
    if palette_size <= 0:
        return {}

    rows = []
    for gid in dict.fromkeys(color_giver_ids):
        h = stable_hash(gid)
        rows.append((h, gid, h % palette_size))
    rows.sort(key=lambda r: r[0])

    assigned: Dict[str, int] = {}
    taken = set()

    for _h, gid, pref in rows:
        if pref not in taken:
            assigned[gid] = pref
            taken.add(pref)

    for _h, gid, pref in rows:
        if gid in assigned:
            continue
        for offset in range(1, palette_size + 1):
            idx = (pref + offset) % palette_size
            if idx not in taken:
                assigned[gid] = idx
                taken.add(idx)
                break

    for _h, gid, pref in rows:
        if gid not in assigned:
            assigned[gid] = pref

    return assigned


def resolve_palette_colors(theme_options: ThemeModeOptions) -> List[str]:
    """Active theme palette; empty when nothing usable is selected."""
    if theme_options.custom_monochrome_base:
        return generate_monochrome_palette(theme_options.custom_monochrome_base)
    pid = theme_options.selected_palette_id
    if pid:
        palette = get_palette_by_id(pid)
        if palette is None:
            obs_warn("color_mode", f"unknown palette id {pid!r}; using stored task colors")
            return []
        return list(palette.colors)
    return []


def _depth_below(task: Task, giver: Task, index: TaskIndex) -> int:
    depth = 0
    for parent in iter_ancestors(task, index):
        depth += 1
        if parent.id == giver.id:
            break
    return depth


def _theme_variant(base_color: str, depth: int, task_hash: int) -> str:
    hsl = hex_to_hsl(base_color)
    jitter = task_hash % 5
    lightness = min(THEME_MAX_LIGHTNESS, hsl.l + depth * THEME_LIGHTEN_PER_LEVEL + jitter * THEME_JITTER_STEP)
    hue = (hsl.h + jitter - THEME_HUE_SPREAD + 360) % 360
    return hsl_to_hex(HSL(h=hue, s=hsl.s, l=max(hsl.l, lightness)))


class _Resolver:
    """Per-call view of one snapshot; shared by the single and batch entrypoints."""

    def __init__(self, all_tasks: Sequence[Task], state: ColorModeState) -> None:
        self.state = state
        self.index = build_task_index(all_tasks)
        self._palette: Optional[List[str]] = None
        self._assignment: Optional[Dict[str, int]] = None
        self._roots: Optional[List[Task]] = None

    def palette(self) -> List[str]:
        if self._palette is None:
            self._palette = resolve_palette_colors(self.state.theme_options)
        return self._palette

    def roots(self) -> List[Task]:
        if self._roots is None:
            self._roots = get_root_summaries(self.index)
        return self._roots

    def assignment(self) -> Dict[str, int]:
        if self._assignment is None:
            self._assignment = assign_palette_indices(_color_giver_ids(self.index), len(self.palette()))
        return self._assignment

    def color(self, task: Task) -> str:
        mode = self.state.mode
        if mode == "manual":
            return task.color
        if task.color_override:
            return task.color_override

        if mode == "theme":
            return self._theme(task)
        if mode == "summary":
            return self._summary(task)
        if mode == "taskType":
            return self._task_type(task)
        if mode == "hierarchy":
            return self._hierarchy(task)
        return task.color

    def _theme(self, task: Task) -> str:
        colors = self.palette()
        if not colors:
            return task.color
        size = len(colors)
        slots = self.assignment()

        giver = _theme_color_giver(task, self.index, self.roots())
        if giver is None:
            return colors[slots.get(task.id, stable_hash(task.id) % size)]

        base = colors[slots.get(giver.id, stable_hash(giver.id) % size)]
        if giver.id == task.id:
            return base
        return _theme_variant(base, _depth_below(task, giver, self.index), stable_hash(task.id))

    def _summary(self, task: Task) -> str:
        opts = self.state.summary_options
        if task.type == "milestone" and opts.use_milestone_accent:
            return opts.milestone_accent_color
        if task.type == "summary":
            return task.color
        for parent in iter_ancestors(task, self.index):
            if parent.type == "summary":
                return parent.color_override or parent.color
        return task.color

    def _task_type(self, task: Task) -> str:
        opts = self.state.task_type_options
        if task.type == "summary":
            return opts.summary_color
        if task.type == "milestone":
            return opts.milestone_color
        return opts.task_color

    def _hierarchy(self, task: Task) -> str:
        opts = self.state.hierarchy_options
        depth = sum(1 for _ in iter_ancestors(task, self.index))
        amount = min(depth * (opts.lighten_percent_per_level / 100), opts.max_lighten_percent / 100)
        return lighten_color(opts.base_color, amount)


def compute_task_color(task: Task, all_tasks: Sequence[Task], color_mode_state: ColorModeState) -> str:
    """Effective display color (hex) for ``task``."""
    return _Resolver(all_tasks, color_mode_state).color(task)


def compute_task_colors(tasks: Sequence[Task], color_mode_state: ColorModeState) -> Dict[str, str]:
    """id -> color for a whole snapshot, sharing one index and palette assignment."""
    r = _Resolver(tasks, color_mode_state)
    out: Dict[str, str] = {}
    for t in tasks:
        if t.id not in out:
            out[t.id] = r.color(t)
    return out


__all__ = [
    "assign_palette_indices",
    "compute_task_color",
    "compute_task_colors",
    "get_color_giver_ids",
    "get_root_summaries",
    "get_theme_color_giver",
    "resolve_palette_colors",
]
