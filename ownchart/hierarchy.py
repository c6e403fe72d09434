from __future__ import annotations

"""ownchart.hierarchy

Tree helpers over the flat task collection.

The collection stores parent *ids* only. Every public helper builds an
``id -> Task`` index once per call and walks through it; ``parent`` is a
lookup key, nothing more.

Structural rules:
- A parent id that does not resolve is treated as "no parent" (root).
- Every walk carries a visited set, so a cyclic parent chain terminates.
- Nothing here mutates a task; cascade helpers return the updates.
"""

import datetime as dt
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from .model import FlattenedTask, SummaryCascadeEntry, SummaryDates, Task
from .util.console import obs_warn
from .util.dates import try_parse_date

# Number of levels (0, 1, 2) a move/paste may produce.
MAX_HIERARCHY_DEPTH = 3

TaskIndex = Dict[str, Task]
ChildrenMap = Dict[Optional[str], List[Task]]


def build_task_index(tasks: Sequence[Task]) -> TaskIndex:
    """Map id -> task. On duplicate ids the first occurrence wins."""
    index: TaskIndex = {}
    for t in tasks:
        if t.id not in index:
            index[t.id] = t
    return index


def _parent_key(task: Task, index: TaskIndex) -> Optional[str]:
    p = task.parent
    if p and p in index:
        return p
    return None


def build_children_map(tasks: Sequence[Task], index: Optional[TaskIndex] = None) -> ChildrenMap:
    """parent id (None for roots) -> children sorted by ``order``.

    Ties keep input order; orphans are filed under None.
    """
    if index is None:
        index = build_task_index(tasks)
    groups: Dict[Optional[str], List[Tuple[float, int, Task]]] = {}
    for pos, t in enumerate(tasks):
        groups.setdefault(_parent_key(t, index), []).append((t.order, pos, t))
    out: ChildrenMap = {}
    for key, rows in groups.items():
        rows.sort(key=lambda r: (r[0], r[1]))
        out[key] = [r[2] for r in rows]
    return out


def iter_ancestors(task: Task, index: TaskIndex) -> Iterable[Task]:
    """Yield parent, grandparent, ... up to the root.

    Stops on an unknown parent or when a task repeats (cycle).
    """
    seen: Set[str] = {task.id}
    cur = task
    while cur.parent:
        parent = index.get(cur.parent)
        if parent is None:
            return
        if parent.id in seen:
            obs_warn("hierarchy", f"parent cycle detected at id={parent.id!r}")
            return
        seen.add(parent.id)
        yield parent
        cur = parent


def get_task_children(tasks: Sequence[Task], parent_id: Optional[str]) -> List[Task]:
    """Direct children sorted by order; ``None`` returns the roots."""
    return list(build_children_map(tasks).get(parent_id, []))


def _descendants(parent_id: str, children: ChildrenMap) -> List[Task]:
    out: List[Task] = []
    seen: Set[str] = {parent_id}
    stack: List[Task] = list(reversed(children.get(parent_id, [])))
    while stack:
        t = stack.pop()
        if t.id in seen:
            continue
        seen.add(t.id)
        out.append(t)
        stack.extend(reversed(children.get(t.id, [])))
    return out


def get_task_descendants(tasks: Sequence[Task], parent_id: str) -> List[Task]:
    """All descendants in depth-first pre-order."""
    return _descendants(parent_id, build_children_map(tasks))


def get_task_path(tasks: Sequence[Task], task_id: str) -> List[str]:
    """Ancestor ids from the root down to the direct parent."""
    index = build_task_index(tasks)
    task = index.get(task_id)
    if task is None:
        return []
    path = [a.id for a in iter_ancestors(task, index)]
    path.reverse()
    return path


def get_task_level(tasks: Sequence[Task], task_id: str) -> int:
    """Nesting level (0 = root)."""
    return len(get_task_path(tasks, task_id))


def get_max_depth(tasks: Sequence[Task]) -> int:
    index = build_task_index(tasks)
    depth = 0
    for t in index.values():
        d = sum(1 for _ in iter_ancestors(t, index))
        if d > depth:
            depth = d
    return depth


def would_create_circular_hierarchy(tasks: Sequence[Task], task_id: str, new_parent_id: Optional[str]) -> bool:
    if not new_parent_id:
        return False
    if task_id == new_parent_id:
        return True
    return any(d.id == new_parent_id for d in get_task_descendants(tasks, task_id))


# --- leaf / summary dates -----------------------------------------------------


def _span_days(start: dt.date, end: dt.date) -> int:
    return (end - start).days + 1


def derive_leaf_duration(task: Task) -> int:
    """Inclusive day count for task/milestone rows.

    The stored duration is only used when a date is missing or malformed.
    """
    if task.type in ("task", "milestone"):
        start = try_parse_date(task.start_date)
        end = try_parse_date(task.end_date)
        if start is not None and end is not None:
            return _span_days(start, end)
    return int(task.duration or 0)


def _summary_range(
    summary_id: str,
    index: TaskIndex,
    children: ChildrenMap,
    visiting: Set[str],
) -> Optional[Tuple[dt.date, dt.date]]:
    task = index.get(summary_id)
    if task is None or task.type != "summary":
        return None
    if summary_id in visiting:
        obs_warn("hierarchy", f"summary cycle detected at id={summary_id!r}")
        return None
    visiting.add(summary_id)

    lo: Optional[dt.date] = None
    hi: Optional[dt.date] = None
    for child in children.get(summary_id, []):
        if child.type == "summary":
            rng = _summary_range(child.id, index, children, visiting)
            if rng is None:
                continue
            cs, ce = rng
        else:
            cs = try_parse_date(child.start_date)
            ce = try_parse_date(child.end_date)
            if cs is None or ce is None:
                continue
        if lo is None or cs < lo:
            lo = cs
        if hi is None or ce > hi:
            hi = ce

    if lo is None or hi is None:
        return None
    return lo, hi


def _summary_dates_indexed(summary_id: str, index: TaskIndex, children: ChildrenMap) -> Optional[SummaryDates]:
    rng = _summary_range(summary_id, index, children, set())
    if rng is None:
        return None
    lo, hi = rng
    return SummaryDates(start_date=lo.isoformat(), end_date=hi.isoformat(), duration=_span_days(lo, hi))


def compute_summary_dates(tasks: Sequence[Task], summary_id: str) -> Optional[SummaryDates]:
    """Date range of a summary derived from its descendants.

    Only tasks of type "summary" aggregate. Nested summaries resolve
    recursively; leaves contribute their own valid dates. None when no
    descendant carries a valid range (callers show empty fields).
    """
    index = build_task_index(tasks)
    return _summary_dates_indexed(summary_id, index, build_children_map(tasks, index))


def recalculate_summary_ancestors(tasks: Sequence[Task], parent_ids: Iterable[str]) -> List[SummaryCascadeEntry]:
    """Summary date updates for ``parent_ids`` and every ancestor above them.

    Each summary is visited once. A summary with no dated descendant (or no
    children at all) gets the cleared value ("", "", 0) rather than keeping
    stale dates. The caller applies the returned updates; ``previous_values``
    carries the stored values for undo.
    """
    index = build_task_index(tasks)
    children = build_children_map(tasks, index)

    out: List[SummaryCascadeEntry] = []
    processed: Set[str] = set()
    queue: List[str] = [p for p in parent_ids if p]

    while queue:
        pid = queue.pop(0)
        if pid in processed:
            continue
        processed.add(pid)

        parent = index.get(pid)
        if parent is None or parent.type != "summary":
            continue

        previous = SummaryDates(
            start_date=parent.start_date,
            end_date=parent.end_date,
            duration=int(parent.duration or 0),
        )
        updates = _summary_dates_indexed(pid, index, children)
        if updates is None:
            updates = SummaryDates(start_date="", end_date="", duration=0)
        out.append(SummaryCascadeEntry(id=pid, updates=updates, previous_values=previous))

        up = _parent_key(parent, index)
        if up is not None:
            queue.append(up)

    return out


# --- flattened rows -----------------------------------------------------------


def build_flattened_task_list(tasks: Sequence[Task], collapsed_ids: Iterable[str] = ()) -> List[FlattenedTask]:
    """Visible rows in depth-first pre-order.

    Siblings follow ``order``. Descendants of a collapsed task (listed in
    ``collapsed_ids`` or ``open is False``) are omitted; ``has_children`` is
    reported for every emitted row either way.

    Tasks unreachable from a root (they hang off a parent cycle) are not
    lost: after the main walk each of them, in input order, is
    emitted as an extra root together with its unseen subtree.
    """
    index = build_task_index(tasks)
    children = build_children_map(tasks, index)
    collapsed = set(collapsed_ids or ())

    rows: List[FlattenedTask] = []
    expanded: Set[str] = set()
    reached: Set[str] = set()

    def walk(roots: List[Task]) -> None:
        stack: List[Tuple[Task, int]] = [(t, 0) for t in reversed(roots)]
        while stack:
            task, level = stack.pop()
            reached.add(task.id)
            has_children = bool(children.get(task.id))
            rows.append(FlattenedTask(task=task, level=level, has_children=has_children))

            if not has_children or task.id in expanded:
                continue
            if task.open is False or task.id in collapsed:
                continue
            expanded.add(task.id)
            for child in reversed(children[task.id]):
                if child.id not in reached:
                    stack.append((child, level + 1))

    walk(children.get(None, []))

    rooted: Set[str] = {t.id for t in children.get(None, [])}
    for root in children.get(None, []):
        rooted.update(d.id for d in _descendants(root.id, children))
    for task in index.values():
        if task.id in rooted:
            continue
        obs_warn("hierarchy", f"task id={task.id!r} is only reachable through a parent cycle; shown as root")
        walk([task])
        rooted.add(task.id)
        rooted.update(d.id for d in _descendants(task.id, children))

    return rows


def get_effective_tasks_to_move(tasks: Sequence[Task], selected_ids: Sequence[str]) -> List[str]:
    """Non-summary task ids a multi-drag should shift.

    Selected summaries expand to their non-summary descendants; a selected
    task already covered by a selected summary ancestor is not repeated.
    """
    if not selected_ids:
        return []

    index = build_task_index(tasks)
    children = build_children_map(tasks, index)
    selected_summaries = {i for i in selected_ids if i in index and index[i].type == "summary"}

    result: Dict[str, None] = {}
    for sid in selected_ids:
        task = index.get(sid)
        if task is None:
            continue
        if task.type == "summary":
            for d in _descendants(sid, children):
                if d.type != "summary":
                    result[d.id] = None
            continue
        covered = any(a.id in selected_summaries for a in iter_ancestors(task, index))
        if not covered:
            result[sid] = None

    return list(result)


__all__ = [
    "MAX_HIERARCHY_DEPTH",
    "build_task_index",
    "build_children_map",
    "iter_ancestors",
    "get_task_children",
    "get_task_descendants",
    "get_task_path",
    "get_task_level",
    "get_max_depth",
    "would_create_circular_hierarchy",
    "derive_leaf_duration",
    "compute_summary_dates",
    "recalculate_summary_ancestors",
    "build_flattened_task_list",
    "get_effective_tasks_to_move",
]
