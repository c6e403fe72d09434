# ownchart/normalize.py
from __future__ import annotations

import math
from typing import Any, Dict, Iterable, List, Optional, Union

from .model import TASK_TYPES, Task
from .util.console import obs_warn
from .util.dates import try_parse_date


def _opt_str(v: Any) -> Optional[str]:
    if v is None:
        return None
    s = str(v).strip()
    return s or None


def _number(uuid: str, key: str, raw: Any) -> Union[int, float]:
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        return 0
    if not math.isfinite(raw):
        obs_warn("normalize", f"non-finite {key} id={uuid!r} value={raw!r}; using 0")
        return 0
    return raw


def _date_field(uuid: str, key: str, raw: Any) -> str:
    if raw is None or raw == "":
        return ""
    d = try_parse_date(raw)
    if d is None:
        obs_warn("normalize", f"invalid {key} id={uuid!r} value={raw!r}")
        return ""
    return d.isoformat()


def normalize_task(t: Dict[str, Any]) -> Optional[Task]:
    """Build a Task from a client-side task dict (camelCase keys).

    snake_case keys are accepted as well. Rows without an id are dropped.
    Malformed dates become "" (no value). Non-finite numbers (NaN, Infinity)
    become 0.
    """
    if not isinstance(t, dict):
        return None
    uuid = str(t.get("id") or "").strip()
    if not uuid:
        return None

    ttype = str(t.get("type") or "task").strip()
    if ttype not in TASK_TYPES:
        obs_warn("normalize", f"unknown type id={uuid!r} value={ttype!r}; using 'task'")
        ttype = "task"

    start_raw = t.get("startDate", t.get("start_date"))
    end_raw = t.get("endDate", t.get("end_date"))

    duration = t.get("duration")
    order = t.get("order")
    progress = t.get("progress")
    is_open = t.get("open")

    return Task(
        id=uuid,
        type=ttype,
        name=str(t.get("name") or ""),
        start_date=_date_field(uuid, "startDate", start_raw),
        end_date=_date_field(uuid, "endDate", end_raw),
        duration=int(_number(uuid, "duration", duration)),
        color=_opt_str(t.get("color")) or "#0F6CBD",
        color_override=_opt_str(t.get("colorOverride", t.get("color_override"))),
        parent=_opt_str(t.get("parent")),
        order=_number(uuid, "order", order),
        open=is_open if isinstance(is_open, bool) else None,
        progress=int(_number(uuid, "progress", progress)),
    )


def normalize_tasks(rows: Iterable[Any]) -> List[Task]:
    out: List[Task] = []
    for row in rows or []:
        t = normalize_task(row)
        if t is not None:
            out.append(t)
    return out
