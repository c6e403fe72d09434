# ownchart/util/console.py
from __future__ import annotations

import os
import sys
from typing import Any

OBS_ENV_VAR = "OWNCHART_OBS_LOG"


def eprint(*args: Any) -> None:
    print(*args, file=sys.stderr)


def obs_enabled() -> bool:
    v = (os.getenv(OBS_ENV_VAR, "") or "").strip().lower()
    return v in {"1", "true", "yes", "on"}


def obs_warn(component: str, msg: str) -> None:
    """Emit a tagged warning to stderr when OWNCHART_OBS_LOG is on."""
    if obs_enabled():
        eprint(f"[ownchart.{component}] WARN: {msg}")
