# ownchart/colors.py
from __future__ import annotations

import math
import re
from dataclasses import dataclass, replace
from typing import List, Tuple

# Brand blue; stands in for missing or unparsable colors.
DEFAULT_COLOR = "#0F6CBD"

LIGHT_TEXT = "#ffffff"
DARK_TEXT = "#1e293b"  # slate-800

# White text is kept down to this contrast ratio; below it dark text wins.
WHITE_TEXT_MIN_CONTRAST = 2.0

MONOCHROME_LIGHTNESS_STEPS = (20, 35, 50, 65, 80)  # dark -> light

_HEX_RE = re.compile(r"^[0-9a-fA-F]{6}$")


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def _clean_hex(hex_color: str) -> str:
    s = str(hex_color or "").strip()
    if s.startswith("#"):
        s = s[1:]
    if len(s) == 3:
        s = "".join(ch + ch for ch in s)
    if not _HEX_RE.match(s):
        return DEFAULT_COLOR[1:]
    return s


def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    """'#RGB' / '#RRGGBB' (with or without '#') -> (r, g, b).

    Empty or unparsable input resolves to DEFAULT_COLOR.
    """
    s = _clean_hex(hex_color)
    return int(s[0:2], 16), int(s[2:4], 16), int(s[4:6], 16)


def normalize_hex(hex_color: str) -> str:
    return "#" + _clean_hex(hex_color).upper()


# --- stable hash ------------------------------------------------------------------


def stable_hash(s: str) -> int:
    """DJB2 over UTF-16 code units, masked to 31 bits.

    Same value for the same id in any process; used for palette slots.
    """
    h = 5381
    data = str(s).encode("utf-16-le", "surrogatepass")
    for i in range(0, len(data), 2):
        unit = data[i] | (data[i + 1] << 8)
        h = ((h << 5) + h + unit) & 0x7FFFFFFF
    return h


# --- HSL ----------------------------------------------------------------------------


@dataclass(frozen=True)
class HSL:
    h: float  # 0-360
    s: float  # 0-100
    l: float  # 0-100


def hex_to_hsl(hex_color: str) -> HSL:
    r, g, b = hex_to_rgb(hex_color)
    rn, gn, bn = r / 255, g / 255, b / 255

    mx = max(rn, gn, bn)
    mn = min(rn, gn, bn)
    l = (mx + mn) / 2

    h = 0.0
    s = 0.0
    if mx != mn:
        d = mx - mn
        s = d / (2 - mx - mn) if l > 0.5 else d / (mx + mn)
        if mx == rn:
            h = ((gn - bn) / d + (6 if gn < bn else 0)) / 6
        elif mx == gn:
            h = ((bn - rn) / d + 2) / 6
        else:
            h = ((rn - gn) / d + 4) / 6

    return HSL(h=_round_half_up(h * 360), s=_round_half_up(s * 100), l=_round_half_up(l * 100))


def _hue_to_rgb(p: float, q: float, t: float) -> float:
    if t < 0:
        t += 1
    if t > 1:
        t -= 1
    if t < 1 / 6:
        return p + (q - p) * 6 * t
    if t < 1 / 2:
        return q
    if t < 2 / 3:
        return p + (q - p) * (2 / 3 - t) * 6
    return p


def hsl_to_hex(hsl: HSL) -> str:
    """HSL -> '#RRGGBB' (upper case)."""
    h = hsl.h / 360
    s = hsl.s / 100
    l = hsl.l / 100

    if s == 0:
        r = g = b = l
    else:
        q = l * (1 + s) if l < 0.5 else l + s - l * s
        p = 2 * l - q
        r = _hue_to_rgb(p, q, h + 1 / 3)
        g = _hue_to_rgb(p, q, h)
        b = _hue_to_rgb(p, q, h - 1 / 3)

    def to_hex(x: float) -> str:
        v = min(255, max(0, _round_half_up(x * 255)))
        return f"{v:02X}"

    return f"#{to_hex(r)}{to_hex(g)}{to_hex(b)}"


def lighten_color(hex_color: str, amount: float) -> str:
    """Raise lightness by ``amount`` (0-1; 0.15 = 15 points)."""
    hsl = hex_to_hsl(hex_color)
    return hsl_to_hex(replace(hsl, l=min(100, hsl.l + amount * 100)))


def darken_color(hex_color: str, amount: float) -> str:
    hsl = hex_to_hsl(hex_color)
    return hsl_to_hex(replace(hsl, l=max(0, hsl.l - amount * 100)))


def generate_monochrome_palette(base_color: str) -> List[str]:
    """Five shades of the base hue, dark -> light."""
    hsl = hex_to_hsl(base_color)
    return [hsl_to_hex(HSL(h=hsl.h, s=hsl.s, l=l)) for l in MONOCHROME_LIGHTNESS_STEPS]


def expand_palette(base_colors: List[str], target_count: int) -> List[str]:
    """Stretch a palette to ``target_count`` entries with lightness ramps.

    Each base color yields a dark -> light ramp (25 % -> 75 %, ease-out),
    saturation peaking mid-ramp and a +/-3 degree hue drift.
    """
    if target_count <= len(base_colors):
        return list(base_colors[:target_count])
    if not base_colors:
        return []

    steps = math.ceil(target_count / len(base_colors))
    out: List[str] = []
    for base in base_colors:
        hsl = hex_to_hsl(base)
        for i in range(steps):
            t = i / (steps - 1) if steps > 1 else 0.5
            eased = 1 - (1 - t) ** 2
            lightness = 25 + eased * 50
            sat_mod = 1 - ((2 * t - 1) ** 2) * 0.3
            saturation = min(100, hsl.s * sat_mod)
            hue = (hsl.h + (0.5 - t) * 6 + 360) % 360
            out.append(hsl_to_hex(HSL(h=hue, s=saturation, l=lightness)))
        if len(out) >= target_count:
            break
    return out[:target_count]


# --- contrast (WCAG 2.1) ------------------------------------------------------------


def _srgb_to_linear(channel: int) -> float:
    n = channel / 255
    return n / 12.92 if n <= 0.03928 else ((n + 0.055) / 1.055) ** 2.4


def get_relative_luminance(hex_color: str) -> float:
    r, g, b = hex_to_rgb(hex_color)
    return 0.2126 * _srgb_to_linear(r) + 0.7152 * _srgb_to_linear(g) + 0.0722 * _srgb_to_linear(b)


def get_contrast_ratio(hex1: str, hex2: str) -> float:
    l1 = get_relative_luminance(hex1)
    l2 = get_relative_luminance(hex2)
    return (max(l1, l2) + 0.05) / (min(l1, l2) + 0.05)


def is_light_color(hex_color: str) -> bool:
    return get_relative_luminance(hex_color) > 0.18


def get_contrast_text_color(background: str, light_text: str = LIGHT_TEXT, dark_text: str = DARK_TEXT) -> str:
    """Label color for a bar fill: white unless its contrast drops below 2:1."""
    if get_contrast_ratio(background, light_text) >= WHITE_TEXT_MIN_CONTRAST:
        return light_text
    return dark_text
