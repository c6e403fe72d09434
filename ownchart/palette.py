# ownchart/palette.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

PALETTE_CATEGORIES: Tuple[str, ...] = ("corporate", "nature", "creative")


@dataclass(frozen=True)
class ColorPalette:
    id: str
    name: str
    category: str                 # "corporate" | "nature" | "creative"
    colors: Tuple[str, ...]       # 5 hex colors, dark -> light


COLOR_PALETTES: Tuple[ColorPalette, ...] = (
    # corporate
    ColorPalette("corporate-blue", "Corporate Blue", "corporate",
                 ("#0A2E4A", "#0F6CBD", "#2B88D8", "#62ABF5", "#B4D6FA")),
    ColorPalette("slate", "Slate", "corporate",
                 ("#1E293B", "#334155", "#475569", "#64748B", "#94A3B8")),
    ColorPalette("warm-neutral", "Warm Neutral", "corporate",
                 ("#44403C", "#57534E", "#78716C", "#A8A29E", "#D6D3D1")),
    ColorPalette("ownchart-mono", "OwnChart Mono", "corporate",
                 ("#134E4A", "#0F766E", "#14B8A6", "#5EEAD4", "#99F6E4")),
    # nature
    ColorPalette("ocean", "Ocean", "nature",
                 ("#023E8A", "#0077B6", "#0096C7", "#00B4D8", "#48CAE4")),
    ColorPalette("forest", "Forest", "nature",
                 ("#1B4332", "#2D6A4F", "#40916C", "#52B788", "#74C69D")),
    ColorPalette("sunset", "Sunset", "nature",
                 ("#7F1D1D", "#DC2626", "#F97316", "#FBBF24", "#FDE68A")),
    ColorPalette("earth", "Earth", "nature",
                 ("#422006", "#78350F", "#A16207", "#CA8A04", "#EAB308")),
    # creative
    ColorPalette("candy", "Candy", "creative",
                 ("#FF6B6B", "#4ECDC4", "#FFE66D", "#95E1D3", "#F38181")),
    ColorPalette("neon", "Neon", "creative",
                 ("#00F5D4", "#00BBF9", "#FEE440", "#F15BB5", "#9B5DE5")),
    ColorPalette("pastel", "Pastel", "creative",
                 ("#FECACA", "#FED7AA", "#FEF08A", "#BBF7D0", "#BFDBFE")),
    ColorPalette("berry", "Berry", "creative",
                 ("#831843", "#BE185D", "#DB2777", "#EC4899", "#F9A8D4")),
)

CATEGORY_LABELS: Dict[str, str] = {
    "corporate": "Corporate",
    "nature": "Nature",
    "creative": "Creative",
}

_BY_ID: Dict[str, ColorPalette] = {p.id: p for p in COLOR_PALETTES}


def get_palette_by_id(palette_id: Optional[str]) -> Optional[ColorPalette]:
    if not isinstance(palette_id, str):
        return None
    return _BY_ID.get(palette_id)


def get_palettes_by_category(category: str) -> List[ColorPalette]:
    return [p for p in COLOR_PALETTES if p.category == category]
