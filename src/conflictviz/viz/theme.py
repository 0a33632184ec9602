"""Palette shared by the chart builders."""

from __future__ import annotations

__all__ = [
    "COLORS",
    "HEATMAP_SCHEME",
    "WAFFLE_RANGE",
    "STACK_RANGE",
    "GROUPED_RANGE",
]

COLORS: dict[str, str] = {
    "primary": "#4a90e2",
    "secondary": "#e74c3c",
    "tertiary": "#2ecc71",
    "quaternary": "#f39c12",
    "quinary": "#9b59b6",
    "muted": "#e6e6e6",
}

# Vega scheme name for yellow-orange-red sequential scales.
HEATMAP_SCHEME = "yelloworangered"

WAFFLE_RANGE: list[str] = ["#d1495b", "#edae49"]

# Targeting civilians, demonstrations, other.
STACK_RANGE: list[str] = [COLORS["secondary"], COLORS["primary"], COLORS["quaternary"]]

# Civilian, combatant.
GROUPED_RANGE: list[str] = [COLORS["secondary"], COLORS["primary"]]
