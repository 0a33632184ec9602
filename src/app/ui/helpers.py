"""
Shared UI helper utilities for the conflict-event Streamlit application.

This module centralizes small cross-cutting helpers (headline KPIs, number
formatting) used by the page. Keeping these here keeps app.ui.app focused on
layout.

Notes:
    - KPI computation goes through Polars frames built by conflictviz.viz.base.
    - This module contains no Streamlit state manipulation itself.
"""

from __future__ import annotations

import polars as pl

from conflictviz.core.aggregate import year_totals
from conflictviz.io import ChartSettings, EventSnapshot
from conflictviz.io.read import EVENT_SCHEMA
from conflictviz.viz.base import records_frame, validate_schema


def _total(df: pl.DataFrame) -> float:
    validate_schema(df, EVENT_SCHEMA)
    if df.is_empty():
        return 0.0
    return float(df.select(pl.col("metric").sum().alias("_s")).get_column("_s").item())


def _peak_year(snap: EventSnapshot, cfg: ChartSettings) -> int:
    by_year = year_totals(snap.fatalities, year_min=cfg.year_min, year_max=cfg.year_max)
    best = max(by_year.items(), key=lambda kv: kv[1], default=(0, 0.0))
    return best[0] if best[1] > 0 else 0


def compute_overview_kpis(snap: EventSnapshot, cfg: ChartSettings | None = None) -> dict[str, float]:
    """Compute headline KPI metrics from a snapshot.

    Computes:
        - total_fatalities: Sum of reported fatalities over all country-years.
        - civilian_share: Civilian fatalities over total fatalities (0 when no fatalities).
        - countries: Number of distinct countries with at least one fatality record.
        - targeting_events: Sum of events targeting civilians.
        - peak_year: Year with the most fatalities inside the chart window (earliest on
          ties), or 0 when the window holds no fatalities.

    Args:
        snap (EventSnapshot): Loaded datasets.
        cfg (ChartSettings | None): Chart settings supplying the year window; defaults apply
            when omitted.

    Returns:
        dict[str, float]: KPI dictionary.
    """
    fat = records_frame(snap.fatalities)
    total = _total(fat)
    civilian = _total(records_frame(snap.civilian_fatalities))
    countries = fat.select(pl.col("country").n_unique()).item() if fat.height else 0
    return {
        "total_fatalities": total,
        "civilian_share": civilian / total if total > 0 else 0.0,
        "countries": float(countries),
        "targeting_events": _total(records_frame(snap.events_targeting_civilians)),
        "peak_year": float(_peak_year(snap, cfg or ChartSettings())),
    }


def format_count(value: float) -> str:
    """Format a count with thousands separators, e.g. 12345.0 -> "12,345".

    Args:
        value (float): Count to format.

    Returns:
        str: Rounded, comma-grouped string.
    """
    return f"{value:,.0f}"


def format_share(value: float) -> str:
    """Format a 0..1 share as a percentage with one decimal, e.g. 0.256 -> "25.6%"."""
    return f"{value * 100:.1f}%"
