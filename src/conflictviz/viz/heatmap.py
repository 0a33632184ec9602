"""Region x year heatmap of events targeting civilians."""

from __future__ import annotations

from collections.abc import Sequence

import altair as alt

from conflictviz.core.aggregate import REGION_GROUPS, RegionMap, region_year_matrix
from conflictviz.core.records import EventRecord

from .base import inline, placeholder
from .theme import HEATMAP_SCHEME

__all__ = ["heatmap_chart"]


def heatmap_chart(
    records: Sequence[EventRecord],
    years: Sequence[int],
    *,
    region_map: RegionMap = REGION_GROUPS,
    metric_title: str = "Events",
) -> alt.TopLevelMixin:
    """
    Color each (region, year) cell by its summed metric, with the value printed on top.

    Countries outside the curated regions are not shown. The color domain is [0, max].
    """
    cells = region_year_matrix(records, years, region_map)
    if not cells:
        return placeholder("No regions or years to display")
    max_value = max(c["total"] for c in cells)
    # Dark cells get light text.
    for c in cells:
        c["dark"] = max_value > 0 and c["total"] > max_value / 2

    base = alt.Chart(inline(cells)).encode(
        x=alt.X("year:O", title="Year"),
        y=alt.Y("region:N", sort=list(region_map), title="Region"),
    )
    rect = base.mark_rect().encode(
        color=alt.Color(
            "total:Q",
            title=metric_title,
            scale=alt.Scale(scheme=HEATMAP_SCHEME, domain=[0, max(max_value, 1.0)]),
        ),
        tooltip=[
            alt.Tooltip("region:N", title="Region"),
            alt.Tooltip("year:O", title="Year"),
            alt.Tooltip("total:Q", title=metric_title, format=","),
        ],
    )
    text = base.mark_text(fontSize=10).encode(
        text=alt.Text("total:Q", format=",.0f"),
        color=alt.condition("datum.dark", alt.value("white"), alt.value("black")),
    )
    return alt.layer(rect, text).properties(title=f"{metric_title} by region and year")
