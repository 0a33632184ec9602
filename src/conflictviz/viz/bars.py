"""
Bar-family charts: top countries, civilian vs combatant, 100% stacked regions, waffle.

Each builder aggregates through conflictviz.core.aggregate and only formats the
result; empty inputs produce a placeholder chart instead of an empty axis.
"""

from __future__ import annotations

from collections.abc import Sequence

import altair as alt

from conflictviz.core.aggregate import (
    REGION_GROUPS,
    RegionMap,
    civilian_combatant_by_year,
    group_sum,
    region_event_shares,
    top_n,
    waffle_cells,
    waffle_units,
)
from conflictviz.core.constants import (
    DEFAULT_TOP_N,
    DEFAULT_YEAR_MAX,
    DEFAULT_YEAR_MIN,
    WAFFLE_COLUMNS,
    WAFFLE_SQUARES,
)
from conflictviz.core.records import EventRecord

from .base import inline, placeholder
from .theme import COLORS, GROUPED_RANGE, STACK_RANGE, WAFFLE_RANGE

__all__ = [
    "STACK_LABELS",
    "bar_chart",
    "grouped_bar_chart",
    "stacked_bar_chart",
    "waffle_chart",
]

STACK_LABELS: dict[str, str] = {
    "targeting": "Targeting Civilians",
    "demonstrations": "Demonstrations",
    "other": "Other Events",
}


def bar_chart(
    records: Sequence[EventRecord],
    *,
    top_n_countries: int = DEFAULT_TOP_N,
    metric_title: str = "Fatalities",
) -> alt.TopLevelMixin:
    """Top countries by metric summed across all years, descending."""
    totals = top_n(group_sum(records, lambda r: r.country), top_n_countries)
    if not totals:
        return placeholder("No data to display")
    rows = [{"country": c, "total": t} for c, t in totals]
    order = [c for c, _ in totals]
    return (
        alt.Chart(inline(rows))
        .mark_bar(color=COLORS["primary"])
        .encode(
            x=alt.X("country:N", sort=order, title="Country", axis=alt.Axis(labelAngle=-45)),
            y=alt.Y("total:Q", title=f"Total {metric_title}"),
            tooltip=[
                alt.Tooltip("country:N", title="Country"),
                alt.Tooltip("total:Q", title=metric_title, format=","),
            ],
        )
        .properties(title=f"Top {len(rows)} countries by {metric_title.lower()}")
    )


def grouped_bar_chart(
    total: Sequence[EventRecord],
    civilian: Sequence[EventRecord],
    *,
    year_min: int = DEFAULT_YEAR_MIN,
    year_max: int = DEFAULT_YEAR_MAX,
) -> alt.TopLevelMixin:
    """Civilian vs combatant (total minus civilian) fatalities per year, side by side."""
    by_year = civilian_combatant_by_year(total, civilian, year_min=year_min, year_max=year_max)
    if not by_year:
        return placeholder(f"No fatalities between {year_min} and {year_max}")
    rows = [
        {"year": r["year"], "kind": kind, "value": r[kind]}
        for r in by_year
        for kind in ("civilian", "combatant")
    ]
    return (
        alt.Chart(inline(rows))
        .mark_bar()
        .encode(
            x=alt.X("year:O", title="Year"),
            xOffset=alt.XOffset("kind:N", sort=["civilian", "combatant"]),
            y=alt.Y("value:Q", title="Fatalities"),
            color=alt.Color(
                "kind:N",
                title="Fatalities",
                scale=alt.Scale(domain=["civilian", "combatant"], range=GROUPED_RANGE),
            ),
            tooltip=[
                alt.Tooltip("year:O", title="Year"),
                alt.Tooltip("kind:N", title="Type"),
                alt.Tooltip("value:Q", title="Fatalities", format=","),
            ],
        )
        .properties(title="Civilian vs combatant fatalities")
    )


def stacked_bar_chart(
    targeting: Sequence[EventRecord],
    demonstrations: Sequence[EventRecord],
    fatalities: Sequence[EventRecord],
    *,
    region_map: RegionMap = REGION_GROUPS,
) -> alt.TopLevelMixin:
    """100% stacked composition of event categories per curated region."""
    shares = region_event_shares(targeting, demonstrations, fatalities, region_map)
    if not any(s["targeting"] + s["demonstrations"] + s["other"] > 0 for s in shares):
        return placeholder("No events in the curated regions")
    keys = list(STACK_LABELS)
    rows = [
        {
            "region": s["region"],
            "category": STACK_LABELS[k],
            "order": i,
            "pct": s[f"{k}_pct"],
            "count": s[k],
        }
        for s in shares
        for i, k in enumerate(keys)
    ]
    return (
        alt.Chart(inline(rows))
        .mark_bar()
        .encode(
            x=alt.X("region:N", sort=list(region_map), title="Region", axis=alt.Axis(labelAngle=-15)),
            y=alt.Y(
                "pct:Q",
                stack="zero",
                title="Percentage",
                scale=alt.Scale(domain=[0, 100]),
                axis=alt.Axis(labelExpr="datum.value + '%'"),
            ),
            color=alt.Color(
                "category:N",
                title="Category",
                scale=alt.Scale(domain=[STACK_LABELS[k] for k in keys], range=STACK_RANGE),
            ),
            order=alt.Order("order:Q"),
            tooltip=[
                alt.Tooltip("region:N", title="Region"),
                alt.Tooltip("category:N", title="Category"),
                alt.Tooltip("pct:Q", title="Share (%)", format=".1f"),
            ],
        )
        .properties(title="Event composition by region")
    )


def waffle_chart(
    targeting: Sequence[EventRecord],
    demonstrations: Sequence[EventRecord],
    *,
    squares: int = WAFFLE_SQUARES,
    columns: int = WAFFLE_COLUMNS,
) -> alt.TopLevelMixin:
    """Waffle of the share of events targeting civilians vs demonstrations."""
    parts = {
        "Events targeting civilians": sum(r.metric for r in targeting),
        "Demonstration events": sum(r.metric for r in demonstrations),
    }
    units = waffle_units(parts, squares)
    cells = waffle_cells(units, columns)
    if not cells:
        return placeholder("No events to display")
    for c in cells:
        c["total"] = parts[c["category"]]
    return (
        alt.Chart(inline(cells))
        .mark_square(size=300, opacity=1)
        .encode(
            x=alt.X("col:O", axis=None),
            y=alt.Y("row:O", axis=None),
            color=alt.Color(
                "category:N",
                title=None,
                scale=alt.Scale(domain=list(parts), range=WAFFLE_RANGE),
                legend=alt.Legend(orient="bottom", direction="vertical"),
            ),
            tooltip=[
                alt.Tooltip("category:N", title="Type"),
                alt.Tooltip("total:Q", title="Events", format=","),
            ],
        )
        .properties(width=columns * 20, height=max(cells[-1]["row"] + 1, 1) * 20, title="Share of events")
    )
