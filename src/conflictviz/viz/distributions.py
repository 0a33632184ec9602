"""
Distribution charts over country-year values: histogram, ridgeline, violin, box plot.

Responsibilities
- Group records by year or by curated region (group_key, group_order).
- Format kernel outputs (log_edges + histogram, grouped_kde, summarize) as Altair specs.

Notes
- Value axes are logarithmic; values below 1 are floored to 1 by the kernel so a
  country-year with zero fatalities still has a position on the axis.
- Groups with no records produce no curve or box; they are skipped, not drawn empty.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Sequence
from typing import Literal

import altair as alt

from conflictviz.core.aggregate import REGION_GROUPS, RegionMap, match_region
from conflictviz.core.constants import (
    DEFAULT_BANDWIDTH,
    DEFAULT_GRID_POINTS,
    DEFAULT_HISTOGRAM_BINS,
    OTHER_REGION,
)
from conflictviz.core.density import grouped_kde, log_grid_for
from conflictviz.core.errors import ParameterError
from conflictviz.core.records import EventRecord
from conflictviz.core.scales import log_edges
from conflictviz.core.stats import histogram, outliers, summarize

from .base import inline, placeholder
from .theme import COLORS

__all__ = [
    "GroupBy",
    "group_key",
    "group_order",
    "histogram_chart",
    "ridgeline_chart",
    "violin_chart",
    "box_plot_chart",
]

GroupBy = Literal["year", "region"]


def group_key(by: GroupBy, region_map: RegionMap = REGION_GROUPS) -> Callable[[EventRecord], Hashable]:
    """
    Key function for grouping records by year or curated region.

    Raises:
        ParameterError: If ``by`` is not "year" or "region".
    """
    if by == "year":
        return lambda r: r.year
    if by == "region":
        return lambda r: match_region(r.country, region_map)
    raise ParameterError(f"unknown grouping {by!r}; expected 'year' or 'region'")


def group_order(labels: Sequence[Hashable], by: GroupBy, region_map: RegionMap = REGION_GROUPS) -> list:
    """Display order: years ascending; regions in declaration order, then Other."""
    present = set(labels)
    if by == "year":
        return sorted(present)
    return [g for g in [*region_map, OTHER_REGION] if g in present]


def histogram_chart(
    records: Sequence[EventRecord],
    *,
    bins: int = DEFAULT_HISTOGRAM_BINS,
    metric_title: str = "Fatalities",
) -> alt.TopLevelMixin:
    """Count of country-year values per logarithmic bin."""
    if not records:
        return placeholder("No values to bin")
    values = [max(r.metric, 1.0) for r in records]
    edges = log_edges(values, bins)
    counts = histogram(values, edges)
    rows = [
        {"lo": lo, "hi": hi, "count": n}
        for lo, hi, n in zip(edges[:-1], edges[1:], counts)
    ]
    return (
        alt.Chart(inline(rows))
        .mark_bar(color=COLORS["primary"], stroke="white", strokeWidth=0.5)
        .encode(
            x=alt.X("lo:Q", title=f"{metric_title} (log scale)", scale=alt.Scale(type="log")),
            x2="hi:Q",
            y=alt.Y("count:Q", title="Country-years"),
            tooltip=[
                alt.Tooltip("lo:Q", title="From", format=",.0f"),
                alt.Tooltip("hi:Q", title="To", format=",.0f"),
                alt.Tooltip("count:Q", title="Count"),
            ],
        )
        .properties(title=f"Distribution of {metric_title.lower()} per country-year")
    )


def _curve_rows(
    records: Sequence[EventRecord],
    by: GroupBy,
    region_map: RegionMap,
    grid_points: int,
    bandwidth: float,
) -> tuple[list[dict], list]:
    key = group_key(by, region_map)
    grid = log_grid_for((r.metric for r in records), grid_points, bandwidth=bandwidth)
    curves = grouped_kde(records, key, grid, bandwidth)
    rows = [
        {
            "group": str(c.label),
            "value": p.value,
            "density": p.density,
            "lo": -p.density / 2,
            "hi": p.density / 2,
            "n": c.sample_size,
        }
        for c in curves
        if not c.is_empty
        for p in c.points
    ]
    order = [str(g) for g in group_order([c.label for c in curves], by, region_map)]
    return rows, order


def ridgeline_chart(
    records: Sequence[EventRecord],
    *,
    by: GroupBy = "year",
    region_map: RegionMap = REGION_GROUPS,
    grid_points: int = DEFAULT_GRID_POINTS,
    bandwidth: float = DEFAULT_BANDWIDTH,
    metric_title: str = "Fatalities",
) -> alt.TopLevelMixin:
    """One peak-normalized density row per group, stacked with no spacing."""
    if not records:
        return placeholder("No values to smooth")
    rows, order = _curve_rows(records, by, region_map, grid_points, bandwidth)
    return (
        alt.Chart(inline(rows))
        .mark_area(
            interpolate="monotone",
            fillOpacity=0.7,
            stroke="white",
            strokeWidth=0.5,
            color=COLORS["primary"],
        )
        .encode(
            x=alt.X("value:Q", title=f"{metric_title} (log scale)", scale=alt.Scale(type="log")),
            y=alt.Y("density:Q", axis=None, scale=alt.Scale(domain=[0, 1])),
            tooltip=[
                alt.Tooltip("group:N", title=by.capitalize()),
                alt.Tooltip("n:Q", title="Country-years"),
            ],
        )
        .properties(height=40, width=500)
        .facet(
            row=alt.Row(
                "group:N",
                sort=order,
                title=None,
                header=alt.Header(labelAngle=0, labelAlign="left"),
            ),
            spacing=0,
        )
        .properties(title=f"Density of {metric_title.lower()} by {by}")
    )


def violin_chart(
    records: Sequence[EventRecord],
    *,
    by: GroupBy = "region",
    region_map: RegionMap = REGION_GROUPS,
    grid_points: int = DEFAULT_GRID_POINTS,
    bandwidth: float = DEFAULT_BANDWIDTH,
    metric_title: str = "Fatalities",
) -> alt.TopLevelMixin:
    """Mirrored density per group, value on a vertical log axis."""
    if not records:
        return placeholder("No values to smooth")
    rows, order = _curve_rows(records, by, region_map, grid_points, bandwidth)
    return (
        alt.Chart(inline(rows))
        .mark_area(orient="horizontal", interpolate="monotone", color=COLORS["quinary"], opacity=0.7)
        .encode(
            y=alt.Y("value:Q", title=f"{metric_title} (log scale)", scale=alt.Scale(type="log")),
            x=alt.X("lo:Q", axis=None, scale=alt.Scale(domain=[-0.5, 0.5])),
            x2="hi:Q",
            tooltip=[
                alt.Tooltip("group:N", title=by.capitalize()),
                alt.Tooltip("n:Q", title="Country-years"),
            ],
        )
        .properties(width=90, height=300)
        .facet(
            column=alt.Column(
                "group:N",
                sort=order,
                title=None,
                header=alt.Header(labelOrient="bottom", labelAngle=-30),
            ),
            spacing=0,
        )
        .properties(title=f"Distribution of {metric_title.lower()} by {by}")
    )


def box_plot_chart(
    records: Sequence[EventRecord],
    *,
    by: GroupBy = "region",
    region_map: RegionMap = REGION_GROUPS,
    metric_title: str = "Fatalities",
) -> alt.TopLevelMixin:
    """
    Tukey box per group: whiskers at the clamped fences, box from q1 to q3, median tick,
    and values beyond the fences as points.
    """
    key = group_key(by, region_map)
    samples: dict[Hashable, list[float]] = {}
    for r in records:
        samples.setdefault(key(r), []).append(r.metric)

    boxes: list[dict] = []
    points: list[dict] = []
    for g in group_order(list(samples), by, region_map):
        summary = summarize(samples[g])
        if summary is None:
            continue
        boxes.append({"group": str(g), **summary.model_dump(), "iqr": summary.iqr})
        points.extend({"group": str(g), "value": v} for v in outliers(samples[g], summary))
    if not boxes:
        return placeholder("No values to summarize")

    order = [b["group"] for b in boxes]
    x = alt.X("group:N", sort=order, title=by.capitalize())
    y_scale = alt.Scale(type="symlog")
    base = alt.Chart(inline(boxes)).encode(x=x)
    whiskers = base.mark_rule(color="#555").encode(
        y=alt.Y("lower_fence:Q", title=metric_title, scale=y_scale),
        y2="upper_fence:Q",
    )
    box = base.mark_bar(size=28, color=COLORS["primary"], opacity=0.8).encode(
        y="q1:Q",
        y2="q3:Q",
        tooltip=[
            alt.Tooltip("group:N", title=by.capitalize()),
            alt.Tooltip("median:Q", title="Median", format=",.1f"),
            alt.Tooltip("q1:Q", title="Q1", format=",.1f"),
            alt.Tooltip("q3:Q", title="Q3", format=",.1f"),
            alt.Tooltip("count:Q", title="Country-years"),
        ],
    )
    median = base.mark_tick(color="white", size=28, thickness=2).encode(y="median:Q")
    dots = (
        alt.Chart(inline(points))
        .mark_circle(color=COLORS["secondary"], size=25, opacity=0.7)
        .encode(
            x=x,
            y=alt.Y("value:Q", scale=y_scale),
            tooltip=[alt.Tooltip("value:Q", title=metric_title, format=",")],
        )
    )
    return alt.layer(whiskers, box, median, dots).properties(
        title=f"{metric_title} per country-year by {by}"
    )
