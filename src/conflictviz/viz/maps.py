"""
World choropleth of reconciled country totals.

The boundary geometry is loaded by the renderer from a TopoJSON URL; only the joined
values are embedded. Colors come from conflictviz.core.scales.QuantizeScale so the
legend buckets are exactly the kernel's buckets.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping, Sequence

import altair as alt

from conflictviz.core.aggregate import group_sum
from conflictviz.core.constants import DEFAULT_COLOR_BUCKETS, WORLD_ATLAS_URL
from conflictviz.core.names import (
    DEFAULT_ALIASES,
    WORLD_ATLAS_NAMES,
    CanonicalCountryValue,
    reconcile,
    unresolved,
)
from conflictviz.core.records import EventRecord
from conflictviz.core.scales import QuantizeScale

from .base import inline, placeholder
from .theme import COLORS, HEATMAP_SCHEME

__all__ = [
    "choropleth_values",
    "choropleth_chart",
]

logger = logging.getLogger(__name__)


def choropleth_values(
    records: Sequence[EventRecord],
    *,
    canonical_names: Iterable[str] = WORLD_ATLAS_NAMES,
    aliases: Mapping[str, str] = DEFAULT_ALIASES,
    buckets: int = DEFAULT_COLOR_BUCKETS,
) -> tuple[list[CanonicalCountryValue], QuantizeScale]:
    """Reconcile per-country totals onto canonical names and build the color scale."""
    totals = group_sum(records, lambda r: r.country)
    resolved = reconcile(totals, canonical_names, aliases)
    unmatched = unresolved(totals, resolved)
    if unmatched:
        logger.info("%d source countries not on the map: %s", len(unmatched), ", ".join(unmatched))
    scale = QuantizeScale.from_values((c.value for c in resolved), buckets)
    return resolved, scale


def choropleth_chart(
    records: Sequence[EventRecord],
    *,
    canonical_names: Iterable[str] = WORLD_ATLAS_NAMES,
    aliases: Mapping[str, str] = DEFAULT_ALIASES,
    buckets: int = DEFAULT_COLOR_BUCKETS,
    topology_url: str = WORLD_ATLAS_URL,
    metric_title: str = "Fatalities",
) -> alt.TopLevelMixin:
    """
    Layered map: a muted base of all shapes, then countries colored by quantize bucket.

    Shapes whose name is not among canonical_names stay muted.
    """
    if not records:
        return placeholder("No data to map")
    resolved, scale = choropleth_values(
        records, canonical_names=canonical_names, aliases=aliases, buckets=buckets
    )
    rows = [
        {
            "name": c.canonical_name,
            "value": c.value,
            "bucket": scale.bucket(c.value),
            "source": c.source_name or "",
        }
        for c in resolved
    ]
    labels = [scale.label(i) for i in range(scale.buckets)]
    label_expr = f"{json.dumps(labels, ensure_ascii=False)}[datum.value]"

    countries = alt.topo_feature(topology_url, "countries")
    background = alt.Chart(countries).mark_geoshape(fill=COLORS["muted"], stroke="white", strokeWidth=0.3)
    colored = (
        alt.Chart(countries)
        .mark_geoshape(stroke="white", strokeWidth=0.3)
        .transform_lookup(
            lookup="properties.name",
            from_=alt.LookupData(inline(rows), "name", ["value", "bucket", "source"]),
        )
        .transform_filter("isValid(datum.bucket)")
        .encode(
            color=alt.Color(
                "bucket:O",
                title=metric_title,
                scale=alt.Scale(scheme=HEATMAP_SCHEME, domain=list(range(scale.buckets))),
                legend=alt.Legend(labelExpr=label_expr),
            ),
            tooltip=[
                alt.Tooltip("properties.name:N", title="Country"),
                alt.Tooltip("value:Q", title=metric_title, format=","),
            ],
        )
    )
    return (
        alt.layer(background, colored)
        .project(type="equalEarth")
        .properties(title=f"{metric_title} by country")
    )
