from __future__ import annotations

from collections.abc import Sequence

import altair as alt

from conflictviz.core.aggregate import REGION_GROUPS, RegionMap
from conflictviz.core.constants import WORLD_ATLAS_URL
from conflictviz.core.names import DEFAULT_ALIASES
from conflictviz.io import ChartSettings, EventSnapshot
from conflictviz.viz import bars as _bars
from conflictviz.viz import distributions as _dist
from conflictviz.viz import heatmap as _heatmap
from conflictviz.viz import maps as _maps
from conflictviz.viz.distributions import GroupBy


# Uniform chart defaults for a professional look
def _apply_chart_defaults(ch: alt.TopLevelMixin) -> alt.TopLevelMixin:
    return (
        ch.configure_axis(labelFontSize=12, titleFontSize=12, grid=True)
        .configure_legend(labelFontSize=12, titleFontSize=12)
        .configure_title(fontSize=14)
        .configure_view(strokeOpacity=0)
    )


# ----------------------------
# Bars
# ----------------------------


def top_countries_chart(snap: EventSnapshot, cfg: ChartSettings) -> alt.TopLevelMixin:
    """Top countries by total fatalities (delegates to conflictviz.viz.bars.bar_chart)."""
    return _apply_chart_defaults(_bars.bar_chart(snap.fatalities, top_n_countries=cfg.top_n))


def civilian_combatant_chart(snap: EventSnapshot, cfg: ChartSettings) -> alt.TopLevelMixin:
    return _apply_chart_defaults(
        _bars.grouped_bar_chart(
            snap.fatalities,
            snap.civilian_fatalities,
            year_min=cfg.year_min,
            year_max=cfg.year_max,
        )
    )


def region_composition_chart(
    snap: EventSnapshot, *, region_map: RegionMap = REGION_GROUPS
) -> alt.TopLevelMixin:
    return _apply_chart_defaults(
        _bars.stacked_bar_chart(
            snap.events_targeting_civilians,
            snap.demonstration_events,
            snap.fatalities,
            region_map=region_map,
        )
    )


def event_share_chart(snap: EventSnapshot) -> alt.TopLevelMixin:
    return _apply_chart_defaults(
        _bars.waffle_chart(snap.events_targeting_civilians, snap.demonstration_events)
    )


# ----------------------------
# Heatmap and map
# ----------------------------


def region_year_heatmap(
    snap: EventSnapshot, cfg: ChartSettings, *, region_map: RegionMap = REGION_GROUPS
) -> alt.TopLevelMixin:
    """Events targeting civilians per region and year within the configured window."""
    return _apply_chart_defaults(
        _heatmap.heatmap_chart(
            snap.events_targeting_civilians,
            cfg.years,
            region_map=region_map,
            metric_title="Events targeting civilians",
        )
    )


def world_map_chart(
    snap: EventSnapshot,
    cfg: ChartSettings,
    *,
    canonical_names: Sequence[str],
    topology_url: str = WORLD_ATLAS_URL,
) -> alt.TopLevelMixin:
    return _apply_chart_defaults(
        _maps.choropleth_chart(
            snap.fatalities,
            canonical_names=canonical_names,
            aliases=DEFAULT_ALIASES,
            buckets=cfg.color_buckets,
            topology_url=topology_url,
        )
    )


# ----------------------------
# Distributions
# ----------------------------


def fatality_histogram(snap: EventSnapshot, cfg: ChartSettings) -> alt.TopLevelMixin:
    return _apply_chart_defaults(_dist.histogram_chart(snap.fatalities, bins=cfg.histogram_bins))


def fatality_ridgeline(
    snap: EventSnapshot, cfg: ChartSettings, *, by: GroupBy = "year"
) -> alt.TopLevelMixin:
    """Ridgeline of country-year fatalities (delegates to conflictviz.viz.distributions)."""
    return _apply_chart_defaults(
        _dist.ridgeline_chart(
            snap.fatalities, by=by, grid_points=cfg.grid_points, bandwidth=cfg.bandwidth
        )
    )


def fatality_violin(
    snap: EventSnapshot, cfg: ChartSettings, *, by: GroupBy = "region"
) -> alt.TopLevelMixin:
    return _apply_chart_defaults(
        _dist.violin_chart(
            snap.fatalities, by=by, grid_points=cfg.grid_points, bandwidth=cfg.bandwidth
        )
    )


def fatality_box_plot(
    snap: EventSnapshot, *, by: GroupBy = "region", region_map: RegionMap = REGION_GROUPS
) -> alt.TopLevelMixin:
    return _apply_chart_defaults(_dist.box_plot_chart(snap.fatalities, by=by, region_map=region_map))
