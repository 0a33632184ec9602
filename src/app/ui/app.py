"""
Streamlit application orchestrator for the conflict-event dashboard.

This module composes the sidebar controls and all page tabs while delegating
supporting concerns to app.data (cached loading), app.charts (chart wrappers) and
app.ui.helpers (KPIs).

Responsibilities:
    - Configure Streamlit page.
    - Resolve Settings and load one EventSnapshot via app.data with caching.
    - Render sidebar controls that override chart settings for this session.
    - Mount tab content (Overview, Regions, Map, Distributions, Data).

Notes:
    - A load failure replaces the page with an error message; no partial charts.
"""

from __future__ import annotations

from dataclasses import replace
from typing import cast

import streamlit as st

from app import charts as app_charts
from app.data import CacheConfig, load_canonical_names, load_event_snapshot, load_settings
from conflictviz.io import ChartSettings
from conflictviz.io.errors import IoError
from conflictviz.viz.base import records_frame
from conflictviz.viz.distributions import GroupBy

from .helpers import compute_overview_kpis, format_count, format_share


def _sidebar_chart_settings(base: ChartSettings, years: list[int]) -> tuple[ChartSettings, GroupBy]:
    """Sidebar overrides for the year window, top-N, smoothing and grouping.

    Args:
        base (ChartSettings): Resolved defaults.
        years (list[int]): Years present in the snapshot.

    Returns:
        tuple[ChartSettings, GroupBy]: Session chart settings and distribution grouping.
    """
    st.sidebar.header("Chart settings")
    lo = min([base.year_min, *years])
    # Slider needs min < max.
    hi = max([base.year_max, lo + 1, *years])
    year_min, year_max = st.sidebar.slider(
        "Years", min_value=lo, max_value=hi, value=(base.year_min, base.year_max)
    )
    top_n = st.sidebar.number_input(
        "Top countries", min_value=1, max_value=max(50, base.top_n), value=base.top_n
    )
    bandwidth = st.sidebar.slider(
        "KDE bandwidth (log10)", min_value=0.05, max_value=1.0, value=float(base.bandwidth), step=0.05
    )
    by = st.sidebar.radio("Group distributions by", ["year", "region"], horizontal=True)
    cfg = replace(
        base,
        year_min=int(year_min),
        year_max=int(year_max),
        top_n=int(top_n),
        bandwidth=float(bandwidth),
    )
    return cfg, cast(GroupBy, by)


def streamlit_app(data_dir: str | None = None, config_path: str | None = None) -> None:
    """Render the conflict-event Streamlit application.

    Args:
        data_dir (str | None): Optional data directory overriding configuration.
        config_path (str | None): Optional explicit TOML configuration path.

    Returns:
        None
    """
    st.set_page_config(page_title="Conflict events", layout="wide")
    st.title("Political violence and protest, by country and year")

    cache_cfg = CacheConfig()
    try:
        settings = load_settings(data_dir, config_path)
        with st.spinner("Loading datasets ..."):
            snap = load_event_snapshot(settings, cfg=cache_cfg)
            names = load_canonical_names(settings.boundary_path, cfg=cache_cfg)
    except IoError as e:
        st.error(f"Error loading data: {e}")
        return

    cfg, by = _sidebar_chart_settings(settings.charts, snap.years())

    tab_overview, tab_regions, tab_map, tab_dist, tab_data = st.tabs(
        ["Overview", "Regions", "Map", "Distributions", "Data"]
    )

    # ----------------------------
    # Overview
    # ----------------------------
    with tab_overview:
        kpi = compute_overview_kpis(snap, cfg)
        c1, c2, c3, c4, c5 = st.columns(5)
        with c1:
            st.metric("Fatalities", format_count(kpi["total_fatalities"]))
        with c2:
            st.metric("Civilian share", format_share(kpi["civilian_share"]))
        with c3:
            st.metric("Countries", format_count(kpi["countries"]))
        with c4:
            st.metric("Events targeting civilians", format_count(kpi["targeting_events"]))
        with c5:
            st.metric("Peak year", str(int(kpi["peak_year"])) if kpi["peak_year"] else "n/a")

        st.altair_chart(app_charts.top_countries_chart(snap, cfg), use_container_width=True)
        st.altair_chart(app_charts.civilian_combatant_chart(snap, cfg), use_container_width=True)

    # ----------------------------
    # Regions
    # ----------------------------
    with tab_regions:
        st.altair_chart(app_charts.region_year_heatmap(snap, cfg), use_container_width=True)
        left, right = st.columns([2, 1])
        with left:
            st.altair_chart(app_charts.region_composition_chart(snap), use_container_width=True)
        with right:
            st.altair_chart(app_charts.event_share_chart(snap))

    # ----------------------------
    # Map
    # ----------------------------
    with tab_map:
        st.altair_chart(
            app_charts.world_map_chart(
                snap, cfg, canonical_names=names, topology_url=settings.topology_url
            ),
            use_container_width=True,
        )

    # ----------------------------
    # Distributions
    # ----------------------------
    with tab_dist:
        st.altair_chart(app_charts.fatality_histogram(snap, cfg), use_container_width=True)
        st.altair_chart(app_charts.fatality_ridgeline(snap, cfg, by=by))
        st.altair_chart(app_charts.fatality_violin(snap, cfg, by=by))
        st.altair_chart(app_charts.fatality_box_plot(snap, by=by), use_container_width=True)

    # ----------------------------
    # Data
    # ----------------------------
    with tab_data:
        st.caption(f"Loaded from {settings.data_dir}")
        for label, records in (
            ("Fatalities", snap.fatalities),
            ("Civilian fatalities", snap.civilian_fatalities),
            ("Events targeting civilians", snap.events_targeting_civilians),
            ("Demonstration events", snap.demonstration_events),
        ):
            with st.expander(f"{label} ({len(records)} rows)"):
                st.dataframe(records_frame(records), use_container_width=True)
