from __future__ import annotations

import pytest

from conflictviz.core.records import EventRecord
from conflictviz.io import ChartSettings, EventSnapshot

from app import charts as app_charts


def rec(country: str, year: int, metric: float) -> EventRecord:
    return EventRecord(country=country, year=year, metric=metric)


SNAP = EventSnapshot(
    fatalities=(rec("Iraq", 2019, 300), rec("Ukraine", 2020, 900), rec("Mali", 2020, 40)),
    civilian_fatalities=(rec("Iraq", 2019, 100),),
    events_targeting_civilians=(rec("Iraq", 2019, 12), rec("Mali", 2020, 4)),
    demonstration_events=(rec("Ukraine", 2020, 30),),
)
CFG = ChartSettings(year_min=2019, year_max=2020, top_n=2, grid_points=10, color_buckets=3)


def _assert_defaults(spec: dict) -> None:
    assert spec["config"]["axis"]["labelFontSize"] == 12
    assert spec["config"]["title"]["fontSize"] == 14
    assert spec["config"]["view"]["strokeOpacity"] == 0


@pytest.mark.parametrize(
    "build",
    [
        lambda: app_charts.top_countries_chart(SNAP, CFG),
        lambda: app_charts.civilian_combatant_chart(SNAP, CFG),
        lambda: app_charts.region_composition_chart(SNAP),
        lambda: app_charts.event_share_chart(SNAP),
        lambda: app_charts.region_year_heatmap(SNAP, CFG),
        lambda: app_charts.world_map_chart(SNAP, CFG, canonical_names=["Iraq", "Ukraine"]),
        lambda: app_charts.fatality_histogram(SNAP, CFG),
        lambda: app_charts.fatality_ridgeline(SNAP, CFG, by="year"),
        lambda: app_charts.fatality_violin(SNAP, CFG, by="region"),
        lambda: app_charts.fatality_box_plot(SNAP, by="region"),
    ],
)
def test_every_wrapper_applies_chart_defaults(build) -> None:
    _assert_defaults(build().to_dict())


def test_wrappers_respect_chart_settings() -> None:
    spec = app_charts.top_countries_chart(SNAP, CFG).to_dict()
    assert spec["encoding"]["x"]["sort"] == ["Ukraine", "Iraq"]


def test_wrappers_render_placeholders_on_empty_snapshot() -> None:
    spec = app_charts.fatality_histogram(EventSnapshot(), CFG).to_dict()
    _assert_defaults(spec)
    assert spec["mark"]["type"] == "text"
