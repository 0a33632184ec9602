from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import polars as pl
import pytest

from conflictviz.core.aggregate import REGION_GROUPS
from conflictviz.core.constants import WORLD_ATLAS_URL
from conflictviz.core.errors import ParameterError
from conflictviz.core.records import EventRecord
from conflictviz.viz import bars, distributions, heatmap, maps
from conflictviz.viz.base import records_frame, validate_schema


def rec(country: str, year: int, metric: float) -> EventRecord:
    return EventRecord(country=country, year=year, metric=metric)


def find_in_spec(obj: Any, predicate) -> bool:
    """Recursively scan a chart spec dict for a predicate match."""
    if isinstance(obj, dict):
        if predicate(obj):
            return True
        return any(find_in_spec(v, predicate) for v in obj.values())
    if isinstance(obj, list):
        return any(find_in_spec(v, predicate) for v in obj)
    return False


def inline_rows(spec: dict) -> list[dict]:
    """All inline data rows, whether consolidated into `datasets` or left in place."""
    rows: list[dict] = []
    for values in spec.get("datasets", {}).values():
        rows.extend(values)

    def walk(obj: Any) -> None:
        if isinstance(obj, dict):
            vals = obj.get("values")
            if isinstance(vals, list) and all(isinstance(v, dict) for v in vals):
                rows.extend(vals)
            for k, v in obj.items():
                if k != "datasets":
                    walk(v)
        elif isinstance(obj, list):
            for v in obj:
                walk(v)

    walk(spec)
    return rows


def has_mark(mark_type: str):
    def pred(d: dict) -> bool:
        m = d.get("mark")
        return m == mark_type or (isinstance(m, dict) and m.get("type") == mark_type)

    return pred


def is_placeholder(spec: dict) -> bool:
    return find_in_spec(spec, has_mark("text")) and any("message" in r for r in inline_rows(spec))


FATALITIES = [
    rec("Iraq", 2019, 300),
    rec("Iraq", 2020, 100),
    rec("Mali", 2020, 50),
    rec("Mexico", 2020, 80),
    rec("Ukraine", 2021, 1000),
    rec("Iceland", 2021, 0),
    rec("Syria", 2021, 5),
]


# 1) Static guards: viz never reads files and never imports the app shell


def test_viz_is_decoupled_from_io_reads_and_app() -> None:
    src_viz = Path(__file__).resolve().parents[2] / "src" / "conflictviz" / "viz"
    assert src_viz.exists()
    forbidden = ["import pandas", "from pandas", "from app", "import streamlit", "read_csv"]
    for py in src_viz.rglob("*.py"):
        text = py.read_text(encoding="utf-8")
        for s in forbidden:
            assert s not in text, f"Forbidden usage '{s}' found in {py}"


# 2) Bars


def test_bar_chart_orders_top_countries() -> None:
    spec = bars.bar_chart(FATALITIES, top_n_countries=2).to_dict()
    rows = inline_rows(spec)
    assert [r["country"] for r in rows] == ["Ukraine", "Iraq"]
    assert rows[1]["total"] == 400.0
    assert spec["encoding"]["x"]["sort"] == ["Ukraine", "Iraq"]


def test_grouped_bar_chart_offsets_civilian_and_combatant() -> None:
    civilian = [rec("Iraq", 2020, 30)]
    spec = bars.grouped_bar_chart(FATALITIES, civilian, year_min=2020, year_max=2020).to_dict()
    assert "xOffset" in spec["encoding"]
    rows = {(r["year"], r["kind"]): r["value"] for r in inline_rows(spec)}
    assert rows == {(2020, "civilian"): 30.0, (2020, "combatant"): 200.0}


def test_stacked_bar_chart_shares_sum_to_100() -> None:
    targeting = [rec("Iraq", 2020, 10), rec("Mexico", 2020, 5)]
    demos = [rec("Iraq", 2020, 30)]
    spec = bars.stacked_bar_chart(targeting, demos, FATALITIES).to_dict()
    assert spec["encoding"]["y"]["stack"] == "zero"
    per_region: dict[str, float] = {}
    for r in inline_rows(spec):
        per_region[r["region"]] = per_region.get(r["region"], 0.0) + r["pct"]
    assert per_region["Middle East & Asia"] == pytest.approx(100.0)
    assert per_region["Americas"] == pytest.approx(100.0)
    assert per_region["Europe"] == 0.0


def test_waffle_chart_has_one_cell_per_unit() -> None:
    spec = bars.waffle_chart([rec("Iraq", 2020, 1)], [rec("Iraq", 2020, 3)]).to_dict()
    rows = inline_rows(spec)
    assert len(rows) == 100
    assert sum(r["category"] == "Events targeting civilians" for r in rows) == 25
    assert find_in_spec(spec, has_mark("square"))


@pytest.mark.parametrize(
    "build",
    [
        lambda: bars.bar_chart([]),
        lambda: bars.grouped_bar_chart([], []),
        lambda: bars.stacked_bar_chart([], [], []),
        lambda: bars.waffle_chart([], []),
        lambda: heatmap.heatmap_chart([], []),
        lambda: maps.choropleth_chart([]),
        lambda: distributions.histogram_chart([]),
        lambda: distributions.ridgeline_chart([]),
        lambda: distributions.violin_chart([]),
        lambda: distributions.box_plot_chart([]),
    ],
)
def test_empty_inputs_render_placeholder(build) -> None:
    assert is_placeholder(build().to_dict())


# 3) Heatmap and map


def test_heatmap_layers_rect_and_text_over_every_cell() -> None:
    spec = heatmap.heatmap_chart(FATALITIES, [2019, 2020, 2021]).to_dict()
    assert find_in_spec(spec, has_mark("rect"))
    assert find_in_spec(spec, has_mark("text"))
    rows = inline_rows(spec)
    assert len(rows) == len(REGION_GROUPS) * 3
    europe_2021 = next(r for r in rows if r["region"] == "Europe" and r["year"] == 2021)
    assert europe_2021["total"] == 1000.0
    assert europe_2021["dark"] is True


def test_choropleth_joins_reconciled_values_on_topojson_names() -> None:
    records = [rec("Democratic Republic of Congo", 2020, 900), rec("Iraq", 2020, 90)]
    chart = maps.choropleth_chart(
        records, canonical_names=["Dem. Rep. Congo", "Iraq", "Peru"], buckets=3
    )
    spec = chart.to_dict()

    assert find_in_spec(
        spec, lambda d: d.get("url") == WORLD_ATLAS_URL and d.get("format", {}).get("feature") == "countries"
    )
    assert find_in_spec(spec, lambda d: d.get("lookup") == "properties.name")
    assert find_in_spec(spec, lambda d: "labelExpr" in d and "0–300" in d["labelExpr"])
    rows = {r["name"]: r for r in inline_rows(spec) if "name" in r}
    assert rows["Dem. Rep. Congo"]["bucket"] == 2
    assert rows["Dem. Rep. Congo"]["source"] == "Democratic Republic of Congo"
    assert rows["Iraq"]["bucket"] == 0
    assert rows["Peru"]["value"] == 0.0


def test_choropleth_values_domain_is_reconciled_max() -> None:
    resolved, scale = maps.choropleth_values([rec("Iraq", 2020, 40)], canonical_names=["Iraq"])
    assert [c.value for c in resolved] == [40.0]
    assert scale.domain_max == 40.0


def test_choropleth_values_logs_countries_missing_from_the_map(caplog) -> None:
    caplog.set_level(logging.INFO, logger="conflictviz.viz.maps")
    maps.choropleth_values([rec("Iraq", 2020, 40), rec("Narnia", 2020, 5)], canonical_names=["Iraq"])
    assert any("Narnia" in r.getMessage() for r in caplog.records)


# 4) Distributions


def test_histogram_counts_every_country_year_on_log_axis() -> None:
    spec = distributions.histogram_chart(FATALITIES, bins=5).to_dict()
    rows = inline_rows(spec)
    assert len(rows) == 5
    assert sum(r["count"] for r in rows) == len(FATALITIES)
    assert spec["encoding"]["x"]["scale"]["type"] == "log"
    assert "x2" in spec["encoding"]


def test_ridgeline_facets_rows_per_year() -> None:
    spec = distributions.ridgeline_chart(FATALITIES, by="year", grid_points=12).to_dict()
    assert spec["facet"]["row"]["sort"] == ["2019", "2020", "2021"]
    rows = inline_rows(spec)
    assert len(rows) == 3 * 12
    assert all(0.0 <= r["density"] <= 1.0 for r in rows)
    assert find_in_spec(spec, has_mark("area"))


def test_violin_facets_columns_per_region_in_declared_order() -> None:
    spec = distributions.violin_chart(FATALITIES, by="region", grid_points=8).to_dict()
    assert spec["facet"]["column"]["sort"] == ["Middle East & Asia", "Africa", "Europe", "Americas", "Other"]
    assert find_in_spec(spec, lambda d: isinstance(d.get("mark"), dict) and d["mark"].get("orient") == "horizontal")
    rows = inline_rows(spec)
    assert all(r["lo"] == pytest.approx(-r["hi"]) for r in rows)


def test_box_plot_layers_whiskers_box_median_and_outliers() -> None:
    records = [rec("Iraq", 2000 + i, v) for i, v in enumerate([1, 2, 3, 4, 100])]
    spec = distributions.box_plot_chart(records, by="region").to_dict()
    for mark in ("rule", "bar", "tick", "circle"):
        assert find_in_spec(spec, has_mark(mark)), mark
    rows = inline_rows(spec)
    box = next(r for r in rows if "q1" in r)
    assert (box["q1"], box["median"], box["q3"]) == (2.0, 3.0, 4.0)
    assert (box["lower_fence"], box["upper_fence"]) == (1.0, 4.0)
    assert [r["value"] for r in rows if "value" in r] == [100.0]


def test_group_key_rejects_unknown_grouping() -> None:
    with pytest.raises(ParameterError):
        distributions.group_key("month")  # type: ignore[arg-type]


def test_group_order_years_sorted_and_regions_declared() -> None:
    assert distributions.group_order([2021, 2019, 2020], "year") == [2019, 2020, 2021]
    assert distributions.group_order(["Other", "Europe", "Africa"], "region") == ["Africa", "Europe", "Other"]


# 5) Base helpers


def test_records_frame_schema_and_values() -> None:
    df = records_frame(FATALITIES[:2])
    validate_schema(df, {"country": pl.Utf8, "year": pl.Int64, "metric": pl.Float64})
    assert df.to_dicts() == [
        {"country": "Iraq", "year": 2019, "metric": 300.0},
        {"country": "Iraq", "year": 2020, "metric": 100.0},
    ]
    assert records_frame([]).height == 0


def test_validate_schema_reports_missing_and_mismatched_columns() -> None:
    df = pl.DataFrame({"country": ["Iraq"], "year": [2020]})
    with pytest.raises(ValueError, match="metric"):
        validate_schema(df, {"metric": pl.Float64})
    with pytest.raises(ValueError, match="dtype"):
        validate_schema(df, {"year": pl.Float64})
