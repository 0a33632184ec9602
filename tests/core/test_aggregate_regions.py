from __future__ import annotations

import pytest

from conflictviz.core.aggregate import (
    REGION_GROUPS,
    civilian_combatant_by_year,
    group_buckets,
    group_sum,
    match_region,
    region_event_shares,
    region_year_matrix,
    top_n,
    waffle_cells,
    waffle_units,
    year_totals,
)
from conflictviz.core.constants import OTHER_REGION
from conflictviz.core.records import EventRecord


def rec(country: str, year: int, metric: float) -> EventRecord:
    return EventRecord(country=country, year=year, metric=metric)


def test_group_sum_same_country_adds_up() -> None:
    rs = [rec("Iraq", 2020, 100), rec("Iraq", 2020, 50)]
    assert group_sum(rs, lambda r: r.country) == {"Iraq": 150.0}


def test_group_sum_conserves_total_and_keeps_first_seen_order() -> None:
    rs = [rec("Mali", 2019, 3), rec("Iraq", 2019, 10), rec("Mali", 2020, 4), rec("Chad", 2020, 0)]
    out = group_sum(rs, lambda r: r.country)
    assert list(out) == ["Mali", "Iraq", "Chad"]
    assert sum(out.values()) == pytest.approx(sum(r.metric for r in rs))


def test_group_buckets_counts_rows() -> None:
    rs = [rec("Mali", 2019, 3), rec("Mali", 2020, 4), rec("Iraq", 2019, 1)]
    buckets = group_buckets(rs, lambda r: r.country)
    assert [(b.key, b.total, b.count) for b in buckets] == [("Mali", 7.0, 2), ("Iraq", 1.0, 1)]


def test_match_region_first_declared_region_wins() -> None:
    regions = {"First": ["Congo"], "Second": ["Republic of the Congo"]}
    assert match_region("Republic of the Congo", regions) == "First"
    assert match_region("Republic of the Congo", dict(reversed(list(regions.items())))) == "Second"


def test_match_region_is_two_way_substring() -> None:
    # The country is a substring of a curated name.
    assert match_region("Niger") == "Africa"
    # A curated name is a substring of the country.
    assert match_region("Syria (Government)") == "Middle East & Asia"


def test_match_region_unmatched_and_blank_fall_into_other() -> None:
    assert match_region("Iceland") == OTHER_REGION
    assert match_region("") == OTHER_REGION


def test_top_n_descending_with_stable_ties() -> None:
    totals = {"a": 1.0, "b": 5.0, "c": 5.0, "d": 3.0}
    assert top_n(totals, 3) == [("b", 5.0), ("c", 5.0), ("d", 3.0)]
    assert top_n(totals, 0) == []


def test_year_totals_fills_window() -> None:
    rs = [rec("Iraq", 2018, 5), rec("Mali", 2020, 2), rec("Mali", 2030, 99)]
    assert year_totals(rs, year_min=2018, year_max=2020) == {2018: 5.0, 2019: 0.0, 2020: 2.0}


def test_civilian_combatant_split() -> None:
    total = [rec("Iraq", 2019, 100), rec("Mali", 2019, 20), rec("Iraq", 2020, 50), rec("Iraq", 2017, 9)]
    civilian = [rec("Iraq", 2019, 30), rec("Iraq", 2021, 4)]
    rows = civilian_combatant_by_year(total, civilian, year_min=2018, year_max=2024)
    assert rows == [
        {"year": 2019, "civilian": 30.0, "combatant": 90.0, "total": 120.0},
        {"year": 2020, "civilian": 0.0, "combatant": 50.0, "total": 50.0},
        {"year": 2021, "civilian": 4.0, "combatant": -4.0, "total": 0.0},
    ]


def test_region_year_matrix_has_every_cell_and_skips_other() -> None:
    rs = [rec("Iraq", 2019, 3), rec("Iraq", 2019, 2), rec("Iceland", 2019, 100), rec("Mexico", 2020, 1)]
    cells = region_year_matrix(rs, [2019, 2020])
    assert len(cells) == len(REGION_GROUPS) * 2
    lookup = {(c["region"], c["year"]): c["total"] for c in cells}
    assert lookup[("Middle East & Asia", 2019)] == 5.0
    assert lookup[("Americas", 2020)] == 1.0
    assert lookup[("Europe", 2019)] == 0.0
    assert all(c["region"] != OTHER_REGION for c in cells)
    assert sum(lookup.values()) == 6.0


def test_region_event_shares_other_is_capped() -> None:
    targeting = [rec("Iraq", 2020, 10)]
    demos = [rec("Iraq", 2020, 30)]
    fatalities = [rec("Iraq", 2020, 5000), rec("Mexico", 2020, 200)]
    rows = {r["region"]: r for r in region_event_shares(targeting, demos, fatalities)}

    me = rows["Middle East & Asia"]
    assert me["other"] == 40.0  # min(5000 / 100, 10 + 30)
    assert me["targeting_pct"] == pytest.approx(12.5)
    assert me["demonstrations_pct"] == pytest.approx(37.5)
    assert me["other_pct"] == pytest.approx(50.0)

    # No targeting or demonstrations: other is capped at 0.
    am = rows["Americas"]
    assert am["other"] == 0.0
    assert am["targeting_pct"] == am["demonstrations_pct"] == am["other_pct"] == 0.0


def test_waffle_units_round_half_up() -> None:
    assert waffle_units({"a": 1, "b": 2}) == {"a": 33, "b": 67}
    assert waffle_units({"a": 1, "b": 7}, 4) == {"a": 1, "b": 4}
    assert waffle_units({"a": 0, "b": 0}) == {"a": 0, "b": 0}


def test_waffle_cells_row_major_layout() -> None:
    cells = waffle_cells({"a": 3, "b": 2}, columns=2)
    assert [c["category"] for c in cells] == ["a", "a", "a", "b", "b"]
    assert cells[-1] == {"index": 4, "row": 2, "col": 0, "category": "b"}
