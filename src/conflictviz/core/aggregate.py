"""
Group-by-sum aggregation and curated region membership.

Responsibilities
- Reduce EventRecords by an arbitrary key with summation (group_sum, group_buckets).
- Assign countries to curated regions by two-way substring matching (match_region).
- Shape the aggregates used by the bar, grouped bar, heatmap, stacked bar and waffle
  charts so that each chart builder stays a thin formatting adapter.

Notes
- Region matching is order-dependent: the first region, in declaration order,
  whose curated list substring-matches a country wins. Countries matched by no list
  fall into OTHER_REGION; they are never dropped by match_region.
- Zero-IO (stdlib + pydantic only).
"""

from __future__ import annotations

import math
from collections.abc import Callable, Hashable, Iterable, Mapping, Sequence
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict

from .constants import OTHER_FATALITY_DIVISOR, OTHER_REGION, WAFFLE_COLUMNS, WAFFLE_SQUARES
from .records import EventRecord

__all__ = [
    "AggregateBucket",
    "RegionMap",
    "REGION_GROUPS",
    "metric",
    "group_sum",
    "group_buckets",
    "match_region",
    "top_n",
    "year_totals",
    "civilian_combatant_by_year",
    "region_year_matrix",
    "region_event_shares",
    "waffle_units",
    "waffle_cells",
]

K = TypeVar("K", bound=Hashable)

RegionMap = Mapping[str, Sequence[str]]

# Curated region lists. Declaration order is the tie-break order of match_region.
REGION_GROUPS: dict[str, tuple[str, ...]] = {
    "Middle East & Asia": (
        "Afghanistan",
        "Iraq",
        "Syria",
        "Yemen",
        "Pakistan",
        "Israel",
        "Palestine",
    ),
    "Africa": (
        "Nigeria",
        "Somalia",
        "Democratic Republic of the Congo",
        "Ethiopia",
        "Mali",
        "Burkina Faso",
    ),
    "Europe": ("Ukraine", "Russia", "Azerbaijan", "Armenia"),
    "Americas": ("Colombia", "Mexico", "Haiti", "Venezuela"),
}


class AggregateBucket(BaseModel):
    """
    Result of one grouping key.

    Attributes:
        key (Any): Grouping key (country, year, region or a tuple of those).
        total (float): Sum of the reduced values.
        count (int): Number of records folded into the bucket.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    key: Any
    total: float
    count: int


def metric(record: EventRecord) -> float:
    """Default value accessor: the record's metric."""
    return record.metric


def group_sum(
    records: Iterable[EventRecord],
    key_fn: Callable[[EventRecord], K],
    value_fn: Callable[[EventRecord], float] = metric,
) -> dict[K, float]:
    """
    Sum values per key.

    Args:
        records (Iterable[EventRecord]): Input records.
        key_fn (Callable): Maps a record to its grouping key.
        value_fn (Callable): Maps a record to the value to add (default: metric).

    Returns:
        dict[K, float]: Totals keyed by group, in first-seen key order. The sum of
        the totals equals the sum of the values.

    Examples:
        >>> rs = [EventRecord(country="Iraq", year=2020, metric=100),
        ...       EventRecord(country="Iraq", year=2020, metric=50)]
        >>> group_sum(rs, lambda r: r.country)
        {'Iraq': 150.0}
    """
    totals: dict[K, float] = {}
    for r in records:
        k = key_fn(r)
        totals[k] = totals.get(k, 0.0) + value_fn(r)
    return totals


def group_buckets(
    records: Iterable[EventRecord],
    key_fn: Callable[[EventRecord], K],
    value_fn: Callable[[EventRecord], float] = metric,
) -> list[AggregateBucket]:
    """Like group_sum, but also counts rows per key; returns buckets in first-seen order."""
    totals: dict[K, float] = {}
    counts: dict[K, int] = {}
    for r in records:
        k = key_fn(r)
        totals[k] = totals.get(k, 0.0) + value_fn(r)
        counts[k] = counts.get(k, 0) + 1
    return [AggregateBucket(key=k, total=totals[k], count=counts[k]) for k in totals]


def match_region(country: str, region_map: RegionMap = REGION_GROUPS) -> str:
    """
    Return the first region whose curated list two-way substring-matches a country.

    A curated name matches when it is a substring of ``country`` or ``country`` is a
    substring of it. Regions are tried in declaration order and the first match wins.

    Args:
        country (str): Country name from an event file.
        region_map (RegionMap): Ordered region -> country substrings.

    Returns:
        str: Region name, or OTHER_REGION when nothing matches.

    Examples:
        >>> match_region("Iraq")
        'Middle East & Asia'
        >>> match_region("Democratic Republic of Congo")
        'Other'
        >>> match_region("Congo", {"A": ["Republic of the Congo"], "B": ["Congo"]})
        'A'
    """
    if not country:
        return OTHER_REGION
    for region, names in region_map.items():
        for name in names:
            if name in country or country in name:
                return region
    return OTHER_REGION


def top_n(totals: Mapping[K, float], n: int) -> list[tuple[K, float]]:
    """Return the n largest (key, total) pairs, descending; ties keep first-seen order."""
    if n <= 0:
        return []
    return sorted(totals.items(), key=lambda kv: -kv[1])[:n]


def year_totals(
    records: Iterable[EventRecord], *, year_min: int, year_max: int
) -> dict[int, float]:
    """Sum by year over an inclusive window; every year in the window is present."""
    sums = group_sum(
        (r for r in records if year_min <= r.year <= year_max), lambda r: r.year
    )
    return {y: sums.get(y, 0.0) for y in range(year_min, year_max + 1)}


def civilian_combatant_by_year(
    total: Iterable[EventRecord],
    civilian: Iterable[EventRecord],
    *,
    year_min: int,
    year_max: int,
) -> list[dict[str, float | int]]:
    """
    Split yearly fatalities into civilian and combatant parts.

    Only years present in either source and inside the inclusive window are kept.
    A year missing from one source counts as 0 there; combatant = total - civilian.

    Returns:
        list[dict]: Rows ``{"year", "civilian", "combatant", "total"}`` sorted by year.
    """
    by_total = group_sum(total, lambda r: r.year)
    by_civ = group_sum(civilian, lambda r: r.year)
    years = sorted(y for y in set(by_total) | set(by_civ) if year_min <= y <= year_max)
    out: list[dict[str, float | int]] = []
    for y in years:
        t = by_total.get(y, 0.0)
        c = by_civ.get(y, 0.0)
        out.append({"year": y, "civilian": c, "combatant": t - c, "total": t})
    return out


def region_year_matrix(
    records: Iterable[EventRecord],
    years: Sequence[int],
    region_map: RegionMap = REGION_GROUPS,
) -> list[dict[str, Any]]:
    """
    Sum records into region x year cells for the heatmap.

    Every declared region and every requested year gets a cell (0 when empty). Records
    whose country falls into OTHER_REGION are not part of any heatmap row.

    Returns:
        list[dict]: ``{"region", "year", "total"}`` rows, regions in declaration order.
    """
    wanted = set(years)
    sums = group_sum(
        (r for r in records if r.year in wanted),
        lambda r: (match_region(r.country, region_map), r.year),
    )
    return [
        {"region": region, "year": y, "total": sums.get((region, y), 0.0)}
        for region in region_map
        for y in years
    ]


def region_event_shares(
    targeting: Iterable[EventRecord],
    demonstrations: Iterable[EventRecord],
    fatalities: Iterable[EventRecord],
    region_map: RegionMap = REGION_GROUPS,
) -> list[dict[str, Any]]:
    """
    Compute per-region composition for the 100% stacked bar chart.

    Components per declared region:
        - targeting: events targeting civilians.
        - demonstrations: demonstration events.
        - other: ``min(fatalities / 100, targeting + demonstrations)``.

    Returns:
        list[dict]: ``{"region", "targeting", "demonstrations", "other",
        "targeting_pct", "demonstrations_pct", "other_pct"}``. Percentages are 0 when
        the region total is 0.
    """

    def by_region(rs: Iterable[EventRecord]) -> dict[str, float]:
        return group_sum(rs, lambda r: match_region(r.country, region_map))

    t = by_region(targeting)
    d = by_region(demonstrations)
    f = by_region(fatalities)

    out: list[dict[str, Any]] = []
    for region in region_map:
        tv = t.get(region, 0.0)
        dv = d.get(region, 0.0)
        ov = min(f.get(region, 0.0) / OTHER_FATALITY_DIVISOR, tv + dv)
        total = tv + dv + ov
        row: dict[str, Any] = {"region": region, "targeting": tv, "demonstrations": dv, "other": ov}
        for key, v in (("targeting", tv), ("demonstrations", dv), ("other", ov)):
            row[f"{key}_pct"] = (v / total) * 100.0 if total > 0 else 0.0
        out.append(row)
    return out


def waffle_units(
    parts: Mapping[str, float], squares: int = WAFFLE_SQUARES
) -> dict[str, int]:
    """
    Allocate waffle squares per category as ``round(value / total * squares)`` (half up).

    Rounding is per category, so the units may not add up to exactly ``squares``.
    All categories get 0 units when the total is 0.
    """
    total = sum(parts.values())
    if total <= 0:
        return {k: 0 for k in parts}
    # Half-up rounding, not banker's rounding.
    return {k: math.floor(v / total * squares + 0.5) for k, v in parts.items()}


def waffle_cells(
    units: Mapping[str, int], columns: int = WAFFLE_COLUMNS
) -> list[dict[str, Any]]:
    """Lay units out row-major on a fixed column count: ``{"index", "row", "col", "category"}``."""
    cells: list[dict[str, Any]] = []
    i = 0
    for category, n in units.items():
        for _ in range(max(n, 0)):
            cells.append({"index": i, "row": i // columns, "col": i % columns, "category": category})
            i += 1
    return cells
