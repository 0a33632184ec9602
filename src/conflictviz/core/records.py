"""
Record normalization for country-year conflict aggregates.

Responsibilities
- Coerce raw textual values into numbers under a lenient policy: anything that
  does not parse as a finite float becomes 0.0. Nothing here raises on bad data.
- Define the immutable EventRecord row model shared by every downstream module.
- Build records from raw string rows as they come out of a CSV reader.

Notes
- A 0 produced by parse_num is indistinguishable from a reported zero. Callers must
  not treat 0 as "missing".
- Zero-IO (stdlib + pydantic only).
"""

from __future__ import annotations

import math
import re
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

__all__ = [
    "EventRecord",
    "parse_num",
    "normalize_row",
    "normalize_rows",
]

# Plain ASCII decimal or exponent notation, as the CSV reader accepts it.
_NUMBER_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def parse_num(value: Any) -> float:
    """
    Parse a value as a float, returning 0.0 when it cannot be parsed.

    Args:
        value (Any): Raw value (usually a string cell).

    Returns:
        float: Parsed value, or 0.0 for None, blanks, non-numeric text, NaN and
        infinities.

    Examples:
        >>> parse_num("12")
        12.0
        >>> parse_num(" 3.5 ")
        3.5
        >>> parse_num("n/a")
        0.0
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        out = float(value)
    else:
        text = str(value).strip()
        if not _NUMBER_RE.fullmatch(text):
            return 0.0
        out = float(text)
    if math.isnan(out) or math.isinf(out):
        return 0.0
    return out


class EventRecord(BaseModel):
    """
    One country-year aggregate from a published event file.

    Attributes:
        country (str): Country name as written in the source file (stripped).
        year (int): Calendar year.
        metric (float): Fatalities or event count, depending on the source file.
            Always >= 0.

    Notes:
        - Non-numeric metrics coerce to 0; negative metrics are clamped to 0.
        - Instances are frozen and hashable.

    Examples:
        >>> EventRecord(country="Iraq", year=2020, metric="100")
        EventRecord(country='Iraq', year=2020, metric=100.0)
        >>> EventRecord(country="Iraq", year="2020", metric="oops").metric
        0.0
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    country: str
    year: int
    metric: float = 0.0

    @field_validator("country", mode="before")
    @classmethod
    def _strip_country(cls, v: Any) -> str:
        return "" if v is None else str(v).strip()

    @field_validator("year", mode="before")
    @classmethod
    def _coerce_year(cls, v: Any) -> int:
        y = parse_num(v)
        # Years outside the signed 64-bit range read as 0, as in the CSV reader.
        return int(y) if -(2**63) <= y < 2**63 else 0

    @field_validator("metric", mode="before")
    @classmethod
    def _coerce_metric(cls, v: Any) -> float:
        return max(parse_num(v), 0.0)


def normalize_row(
    row: Mapping[str, Any],
    metric_field: str,
    *,
    country_field: str = "COUNTRY",
    year_field: str = "YEAR",
) -> EventRecord:
    """
    Build an EventRecord from a raw row mapping.

    Args:
        row (Mapping[str, Any]): Raw row, typically string-valued.
        metric_field (str): Column holding the metric ("FATALITIES" or "EVENTS").
        country_field (str): Column holding the country name.
        year_field (str): Column holding the year.

    Returns:
        EventRecord: Typed record. Missing fields behave like unparsable ones.

    Examples:
        >>> normalize_row({"COUNTRY": "Mali", "YEAR": "2021", "EVENTS": "7"}, "EVENTS")
        EventRecord(country='Mali', year=2021, metric=7.0)
    """
    return EventRecord(
        country=row.get(country_field),
        year=row.get(year_field),
        metric=row.get(metric_field),
    )


def normalize_rows(
    rows: Iterable[Mapping[str, Any]],
    metric_field: str,
    *,
    country_field: str = "COUNTRY",
    year_field: str = "YEAR",
) -> tuple[EventRecord, ...]:
    """Normalize many rows; see normalize_row."""
    return tuple(
        normalize_row(r, metric_field, country_field=country_field, year_field=year_field)
        for r in rows
    )
