"""
Shared helpers for the chart builders: frame conversion, schema checks, placeholders.

Notes:
    - Chart data is embedded inline via alt.Data(values=...) so specs are
      self-contained and serializable with to_dict().
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

import altair as alt
import polars as pl

from conflictviz.core.records import EventRecord

__all__ = [
    "records_frame",
    "validate_schema",
    "placeholder",
    "inline",
]


def records_frame(records: Iterable[EventRecord]) -> pl.DataFrame:
    """EventRecords as a Polars frame with columns country, year, metric."""
    rows = [r.model_dump() for r in records]
    return pl.DataFrame(rows, schema={"country": pl.Utf8, "year": pl.Int64, "metric": pl.Float64})


def validate_schema(df: pl.DataFrame, schema: Mapping[str, Any]) -> None:
    """
    Ensure required columns exist with the expected dtypes.

    Raises:
        ValueError: On a missing column or a dtype mismatch.
    """
    for col, dtype in schema.items():
        if col not in df.columns:
            raise ValueError(f"missing required column {col!r}")
        if df.schema[col] != dtype:
            raise ValueError(f"column {col!r} has dtype {df.schema[col]}, expected {dtype}")


def inline(rows: list[dict[str, Any]]) -> alt.Data:
    """Inline data block."""
    return alt.Data(values=rows)


def placeholder(message: str) -> alt.Chart:
    """Text-only chart shown instead of an empty plot."""
    return (
        alt.Chart(alt.Data(values=[{"message": message}]))
        .mark_text(size=14, color="#666")
        .encode(text="message:N")
        .properties(height=60)
    )
