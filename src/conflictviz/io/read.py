"""
Read utilities for the published country-year CSVs.

Overview
- read_event_frame(): Polars read of one source CSV into a typed frame
  (country: Utf8, year: Int64, metric: Float64).
- frame_to_records(): typed frame -> tuple of EventRecord.
- read_records(): both steps for one DatasetSpec.

Coercion policy
- All columns are read as strings, then coerced with the kernel's lenient policy:
  a cell that is blank, non-numeric, NaN or infinite becomes 0. Negative metrics
  are clamped to 0. Years are truncated to integers.
- Missing files raise IoReadError; missing required columns raise IoSchemaError.

Import DAG discipline
- Depends on stdlib, polars, conflictviz.core and conflictviz.io helpers; does not
  import higher layers (viz, app).
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable

import polars as pl

from conflictviz.core.records import EventRecord

from .datasets import COUNTRY_COLUMN, YEAR_COLUMN, DatasetSpec
from .errors import IoReadError, IoSchemaError

__all__ = [
    "EVENT_SCHEMA",
    "lenient_float",
    "read_event_frame",
    "frame_to_records",
    "read_records",
]

logger = logging.getLogger(__name__)

EVENT_SCHEMA: dict[str, type[pl.DataType]] = {
    "country": pl.Utf8,
    "year": pl.Int64,
    "metric": pl.Float64,
}


def lenient_float(col: str) -> pl.Expr:
    """Float expression for a string column: unparsable, NaN or infinite cells become 0.0."""
    x = pl.col(col).str.strip_chars().cast(pl.Float64, strict=False)
    return pl.when(x.is_finite()).then(x).otherwise(pl.lit(0.0))


def _ensure_columns_present(df: pl.DataFrame, needed: Iterable[str], path: str) -> None:
    missing = [c for c in needed if c not in df.columns]
    if missing:
        raise IoSchemaError(f"{path}: missing required columns: {missing!r}")


def read_event_frame(path: str | os.PathLike[str], spec: DatasetSpec) -> pl.DataFrame:
    """
    Read one source CSV into a typed event frame.

    Args:
        path (str | PathLike): CSV path.
        spec (DatasetSpec): Descriptor naming the metric column.

    Returns:
        pl.DataFrame: Columns country (Utf8), year (Int64), metric (Float64, >= 0).

    Raises:
        IoReadError: If the file does not exist or cannot be parsed as CSV.
        IoSchemaError: If COUNTRY, YEAR or the metric column is missing.
    """
    p = os.fspath(path)
    if not os.path.exists(p):
        raise IoReadError(f"Required file not found: {p}")
    try:
        raw = pl.read_csv(p, infer_schema=False)
    except (pl.exceptions.ComputeError, pl.exceptions.NoDataError, OSError) as exc:
        raise IoReadError(f"failed to read {p}: {exc}") from exc

    raw = raw.rename({c: c.strip() for c in raw.columns})
    _ensure_columns_present(raw, spec.required, p)

    df = raw.select(
        pl.col(COUNTRY_COLUMN).fill_null("").str.strip_chars().alias("country"),
        lenient_float(YEAR_COLUMN).cast(pl.Int64, strict=False).fill_null(0).alias("year"),
        lenient_float(spec.metric_column).clip(lower_bound=0.0).alias("metric"),
    )
    logger.info("loaded %s: %d rows from %s", spec.name.value, df.height, p)
    return df


def frame_to_records(df: pl.DataFrame) -> tuple[EventRecord, ...]:
    """Convert a typed event frame into immutable EventRecords (row order preserved)."""
    _ensure_columns_present(df, EVENT_SCHEMA, "<frame>")
    return tuple(
        EventRecord(country=row["country"], year=row["year"], metric=row["metric"])
        for row in df.select(list(EVENT_SCHEMA)).iter_rows(named=True)
    )


def read_records(path: str | os.PathLike[str], spec: DatasetSpec) -> tuple[EventRecord, ...]:
    """read_event_frame followed by frame_to_records."""
    return frame_to_records(read_event_frame(path, spec))
