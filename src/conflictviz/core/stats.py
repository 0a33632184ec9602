"""
Quantiles, Tukey fences and fixed-edge histograms.

Responsibilities
- Linear-interpolation quantiles (index = p * (n - 1)), the convention used by R
  type 7, numpy's default and d3.quantile.
- Box-plot summaries whose whisker fences clamp to the nearest actual data value
  instead of extrapolating beyond the sample.
- Histogram counts over fixed edges that keep empty buckets.

Notes
- An empty sample yields None (no summary), never a fabricated row of zeros.
  Callers skip rendering for such groups.
- Zero-IO (stdlib + pydantic only).
"""

from __future__ import annotations

import math
from bisect import bisect_right
from collections.abc import Iterable, Sequence

from pydantic import BaseModel, ConfigDict

from .constants import FENCE_FACTOR
from .errors import ParameterError

__all__ = [
    "QuantileSummary",
    "quantile",
    "summarize",
    "outliers",
    "histogram",
]


class QuantileSummary(BaseModel):
    """
    Five-number summary plus Tukey whisker fences for one group.

    Attributes:
        q1 (float): First quartile.
        median (float): Second quartile.
        q3 (float): Third quartile.
        lower_fence (float): Smallest sample value >= q1 - 1.5 * IQR.
        upper_fence (float): Largest sample value <= q3 + 1.5 * IQR.
        min (float): Sample minimum.
        max (float): Sample maximum.
        count (int): Sample size.

    Notes:
        min <= lower_fence <= upper_fence <= max always holds.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    q1: float
    median: float
    q3: float
    lower_fence: float
    upper_fence: float
    min: float
    max: float
    count: int

    @property
    def iqr(self) -> float:
        return self.q3 - self.q1


def quantile(sorted_values: Sequence[float], p: float) -> float | None:
    """
    Linear-interpolation quantile of an ascending sequence.

    Args:
        sorted_values (Sequence[float]): Values sorted ascending.
        p (float): Probability in [0, 1].

    Returns:
        float | None: Interpolated quantile, or None for an empty sequence.

    Raises:
        ParameterError: If p is outside [0, 1] or NaN.

    Examples:
        >>> quantile([1, 2, 3, 4], 0.5)
        2.5
        >>> quantile([1, 2, 3, 4], 0.25)
        1.75
        >>> quantile([], 0.5) is None
        True
    """
    if math.isnan(p) or p < 0.0 or p > 1.0:
        raise ParameterError(f"quantile probability must be in [0, 1]; got {p!r}")
    if not sorted_values:
        return None
    return _interpolate(sorted_values, p)


def _interpolate(sorted_values: Sequence[float], p: float) -> float:
    idx = p * (len(sorted_values) - 1)
    lo = math.floor(idx)
    hi = math.ceil(idx)
    v_lo = float(sorted_values[lo])
    if lo == hi:
        return v_lo
    v_hi = float(sorted_values[hi])
    return v_lo + (v_hi - v_lo) * (idx - lo)


def summarize(sample: Iterable[float]) -> QuantileSummary | None:
    """
    Compute quartiles and clamped Tukey fences for a sample.

    Args:
        sample (Iterable[float]): Values for one group (any order).

    Returns:
        QuantileSummary | None: Summary, or None when the sample is empty.

    Examples:
        >>> s = summarize([1, 2, 3, 4, 100])
        >>> (s.q1, s.median, s.q3, s.lower_fence, s.upper_fence)
        (2.0, 3.0, 4.0, 1.0, 4.0)
    """
    xs = sorted(float(v) for v in sample)
    if not xs:
        return None
    q1 = _interpolate(xs, 0.25)
    med = _interpolate(xs, 0.5)
    q3 = _interpolate(xs, 0.75)
    iqr = q3 - q1
    lo_bound = q1 - FENCE_FACTOR * iqr
    hi_bound = q3 + FENCE_FACTOR * iqr
    lower = next((v for v in xs if v >= lo_bound), xs[0])
    upper = next((v for v in reversed(xs) if v <= hi_bound), xs[-1])
    return QuantileSummary(
        q1=q1,
        median=med,
        q3=q3,
        lower_fence=lower,
        upper_fence=upper,
        min=xs[0],
        max=xs[-1],
        count=len(xs),
    )


def outliers(sample: Iterable[float], summary: QuantileSummary) -> list[float]:
    """Values strictly outside the summary's fences, ascending."""
    return sorted(
        float(v) for v in sample if v < summary.lower_fence or v > summary.upper_fence
    )


def histogram(values: Iterable[float], edges: Sequence[float]) -> list[int]:
    """
    Count values per bucket defined by ascending edges.

    Buckets are half-open ``[edges[i], edges[i+1])`` except the last, which is
    closed so the top edge is counted. Values outside ``[edges[0], edges[-1]]`` are
    dropped. Empty buckets are kept as 0, so the result has ``len(edges) - 1`` items.

    Raises:
        ParameterError: If fewer than two edges are given or they are not ascending.

    Examples:
        >>> histogram([0, 1, 1, 5, 10], [0, 5, 10])
        [3, 2]
        >>> histogram([], [0, 1, 2])
        [0, 0]
    """
    if len(edges) < 2:
        raise ParameterError("histogram needs at least two edges")
    if any(b <= a for a, b in zip(edges, edges[1:])):
        raise ParameterError("histogram edges must be strictly ascending")
    counts = [0] * (len(edges) - 1)
    last = len(counts) - 1
    for v in values:
        if v < edges[0] or v > edges[-1]:
            continue
        counts[min(bisect_right(edges, v) - 1, last)] += 1
    return counts
