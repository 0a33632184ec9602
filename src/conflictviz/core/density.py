"""
Fixed-bandwidth kernel density estimation on a log10 grid.

Responsibilities
- Build evenly spaced log10 evaluation grids.
- Evaluate an Epanechnikov KDE over log10-transformed values and emit the curve in
  linear value space, peak-normalized to [0, 1].

Notes
- This is a deliberately simple estimator (fixed bandwidth, no data-adaptive
  selection). It smooths distributions for display on log-scaled axes; it is not a
  statistically rigorous density.
- Values below 1 (including zeros and negatives) are floored to 1 before the log,
  so a country-year with no fatalities sits at log10(1) = 0.
- An empty sample produces an all-zero curve over the same grid.
- Zero-IO (stdlib + pydantic only).
"""

from __future__ import annotations

import math
from collections.abc import Callable, Hashable, Iterable, Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict

from .constants import DEFAULT_BANDWIDTH, DEFAULT_GRID_POINTS
from .errors import ParameterError
from .records import EventRecord

__all__ = [
    "DensityPoint",
    "DensityCurve",
    "log_grid",
    "log_grid_for",
    "epanechnikov",
    "kde",
    "grouped_kde",
]


class DensityPoint(BaseModel):
    """One (value, density) sample of a curve; value is in linear space."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    value: float
    density: float


class DensityCurve(BaseModel):
    """
    Peak-normalized density curve for one group.

    Attributes:
        label (Any): Group label (year, month, region, ...) or None.
        points (tuple[DensityPoint, ...]): One point per grid abscissa, ascending.
        sample_size (int): Number of values the curve was estimated from.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    label: Any = None
    points: tuple[DensityPoint, ...]
    sample_size: int = 0

    def __len__(self) -> int:
        return len(self.points)

    @property
    def is_empty(self) -> bool:
        return self.sample_size == 0


def log_grid(start: float, stop: float, num: int = DEFAULT_GRID_POINTS) -> list[float]:
    """
    Evenly spaced log10 abscissas from start to stop inclusive.

    Args:
        start (float): First abscissa (log10 units).
        stop (float): Last abscissa (log10 units).
        num (int): Number of points (>= 1).

    Returns:
        list[float]: Grid in log10 units.

    Raises:
        ParameterError: If num < 1.

    Examples:
        >>> log_grid(0.0, 2.0, 3)
        [0.0, 1.0, 2.0]
    """
    if num < 1:
        raise ParameterError(f"grid needs at least one point; got {num}")
    if num == 1:
        return [float(start)]
    step = (stop - start) / (num - 1)
    return [start + i * step for i in range(num)]


def log_grid_for(
    values: Iterable[float],
    num: int = DEFAULT_GRID_POINTS,
    *,
    bandwidth: float = DEFAULT_BANDWIDTH,
) -> list[float]:
    """
    Grid covering log10 of the values (floored at 1) padded by one bandwidth each side.

    The lower end never goes below 0 (value 1). An empty input yields a grid over
    [0, 1] (values 1..10).
    """
    logs = [math.log10(max(float(v), 1.0)) for v in values]
    if not logs:
        return log_grid(0.0, 1.0, num)
    lo = max(min(logs) - bandwidth, 0.0)
    hi = max(logs) + bandwidth
    return log_grid(lo, hi, num)


def epanechnikov(u: float, bandwidth: float) -> float:
    """
    Epanechnikov kernel scaled by bandwidth: ``0.75 * (1 - u**2) / bw`` for ``|u| <= 1``.

    Examples:
        >>> epanechnikov(0.0, 0.25)
        3.0
        >>> epanechnikov(1.5, 0.25)
        0.0
    """
    if abs(u) > 1.0:
        return 0.0
    return 0.75 * (1.0 - u * u) / bandwidth


def kde(
    values: Iterable[float],
    grid: Sequence[float],
    bandwidth: float = DEFAULT_BANDWIDTH,
    *,
    label: Any = None,
) -> DensityCurve:
    """
    Estimate a peak-normalized density curve over a log10 grid.

    For each grid abscissa t, ``density(t) = mean(K((log10(v) - t) / bw))``. The
    curve is emitted as ``(10**t, density / peak)`` pairs.

    Args:
        values (Iterable[float]): Sample; values below 1 are floored to 1.
        grid (Sequence[float]): Evaluation abscissas in log10 units.
        bandwidth (float): Kernel bandwidth in log10 units (> 0).
        label (Any): Optional group label carried on the curve.

    Returns:
        DensityCurve: ``len(grid)`` points with densities in [0, 1]. All densities are
        0 for an empty sample or when no value falls within a bandwidth of the grid.

    Raises:
        ParameterError: If bandwidth is not positive.
    """
    if not bandwidth > 0:
        raise ParameterError(f"bandwidth must be positive; got {bandwidth!r}")
    logs = [math.log10(max(float(v), 1.0)) for v in values]
    n = len(logs)
    if n == 0:
        raw = [0.0] * len(grid)
    else:
        raw = [
            sum(epanechnikov((x - t) / bandwidth, bandwidth) for x in logs) / n for t in grid
        ]
    peak = max(raw, default=0.0)
    dens = [d / peak for d in raw] if peak > 0 else [0.0] * len(grid)
    points = tuple(
        DensityPoint(value=10.0**t, density=d) for t, d in zip(grid, dens)
    )
    return DensityCurve(label=label, points=points, sample_size=n)


def grouped_kde(
    records: Iterable[EventRecord],
    key_fn: Callable[[EventRecord], Hashable],
    grid: Sequence[float],
    bandwidth: float = DEFAULT_BANDWIDTH,
) -> list[DensityCurve]:
    """One curve per group (first-seen order), all evaluated on the same grid."""
    groups: dict[Hashable, list[float]] = {}
    for r in records:
        groups.setdefault(key_fn(r), []).append(r.metric)
    return [kde(vs, grid, bandwidth, label=k) for k, vs in groups.items()]
