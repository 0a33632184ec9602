"""
Color and axis scale helpers shared by the choropleth, heatmap and histogram.

Notes:
    - QuantizeScale splits [0, max] into equal-width discrete buckets, the same
      contract as a quantize scale in declarative charting libraries.
    - log_domain keeps log-scaled domains strictly positive by flooring at 1.
    - Zero-IO (stdlib only).
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass

from .constants import DEFAULT_COLOR_BUCKETS
from .errors import ParameterError

__all__ = [
    "QuantizeScale",
    "log_domain",
    "log_edges",
]


@dataclass(frozen=True)
class QuantizeScale:
    """
    Equal-width discrete buckets spanning [0, domain_max].

    Attributes:
        domain_max (float): Upper end of the domain (values above clamp to the top bucket).
        buckets (int): Number of buckets (>= 1).

    Examples:
        >>> s = QuantizeScale(domain_max=90.0, buckets=3)
        >>> s.thresholds
        [30.0, 60.0]
        >>> [s.bucket(v) for v in (0, 29.9, 30, 89, 500)]
        [0, 0, 1, 2, 2]
    """

    domain_max: float
    buckets: int = DEFAULT_COLOR_BUCKETS

    def __post_init__(self) -> None:
        if self.buckets < 1:
            raise ParameterError(f"quantize scale needs at least one bucket; got {self.buckets}")

    @classmethod
    def from_values(cls, values: Iterable[float], buckets: int = DEFAULT_COLOR_BUCKETS) -> QuantizeScale:
        """Scale whose domain is [0, max(values)]; an empty input gives a [0, 0] domain."""
        return cls(domain_max=max((float(v) for v in values), default=0.0), buckets=buckets)

    @property
    def thresholds(self) -> list[float]:
        """Interior bucket boundaries (buckets - 1 values); empty for a degenerate domain."""
        if self.domain_max <= 0:
            return []
        width = self.domain_max / self.buckets
        return [width * i for i in range(1, self.buckets)]

    def bucket(self, value: float) -> int:
        """Bucket index in [0, buckets - 1]; everything maps to 0 when domain_max <= 0."""
        if self.domain_max <= 0 or value <= 0:
            return 0
        idx = math.floor(value / self.domain_max * self.buckets)
        return min(max(idx, 0), self.buckets - 1)

    def extent(self, index: int) -> tuple[float, float]:
        """Value range [lo, hi) covered by a bucket."""
        if self.domain_max <= 0:
            return (0.0, 0.0)
        width = self.domain_max / self.buckets
        return (width * index, width * (index + 1))

    def label(self, index: int) -> str:
        """Legend label such as ``"1,000–2,000"``."""
        lo, hi = self.extent(index)
        return f"{lo:,.0f}–{hi:,.0f}"


def log_domain(values: Iterable[float], floor: float = 1.0) -> tuple[float, float]:
    """
    Domain for a log scale: smallest and largest value, both at least ``floor``.

    Examples:
        >>> log_domain([0, 5, 250])
        (1.0, 250.0)
        >>> log_domain([])
        (1.0, 1.0)
    """
    xs = [max(float(v), floor) for v in values]
    if not xs:
        return (floor, floor)
    return (min(xs), max(xs))


def log_edges(values: Iterable[float], bins: int, floor: float = 1.0) -> list[float]:
    """
    ``bins + 1`` edges evenly spaced in log10 over log_domain(values).

    A degenerate domain (all values equal after flooring) is widened by one decade
    so the histogram still has strictly ascending edges.

    Raises:
        ParameterError: If bins < 1.
    """
    if bins < 1:
        raise ParameterError(f"histogram needs at least one bin; got {bins}")
    lo, hi = log_domain(values, floor)
    a, b = math.log10(lo), math.log10(hi)
    if b <= a:
        b = a + 1.0
    step = (b - a) / bins
    edges = [10.0 ** (a + i * step) for i in range(bins + 1)]
    # Exact ends so the sample min and max fall inside the closed range.
    edges[0] = lo
    if hi > lo:
        edges[-1] = hi
    return edges
