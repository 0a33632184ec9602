"""
Chart and kernel defaults for conflictviz.

Defines the numeric defaults consumed by the density estimator, the scale helpers,
and the configuration layer. This module is zero-IO and uses only the Python
standard library.

Notes:
    - conflictviz.io.config.Settings reads its defaults from here.
    - The year window matches the range shown by the published charts.
"""

from __future__ import annotations

__all__ = [
    "OTHER_REGION",
    "DEFAULT_BANDWIDTH",
    "DEFAULT_GRID_POINTS",
    "DEFAULT_COLOR_BUCKETS",
    "DEFAULT_HISTOGRAM_BINS",
    "DEFAULT_TOP_N",
    "DEFAULT_YEAR_MIN",
    "DEFAULT_YEAR_MAX",
    "WAFFLE_SQUARES",
    "WAFFLE_COLUMNS",
    "FENCE_FACTOR",
    "OTHER_FATALITY_DIVISOR",
    "WORLD_ATLAS_URL",
]

# Bucket for countries matched by no curated region list.
OTHER_REGION: str = "Other"

# Epanechnikov bandwidth in log10 units.
DEFAULT_BANDWIDTH: float = 0.25

# Number of abscissas in a density evaluation grid.
DEFAULT_GRID_POINTS: int = 60

# Discrete color buckets for the choropleth quantize scale.
DEFAULT_COLOR_BUCKETS: int = 9

DEFAULT_HISTOGRAM_BINS: int = 20

DEFAULT_TOP_N: int = 10

# Inclusive year window.
DEFAULT_YEAR_MIN: int = 2018
DEFAULT_YEAR_MAX: int = 2024

# Waffle grid: 100 squares on 10 columns.
WAFFLE_SQUARES: int = 100
WAFFLE_COLUMNS: int = 10

# Tukey whisker multiplier applied to the interquartile range.
FENCE_FACTOR: float = 1.5

# Fatalities are scaled down by this factor before they are compared with event counts
# in the stacked region shares.
OTHER_FATALITY_DIVISOR: float = 100.0

# Boundary TopoJSON the choropleth loads client-side (world-atlas 110m countries).
WORLD_ATLAS_URL: str = "https://cdn.jsdelivr.net/npm/world-atlas@2/countries-110m.json"
