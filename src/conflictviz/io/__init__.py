"""
conflictviz.io — Configuration and loading of the published country-year CSVs.

## Responsibilities
- Describe the four source files (conflictviz.io.datasets).
- Read them with Polars under the kernel's lenient numeric policy and turn them into
  immutable EventRecords.
- Bundle one load cycle into an EventSnapshot passed explicitly to every chart.
- Resolve configuration with precedence env > TOML > defaults.

## Public API
- Settings / ChartSettings — Configuration (defaults sourced from conflictviz.core.constants).
- EventSnapshot / load_snapshot — Immutable bundle of the four datasets.
- load_boundary_names — Canonical entity names for the choropleth.

## Import DAG discipline
- Depends only on stdlib, polars, and conflictviz.core.*.
- MUST NOT import higher layers: viz or app.

## Examples
```python
from conflictviz.io import Settings, load_snapshot

settings = Settings.load()  # doctest: +SKIP
snap = load_snapshot(settings)  # doctest: +SKIP
len(snap.fatalities)  # doctest: +SKIP
```
"""

from __future__ import annotations

from .boundaries import load_boundary_names
from .config import ChartSettings, Settings
from .snapshot import EventSnapshot, load_snapshot

__all__ = [
    "ChartSettings",
    "Settings",
    "EventSnapshot",
    "load_snapshot",
    "load_boundary_names",
]
