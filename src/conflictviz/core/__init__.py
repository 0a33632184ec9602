"""
Analytical kernel for conflictviz (records, aggregation, quantiles, density, names).

## Contracts (single source of truth)
- Records — EventRecord row model and the lenient numeric parser.
- Aggregate — group-by-sum, curated region matching, chart-shaped aggregates.
- Stats — linear-interpolation quantiles, clamped Tukey fences, histograms.
- Density — fixed-bandwidth Epanechnikov KDE on a log10 grid.
- Names — alias + substring reconciliation onto boundary-dataset names.
- Scales — quantize color buckets and log-domain helpers.

## Notes
- Zero-IO policy: stdlib + pydantic only; no file/network IO.
- Degenerate data never raises: unparsable numbers are 0, empty samples give None
  or all-zero curves, unresolved names give 0. Only invalid call parameters raise
  errors.ParameterError.

## Downstream usage
- conflictviz.io — turns CSV rows into EventRecords and bundles them in an EventSnapshot.
- conflictviz.viz — formats kernel outputs into Altair chart specs.

## Examples
```python
from conflictviz.core.aggregate import group_sum
from conflictviz.core.records import EventRecord

rows = [
    EventRecord(country="Iraq", year=2020, metric=100),
    EventRecord(country="Iraq", year=2020, metric=50),
]
group_sum(rows, lambda r: r.country)  # {'Iraq': 150.0}
```
"""
