"""
conflictviz.viz — Altair chart builders over normalized event records.

## Responsibilities
- Turn kernel outputs (aggregates, quantile summaries, density curves, reconciled
  country values) into declarative Altair specs.
- Never aggregate on their own; every number shown comes from conflictviz.core.
- Degrade to a text placeholder chart on empty input instead of raising.

## Public API
- bars — Top countries, civilian vs combatant, 100% stacked regions, waffle.
- heatmap — Region x year heatmap.
- maps — World choropleth over reconciled country names.
- distributions — Histogram, ridgeline, violin and box plot over country-years.
- base — Frame conversion, schema checks, placeholders.
- theme — Shared palette.

## Import DAG discipline
- Depends on: conflictviz.core, polars, altair (and stdlib).
- Must not read files; data arrives as records from conflictviz.io.

## Examples
```python
from conflictviz.core.records import normalize_rows  # doctest: +SKIP
from conflictviz.viz.bars import bar_chart
records = normalize_rows([{"COUNTRY": "Iraq", "YEAR": "2020", "FATALITIES": "100"}], "FATALITIES")
bar_chart(records).to_dict()  # doctest: +SKIP
```
"""
