"""
Frozen descriptors for the published country-year source files.

Notes:
    - Each descriptor names a dataset, its default file name under the data
      directory, and the metric column ("FATALITIES" or "EVENTS").
    - Required columns are always COUNTRY, YEAR and the metric column.
    - Descriptors are zero-IO; conflictviz.io.read materializes them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

__all__ = [
    "DatasetName",
    "DatasetSpec",
    "COUNTRY_COLUMN",
    "YEAR_COLUMN",
    "FATALITIES_DESC",
    "CIVILIAN_FATALITIES_DESC",
    "EVENTS_TARGETING_CIVILIANS_DESC",
    "DEMONSTRATION_EVENTS_DESC",
    "get_dataset",
    "list_datasets",
]

COUNTRY_COLUMN = "COUNTRY"
YEAR_COLUMN = "YEAR"


class DatasetName(StrEnum):
    """Canonical dataset identifiers (lower_snake; also the EventSnapshot field names)."""

    FATALITIES = "fatalities"
    CIVILIAN_FATALITIES = "civilian_fatalities"
    EVENTS_TARGETING_CIVILIANS = "events_targeting_civilians"
    DEMONSTRATION_EVENTS = "demonstration_events"


@dataclass(frozen=True)
class DatasetSpec:
    """
    Frozen descriptor for one source CSV.

    Attributes:
        name (DatasetName): Canonical identifier.
        file_name (str): Default file name under the data directory.
        metric_column (str): Column parsed into EventRecord.metric.
        label (str): Human-readable label used in chart legends.

    Examples:
        >>> get_dataset(DatasetName.FATALITIES).required
        ('COUNTRY', 'YEAR', 'FATALITIES')
    """

    name: DatasetName
    file_name: str
    metric_column: str
    label: str

    @property
    def required(self) -> tuple[str, ...]:
        return (COUNTRY_COLUMN, YEAR_COLUMN, self.metric_column)


FATALITIES_DESC = DatasetSpec(
    name=DatasetName.FATALITIES,
    file_name="number_of_reported_fatalities_by_country-year_as-of-24Oct2025_0.csv",
    metric_column="FATALITIES",
    label="Reported fatalities",
)

CIVILIAN_FATALITIES_DESC = DatasetSpec(
    name=DatasetName.CIVILIAN_FATALITIES,
    file_name="number_of_reported_civilian_fatalities_by_country-year_as-of-24Oct2025_0.csv",
    metric_column="FATALITIES",
    label="Reported civilian fatalities",
)

EVENTS_TARGETING_CIVILIANS_DESC = DatasetSpec(
    name=DatasetName.EVENTS_TARGETING_CIVILIANS,
    file_name="number_of_events_targeting_civilians_by_country-year_as-of-24Oct2025_0.csv",
    metric_column="EVENTS",
    label="Events targeting civilians",
)

DEMONSTRATION_EVENTS_DESC = DatasetSpec(
    name=DatasetName.DEMONSTRATION_EVENTS,
    file_name="number_of_demonstration_events_by_country-year_as-of-24Oct2025_0.csv",
    metric_column="EVENTS",
    label="Demonstration events",
)

_REGISTRY: dict[DatasetName, DatasetSpec] = {
    d.name: d
    for d in (
        FATALITIES_DESC,
        CIVILIAN_FATALITIES_DESC,
        EVENTS_TARGETING_CIVILIANS_DESC,
        DEMONSTRATION_EVENTS_DESC,
    )
}


def get_dataset(name: DatasetName | str) -> DatasetSpec:
    """Return the descriptor for a dataset name (enum or lower_snake string)."""
    return _REGISTRY[DatasetName(name)]


def list_datasets() -> list[DatasetSpec]:
    """All descriptors in snapshot field order."""
    return list(_REGISTRY.values())
