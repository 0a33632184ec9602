"""
Immutable snapshot of the four source datasets.

Every chart reads from one EventSnapshot instead of a shared mutable "loaded data"
object. A refresh builds a new snapshot; nothing mutates an existing one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from conflictviz.core.records import EventRecord

from .config import Settings
from .datasets import DatasetName, get_dataset
from .read import read_records

__all__ = [
    "EventSnapshot",
    "load_snapshot",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EventSnapshot:
    """
    Records of the four published datasets for one load cycle.

    Attributes:
        fatalities: Reported fatalities by country-year.
        civilian_fatalities: Reported civilian fatalities by country-year.
        events_targeting_civilians: Events targeting civilians by country-year.
        demonstration_events: Demonstration events by country-year.
    """

    fatalities: tuple[EventRecord, ...] = ()
    civilian_fatalities: tuple[EventRecord, ...] = ()
    events_targeting_civilians: tuple[EventRecord, ...] = ()
    demonstration_events: tuple[EventRecord, ...] = ()

    def get(self, name: DatasetName | str) -> tuple[EventRecord, ...]:
        """Records of one dataset by canonical name."""
        return getattr(self, DatasetName(name).value)

    @property
    def is_empty(self) -> bool:
        return not any(self.get(d) for d in DatasetName)

    def years(self) -> list[int]:
        """Sorted distinct years across all datasets."""
        return sorted({r.year for d in DatasetName for r in self.get(d)})

    def countries(self) -> list[str]:
        """Sorted distinct country names across all datasets."""
        return sorted({r.country for d in DatasetName for r in self.get(d)})


def load_snapshot(settings: Settings) -> EventSnapshot:
    """
    Load all four datasets named by the settings.

    Raises:
        IoReadError: If any file is missing or unreadable (the message names the file).
        IoSchemaError: If any file lacks a required column.
    """
    loaded = {d.value: read_records(settings.path_for(d), get_dataset(d)) for d in DatasetName}
    snap = EventSnapshot(**loaded)
    logger.info(
        "snapshot loaded from %s: %s",
        settings.data_dir,
        ", ".join(f"{k}={len(v)}" for k, v in loaded.items()),
    )
    return snap
