"""
Configuration for conflictviz.

Defines Settings, a frozen dataclass carrying where the source CSVs live and how
charts aggregate them. Defaults are sourced from conflictviz.core.constants (the
single source of truth) and from the dataset descriptors in conflictviz.io.datasets.

Precedence
- Environment (prefix CONFLICTVIZ_) > TOML > defaults.
- TOML search order: ./conflictviz.toml (a [data] and/or [charts] table, or top-level
  keys), then ./pyproject.toml under [tool.conflictviz].

Import DAG discipline
- Depends only on stdlib, conflictviz.core.constants and conflictviz.io.datasets.
- Does not import higher layers (viz, app).

Notes
- Unparsable values are ignored and the previous value is kept; contradictory values
  (e.g. year_min > year_max) are reported by Settings.validate().
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from conflictviz.core.constants import (
    DEFAULT_BANDWIDTH,
    DEFAULT_COLOR_BUCKETS,
    DEFAULT_GRID_POINTS,
    DEFAULT_HISTOGRAM_BINS,
    DEFAULT_TOP_N,
    DEFAULT_YEAR_MAX,
    DEFAULT_YEAR_MIN,
    WORLD_ATLAS_URL,
)

from .datasets import DatasetName, list_datasets
from .errors import IoConfigError

logger = logging.getLogger(__name__)

ENV_PREFIX = "CONFLICTVIZ_"


def _default_files() -> dict[str, str]:
    return {d.name.value: d.file_name for d in list_datasets()}


@dataclass(frozen=True)
class ChartSettings:
    """Aggregation and display settings shared by the chart builders.

    Notes:
        - year_min/year_max bound the grouped bar and heatmap (inclusive).
        - bandwidth and grid_points drive the KDE behind ridgelines and violins.
        - color_buckets is the number of quantize buckets on the choropleth.
    """

    year_min: int = DEFAULT_YEAR_MIN
    year_max: int = DEFAULT_YEAR_MAX
    top_n: int = DEFAULT_TOP_N
    bandwidth: float = DEFAULT_BANDWIDTH
    grid_points: int = DEFAULT_GRID_POINTS
    color_buckets: int = DEFAULT_COLOR_BUCKETS
    histogram_bins: int = DEFAULT_HISTOGRAM_BINS

    @property
    def years(self) -> list[int]:
        return list(range(self.year_min, self.year_max + 1))


@dataclass(frozen=True)
class Settings:
    """
    Runtime settings for loading source data and building charts.

    Attributes:
        data_dir (str): Directory holding the four source CSVs.
        files (dict[str, str]): Dataset name -> file name (relative to data_dir unless absolute).
        boundary_path (str | None): Optional local world-atlas TopoJSON; when unset the
            bundled canonical names are used.
        topology_url (str): TopoJSON URL the choropleth loads client-side.
        charts (ChartSettings): Nested chart settings.

    Examples:
        >>> from conflictviz.io import Settings
        >>> Settings(data_dir="data").path_for("fatalities").name.startswith("number_of")
        True
    """

    data_dir: str = "data"
    files: dict[str, str] = field(default_factory=_default_files)
    boundary_path: str | None = None
    topology_url: str = WORLD_ATLAS_URL
    charts: ChartSettings = field(default_factory=ChartSettings)

    def path_for(self, name: DatasetName | str) -> Path:
        """Resolved path of a dataset's CSV."""
        key = DatasetName(name).value
        p = Path(self.files.get(key) or _default_files()[key])
        return p if p.is_absolute() else Path(self.data_dir) / p

    def validate(self) -> Settings:
        """
        Check cross-field constraints and return self.

        Raises:
            IoConfigError: On an empty year window, non-positive bandwidth, or
                non-positive counts.
        """
        c = self.charts
        if c.year_min > c.year_max:
            raise IoConfigError(f"year_min ({c.year_min}) must be <= year_max ({c.year_max})")
        if not c.bandwidth > 0:
            raise IoConfigError(f"bandwidth must be positive; got {c.bandwidth}")
        for name in ("top_n", "grid_points", "color_buckets", "histogram_bins"):
            if getattr(c, name) < 1:
                raise IoConfigError(f"{name} must be >= 1; got {getattr(c, name)}")
        return self

    # Configuration loaders (env/TOML) with precedence: env > TOML > defaults.

    @classmethod
    def _apply_mapping(cls, base: Settings, cfg: dict[str, Any] | None) -> Settings:
        """Apply a loose config mapping onto Settings, returning a new instance."""
        if not isinstance(cfg, dict):
            return base

        s = base

        if "data_dir" in cfg and isinstance(cfg["data_dir"], str):
            s = replace(s, data_dir=cfg["data_dir"])
        if "boundary_path" in cfg and isinstance(cfg["boundary_path"], str):
            s = replace(s, boundary_path=cfg["boundary_path"] or None)
        if "topology_url" in cfg and isinstance(cfg["topology_url"], str):
            s = replace(s, topology_url=cfg["topology_url"])

        # files (nested mapping, unknown dataset names ignored)
        if "files" in cfg and isinstance(cfg["files"], dict):
            files = dict(s.files)
            for k, v in cfg["files"].items():
                if k in files and isinstance(v, str) and v:
                    files[k] = v
            s = replace(s, files=files)

        # charts (nested mapping)
        if "charts" in cfg and isinstance(cfg["charts"], dict):
            curr = s.charts
            updates: dict[str, Any] = {}
            for name in ("year_min", "year_max", "top_n", "grid_points", "color_buckets", "histogram_bins"):
                if name in cfg["charts"]:
                    try:
                        updates[name] = int(cfg["charts"][name])
                    except (TypeError, ValueError):
                        logger.debug("ignoring unparsable charts.%s=%r", name, cfg["charts"][name])
            if "bandwidth" in cfg["charts"]:
                try:
                    updates["bandwidth"] = float(cfg["charts"]["bandwidth"])
                except (TypeError, ValueError):
                    logger.debug("ignoring unparsable charts.bandwidth=%r", cfg["charts"]["bandwidth"])
            s = replace(s, charts=replace(curr, **updates))

        return s

    @classmethod
    def from_env(cls, base: Settings | None = None, prefix: str = ENV_PREFIX) -> Settings:
        """
        Build Settings from environment variables. Precedence is env > base (if provided) > defaults.

        Recognized variables:
            - CONFLICTVIZ_DATA_DIR
            - CONFLICTVIZ_BOUNDARY_PATH
            - CONFLICTVIZ_TOPOLOGY_URL
            - CONFLICTVIZ_FILE_<DATASET> (e.g. CONFLICTVIZ_FILE_FATALITIES)
            - CONFLICTVIZ_YEAR_MIN, CONFLICTVIZ_YEAR_MAX, CONFLICTVIZ_TOP_N
            - CONFLICTVIZ_BANDWIDTH, CONFLICTVIZ_GRID_POINTS
            - CONFLICTVIZ_COLOR_BUCKETS, CONFLICTVIZ_HISTOGRAM_BINS
        """
        s = base or cls()

        def get(name: str) -> str | None:
            return os.getenv(prefix + name)

        mapping: dict[str, Any] = {}
        for key in ("data_dir", "boundary_path", "topology_url"):
            v = get(key.upper())
            if v:
                mapping[key] = v
        for d in DatasetName:
            v = get("FILE_" + d.value.upper())
            if v:
                mapping.setdefault("files", {})[d.value] = v
        for key in (
            "year_min",
            "year_max",
            "top_n",
            "bandwidth",
            "grid_points",
            "color_buckets",
            "histogram_bins",
        ):
            v = get(key.upper())
            if v:
                mapping.setdefault("charts", {})[key] = v

        return cls._apply_mapping(s, mapping)

    @classmethod
    def from_toml(cls, path: str | os.PathLike[str] | None = None) -> Settings:
        """
        Build Settings from a TOML file.

        Search order when `path` is None:
            1) ./conflictviz.toml ([data] and [charts] tables, or top-level keys)
            2) ./pyproject.toml under [tool.conflictviz]

        Returns defaults if no file is present or a candidate fails to parse.
        """
        s = cls()

        def _load_toml(p: Path) -> dict[str, Any] | None:
            try:
                with p.open("rb") as fh:
                    return tomllib.load(fh)
            except (OSError, tomllib.TOMLDecodeError) as exc:
                logger.warning("could not read config %s: %s", p, exc)
                return None

        cand: list[Path] = []
        if path is not None:
            cand.append(Path(path))
        else:
            cand.append(Path.cwd() / "conflictviz.toml")
            cand.append(Path.cwd() / "pyproject.toml")

        cfg: dict[str, Any] | None = None
        for p in cand:
            if not p.exists():
                continue
            data = _load_toml(p)
            if not isinstance(data, dict):
                continue
            if p.name == "pyproject.toml":
                tool = data.get("tool", {})
                top = tool.get("conflictviz", {}) if isinstance(tool, dict) else {}
            else:
                top = data
            if not isinstance(top, dict):
                continue
            # Accept a [data] table alongside [charts], or flat top-level keys.
            flat = dict(top.get("data", {})) if isinstance(top.get("data"), dict) else {}
            flat.update({k: v for k, v in top.items() if k != "data"})
            cfg = flat
            if cfg:
                break

        return cls._apply_mapping(s, cfg)

    @classmethod
    def load(cls, path: str | os.PathLike[str] | None = None) -> Settings:
        """
        Load Settings applying precedence: environment > TOML > defaults.

        Args:
            path: Optional explicit TOML path. If None, search defaults
                (conflictviz.toml, pyproject.toml).

        Returns:
            Settings
        """
        s = cls.from_toml(path)
        s = cls.from_env(base=s)
        return s
