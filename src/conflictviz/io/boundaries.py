"""
Canonical entity names from a world-atlas TopoJSON file.

The choropleth's boundary geometry is fetched client-side by the chart renderer; the
Python side only needs the entity names for reconciliation. Without a local file the
bundled conflictviz.core.names.WORLD_ATLAS_NAMES are used.
"""

from __future__ import annotations

import json
import os
from typing import Any

from conflictviz.core.names import WORLD_ATLAS_NAMES

from .errors import IoReadError

__all__ = [
    "load_boundary_names",
]


def load_boundary_names(
    path: str | os.PathLike[str] | None = None, *, layer: str = "countries"
) -> tuple[str, ...]:
    """
    Read ``objects.<layer>.geometries[*].properties.name`` from a TopoJSON file.

    Args:
        path: TopoJSON path, or None for the bundled world-atlas 110m names.
        layer: Topology object holding the country geometries.

    Returns:
        tuple[str, ...]: Names in file order, duplicates and blanks removed.

    Raises:
        IoReadError: If the file is missing, not JSON, or lacks the layer.
    """
    if path is None:
        return WORLD_ATLAS_NAMES
    p = os.fspath(path)
    try:
        with open(p, encoding="utf-8") as fh:
            topo: dict[str, Any] = json.load(fh)
    except FileNotFoundError as exc:
        raise IoReadError(f"Boundary file not found: {p}") from exc
    except (OSError, json.JSONDecodeError) as exc:
        raise IoReadError(f"failed to read boundary file {p}: {exc}") from exc

    try:
        geometries = topo["objects"][layer]["geometries"]
    except (KeyError, TypeError) as exc:
        raise IoReadError(f"{p}: no '{layer}' geometries in topology") from exc

    names: list[str] = []
    seen: set[str] = set()
    for g in geometries:
        props = (g.get("properties") if isinstance(g, dict) else None) or {}
        name = str(props.get("name") or "").strip()
        if name and name not in seen:
            seen.add(name)
            names.append(name)
    return tuple(names)
