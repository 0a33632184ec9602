from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import streamlit as st

from conflictviz.io import EventSnapshot, Settings, load_boundary_names, load_snapshot

__all__ = [
    "CacheConfig",
    "load_settings",
    "load_event_snapshot",
    "load_canonical_names",
]

# ---------- Cache configuration (factory of cached callables) ----------


@dataclass(frozen=True)
class CacheConfig:
    """Hashable cache configuration for Streamlit @st.cache_data.

    Note: Streamlit's decorator parameters (ttl, persist) are fixed at decoration
    time. We build and memoize decorated callables per (name, ttl, persist) so the
    app can switch these at runtime while still benefiting from caching.
    """

    ttl: int | None = None
    persist: bool = False


# Registry of decorated functions by (loader_name, CacheConfig)
_CACHE_REGISTRY: dict[tuple[str, CacheConfig], Callable[..., Any]] = {}


def _get_cached(loader_name: str, cfg: CacheConfig, fn: Callable[..., Any]) -> Callable[..., Any]:
    key = (loader_name, cfg)
    if key in _CACHE_REGISTRY:
        return _CACHE_REGISTRY[key]
    if cfg.persist:
        wrapped = st.cache_data(persist="disk", ttl=cfg.ttl)(fn)
    else:
        wrapped = st.cache_data(ttl=cfg.ttl)(fn)
    _CACHE_REGISTRY[key] = wrapped
    return wrapped


# ---------- Loaders (internal implementations) ----------


def _load_snapshot_impl(settings: Settings) -> EventSnapshot:
    return load_snapshot(settings)


def _load_canonical_names_impl(boundary_path: str | None) -> tuple[str, ...]:
    return load_boundary_names(boundary_path)


# ---------- Public loader APIs (dispatch to cached implementations) ----------


def load_settings(data_dir: str | None = None, config_path: str | None = None) -> Settings:
    """Resolve settings (env > TOML > defaults), then let an explicit data_dir win.

    Raises:
        IoConfigError: If the resolved settings are contradictory.
    """
    s = Settings.load(config_path)
    if data_dir:
        s = Settings._apply_mapping(s, {"data_dir": data_dir})
    return s.validate()


def load_event_snapshot(settings: Settings, *, cfg: CacheConfig = CacheConfig()) -> EventSnapshot:
    fn = _get_cached("load_event_snapshot", cfg, _load_snapshot_impl)
    return fn(settings)  # type: ignore[no-any-return]


def load_canonical_names(
    boundary_path: str | None, *, cfg: CacheConfig = CacheConfig()
) -> tuple[str, ...]:
    """Canonical country names for the choropleth (bundled list when no path is set)."""
    fn = _get_cached("load_canonical_names", cfg, _load_canonical_names_impl)
    return fn(boundary_path)  # type: ignore[no-any-return]
