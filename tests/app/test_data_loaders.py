from __future__ import annotations

from pathlib import Path

import pytest

from conflictviz.io.errors import IoConfigError

from app import data as app_data


def test_get_cached_memoizes_per_loader_and_config(monkeypatch) -> None:
    decorations = []

    def fake_cache_data(**kwargs):
        decorations.append(kwargs)

        def deco(fn):
            return fn

        return deco

    monkeypatch.setattr(app_data.st, "cache_data", fake_cache_data, raising=True)
    monkeypatch.setattr(app_data, "_CACHE_REGISTRY", {}, raising=True)

    def impl(x):
        return x

    a = app_data._get_cached("loader", app_data.CacheConfig(ttl=5), impl)
    b = app_data._get_cached("loader", app_data.CacheConfig(ttl=5), impl)
    c = app_data._get_cached("loader", app_data.CacheConfig(ttl=5, persist=True), impl)

    assert a is b
    assert c is impl
    assert decorations == [{"ttl": 5}, {"persist": "disk", "ttl": 5}]


def test_load_settings_explicit_data_dir_wins(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("CONFLICTVIZ_DATA_DIR", "from_env")
    assert app_data.load_settings().data_dir == "from_env"
    assert app_data.load_settings(data_dir="cli_dir").data_dir == "cli_dir"


def test_load_settings_validates(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("CONFLICTVIZ_YEAR_MIN", "2030")
    monkeypatch.setenv("CONFLICTVIZ_YEAR_MAX", "2020")
    with pytest.raises(IoConfigError):
        app_data.load_settings()


def test_load_canonical_names_uses_bundled_list(monkeypatch) -> None:
    monkeypatch.setattr(app_data.st, "cache_data", lambda **kw: (lambda fn: fn), raising=True)
    monkeypatch.setattr(app_data, "_CACHE_REGISTRY", {}, raising=True)
    names = app_data.load_canonical_names(None)
    assert "Myanmar" in names
