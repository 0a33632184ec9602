from __future__ import annotations

import os
from pathlib import Path

import pytest

from app import main as app_main


def test_main_renders_inline(monkeypatch, tmp_path) -> None:
    called = {}

    def fake_streamlit_app(*, data_dir=None, config_path=None):
        called["data_dir"] = data_dir
        called["config_path"] = config_path

    monkeypatch.setenv("STREAMLIT_SERVER_PORT", "1")
    # Patch the imported symbol used inside app.main (not the package attribute)
    monkeypatch.setattr(app_main, "streamlit_app", fake_streamlit_app, raising=True)

    app_main.main(["--data-dir", str(tmp_path), "--config", "conflictviz.toml"])

    assert called["data_dir"] == str(tmp_path)
    assert called["config_path"] == "conflictviz.toml"


def test_main_execs_streamlit(monkeypatch, tmp_path) -> None:
    # Ensure not in Streamlit context
    monkeypatch.delenv("STREAMLIT_SERVER_PORT", raising=False)

    captured = {}

    def fake_execv(exe: str, cmd: list[str]) -> None:
        captured["exe"] = exe
        captured["cmd"] = cmd
        # Prevent process handoff
        raise SystemExit

    monkeypatch.setattr(os, "execv", fake_execv, raising=True)

    with pytest.raises(SystemExit):
        app_main.main(["--data-dir", str(tmp_path)])

    assert captured["cmd"][0] == captured["exe"]
    # Assert we launch `python -m streamlit run <path>`
    assert captured["cmd"][1:4] == ["-m", "streamlit", "run"]
    expected_main_path = str(Path(app_main.__file__).resolve())
    assert captured["cmd"][4] == expected_main_path
    # Passthrough args present after `--`
    dashdash_idx = captured["cmd"].index("--")
    assert captured["cmd"][dashdash_idx + 1 :] == ["--data-dir", str(tmp_path)]


def test_main_without_options_passes_nothing_through(monkeypatch) -> None:
    monkeypatch.delenv("STREAMLIT_SERVER_PORT", raising=False)
    captured = {}

    def fake_execv(exe: str, cmd: list[str]) -> None:
        captured["cmd"] = cmd
        raise SystemExit

    monkeypatch.setattr(os, "execv", fake_execv, raising=True)

    with pytest.raises(SystemExit):
        app_main.main([])

    assert "--" not in captured["cmd"]


def test_main_falls_back_to_subprocess_when_execv_fails(monkeypatch) -> None:
    monkeypatch.delenv("STREAMLIT_SERVER_PORT", raising=False)
    ran = {}

    def failing_execv(exe: str, cmd: list[str]) -> None:
        raise OSError("exec format error")

    def fake_run(cmd, check=False):
        ran["cmd"] = cmd
        ran["check"] = check

    monkeypatch.setattr(os, "execv", failing_execv, raising=True)
    monkeypatch.setattr(app_main.subprocess, "run", fake_run, raising=True)

    app_main.main(["--config", "x.toml"])

    assert ran["cmd"][-2:] == ["--config", "x.toml"]
    assert ran["check"] is False
