"""
Conflict-event app entrypoint.

This module provides the CLI entrypoint to launch the Streamlit UI. It defers
all UI composition to the app.ui package and exists solely to start Streamlit
programmatically or render directly when already running under Streamlit.

Usage:
    - Python execution (hands process to Streamlit):
        python -m app.main --data-dir data --config conflictviz.toml

    - Streamlit direct:
        streamlit run src/app/main.py -- --data-dir data
"""

from __future__ import annotations

import argparse
import logging
import os
import subprocess
import sys
from pathlib import Path

from app.ui import streamlit_app

logger = logging.getLogger(__name__)


def _build_parser(add_help: bool = True) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Conflict-event Streamlit App", add_help=add_help)
    parser.add_argument(
        "--data-dir",
        default=None,
        help="Directory holding the source CSVs (overrides CONFLICTVIZ_DATA_DIR and TOML).",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Explicit TOML config path (default: ./conflictviz.toml or [tool.conflictviz]).",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Console entrypoint that launches Streamlit with the dashboard UI.

    If already executing within a Streamlit server (environment variable
    STREAMLIT_SERVER_PORT is set), this function renders the app directly.
    Otherwise, it execs "python -m streamlit run <this_module>" to leverage
    Streamlit's reloader and argument parsing, passing through any supported
    options after "--".

    Args:
        argv (list[str] | None): Optional list of CLI arguments. If None,
            sys.argv[1:] is used.

    Examples:
        python -m app.main --data-dir data
        streamlit run src/app/main.py -- --data-dir data
    """
    args = list(sys.argv[1:] if argv is None else argv)
    ns = _build_parser().parse_args(args)

    # If invoked within Streamlit, just render
    if os.environ.get("STREAMLIT_SERVER_PORT"):
        streamlit_app(data_dir=ns.data_dir, config_path=ns.config)
        return

    # Otherwise, exec streamlit run on this module to take over the process
    app_path = Path(__file__).resolve()
    cmd = [sys.executable, "-m", "streamlit", "run", str(app_path)]

    passthrough: list[str] = []
    if ns.data_dir:
        passthrough += ["--data-dir", ns.data_dir]
    if ns.config:
        passthrough += ["--config", ns.config]
    if passthrough:
        cmd += ["--"] + passthrough

    try:
        os.execv(sys.executable, cmd)
    except OSError as exc:
        logger.warning("execv failed (%s); running streamlit as a subprocess", exc)
        subprocess.run(cmd, check=False)


if __name__ == "__main__":
    # Support: --data-dir, --config after '--' when using `streamlit run`
    ns, _ = _build_parser(add_help=False).parse_known_args(sys.argv[1:])
    streamlit_app(data_dir=ns.data_dir, config_path=ns.config)
