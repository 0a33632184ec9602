"""
Conflict-event app UI package.

This package contains the Streamlit UI for the conflict-event dashboard. It exposes
the page orchestrator and small helpers.

Modules:
    - app: Streamlit application orchestrator (streamlit_app).
    - helpers: Small cross-cutting helpers (KPIs, number formatting).

Usage:
    from app.ui import streamlit_app
    streamlit_app(data_dir="data")
"""

from __future__ import annotations

from .app import streamlit_app

__all__ = [
    "streamlit_app",
]
