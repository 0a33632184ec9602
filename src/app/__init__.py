"""
Top-level Streamlit app package.

This package hosts the interactive conflict-event dashboard (Streamlit) decoupled
from the conflictviz.* library modules. Chart builders remain under
conflictviz.viz.*; the Streamlit UI shell and app-specific helpers live here.

CLI entrypoint (configured in pyproject.toml):
    conflictviz-app = app.main:main
"""
