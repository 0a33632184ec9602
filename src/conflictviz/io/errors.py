"""
Custom exceptions for the conflictviz.io module.

Purpose
- Provide IO-layer error types, distinct from conflictviz.core.errors (which only
  covers invalid kernel parameters).
- conflictviz.io raises Io* errors for configuration, file and schema concerns:
  - IoConfigError: invalid or contradictory configuration.
  - IoReadError: a source file is missing or unreadable.
  - IoSchemaError: a source file lacks a required column.

Notes
- Row-level garbage (non-numeric cells) is not an error: it is coerced to 0 under the
  kernel's lenient parsing policy.
- These exceptions do not perform any IO and are stdlib-only.
"""

from __future__ import annotations


class IoError(Exception):
    """
    Base class for IO-related errors in conflictviz.io.

    Notes:
        Use this as a catch-all for load failures; the dashboard reports it and stops.
    """


class IoConfigError(IoError):
    """
    Raised when configuration is invalid.

    Examples:
        - year_min greater than year_max
        - non-positive bandwidth or bucket count
    """


class IoReadError(IoError):
    """Raised when a source CSV (or boundary file) is missing or cannot be parsed."""


class IoSchemaError(IoError):
    """
    Raised when a source CSV lacks a column required by its DatasetSpec.

    Notes:
        Only column presence is enforced; cell values are coerced leniently.
    """
