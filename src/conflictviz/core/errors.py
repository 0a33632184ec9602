"""
Core exception types raised by the analytical kernel.

The kernel degrades gracefully on degenerate *data* (unparsable numbers become 0,
empty samples yield None or all-zero curves, unresolved names yield 0). Exceptions
are reserved for invalid *call parameters*, which indicate a programming error in
the caller rather than a property of the loaded rows.

Notes:
    - This module uses only the Python standard library and has no side effects.

Examples:
    >>> from conflictviz.core.errors import ParameterError
    >>> from conflictviz.core.stats import quantile
    >>> try:
    ...     quantile([1.0, 2.0], 1.5)
    ... except ParameterError as e:
    ...     msg = str(e)
    >>> "[0, 1]" in msg
    True
"""

from __future__ import annotations

__all__ = [
    "ParameterError",
]


class ParameterError(ValueError):
    """Invalid call parameter (probability outside [0, 1], non-positive bandwidth, ...)."""
