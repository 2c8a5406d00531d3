"""Utility helpers - errors, vector math and logging setup."""

from ribbontrack.utils.exceptions import (
    DegenerateParameterError,
    OutOfRangeQueryError,
    RibbonTrackError,
    UnknownPrefabError,
)
from ribbontrack.utils.logging import configure_logging

__all__ = [
    "RibbonTrackError",
    "UnknownPrefabError",
    "DegenerateParameterError",
    "OutOfRangeQueryError",
    "configure_logging",
]
