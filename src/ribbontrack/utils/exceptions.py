"""Custom exceptions for track generation and path queries."""


class RibbonTrackError(Exception):
    """Base exception for track generation errors."""


class UnknownPrefabError(RibbonTrackError, KeyError):
    """Raised when a piece name is not present in the prefab catalog."""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown segment prefab: {self.name!r}"


class DegenerateParameterError(RibbonTrackError, ValueError):
    """Raised when generation parameters or inputs cannot produce a track."""


class OutOfRangeQueryError(RibbonTrackError, ValueError):
    """Raised when a path query parameter lies outside ``[0, 1]``."""
