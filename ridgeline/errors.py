"""Exception types raised by Ridgeline."""

from __future__ import annotations


class RidgelineError(Exception):
    """Base class for Ridgeline errors."""


class TrackNotFoundError(RidgelineError, KeyError):
    def __init__(self, track_id: str) -> None:
        super().__init__(track_id)
        self.track_id = track_id

    def __str__(self) -> str:
        return f"Unknown track id: {self.track_id!r}"


class GroupNotFoundError(RidgelineError, KeyError):
    def __init__(self, group_id: str) -> None:
        super().__init__(group_id)
        self.group_id = group_id

    def __str__(self) -> str:
        return f"Unknown group id: {self.group_id!r}"


class InvalidColorError(RidgelineError, ValueError):
    """A color string could not be parsed into an RGB value."""


class LibraryFormatError(RidgelineError, ValueError):
    """A library file is not valid JSON or has the wrong shape."""


class FormClosedError(RidgelineError):
    """An edit form was asked to commit after it had already closed."""
