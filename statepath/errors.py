"""Error types raised by statepath.

`CancelledError` is ordinary control flow (the host stopped a search);
everything else signals a caller mistake.
"""

from __future__ import annotations

from typing import Optional


class StatePathError(Exception):
    """Base class for all statepath errors."""


class NotFoundError(StatePathError):
    """A referenced start/end/intermediate state id is not in the snapshot."""

    def __init__(self, which: str, state_id: Optional[str]):
        self.which = which
        self.state_id = state_id
        super().__init__(f"{which.capitalize()} state not found: {state_id!r}")


class CancelledError(StatePathError):
    """A search observed its cancel token set and stopped.

    Not related to `asyncio.CancelledError`.
    """

    def __init__(self, message: str = "Search cancelled"):
        super().__init__(message)


class InvalidSearchError(StatePathError):
    """The combination of search options is not supported."""


class SnapshotError(StatePathError):
    """A states snapshot document could not be read."""
