"""Cooperative cancellation and yield points for long-running searches."""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

from ..errors import CancelledError

ProgressCallback = Callable[[float], Any]


@dataclass
class CancelToken:
    """Shared mutable flag; the host sets `cancelled` to stop a search."""

    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


def raise_if_cancelled(token: Optional[Any]) -> None:
    """Accepts any object with a `cancelled` attribute (or None)."""
    if token is not None and getattr(token, "cancelled", False):
        raise CancelledError()


class Checkpoint:
    """
    Time-throttled yield point.

    `due()` becomes true once `interval` seconds have passed since the last
    `mark()`; callers report progress and then `await pause()`, which hands
    control back to the event loop so cancellation can be observed.
    """

    def __init__(self, interval: float, on_progress: Optional[ProgressCallback] = None):
        self.interval = interval
        self.on_progress = on_progress
        self._last = time.monotonic()
        self._reported = 0.0

    def due(self) -> bool:
        return time.monotonic() - self._last > self.interval

    def mark(self) -> None:
        self._last = time.monotonic()

    def report(self, percent: float) -> None:
        """Forward progress, clamped to [0, 100] and never decreasing."""
        value = min(max(float(percent), self._reported), 100.0)
        self._reported = value
        if self.on_progress is not None:
            self.on_progress(value)

    async def pause(self) -> None:
        self.mark()
        await asyncio.sleep(0)
