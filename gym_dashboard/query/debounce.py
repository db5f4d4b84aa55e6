"""Cancellable quiet-period timer used for search-as-you-type."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Optional

# schedule(delay, fn) -> handle with .stop() (Textual Timer) or .cancel() (asyncio TimerHandle)
Scheduler = Callable[[float, Callable[[], None]], Any]


def asyncio_scheduler(delay: float, fn: Callable[[], None]) -> asyncio.TimerHandle:
    return asyncio.get_running_loop().call_later(delay, fn)


def _stop(handle: Any) -> None:
    stop = getattr(handle, "stop", None)
    if stop is not None:
        stop()
    else:
        handle.cancel()


class Debouncer:
    """
    Arms on every `trigger`, cancelling whatever was pending, and calls
    `callback` with the last arguments once `delay` seconds pass quietly.
    """

    def __init__(self, delay: float, callback: Callable[..., None], schedule: Optional[Scheduler] = None):
        self.delay = delay
        self.callback = callback
        self._schedule = schedule or asyncio_scheduler
        self._handle: Any = None
        self._args: tuple = ()

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def trigger(self, *args: Any) -> None:
        self.cancel()
        self._args = args
        self._handle = self._schedule(self.delay, self._fire)

    def cancel(self) -> None:
        if self._handle is not None:
            _stop(self._handle)
            self._handle = None

    def flush(self) -> None:
        """Fire now if something is pending (Enter in the search box)."""
        if self._handle is not None:
            self.cancel()
            self.callback(*self._args)

    def _fire(self) -> None:
        self._handle = None
        self.callback(*self._args)
