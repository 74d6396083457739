"""Debounced scheduling.

Timer abstraction used to rate-limit search input: only the last call
inside the quiescence window fires, earlier ones are cancelled.
"""

import asyncio
from collections.abc import Callable
from typing import Protocol


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Schedules callbacks after a delay. asyncio event loops satisfy this."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...


class AsyncioScheduler:
    """Scheduler backed by the running asyncio event loop."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        return asyncio.get_running_loop().call_later(delay, callback)


class Debouncer:
    """Runs only the most recently scheduled callback once input goes quiet.

    Example usage:
        debouncer = Debouncer(AsyncioScheduler(), delay=0.3)
        debouncer.schedule(lambda: apply_search("lab"))
        debouncer.schedule(lambda: apply_search("labial"))  # supersedes the first
    """

    def __init__(self, scheduler: Scheduler, delay: float) -> None:
        """Initialize debouncer.

        Args:
            scheduler: Timer source.
            delay: Quiescence window in seconds.
        """
        self._scheduler = scheduler
        self.delay = delay
        self._handle: TimerHandle | None = None
        self._callback: Callable[[], None] | None = None

    @property
    def pending(self) -> bool:
        return self._callback is not None

    def schedule(self, callback: Callable[[], None]) -> None:
        """Schedule callback, superseding any pending one."""
        self.cancel()
        self._callback = callback
        self._handle = self._scheduler.call_later(self.delay, self._fire)

    def cancel(self) -> None:
        """Drop the pending callback, if any."""
        if self._handle is not None:
            self._handle.cancel()
        self._handle = None
        self._callback = None

    def flush(self) -> bool:
        """Run the pending callback now.

        Returns:
            True if a callback was pending.
        """
        callback = self._callback
        self.cancel()
        if callback is None:
            return False
        callback()
        return True

    def _fire(self) -> None:
        callback = self._callback
        self._handle = None
        self._callback = None
        if callback is not None:
            callback()
