"""Periodic timer raced against a cancellation event."""

import logging

import anyio

logger = logging.getLogger("glint.realtime")


class Ticker:
    """Fires every ``interval`` seconds until stopped.

    ``wait()`` suspends until the next deadline or until *cancelled* is
    set, whichever comes first, and reports which one won. Cancellation
    always wins: if the event is set by the time the sleep ends, the tick
    is dropped. Ticks missed by a slow consumer are skipped rather than
    delivered in a burst.
    """

    __slots__ = ("_deadline", "_stopped", "interval")

    def __init__(self, interval: float) -> None:
        if interval <= 0:
            msg = f"Ticker interval must be positive, got {interval!r}"
            raise ValueError(msg)
        self.interval = interval
        self._deadline: float | None = None
        self._stopped = False

    @property
    def stopped(self) -> bool:
        return self._stopped

    async def wait(self, cancelled: anyio.Event) -> bool:
        """Return True when a tick fires, False when cancelled or stopped."""
        if self._stopped or cancelled.is_set():
            return False
        now = anyio.current_time()
        if self._deadline is None:
            self._deadline = now + self.interval
        with anyio.move_on_after(max(0.0, self._deadline - now)):
            await cancelled.wait()
        if cancelled.is_set() or self._stopped:
            return False
        now = anyio.current_time()
        self._deadline += self.interval
        if self._deadline <= now:
            self._deadline = now + self.interval
        return True

    def stop(self) -> None:
        """Release the timer. Safe to call more than once."""
        if self._stopped:
            return
        self._stopped = True
        logger.debug("Ticker stopped (interval=%ss)", self.interval)
