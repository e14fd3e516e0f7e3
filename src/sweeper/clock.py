"""
Elapsed-time clock and tick scheduling.

The core never reads wall time. A Ticker calls back once per interval
and the game advances its clock by one second on each call.
"""
import asyncio
import logging
from typing import Callable, Optional, Protocol

logger = logging.getLogger(__name__)

TickCallback = Callable[[], None]


# ============================================================================
# Game Clock
# ============================================================================

class GameClock:
    """Whole-second counter that only advances while running."""

    def __init__(self) -> None:
        self._elapsed = 0
        self._running = False

    @property
    def elapsed(self) -> int:
        return self._elapsed

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        self._running = True

    def stop(self) -> None:
        """Freeze the clock at its current value."""
        self._running = False

    def tick(self) -> int:
        """Advance by one second if running. Returns elapsed seconds."""
        if self._running:
            self._elapsed += 1
        return self._elapsed

    def reset(self) -> None:
        self._elapsed = 0
        self._running = False


# ============================================================================
# Tickers
# ============================================================================

class Ticker(Protocol):
    """Periodic callback source with at most one live schedule."""

    @property
    def active(self) -> bool:
        ...

    def start(self, callback: TickCallback) -> None:
        ...

    def cancel(self) -> None:
        ...


class AsyncioTicker:
    """
    Ticker driven by an asyncio event loop.

    Each tick re-arms a single `call_later` handle, so callbacks run on
    the loop thread and never overlap.
    """

    def __init__(
        self,
        interval: float = 1.0,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> None:
        """
        Initialize the ticker.

        Args:
            interval: Seconds between callbacks.
            loop: Event loop to schedule on (default: the running loop).
        """
        self.interval = interval
        self._loop = loop
        self._handle: Optional[asyncio.TimerHandle] = None
        self._callback: Optional[TickCallback] = None

    @property
    def active(self) -> bool:
        return self._handle is not None

    def start(self, callback: TickCallback) -> None:
        """Begin ticking. No-op while already active."""
        if self.active:
            return
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        self._callback = callback
        self._arm()
        logger.debug("Ticker started (interval=%.2fs)", self.interval)

    def cancel(self) -> None:
        if self._handle is None:
            return
        self._handle.cancel()
        self._handle = None
        self._callback = None
        logger.debug("Ticker cancelled")

    def _arm(self) -> None:
        self._handle = self._loop.call_later(self.interval, self._fire)

    def _fire(self) -> None:
        callback = self._callback
        self._arm()
        # The callback may cancel this ticker, which drops the new handle.
        callback()
