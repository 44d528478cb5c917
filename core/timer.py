"""
core/timer.py — Repeating tick sources for Click Speed Test.

The session controller never reads the wall clock. It is handed a Ticker
and asks it to call back every TICK_MS milliseconds until told to stop.
Two implementations exist:

    PygameTicker  — production. Uses pygame.time.set_timer to post a
                    TICK_EVENT into the normal event queue, so ticks and
                    clicks are processed in arrival order by the same loop.
    ManualTicker  — tests. Time only moves when advance() is called.

Stopping is the important part: a ticker left running after a session
has ended keeps mutating the countdown. stop() must leave no pending
callback behind on either implementation.

Usage:
    ticker = PygameTicker()
    ticker.start(100, controller.tick)

    # in the main loop, for each event:
    if ticker.handle_event(event):
        continue

    ticker.stop()
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Callable

import pygame

TICK_EVENT = pygame.USEREVENT + 1

TickCallback = Callable[[], None]


class Ticker(ABC):
    """Cancellable repeating callback.

    Only one schedule is active at a time; start() on an active ticker
    replaces the previous schedule.
    """

    @abstractmethod
    def start(self, interval_ms: int, callback: TickCallback) -> None:
        """Begin calling callback every interval_ms milliseconds.

        Args:
            interval_ms: Positive tick period in milliseconds.
            callback:    Zero-argument callable invoked on each tick.
        """
        ...

    @abstractmethod
    def stop(self) -> None:
        """Cancel the schedule. Safe to call when already stopped."""
        ...

    @property
    @abstractmethod
    def active(self) -> bool:
        """True while a schedule is running."""
        ...

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Consume an event if it belongs to this ticker.

        Default implementation consumes nothing. Event-driven tickers
        override this.

        Returns:
            True if the event was a tick for this ticker.
        """
        return False


class PygameTicker(Ticker):
    """Ticker backed by pygame's timer thread posting TICK_EVENT.

    Attributes:
        _event_type: Event type posted on each tick.
        _callback:   Current tick callback, None when stopped.
    """

    def __init__(self, event_type: int = TICK_EVENT) -> None:
        self._event_type: int                 = event_type
        self._callback:   TickCallback | None = None

    def start(self, interval_ms: int, callback: TickCallback) -> None:
        if self._callback is not None:
            self.stop()
        self._callback = callback
        pygame.time.set_timer(self._event_type, interval_ms)

    def stop(self) -> None:
        if self._callback is None:
            return
        self._callback = None
        pygame.time.set_timer(self._event_type, 0)
        # ticks posted before cancellation would otherwise still arrive
        pygame.event.clear(self._event_type)

    @property
    def active(self) -> bool:
        return self._callback is not None

    def handle_event(self, event: pygame.event.Event) -> bool:
        if event.type != self._event_type:
            return False
        if self._callback is not None:
            self._callback()
        return True


class ManualTicker(Ticker):
    """Deterministic ticker for tests.

    advance() accumulates elapsed time and fires one callback per whole
    interval. Leftover time carries over to the next advance() call.

    Attributes:
        fired:  Total callbacks fired since construction.
        starts: Number of start() calls, to catch duplicate scheduling.
    """

    def __init__(self) -> None:
        self._interval_ms: int                 = 0
        self._callback:    TickCallback | None = None
        self._pending_ms:  int                 = 0
        self.fired:        int                 = 0
        self.starts:       int                 = 0

    def start(self, interval_ms: int, callback: TickCallback) -> None:
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {interval_ms}")
        self._interval_ms = interval_ms
        self._callback = callback
        self._pending_ms = 0
        self.starts += 1

    def stop(self) -> None:
        self._callback = None
        self._pending_ms = 0

    @property
    def active(self) -> bool:
        return self._callback is not None

    def advance(self, elapsed_ms: int) -> int:
        """Move time forward and fire any ticks that fall due.

        Stops early if a callback stops the ticker.

        Args:
            elapsed_ms: Milliseconds to advance.

        Returns:
            Number of callbacks fired by this call.
        """
        if self._callback is None:
            return 0
        self._pending_ms += elapsed_ms
        fired = 0
        while self._callback is not None and self._pending_ms >= self._interval_ms:
            self._pending_ms -= self._interval_ms
            self._callback()
            fired += 1
        self.fired += fired
        return fired
