"""
core/controller.py — Session state machine for Click Speed Test.

SessionController owns the live Session and drives it through:

    IDLE     — waiting for start(); clicks ignored
    RUNNING  — ticker active, clicks counted
    ENDED    — clock hit zero (or end() was called); result computed

Transitions:
    IDLE     → RUNNING : start()
    RUNNING  → RUNNING : tick() while time remains, register_click()
    RUNNING  → ENDED   : tick() reaching zero, or end()
    any      → IDLE    : restart()

Every operation is total. Calls that do not apply to the current status
are no-ops, never errors. The controller's collaborators are injected so
nothing here touches pygame, the wall clock or the disk directly:

    durations — DurationSelector, read on start() and restart()
    ticker    — core/timer.py Ticker, the only background activity
    store     — HighScoreStore, read on start/end, written on a new best
    display   — anything with show(DisplayState); told about every change

The ticker is stopped on every path out of RUNNING: natural expiry,
explicit end() and restart().
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Protocol

from core.duration import DurationSelector
from core.session import Session, SessionResult, SessionStatus
from core.storage import HighScoreStore
from core.timer import Ticker
from settings import (
    TICK_MS,
    MSG_WELCOME, MSG_RUNNING, MSG_RESTART, MSG_TIMES_UP, MSG_NEW_HIGH, MSG_RESULT,
)

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class DisplayState:
    """Everything the screen needs, captured between two events."""
    remaining_text: str
    click_count:    int
    high_score:     int
    message:        str
    result_text:    str
    click_enabled:  bool
    status:         SessionStatus


class DisplaySink(Protocol):
    """Consumer of DisplayState snapshots. Never feeds back into state."""

    def show(self, state: DisplayState) -> None:
        ...


class SessionController:
    """Single owner of game state for one player.

    Attributes:
        session:     The current Session. Replaced on start() and restart().
        last_result: SessionResult of the most recent ended session, or None.
        _high_score: High score as last read from (or written to) the store.
        _message:    Current status line.
        _result:     Current result line ("" when no result is shown).
    """

    def __init__(
        self,
        durations: DurationSelector,
        ticker:    Ticker,
        store:     HighScoreStore,
        display:   DisplaySink | None = None,
        tick_ms:   int = TICK_MS,
    ) -> None:
        """Create the controller with a fresh IDLE session and show it."""
        self._durations = durations
        self._ticker    = ticker
        self._store     = store
        self._display   = display
        self._tick_ms   = tick_ms

        self.session:     Session              = Session(durations.current_duration())
        self.last_result: SessionResult | None = None
        self._high_score: int                  = store.read()
        self._message:    str                  = MSG_WELCOME
        self._result:     str                  = ""
        self._publish()

    # ── Reads ─────────────────────────────────────────────────────────────────

    @property
    def status(self) -> SessionStatus:
        return self.session.status

    @property
    def high_score(self) -> int:
        return self._high_score

    def snapshot(self) -> DisplayState:
        """Return the current display tuple."""
        return DisplayState(
            remaining_text=self.session.remaining_text(),
            click_count=self.session.click_count,
            high_score=self._high_score,
            message=self._message,
            result_text=self._result,
            click_enabled=self.session.is_running(),
            status=self.session.status,
        )

    # ── Transitions ───────────────────────────────────────────────────────────

    def start(self) -> bool:
        """Begin a new countdown from IDLE.

        Re-entrant calls while RUNNING are ignored, and ENDED requires a
        restart() first.

        Returns:
            True if a session was started.
        """
        if self.session.status is not SessionStatus.IDLE:
            LOGGER.debug("start ignored in %s", self.session.status.name)
            return False

        self.session = Session(self._durations.current_duration())
        self.session.begin()
        self._high_score = self._store.read()
        self._message = MSG_RUNNING
        self._result = ""

        self._ticker.start(self._tick_ms, self.tick)
        LOGGER.debug("session started: %.1fs", self.session.duration_seconds)
        self._publish()
        return True

    def register_click(self) -> bool:
        """Count one click if RUNNING.

        Returns:
            True if the click was counted.
        """
        if not self.session.count_click():
            return False
        self._publish()
        return True

    def tick(self) -> None:
        """Advance the countdown by one tick interval.

        Reaching zero ends the session; the last published time is
        always exactly "0.0".
        """
        if not self.session.is_running():
            return
        expired = self.session.advance(self._tick_ms)
        if expired:
            self.end()
        else:
            self._publish()

    def end(self) -> SessionResult | None:
        """Stop the countdown and score the session.

        Idempotent: returns None without side effects unless RUNNING.

        Returns:
            SessionResult with the final score and whether it beat the
            stored high score.
        """
        if not self.session.finish():
            return None
        self._ticker.stop()

        clicks = self.session.click_count
        previous = self._store.read()
        is_new_high = clicks > previous
        if is_new_high:
            self._store.write(clicks)
            self._high_score = clicks
        else:
            self._high_score = previous

        self._message = MSG_TIMES_UP.format(clicks=clicks)
        if is_new_high:
            self._message += MSG_NEW_HIGH
        self._result = MSG_RESULT.format(clicks=clicks)

        self.last_result = SessionResult(final_score=clicks, is_new_high_score=is_new_high)
        LOGGER.debug("session ended: score=%d previous=%d new_high=%s",
                     clicks, previous, is_new_high)
        self._publish()
        return self.last_result

    def restart(self) -> None:
        """Discard the current session and return to IDLE.

        Safe from any status, including mid-countdown. Re-reads the
        configured duration. Never writes the high score.
        """
        self._ticker.stop()
        self.session = Session(self._durations.current_duration())
        self._message = MSG_RESTART
        self._result = ""
        LOGGER.debug("session reset: %.1fs", self.session.duration_seconds)
        self._publish()

    # ── Internal ──────────────────────────────────────────────────────────────

    def _publish(self) -> None:
        if self._display is not None:
            self._display.show(self.snapshot())
