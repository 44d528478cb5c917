"""
core/session.py — Per-round state for Click Speed Test.

Session tracks the mutable data of one play-through:
    - Selected duration (fixed once the session exists)
    - Remaining time
    - Click count
    - Status (idle, running, ended)

Session does NOT own the ticker, the high score, or any rendering.
It is a pure data container with guarded transition methods; every
method is a no-op outside the status it applies to, so callers never
need to check first.

controller.py is the sole caller. A fresh Session is created on start
and on restart; an old one is never revived.

Usage:
    session = Session(duration_s=5)
    session.begin()

    # on each click:
    session.count_click()

    # on each tick:
    if session.advance(100):
        # time ran out
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, auto


class SessionStatus(Enum):
    """Lifecycle states of a single session."""
    IDLE    = auto()
    RUNNING = auto()
    ENDED   = auto()


@dataclass(frozen=True)
class SessionResult:
    """Outcome of a session that reached ENDED."""
    final_score: int
    is_new_high_score: bool


class Session:
    """Mutable state for one play-through.

    Time is kept in whole milliseconds so that repeated fixed-size ticks
    land exactly on zero instead of drifting through float error.

    Attributes:
        duration_ms:  Total time allowed, in milliseconds.
        remaining_ms: Time left, in [0, duration_ms].
        click_count:  Accepted clicks so far.
        status:       Current SessionStatus.
    """

    def __init__(self, duration_s: float) -> None:
        """Create an idle session with a full clock and zero clicks.

        Args:
            duration_s: Positive duration in seconds. Callers are expected
                        to have validated it (see core/duration.py).
        """
        self.duration_ms:  int           = round(duration_s * 1000)
        self.remaining_ms: int           = self.duration_ms
        self.click_count:  int           = 0
        self.status:       SessionStatus = SessionStatus.IDLE

    # ── Transitions ───────────────────────────────────────────────────────────

    def begin(self) -> bool:
        """Move IDLE → RUNNING. Returns False from any other status."""
        if self.status is not SessionStatus.IDLE:
            return False
        self.status = SessionStatus.RUNNING
        return True

    def count_click(self) -> bool:
        """Add one click if running.

        Returns:
            True if the click was counted.
        """
        if self.status is not SessionStatus.RUNNING:
            return False
        self.click_count += 1
        return True

    def advance(self, elapsed_ms: int) -> bool:
        """Take elapsed_ms off the clock, clamping at zero.

        Does not change status; the controller decides what expiry means.

        Args:
            elapsed_ms: Milliseconds to subtract. Typically TICK_MS.

        Returns:
            True if the clock is at zero after this call (and was running).
        """
        if self.status is not SessionStatus.RUNNING:
            return False
        self.remaining_ms = max(0, self.remaining_ms - elapsed_ms)
        return self.remaining_ms == 0

    def finish(self) -> bool:
        """Move RUNNING → ENDED. Returns False if not running."""
        if self.status is not SessionStatus.RUNNING:
            return False
        self.status = SessionStatus.ENDED
        return True

    # ── Convenience reads ─────────────────────────────────────────────────────

    @property
    def duration_seconds(self) -> float:
        return self.duration_ms / 1000

    @property
    def remaining_seconds(self) -> float:
        return self.remaining_ms / 1000

    def remaining_text(self) -> str:
        """Return remaining seconds with exactly one decimal, e.g. "4.3"."""
        return f"{self.remaining_seconds:.1f}"

    def is_running(self) -> bool:
        return self.status is SessionStatus.RUNNING
