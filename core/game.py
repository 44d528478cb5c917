"""
core/game.py — Input dispatch and display for Click Speed Test.

Game sits between pygame and the SessionController:
    - Routes mouse and keyboard events to controller operations
    - Forwards tick events to the ticker
    - Tracks keyboard focus (click button vs. duration chip)
    - Keeps the latest DisplayState (Game is the controller's display sink)
    - Runs the short press-feedback animation on the click button
    - Renders a frame from the above

Input rules:
    Mouse button 1 on CLICK!     → register_click()
    Space / Enter / keypad Enter → register_click(), unless the duration
                                   chip has focus
    Mouse on START               → start()
    Mouse on RESTART             → restart()
    Mouse on the duration chip   → focus chip, next duration, restart()
    Left / Right with chip focus → previous / next duration, restart()

The controller decides whether a click counts; Game never duplicates
state checks beyond what it needs for focus and feedback.

game.py does NOT call pygame.display.flip() or manage the window.
That is main.py's responsibility.
"""

from __future__ import annotations
import logging

import pygame

from core.controller import DisplayState, SessionController
from core.duration import DurationSelector
from core.storage import HighScoreStore
from core.timer import Ticker
from renderer import ui
from settings import PRESS_FEEDBACK_S

LOGGER = logging.getLogger(__name__)

_CLICK_KEYS = (pygame.K_SPACE, pygame.K_RETURN, pygame.K_KP_ENTER)

FOCUS_CLICK = "click"
FOCUS_CHIP  = "chip"


class Game:
    """Owns the controller and translates pygame events into game operations.

    Attributes:
        durations:   DurationSelector feeding the controller.
        ticker:      Ticker the controller schedules its countdown on.
        controller:  The SessionController.
        state:       Last DisplayState received from the controller.
        focus:       FOCUS_CLICK, FOCUS_CHIP or None.
        _press_left: Seconds of press feedback remaining on the click button.
    """

    def __init__(
        self,
        durations: DurationSelector,
        ticker:    Ticker,
        store:     HighScoreStore,
    ) -> None:
        """Build the controller and subscribe to its display updates."""
        self.durations = durations
        self.ticker    = ticker
        self.state:       DisplayState | None = None
        self.focus:       str | None          = None
        self._press_left: float               = 0.0
        self.controller = SessionController(durations, ticker, store, display=self)

    # ── Display sink ──────────────────────────────────────────────────────────

    def show(self, state: DisplayState) -> None:
        """Receive a snapshot from the controller."""
        self.state = state
        if not state.click_enabled and self.focus == FOCUS_CLICK:
            self.focus = None

    # ── Actions ───────────────────────────────────────────────────────────────

    def start(self) -> None:
        if self.controller.start():
            self.focus = FOCUS_CLICK

    def restart(self) -> None:
        self._press_left = 0.0
        self.controller.restart()

    def click(self) -> None:
        if self.controller.register_click():
            self._press_left = PRESS_FEEDBACK_S

    def change_duration(self, step: int) -> None:
        """Move the duration selection and reset the round to use it."""
        if step >= 0:
            seconds = self.durations.select_next()
        else:
            seconds = self.durations.select_previous()
        LOGGER.debug("duration changed to %ss", seconds)
        self.restart()

    # ── Per-frame update ──────────────────────────────────────────────────────

    def update(self, dt: float) -> None:
        """Advance local animation state by dt seconds.

        The countdown does not depend on dt; it is driven by the ticker.
        """
        if self._press_left > 0.0:
            self._press_left = max(0.0, self._press_left - dt)

    @property
    def pressed(self) -> bool:
        return self._press_left > 0.0

    # ── Event handling ────────────────────────────────────────────────────────

    def handle_event(self, event: pygame.event.Event) -> None:
        """Route one pygame event.

        Mouse positions are expected in native game coordinates.

        Args:
            event: A pygame event.
        """
        if self.ticker.handle_event(event):
            return

        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self._handle_mouse(event.pos)

        elif event.type == pygame.KEYDOWN:
            self._handle_key(event.key)

    def _handle_mouse(self, pos: tuple[int, int]) -> None:
        rects = ui.layout()

        if rects.click.collidepoint(pos):
            self.focus = FOCUS_CLICK if self.state and self.state.click_enabled else None
            self.click()

        elif rects.start.collidepoint(pos):
            self.focus = None
            self.start()

        elif rects.restart.collidepoint(pos):
            self.focus = None
            self.restart()

        elif rects.chip.collidepoint(pos):
            self.focus = FOCUS_CHIP
            self.change_duration(+1)

        else:
            # clicking empty space drops keyboard focus, like a page would
            self.focus = None

    def _handle_key(self, key: int) -> None:
        if self.focus == FOCUS_CHIP:
            if key == pygame.K_RIGHT:
                self.change_duration(+1)
            elif key == pygame.K_LEFT:
                self.change_duration(-1)
            elif key == pygame.K_ESCAPE:
                self.focus = None
            # Space/Enter belong to the focused chip; never counted as clicks
            return

        if key in _CLICK_KEYS:
            self.click()

    # ── Rendering ─────────────────────────────────────────────────────────────

    def render(self, surface: pygame.Surface) -> None:
        """Draw the current state onto the game surface."""
        state = self.state or self.controller.snapshot()
        ui.draw_screen(
            surface,
            state,
            duration_s=self.durations.current_duration(),
            focus=self.focus,
            pressed=self.pressed,
        )
