"""
core/duration.py — Round duration selection for Click Speed Test.

The duration is chosen before a session starts and read by the
controller on start() and restart(). Bad input never reaches the
session: anything that is not a finite number of at least one
millisecond becomes DEFAULT_DURATION_S.

Usage:
    selector = DurationSelector()
    selector.select_next()
    seconds = selector.current_duration()
"""

from __future__ import annotations
import logging
import math

from settings import DEFAULT_DURATION_S, DURATION_CHOICES

LOGGER = logging.getLogger(__name__)


def parse_duration(raw: object, default: float = DEFAULT_DURATION_S) -> float:
    """Convert a user- or config-supplied value to a duration in seconds.

    Args:
        raw:     Anything: a number, a numeric string, None, garbage.
        default: Value returned when raw is not finite or rounds to less
                 than one millisecond.

    Returns:
        The parsed duration, or default.
    """
    if isinstance(raw, bool):
        value = math.nan
    else:
        try:
            value = float(raw)   # type: ignore[arg-type]
        except (TypeError, ValueError):
            value = math.nan

    # Session clocks run in whole milliseconds
    if not math.isfinite(value * 1000) or round(value * 1000) < 1:
        LOGGER.debug("invalid duration %r; using %ss", raw, default)
        return float(default)
    return value


class DurationSelector:
    """Ordered list of durations with one current selection.

    Attributes:
        _choices: Sorted tuple of selectable durations in seconds.
        _index:   Index of the current selection in _choices.
    """

    def __init__(self, choices=DURATION_CHOICES, initial: object = None) -> None:
        """Build the selector.

        Args:
            choices: Iterable of durations. Invalid entries are dropped; an
                     empty result falls back to (DEFAULT_DURATION_S,).
            initial: Optional starting value, parsed like user input. When
                     omitted the default duration is selected if present,
                     otherwise the first choice.
        """
        cleaned = {parse_duration(c, default=-1.0) for c in choices}
        cleaned.discard(-1.0)
        self._choices: tuple[float, ...] = tuple(sorted(cleaned)) or (float(DEFAULT_DURATION_S),)
        self._index: int = 0
        self.select(DEFAULT_DURATION_S if initial is None else initial)

    @property
    def choices(self) -> tuple[float, ...]:
        return self._choices

    def current_duration(self) -> float:
        """Return the selected duration in seconds (always positive)."""
        return self._choices[self._index]

    def select(self, raw: object) -> float:
        """Select a duration from raw input, adding it to the choices if new.

        Returns:
            The duration now selected.
        """
        value = parse_duration(raw)
        if value not in self._choices:
            self._choices = tuple(sorted(self._choices + (value,)))
        self._index = self._choices.index(value)
        return value

    def select_next(self) -> float:
        """Advance to the next choice, wrapping to the shortest."""
        self._index = (self._index + 1) % len(self._choices)
        return self.current_duration()

    def select_previous(self) -> float:
        """Step back to the previous choice, wrapping to the longest."""
        self._index = (self._index - 1) % len(self._choices)
        return self.current_duration()
