"""Session controller state machine checks."""

from __future__ import annotations

import unittest

from core.controller import DisplayState, SessionController
from core.duration import DurationSelector
from core.session import SessionResult, SessionStatus
from core.storage import HighScoreStore, MemoryStorage, StorageBackend, StorageError
from core.timer import ManualTicker
from settings import STORAGE_KEY


class RecordingDisplay:
    def __init__(self) -> None:
        self.states: list[DisplayState] = []

    def show(self, state: DisplayState) -> None:
        self.states.append(state)

    @property
    def last(self) -> DisplayState:
        return self.states[-1]


class CountingStorage(MemoryStorage):
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        super().__init__(initial)
        self.writes = 0

    def set_item(self, key: str, value: str) -> None:
        self.writes += 1
        super().set_item(key, value)


class BrokenStorage(StorageBackend):
    def get_item(self, key: str) -> str | None:
        raise StorageError("blocked")

    def set_item(self, key: str, value: str) -> None:
        raise StorageError("blocked")


class ControllerTestCase(unittest.TestCase):
    def make(self, duration=5, stored: str | None = None, backend: StorageBackend | None = None):
        if backend is None:
            backend = CountingStorage({STORAGE_KEY: stored} if stored is not None else None)
        self.backend = backend
        self.durations = DurationSelector(initial=duration)
        self.ticker = ManualTicker()
        self.display = RecordingDisplay()
        self.controller = SessionController(
            self.durations, self.ticker, HighScoreStore(backend), display=self.display,
        )
        return self.controller


class ScenarioTests(ControllerTestCase):
    def test_twelve_clicks_beat_previous_best_of_ten(self) -> None:
        controller = self.make(duration=5, stored="10")
        self.assertTrue(controller.start())

        for _ in range(12):
            self.ticker.advance(400)
            self.assertTrue(controller.register_click())

        self.ticker.advance(1000)

        self.assertIs(controller.status, SessionStatus.ENDED)
        self.assertEqual(controller.last_result, SessionResult(final_score=12, is_new_high_score=True))
        self.assertEqual(self.backend.get_item(STORAGE_KEY), "12")
        self.assertEqual(self.ticker.fired, 50)
        self.assertFalse(self.ticker.active)

        last = self.display.last
        self.assertEqual(last.remaining_text, "0.0")
        self.assertEqual(last.click_count, 12)
        self.assertEqual(last.high_score, 12)
        self.assertFalse(last.click_enabled)
        self.assertEqual(last.result_text, "Final score: 12")
        self.assertTrue(last.message.endswith("New high score!"))

    def test_three_clicks_keep_previous_best(self) -> None:
        controller = self.make(duration=5, stored="10")
        controller.start()
        for _ in range(3):
            controller.register_click()
        self.ticker.advance(5000)

        self.assertEqual(controller.last_result, SessionResult(final_score=3, is_new_high_score=False))
        self.assertEqual(self.backend.get_item(STORAGE_KEY), "10")
        self.assertEqual(self.backend.writes, 0)
        self.assertEqual(self.display.last.high_score, 10)
        self.assertEqual(self.display.last.message, "Time's up! You clicked 3 times.")

    def test_equal_score_is_not_a_new_best(self) -> None:
        controller = self.make(stored="2")
        controller.start()
        controller.register_click()
        controller.register_click()
        result = controller.end()

        self.assertFalse(result.is_new_high_score)
        self.assertEqual(self.backend.writes, 0)

    def test_second_start_is_ignored(self) -> None:
        controller = self.make(duration=5)
        controller.start()
        self.ticker.advance(300)
        controller.register_click()
        session = controller.session

        self.assertFalse(controller.start())

        self.assertIs(controller.session, session)
        self.assertEqual(self.ticker.starts, 1)
        self.assertEqual(session.click_count, 1)
        self.assertAlmostEqual(session.remaining_seconds, 4.7)


class TransitionTests(ControllerTestCase):
    def test_initial_state_is_idle_and_published(self) -> None:
        controller = self.make(duration=10, stored="7")
        self.assertIs(controller.status, SessionStatus.IDLE)
        self.assertEqual(self.display.last.remaining_text, "10.0")
        self.assertEqual(self.display.last.high_score, 7)
        self.assertFalse(self.display.last.click_enabled)
        self.assertFalse(self.ticker.active)

    def test_unusable_durations_start_with_five_seconds(self) -> None:
        for raw in ("1e308", "0.0001"):
            with self.subTest(raw=raw):
                controller = self.make(duration=raw)
                self.assertEqual(self.display.last.remaining_text, "5.0")
                self.assertTrue(controller.start())
                self.ticker.advance(4900)
                self.assertIs(controller.status, SessionStatus.RUNNING)
                self.ticker.advance(100)
                self.assertIs(controller.status, SessionStatus.ENDED)

    def test_clicks_outside_running_are_ignored(self) -> None:
        controller = self.make()
        self.assertFalse(controller.register_click())
        self.assertEqual(controller.session.click_count, 0)

        controller.start()
        controller.register_click()
        controller.end()
        self.assertFalse(controller.register_click())
        self.assertEqual(controller.session.click_count, 1)

    def test_end_is_idempotent(self) -> None:
        controller = self.make(stored="0")
        controller.start()
        controller.register_click()

        first = controller.end()
        published = len(self.display.states)
        second = controller.end()

        self.assertEqual(first, SessionResult(1, True))
        self.assertIsNone(second)
        self.assertEqual(self.backend.writes, 1)
        self.assertEqual(len(self.display.states), published)

    def test_end_when_idle_does_nothing(self) -> None:
        controller = self.make()
        self.assertIsNone(controller.end())
        self.assertIs(controller.status, SessionStatus.IDLE)

    def test_start_from_ended_requires_restart(self) -> None:
        controller = self.make()
        controller.start()
        controller.end()

        self.assertFalse(controller.start())
        self.assertIs(controller.status, SessionStatus.ENDED)

        controller.restart()
        self.assertTrue(controller.start())
        self.assertIs(controller.status, SessionStatus.RUNNING)

    def test_explicit_end_stops_ticker(self) -> None:
        controller = self.make()
        controller.start()
        self.ticker.advance(1000)
        controller.end()

        self.assertFalse(self.ticker.active)
        self.assertEqual(self.ticker.advance(1000), 0)
        self.assertAlmostEqual(controller.session.remaining_seconds, 4.0)

    def test_tick_outside_running_is_noop(self) -> None:
        controller = self.make()
        controller.tick()
        self.assertEqual(controller.session.remaining_ms, 5000)

    def test_remaining_never_leaves_bounds(self) -> None:
        controller = self.make(duration=0.25)
        controller.start()
        self.ticker.advance(1000)

        self.assertEqual(self.ticker.fired, 3)
        for state in self.display.states:
            self.assertGreaterEqual(float(state.remaining_text), 0.0)
            self.assertLessEqual(float(state.remaining_text), 0.3)
        self.assertEqual(self.display.last.remaining_text, "0.0")

    def test_zero_reached_only_on_expiry(self) -> None:
        controller = self.make(duration=1)
        controller.start()
        self.ticker.advance(900)
        self.assertIs(controller.status, SessionStatus.RUNNING)
        self.assertGreater(controller.session.remaining_ms, 0)

        self.ticker.advance(100)
        self.assertIs(controller.status, SessionStatus.ENDED)
        self.assertEqual(controller.session.remaining_ms, 0)


class RestartTests(ControllerTestCase):
    def test_restart_mid_countdown_stops_ticker_and_resets(self) -> None:
        controller = self.make(duration=5, stored="10")
        controller.start()
        for _ in range(20):
            controller.register_click()
        self.ticker.advance(2000)

        controller.restart()

        self.assertFalse(self.ticker.active)
        self.assertEqual(self.ticker.advance(5000), 0)
        self.assertIs(controller.status, SessionStatus.IDLE)
        self.assertEqual(controller.session.click_count, 0)
        self.assertEqual(self.display.last.remaining_text, "5.0")
        self.assertEqual(self.display.last.message, "Press Start to play again.")
        self.assertEqual(self.display.last.result_text, "")
        self.assertEqual(self.backend.get_item(STORAGE_KEY), "10")
        self.assertEqual(self.backend.writes, 0)

    def test_restart_after_new_best_keeps_it(self) -> None:
        controller = self.make(stored="1")
        controller.start()
        for _ in range(4):
            controller.register_click()
        controller.end()
        controller.restart()

        self.assertEqual(self.backend.get_item(STORAGE_KEY), "4")
        self.assertEqual(self.backend.writes, 1)
        self.assertEqual(self.display.last.high_score, 4)

    def test_restart_and_start_reread_duration(self) -> None:
        controller = self.make(duration=5)
        self.durations.select(10)
        controller.restart()
        self.assertEqual(controller.session.duration_seconds, 10.0)

        self.durations.select(15)
        controller.start()
        self.assertEqual(controller.session.duration_seconds, 15.0)
        self.assertEqual(self.display.last.remaining_text, "15.0")

    def test_restart_from_idle_is_safe(self) -> None:
        controller = self.make()
        controller.restart()
        controller.restart()
        self.assertIs(controller.status, SessionStatus.IDLE)


class StorageFailureTests(ControllerTestCase):
    def test_unavailable_storage_keeps_game_playable(self) -> None:
        with self.assertLogs("core.storage", level="WARNING"):
            controller = self.make(backend=BrokenStorage())
            self.assertEqual(controller.high_score, 0)

            controller.start()
            controller.register_click()
            self.ticker.advance(5000)

        self.assertEqual(controller.last_result, SessionResult(1, True))
        self.assertIs(controller.status, SessionStatus.ENDED)

    def test_garbage_stored_value_reads_as_zero(self) -> None:
        controller = self.make(stored="not a number")
        self.assertEqual(controller.high_score, 0)


if __name__ == "__main__":
    unittest.main()
