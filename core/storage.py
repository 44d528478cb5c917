"""
core/storage.py — High score persistence for Click Speed Test.

Exactly one value is persisted: the best final click count, stored as a
decimal integer string under STORAGE_KEY. The same key and format are
used in the browser (pygbag → window.localStorage) and on the desktop
(a small JSON file of key → string).

Storage is best-effort. Backends raise StorageError for any failure;
HighScoreStore is the only place that catches it, turning a failed read
into 0 and a failed write into a logged no-op. The game stays playable
without a high score.

Usage:
    store = HighScoreStore(default_backend(HIGHSCORE_FILE))
    best = store.read()
    store.write(42)
"""

from __future__ import annotations
import json
import logging
import re
import sys
from abc import ABC, abstractmethod
from pathlib import Path

from settings import STORAGE_KEY

LOGGER = logging.getLogger(__name__)

# Leading integer, parsed the way the browser build's parseInt() does
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class StorageError(Exception):
    """Raised by a backend when it cannot read or write."""


# ── Backends ──────────────────────────────────────────────────────────────────

class StorageBackend(ABC):
    """String key-value store with localStorage semantics."""

    @abstractmethod
    def get_item(self, key: str) -> str | None:
        """Return the stored string, or None if the key is absent.

        Raises:
            StorageError: If the store cannot be read.
        """
        ...

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value.

        Raises:
            StorageError: If the store cannot be written.
        """
        ...


class MemoryStorage(StorageBackend):
    """In-process dict. Used by tests and as a last-resort fallback."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value


class FileStorage(StorageBackend):
    """JSON object on disk mapping key → string.

    A missing file reads as empty. Writes rewrite the whole file,
    preserving keys this game does not own.

    Attributes:
        path: Location of the JSON file.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, ValueError) as exc:   # bad UTF-8 or bad JSON
            raise StorageError(f"cannot read {self.path}: {exc}") from exc
        if not isinstance(raw, dict):
            raise StorageError(f"{self.path} does not hold a JSON object")
        return {str(k): str(v) for k, v in raw.items()}

    def get_item(self, key: str) -> str | None:
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        try:
            data = self._load()
        except StorageError:
            LOGGER.info("overwriting unreadable storage file %s", self.path)
            data = {}
        data[key] = value
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
        except OSError as exc:
            raise StorageError(f"cannot write {self.path}: {exc}") from exc


class BrowserStorage(StorageBackend):
    """window.localStorage, reachable through pygbag's `platform` module.

    Only constructible under emscripten. JavaScript exceptions arrive as
    plain Python exceptions through the bridge, so every call converts
    whatever it gets into StorageError (private browsing, quota, blocked
    third-party storage in an itch.io iframe).
    """

    def __init__(self) -> None:
        try:
            import platform as browser   # pygbag replaces the stdlib module
            self._local = browser.window.localStorage
        except Exception as exc:
            raise StorageError(f"localStorage unavailable: {exc}") from exc

    def get_item(self, key: str) -> str | None:
        try:
            value = self._local.getItem(key)
        except Exception as exc:
            raise StorageError(f"localStorage.getItem failed: {exc}") from exc
        return None if value is None else str(value)

    def set_item(self, key: str, value: str) -> None:
        try:
            self._local.setItem(key, value)
        except Exception as exc:
            raise StorageError(f"localStorage.setItem failed: {exc}") from exc


def default_backend(path: str | Path) -> StorageBackend:
    """Pick the backend for the current platform.

    Args:
        path: JSON file used on the desktop.

    Returns:
        BrowserStorage under pygbag, FileStorage otherwise. Falls back to
        MemoryStorage if the browser store cannot be reached.
    """
    if sys.platform == "emscripten":
        try:
            return BrowserStorage()
        except StorageError as exc:
            LOGGER.warning("%s; high score will not persist", exc)
            return MemoryStorage()
    return FileStorage(path)


# ── High score ────────────────────────────────────────────────────────────────

def parse_score(raw: str | None) -> int:
    """Parse a stored score string into a non-negative int.

    Follows parseInt(): leading whitespace and trailing junk are ignored
    ("12abc" → 12). Absent, unparsable and negative values give 0, as do
    digit runs too long for int() to convert.
    """
    if raw is None:
        return 0
    match = _LEADING_INT.match(raw)
    if match is None:
        return 0
    try:
        value = int(match.group(1))
    except ValueError:
        LOGGER.warning("stored high score has %d digits; using 0", len(match.group(1)))
        return 0
    return max(0, value)


class HighScoreStore:
    """Read and write the single persisted high score.

    Attributes:
        backend: StorageBackend holding the value.
        key:     Storage key, STORAGE_KEY unless overridden.
    """

    def __init__(self, backend: StorageBackend, key: str = STORAGE_KEY) -> None:
        self.backend = backend
        self.key     = key

    def read(self) -> int:
        """Return the stored high score, or 0 if absent or unreadable."""
        try:
            raw = self.backend.get_item(self.key)
        except StorageError as exc:
            LOGGER.warning("high score read failed: %s", exc)
            return 0
        return parse_score(raw)

    def write(self, value: int) -> bool:
        """Persist value. Failures are logged and dropped.

        Args:
            value: Non-negative score. Negative input is stored as 0.

        Returns:
            True if the backend accepted the write.
        """
        try:
            self.backend.set_item(self.key, str(max(0, int(value))))
        except StorageError as exc:
            LOGGER.warning("high score write failed: %s", exc)
            return False
        return True
