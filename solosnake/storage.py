"""
storage.py — Persistence for the best score.

The engine only sees two calls: load() -> int and save(int).  Stores raise
HighScoreStoreError when the backend misbehaves; the engine decides that
such failures are not fatal.
"""

import json
import logging
import os

from .config import HIGH_SCORE_FILE, HIGH_SCORE_KEY

logger = logging.getLogger(__name__)


class HighScoreStoreError(Exception):
    """Raised when the high score cannot be read or written."""


class MemoryHighScoreStore:
    """Keeps the high score in memory only. Useful for tests and demos."""

    def __init__(self, initial: int = 0):
        self.value = initial
        self.saves: list[int] = []

    def load(self) -> int:
        return self.value

    def save(self, score: int) -> None:
        self.value = score
        self.saves.append(score)


class JsonHighScoreStore:
    """
    High score kept under a single key in a small JSON object file.

    Other keys found in the file are preserved on save.
    """

    def __init__(self, path: str = HIGH_SCORE_FILE, key: str = HIGH_SCORE_KEY):
        self.path = path
        self.key = key

    def load(self) -> int:
        data = self._read()
        try:
            value = int(data.get(self.key, 0))
        except (TypeError, ValueError) as exc:
            raise HighScoreStoreError(
                f"Bad value for '{self.key}' in {self.path}: {exc}"
            ) from exc
        return max(0, value)

    def save(self, score: int) -> None:
        try:
            data = self._read()
        except HighScoreStoreError:
            logger.warning("Overwriting unreadable high score file %s", self.path)
            data = {}
        data[self.key] = int(score)

        try:
            directory = os.path.dirname(self.path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
        except OSError as exc:
            raise HighScoreStoreError(f"Could not write {self.path}: {exc}") from exc

    def _read(self) -> dict:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, ValueError) as exc:
            raise HighScoreStoreError(f"Could not read {self.path}: {exc}") from exc
        if not isinstance(raw, dict):
            raise HighScoreStoreError(f"{self.path} does not hold a JSON object")
        return raw
