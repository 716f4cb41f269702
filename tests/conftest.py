"""Shared fixtures: a ticker that records calls and a seeded engine."""

import os

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pytest

from solosnake.model import GameModel
from solosnake.storage import MemoryHighScoreStore
from solosnake.ticker import Ticker


class RecordingTicker(Ticker):
    def __init__(self):
        super().__init__()
        self.armed: list[int] = []
        self.disarmed = 0

    def _arm(self, interval_ms):
        self.armed.append(interval_ms)

    def _disarm(self):
        self.disarmed += 1


@pytest.fixture
def ticker():
    return RecordingTicker()


@pytest.fixture
def store():
    return MemoryHighScoreStore()


@pytest.fixture
def model(ticker, store):
    return GameModel(ticker=ticker, store=store, seed=1234)
