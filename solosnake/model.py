"""
model.py — Model layer.

Owns ALL game state and rules. Zero rendering, zero input handling.
Exposes a clean API for the Controller to read/write.

Classes:
    Direction     — immutable (dx, dy) value object
    GameSnapshot  — frozen copy of the state handed to subscribers
    GameModel     — the engine; owns snake, food, score, phase, ticker
"""

import logging
import random
from collections import deque
from dataclasses import dataclass
from typing import Callable

from .config import (
    GRID, GAME_W, GAME_H, START_CELL,
    SCORE_PER_FOOD, MAX_FOOD_ATTEMPTS,
    SPEED_SETTINGS, MIN_SPEED, MAX_SPEED, DEFAULT_SPEED,
    STATE_IDLE, STATE_RUNNING, STATE_PAUSED, STATE_OVER,
    CAUSE_WALL, CAUSE_SELF,
)
from .storage import HighScoreStoreError, MemoryHighScoreStore
from .ticker import Ticker

logger = logging.getLogger(__name__)

Cell = tuple[int, int]


# ─────────────────────────── Direction ───────────────────────────
class Direction:
    """Immutable 2-D unit direction."""
    NONE  = None  # filled below after class definition
    LEFT  = None
    RIGHT = None
    UP    = None
    DOWN  = None

    def __init__(self, x: int, y: int):
        self.x = x
        self.y = y

    @property
    def axis(self) -> str | None:
        """'x' for horizontal moves, 'y' for vertical, None when standing still."""
        if self.x:
            return "x"
        if self.y:
            return "y"
        return None

    def is_opposite(self, other: "Direction") -> bool:
        if self.axis is None:
            return False
        return self.x == -other.x and self.y == -other.y

    def scaled(self, unit: int) -> Cell:
        return self.x * unit, self.y * unit

    def __eq__(self, other):
        return isinstance(other, Direction) and self.x == other.x and self.y == other.y

    def __hash__(self):
        return hash((self.x, self.y))

    def __repr__(self):
        return f"Direction({self.x}, {self.y})"


Direction.NONE  = Direction( 0,  0)
Direction.LEFT  = Direction(-1,  0)
Direction.RIGHT = Direction( 1,  0)
Direction.UP    = Direction( 0, -1)
Direction.DOWN  = Direction( 0,  1)


# ───────────────────────── GameSnapshot ──────────────────────────
@dataclass(frozen=True)
class GameSnapshot:
    snake: tuple[Cell, ...]
    food: Cell | None
    score: int
    high_score: int
    state: str
    speed_level: int
    interval: int
    direction: Direction
    cause: str | None = None
    new_high_score: bool = False

    @property
    def head(self) -> Cell:
        return self.snake[0]


# ─────────────────────────── GameModel ───────────────────────────
class GameModel:
    """
    The game engine.  Owns all game state.

    The controller feeds it directions, pause/restart/speed commands and
    calls step() once per tick.  Every mutating call ends by notifying the
    subscribers with a fresh GameSnapshot.
    """

    def __init__(
        self,
        ticker: Ticker | None = None,
        store=None,
        width: int = GAME_W,
        height: int = GAME_H,
        grid: int = GRID,
        start: Cell = START_CELL,
        seed: int | None = None,
    ):
        self.width = width
        self.height = height
        self.grid = grid
        self.start = start
        self.ticker = ticker if ticker is not None else Ticker()
        self.store = store if store is not None else MemoryHighScoreStore()
        self.rng = random.Random(seed)
        self._listeners: list[Callable[[GameSnapshot], None]] = []

        self.speed_level: int = DEFAULT_SPEED
        self.high_score: int = self._load_high_score()

        self.state: str = STATE_IDLE
        self.snake: deque[Cell] = deque()
        self.direction: Direction = Direction.NONE
        self.food: Cell | None = None
        self.score: int = 0
        self.cause: str | None = None
        self.new_high_score: bool = False
        self._moved_dir: Direction = Direction.NONE
        self.initialize()

    # ── Accessors ────────────────────────────────────────────────
    @property
    def head(self) -> Cell:
        return self.snake[0]

    @property
    def velocity(self) -> Cell:
        return self.direction.scaled(self.grid)

    @property
    def interval(self) -> int:
        return SPEED_SETTINGS[self.speed_level]

    def occupies(self, x: int, y: int) -> bool:
        return (x, y) in self.snake

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def snapshot(self) -> GameSnapshot:
        return GameSnapshot(
            snake=tuple(self.snake),
            food=self.food,
            score=self.score,
            high_score=self.high_score,
            state=self.state,
            speed_level=self.speed_level,
            interval=self.interval,
            direction=self.direction,
            cause=self.cause,
            new_high_score=self.new_high_score,
        )

    # ── Subscriptions ────────────────────────────────────────────
    def subscribe(self, callback: Callable[[GameSnapshot], None]) -> None:
        self._listeners.append(callback)

    def unsubscribe(self, callback: Callable[[GameSnapshot], None]) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    # ── Commands ─────────────────────────────────────────────────
    def initialize(self) -> None:
        """Start a fresh round. High score and speed level are kept."""
        self.snake = deque([self.start])
        self.direction = Direction.NONE
        self._moved_dir = Direction.NONE
        self.score = 0
        self.cause = None
        self.new_high_score = False
        self.food = self._spawn_food()
        self.state = STATE_IDLE
        self._notify()

    def set_direction(self, new_dir: Direction) -> bool:
        """
        Request a turn.  Returns True if it was accepted.

        Turns along the current axis are refused, and so is the reverse of
        the last direction actually travelled, so several key presses inside
        one tick can never fold the snake back onto its neck.
        """
        if self.state == STATE_OVER or new_dir.axis is None:
            return False
        if new_dir.axis == self.direction.axis or new_dir.is_opposite(self._moved_dir):
            logger.debug("Ignoring turn to %r while heading %r", new_dir, self.direction)
            return False

        self.direction = new_dir
        if self.state == STATE_IDLE:
            self.state = STATE_RUNNING
            self.ticker.start(self.interval)
            logger.info("Round started at speed %d", self.speed_level)
        self._notify()
        return True

    def step(self) -> bool:
        """
        Advance one cell.
        Returns True if the snake moved, False on a no-op or a collision.
        """
        if self.state != STATE_RUNNING:
            return False

        hx, hy = self.head
        dx, dy = self.velocity
        new_head = (hx + dx, hy + dy)
        self._moved_dir = self.direction

        if not self.in_bounds(*new_head):
            self._game_over(CAUSE_WALL)
            return False

        eating = new_head == self.food
        # The tail moves out of the way this tick unless the snake grows
        body = list(self.snake) if eating else list(self.snake)[:-1]
        if new_head in body:
            self._game_over(CAUSE_SELF)
            return False

        self.snake.appendleft(new_head)
        if eating:
            self._eat()
        else:
            self.snake.pop()
        self._notify()
        return True

    def set_speed_level(self, level) -> None:
        try:
            level = int(level)
        except (TypeError, ValueError):
            logger.debug("Ignoring speed level %r", level)
            return

        self.speed_level = max(MIN_SPEED, min(MAX_SPEED, level))
        if self.state == STATE_RUNNING:
            self.ticker.start(self.interval)
        self._notify()

    def toggle_pause(self) -> None:
        if self.state == STATE_RUNNING:
            self.ticker.stop()
            self.state = STATE_PAUSED
            logger.info("Paused")
        elif self.state == STATE_PAUSED:
            self.state = STATE_RUNNING
            self.ticker.start(self.interval)
            logger.info("Resumed")
        else:
            return
        self._notify()

    def restart(self) -> None:
        self.ticker.stop()
        self.initialize()

    # ── Private helpers ──────────────────────────────────────────
    def _eat(self) -> None:
        self.score += SCORE_PER_FOOD
        if self.score > self.high_score:
            self.high_score = self.score
            self.new_high_score = True
            self._save_high_score()
        self.food = self._spawn_food()

    def _game_over(self, cause: str) -> None:
        self.ticker.stop()
        self.state = STATE_OVER
        self.cause = cause
        logger.info("Game over (%s) with score %d", cause, self.score)
        self._notify()

    def _spawn_food(self) -> Cell | None:
        occupied = set(self.snake)
        cols, rows = self.width // self.grid, self.height // self.grid
        for _ in range(MAX_FOOD_ATTEMPTS):
            pos = (self.rng.randrange(cols) * self.grid,
                   self.rng.randrange(rows) * self.grid)
            if pos not in occupied:
                return pos

        free = [
            (x * self.grid, y * self.grid)
            for x in range(cols)
            for y in range(rows)
            if (x * self.grid, y * self.grid) not in occupied
        ]
        if not free:
            logger.warning("Board is full, no cell left for food")
            return None
        return self.rng.choice(free)

    def _load_high_score(self) -> int:
        try:
            return self.store.load()
        except HighScoreStoreError as exc:
            logger.warning("High score unavailable, starting from 0: %s", exc)
            return 0

    def _save_high_score(self) -> None:
        try:
            self.store.save(self.high_score)
        except HighScoreStoreError as exc:
            logger.warning("High score not saved: %s", exc)

    def _notify(self) -> None:
        if not self._listeners:
            return
        snap = self.snapshot()
        for callback in list(self._listeners):
            callback(snap)
