"""
controller.py — Controller layer.

Responsibilities:
  - Own the pygame event loop.
  - Translate keyboard, touch and mouse events into model commands.
  - Route the step timer (STEP_EVENT) into GameModel.step().
  - Keep the latest GameSnapshot and ask the view to render it every frame.
  - Know nothing about rendering details (that's the View's job).
  - Know nothing about game rules (that's the Model's job).

The controller is the only layer that imports pygame directly for events.
"""

import logging
import sys

import pygame

from .config import WIDTH, HEIGHT, FPS
from .gestures import SwipeTracker
from .model import Direction, GameModel, GameSnapshot
from .storage import JsonHighScoreStore
from .ticker import Ticker
from .view import GameView

logger = logging.getLogger(__name__)

STEP_EVENT = pygame.USEREVENT + 1

DIRECTION_KEYS = {
    pygame.K_LEFT:  Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
    pygame.K_UP:    Direction.UP,
    pygame.K_DOWN:  Direction.DOWN,
}

SPEED_KEYS = {
    pygame.K_1: 1,
    pygame.K_2: 2,
    pygame.K_3: 3,
    pygame.K_4: 4,
    pygame.K_5: 5,
    pygame.K_6: 6,
    pygame.K_7: 7,
    pygame.K_8: 8,
    pygame.K_9: 9,
    pygame.K_0: 10,
}

FASTER_KEYS = (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS)
SLOWER_KEYS = (pygame.K_MINUS, pygame.K_KP_MINUS)


class PygameTicker(Ticker):
    """Ticker backed by pygame.time.set_timer posting STEP_EVENT."""

    def __init__(self, event_type: int = STEP_EVENT):
        super().__init__()
        self.event_type = event_type

    def _arm(self, interval_ms: int) -> None:
        logger.debug("Arming step timer every %d ms (gen %d)",
                     interval_ms, self.generation)
        tick = pygame.event.Event(self.event_type, gen=self.generation)
        pygame.time.set_timer(tick, interval_ms)

    def _disarm(self) -> None:
        logger.debug("Disarming step timer")
        pygame.time.set_timer(self.event_type, 0)
        # Ticks still in the queue belong to the cancelled task.  Ones already
        # pulled by event.get() are dropped in dispatch by their generation.
        pygame.event.clear(self.event_type)


class GameController:
    """
    Owns the main loop.
    Glues Model <-> View without them knowing about each other.
    """

    def __init__(self, store=None):
        pygame.init()
        self.screen = pygame.display.set_mode((WIDTH, HEIGHT))
        pygame.display.set_caption("SNAKE")
        self.clock  = pygame.time.Clock()
        self.ticker = PygameTicker()
        self.model  = GameModel(
            ticker=self.ticker,
            store=store if store is not None else JsonHighScoreStore(),
        )
        self.view   = GameView(self.screen)
        self.swipes = SwipeTracker()
        self.snapshot: GameSnapshot = self.model.snapshot()
        self.model.subscribe(self._on_state_changed)

    # ── Public entry point ────────────────────────────────────────
    def run(self) -> None:
        """Start and run the game loop until the player quits."""
        while True:
            self.clock.tick(FPS)
            self._handle_events()
            self.view.render(self.snapshot)

    def _on_state_changed(self, snap: GameSnapshot) -> None:
        self.snapshot = snap

    # ── Event dispatch ────────────────────────────────────────────
    def _handle_events(self) -> None:
        for event in pygame.event.get():
            self.dispatch(event)

    def dispatch(self, event: pygame.event.Event) -> None:
        if event.type == pygame.QUIT:
            self._quit()
        elif event.type == STEP_EVENT:
            if self.ticker.is_current(getattr(event, "gen", None)):
                self.model.step()
            else:
                logger.debug("Dropping stale tick %r", event)
        elif event.type == pygame.KEYDOWN:
            self._handle_keydown(event.key)
        elif event.type == pygame.FINGERDOWN:
            self.swipes.press(event.finger_id, event.x * WIDTH, event.y * HEIGHT)
        elif event.type == pygame.FINGERUP:
            direction = self.swipes.release(event.finger_id,
                                            event.x * WIDTH, event.y * HEIGHT)
            if direction is not None:
                self.model.set_direction(direction)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self._handle_click(event.pos)

    def _handle_keydown(self, key: int) -> None:
        if key in (pygame.K_ESCAPE, pygame.K_q):
            self._quit()
        elif key in DIRECTION_KEYS:
            self.model.set_direction(DIRECTION_KEYS[key])
        elif key in (pygame.K_SPACE, pygame.K_p):
            self.model.toggle_pause()
        elif key == pygame.K_r:
            self.model.restart()
        elif key in SPEED_KEYS:
            self.model.set_speed_level(SPEED_KEYS[key])
        elif key in FASTER_KEYS:
            self.model.set_speed_level(self.model.speed_level + 1)
        elif key in SLOWER_KEYS:
            self.model.set_speed_level(self.model.speed_level - 1)

    def _handle_click(self, pos: tuple[int, int]) -> None:
        level = self.view.speed_at(pos)
        if level is not None:
            self.model.set_speed_level(level)
            return
        button = self.view.button_at(pos)
        if button == "pause":
            self.model.toggle_pause()
        elif button == "restart":
            self.model.restart()

    # ── Utilities ─────────────────────────────────────────────────
    def _quit(self) -> None:
        self.ticker.stop()
        pygame.quit()
        sys.exit()
