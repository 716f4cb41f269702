import pygame
import pytest

from solosnake.config import STATE_IDLE, STATE_RUNNING, STATE_PAUSED, WIDTH, HEIGHT
from solosnake.controller import STEP_EVENT, GameController, PygameTicker
from solosnake.gestures import SwipeTracker
from solosnake.model import Direction, GameModel


class FakeView:
    def __init__(self, button=None, speed=None):
        self.button = button
        self.speed = speed

    def button_at(self, pos):
        return self.button

    def speed_at(self, pos):
        return self.speed


def make_controller(model):
    # Skip __init__ so no window is opened
    ctl = GameController.__new__(GameController)
    ctl.model = model
    ctl.ticker = model.ticker
    ctl.view = FakeView()
    ctl.swipes = SwipeTracker()
    ctl.snapshot = model.snapshot()
    model.subscribe(ctl._on_state_changed)
    return ctl


@pytest.fixture
def controller(model):
    return make_controller(model)


def key(k):
    return pygame.event.Event(pygame.KEYDOWN, key=k)


def test_arrow_key_starts_round(controller):
    controller.dispatch(key(pygame.K_UP))
    assert controller.model.state == STATE_RUNNING
    assert controller.model.direction == Direction.UP
    assert controller.snapshot.state == STATE_RUNNING


def test_step_event_moves_snake(controller):
    controller.model.food = (0, 0)
    controller.dispatch(key(pygame.K_RIGHT))
    controller.dispatch(pygame.event.Event(STEP_EVENT, gen=controller.ticker.generation))
    assert controller.snapshot.head == (220, 200)


def test_untagged_step_event_is_ignored(controller):
    controller.model.food = (0, 0)
    controller.dispatch(key(pygame.K_RIGHT))
    controller.dispatch(pygame.event.Event(STEP_EVENT))
    assert controller.model.head == (200, 200)


def test_space_toggles_pause(controller):
    controller.dispatch(key(pygame.K_LEFT))
    controller.dispatch(key(pygame.K_SPACE))
    assert controller.model.state == STATE_PAUSED
    controller.dispatch(key(pygame.K_p))
    assert controller.model.state == STATE_RUNNING


def test_r_restarts(controller):
    controller.dispatch(key(pygame.K_LEFT))
    controller.dispatch(key(pygame.K_r))
    assert controller.model.state == STATE_IDLE
    assert not controller.ticker.active


@pytest.mark.parametrize("k, level", [
    (pygame.K_1, 1),
    (pygame.K_9, 9),
    (pygame.K_0, 10),
])
def test_digit_keys_set_speed(controller, k, level):
    controller.dispatch(key(k))
    assert controller.model.speed_level == level
    assert controller.snapshot.speed_level == level


def test_plus_and_minus_nudge_speed(controller):
    controller.dispatch(key(pygame.K_EQUALS))
    assert controller.model.speed_level == 6
    controller.dispatch(key(pygame.K_MINUS))
    controller.dispatch(key(pygame.K_MINUS))
    assert controller.model.speed_level == 4


def test_swipe_sets_direction(controller):
    controller.dispatch(pygame.event.Event(pygame.FINGERDOWN, finger_id=0, x=0.5, y=0.5))
    controller.dispatch(pygame.event.Event(pygame.FINGERUP, finger_id=0, x=0.5, y=0.2))
    assert controller.model.direction == Direction.UP
    assert controller.model.state == STATE_RUNNING


def test_tap_is_not_a_swipe(controller):
    controller.dispatch(pygame.event.Event(pygame.FINGERDOWN, finger_id=0, x=0.5, y=0.5))
    controller.dispatch(pygame.event.Event(
        pygame.FINGERUP, finger_id=0, x=0.5 + 10 / WIDTH, y=0.5 + 10 / HEIGHT))
    assert controller.model.state == STATE_IDLE


def test_pause_button_click(controller):
    controller.dispatch(key(pygame.K_DOWN))
    controller.view = FakeView("pause")
    controller.dispatch(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(0, 0)))
    assert controller.model.state == STATE_PAUSED


def test_restart_button_click(controller):
    controller.dispatch(key(pygame.K_DOWN))
    controller.view = FakeView("restart")
    controller.dispatch(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(0, 0)))
    assert controller.model.state == STATE_IDLE


def test_speed_pip_click(controller):
    controller.view = FakeView(speed=3)
    controller.dispatch(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(0, 0)))
    assert controller.model.speed_level == 3
    assert controller.model.state == STATE_IDLE


def test_right_click_is_ignored(controller):
    controller.view = FakeView(speed=3)
    controller.dispatch(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=3, pos=(0, 0)))
    assert controller.model.speed_level == 5


# ── PygameTicker ──────────────────────────────────────────────────

@pytest.fixture
def pygame_calls(monkeypatch):
    calls = []

    def set_timer(event, millis):
        if isinstance(event, int):
            calls.append(("timer", event, None, millis))
        else:
            calls.append(("timer", event.type, event.gen, millis))

    monkeypatch.setattr(pygame.time, "set_timer", set_timer)
    monkeypatch.setattr(pygame.event, "clear",
                        lambda eventtype=None: calls.append(("clear", eventtype)))
    return calls


def test_pygame_ticker_arms_tagged_timer(pygame_calls):
    ticker = PygameTicker()
    ticker.start(200)
    assert pygame_calls == [("timer", STEP_EVENT, ticker.generation, 200)]
    assert ticker.active
    assert ticker.is_current(ticker.generation)


def test_pygame_ticker_restart_cancels_previous(pygame_calls):
    ticker = PygameTicker()
    ticker.start(200)
    first = ticker.generation
    ticker.start(60)
    assert pygame_calls == [
        ("timer", STEP_EVENT, first, 200),
        ("timer", STEP_EVENT, None, 0),
        ("clear", STEP_EVENT),
        ("timer", STEP_EVENT, ticker.generation, 60),
    ]
    assert ticker.interval == 60
    assert not ticker.is_current(first)


def test_pygame_ticker_stop_is_idempotent(pygame_calls):
    ticker = PygameTicker()
    ticker.stop()
    assert pygame_calls == []
    ticker.start(100)
    gen = ticker.generation
    ticker.stop()
    ticker.stop()
    assert pygame_calls[-2:] == [("timer", STEP_EVENT, None, 0), ("clear", STEP_EVENT)]
    assert not ticker.active
    assert not ticker.is_current(gen)


@pytest.fixture
def live_controller(pygame_calls, store):
    model = GameModel(ticker=PygameTicker(), store=store, seed=5)
    model.food = (0, 0)
    return make_controller(model)


def test_tick_of_replaced_timer_already_fetched_is_dropped(live_controller, monkeypatch):
    ctl = live_controller
    ctl.dispatch(key(pygame.K_RIGHT))
    old_tick = pygame.event.Event(STEP_EVENT, gen=ctl.ticker.generation)

    # Speed change and the old timer's tick arrive in the same batch
    monkeypatch.setattr(pygame.event, "get", lambda: [key(pygame.K_0), old_tick])
    ctl._handle_events()

    assert ctl.ticker.interval == 60
    assert ctl.model.head == (200, 200)

    ctl.dispatch(pygame.event.Event(STEP_EVENT, gen=ctl.ticker.generation))
    assert list(ctl.model.snake) == [(220, 200)]


def test_tick_from_before_restart_is_dropped(live_controller, monkeypatch):
    ctl = live_controller
    ctl.dispatch(key(pygame.K_RIGHT))
    old_tick = pygame.event.Event(STEP_EVENT, gen=ctl.ticker.generation)

    monkeypatch.setattr(pygame.event, "get",
                        lambda: [key(pygame.K_r), key(pygame.K_UP), old_tick])
    ctl._handle_events()

    assert ctl.model.state == STATE_RUNNING
    assert ctl.model.head == (200, 200)


def test_tick_after_pause_is_dropped(live_controller):
    ctl = live_controller
    ctl.dispatch(key(pygame.K_RIGHT))
    tick = pygame.event.Event(STEP_EVENT, gen=ctl.ticker.generation)
    ctl.dispatch(key(pygame.K_SPACE))
    ctl.dispatch(key(pygame.K_SPACE))
    ctl.dispatch(tick)
    assert ctl.model.head == (200, 200)
