"""
gestures.py — Touch swipe recognition.

Pure functions only; the controller feeds in start/end positions in window
pixels and gets back a Direction (or None for taps and short drags).
"""

from .config import SWIPE_THRESHOLD
from .model import Direction


def classify_swipe(dx: float, dy: float,
                   threshold: float = SWIPE_THRESHOLD) -> Direction | None:
    """
    Map a finger displacement to a direction.

    The dominant axis wins; the move along it must exceed `threshold`.
    Screen y grows downwards, so a positive dy is a swipe DOWN.
    """
    if abs(dx) > abs(dy):
        if dx > threshold:
            return Direction.RIGHT
        if dx < -threshold:
            return Direction.LEFT
    else:
        if dy > threshold:
            return Direction.DOWN
        if dy < -threshold:
            return Direction.UP
    return None


class SwipeTracker:
    """Remembers where the current touch started, per finger."""

    def __init__(self, threshold: float = SWIPE_THRESHOLD):
        self.threshold = threshold
        self._starts: dict[int, tuple[float, float]] = {}

    def press(self, finger_id: int, x: float, y: float) -> None:
        self._starts[finger_id] = (x, y)

    def release(self, finger_id: int, x: float, y: float) -> Direction | None:
        start = self._starts.pop(finger_id, None)
        if start is None:
            return None
        return classify_swipe(x - start[0], y - start[1], self.threshold)
