"""
ticker.py — Periodic task abstraction that drives GameModel.step().

The model owns exactly one Ticker and only ever calls start() / stop() on
it.  Concrete backends (see controller.PygameTicker) override the two hooks.
"""


class Ticker:
    """
    Cancellable periodic task.

    At most one task is armed at a time: start() always stops the previous
    one before arming a new one.  Every start() and stop() bumps
    `generation`, so a tick tagged with an older generation belongs to a
    cancelled task.  The base class arms nothing, which makes it usable as a
    headless stand-in.
    """

    def __init__(self):
        self.interval: int | None = None
        self.generation: int = 0

    @property
    def active(self) -> bool:
        return self.interval is not None

    def is_current(self, generation) -> bool:
        return self.active and generation == self.generation

    def start(self, interval_ms: int) -> None:
        self.stop()
        self.generation += 1
        self._arm(interval_ms)
        self.interval = interval_ms

    def stop(self) -> None:
        if self.interval is None:
            return
        self.generation += 1
        self._disarm()
        self.interval = None

    # ── Backend hooks ────────────────────────────────────────────
    def _arm(self, interval_ms: int) -> None:
        pass

    def _disarm(self) -> None:
        pass
