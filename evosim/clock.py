import time
from typing import Callable, List, Optional


class TimeController:
    """
    Fixed-timestep scheduler.

    Each call to `frame()` is one external frame notification: elapsed
    wall-clock time (scaled by `speed`) is added to an accumulator, then tick
    callbacks run once per whole `tick_duration` in it, then render callbacks
    run once. A paused controller still renders but never ticks. Ticks never
    interleave with each other or with rendering.
    """

    def __init__(self, tick_rate: float = 60, speed: float = 1.0,
                 max_ticks_per_frame: Optional[int] = None,
                 clock: Callable[[], float] = time.perf_counter):
        self.tick_duration = 1.0 / tick_rate
        self.speed = speed
        self.max_ticks_per_frame = max_ticks_per_frame
        self.clock = clock
        self.running = False
        self.last_time = 0.0
        self.accumulator = 0.0
        self._tick_callbacks: List[Callable[[], None]] = []
        self._render_callbacks: List[Callable[[], None]] = []

    def on_tick(self, callback: Callable[[], None]):
        self._tick_callbacks.append(callback)

    def on_render(self, callback: Callable[[], None]):
        self._render_callbacks.append(callback)

    def start(self, now: Optional[float] = None):
        if not self.running:
            self.running = True
            self.last_time = self.clock() if now is None else now

    def pause(self):
        self.running = False

    def frame(self, now: Optional[float] = None) -> int:
        """Process one frame; returns the number of ticks run."""
        if not self.running:
            self._render()
            return 0
        now = self.clock() if now is None else now
        delta = now - self.last_time
        self.last_time = now
        self.accumulator += delta * self.speed

        ticks = 0
        while self.accumulator >= self.tick_duration:
            for cb in self._tick_callbacks:
                cb()
            self.accumulator -= self.tick_duration
            ticks += 1
            if self.max_ticks_per_frame is not None and ticks >= self.max_ticks_per_frame:
                # drop the backlog instead of spiralling
                self.accumulator = 0.0
                break

        self._render()
        return ticks

    def _render(self):
        for cb in self._render_callbacks:
            cb()
