"""
core/bomb.py — Simulated bomb hosting Flower Button modules.

The bomb owns the countdown the flower button "saps". It implements two of
the session seams:

    TimerDisplaySink  push_override() replaces the readout for one frame.
                      begin_frame() clears it, so a module that stops
                      pushing gives the timer back without cleanup.
    PenaltySink       subtract() takes seconds off the countdown.

and apply_time_scale(), the callback of the shared TimeScaleToken.

In zen mode the timer counts up from zero and never explodes on time.

Usage:
    bomb = Bomb(start_time=300.0)
    bomb.begin_frame()
    bomb.update(dt)
    text = bomb.readout()
"""

from __future__ import annotations
import logging
from typing import Callable

from settings import BOMB_START_S, BOMB_MAX_STRIKES, NORMAL_TIME_SCALE

logger = logging.getLogger(__name__)


def format_bomb_time(seconds: float) -> str:
    """Format seconds as MM:SS, or SS.cc under one minute."""
    seconds = max(0.0, seconds)
    if seconds < 60.0:
        return f"{int(seconds):02d}.{int(seconds * 100) % 100:02d}"
    minutes, secs = divmod(int(seconds), 60)
    return f"{minutes:02d}:{secs:02d}"


class Bomb:
    """Countdown, strikes and time scale of one bomb.

    Attributes:
        time_left:    Seconds on the countdown (seconds elapsed in zen mode).
        time_scale:   Multiplier applied to dt in update().
        strikes:      Strikes received.
        max_strikes:  Strike limit, None for unlimited.
        zen_mode:     Count up instead of down.
        exploded:     True once time ran out or strikes hit the limit.
        defused:      True once every module is solved.
        _override:    Readout pushed for the current frame, or None.
    """

    def __init__(
        self,
        start_time: float = BOMB_START_S,
        max_strikes: int | None = BOMB_MAX_STRIKES,
        zen_mode: bool = False,
    ) -> None:
        self.start_time  = start_time
        self.max_strikes = max_strikes
        self.zen_mode    = zen_mode
        self.time_left:  float = 0.0 if zen_mode else start_time
        self.time_scale: float = NORMAL_TIME_SCALE
        self.strikes:    int   = 0
        self.exploded:   bool  = False
        self.defused:    bool  = False
        self._override:  str | None = None
        self._on_explode: list[Callable[[], None]] = []
        self._on_defuse:  list[Callable[[], None]] = []

    def on_explode(self, callback: Callable[[], None]) -> None:
        self._on_explode.append(callback)

    def on_defuse(self, callback: Callable[[], None]) -> None:
        self._on_defuse.append(callback)

    @property
    def finished(self) -> bool:
        return self.exploded or self.defused

    # ── Frame ─────────────────────────────────────────────────────────────────

    def begin_frame(self) -> None:
        self._override = None

    def update(self, dt: float) -> None:
        """Run the countdown by dt real seconds, scaled by time_scale."""
        if self.finished:
            return
        if self.zen_mode:
            self.time_left += dt * self.time_scale
            return
        self.time_left = max(0.0, self.time_left - dt * self.time_scale)
        if self.time_left <= 0.0:
            self.explode("time ran out")

    def readout(self) -> str:
        if self._override is not None:
            return self._override
        return format_bomb_time(self.time_left)

    @property
    def overridden(self) -> bool:
        return self._override is not None

    # ── Outcomes ──────────────────────────────────────────────────────────────

    def strike(self) -> None:
        if self.finished:
            return
        self.strikes += 1
        logger.info("Strike %d", self.strikes)
        if self.max_strikes is not None and self.strikes >= self.max_strikes:
            self.explode("too many strikes")

    def explode(self, reason: str) -> None:
        if self.finished:
            return
        self.exploded = True
        self.time_scale = NORMAL_TIME_SCALE
        logger.info("Bomb exploded: %s", reason)
        for callback in self._on_explode:
            callback()

    def defuse(self) -> None:
        if self.finished:
            return
        self.defused = True
        self.time_scale = NORMAL_TIME_SCALE
        logger.info("Bomb defused with %s left", format_bomb_time(self.time_left))
        for callback in self._on_defuse:
            callback()

    # ── TimerDisplaySink ──────────────────────────────────────────────────────

    def push_override(self, text: str) -> bool:
        self._override = text
        return True

    def release_override(self) -> None:
        self._override = None

    # ── PenaltySink ───────────────────────────────────────────────────────────

    def subtract(self, seconds: float) -> bool:
        if self.finished:
            return False
        self.time_left = max(0.0, self.time_left - seconds)
        if not self.zen_mode and self.time_left <= 0.0:
            self.explode("time ran out")
        return True

    # ── TimeScaleToken callback ───────────────────────────────────────────────

    def apply_time_scale(self, scale: float) -> None:
        if self.finished:
            return
        self.time_scale = scale
