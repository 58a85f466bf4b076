"""
core/routines.py — Timed step sequences for Flower Button.

Everything the module animates (wind-up, suspense, strikes, time-out) is a
Routine: an ordered list of Steps, each an action due at a time offset
from the routine start. A RoutineRunner advances every running routine once
per frame with unscaled delta time, so routines keep their pace while the
bomb is slowed down.

A routine may carry a guard, a callable checked before each step runs.
When the guard no longer holds (for example the player released the button
during the wind-up) the routine is cancelled silently and its remaining
steps never run.

Usage:
    runner = RoutineRunner()
    runner.run(Routine(
        [Step(0.0, show_zero), Step(1.5, show_target)],
        guard=lambda: session.state is SessionState.WINDING_UP,
    ))

    # each frame:
    runner.update(dt)
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Iterable


@dataclass(frozen=True)
class Step:
    """One action due `at` seconds after its routine started."""
    at:     float
    action: Callable[[], None]


def ease_out_cubic(t: float) -> float:
    """Cubic ease-out over t in [0, 1]: fast start, gentle landing."""
    t = max(0.0, min(1.0, t))
    return 1.0 - (1.0 - t) ** 3


class Routine:
    """An ordered list of steps played back against elapsed time.

    Attributes:
        name:      Label used in logs and reprs.
        elapsed:   Seconds since the routine started (or since its last loop).
        finished:  True once every step ran, or the routine was cancelled.
        _steps:    Steps sorted by `at`. Equal offsets keep their given order.
        _index:    Index of the next step to run.
        _guard:    Optional callable, checked before each step.
        _repeat:   Loop period in seconds, or None for a one-shot routine.
    """

    def __init__(
        self,
        steps: Iterable[Step],
        guard: Callable[[], bool] | None = None,
        repeat: float | None = None,
        name: str = "routine",
    ) -> None:
        if repeat is not None and repeat <= 0:
            raise ValueError(f"Routine repeat period must be positive, got {repeat}")
        self.name = name
        self._steps:  list[Step] = sorted(steps, key=lambda s: s.at)
        self._guard   = guard
        self._repeat  = repeat
        self._index:  int   = 0
        self.elapsed: float = 0.0
        self.finished: bool = False

    def __repr__(self) -> str:
        return f"Routine({self.name!r}, step {self._index}/{len(self._steps)})"

    def cancel(self) -> None:
        self.finished = True

    def advance(self, dt: float) -> None:
        """Move the routine forward by dt seconds and run every step now due.

        A step whose action cancels this routine (directly or through
        RoutineRunner.stop_all()) ends the advance immediately.
        """
        if self.finished:
            return
        self.elapsed += dt

        while not self.finished:
            if self._index >= len(self._steps):
                if self._repeat is None:
                    self.finished = True
                    return
                if self.elapsed < self._repeat:
                    return
                self.elapsed -= self._repeat
                self._index = 0
                continue

            step = self._steps[self._index]
            if step.at > self.elapsed:
                return

            if self._guard is not None and not self._guard():
                self.cancel()
                return

            self._index += 1
            step.action()


class RoutineRunner:
    """Advances running routines once per frame.

    Routines started from inside another routine's step are picked up by
    the same runner. Their steps due at 0 run at once, the rest from the
    next update on.
    """

    def __init__(self) -> None:
        self._routines: list[Routine] = []

    def __len__(self) -> int:
        return len(self._routines)

    def run(self, routine: Routine) -> Routine:
        """Start a routine and run its steps due at time 0.

        Returns:
            The same routine, so callers can keep a handle to cancel it.
        """
        self._routines.append(routine)
        routine.advance(0.0)
        if routine.finished and routine in self._routines:
            self._routines.remove(routine)
        return routine

    def update(self, dt: float) -> None:
        for routine in list(self._routines):
            routine.advance(dt)
        self._routines = [r for r in self._routines if not r.finished]

    def stop_all(self) -> None:
        for routine in self._routines:
            routine.cancel()
        self._routines.clear()
