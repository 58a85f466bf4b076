"""
core/penalty.py — Time penalty economy for Flower Button.

A correct release well before the human-plausible window (a bot-like
"instant" solve, or a lucky early release) costs bomb time. The cost is
armed when the module solves and drained from the bomb timer gradually,
PENALTY_TIME_SCALE seconds per real second, only while no flower button is
slowing time.

Penalty curve for a release time r and baseline b (min_penalty_at):
    r >= b        no penalty
    r <  b        lerp(0, MAX_PENALTY_S, 1 - r / b)

The baseline comes from a policy over the rule's valid times. Two are
provided; session.py uses capped_highest_baseline unless told otherwise.
"""

from __future__ import annotations
from statistics import mean
from typing import Callable, Iterable

from settings import (
    AVERAGE_BASELINE_REFERENCE,
    HUMAN_RELEASE_TIME_THRESHOLD,
    MAX_PENALTY_S,
    MIN_PENALTY_MAX_AT,
    PENALTY_TIME_SCALE,
)

BaselinePolicy = Callable[[Iterable[int]], int]


def _human_times(valid_times: Iterable[int]) -> list[int]:
    return [t for t in valid_times if t <= HUMAN_RELEASE_TIME_THRESHOLD]


def capped_highest_baseline(valid_times: Iterable[int]) -> int:
    """Highest human-plausible valid time, capped at MIN_PENALTY_MAX_AT.

    Returns 0 (no penalty ever) when no valid time is human-plausible.
    """
    human = _human_times(valid_times)
    if not human:
        return 0
    return min(max(human), MIN_PENALTY_MAX_AT)


def average_scaled_baseline(valid_times: Iterable[int]) -> int:
    """Mean human-plausible valid time, scaled so an even spread maps to the cap."""
    human = _human_times(valid_times)
    if not human:
        return 0
    scaled = mean(human) * MIN_PENALTY_MAX_AT / AVERAGE_BASELINE_REFERENCE
    return min(round(scaled), MIN_PENALTY_MAX_AT)


def _lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


class PenaltyMeter:
    """Armed penalty balance, drained a little every frame.

    Attributes:
        remaining:     Seconds of penalty still to deliver.
        _policy:       Baseline policy used by calculate_and_set().
        _max_penalty:  Upper bound of a single penalty in seconds.
    """

    def __init__(
        self,
        policy: BaselinePolicy = capped_highest_baseline,
        max_penalty: float = MAX_PENALTY_S,
        drain_scale: float = PENALTY_TIME_SCALE,
    ) -> None:
        self.remaining:    float = 0.0
        self._policy       = policy
        self._max_penalty  = max_penalty
        self._drain_scale  = drain_scale

    def penalty_for(self, release_time: int, valid_times: Iterable[int]) -> tuple[float, int]:
        """Compute a penalty without arming it.

        Returns:
            (penalty seconds, min_penalty_at baseline)
        """
        min_penalty_at = self._policy(valid_times)
        if release_time >= min_penalty_at:
            return 0.0, min_penalty_at
        progress = 1.0 - release_time / min_penalty_at
        return _lerp(0.0, self._max_penalty, progress), min_penalty_at

    def calculate_and_set(self, release_time: int, valid_times: Iterable[int]) -> int:
        """Arm the penalty for a correct release.

        Args:
            release_time: The countdown number the button was released on.
            valid_times:  The rule's valid release times.

        Returns:
            The baseline below which penalties start.
        """
        self.remaining, min_penalty_at = self.penalty_for(release_time, valid_times)
        return min_penalty_at

    def drain(self, dt: float) -> float:
        """Take this frame's share of the penalty off the balance.

        Args:
            dt: Real seconds elapsed this frame.

        Returns:
            Seconds to deliver now. Never more than what was remaining.
        """
        if self.remaining <= 0.0:
            return 0.0
        delta = min(dt * self._drain_scale, self.remaining)
        self.remaining -= delta
        return delta

    def discard(self) -> None:
        self.remaining = 0.0

    @property
    def active(self) -> bool:
        return self.remaining > 0.0
