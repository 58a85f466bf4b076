"""
core/distortion.py — Screen distortion state for Flower Button.

Stand-in for a post-process shader. It only holds numbers; renderer/ui.py
turns them into a horizontal wobble and a colour tint over the frame.

    strength  0..1, wobble amplitude as a fraction of DISTORTION_MAX_PX
    tint      0..1, tint overlay opacity as a fraction of DISTORTION_TINT_ALPHA
    phase     wobble time. Advances with real time, and faster during boosts.

fade_in()/fade_out() ramp strength and tint linearly. boost() pushes the
phase forward by `amount` spread over `seconds`, which reads as a sudden
lurch of the wobble.
"""

from __future__ import annotations
import logging

logger = logging.getLogger(__name__)


class Distortion:
    """Host implementation of the DistortionSink seam.

    Attributes:
        attached:   False while no effect is on screen.
        strength:   Current wobble strength, 0..1.
        tint:       Current tint strength, 0..1.
        phase:      Wobble phase in seconds.
        _target:    Value strength and tint are ramping toward.
        _rate:      Ramp speed in units per second, 0 when idle.
        _boosts:    Active boosts as [phase left to add, phase per second].
    """

    def __init__(self) -> None:
        self.attached: bool  = False
        self.strength: float = 0.0
        self.tint:     float = 0.0
        self.phase:    float = 0.0
        self._target:  float = 0.0
        self._rate:    float = 0.0
        self._boosts:  list[list[float]] = []

    def attach(self) -> None:
        self.attached = True
        self.strength = self.tint = 0.0
        self.phase = 0.0
        self._rate = 0.0
        self._boosts.clear()

    def detach(self) -> None:
        self.attached = False
        self.strength = self.tint = 0.0
        self._rate = 0.0
        self._boosts.clear()

    def _ramp_to(self, target: float, seconds: float) -> None:
        if seconds <= 0:
            self.strength = self.tint = target
            self._rate = 0.0
            return
        self._target = target
        self._rate = abs(target - self.strength) / seconds

    def fade_in(self, seconds: float) -> None:
        if not self.attached:
            self.attach()
        self._ramp_to(1.0, seconds)

    def fade_out(self, seconds: float) -> None:
        """Ramp to zero, then detach."""
        if not self.attached:
            return
        self._ramp_to(0.0, seconds)
        if self.strength == 0.0:
            self.detach()

    def boost(self, amount: float, seconds: float) -> None:
        if not self.attached:
            return
        if seconds <= 0:
            self.phase += amount
            return
        self._boosts.append([amount, amount / seconds])

    def update(self, dt: float) -> None:
        """Advance ramps and boosts by dt real seconds."""
        if not self.attached:
            return

        self.phase += dt
        for boost in self._boosts:
            step = min(boost[0], boost[1] * dt)
            self.phase += step
            boost[0] -= step
        self._boosts = [b for b in self._boosts if b[0] > 0]

        if self._rate > 0.0:
            step = self._rate * dt
            if self.strength < self._target:
                self.strength = min(self._target, self.strength + step)
            else:
                self.strength = max(self._target, self.strength - step)
            self.tint = self.strength
            if self.strength == self._target:
                self._rate = 0.0
                if self._target == 0.0:
                    logger.debug("Distortion faded out, detaching")
                    self.detach()
