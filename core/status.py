"""
core/status.py — Status light of one Flower Button module.

The light has four looks:
    off        module not yet activated, or reset after a strike
    active     not used by the flower button itself but shown after arming
    pass       provisionally green while the button is held or checked
    solved     permanently green

A strike flashes the light red on top of whatever it shows, fading out
linearly over STRIKE_FLASH_S, and reports the strike to the bomb through
the optional `on_strike` callback. handle_pass() reports the solve the same
way through `on_solve`.

game.py reads flash_state() and look() each frame; renderer/ui.py draws them.
"""

from __future__ import annotations
from enum import Enum
from typing import Callable

from settings import COLOR, STRIKE_FLASH_S


class LightLook(Enum):
    OFF    = "off"
    ACTIVE = "active"
    PASS   = "pass"
    SOLVED = "solved"


class StatusLight:
    """Host implementation of the StatusIndicator seam.

    Attributes:
        strikes:       Strikes this module has handed out.
        _look:         Current LightLook.
        _flash_timer:  Seconds remaining in the current strike flash.
    """

    def __init__(
        self,
        on_strike: Callable[[], None] | None = None,
        on_solve: Callable[[], None] | None = None,
    ) -> None:
        self.strikes: int = 0
        self._look = LightLook.OFF
        self._flash_timer: float = 0.0
        self._on_strike = on_strike
        self._on_solve  = on_solve

    @property
    def solved(self) -> bool:
        return self._look is LightLook.SOLVED

    def look(self) -> LightLook:
        return self._look

    def activate(self) -> None:
        if self._look is LightLook.OFF:
            self._look = LightLook.ACTIVE

    # ── StatusIndicator ───────────────────────────────────────────────────────

    def set_pass(self) -> None:
        if not self.solved:
            self._look = LightLook.PASS

    def set_inactive(self) -> None:
        if not self.solved:
            self._look = LightLook.OFF

    def handle_strike(self) -> None:
        self.strikes += 1
        self._flash_timer = STRIKE_FLASH_S
        if self._on_strike is not None:
            self._on_strike()

    def handle_pass(self) -> None:
        if self.solved:
            return
        self._look = LightLook.SOLVED
        if self._on_solve is not None:
            self._on_solve()

    # ── Strike flash ──────────────────────────────────────────────────────────

    def update(self, dt: float) -> None:
        if self._flash_timer > 0.0:
            self._flash_timer = max(0.0, self._flash_timer - dt)

    def color(self) -> tuple:
        if self._look in (LightLook.PASS, LightLook.SOLVED):
            return COLOR["light_pass"]
        return COLOR["light_off"]

    def flash_state(self) -> tuple[tuple | None, float]:
        """Return the strike flash color and alpha, (None, 0.0) when idle.

        Alpha is 1.0 when the strike lands and fades to 0.0.
        """
        if self._flash_timer <= 0.0:
            return None, 0.0
        return COLOR["light_strike"], self._flash_timer / STRIKE_FLASH_S
