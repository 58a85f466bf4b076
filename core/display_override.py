"""
core/display_override.py — Obfuscated bomb timer readout for Flower Button.

While the button is held, the module "saps" the bomb timer and replaces its
MM:SS text with a readout that changes on every music-box tick. Each of the
four positions leaks one preferred digit of the rule signature:

    - A position without a preference draws from a bag holding a shuffled
      0-9. The bag is refilled when empty, so every digit shows once before
      any digit repeats.
    - A position with a preference shows the preferred digit, then 1 or 2
      other digits, then the preferred digit again, and so on. The other
      digits come from a bag that never contains the preferred one.

The preferred digit therefore shows at least once every three ticks but
never twice in a row. It is never static, yet an attentive player can
recover it.

Usage:
    obfuscator = DisplayObfuscator(rule.preferred_digits, rng)
    text = obfuscator.tick()                     # "38:17"
    text = obfuscator.show_preferred_once("5")   # "16:05" for "16:0#"
"""

from __future__ import annotations
import random
from collections import deque
from typing import Sequence

from settings import NON_PREFERRED_MIN, NON_PREFERRED_MAX

DISPLAY_POSITIONS = 4


def format_readout(digits: Sequence[int | None], unset: str = "-") -> str:
    """Format four digits as a timer readout.

    Positions 0-1 are minutes, 2-3 are seconds.

    Args:
        digits: Four digits, None for an unset position.
        unset:  Character rendered for a None position.

    Returns:
        A string like "12:34".
    """
    chars = [unset if d is None else str(d) for d in digits]
    split = len(chars) - 2
    return "".join(chars[:split]) + ":" + "".join(chars[split:])


class DisplayObfuscator:
    """Generator of obfuscated MM:SS readouts leaking preferred digits.

    Attributes:
        preferred_digits: Signature digits, highest position first. None
                          means no preference for that position.
        current:          The readout produced by the last tick or override.
        _bags:            Per-position queue of upcoming non-preferred digits.
        _gap:             Per-position count of non-preferred digits still
                          to show before the preferred digit may show again.
    """

    def __init__(
        self,
        preferred_digits: Sequence[int | None],
        rng: random.Random | None = None,
    ) -> None:
        if len(preferred_digits) != DISPLAY_POSITIONS:
            raise ValueError(
                f"Expected {DISPLAY_POSITIONS} preferred digits, got {len(preferred_digits)}"
            )
        self.preferred_digits: tuple[int | None, ...] = tuple(preferred_digits)
        self._rng = rng or random.Random()

        # First appearance may be immediate, later ones wait 1-2 ticks
        self._gap:  list[int] = [
            self._rng.randint(0, NON_PREFERRED_MAX) for _ in self.preferred_digits
        ]
        self._bags: list[deque[int]] = [deque() for _ in self.preferred_digits]

        self.current: str = ""

    # ── Digit picking ─────────────────────────────────────────────────────────

    def _refill_bag(self, index: int) -> None:
        digits = list(range(10))
        self._rng.shuffle(digits)
        preferred = self.preferred_digits[index]
        self._bags[index].extend(d for d in digits if d != preferred)

    def _next_non_preferred(self, index: int) -> int:
        bag = self._bags[index]
        if not bag:
            self._refill_bag(index)
        return bag.popleft()

    def _next_digit(self, index: int) -> int:
        """Advance one position by one tick and return its digit."""
        preferred = self.preferred_digits[index]
        if preferred is None:
            return self._next_non_preferred(index)

        if self._gap[index] == 0:
            self._gap[index] = self._rng.randint(NON_PREFERRED_MIN, NON_PREFERRED_MAX)
            return preferred

        self._gap[index] -= 1
        return self._next_non_preferred(index)

    # ── Readouts ──────────────────────────────────────────────────────────────

    def tick(self) -> str:
        """Advance every position by one tick and return the new readout."""
        digits = [self._next_digit(i) for i in range(len(self.preferred_digits))]
        self.current = format_readout(digits)
        return self.current

    def show_preferred_once(self, unset: str | int) -> str:
        """Show the signature itself, bypassing the tick schedule.

        Args:
            unset: Character (or digit) standing in for a position without
                   a preferred digit.

        Returns:
            The signature readout, also stored in current.
        """
        self.current = format_readout(self.preferred_digits, str(unset))
        return self.current

    def override(self, text: str) -> None:
        """Force a literal readout, e.g. "00:00" when time runs out."""
        self.current = text
