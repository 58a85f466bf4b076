"""
core/timer.py — Music-box countdown clock for Flower Button.

The module's own countdown is measured in music-box notes, not seconds.
Notes flow at MUSIC_BOX_NOTE_SPEED per real second, regardless of any time
scale the host applies to the bomb, so slowing the bomb never slows the
puzzle.

Two numbers are derived from the notes left:
    ticks_left()      floor(notes). Each change advances the sapped display.
    display_number()  floor((notes - 1) / 2), 0 below one note. This is the
                      two-digit number on the module and the one the release
                      rule is checked against.

MusicBoxClock owns only its own state. session.py polls the return value
of update() and is_expired() and reacts accordingly.

Usage:
    clock = MusicBoxClock()
    clock.reset()                 # 161 notes, shows 80

    # each frame while held:
    ticked = clock.update(dt)
    if clock.is_expired():
        # time-out path in session.py
"""

import math

from settings import MUSIC_BOX_TOTAL_NOTES, MUSIC_BOX_NOTE_SPEED


class MusicBoxClock:
    """Countdown in notes with tick detection.

    Attributes:
        _notes_left: Notes remaining, never negative.
        _speed:      Notes per real-time second.
    """

    def __init__(self, speed: float = MUSIC_BOX_NOTE_SPEED) -> None:
        """Initialise an expired clock. Call reset() before use."""
        self._notes_left: float = 0.0
        self._speed:      float = speed

    def reset(self, total_notes: int = MUSIC_BOX_TOTAL_NOTES) -> None:
        """Wind the clock back to its full length plus one note.

        The extra note keeps the first displayed number at total_notes / 2.
        """
        self._notes_left = float(total_notes + 1)

    def set_from_display(self, number: int) -> None:
        """Seed the clock so that display_number() returns `number`.

        Used when the button is released during the wind-up: the number the
        player saw is the one they meant.
        """
        self._notes_left = float(number * 2 + 1)

    def update(self, dt: float) -> bool:
        """Advance the clock by dt real seconds.

        Args:
            dt: Unscaled delta time in seconds.

        Returns:
            True if floor(notes) changed, i.e. a display tick happened.
        """
        previous = self.ticks_left()
        self._notes_left = max(0.0, self._notes_left - dt * self._speed)
        return self.ticks_left() != previous

    def notes_left(self) -> float:
        return self._notes_left

    def ticks_left(self) -> int:
        return math.floor(self._notes_left)

    def display_number(self) -> int:
        """Return the two-digit countdown number shown on the module."""
        if self._notes_left < 1:
            return 0
        return math.floor((self._notes_left - 1) / 2)

    def display_text(self) -> str:
        return f"{self.display_number():02d}"

    def is_expired(self) -> bool:
        return self._notes_left <= 0
