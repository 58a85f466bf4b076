"""
core/collaborators.py — Interfaces between a PuzzleSession and its host.

The session never touches the window, the mixer or the bomb directly. It
talks to these five seams, which the pygame host implements in bomb.py,
status.py, audio.py and distortion.py, and which tests replace with small
fakes.

    TimerDisplaySink  the bomb timer readout the session overrides
    PenaltySink       where penalty seconds go
    StatusIndicator   the module's status light
    CueSink           sound cues by name
    DistortionSink    the screen distortion effect

Cues and distortion are optional. NullCues and NullDistortion stand in
when a host has no audio or no visual effect.
"""

from __future__ import annotations
from typing import Protocol

# Cue names a session plays
CUE_BUTTON_DOWN      = "button_down"
CUE_BUTTON_UP        = "button_up"
CUE_PRESS            = "press"
CUE_RELEASE          = "release"
CUE_WIND_UP          = "wind_up"
CUE_MUSIC_BOX_START  = "music_box_start"
CUE_MUSIC_BOX_STOP   = "music_box_stop"
CUE_SOLVE            = "solve"
CUE_STRIKE           = "strike"
CUE_TIMEOUT          = "timeout"
CUE_OOPS             = "oops"


class TimerDisplaySink(Protocol):
    def push_override(self, text: str) -> bool:
        """Show `text` instead of the bomb timer for this frame. False on failure."""
        ...

    def release_override(self) -> None:
        ...


class PenaltySink(Protocol):
    def subtract(self, seconds: float) -> bool:
        """Take `seconds` off the bomb timer (negative adds time). False on failure."""
        ...


class StatusIndicator(Protocol):
    def set_pass(self) -> None: ...
    def set_inactive(self) -> None: ...
    def handle_strike(self) -> None: ...
    def handle_pass(self) -> None: ...


class CueSink(Protocol):
    def play(self, name: str) -> None: ...


class DistortionSink(Protocol):
    def attach(self) -> None: ...
    def detach(self) -> None: ...
    def fade_in(self, seconds: float) -> None: ...
    def fade_out(self, seconds: float) -> None: ...
    def boost(self, amount: float, seconds: float) -> None: ...


class NullCues:
    """Plays nothing."""

    def play(self, name: str) -> None:
        pass


class NullDistortion:
    """Distorts nothing."""

    def attach(self) -> None:
        pass

    def detach(self) -> None:
        pass

    def fade_in(self, seconds: float) -> None:
        pass

    def fade_out(self, seconds: float) -> None:
        pass

    def boost(self, amount: float, seconds: float) -> None:
        pass
