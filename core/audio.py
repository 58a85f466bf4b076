"""
core/audio.py — Synthesized sound cues for Flower Button.

Every sound is built at start-up from plain math into 16-bit stereo PCM and
handed to pygame.mixer.Sound through its buffer argument. No audio files,
no numpy.

Cues (the names PuzzleSession plays, see core/collaborators.py):
    button_down      low square click          physical press
    button_up        higher square click       physical release
    press            soft E5 bell              a hold was accepted
    wind_up          rising sine sweep         the countdown winds up
    release          G4 → C4 bell drop         suspense begins
    solve            C major bell arpeggio
    strike           harsh square buzz
    timeout          double A4 alarm
    oops             descending square "laugh"
    music_box_start  starts the looping music-box phrase
    music_box_stop   stops it

Audio is an optional collaborator. Sessions fall back to NullCues, and
Audio itself is a silent no-op when the mixer can't start.

Usage:
    audio = Audio()
    audio.init()
    audio.play("press")
"""

from __future__ import annotations
import logging
import math
import struct

import pygame

from core.collaborators import CUE_MUSIC_BOX_START, CUE_MUSIC_BOX_STOP
from settings import MUSIC_BOX_NOTE_SPEED

logger = logging.getLogger(__name__)

_SAMPLE_RATE = 22050
_MAX_AMP     = 32767

# Music-box phrase: (frequency Hz, beats). One beat is one note of the clock.
_NOTE_S = 1.0 / MUSIC_BOX_NOTE_SPEED
_MUSIC_BOX_PHRASE = (
    (659, 1), (784, 1), (1047, 1), (988, 1),
    (784, 1), (659, 1), (587, 2),
    (523, 1), (659, 1), (784, 1), (659, 1),
    (587, 1), (494, 1), (523, 2),
)


def _pack(samples: list[float]) -> bytes:
    """Pack floats in [-1, 1] as interleaved int16 stereo (mono copied to L and R)."""
    frames = bytearray()
    for s in samples:
        v = int(max(-1.0, min(1.0, s)) * _MAX_AMP)
        frames += struct.pack("<hh", v, v)
    return bytes(frames)


def _square(freq: float, duration: float, volume: float = 0.3) -> list[float]:
    n = int(_SAMPLE_RATE * duration)
    period = _SAMPLE_RATE / freq
    return [volume * (1.0 if (i % period) < (period / 2) else -1.0) for i in range(n)]


def _bell(freq: float, duration: float, volume: float = 0.3, decay: float = 6.0) -> list[float]:
    """Sine with its octave overtone and an exponential decay: a music-box tine.

    Args:
        freq:     Fundamental in Hz.
        duration: Length in seconds.
        volume:   Peak amplitude in [0, 1].
        decay:    Decay rate. Higher dies out faster.
    """
    n = int(_SAMPLE_RATE * duration)
    out = []
    for i in range(n):
        t = i / _SAMPLE_RATE
        tone = math.sin(2 * math.pi * freq * t) + 0.35 * math.sin(4 * math.pi * freq * t)
        out.append(volume * 0.75 * tone * math.exp(-decay * t))
    return out


def _sweep(f_start: float, f_end: float, duration: float, volume: float = 0.3) -> list[float]:
    """Sine glide from f_start to f_end."""
    n = int(_SAMPLE_RATE * duration)
    out = []
    phase = 0.0
    for i in range(n):
        freq = f_start + (f_end - f_start) * (i / n)
        phase += 2 * math.pi * freq / _SAMPLE_RATE
        out.append(volume * math.sin(phase))
    return out


def _silence(duration: float) -> list[float]:
    return [0.0] * int(_SAMPLE_RATE * duration)


def _concat(*parts: list[float]) -> list[float]:
    out: list[float] = []
    for part in parts:
        out.extend(part)
    return out


def _fade_out(samples: list[float], tail: float = 0.05) -> list[float]:
    """Linear fade over the last `tail` seconds, to avoid a click at the end."""
    fade_n = min(int(_SAMPLE_RATE * tail), len(samples))
    out = list(samples)
    start = len(out) - fade_n
    for i in range(fade_n):
        out[start + i] *= 1.0 - i / fade_n
    return out


def _music_box_phrase() -> list[float]:
    return _concat(*(_bell(freq, beats * _NOTE_S, volume=0.22, decay=3.5)
                     for freq, beats in _MUSIC_BOX_PHRASE))


class Audio:
    """Host implementation of the CueSink seam.

    Attributes:
        _sounds:        Cue name → pygame.mixer.Sound.
        _music:         Looping music-box phrase, None until init().
        _music_channel: Channel the music box plays on, None when stopped.
        _available:     True if pygame.mixer started.
    """

    def __init__(self) -> None:
        self._sounds: dict[str, pygame.mixer.Sound] = {}
        self._music: pygame.mixer.Sound | None = None
        self._music_channel: pygame.mixer.Channel | None = None
        self._available: bool = False

    def init(self) -> None:
        """Start the mixer and synthesize every cue.

        A machine without an audio device leaves Audio silent.
        """
        try:
            pygame.mixer.pre_init(_SAMPLE_RATE, -16, 2, 512)
            pygame.mixer.init()
        except pygame.error as exc:
            logger.warning("Audio unavailable: %s", exc)
            self._available = False
            return
        self._available = True
        self._generate_sounds()

    def _make(self, name: str, samples: list[float]) -> None:
        self._sounds[name] = pygame.mixer.Sound(buffer=_pack(_fade_out(samples)))

    def _generate_sounds(self) -> None:
        self._make("button_down", _square(180, 0.04, volume=0.20))
        self._make("button_up",   _square(260, 0.04, volume=0.15))
        self._make("press",       _bell(659, 0.40, volume=0.30))
        self._make("wind_up",     _sweep(220, 880, 1.50, volume=0.18))
        self._make("release",     _concat(_bell(392, 0.25), _bell(261, 0.60)))
        self._make("solve", _concat(
            _bell(523, 0.12), _bell(659, 0.12), _bell(784, 0.12), _bell(1047, 0.50),
        ))
        self._make("strike",  _square(110, 0.25, volume=0.30))
        self._make("timeout", _concat(
            _square(440, 0.08), _silence(0.04), _square(440, 0.08),
        ))
        self._make("oops", _concat(
            _square(494, 0.07, volume=0.22), _silence(0.03),
            _square(440, 0.07, volume=0.22), _silence(0.03),
            _square(392, 0.07, volume=0.22), _silence(0.03),
            _square(330, 0.16, volume=0.22),
        ))
        self._music = pygame.mixer.Sound(buffer=_pack(_music_box_phrase()))

    def play(self, name: str) -> None:
        """Play a cue by name. Unknown names and a missing mixer are ignored."""
        if not self._available:
            return
        if name == CUE_MUSIC_BOX_START:
            self._start_music_box()
            return
        if name == CUE_MUSIC_BOX_STOP:
            self._stop_music_box()
            return
        sound = self._sounds.get(name)
        if sound is not None:
            sound.play()

    def _start_music_box(self) -> None:
        self._stop_music_box()
        if self._music is not None:
            self._music_channel = self._music.play(loops=-1)

    def _stop_music_box(self) -> None:
        if self._music_channel is not None:
            self._music_channel.stop()
            self._music_channel = None

    def quit(self) -> None:
        if self._available:
            self._stop_music_box()
            pygame.mixer.quit()
            self._available = False
