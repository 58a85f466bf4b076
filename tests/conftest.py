import random

import pytest

from core.config import FlowerButtonSettings
from core.session import PuzzleSession
from core.time_scale import TimeScaleToken
from rules.generator import compile_rule
from rules.tree import Obj, Subject, Verb


class FakeTimerSink:
    def __init__(self, fail=False, raises=False):
        self.fail = fail
        self.raises = raises
        self.pushed = []
        self.released = 0

    def push_override(self, text):
        if self.raises:
            raise RuntimeError("timer display is gone")
        self.pushed.append(text)
        return not self.fail

    def release_override(self):
        self.released += 1


class FakePenaltySink:
    def __init__(self, fail=False):
        self.fail = fail
        self.amounts = []

    def subtract(self, seconds):
        self.amounts.append(seconds)
        return not self.fail


class FakeStatus:
    def __init__(self):
        self.calls = []

    def set_pass(self):
        self.calls.append("set_pass")

    def set_inactive(self):
        self.calls.append("set_inactive")

    def handle_strike(self):
        self.calls.append("handle_strike")

    def handle_pass(self):
        self.calls.append("handle_pass")

    @property
    def strikes(self):
        return self.calls.count("handle_strike")


class FakeCues:
    def __init__(self):
        self.played = []

    def play(self, name):
        self.played.append(name)


class FakeDistortion:
    def __init__(self):
        self.calls = []

    def attach(self):
        self.calls.append("attach")

    def detach(self):
        self.calls.append("detach")

    def fade_in(self, seconds):
        self.calls.append("fade_in")

    def fade_out(self, seconds):
        self.calls.append("fade_out")

    def boost(self, amount, seconds):
        self.calls.append("boost")


def units_divisible_by_3(_rng):
    """Valid release times end in 0, 3, 6 or 9."""
    return compile_rule(Subject.UNITS_DIGIT, Verb.IS_DIVISIBLE_BY, Obj.ADDITIONAL_DIGIT, 3)


def run_frames(session, seconds, dt=0.05):
    """Drive a session the way game.py does, one frame at a time."""
    for _ in range(round(seconds / dt)):
        session.update(dt)
        session.late_update()


def hold_until_counting(session):
    """Press the button and let the wind-up finish."""
    session.press()
    run_frames(session, 2.4)


@pytest.fixture
def token():
    return TimeScaleToken()


@pytest.fixture
def make_session(token):
    """Factory for an activated session wired to fakes.

    The fakes are reachable as attributes of the returned session.
    """

    def _make(**overrides):
        kwargs = dict(
            timer_sink=FakeTimerSink(),
            penalty_sink=FakePenaltySink(),
            status=FakeStatus(),
            time_scale=token,
            settings=FlowerButtonSettings(),
            cues=FakeCues(),
            distortion=FakeDistortion(),
            rng=random.Random(7),
            rule_source=units_divisible_by_3,
        )
        kwargs.update(overrides)
        session = PuzzleSession(**kwargs)
        session.activate()
        return session

    return _make
