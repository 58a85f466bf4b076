import pytest

from core.status import LightLook, StatusLight
from settings import COLOR


def test_light_starts_off_and_activates():
    light = StatusLight()
    assert light.look() is LightLook.OFF
    light.activate()
    assert light.look() is LightLook.ACTIVE
    assert light.color() == COLOR["light_off"]


def test_pass_and_inactive():
    light = StatusLight()
    light.set_pass()
    assert light.look() is LightLook.PASS
    assert light.color() == COLOR["light_pass"]
    light.set_inactive()
    assert light.look() is LightLook.OFF


def test_strike_flashes_and_reports():
    strikes = []
    light = StatusLight(on_strike=lambda: strikes.append(1))
    light.handle_strike()

    assert light.strikes == 1
    assert strikes == [1]
    assert light.flash_state() == (COLOR["light_strike"], 1.0)

    light.update(0.25)
    assert light.flash_state()[1] == pytest.approx(0.75)

    light.update(5.0)
    assert light.flash_state() == (None, 0.0)


def test_solved_is_final():
    solves = []
    light = StatusLight(on_solve=lambda: solves.append(1))
    light.handle_pass()
    light.handle_pass()
    light.set_inactive()
    light.set_pass()

    assert light.solved
    assert light.look() is LightLook.SOLVED
    assert solves == [1]
