import pytest

from core.distortion import Distortion


def test_fade_in_attaches_and_ramps():
    distortion = Distortion()
    distortion.fade_in(0.5)
    assert distortion.attached
    assert distortion.strength == 0.0

    distortion.update(0.25)
    assert distortion.strength == pytest.approx(0.5)
    assert distortion.tint == pytest.approx(0.5)

    distortion.update(1.0)
    assert distortion.strength == 1.0


def test_fade_out_detaches():
    distortion = Distortion()
    distortion.fade_in(0.0)
    assert distortion.strength == 1.0

    distortion.fade_out(0.25)
    distortion.update(0.1)
    assert distortion.attached
    distortion.update(0.5)
    assert not distortion.attached
    assert distortion.strength == 0.0


def test_boost_pushes_phase_forward():
    distortion = Distortion()
    distortion.attach()
    distortion.boost(5.0, 1.0)
    distortion.update(0.5)
    assert distortion.phase == pytest.approx(3.0)

    distortion.update(2.0)
    assert distortion.phase == pytest.approx(7.5)


def test_detached_distortion_ignores_boosts_and_updates():
    distortion = Distortion()
    distortion.boost(5.0, 1.0)
    distortion.fade_out(1.0)
    distortion.update(1.0)
    assert not distortion.attached
    assert distortion.phase == 0.0
