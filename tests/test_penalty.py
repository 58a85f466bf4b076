import pytest

from core.penalty import PenaltyMeter, average_scaled_baseline, capped_highest_baseline

UNITS_DIVISIBLE_BY_3 = [t for t in range(100) if (t % 10) % 3 == 0]


@pytest.mark.parametrize(
    ("valid", "expected"),
    [
        (UNITS_DIVISIBLE_BY_3, 30),
        ([10, 20], 20),
        ([4, 51, 99], 4),
        ([60, 70], 0),
        ([], 0),
    ],
)
def test_capped_highest_baseline(valid, expected):
    assert capped_highest_baseline(valid) == expected


@pytest.mark.parametrize(
    ("valid", "expected"),
    [
        ([10, 20], 18),
        ([50], 30),
        ([80, 90], 0),
    ],
)
def test_average_scaled_baseline(valid, expected):
    assert average_scaled_baseline(valid) == expected


def test_early_release_costs_time():
    seconds, baseline = PenaltyMeter().penalty_for(13, UNITS_DIVISIBLE_BY_3)
    assert baseline == 30
    assert seconds == pytest.approx(34.0)


def test_immediate_release_costs_the_maximum():
    seconds, _ = PenaltyMeter().penalty_for(0, UNITS_DIVISIBLE_BY_3)
    assert seconds == pytest.approx(60.0)


@pytest.mark.parametrize("release", [30, 39, 80])
def test_release_at_or_after_baseline_is_free(release):
    seconds, _ = PenaltyMeter().penalty_for(release, UNITS_DIVISIBLE_BY_3)
    assert seconds == 0.0


def test_no_human_valid_time_means_no_penalty():
    meter = PenaltyMeter()
    assert meter.calculate_and_set(0, [60, 70]) == 0
    assert not meter.active


def test_policy_is_pluggable():
    meter = PenaltyMeter(policy=average_scaled_baseline)
    _, baseline = meter.penalty_for(5, [10, 20])
    assert baseline == 18


def test_drain_never_exceeds_balance():
    meter = PenaltyMeter(drain_scale=0.75)
    meter.remaining = 1.0
    assert meter.drain(1.0) == pytest.approx(0.75)
    assert meter.drain(1.0) == pytest.approx(0.25)
    assert meter.drain(1.0) == 0.0
    assert not meter.active


def test_discard():
    meter = PenaltyMeter()
    meter.calculate_and_set(13, UNITS_DIVISIBLE_BY_3)
    assert meter.active
    meter.discard()
    assert meter.remaining == 0.0


def test_penalty_grows_as_release_gets_earlier():
    meter = PenaltyMeter()
    penalties = [meter.penalty_for(r, UNITS_DIVISIBLE_BY_3)[0] for r in range(30, -1, -1)]
    assert penalties[0] == 0.0
    assert all(a < b for a, b in zip(penalties, penalties[1:]))
    assert penalties[-1] <= 60.0
