import logging

import pytest

from conftest import FakePenaltySink, FakeTimerSink, hold_until_counting, run_frames
from core.config import FlowerButtonSettings
from core.session import SessionState


def release_on(session, number):
    session.clock.set_from_display(number)
    session.release()


def test_activate_shows_awaiting_hold(make_session):
    session = make_session()
    assert session.state is SessionState.READY_FOR_HOLD
    assert session.countdown_text == "__"


def test_press_before_activation_is_cosmetic(make_session, token):
    session = make_session()
    session.state = SessionState.AWAITING_ACTIVATION
    session.press()
    assert session.button_held
    assert session.cues.played == ["button_down"]
    assert not token.held


def test_press_starts_wind_up(make_session, token):
    session = make_session()
    session.press()

    assert session.state is SessionState.WINDING_UP
    assert token.held_by(session)
    assert session.rule.signature() == "10:96"
    assert session.status.calls == ["set_pass"]
    assert session.distortion.calls[:2] == ["attach", "fade_in"]
    assert session.cues.played[:3] == ["button_down", "press", "wind_up"]
    assert session.countdown_text == "00"


def test_wind_up_counts_to_80_then_holds(make_session):
    session = make_session()
    session.press()
    run_frames(session, 1.6)
    assert session.state is SessionState.WINDING_UP
    assert session.countdown_text == "80"

    run_frames(session, 0.8)
    assert session.state is SessionState.HELD
    assert session.music_box_playing
    assert "music_box_start" in session.cues.played
    assert session.timer_sink.pushed
    assert session.timer_sink.pushed[-1] == session.obfuscator.current


def test_wind_up_count_never_decreases(make_session):
    session = make_session()
    session.press()
    shown = []
    for _ in range(30):
        run_frames(session, 0.05)
        shown.append(int(session.countdown_text))
    assert shown == sorted(shown)


def test_correct_release_solves_and_arms_penalty(make_session, token):
    session = make_session()
    hold_until_counting(session)
    release_on(session, 13)

    assert session.chosen_release_time == 13
    assert session.state is SessionState.SOLUTION_CHECK_ANIMATION
    assert not session.music_box_playing

    run_frames(session, 5.0)
    assert session.state is SessionState.SOLUTION_CHECK_ANIMATION
    assert token.held_by(session)

    run_frames(session, 2.0)
    assert session.state is SessionState.SOLVED
    assert session.solved
    assert session.countdown_text == "ΞΞ"
    assert not token.held
    assert session.status.calls.count("handle_pass") == 1
    assert "solve" in session.cues.played
    assert session.timer_sink.released >= 1

    delivered = sum(session.penalty_sink.amounts)
    assert delivered > 0
    assert delivered + session.penalty.remaining == pytest.approx(34.0)


def test_solve_reveals_signature_on_bomb_timer(make_session):
    session = make_session()
    hold_until_counting(session)
    release_on(session, 13)
    run_frames(session, 5.5)

    assert session.state is SessionState.SOLUTION_CHECK_ANIMATION
    assert session.timer_sink.pushed[-1] == "10:96"


def test_penalty_waits_while_time_is_slowed(make_session, token):
    session = make_session()
    hold_until_counting(session)
    release_on(session, 13)
    run_frames(session, 7.0)
    assert session.state is SessionState.SOLVED
    assert session.penalty.active

    token.acquire("another module")
    before = len(session.penalty_sink.amounts)
    run_frames(session, 1.0)
    assert len(session.penalty_sink.amounts) == before

    token.release("another module")
    run_frames(session, 0.1)
    assert len(session.penalty_sink.amounts) > before


def test_late_correct_release_has_no_penalty(make_session):
    session = make_session()
    hold_until_counting(session)
    release_on(session, 39)
    run_frames(session, 7.5)

    assert session.state is SessionState.SOLVED
    assert session.penalty_sink.amounts == []


def test_zen_mode_penalty_adds_time(make_session):
    session = make_session(zen_mode=True)
    hold_until_counting(session)
    release_on(session, 13)
    run_frames(session, 7.5)

    assert session.penalty_sink.amounts
    assert all(amount < 0 for amount in session.penalty_sink.amounts)


def test_failed_penalty_delivery_discards_balance(make_session):
    session = make_session(penalty_sink=FakePenaltySink(fail=True))
    hold_until_counting(session)
    release_on(session, 13)
    run_frames(session, 7.5)

    assert session.state is SessionState.SOLVED
    assert len(session.penalty_sink.amounts) == 1
    assert not session.penalty.active


def test_wrong_release_strikes_forever(make_session, token):
    session = make_session()
    hold_until_counting(session)
    release_on(session, 14)

    run_frames(session, 5.3)
    assert session.countdown_text == "14"
    assert "oops" in session.cues.played

    run_frames(session, 2.0)
    assert session.state is SessionState.STRIKING
    assert session.status.strikes >= 3
    assert not token.held
    assert not session.penalty.active
    assert int(session.countdown_text) in session.rule.valid_times

    strikes = session.status.strikes
    run_frames(session, 1.0)
    assert session.status.strikes > strikes


@pytest.mark.parametrize("mode", ["zen_mode", "time_mode"])
def test_wrong_release_in_zen_or_time_mode_strikes_three_times(make_session, mode):
    session = make_session(**{mode: True})
    hold_until_counting(session)
    release_on(session, 14)
    run_frames(session, 9.0)

    assert session.status.strikes == 3
    assert session.state is SessionState.READY_FOR_HOLD
    assert session.countdown_text == "__"
    assert session.rule is None
    assert session.obfuscator is None


def test_disabled_forced_detonation_strikes_once(make_session):
    session = make_session(settings=FlowerButtonSettings(disable_forced_detonation=True))
    hold_until_counting(session)
    release_on(session, 14)
    run_frames(session, 8.0)

    assert session.status.strikes == 1
    assert session.state is SessionState.READY_FOR_HOLD
    assert session.status.calls[-1] == "set_inactive"


def test_module_can_be_held_again_after_reset(make_session, token):
    session = make_session(settings=FlowerButtonSettings(disable_forced_detonation=True))
    hold_until_counting(session)
    release_on(session, 14)
    run_frames(session, 8.0)

    session.press()
    assert session.state is SessionState.WINDING_UP
    assert token.held_by(session)


def test_time_out_blinks_then_strikes(make_session, token):
    session = make_session(settings=FlowerButtonSettings(disable_forced_detonation=True))
    hold_until_counting(session)
    session.clock.set_from_display(0)
    run_frames(session, 0.6)

    assert session.state is SessionState.SOLUTION_CHECK_ANIMATION
    assert session.timer_sink.pushed[-1] == "00:00"
    assert "timeout" in session.cues.played
    assert not session.music_box_playing
    assert token.held_by(session)

    run_frames(session, 4.0)
    assert session.status.strikes == 1
    assert not token.held

    run_frames(session, 1.0)
    assert session.state is SessionState.READY_FOR_HOLD


def test_release_during_wind_up_uses_shown_number(make_session):
    session = make_session()
    session.press()
    run_frames(session, 1.0)
    shown = int(session.countdown_text)

    session.release()
    assert session.chosen_release_time == shown
    assert session.state is SessionState.SOLUTION_CHECK_ANIMATION

    run_frames(session, 2.0)
    assert session.state is SessionState.SOLUTION_CHECK_ANIMATION
    assert not session.music_box_playing


def test_second_button_cannot_hold_while_first_is_held(make_session, token, caplog):
    caplog.set_level(logging.INFO)
    first = make_session()
    second = make_session()

    first.press()
    second.press()

    assert token.held_by(first)
    assert second.button_held
    assert second.state is SessionState.READY_FOR_HOLD
    assert second.rule is None

    assert any("Ignoring hold logic" in m for m in caplog.messages)

    second.release()
    assert second.state is SessionState.READY_FOR_HOLD


def test_release_without_press_is_ignored(make_session):
    session = make_session()
    session.release()
    assert session.cues.played == []
    assert session.state is SessionState.READY_FOR_HOLD


def test_double_press_is_ignored(make_session):
    session = make_session()
    session.press()
    rule = session.rule
    session.press()
    assert session.rule is rule
    assert session.cues.played.count("button_down") == 1


@pytest.mark.parametrize("sink", [FakeTimerSink(fail=True), FakeTimerSink(raises=True)])
def test_timer_override_failure_solves_module(make_session, token, sink):
    session = make_session(timer_sink=sink)
    hold_until_counting(session)

    assert session.state is SessionState.SOLVED
    assert session.countdown_text == "Er"
    assert session.status.calls[-1] == "handle_pass"
    assert not token.held
    assert "detach" in session.distortion.calls
    assert not session.music_box_playing
    assert sink.released == 1


def test_bomb_exploded_stops_everything(make_session, token):
    session = make_session()
    hold_until_counting(session)
    session.bomb_exploded()

    assert session.exploded
    assert session.state is SessionState.AWAITING_ACTIVATION
    assert not token.held
    assert session.cues.played[-1] == "music_box_stop"
    assert session.distortion.calls[-1] == "detach"

    session.release()
    session.press()
    assert session.state is SessionState.AWAITING_ACTIVATION
    assert not token.held

    session.activate()
    assert session.state is SessionState.AWAITING_ACTIVATION


def test_bomb_exploded_keeps_solved_state(make_session):
    session = make_session()
    hold_until_counting(session)
    release_on(session, 39)
    run_frames(session, 7.5)
    session.bomb_exploded()
    assert session.state is SessionState.SOLVED


def test_disabled_effects_skip_music_and_distortion(make_session):
    settings = FlowerButtonSettings(disable_musicbox=True, disable_visual_distortion=True)
    session = make_session(settings=settings)
    hold_until_counting(session)
    release_on(session, 13)
    run_frames(session, 7.5)

    assert session.state is SessionState.SOLVED
    assert "music_box_start" not in session.cues.played
    assert "attach" not in session.distortion.calls
    assert "boost" not in session.distortion.calls


def test_timer_override_failure_logs_error_with_context(make_session, caplog):
    session = make_session(timer_sink=FakeTimerSink(fail=True))
    hold_until_counting(session)

    errors = [r.getMessage() for r in caplog.records if r.levelno == logging.ERROR]
    assert len(errors) == 1
    assert "Triggering failsafe" in errors[0]
    assert "state HELD, rule 10:96" in errors[0]
    assert errors[0].startswith(session.log.tag)


def test_failed_penalty_delivery_logs_warning_with_context(make_session, caplog):
    session = make_session(penalty_sink=FakePenaltySink(fail=True))
    hold_until_counting(session)
    release_on(session, 13)
    run_frames(session, 7.5)

    warnings = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "Abolishing penalty" in warnings[0]
    assert "state SOLVED" in warnings[0]
    assert "rule 10:96" in warnings[0]
