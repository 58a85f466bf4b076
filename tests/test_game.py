import pygame
import pytest

from core.game import Game, GameState
from conftest import units_divisible_by_3
from core.session import SessionState
from renderer import ui


def key(event_type, k):
    return pygame.event.Event(event_type, key=k)


def run(game, seconds, dt=0.05):
    for _ in range(round(seconds / dt)):
        game.update(dt)


@pytest.fixture
def game():
    g = Game(modules=2, seed=1)
    run(g, 1.1)
    return g


@pytest.mark.parametrize("modules", [0, 4])
def test_module_count_is_bounded(modules):
    with pytest.raises(ValueError):
        Game(modules=modules)


def test_arming_activates_modules():
    g = Game(modules=3, seed=1)
    assert g.state is GameState.ARMING
    assert all(s.state is SessionState.AWAITING_ACTIVATION for s in g.sessions)

    run(g, 1.1)
    assert g.state is GameState.RUNNING
    assert all(s.state is SessionState.READY_FOR_HOLD for s in g.sessions)


def test_holding_slows_bomb_and_saps_timer(game):
    game.handle_event(key(pygame.KEYDOWN, pygame.K_1))
    assert game.bomb.time_scale == pytest.approx(0.001)

    run(game, 2.4)
    assert game.sessions[0].state is SessionState.HELD
    assert game.bomb.overridden
    assert game.bomb.readout() == game.sessions[0].obfuscator.current
    assert game.bomb.time_left > 298.0


def test_only_one_module_holds_at_a_time(game):
    game.handle_event(key(pygame.KEYDOWN, pygame.K_1))
    game.handle_event(key(pygame.KEYDOWN, pygame.K_2))

    assert game.sessions[0].state is SessionState.WINDING_UP
    assert game.sessions[1].state is SessionState.READY_FOR_HOLD
    assert game.token.held_by(game.sessions[0])


def test_key_up_releases(game):
    game.handle_event(key(pygame.KEYDOWN, pygame.K_1))
    run(game, 2.4)
    game.handle_event(key(pygame.KEYUP, pygame.K_1))
    assert game.sessions[0].state is SessionState.SOLUTION_CHECK_ANIMATION


def test_mouse_presses_the_button_under_the_cursor(game):
    target = ui.button_rect(ui.module_rects(2)[1]).center
    game.handle_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=target, button=1))
    assert game.sessions[1].state is SessionState.WINDING_UP

    game.handle_event(pygame.event.Event(pygame.MOUSEBUTTONUP, pos=(0, 0), button=1))
    assert not game.sessions[1].button_held


def test_manual_toggles(game):
    game.handle_event(key(pygame.KEYDOWN, pygame.K_m))
    assert game.show_manual
    game.handle_event(key(pygame.KEYDOWN, pygame.K_m))
    assert not game.show_manual


def test_explosion_stops_modules_and_restart_builds_new_bomb(game):
    game.handle_event(key(pygame.KEYDOWN, pygame.K_1))
    game.bomb.explode("test")

    assert game.state is GameState.EXPLODED
    assert all(s.exploded for s in game.sessions)
    assert not game.token.held

    old_bomb = game.bomb
    game.handle_event(key(pygame.KEYDOWN, pygame.K_r))
    assert game.state is GameState.ARMING
    assert game.bomb is not old_bomb


def test_every_light_solved_defuses(game):
    for light in game.lights:
        light.handle_pass()
    assert game.state is GameState.DEFUSED
    assert game.bomb.defused


def test_restart_ignored_while_running(game):
    bomb = game.bomb
    game.handle_event(key(pygame.KEYDOWN, pygame.K_r))
    assert game.bomb is bomb


def test_bomb_does_not_count_down_while_arming():
    g = Game(modules=1, seed=1)
    run(g, 0.5)
    assert g.state is GameState.ARMING
    assert g.bomb.time_left == pytest.approx(g.bomb.start_time)

    run(g, 0.6)
    assert g.state is GameState.RUNNING
    assert g.bomb.time_left < g.bomb.start_time


def release_wrong(g):
    """Hold the first button and let go on 14, which its rule rejects."""
    session = g.sessions[0]
    session._rule_source = units_divisible_by_3
    g.handle_event(key(pygame.KEYDOWN, pygame.K_1))
    run(g, 2.4)
    session.clock.set_from_display(14)
    g.handle_event(key(pygame.KEYUP, pygame.K_1))


def test_wrong_release_explodes_bomb_on_third_strike():
    g = Game(modules=1, seed=1)
    run(g, 1.1)
    release_wrong(g)
    run(g, 8.0)

    assert g.bomb.max_strikes == 3
    assert g.bomb.strikes == 3
    assert g.bomb.exploded
    assert g.state is GameState.EXPLODED
    assert g.sessions[0].exploded


def test_wrong_release_without_strike_limit_keeps_striking():
    g = Game(modules=1, seed=1, max_strikes=None)
    run(g, 1.1)
    release_wrong(g)
    run(g, 8.0)

    assert g.bomb.strikes > 3
    assert not g.bomb.exploded
    assert g.state is GameState.RUNNING
