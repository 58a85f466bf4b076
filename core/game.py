"""
core/game.py — Bomb-level state machine for the Flower Button window.

Game owns one simulated bomb and everything hanging off it:
    - Bomb        (countdown, strikes, time scale, timer override)
    - TimeScaleToken shared by every module on the bomb
    - PuzzleSession + StatusLight per module
    - Distortion  (one screen, shared by the modules)
    - Audio       (optional, injected by main.py)

States:
    ARMING   : lights off, modules not yet active
    RUNNING  : modules accept holds
    EXPLODED : time ran out or strike limit hit
    DEFUSED  : every module solved

Transitions:
    ARMING   → RUNNING   : BOMB_ARMING_S elapsed
    RUNNING  → EXPLODED  : bomb explodes
    RUNNING  → DEFUSED   : last status light turns solved
    EXPLODED / DEFUSED → ARMING : player presses R

Input:
    Mouse down/up on a flower button presses/releases it. Number keys 1-3
    do the same for the module with that number. M toggles the manual.

Frame order matters: the bomb clears last frame's timer override, every
session updates, the bomb runs its countdown, then every session pushes
this frame's override in late_update(). Render reads the final state.
"""

from __future__ import annotations
import logging
import random
from enum import Enum, auto

import pygame

from core.bomb import Bomb
from core.config import FlowerButtonSettings
from core.distortion import Distortion
from core.penalty import BaselinePolicy, capped_highest_baseline
from core.session import PuzzleSession
from core.status import StatusLight
from core.time_scale import TimeScaleToken
from renderer import ui
from rules.manual import legend_rows
from settings import (
    BOMB_ARMING_S,
    BOMB_MAX_STRIKES,
    BOMB_START_S,
    COLOR,
    DEFAULT_MODULES,
    MAX_MODULES,
)

logger = logging.getLogger(__name__)

_HINT = (
    "Hold a flower (click, or keys 1-3). Watch the bomb timer while it is held.\n"
    "Release when the module's number fits the rule.   M: manual   R: new bomb"
)


class GameState(Enum):
    """Top-level state machine states."""
    ARMING   = auto()
    RUNNING  = auto()
    EXPLODED = auto()
    DEFUSED  = auto()


class Game:
    """Orchestrates the bomb, its modules and input.

    Attributes:
        state:        Current GameState.
        bomb:         The Bomb of the current round.
        token:        TimeScaleToken shared by the sessions.
        sessions:     One PuzzleSession per module.
        lights:       One StatusLight per module, same order.
        distortion:   Screen distortion state.
        show_manual:  True while the manual overlay is open.
        _audio:       Audio instance injected via set_audio(). None until set.
        _mouse_held:  Index of the module held with the mouse, or None.
    """

    def __init__(
        self,
        modules: int = DEFAULT_MODULES,
        seed: int | None = None,
        zen_mode: bool = False,
        time_mode: bool = False,
        settings: FlowerButtonSettings | None = None,
        bomb_time: float = BOMB_START_S,
        max_strikes: int | None = BOMB_MAX_STRIKES,
        penalty_policy: BaselinePolicy = capped_highest_baseline,
    ) -> None:
        if not 1 <= modules <= MAX_MODULES:
            raise ValueError(f"A bomb holds 1 to {MAX_MODULES} modules, got {modules}")
        self.module_count = modules
        self.zen_mode     = zen_mode
        self.time_mode    = time_mode
        self.settings     = settings or FlowerButtonSettings()
        self.bomb_time    = bomb_time
        self.max_strikes  = max_strikes
        self._policy      = penalty_policy
        self._rng         = random.Random(seed)
        self._audio       = None

        self.show_manual: bool = False
        self._mouse_held: int | None = None
        self._rects = ui.module_rects(modules)
        self._legend = legend_rows()

        self.start()

    # ── Audio ─────────────────────────────────────────────────────────────────

    def set_audio(self, audio) -> None:
        """Inject the Audio instance after construction.

        Called by main.py after audio.init(). Sessions play cues through
        Game.play(), which stays silent until audio is set.
        """
        self._audio = audio

    def play(self, name: str) -> None:
        if self._audio:
            self._audio.play(name)

    # ── Round setup ───────────────────────────────────────────────────────────

    def start(self) -> None:
        """Build a fresh bomb with fresh modules and start arming it."""
        self.bomb = Bomb(self.bomb_time, self.max_strikes, zen_mode=self.zen_mode)
        self.token = TimeScaleToken(apply=self.bomb.apply_time_scale)
        self.distortion = Distortion()

        self.lights = []
        self.sessions = []
        for _ in range(self.module_count):
            light = StatusLight(on_strike=self.bomb.strike, on_solve=self._check_defused)
            session = PuzzleSession(
                timer_sink=self.bomb,
                penalty_sink=self.bomb,
                status=light,
                time_scale=self.token,
                settings=self.settings,
                cues=self,
                distortion=self.distortion,
                rng=random.Random(self._rng.randrange(2 ** 32)),
                zen_mode=self.zen_mode,
                time_mode=self.time_mode,
                penalty_policy=self._policy,
            )
            self.lights.append(light)
            self.sessions.append(session)

        self.bomb.on_explode(self._on_exploded)
        self.bomb.on_defuse(self._on_defused)

        self._mouse_held = None
        self._arming_left = BOMB_ARMING_S
        self.state = GameState.ARMING
        logger.info("New bomb with %d flower button(s)", self.module_count)

    def _activate(self) -> None:
        for light, session in zip(self.lights, self.sessions):
            light.activate()
            session.activate()
        self.state = GameState.RUNNING

    def _check_defused(self) -> None:
        if all(light.solved for light in self.lights):
            self.bomb.defuse()

    def _on_exploded(self) -> None:
        for session in self.sessions:
            session.bomb_exploded()
        self.play("strike")
        self.state = GameState.EXPLODED

    def _on_defused(self) -> None:
        for session in self.sessions:
            session.bomb_solved()
        self.state = GameState.DEFUSED

    # ── Per-frame update ──────────────────────────────────────────────────────

    def update(self, dt: float) -> None:
        """Advance the bomb and every module by one frame.

        Args:
            dt: Real seconds since the last frame. The bomb applies its own
                time scale; sessions and routines run on real time.
        """
        if self.state is GameState.ARMING:
            self._arming_left -= dt
            if self._arming_left <= 0.0:
                self._activate()

        self.bomb.begin_frame()
        for session in self.sessions:
            session.update(dt)
        for light in self.lights:
            light.update(dt)
        self.distortion.update(dt)
        if self.state is not GameState.ARMING:
            self.bomb.update(dt)
        for session in self.sessions:
            session.late_update()

    # ── Event handling ────────────────────────────────────────────────────────

    def handle_event(self, event: pygame.event.Event) -> None:
        """Route a pygame event to the module it targets."""
        if event.type == pygame.KEYDOWN:
            self._handle_key_down(event)
        elif event.type == pygame.KEYUP:
            index = self._module_for_key(event)
            if index is not None:
                self.sessions[index].release()
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            index = self._module_at(event.pos)
            if index is not None and self.state is not GameState.EXPLODED:
                self._mouse_held = index
                self.sessions[index].press()
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            if self._mouse_held is not None:
                self.sessions[self._mouse_held].release()
                self._mouse_held = None

    def _handle_key_down(self, event: pygame.event.Event) -> None:
        if event.key == pygame.K_m:
            self.show_manual = not self.show_manual
            return
        if event.key == pygame.K_r and self.state in (GameState.EXPLODED, GameState.DEFUSED):
            self.start()
            return
        index = self._module_for_key(event)
        if index is not None and self.state is not GameState.EXPLODED:
            self.sessions[index].press()

    def _module_for_key(self, event: pygame.event.Event) -> int | None:
        if pygame.K_1 <= event.key <= pygame.K_9:
            index = event.key - pygame.K_1
            if index < len(self.sessions):
                return index
        return None

    def _module_at(self, pos: tuple[int, int]) -> int | None:
        for index, rect in enumerate(self._rects):
            if ui.button_rect(rect).collidepoint(pos):
                return index
        return None

    # ── Rendering ─────────────────────────────────────────────────────────────

    def render(self, surface: pygame.Surface) -> None:
        """Draw the bomb, its modules and overlays onto the game surface."""
        surface.fill(COLOR["background"])

        ui.draw_bomb_timer(
            surface,
            self.bomb.readout(),
            self.bomb.strikes,
            zen_mode=self.zen_mode,
            sapped=self.bomb.overridden,
        )
        for index, (rect, session, light) in enumerate(zip(self._rects, self.sessions, self.lights)):
            ui.draw_module(
                surface,
                rect,
                session.countdown_text,
                light.color(),
                light.flash_state(),
                pressed=session.button_held,
                hotkey=str(index + 1),
            )
        ui.draw_manual_strip(surface, _HINT)

        if self.distortion.attached:
            ui.draw_distortion(surface, self.distortion.strength, self.distortion.tint, self.distortion.phase)

        if self.show_manual:
            ui.draw_manual(surface, self._legend)

        if self.state is GameState.EXPLODED:
            ui.draw_banner(surface, "BOOM", "The bomb exploded. Press R for a new bomb.", COLOR["light_strike"])
        elif self.state is GameState.DEFUSED:
            ui.draw_banner(surface, "DEFUSED", "Every flower bloomed. Press R for a new bomb.", COLOR["light_pass"])
