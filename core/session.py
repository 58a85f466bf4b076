"""
core/session.py — State machine of one Flower Button module.

PuzzleSession sequences a single module through its life:

    AWAITING_ACTIVATION → READY_FOR_HOLD          activate()
    READY_FOR_HOLD      → WINDING_UP              press(), if time could be slowed
    WINDING_UP          → HELD                    wind-up routine ends, or release()
    HELD                → SOLUTION_CHECK_ANIMATION release(), or the countdown hits 0
    SOLUTION_CHECK_ANIMATION → SOLVED_RESTORING_TIME → SOLVED   correct release
    SOLUTION_CHECK_ANIMATION → STRIKING → READY_FOR_HOLD        wrong release / time-out

While the button is held the module slows the bomb down (through the shared
TimeScaleToken), overrides the bomb timer with an obfuscated readout that
leaks the rule signature, and counts down on its own music-box clock. The
player releases on a countdown number satisfying the rule from the manual.

Session does NOT draw, play sounds or touch the bomb itself. It talks to
the host through the seams in core/collaborators.py and exposes its display
text and state for the renderer to read.

Frame protocol (game.py, for every session on a bomb):
    session.update(dt)        # dt in real, unscaled seconds
    ...
    session.late_update()     # pushes the timer override

Usage:
    session = PuzzleSession(
        timer_sink=bomb, penalty_sink=bomb, status=light, time_scale=token,
    )
    session.activate()
    session.press()
    session.release()
"""

from __future__ import annotations
import math
import random
from enum import Enum, auto
from typing import Callable

from core.collaborators import (
    CUE_BUTTON_DOWN,
    CUE_BUTTON_UP,
    CUE_MUSIC_BOX_START,
    CUE_MUSIC_BOX_STOP,
    CUE_OOPS,
    CUE_PRESS,
    CUE_RELEASE,
    CUE_SOLVE,
    CUE_STRIKE,
    CUE_TIMEOUT,
    CUE_WIND_UP,
    CueSink,
    DistortionSink,
    NullCues,
    NullDistortion,
    PenaltySink,
    StatusIndicator,
    TimerDisplaySink,
)
from core.config import FlowerButtonSettings
from core.display_override import DisplayObfuscator
from core.module_log import ModuleLogger
from core.penalty import BaselinePolicy, PenaltyMeter, capped_highest_baseline
from core.routines import Routine, RoutineRunner, Step, ease_out_cubic
from core.time_scale import TimeScaleToken
from core.timer import MusicBoxClock
from rules.generator import GeneratedRule, generate_rule
from settings import (
    COUNTDOWN_TEXT_AWAITING_HOLD,
    COUNTDOWN_TEXT_AWAITING_LIGHTS,
    COUNTDOWN_TEXT_ERROR,
    COUNTDOWN_TEXT_SOLVED,
    DISTORTION_DISAPPEAR_S,
    MODULE_NAME,
    SOLUTION_CHECK_BOOSTS,
    SOLUTION_CHECK_LIGHT_OFF_AT,
    SOLUTION_CHECK_OOPS_S,
    SOLUTION_CHECK_RESTORE_AT,
    SOLUTION_CHECK_REVEAL_STEPS,
    SOLUTION_CHECK_SUSPENSE_END,
    SOLUTION_CHECK_TICKS,
    STRIKE_FLASH_S,
    STRIKE_INTERVAL_S,
    TIMED_OUT_READOUT,
    TIMEOUT_BLINK_S,
    TIMEOUT_BLINKS,
    WIND_UP_COUNT_S,
    WIND_UP_COUNT_STEPS,
    WIND_UP_DISTORTION_APPEAR_S,
    WIND_UP_POST_WAIT_S,
    ZEN_MODE_STRIKES,
)


class SessionState(Enum):
    """States of one module."""
    AWAITING_ACTIVATION      = auto()
    READY_FOR_HOLD           = auto()
    WINDING_UP               = auto()
    HELD                     = auto()
    SOLUTION_CHECK_ANIMATION = auto()
    STRIKING                 = auto()
    SOLVED_RESTORING_TIME    = auto()   # solved, timer no longer overridden
    SOLVED                   = auto()


# States in which the bomb timer shows the obfuscated readout
_SAPPING_STATES = (SessionState.HELD, SessionState.SOLUTION_CHECK_ANIMATION)


class PuzzleSession:
    """One flower button: hold, release, check, solve or strike.

    Attributes:
        state:               Current SessionState.
        countdown_text:      Two characters on the module's own display.
        button_held:         True while the button is physically down.
        exploded:            True once the bomb exploded. The session is inert.
        clock:               Music-box countdown.
        penalty:             Armed time penalty, delivered by update().
        rule:                Rule of the current hold, None between holds.
        obfuscator:          Readout generator of the current hold.
        chosen_release_time: Countdown number the button was released on.
        music_box_playing:   True while the music-box cue is running.
        log:                 Tagged logger, "[Flower Button #n]".
    """

    def __init__(
        self,
        *,
        timer_sink: TimerDisplaySink,
        penalty_sink: PenaltySink,
        status: StatusIndicator,
        time_scale: TimeScaleToken,
        settings: FlowerButtonSettings | None = None,
        cues: CueSink | None = None,
        distortion: DistortionSink | None = None,
        rng: random.Random | None = None,
        zen_mode: bool = False,
        time_mode: bool = False,
        penalty_policy: BaselinePolicy = capped_highest_baseline,
        rule_source: Callable[[random.Random], GeneratedRule] = generate_rule,
        name: str = MODULE_NAME,
    ) -> None:
        self.timer_sink   = timer_sink
        self.penalty_sink = penalty_sink
        self.status       = status
        self.time_scale   = time_scale
        self.settings     = settings or FlowerButtonSettings()
        self.cues         = cues or NullCues()
        self.distortion   = distortion or NullDistortion()
        self.zen_mode     = zen_mode
        self.time_mode    = time_mode
        self._rng         = rng or random.Random()
        self._rule_source = rule_source

        self.log = ModuleLogger(name)

        self.state:          SessionState = SessionState.AWAITING_ACTIVATION
        self.countdown_text: str  = COUNTDOWN_TEXT_AWAITING_LIGHTS
        self.button_held:    bool = False
        self.exploded:       bool = False

        self.clock   = MusicBoxClock()
        self.penalty = PenaltyMeter(penalty_policy)

        self.rule:       GeneratedRule | None     = None
        self.obfuscator: DisplayObfuscator | None = None
        self.chosen_release_time: int | None      = None
        self.music_box_playing: bool = False

        self._routines = RoutineRunner()

    def __repr__(self) -> str:
        return f"PuzzleSession({self.log.tag}, {self.state.name})"

    # ── Host events ───────────────────────────────────────────────────────────

    def activate(self) -> None:
        """Bomb lights came on: accept holds from now on."""
        if self.exploded or self.state is not SessionState.AWAITING_ACTIVATION:
            return
        self.state = SessionState.READY_FOR_HOLD
        self.countdown_text = COUNTDOWN_TEXT_AWAITING_HOLD

    def bomb_exploded(self) -> None:
        """Stop everything. The session ignores all further input."""
        self._routines.stop_all()
        self.time_scale.release(self)
        self._stop_music_box()
        self.distortion.detach()
        self.penalty.discard()
        self.exploded = True
        if self.state is not SessionState.SOLVED:
            self.state = SessionState.AWAITING_ACTIVATION

    def bomb_solved(self) -> None:
        self.penalty.discard()

    # ── Button ────────────────────────────────────────────────────────────────

    def press(self) -> None:
        """Button went down. Starts a hold if the module is ready for one."""
        if self.button_held:
            return
        self.button_held = True
        self._cue(CUE_BUTTON_DOWN)

        if self.exploded or self.state is not SessionState.READY_FOR_HOLD:
            return

        self.log.info("Holding the button...")
        if not self.time_scale.acquire(self):
            self.log.info(
                "Another flower button is already held. Ignoring hold logic. "
                "Please hold this button later."
            )
            return

        self._cue(CUE_PRESS)

        self.log.line()
        self.rule = self._rule_source(self._rng)
        self.obfuscator = DisplayObfuscator(self.rule.preferred_digits, self._rng)
        self.log.info("Rule: %s", self.rule.description)
        self.log.info("Preferred digits: %s", self.rule.signature())
        self.log.info(
            "Valid release times: %s",
            ", ".join(f"{t:02d}" for t in sorted(self.rule.valid_times)),
        )
        self.log.line()

        self.clock.reset()
        self.chosen_release_time = None
        self.status.set_pass()

        self.state = SessionState.WINDING_UP
        self._routines.run(self._wind_up_routine())

    def release(self) -> None:
        """Button came up. Locks in the countdown number and checks it."""
        if not self.button_held:
            return
        self.button_held = False
        self._cue(CUE_BUTTON_UP)

        if self.state is SessionState.WINDING_UP:
            self.log.info("Button released during wind-up.")
            self.state = SessionState.HELD
            self._seed_clock_from_display()

        if self.state is not SessionState.HELD:
            return

        self.log.info("Button released.")
        self._stop_music_box()
        self.chosen_release_time = self.clock.display_number()
        self.log.info(
            "Button was released with %02d on the module's countdown display.",
            self.chosen_release_time,
        )
        self.state = SessionState.SOLUTION_CHECK_ANIMATION
        self._routines.run(self._solution_check_routine())

    # ── Frame ─────────────────────────────────────────────────────────────────

    def update(self, dt: float) -> None:
        """Advance routines, the countdown and penalty delivery.

        Args:
            dt: Real (unscaled) seconds since the last frame.
        """
        self._routines.update(dt)

        if self.state is SessionState.HELD:
            self._update_countdown(dt)

        self._deliver_penalty(dt)

    def late_update(self) -> None:
        """Push this frame's readout to the bomb timer while sapping it."""
        if not self.sapping or self.obfuscator is None:
            return
        if not self._call_sink(self.timer_sink.push_override, self.obfuscator.current):
            self._fail_safe()

    @property
    def sapping(self) -> bool:
        return self.state in _SAPPING_STATES

    @property
    def solved(self) -> bool:
        return self.state in (SessionState.SOLVED_RESTORING_TIME, SessionState.SOLVED)

    # ── Countdown ─────────────────────────────────────────────────────────────

    def _update_countdown(self, dt: float) -> None:
        ticked = self.clock.update(dt)

        if self.clock.is_expired():
            self.state = SessionState.SOLUTION_CHECK_ANIMATION
            self._stop_music_box()
            self._routines.run(self._time_out_routine())
            return

        if ticked and self.obfuscator is not None:
            self.obfuscator.tick()
        self.countdown_text = self.clock.display_text()

    def _seed_clock_from_display(self) -> None:
        try:
            number = int(self.countdown_text)
        except ValueError:
            return
        self.clock.set_from_display(number)

    # ── Penalty ───────────────────────────────────────────────────────────────

    def _deliver_penalty(self, dt: float) -> None:
        if not self.penalty.active or self.time_scale.held:
            return
        delta = self.penalty.drain(dt)
        if self.zen_mode:
            delta = -delta
        if not self._call_sink(self.penalty_sink.subtract, delta):
            self.log.warning(
                "Could not deliver penalty (%s, %.3f seconds left). Abolishing penalty.",
                self._context(), self.penalty.remaining,
            )
            self.penalty.discard()

    def _arm_penalty(self) -> None:
        baseline = self.penalty.calculate_and_set(self.chosen_release_time, self.rule.valid_times)
        self.log.info("Penalties start below %02d.", baseline)
        if self.penalty.active:
            self.log.info(
                "Time penalty of %.3f seconds will be delivered over time.",
                self.penalty.remaining,
            )
        else:
            self.log.info("No time penalty will be delivered.")

    # ── Collaborator calls ────────────────────────────────────────────────────

    def _call_sink(self, method: Callable, *args) -> bool:
        """Call a host method. Exceptions are logged and count as failure."""
        try:
            result = method(*args)
        except Exception:
            self.log.exception("An exception has occurred in %s.", getattr(method, "__qualname__", method))
            return False
        return result is not False

    def _context(self) -> str:
        """State and rule signature, for failure logs."""
        signature = self.rule.signature() if self.rule is not None else "no rule"
        return f"state {self.state.name}, rule {signature}"

    def _fail_safe(self) -> None:
        self.log.error(
            "Could not sap timer display (%s). Triggering failsafe. Module solved.",
            self._context(),
        )
        self.countdown_text = COUNTDOWN_TEXT_ERROR
        self.state = SessionState.SOLVED
        self.status.handle_pass()

        self.time_scale.release(self)
        self.distortion.detach()
        self._stop_music_box()
        self._call_sink(self.timer_sink.release_override)
        self._routines.stop_all()

    def _cue(self, name: str) -> None:
        self.cues.play(name)

    def _start_music_box(self) -> None:
        if self.settings.disable_musicbox:
            return
        self.music_box_playing = True
        self._cue(CUE_MUSIC_BOX_START)

    def _stop_music_box(self) -> None:
        if not self.music_box_playing:
            return
        self.music_box_playing = False
        self._cue(CUE_MUSIC_BOX_STOP)

    def _end_distortion(self) -> None:
        self.distortion.fade_out(DISTORTION_DISAPPEAR_S)

    def _show_number(self, number: int) -> None:
        self.countdown_text = f"{number:02d}"

    # ── Routines ──────────────────────────────────────────────────────────────

    def _in_state(self, *states: SessionState) -> Callable[[], bool]:
        return lambda: self.state in states

    def _wind_up_routine(self) -> Routine:
        """Distortion in, count the display up to the start number, start the music."""
        target = self.clock.display_number()

        def begin() -> None:
            self._cue(CUE_WIND_UP)
            if not self.settings.disable_visual_distortion:
                self.distortion.attach()
                self.distortion.fade_in(WIND_UP_DISTORTION_APPEAR_S)

        def begin_countdown() -> None:
            self._start_music_box()
            self.obfuscator.tick()
            self.countdown_text = self.clock.display_text()
            self.state = SessionState.HELD
            self.log.info("Wind-up finished, counting down from %02d.", target)

        steps = [Step(0.0, begin)]
        for i in range(WIND_UP_COUNT_STEPS):
            progress = i / WIND_UP_COUNT_STEPS
            value = math.floor(target * ease_out_cubic(progress))
            steps.append(Step(WIND_UP_COUNT_S * progress, lambda v=value: self._show_number(v)))
        steps.append(Step(WIND_UP_COUNT_S, lambda: self._show_number(target)))
        steps.append(Step(WIND_UP_COUNT_S + WIND_UP_POST_WAIT_S, begin_countdown))

        return Routine(steps, guard=self._in_state(SessionState.WINDING_UP), name="wind-up")

    def _solution_check_routine(self) -> Routine:
        """Suspense ticks and distortion boosts, then the verdict."""

        def suspense_tick() -> None:
            if self.obfuscator is not None:
                self.obfuscator.tick()
            self._show_number(self._rng.randrange(100))

        def boost(amount: float, seconds: float) -> None:
            if not self.settings.disable_visual_distortion:
                self.distortion.boost(amount, seconds)

        def check() -> None:
            if self.rule.is_valid(self.chosen_release_time):
                self.log.info("Release time is valid.")
                self._routines.run(self._solve_routine())
            else:
                self.log.info("Release time is invalid.")
                self._routines.run(self._oops_routine())

        steps = [Step(0.0, lambda: self._cue(CUE_RELEASE))]
        steps += [Step(at, suspense_tick) for at in SOLUTION_CHECK_TICKS]
        steps += [
            Step(at, lambda a=amount, s=seconds: boost(a, s))
            for at, amount, seconds in SOLUTION_CHECK_BOOSTS
        ]
        steps.append(Step(SOLUTION_CHECK_LIGHT_OFF_AT, self.status.set_inactive))
        steps.append(Step(SOLUTION_CHECK_SUSPENSE_END, check))

        return Routine(
            steps,
            guard=self._in_state(SessionState.SOLUTION_CHECK_ANIMATION),
            name="solution check",
        )

    def _solve_routine(self) -> Routine:
        """Reveal the signature on the bomb timer, arm the penalty, solve."""
        reveal_s = SOLUTION_CHECK_RESTORE_AT - SOLUTION_CHECK_SUSPENSE_END
        reveal_step = reveal_s / SOLUTION_CHECK_REVEAL_STEPS

        def show_solved() -> None:
            self.status.set_pass()
            self.countdown_text = COUNTDOWN_TEXT_SOLVED

        def reveal() -> None:
            self.obfuscator.show_preferred_once(self._rng.randrange(10))

        def restore_time() -> None:
            self._arm_penalty()
            self.state = SessionState.SOLVED_RESTORING_TIME
            self._call_sink(self.timer_sink.release_override)
            self.time_scale.release(self)
            self._end_distortion()

        def solve() -> None:
            self.state = SessionState.SOLVED
            self.status.handle_pass()
            self._cue(CUE_SOLVE)
            self.log.info("Solved!")

        steps = [Step(0.0, show_solved)]
        steps += [Step(i * reveal_step, reveal) for i in range(SOLUTION_CHECK_REVEAL_STEPS)]
        steps.append(Step(reveal_s, restore_time))
        steps.append(Step(reveal_s + DISTORTION_DISAPPEAR_S, solve))

        return Routine(
            steps,
            guard=self._in_state(
                SessionState.SOLUTION_CHECK_ANIMATION, SessionState.SOLVED_RESTORING_TIME,
            ),
            name="solve",
        )

    def _oops_routine(self) -> Routine:
        """Show the wrong number, laugh, then start striking."""

        def show_mistake() -> None:
            self._show_number(self.chosen_release_time)
            self._cue(CUE_OOPS)

        def start_striking() -> None:
            self.state = SessionState.STRIKING
            self._call_sink(self.timer_sink.release_override)
            self._routines.run(self._strike_routine())
            self.time_scale.release(self)
            self._end_distortion()

        steps = [Step(0.0, show_mistake), Step(SOLUTION_CHECK_OOPS_S, start_striking)]
        return Routine(
            steps,
            guard=self._in_state(SessionState.SOLUTION_CHECK_ANIMATION),
            name="oops",
        )

    def _time_out_routine(self) -> Routine:
        """Zero the readout, blink the display, then start striking."""

        def time_ran_out() -> None:
            self.log.info("Time ran out.")
            self.obfuscator.override(TIMED_OUT_READOUT)
            self._cue(CUE_TIMEOUT)

        def start_striking() -> None:
            self.status.set_inactive()
            self.time_scale.release(self)
            self._call_sink(self.timer_sink.release_override)
            self.state = SessionState.STRIKING
            self._routines.run(self._strike_routine())
            self._end_distortion()

        steps = [Step(0.0, time_ran_out)]
        for i in range(TIMEOUT_BLINKS):
            start = i * 2 * TIMEOUT_BLINK_S
            steps.append(Step(start, lambda: self._set_text(COUNTDOWN_TEXT_AWAITING_LIGHTS)))
            steps.append(Step(start + TIMEOUT_BLINK_S, lambda: self._set_text("00")))
        blank_at = TIMEOUT_BLINKS * 2 * TIMEOUT_BLINK_S
        steps.append(Step(blank_at, lambda: self._set_text(COUNTDOWN_TEXT_AWAITING_LIGHTS)))
        steps.append(Step(blank_at + TIMEOUT_BLINK_S, start_striking))

        return Routine(
            steps,
            guard=self._in_state(SessionState.SOLUTION_CHECK_ANIMATION),
            name="time out",
        )

    def _strike_routine(self) -> Routine:
        """Strike once, three times, or forever depending on settings and mode."""
        guard = self._in_state(SessionState.STRIKING)

        def blank() -> None:
            self._set_text(COUNTDOWN_TEXT_AWAITING_LIGHTS)

        if self.settings.disable_forced_detonation:
            self.log.info("Forced detonation disabled. Striking once and resetting.")
            steps = [
                Step(0.0, self._strike),
                Step(0.0, blank),
                Step(STRIKE_FLASH_S, self._reset_to_pre_hold),
            ]
            return Routine(steps, guard=guard, name="strike once")

        self.log.info("Goodbye.")

        if self.zen_mode or self.time_mode:
            self.log.info("Zen mode or Time mode detected. Will reset after striking.")
            steps = [
                Step(i * STRIKE_INTERVAL_S, self._strike_showing_valid_time)
                for i in range(ZEN_MODE_STRIKES)
            ]
            done_at = ZEN_MODE_STRIKES * STRIKE_INTERVAL_S
            steps.append(Step(done_at, blank))
            steps.append(Step(done_at + STRIKE_FLASH_S - STRIKE_INTERVAL_S, self._reset_to_pre_hold))
            return Routine(steps, guard=guard, name="strike and reset")

        return Routine(
            [Step(0.0, self._strike_showing_valid_time)],
            guard=guard,
            repeat=STRIKE_INTERVAL_S,
            name="strike forever",
        )

    def _set_text(self, text: str) -> None:
        self.countdown_text = text

    def _strike(self) -> None:
        self._cue(CUE_STRIKE)
        self.status.handle_strike()

    def _strike_showing_valid_time(self) -> None:
        self._strike()
        if self.rule is not None and not self.exploded:
            self._show_number(self._rng.choice(sorted(self.rule.valid_times)))

    def _reset_to_pre_hold(self) -> None:
        self.state = SessionState.READY_FOR_HOLD
        self.obfuscator = None
        self.rule = None
        self.chosen_release_time = None
        self.status.set_inactive()
        self.countdown_text = COUNTDOWN_TEXT_AWAITING_HOLD
        self._stop_music_box()
        self.log.info("Reset. Ready for the next hold.")
