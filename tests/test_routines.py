import pytest

from core.routines import Routine, RoutineRunner, Step, ease_out_cubic


def test_steps_run_in_time_order():
    calls = []
    runner = RoutineRunner()
    runner.run(Routine([
        Step(1.0, lambda: calls.append("late")),
        Step(0.0, lambda: calls.append("first")),
        Step(0.0, lambda: calls.append("second")),
        Step(0.5, lambda: calls.append("middle")),
    ]))

    assert calls == ["first", "second"]
    runner.update(0.6)
    assert calls == ["first", "second", "middle"]
    runner.update(0.6)
    assert calls == ["first", "second", "middle", "late"]
    assert len(runner) == 0


def test_all_due_steps_run_in_one_update():
    calls = []
    runner = RoutineRunner()
    runner.run(Routine([Step(t, lambda t=t: calls.append(t)) for t in (0.1, 0.2, 0.3)]))
    runner.update(1.0)
    assert calls == [0.1, 0.2, 0.3]


def test_failed_guard_cancels_remaining_steps():
    calls = []
    allowed = [True]
    runner = RoutineRunner()
    routine = runner.run(Routine(
        [Step(0.0, lambda: calls.append(0)), Step(1.0, lambda: calls.append(1))],
        guard=lambda: allowed[0],
    ))

    allowed[0] = False
    runner.update(2.0)
    assert calls == [0]
    assert routine.finished
    assert len(runner) == 0


def test_repeating_routine_loops():
    calls = []
    runner = RoutineRunner()
    runner.run(Routine([Step(0.0, lambda: calls.append("tick"))], repeat=0.5))

    assert calls == ["tick"]
    runner.update(0.25)
    assert calls == ["tick"]
    runner.update(0.25)
    assert calls == ["tick", "tick"]
    runner.update(0.5)
    assert calls == ["tick", "tick", "tick"]
    assert len(runner) == 1


@pytest.mark.parametrize("repeat", [0, -1.0])
def test_repeat_must_be_positive(repeat):
    with pytest.raises(ValueError):
        Routine([], repeat=repeat)


def test_stop_all_from_inside_a_step():
    calls = []
    runner = RoutineRunner()
    runner.run(Routine([
        Step(0.5, runner.stop_all),
        Step(0.5, lambda: calls.append("after stop")),
    ]))
    runner.run(Routine([Step(1.0, lambda: calls.append("other"))]))

    runner.update(2.0)
    assert calls == []
    assert len(runner) == 0


def test_routine_started_from_a_step_runs_its_first_steps_at_once():
    calls = []
    runner = RoutineRunner()
    inner = Routine([Step(0.0, lambda: calls.append("inner 0")), Step(0.5, lambda: calls.append("inner 0.5"))])
    runner.run(Routine([Step(0.5, lambda: runner.run(inner))]))

    runner.update(0.5)
    assert calls == ["inner 0"]
    runner.update(0.5)
    assert calls == ["inner 0", "inner 0.5"]


def test_empty_routine_finishes_immediately():
    runner = RoutineRunner()
    routine = runner.run(Routine([]))
    assert routine.finished
    assert len(runner) == 0


@pytest.mark.parametrize(("t", "expected"), [(0.0, 0.0), (1.0, 1.0), (0.5, 0.875), (2.0, 1.0)])
def test_ease_out_cubic(t, expected):
    assert ease_out_cubic(t) == pytest.approx(expected)
