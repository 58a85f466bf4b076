from core.time_scale import TimeScaleToken


def test_acquire_and_release_apply_time_scale():
    applied = []
    token = TimeScaleToken(apply=applied.append)

    assert token.acquire("a")
    assert token.held_by("a")
    assert applied == [0.001]

    token.release("a")
    assert not token.held
    assert applied == [0.001, 1.0]


def test_second_owner_is_refused():
    applied = []
    token = TimeScaleToken(apply=applied.append)
    token.acquire("a")

    assert not token.acquire("b")
    assert token.held_by("a")
    assert applied == [0.001]


def test_release_by_non_holder_is_a_no_op():
    applied = []
    token = TimeScaleToken(apply=applied.append)
    token.acquire("a")

    token.release("b")
    assert token.held_by("a")

    token.release("a")
    token.release("a")
    assert applied == [0.001, 1.0]


def test_token_without_callback():
    token = TimeScaleToken()
    assert token.acquire("a")
    token.release("a")
    assert token.acquire("b")
