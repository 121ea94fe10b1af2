import pytest

from asciidonut.core.playback import Key, Mode, Playback

A, B = 0.07, 0.05


@pytest.fixture
def running():
    return Playback(A, B, Mode.RUNNING)


@pytest.fixture
def stopped():
    return Playback(A, B, Mode.STOPPED)


def test_timeout_keeps_spinning(running):
    assert running.feed(None) == (A, B)
    assert running.mode is Mode.RUNNING


def test_timeout_while_stopped_holds_still(stopped):
    assert stopped.feed(None) == (0.0, 0.0)
    assert stopped.mode is Mode.STOPPED


def test_space_toggles(running):
    assert running.feed(Key.SPACE) == (0.0, 0.0)
    assert running.mode is Mode.STOPPED
    assert running.feed(Key.SPACE) == (A, B)
    assert running.mode is Mode.RUNNING


@pytest.mark.parametrize(
    "key,delta",
    [
        (Key.UP, (A, 0.0)),
        (Key.DOWN, (-A, 0.0)),
        (Key.LEFT, (0.0, B)),
        (Key.RIGHT, (0.0, -B)),
    ],
)
@pytest.mark.parametrize("mode", [Mode.RUNNING, Mode.STOPPED])
def test_arrow_nudges_once_then_stops(key, delta, mode):
    pb = Playback(A, B, mode)
    assert pb.feed(key) == delta
    assert pb.mode is Mode.STOPPED
    assert pb.feed(None) == (0.0, 0.0)


@pytest.mark.parametrize("mode", [Mode.RUNNING, Mode.STOPPED])
def test_other_keys_change_nothing(mode):
    pb = Playback(A, B, mode)
    expected = pb.feed(None)
    assert pb.feed(Key.OTHER) == expected
    assert pb.mode is mode


@pytest.mark.parametrize("mode", [Mode.RUNNING, Mode.STOPPED])
def test_quit_is_absorbing(mode):
    pb = Playback(A, B, mode)
    assert pb.feed(Key.QUIT) == (0.0, 0.0)
    assert pb.quit
    for key in (None, Key.SPACE, Key.LEFT):
        assert pb.feed(key) == (0.0, 0.0)
        assert pb.mode is Mode.QUIT
