import pytest

from asciidonut import cli
from asciidonut.core.exceptions import DonutError, SurfaceError
from asciidonut.core.playback import Key
from asciidonut.utils import terminal


class FakeTerminalSurface:
    fail_prepare = False
    poll_error = None
    render_error = None
    reset_error = None
    instances = []

    def __init__(self, stretch=False):
        self.stretch = stretch
        self.frames = 0
        self.polls = 0
        self.events = []
        self.keys = [None, None, Key.QUIT]
        FakeTerminalSurface.instances.append(self)

    def prepare(self):
        self.events.append("prepare")
        if self.fail_prepare:
            raise SurfaceError("could not prepare terminal: not a tty")

    def reset(self):
        self.events.append("reset")
        if self.reset_error is not None:
            raise self.reset_error

    def render(self, chars):
        if self.render_error is not None:
            raise self.render_error
        self.frames += 1

    def poll_key(self, timeout):
        self.polls += 1
        if self.poll_error is not None:
            raise self.poll_error
        return self.keys.pop(0) if self.keys else None


@pytest.fixture
def fake_surface(monkeypatch):
    FakeTerminalSurface.instances = []
    monkeypatch.setattr(FakeTerminalSurface, "fail_prepare", False)
    monkeypatch.setattr(terminal, "TerminalSurface", FakeTerminalSurface)
    return FakeTerminalSurface


def test_parse_defaults():
    args = cli.parse_arguments([])
    assert args.preset == "interactive"
    assert not args.no_input
    assert args.frames is None


def test_frames_must_be_positive():
    with pytest.raises(SystemExit):
        cli.parse_arguments(["--frames", "0"])


def test_invalid_viewport_exits_2(capsys):
    assert cli.main(["--viewport", "0"]) == 2
    assert "viewport" in capsys.readouterr().err


def test_snapshot(tmp_path):
    out = tmp_path / "frame.png"
    assert cli.main(["--snapshot", str(out), "--viewport", "20"]) == 0
    assert out.exists()


def test_interactive_run_quits_cleanly(fake_surface):
    assert cli.main(["--viewport", "16"]) == 0
    surface = fake_surface.instances[0]
    assert surface.events == ["prepare", "reset"]
    assert surface.frames >= 1


def test_spin_preset_with_frame_limit(fake_surface):
    assert cli.main(["--preset", "spin", "--no-input", "--frames", "3", "--viewport", "16", "--stretch"]) == 0
    surface = fake_surface.instances[0]
    assert surface.frames == 3
    assert surface.stretch


def test_surface_failure_exits_nonzero(fake_surface, capsys):
    fake_surface.fail_prepare = True
    assert cli.main([]) == 1
    assert "could not prepare" in capsys.readouterr().err


def test_spin_preset_ignores_keyboard(fake_surface):
    assert cli.main(["--preset", "spin", "--frames", "2", "--viewport", "16"]) == 0
    surface = fake_surface.instances[0]
    assert surface.polls == 0
    assert surface.frames == 2


def test_ctrl_c_restores_terminal(fake_surface, monkeypatch):
    monkeypatch.setattr(fake_surface, "poll_error", KeyboardInterrupt())
    assert cli.main(["--viewport", "16"]) == 0
    assert fake_surface.instances[0].events == ["prepare", "reset"]


def test_render_error_exits_nonzero_and_restores(fake_surface, monkeypatch, capsys):
    monkeypatch.setattr(fake_surface, "render_error", DonutError("display went away"))
    assert cli.main(["--viewport", "16"]) == 1
    assert "display went away" in capsys.readouterr().err
    assert fake_surface.instances[0].events == ["prepare", "reset"]


def test_restore_failure_exits_nonzero(fake_surface, monkeypatch, capsys):
    monkeypatch.setattr(fake_surface, "reset_error", SurfaceError("could not restore terminal: gone"))
    assert cli.main(["--viewport", "16"]) == 1
    assert "could not restore" in capsys.readouterr().err


def test_logger_follows_module_name():
    assert cli.log.name == "asciidonut.cli"
