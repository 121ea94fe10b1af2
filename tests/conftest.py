import pytest

from asciidonut.core.params import DonutParams


class FakeSurface:
    def __init__(self):
        self.frames = []

    def render(self, chars):
        self.frames.append(chars.copy())


class FakeClock:
    def __init__(self, step=1.0):
        self.now = 0.0
        self.step = step

    def __call__(self):
        self.now += self.step
        return self.now


def script(*keys):
    """Key source replaying ``keys`` and then timing out forever."""
    pending = list(keys)

    def poll(timeout):
        return pending.pop(0) if pending else None

    return poll


@pytest.fixture
def small_params():
    return DonutParams(viewport=24, theta_spacing=0.2, phi_spacing=0.05)


@pytest.fixture
def surface():
    return FakeSurface()
