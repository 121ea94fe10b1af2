from __future__ import annotations

import logging
import time
from typing import Callable, Optional, Protocol

import numpy as np

from .framebuffer import FrameBuffer
from .geometry import FULL_TURN, render_frame
from .params import DonutParams
from .playback import Key, Mode, Playback

log = logging.getLogger(__name__)

KeySource = Callable[[float], Optional[Key]]


class Surface(Protocol):
    def render(self, chars: np.ndarray) -> None: ...


def advance_angle(angle: float, step: float) -> float:
    """Add ``step`` to ``angle`` and wrap the result into [0, 2*pi)."""
    angle += step
    if angle >= FULL_TURN:
        angle -= FULL_TURN
    elif angle < 0:
        angle += FULL_TURN
    if angle >= FULL_TURN:
        # a tiny negative angle plus a full turn rounds up to 2*pi
        angle = 0.0
    return angle


class AnimationController:
    """Owns the rotation angles and drives the sample -> present loop.

    With a ``keys`` source the loop is interactive: each iteration waits up to
    one frame interval for a key and presentation is rate limited. Without
    one, every frame is presented and followed by a fixed sleep.
    """

    def __init__(
        self,
        params: DonutParams,
        surface: Surface,
        keys: KeySource | None = None,
        mode: Mode = Mode.RUNNING,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.params = params.validate()
        self.surface = surface
        self.keys = keys
        self.playback = Playback(params.a_spacing, params.b_spacing, mode)
        self.clock = clock
        self.sleep = sleep
        self.a = 0.0
        self.b = 0.0
        self.buffer = FrameBuffer(params.viewport)
        self.frames_rendered = 0
        self.frames_presented = 0
        self._last_present: float | None = None

    @property
    def angles(self) -> tuple[float, float]:
        return self.a, self.b

    def step(self, key: Key | None = None) -> bool:
        """Advance one frame for ``key``. Returns False once playback has quit."""
        da, db = self.playback.feed(key)
        if self.playback.quit:
            return False
        self.a = advance_angle(self.a, da)
        self.b = advance_angle(self.b, db)
        render_frame(self.a, self.b, self.params, self.buffer)
        self.frames_rendered += 1
        return True

    def present(self) -> None:
        self.surface.render(self.buffer.chars)
        self.frames_presented += 1
        self._last_present = self.clock()

    def _due(self) -> bool:
        if self._last_present is None:
            return True
        return (self.clock() - self._last_present) * 1000.0 >= self.params.ms_per_render

    def run(self, max_frames: int | None = None) -> int:
        """Run until quit (or ``max_frames`` frames); returns the exit status."""
        interval = self.params.frame_interval
        log.info(
            "starting %s loop: viewport=%d interval=%.3fs",
            "interactive" if self.keys is not None else "spinning",
            self.params.viewport,
            interval,
        )
        while max_frames is None or self.frames_rendered < max_frames:
            key = self.keys(interval) if self.keys is not None else None
            if not self.step(key):
                log.info("quit after %d frames", self.frames_rendered)
                return 0
            if self.keys is None:
                self.present()
                self.sleep(interval)
            elif self._due():
                self.present()
        log.info("stopped after %d frames", self.frames_rendered)
        return 0
