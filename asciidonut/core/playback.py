from __future__ import annotations

import enum
import logging

log = logging.getLogger(__name__)


class Key(enum.Enum):
    SPACE = "space"
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    QUIT = "quit"
    OTHER = "other"


class Mode(enum.Enum):
    RUNNING = "running"
    STOPPED = "stopped"
    QUIT = "quit"


class Playback:
    """Maps key events to a playback mode and the angle deltas for one frame.

    Arrow keys are one-shot nudges: they move a single step and leave the
    animation stopped. Quit is absorbing.
    """

    def __init__(self, a_spacing: float, b_spacing: float, mode: Mode = Mode.RUNNING):
        self.a_spacing = a_spacing
        self.b_spacing = b_spacing
        self.mode = mode

    @property
    def quit(self) -> bool:
        return self.mode is Mode.QUIT

    def feed(self, key: Key | None) -> tuple[float, float]:
        """Apply ``key`` (None when the poll timed out) and return (da, db)."""
        if self.mode is Mode.QUIT:
            return 0.0, 0.0

        a, b = self.a_spacing, self.b_spacing
        if key is Key.QUIT:
            self._switch(Mode.QUIT, key)
            return 0.0, 0.0
        if key is Key.SPACE:
            if self.mode is Mode.RUNNING:
                self._switch(Mode.STOPPED, key)
                return 0.0, 0.0
            self._switch(Mode.RUNNING, key)
            return a, b

        nudges = {
            Key.UP: (a, 0.0),
            Key.DOWN: (-a, 0.0),
            Key.LEFT: (0.0, b),
            Key.RIGHT: (0.0, -b),
        }
        if key in nudges:
            self._switch(Mode.STOPPED, key)
            return nudges[key]

        if self.mode is Mode.RUNNING:
            return a, b
        return 0.0, 0.0

    def _switch(self, mode: Mode, key: Key) -> None:
        if mode is not self.mode:
            log.debug("%s: %s -> %s", key.value, self.mode.value, mode.value)
        self.mode = mode
