from __future__ import annotations

import contextlib
import logging
import termios
from typing import Optional

import numpy as np
from blessed import Terminal

from ..core.exceptions import SurfaceError
from ..core.playback import Key

log = logging.getLogger(__name__)

SEQUENCE_KEYS = {
    "KEY_UP": Key.UP,
    "KEY_DOWN": Key.DOWN,
    "KEY_LEFT": Key.LEFT,
    "KEY_RIGHT": Key.RIGHT,
}


def decode_key(keystroke) -> Optional[Key]:
    """Translate a blessed ``Keystroke`` into a playback ``Key``.

    An empty keystroke (the inkey timeout) decodes to None.
    """
    if not keystroke:
        return None
    if keystroke.is_sequence:
        return SEQUENCE_KEYS.get(keystroke.name, Key.OTHER)
    if keystroke == " ":
        return Key.SPACE
    if keystroke == "q":
        return Key.QUIT
    return Key.OTHER


class TerminalSurface:
    """Draws character grids on a full-screen terminal through blessed.

    ``prepare()`` switches to the alternate screen, hides the cursor and puts
    the keyboard in cbreak mode; ``reset()`` undoes whatever part of that
    succeeded. With ``stretch`` every cell is written twice side by side so the
    torus is not squashed by tall terminal glyphs.
    """

    def __init__(self, term: Terminal | None = None, stretch: bool = False):
        self.term = term if term is not None else Terminal()
        self.stretch = stretch
        self._stack: contextlib.ExitStack | None = None

    @property
    def prepared(self) -> bool:
        return self._stack is not None

    def prepare(self) -> None:
        if self._stack is not None:
            return
        stack = contextlib.ExitStack()
        try:
            stack.enter_context(self.term.fullscreen())
            stack.enter_context(self.term.hidden_cursor())
            stack.enter_context(self.term.cbreak())
        except (OSError, termios.error) as err:
            self._stack = stack
            self._teardown()
            raise SurfaceError(f"could not prepare terminal: {err}") from err
        self._stack = stack
        log.debug("terminal prepared (%sx%s, kind=%s)", self.term.width, self.term.height, self.term.kind)

    def reset(self) -> None:
        if self._stack is None:
            return
        try:
            self._teardown()
        except (OSError, termios.error) as err:
            raise SurfaceError(f"could not restore terminal: {err}") from err
        log.debug("terminal restored")

    def _teardown(self) -> None:
        stack, self._stack = self._stack, None
        try:
            stack.close()
        finally:
            self.term.stream.write(self.term.normal)
            self.term.stream.flush()

    def render(self, chars: np.ndarray) -> None:
        term = self.term
        out = [term.home, term.clear]
        for row, cells in enumerate(chars):
            line = "".join(cells)
            if self.stretch:
                line = "".join(ch * 2 for ch in line)
            out.append(term.move_xy(0, row))
            out.append(line)
        term.stream.write("".join(out))
        term.stream.flush()

    def poll_key(self, timeout: float) -> Optional[Key]:
        key = decode_key(self.term.inkey(timeout=timeout))
        if key is not None:
            log.debug("key %s", key.value)
        return key

    def __enter__(self) -> "TerminalSurface":
        self.prepare()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.reset()
