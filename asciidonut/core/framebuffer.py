from __future__ import annotations

import numpy as np


class FrameBuffer:
    """Square character grid with a parallel inverse-depth grid.

    Both grids are indexed ``[row, col]``. A depth of 0 means nothing has been
    drawn in that cell during the current frame.
    """

    def __init__(self, size: int):
        self.size = int(size)
        self.chars = np.full((self.size, self.size), " ", dtype="<U1")
        self.depth = np.zeros((self.size, self.size), dtype=np.float64)

    def reset(self) -> None:
        self.chars.fill(" ")
        self.depth.fill(0.0)

    def plot(self, col: int, row: int, ooz: float, char: str) -> bool:
        """Write ``char`` at (col, row) if ``ooz`` is strictly closer than what is there."""
        if ooz <= self.depth[row, col]:
            return False
        self.depth[row, col] = ooz
        self.chars[row, col] = char
        return True

    def plot_many(self, cols: np.ndarray, rows: np.ndarray, ooz: np.ndarray, chars: np.ndarray) -> None:
        """Bulk ``plot`` with the same outcome as plotting each sample in order.

        Per cell the closest sample wins; among equally close samples the
        earliest one wins, since later ones are not strictly closer.
        """
        if len(ooz) == 0:
            return
        cells = rows.astype(np.int64) * self.size + cols.astype(np.int64)
        order = np.lexsort((np.arange(len(ooz)), -ooz, cells))
        cells = cells[order]
        first = np.ones(len(cells), dtype=bool)
        first[1:] = cells[1:] != cells[:-1]
        winners = order[first]
        win_cells = cells[first]

        flat_depth = self.depth.reshape(-1)
        flat_chars = self.chars.reshape(-1)
        closer = ooz[winners] > flat_depth[win_cells]
        flat_depth[win_cells[closer]] = ooz[winners[closer]]
        flat_chars[win_cells[closer]] = chars[winners[closer]]

    def rows(self) -> list[str]:
        return ["".join(r) for r in self.chars]

    def text(self) -> str:
        return "\n".join(self.rows())

    def copy(self) -> "FrameBuffer":
        other = FrameBuffer(self.size)
        other.chars[...] = self.chars
        other.depth[...] = self.depth
        return other

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FrameBuffer):
            return NotImplemented
        return (
            self.size == other.size
            and np.array_equal(self.chars, other.chars)
            and np.array_equal(self.depth, other.depth)
        )

    def __repr__(self) -> str:
        lit = int(np.count_nonzero(self.depth))
        return f"FrameBuffer(size={self.size}, lit={lit})"
