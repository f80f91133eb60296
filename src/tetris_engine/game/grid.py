from __future__ import annotations

from typing import Iterable, Tuple

import numpy as np

from .pieces import EMPTY


BOARD_WIDTH = 10
BOARD_HEIGHT = 20

Coordinate = Tuple[int, int]


class GameGrid:
    """Fixed-size playfield of cell values.

    The grid uses 0 for empty cells and the tetromino tag (1..7) for filled
    ones. Row 0 is the top of the board.
    """

    def __init__(self, width: int = BOARD_WIDTH, height: int = BOARD_HEIGHT) -> None:
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(EMPTY)

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def can_place(self, cells: Iterable[Coordinate]) -> bool:
        for x, y in cells:
            if not self.is_inside(x, y):
                return False
            if self.grid[y, x] != EMPTY:
                return False
        return True

    def place(self, cells: Iterable[Coordinate], value: int) -> int:
        """Write `value` into every cell on the board and return how many were written.

        Cells above the top row are dropped silently.
        """
        written = 0
        for x, y in cells:
            if 0 <= y < self.height and 0 <= x < self.width:
                self.grid[y, x] = value
                written += 1
        return written

    def is_row_full(self, row: int) -> bool:
        return bool(np.all(self.grid[row] != EMPTY))

    def clear_full_lines(self) -> int:
        cleared = 0
        row = self.height - 1
        while row >= 0:
            if self.is_row_full(row):
                cleared += 1
                # Shift everything above down by one and empty the top row
                self.grid[1 : row + 1] = self.grid[0:row].copy()
                self.grid[0] = EMPTY
                # Same index again: a new row has moved into it
                continue
            row -= 1
        return cleared

    def filled_cells(self) -> int:
        return int(np.count_nonzero(self.grid))

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
