from __future__ import annotations

import numpy as np

from .pieces import Piece
from .shapes import EMPTY


class GameGrid:
    """Discrete 2D board of locked cells, row 0 at the top.

    The grid uses 0 for empty cells and the tetromino value (1..7) for
    locked cells. Pieces may hang above row 0 before they enter the board;
    those cells are only checked against the side walls.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(EMPTY)

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def collide(self, piece: Piece, dx: int = 0, dy: int = 0) -> bool:
        for x, y in piece.cells(dx, dy):
            if x < 0 or x >= self.width or y >= self.height:
                return True
            if y >= 0 and self.grid[y, x] != EMPTY:
                return True
        return False

    def merge(self, piece: Piece) -> int:
        """Write the piece's visible cells into the grid, returning how many were written."""
        written = 0
        value = int(piece.kind)
        for x, y in piece.cells():
            if self.is_inside(x, y):
                self.grid[y, x] = value
                written += 1
        return written

    def full_rows(self) -> np.ndarray:
        return np.where(np.all(self.grid != EMPTY, axis=1))[0]

    def clear_lines(self) -> int:
        full_rows = self.full_rows()
        if full_rows.size == 0:
            return 0
        num = int(full_rows.size)
        # Remove full rows and add empty rows at the top
        remaining = np.delete(self.grid, full_rows, axis=0)
        new_rows = np.zeros((num, self.width), dtype=np.int8)
        self.grid = np.vstack((new_rows, remaining))
        return num

    def get_max_height(self) -> int:
        # y=0 is top; find first non-empty from top
        non_empty_rows = np.where(np.any(self.grid != EMPTY, axis=1))[0]
        if non_empty_rows.size == 0:
            return 0
        top_index = int(non_empty_rows[0])
        return self.height - top_index

    def count_holes(self) -> int:
        holes = 0
        for x in range(self.width):
            column = self.grid[:, x]
            seen_block = False
            for cell in column:
                if cell != EMPTY:
                    seen_block = True
                elif seen_block:
                    holes += 1
        return holes

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
