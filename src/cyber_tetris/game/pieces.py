from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

from .shapes import BASE_SHAPES, TetrominoType


Coordinate = Tuple[int, int]
Shape = np.ndarray


def _rot90(matrix: Shape, direction: int) -> Shape:
    return np.rot90(matrix, direction, axes=(1, 0))  # clockwise when direction>0


def square_matrix(kind: TetrominoType) -> Shape:
    """Pad the base shape of `kind` into a square matrix tagged with the kind value."""
    kind = TetrominoType(kind)
    base = BASE_SHAPES[kind]
    h, w = base.shape
    size = max(h, w)
    matrix = np.zeros((size, size), dtype=np.int8)
    matrix[:h, :w] = base * int(kind)
    return matrix


@dataclass(eq=False)
class Piece:
    kind: TetrominoType
    matrix: Shape
    x: int = 0
    y: int = 0  # negative while still above the visible board

    @property
    def size(self) -> int:
        return int(self.matrix.shape[0])

    def rotated(self, direction: int) -> Shape:
        return _rot90(self.matrix, direction).copy()

    def cells(self, dx: int = 0, dy: int = 0) -> List[Coordinate]:
        rows, cols = np.nonzero(self.matrix)
        return [(self.x + int(c) + dx, self.y + int(r) + dy) for r, c in zip(rows, cols)]

    def copy(self) -> "Piece":
        return Piece(self.kind, self.matrix.copy(), self.x, self.y)


def spawn_piece(kind: TetrominoType, width: int) -> Piece:
    """Build a fresh piece centred horizontally, its square ending on row 0.

    No collision check happens here; the caller decides whether a blocked
    spawn ends the game.
    """
    matrix = square_matrix(kind)
    size = matrix.shape[0]
    return Piece(
        kind=TetrominoType(kind),
        matrix=matrix,
        x=(width - size) // 2,
        y=-size + 1,
    )
