from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .grid import GameGrid
from .pieces import Piece, square_matrix, spawn_piece
from .randomizer import PieceQueue
from .rules import Progress
from .shapes import TetrominoType


logger = logging.getLogger(__name__)


@dataclass(eq=False)
class HeldPiece:
    kind: TetrominoType
    matrix: np.ndarray  # spawn orientation, rotation is not kept

    @property
    def size(self) -> int:
        return int(self.matrix.shape[0])


@dataclass
class LockResult:
    cells_merged: int
    lines_cleared: int
    score_delta: int
    topped_out: bool


class PieceController:
    """Drives the active piece: movement, rotation, drops, locking and hold.

    Rejected moves, rotations and holds leave every piece of state untouched
    and simply return False. Once a spawned piece overlaps the stack the
    controller is `topped_out` and ignores further input.
    """

    # Simplified wall kick: horizontal shifts only, first fit wins
    KICK_OFFSETS = (0, -1, 1, -2, 2)

    def __init__(self, grid: GameGrid, queue: PieceQueue, progress: Progress) -> None:
        self.grid = grid
        self.queue = queue
        self.progress = progress
        self.active: Optional[Piece] = None
        self.held: Optional[HeldPiece] = None
        self.can_hold = True
        self.topped_out = False

    def _ready(self) -> bool:
        return self.active is not None and not self.topped_out

    def _activate(self, piece: Piece) -> Piece:
        self.active = piece
        if self.grid.collide(piece):
            self.topped_out = True
            logger.debug("Spawned %s collides at (%d, %d)", piece.kind.name, piece.x, piece.y)
        return piece

    def spawn_next(self) -> Piece:
        kind = self.queue.pop()
        return self._activate(spawn_piece(kind, self.grid.width))

    def move(self, direction: int) -> bool:
        if not self._ready():
            return False
        if self.grid.collide(self.active, dx=direction):
            return False
        self.active.x += direction
        return True

    def rotate(self, direction: int) -> bool:
        if not self._ready():
            return False
        piece = self.active
        candidate = Piece(piece.kind, piece.rotated(direction), piece.x, piece.y)
        for offset in self.KICK_OFFSETS:
            if not self.grid.collide(candidate, dx=offset):
                piece.matrix = candidate.matrix
                piece.x += offset
                return True
        return False

    def fall(self) -> Optional[LockResult]:
        """Gravity: move down one row without scoring, or lock if blocked."""
        if not self._ready():
            return None
        if self.grid.collide(self.active, dy=1):
            return self.lock()
        self.active.y += 1
        return None

    def soft_drop(self) -> Optional[LockResult]:
        if not self._ready():
            return None
        if self.grid.collide(self.active, dy=1):
            return self.lock()
        self.active.y += 1
        self.progress.on_soft_drop_cell()
        return None

    def hard_drop(self) -> Optional[LockResult]:
        if not self._ready():
            return None
        cells = 0
        while not self.grid.collide(self.active, dy=1):
            self.active.y += 1
            cells += 1
        drop_points = self.progress.on_hard_drop_cells(cells)
        result = self.lock()
        result.score_delta += drop_points
        return result

    def lock(self) -> LockResult:
        assert self.active is not None
        piece = self.active
        merged = self.grid.merge(piece)
        cleared = self.grid.clear_lines()
        delta = self.progress.on_lines_cleared(cleared)
        logger.debug("Locked %s at (%d, %d): %d cells, %d lines, +%d",
                     piece.kind.name, piece.x, piece.y, merged, cleared, delta)
        self.can_hold = True
        self.spawn_next()
        return LockResult(
            cells_merged=merged,
            lines_cleared=cleared,
            score_delta=delta,
            topped_out=self.topped_out,
        )

    def hold(self) -> bool:
        if not self._ready() or not self.can_hold:
            return False
        outgoing = HeldPiece(self.active.kind, square_matrix(self.active.kind))
        if self.held is None:
            self.held = outgoing
            self.spawn_next()
        else:
            incoming = self.held
            self.held = outgoing
            self._activate(spawn_piece(incoming.kind, self.grid.width))
        self.can_hold = False
        return True
