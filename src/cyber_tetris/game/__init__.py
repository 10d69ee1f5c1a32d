"""Game module for Cyber Tetris.

Exports the core engine and supporting classes:
- TetrominoType / BASE_SHAPES: piece kinds and their base matrices
- BagRandomizer / PieceQueue: 7-bag sequence and preview queue
- Piece / spawn_piece: live piece instances
- GameGrid: board, collisions and line clearing
- ScoringRules / Progress: score table, level and fall speed
- PieceController: movement, rotation kicks, drops, locking and hold
- TetrisGame: session state machine driven by external ticks
"""

from .shapes import BASE_SHAPES, EMPTY, TetrominoType
from .randomizer import BagRandomizer, PieceQueue
from .pieces import Piece, spawn_piece, square_matrix
from .grid import GameGrid
from .rules import Progress, ScoringRules
from .controller import HeldPiece, LockResult, PieceController
from .core import Action, GameConfig, GameState, TetrisGame

__all__ = [
    "BASE_SHAPES",
    "EMPTY",
    "TetrominoType",
    "BagRandomizer",
    "PieceQueue",
    "Piece",
    "spawn_piece",
    "square_matrix",
    "GameGrid",
    "Progress",
    "ScoringRules",
    "HeldPiece",
    "LockResult",
    "PieceController",
    "Action",
    "GameConfig",
    "GameState",
    "TetrisGame",
]
