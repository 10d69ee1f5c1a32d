from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional, Tuple

import numpy as np

from .controller import LockResult, PieceController
from .grid import GameGrid
from .pieces import Piece
from .randomizer import BagRandomizer, PieceQueue
from .rules import Progress, ScoringRules
from .shapes import TetrominoType


logger = logging.getLogger(__name__)


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    ROTATE_CW = 2
    ROTATE_CCW = 3
    SOFT_DROP = 4
    HARD_DROP = 5
    HOLD = 6
    NONE = 7


class GameState(Enum):
    READY = "ready"
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    random_seed: Optional[int] = None
    queue_size: int = 5

    def __post_init__(self) -> None:
        # The I piece spawns in a 4x4 square
        if self.width < 4 or self.height < 4:
            raise ValueError(f"Board must be at least 4x4, got {self.width}x{self.height}")
        if self.queue_size < 1:
            raise ValueError(f"queue_size must be positive, got {self.queue_size}")


class TetrisGame:
    """One independent game session.

    The session owns the board, the piece queue, the controller and the
    progression counters. It has no clock of its own: the host calls
    `tick()` with its own timestamps and the session applies one gravity
    step per elapsed fall interval. Input commands only act while running.
    """

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng = random.Random(self.config.random_seed)
        self.grid = GameGrid(self.config.width, self.config.height)
        self.progress = Progress(self.rules)
        self.state = GameState.READY
        self._last_drop_ms: Optional[float] = None
        self.reset()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def reset(self, seed: Optional[int] = None) -> None:
        if seed is not None:
            self.rng.seed(seed)
        self.grid.reset()
        self.progress.reset()
        self.randomizer = BagRandomizer(self.rng)
        self.queue = PieceQueue(self.randomizer, self.config.queue_size)
        self.controller = PieceController(self.grid, self.queue, self.progress)
        self.controller.spawn_next()
        self.state = GameState.READY
        self._last_drop_ms = None
        logger.info("Session reset (%dx%d board)", self.grid.width, self.grid.height)

    def start(self) -> bool:
        if self.state not in (GameState.READY, GameState.PAUSED):
            return False
        self.state = GameState.RUNNING
        self._last_drop_ms = None
        logger.info("Session started")
        return True

    def pause(self) -> bool:
        if self.state is not GameState.RUNNING:
            return False
        self.state = GameState.PAUSED
        logger.info("Session paused at score %d", self.score)
        return True

    def resume(self) -> bool:
        if self.state is not GameState.PAUSED:
            return False
        return self.start()

    def _sync_state(self) -> None:
        if self.controller.topped_out and self.state is not GameState.GAME_OVER:
            self.state = GameState.GAME_OVER
            logger.info("Game over: score=%d lines=%d level=%d",
                        self.score, self.lines, self.level)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def move_left(self) -> bool:
        return self.running and self.controller.move(-1)

    def move_right(self) -> bool:
        return self.running and self.controller.move(1)

    def rotate_cw(self) -> bool:
        return self.running and self.controller.rotate(1)

    def rotate_ccw(self) -> bool:
        return self.running and self.controller.rotate(-1)

    def soft_drop(self) -> Optional[LockResult]:
        if not self.running:
            return None
        result = self.controller.soft_drop()
        self._sync_state()
        return result

    def hard_drop(self) -> Optional[LockResult]:
        if not self.running:
            return None
        result = self.controller.hard_drop()
        self._sync_state()
        return result

    def hold(self) -> bool:
        if not self.running:
            return False
        held = self.controller.hold()
        self._sync_state()
        return held

    def gravity_step(self) -> Optional[LockResult]:
        if not self.running:
            return None
        result = self.controller.fall()
        self._sync_state()
        return result

    def tick(self, timestamp_ms: float) -> int:
        """Apply the gravity steps due at `timestamp_ms`; returns how many ran."""
        if not self.running:
            return 0
        if self._last_drop_ms is None:
            self._last_drop_ms = timestamp_ms
            return 0
        drops = 0
        while self.running and timestamp_ms - self._last_drop_ms >= self.progress.fall_interval_ms:
            self._last_drop_ms += self.progress.fall_interval_ms
            self.gravity_step()
            drops += 1
        return drops

    def step(self, action: Action) -> Tuple[np.ndarray, int, bool, dict]:
        if not self.running:
            return self.get_state(), 0, self.game_over, self.get_stats()

        score_before = self.score
        if action == Action.LEFT:
            self.move_left()
        elif action == Action.RIGHT:
            self.move_right()
        elif action == Action.ROTATE_CW:
            self.rotate_cw()
        elif action == Action.ROTATE_CCW:
            self.rotate_ccw()
        elif action == Action.SOFT_DROP:
            self.soft_drop()
        elif action == Action.HARD_DROP:
            self.hard_drop()
        elif action == Action.HOLD:
            self.hold()
        elif action == Action.NONE:
            pass

        reward = self.score - score_before
        return self.get_state(), reward, self.game_over, self.get_stats()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def running(self) -> bool:
        return self.state is GameState.RUNNING

    @property
    def paused(self) -> bool:
        return self.state is GameState.PAUSED

    @property
    def game_over(self) -> bool:
        return self.state is GameState.GAME_OVER

    @property
    def score(self) -> int:
        return self.progress.score

    @property
    def level(self) -> int:
        return self.progress.level

    @property
    def lines(self) -> int:
        return self.progress.lines

    @property
    def fall_interval_ms(self) -> int:
        return self.progress.fall_interval_ms

    @property
    def board(self) -> np.ndarray:
        return self.grid.clone_state()

    @property
    def active_piece(self) -> Optional[Piece]:
        return self.controller.active

    @property
    def next_kinds(self) -> Tuple[TetrominoType, ...]:
        return self.queue.peek()

    @property
    def held_kind(self) -> Optional[TetrominoType]:
        held = self.controller.held
        return held.kind if held is not None else None

    @property
    def can_hold(self) -> bool:
        return self.controller.can_hold

    def get_state(self) -> np.ndarray:
        # Overlay current piece on a copy of the grid for observation
        state = self.grid.clone_state()
        piece = self.controller.active
        if piece is not None and not self.game_over:
            for x, y in piece.cells():
                if self.grid.is_inside(x, y):
                    # Use negative to indicate falling piece overlay
                    state[y, x] = -int(piece.kind)
        return state

    def get_stats(self) -> dict:
        return {
            "score": self.score,
            "level": self.level,
            "lines": self.lines,
            "fall_interval_ms": self.fall_interval_ms,
            "state": self.state.value,
        }
