from __future__ import annotations

import logging
from dataclasses import dataclass, field


logger = logging.getLogger(__name__)


@dataclass
class ScoringRules:
    line_clear_scores: tuple[int, int, int, int] = (100, 300, 500, 800)
    soft_drop_per_cell: int = 1
    hard_drop_per_cell: int = 2
    lines_per_level: int = 10
    base_interval_ms: int = 1000
    interval_step_ms: int = 70
    min_interval_ms: int = 80

    def score_for_lines(self, lines: int, level: int = 1) -> int:
        if lines <= 0:
            return 0
        # Anything beyond four rows scores as four
        return self.line_clear_scores[min(lines, 4) - 1] * level

    def level_for_lines(self, total_lines: int) -> int:
        return total_lines // self.lines_per_level + 1

    def fall_interval_ms(self, level: int) -> int:
        return max(self.min_interval_ms, self.base_interval_ms - (level - 1) * self.interval_step_ms)


@dataclass
class Progress:
    """Score, level and fall speed of one session."""

    rules: ScoringRules = field(default_factory=ScoringRules)
    score: int = 0
    level: int = 1
    lines: int = 0
    fall_interval_ms: int = 0

    def __post_init__(self) -> None:
        self.fall_interval_ms = self.rules.fall_interval_ms(self.level)

    def reset(self) -> None:
        self.score = 0
        self.level = 1
        self.lines = 0
        self.fall_interval_ms = self.rules.fall_interval_ms(self.level)

    def on_lines_cleared(self, count: int) -> int:
        delta = self.rules.score_for_lines(count, self.level)
        if count <= 0:
            return 0
        self.score += delta
        self.lines += count
        level = self.rules.level_for_lines(self.lines)
        if level != self.level:
            logger.info("Level up: %d -> %d after %d lines", self.level, level, self.lines)
        self.level = level
        self.fall_interval_ms = self.rules.fall_interval_ms(level)
        return delta

    def on_soft_drop_cell(self) -> int:
        self.score += self.rules.soft_drop_per_cell
        return self.rules.soft_drop_per_cell

    def on_hard_drop_cells(self, cells: int) -> int:
        delta = self.rules.hard_drop_per_cell * max(0, cells)
        self.score += delta
        return delta
