from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
import pygame

from cyber_tetris.game import TetrisGame, TetrominoType, square_matrix


BACKGROUND = (2, 10, 20)
EMPTY_CELL = (12, 22, 34)

PALETTE = {
    TetrominoType.I: (57, 240, 255),
    TetrominoType.J: (43, 157, 255),
    TetrominoType.L: (59, 183, 255),
    TetrominoType.O: (127, 230, 255),
    TetrominoType.S: (23, 213, 255),
    TetrominoType.T: (90, 216, 255),
    TetrominoType.Z: (26, 199, 255),
}


def color_for_value(v: int) -> Tuple[int, int, int]:
    # Falling cells are negative in game states
    if v == 0:
        return EMPTY_CELL
    return PALETTE.get(abs(v), (200, 200, 200))


class Renderer:
    def __init__(self, cell_size: int = 30, margin: int = 20, preview_cells: int = 4) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.preview_cells = preview_cells

    def window_size(self, game: TetrisGame) -> Tuple[int, int]:
        board_w = game.grid.width * self.cell_size
        board_h = game.grid.height * self.cell_size
        panel_w = self.preview_cells * self.cell_size
        return self.margin * 3 + board_w + panel_w, self.margin * 2 + board_h

    def _grid_surface(self, state: np.ndarray) -> pygame.Surface:
        h, w = state.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill(BACKGROUND)
        for y in range(h):
            for x in range(w):
                rect = pygame.Rect(
                    x * self.cell_size,
                    y * self.cell_size,
                    self.cell_size - 1,
                    self.cell_size - 1,
                )
                pygame.draw.rect(surf, color_for_value(int(state[y, x])), rect)
        return surf

    def _preview_surface(self, kind: Optional[TetrominoType]) -> pygame.Surface:
        side = self.preview_cells * self.cell_size
        surf = pygame.Surface((side, side))
        surf.fill(BACKGROUND)
        if kind is None:
            return surf
        matrix = square_matrix(kind)
        offset = (side - matrix.shape[0] * self.cell_size) // 2
        for y, x in zip(*np.nonzero(matrix)):
            rect = pygame.Rect(
                offset + int(x) * self.cell_size,
                offset + int(y) * self.cell_size,
                self.cell_size - 2,
                self.cell_size - 2,
            )
            pygame.draw.rect(surf, PALETTE[kind], rect)
        return surf

    def draw(self, screen: pygame.Surface, game: TetrisGame, font: Optional[pygame.font.Font] = None) -> None:
        screen.fill((10, 10, 14))
        screen.blit(self._grid_surface(game.get_state()), (self.margin, self.margin))

        panel_x = self.margin * 2 + game.grid.width * self.cell_size
        side = self.preview_cells * self.cell_size
        next_kind = game.next_kinds[0] if game.next_kinds else None
        screen.blit(self._preview_surface(next_kind), (panel_x, self.margin))
        screen.blit(self._preview_surface(game.held_kind), (panel_x, self.margin * 2 + side))

        if font is not None:
            lines = [f"Score {game.score}", f"Level {game.level}", f"Lines {game.lines}"]
            if game.paused:
                lines.append("Paused")
            elif game.game_over:
                lines.append("Game Over - R to restart")
            y = self.margin * 3 + side * 2
            for text in lines:
                screen.blit(font.render(text, True, (207, 238, 253)), (panel_x, y))
                y += font.get_linesize()
