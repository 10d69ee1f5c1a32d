from __future__ import annotations

import logging
from typing import Dict

import pygame

from cyber_tetris.game import Action, TetrisGame
from .renderer import Renderer


KEY_TO_ACTION: Dict[int, Action] = {
    pygame.K_LEFT: Action.LEFT,
    pygame.K_RIGHT: Action.RIGHT,
    pygame.K_UP: Action.ROTATE_CW,
    pygame.K_x: Action.ROTATE_CW,
    pygame.K_z: Action.ROTATE_CCW,
    pygame.K_DOWN: Action.SOFT_DROP,
    pygame.K_SPACE: Action.HARD_DROP,
    pygame.K_c: Action.HOLD,
    pygame.K_LSHIFT: Action.HOLD,
    pygame.K_RSHIFT: Action.HOLD,
}


def handle_key(game: TetrisGame, key: int) -> None:
    if key == pygame.K_p:
        if game.paused:
            game.resume()
        else:
            game.pause()
    elif key == pygame.K_r:
        game.reset()
        game.start()
    else:
        action = KEY_TO_ACTION.get(key)
        if action is not None:
            game.step(action)


def run() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    pygame.init()
    try:
        clock = pygame.time.Clock()
        game = TetrisGame()
        renderer = Renderer(cell_size=28)
        screen = pygame.display.set_mode(renderer.window_size(game))
        pygame.display.set_caption("Cyber Tetris")
        font = pygame.font.SysFont(None, 28)
        game.start()

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    else:
                        handle_key(game, event.key)

            game.tick(pygame.time.get_ticks())
            renderer.draw(screen, game, font)
            pygame.display.flip()
            clock.tick(60)
    finally:
        pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    run()
