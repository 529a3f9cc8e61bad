from __future__ import annotations

import argparse
import logging
from typing import Dict, Optional

import pygame

from voxel_tetris.game import Action, GameConfig, VoxelTetrisGame
from .renderer import Renderer

logger = logging.getLogger(__name__)


KEY_TO_ACTION: Dict[int, Action] = {
    pygame.K_a: Action.LEFT,
    pygame.K_d: Action.RIGHT,
    pygame.K_w: Action.FORWARD,
    pygame.K_s: Action.BACKWARD,
    pygame.K_q: Action.ROTATE,
    pygame.K_e: Action.ROTATE,
    pygame.K_DOWN: Action.SOFT_DROP,
    pygame.K_SPACE: Action.HARD_DROP,
}


def run(seed: Optional[int] = None, cell_size: int = 24) -> None:
    pygame.init()
    try:
        clock = pygame.time.Clock()
        game = VoxelTetrisGame(GameConfig(random_seed=seed))
        renderer = Renderer(cell_size=cell_size)

        screen = pygame.display.set_mode(renderer.window_size(game.grid.shape))
        pygame.display.set_caption("Voxel Tetris - WASD move, Q/E rotate, Space drop")

        game.start()
        running = True
        while running:
            # Input handling
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_r:
                        game.start()
                    elif event.key == pygame.K_p:
                        game.toggle_pause()
                    else:
                        action = KEY_TO_ACTION.get(event.key)
                        if action is not None:
                            game.apply(action)

            # Gravity runs off the engine's own timer
            game.update(clock.get_time())

            renderer.draw(screen, game.get_state(), game.ghost_position())
            clock.tick(60)
        logger.info("quit at score %d, level %d, lines %d", game.score, game.level, game.lines)
    finally:
        pygame.quit()


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--cell_size", type=int, default=24)
    p.add_argument("--log_level", default="INFO")
    return p


def main() -> None:
    args = build_parser().parse_args()
    log_format = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
    logging.basicConfig(level=args.log_level.upper(), format=log_format)
    run(seed=args.seed, cell_size=args.cell_size)


if __name__ == "__main__":  # pragma: no cover
    main()
