from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from voxel_tetris.game import Action, Direction, GameConfig, ScoringRules, VoxelTetrisGame
from voxel_tetris.game.grid import top_view
from voxel_tetris.game.pieces import SHAPES, TetrominoType


def _hex_to_rgb(color: str) -> Tuple[int, int, int]:
    color = color.lstrip("#")
    return int(color[0:2], 16), int(color[2:4], 16), int(color[4:6], 16)


_PALETTE = np.zeros((len(TetrominoType) + 1, 3), dtype=np.uint8)
_PALETTE[0] = (30, 30, 36)
for _kind, _shape in SHAPES.items():
    _PALETTE[int(_kind)] = _hex_to_rgb(_shape.color)


def observe_board(game: VoxelTetrisGame) -> np.ndarray:
    """Board copy with the falling piece overlaid as negative kind values."""
    board = game.grid.clone_state()
    piece = game.current_piece
    if piece is not None and not game.is_game_over:
        for x, y, z in piece.cells():
            if game.grid.is_inside(x, y, z):
                # Use negative to indicate falling piece overlay
                board[x, y, z] = -int(piece.kind)
    return board


class VoxelTetrisEnv(gym.Env):
    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 rules: Optional[ScoringRules] = None,
                 max_episode_steps: int = 5000) -> None:
        super().__init__()
        self.game = VoxelTetrisGame(config, rules)
        self.render_mode = render_mode
        self.max_episode_steps = int(max_episode_steps)

        cfg = self.game.config
        n_kinds = len(TetrominoType)

        # Observation space: board with falling piece overlay and next shape (0 for none)
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=-n_kinds, high=n_kinds, shape=(cfg.width, cfg.height, cfg.depth),
                                    dtype=np.int8),
                "next_piece": spaces.Discrete(n_kinds + 1),
            }
        )
        self.action_space = spaces.Discrete(len(Action))

        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        next_piece = self.game.next_piece
        return {
            "board": observe_board(self.game),
            "next_piece": int(next_piece.kind) if next_piece is not None else 0,
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.game.score,
            "level": self.game.level,
            "lines": self.game.lines,
            "max_height": self.game.grid.get_max_height(),
            "holes": self.game.grid.count_holes(),
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.game.seed(seed)
        self.game.start()
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        score_before = self.game.score
        lines_before = self.game.lines

        self.game.apply(Action(int(action)))
        # One gravity step per agent step; the engine's own timer is never advanced here
        self.game.move(Direction.DOWN)

        self._steps += 1
        terminated = bool(self.game.is_game_over)
        truncated = not terminated and self._steps >= self.max_episode_steps
        reward = float(self.game.score - score_before)

        info = self._get_info()
        info["lines_cleared"] = self.game.lines - lines_before
        return self._get_obs(), reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            # Top-down image of the highest block in every column
            heights = top_view(observe_board(self.game))
            cell = 12
            img = _PALETTE[np.abs(heights).T]
            return np.repeat(np.repeat(img, cell, axis=0), cell, axis=1)
        return None

    def close(self) -> None:
        pass
