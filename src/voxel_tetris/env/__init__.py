"""Gymnasium environments for Voxel Tetris."""

from __future__ import annotations

from gymnasium.envs.registration import register

# Register default 10x20x10 Voxel Tetris environment
register(
    id="VoxelTetris-10x20x10-v0",
    entry_point="voxel_tetris.env.voxel_tetris_env:VoxelTetrisEnv",
)

__all__ = ["VoxelTetris-10x20x10-v0"]
