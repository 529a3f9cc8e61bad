"""Game module for Voxel Tetris.

Exports the core game engine and supporting classes:
- GameGrid: 3D voxel grid representation and layer clearing
- Piece, Shape, Position: tetromino catalog and live pieces
- TetrominoType: Enum of available piece types
- ScoringRules: Score, level and gravity-speed formulas
- Scheduler: Cooperative interval timers for gravity
- VoxelTetrisGame: Main game state machine
"""

from .grid import GameGrid
from .pieces import SHAPES, Piece, Position, Shape, TetrominoType, color_for_value, spawn_piece
from .rules import ScoringRules
from .scheduler import Scheduler, TimerHandle
from .core import Action, Direction, GameConfig, GameState, VoxelTetrisGame

__all__ = [
    "GameGrid",
    "SHAPES",
    "Piece",
    "Position",
    "Shape",
    "TetrominoType",
    "color_for_value",
    "spawn_piece",
    "ScoringRules",
    "Scheduler",
    "TimerHandle",
    "Action",
    "Direction",
    "GameConfig",
    "GameState",
    "VoxelTetrisGame",
]
