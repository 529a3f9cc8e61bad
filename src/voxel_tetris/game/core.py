from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional, Tuple, Union

import numpy as np

from .grid import GameGrid
from .pieces import SHAPES, Piece, Position, Shape, TetrominoType, color_for_value, spawn_piece
from .rules import ScoringRules
from .scheduler import Scheduler, TimerHandle

logger = logging.getLogger(__name__)


class Direction(str, Enum):
    LEFT = "left"
    RIGHT = "right"
    DOWN = "down"
    FORWARD = "forward"
    BACKWARD = "backward"

    @property
    def delta(self) -> Tuple[int, int, int]:
        return _DIRECTION_DELTAS[self]


_DIRECTION_DELTAS = {
    Direction.LEFT: (-1, 0, 0),
    Direction.RIGHT: (1, 0, 0),
    Direction.DOWN: (0, 1, 0),
    Direction.FORWARD: (0, 0, -1),
    Direction.BACKWARD: (0, 0, 1),
}


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    FORWARD = 2
    BACKWARD = 3
    SOFT_DROP = 4
    ROTATE = 5
    HARD_DROP = 6
    NONE = 7


_ACTION_DIRECTIONS = {
    Action.LEFT: Direction.LEFT,
    Action.RIGHT: Direction.RIGHT,
    Action.FORWARD: Direction.FORWARD,
    Action.BACKWARD: Direction.BACKWARD,
    Action.SOFT_DROP: Direction.DOWN,
}


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    depth: int = 10
    random_seed: Optional[int] = None

    def __post_init__(self) -> None:
        # Every shape must fit the empty board at the spawn anchor
        if not all(self._fits(cells) for cells in _spawn_footprints(self.width, self.depth)):
            raise ValueError(
                f"board {self.width}x{self.height}x{self.depth} is too small to spawn pieces"
            )

    def _fits(self, cells) -> bool:
        return all(0 <= x < self.width and 0 <= y < self.height and 0 <= z < self.depth for x, y, z in cells)


def _spawn_footprints(width: int, depth: int):
    return [spawn_piece(shape, width, depth).cells() for shape in SHAPES.values()]


@dataclass(frozen=True)
class GameState:
    board: np.ndarray
    current_piece: Optional[Piece]
    next_piece: Optional[Shape]
    score: int
    level: int
    lines: int
    is_game_over: bool
    is_paused: bool


class VoxelTetrisGame:
    """Falling-block game on a 3D voxel board.

    Every command is synchronous and a silent no-op when it is not legal
    (no active piece, game over, paused, or a blocked position). Gravity is
    a single interval timer on ``scheduler`` that calls :meth:`move` with
    ``"down"``; it is armed only while a piece is in play.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        rng: Optional[random.Random] = None,
        scheduler: Optional[Scheduler] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng = rng or random.Random(self.config.random_seed)
        self.scheduler = scheduler or Scheduler()
        self.grid = GameGrid(self.config.width, self.config.height, self.config.depth)
        self.current_piece: Optional[Piece] = None
        self.next_piece: Optional[Shape] = None
        self.score = 0
        self.level = 1
        self.lines = 0
        self.is_game_over = False
        self.is_paused = False
        self._gravity: Optional[TimerHandle] = None

    # -- setup -------------------------------------------------------------

    def seed(self, value: Optional[int]) -> None:
        self.rng.seed(value)

    def _random_shape(self) -> Shape:
        kind = self.rng.choice(list(TetrominoType))
        return SHAPES[kind]

    def _spawn(self, shape: Shape) -> Piece:
        return spawn_piece(shape, self.grid.width, self.grid.depth)

    def start(self) -> None:
        self.grid.reset()
        first = self._random_shape()
        self.next_piece = self._random_shape()
        self.score = 0
        self.level = 1
        self.lines = 0
        self.is_game_over = False
        self.is_paused = False
        self._enter(self._spawn(first))
        if self.current_piece is not None:
            logger.info("game started with %s, next %s", self.current_piece.kind.name, self.next_piece.kind.name)
        self._sync_gravity(restart=True)

    def toggle_pause(self) -> None:
        self.is_paused = not self.is_paused
        self._sync_gravity()

    # -- queries -----------------------------------------------------------

    def _playable(self) -> bool:
        return self.current_piece is not None and not self.is_game_over and not self.is_paused

    def is_valid_position(self, piece: Piece) -> bool:
        return self.grid.can_place(piece.cells())

    def color_at(self, x: int, y: int, z: int) -> Optional[str]:
        if not self.grid.is_inside(x, y, z):
            return None
        return color_for_value(self.grid.value_at(x, y, z))

    def ghost_position(self) -> Optional[Position]:
        if self.current_piece is None:
            return None
        return self._dropped(self.current_piece).position

    def get_state(self) -> GameState:
        board = self.grid.clone_state()
        board.setflags(write=False)
        return GameState(
            board=board,
            current_piece=self.current_piece,
            next_piece=self.next_piece,
            score=self.score,
            level=self.level,
            lines=self.lines,
            is_game_over=self.is_game_over,
            is_paused=self.is_paused,
        )

    # -- commands ----------------------------------------------------------

    def move(self, direction: Union[Direction, str]) -> None:
        direction = Direction(direction)
        if not self._playable():
            return
        assert self.current_piece is not None
        moved = self.current_piece.moved(*direction.delta)
        if self.is_valid_position(moved):
            self.current_piece = moved
        elif direction is Direction.DOWN:
            self._land()

    def rotate(self) -> None:
        if not self._playable():
            return
        assert self.current_piece is not None
        rotated = self.current_piece.rotated()
        if self.is_valid_position(rotated):
            self.current_piece = rotated

    def hard_drop(self) -> None:
        if not self._playable():
            return
        assert self.current_piece is not None
        self.current_piece = self._dropped(self.current_piece)

    def apply(self, action: Action) -> None:
        action = Action(action)
        if action in _ACTION_DIRECTIONS:
            self.move(_ACTION_DIRECTIONS[action])
        elif action == Action.ROTATE:
            self.rotate()
        elif action == Action.HARD_DROP:
            self.hard_drop()

    def update(self, elapsed_ms: int) -> int:
        """Advance the gravity clock; returns the number of gravity ticks fired."""
        return self.scheduler.advance(elapsed_ms)

    # -- internals ---------------------------------------------------------

    def _dropped(self, piece: Piece) -> Piece:
        while True:
            below = piece.moved(dy=1)
            if not self.is_valid_position(below):
                return piece
            piece = below

    def _land(self) -> None:
        assert self.current_piece is not None and self.next_piece is not None
        piece = self.current_piece
        self.grid.place(piece.cells(), int(piece.kind))
        cleared = self.grid.clear_lines()
        self.score += self.rules.score_for_lines(cleared, self.level)
        self.lines += cleared
        self.level = self.rules.level_for_lines(self.lines)
        logger.debug(
            "landed %s at %s, cleared %d layer(s), level %d",
            piece.kind.name, tuple(piece.position), cleared, self.level,
        )

        spawned = self._spawn(self.next_piece)
        self.next_piece = self._random_shape()
        self._enter(spawned)
        self._sync_gravity()

    def _enter(self, spawned: Piece) -> None:
        """Make ``spawned`` the active piece, or end the game if it does not fit."""
        if self.is_valid_position(spawned):
            self.current_piece = spawned
        else:
            self.current_piece = None
            self.is_game_over = True
            logger.info("game over: score %d, lines %d, level %d", self.score, self.lines, self.level)

    def _on_gravity(self) -> None:
        self.move(Direction.DOWN)

    def _sync_gravity(self, restart: bool = False) -> None:
        """Keep exactly one gravity timer armed while play is possible, none otherwise."""
        interval = self.rules.drop_interval_ms(self.level)
        timer = self._gravity
        if timer is not None:
            if self._playable() and not restart and timer.active and timer.interval_ms == interval:
                return
            timer.cancel()
            self._gravity = None
        if self._playable():
            self._gravity = self.scheduler.call_every(interval, self._on_gravity)

    @property
    def gravity_timer(self) -> Optional[TimerHandle]:
        return self._gravity
