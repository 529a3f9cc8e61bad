from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Dict, List, NamedTuple, Optional, Tuple


class Position(NamedTuple):
    x: int
    y: int
    z: int

    def moved(self, dx: int = 0, dy: int = 0, dz: int = 0) -> "Position":
        return Position(self.x + dx, self.y + dy, self.z + dz)


class TetrominoType(IntEnum):
    I = 1
    O = 2
    T = 3
    S = 4
    Z = 5
    J = 6
    L = 7


@dataclass(frozen=True)
class Shape:
    kind: TetrominoType
    blocks: Tuple[Position, ...]
    color: str

    def rotated(self) -> "Shape":
        """Quarter turn about the vertical axis: (x, y, z) -> (-z, y, x)."""
        blocks = tuple(Position(-b.z, b.y, b.x) for b in self.blocks)
        return replace(self, blocks=blocks)


def _shape(kind: TetrominoType, color: str, *offsets: Tuple[int, int, int]) -> Shape:
    return Shape(kind=kind, blocks=tuple(Position(*o) for o in offsets), color=color)


# Flat footprints, all in the z = 0 plane
SHAPES: Dict[TetrominoType, Shape] = {
    TetrominoType.I: _shape(TetrominoType.I, "#00f5ff", (0, 0, 0), (1, 0, 0), (2, 0, 0), (3, 0, 0)),
    TetrominoType.O: _shape(TetrominoType.O, "#ffff00", (0, 0, 0), (1, 0, 0), (0, 1, 0), (1, 1, 0)),
    TetrominoType.T: _shape(TetrominoType.T, "#a000f0", (1, 0, 0), (0, 1, 0), (1, 1, 0), (2, 1, 0)),
    TetrominoType.S: _shape(TetrominoType.S, "#00f000", (1, 0, 0), (2, 0, 0), (0, 1, 0), (1, 1, 0)),
    TetrominoType.Z: _shape(TetrominoType.Z, "#f00000", (0, 0, 0), (1, 0, 0), (1, 1, 0), (2, 1, 0)),
    TetrominoType.J: _shape(TetrominoType.J, "#0000f0", (0, 0, 0), (0, 1, 0), (1, 1, 0), (2, 1, 0)),
    TetrominoType.L: _shape(TetrominoType.L, "#f0a000", (2, 0, 0), (0, 1, 0), (1, 1, 0), (2, 1, 0)),
}


def color_for_value(value: int) -> Optional[str]:
    """Color of a board cell value, None for empty cells."""
    if value == 0:
        return None
    return SHAPES[TetrominoType(abs(int(value)))].color


@dataclass(frozen=True)
class Piece:
    shape: Shape
    position: Position
    rotation: int = 0  # 0..3, informational only

    @property
    def kind(self) -> TetrominoType:
        return self.shape.kind

    def cells(self) -> List[Position]:
        ax, ay, az = self.position
        return [Position(ax + b.x, ay + b.y, az + b.z) for b in self.shape.blocks]

    def moved(self, dx: int = 0, dy: int = 0, dz: int = 0) -> "Piece":
        return Piece(self.shape, self.position.moved(dx, dy, dz), self.rotation)

    def rotated(self) -> "Piece":
        return Piece(self.shape.rotated(), self.position, (self.rotation + 1) % 4)


def spawn_position(width: int, depth: int) -> Position:
    return Position(width // 2 - 1, 0, depth // 2)


def spawn_piece(shape: Shape, width: int, depth: int) -> Piece:
    return Piece(shape=shape, position=spawn_position(width, depth), rotation=0)
