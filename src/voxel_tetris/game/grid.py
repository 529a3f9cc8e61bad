from __future__ import annotations

from typing import Iterable, Tuple

import numpy as np


Coordinate = Tuple[int, int, int]


class GameGrid:
    """Discrete 3D voxel grid indexed ``[x, y, z]``.

    The grid uses 0 for empty cells and positive integers for filled cells.
    Integer values correspond to tetromino indices, so the color of a settled
    block can be recovered from the piece catalog. ``y`` grows downward:
    layer 0 is the top of the well and ``height - 1`` is the floor.
    """

    def __init__(self, width: int, height: int, depth: int) -> None:
        self.width = int(width)
        self.height = int(height)
        self.depth = int(depth)
        self.grid = np.zeros((self.width, self.height, self.depth), dtype=np.int8)

    @property
    def shape(self) -> Tuple[int, int, int]:
        return self.width, self.height, self.depth

    def reset(self) -> None:
        self.grid.fill(0)

    def is_inside(self, x: int, y: int, z: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height and 0 <= z < self.depth

    def value_at(self, x: int, y: int, z: int) -> int:
        return int(self.grid[x, y, z])

    def can_place(self, cells: Iterable[Coordinate]) -> bool:
        for x, y, z in cells:
            if not self.is_inside(x, y, z):
                return False
            if self.grid[x, y, z] != 0:
                return False
        return True

    def place(self, cells: Iterable[Coordinate], value: int) -> int:
        """Write ``value`` into every in-bounds cell and return how many were written.

        Cells outside the grid are skipped. Callers validate with
        :meth:`can_place` first, so this only matters for direct use.
        """
        placed = 0
        for x, y, z in cells:
            if self.is_inside(x, y, z):
                self.grid[x, y, z] = value
                placed += 1
        return placed

    def full_layers(self) -> np.ndarray:
        return np.where(np.all(self.grid != 0, axis=(0, 2)))[0]

    def clear_lines(self) -> int:
        """Remove full y-layers, drop everything above them, return the count."""
        full = self.full_layers()
        if full.size == 0:
            return 0
        num = int(full.size)
        # Remove full layers and add empty layers at the top
        kept = np.delete(self.grid, full, axis=1)
        new_layers = np.zeros((self.width, num, self.depth), dtype=np.int8)
        self.grid = np.concatenate((new_layers, kept), axis=1)
        return num

    def filled_count(self) -> int:
        return int(np.count_nonzero(self.grid))

    def get_max_height(self) -> int:
        # y=0 is top; find first non-empty layer from top
        non_empty = np.where(np.any(self.grid != 0, axis=(0, 2)))[0]
        if non_empty.size == 0:
            return 0
        return self.height - int(non_empty[0])

    def count_holes(self) -> int:
        holes = 0
        for x in range(self.width):
            for z in range(self.depth):
                column = self.grid[x, :, z]
                seen_block = False
                for cell in column:
                    if cell != 0:
                        seen_block = True
                    elif seen_block:
                        holes += 1
        return holes

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()

    def copy(self) -> "GameGrid":
        new_grid = GameGrid(self.width, self.height, self.depth)
        new_grid.grid = self.grid.copy()
        return new_grid


def _first_along(board: np.ndarray, axis: int) -> np.ndarray:
    occupied = board != 0
    first = np.expand_dims(np.argmax(occupied, axis=axis), axis)
    values = np.squeeze(np.take_along_axis(board, first, axis=axis), axis=axis)
    return np.where(occupied.any(axis=axis), values, 0)


def top_view(board: np.ndarray) -> np.ndarray:
    """(width, depth) array holding the highest block of every column."""
    return _first_along(board, axis=1)


def front_view(board: np.ndarray) -> np.ndarray:
    """(width, height) array holding the block nearest the z = 0 face."""
    return _first_along(board, axis=2)
