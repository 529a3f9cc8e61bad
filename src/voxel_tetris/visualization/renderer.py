from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
import pygame

from voxel_tetris.game import GameState, Piece, Position, color_for_value
from voxel_tetris.game.grid import front_view, top_view


Color = Tuple[int, int, int]

EMPTY: Color = (20, 20, 26)
GHOST: Color = (90, 90, 110)
TEXT: Color = (230, 230, 240)


def _color_for_value(v: int) -> Color:
    color = color_for_value(int(v))
    if color is None:
        return EMPTY
    return tuple(pygame.Color(color))[:3]


def overlay_piece(board: np.ndarray, state: GameState, ghost: Optional[Position] = None) -> np.ndarray:
    """Copy of ``board`` with the ghost (value 8) and falling piece (negative) drawn in."""
    out = board.astype(np.int16)
    piece = state.current_piece
    if piece is None:
        return out
    w, h, d = out.shape
    if ghost is not None:
        for x, y, z in Piece(piece.shape, ghost, piece.rotation).cells():
            if 0 <= x < w and 0 <= y < h and 0 <= z < d and out[x, y, z] == 0:
                out[x, y, z] = 8
    for x, y, z in piece.cells():
        if 0 <= x < w and 0 <= y < h and 0 <= z < d:
            out[x, y, z] = -int(piece.kind)
    return out


class Renderer:
    """Draws a front (x/y) and a top (x/z) projection of the voxel board."""

    def __init__(self, cell_size: int = 24, margin: int = 20) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self._font: Optional[pygame.font.Font] = None

    def window_size(self, board_shape: Tuple[int, int, int]) -> Tuple[int, int]:
        w, h, d = board_shape
        width = self.margin * 4 + (w * 2) * self.cell_size + 6 * self.cell_size
        height = self.margin * 2 + max(h, d) * self.cell_size
        return width, height

    def panel_x(self, board_width: int) -> int:
        """Left edge of the score panel, right of the front and top views."""
        return self.margin * 3 + board_width * 2 * self.cell_size

    def _cell_color(self, v: int) -> Color:
        if v == 8:
            return GHOST
        return _color_for_value(v)

    def _view_surface(self, view: np.ndarray) -> pygame.Surface:
        # view is indexed [column, row]
        cols, rows = view.shape
        surf = pygame.Surface((cols * self.cell_size, rows * self.cell_size))
        surf.fill((30, 30, 36))
        for r in range(rows):
            for c in range(cols):
                rect = pygame.Rect(
                    c * self.cell_size,
                    r * self.cell_size,
                    self.cell_size - 1,
                    self.cell_size - 1,
                )
                pygame.draw.rect(surf, self._cell_color(int(view[c, r])), rect)
        return surf

    def _text(self, screen: pygame.Surface, text: str, pos: Tuple[int, int]) -> None:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 26)
        screen.blit(self._font.render(text, True, TEXT), pos)

    def draw(self, screen: pygame.Surface, state: GameState, ghost: Optional[Position] = None) -> None:
        board = overlay_piece(state.board, state, ghost)
        w, h, d = board.shape
        screen.fill((10, 10, 14))

        front = self._view_surface(front_view(board))
        top = self._view_surface(top_view(board))
        x0 = self.margin
        x1 = x0 + w * self.cell_size + self.margin
        x2 = self.panel_x(w)
        screen.blit(front, (x0, self.margin))
        screen.blit(top, (x1, self.margin))

        y = self.margin
        for line in (f"Score {state.score}", f"Level {state.level}", f"Lines {state.lines}"):
            self._text(screen, line, (x2, y))
            y += 26
        if state.next_piece is not None:
            self._text(screen, "Next", (x2, y + 10))
            preview_y = y + 40
            size = self.cell_size // 2
            color = pygame.Color(state.next_piece.color)
            for b in state.next_piece.blocks:
                rect = pygame.Rect(x2 + b.x * size, preview_y + b.y * size, size - 1, size - 1)
                pygame.draw.rect(screen, color, rect)
            y = preview_y + 3 * size
        # Status lines go in the side panel, clear of both views
        if state.is_paused:
            self._text(screen, "Paused", (x2, y + 10))
            self._text(screen, "P to resume", (x2, y + 36))
        elif state.is_game_over:
            self._text(screen, "Game Over", (x2, y + 10))
            self._text(screen, "R restart, ESC quit", (x2, y + 36))
        pygame.display.flip()
