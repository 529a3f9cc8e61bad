import unittest

import numpy as np

from voxel_tetris.game import Position, Scheduler, TetrominoType, VoxelTetrisGame
from voxel_tetris.visualization.renderer import Renderer, overlay_piece


class FixedRandom:
    def choice(self, seq):
        return TetrominoType.O

    def seed(self, value):
        pass


class TestOverlay(unittest.TestCase):
    def test_piece_and_ghost(self):
        game = VoxelTetrisGame(rng=FixedRandom(), scheduler=Scheduler())
        game.start()
        state = game.get_state()
        board = overlay_piece(state.board, state, game.ghost_position())
        self.assertEqual(4, int(np.sum(board == -int(TetrominoType.O))))
        self.assertEqual(4, int(np.sum(board == 8)))
        self.assertEqual(8, board[4, 19, 5])
        self.assertEqual(-int(TetrominoType.O), board[4, 0, 5])
        # The snapshot itself is untouched
        self.assertFalse(np.any(state.board))

    def test_without_piece(self):
        game = VoxelTetrisGame(rng=FixedRandom(), scheduler=Scheduler())
        state = game.get_state()
        board = overlay_piece(state.board, state, Position(0, 0, 0))
        self.assertFalse(np.any(board))


class TestLayout(unittest.TestCase):
    def test_panel_is_right_of_both_views(self):
        r = Renderer(cell_size=24, margin=20)
        views_right_edge = r.margin + 10 * r.cell_size + r.margin + 10 * r.cell_size
        self.assertGreaterEqual(r.panel_x(10), views_right_edge)
        width, _ = r.window_size((10, 20, 10))
        self.assertLess(r.panel_x(10), width)


if __name__ == "__main__":
    unittest.main()
