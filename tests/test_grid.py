import unittest

import numpy as np

from cyber_tetris.game import GameGrid, TetrominoType, spawn_piece


class CollisionTests(unittest.TestCase):
    def setUp(self):
        self.grid = GameGrid(10, 20)
        self.piece = spawn_piece(TetrominoType.O, 10)  # cells on rows -1 and 0

    def test_walls_and_floor(self):
        self.assertTrue(self.grid.collide(self.piece, dx=-5))
        self.assertTrue(self.grid.collide(self.piece, dx=5))
        self.assertFalse(self.grid.collide(self.piece, dy=19))
        self.assertTrue(self.grid.collide(self.piece, dy=20))

    def test_occupied_cell(self):
        self.grid.grid[0, 5] = int(TetrominoType.Z)
        self.assertTrue(self.grid.collide(self.piece))
        self.assertFalse(self.grid.collide(self.piece, dx=-2))

    def test_rows_above_board_skip_occupancy(self):
        self.piece.y = -2  # both rows above the board
        self.grid.grid[0, :] = int(TetrominoType.I)
        self.assertFalse(self.grid.collide(self.piece))
        self.assertTrue(self.grid.collide(self.piece, dx=-5))


class MergeTests(unittest.TestCase):
    def test_merge_writes_only_visible_cells(self):
        grid = GameGrid(10, 20)
        piece = spawn_piece(TetrominoType.O, 10)
        self.assertEqual(grid.merge(piece), 2)
        self.assertEqual(grid.grid[0, 4], int(TetrominoType.O))
        self.assertEqual(grid.grid[0, 5], int(TetrominoType.O))
        self.assertEqual(int(np.count_nonzero(grid.grid)), 2)


class ClearLinesTests(unittest.TestCase):
    def test_no_full_rows_leaves_board_unchanged(self):
        grid = GameGrid(10, 20)
        grid.grid[19, :9] = 3
        grid.grid[10, 2] = 5
        before = grid.clone_state()
        self.assertEqual(grid.clear_lines(), 0)
        np.testing.assert_array_equal(grid.grid, before)

    def test_non_contiguous_rows_compact_in_order(self):
        grid = GameGrid(4, 6)
        grid.grid[1] = [1, 0, 0, 0]
        grid.grid[2] = [2, 2, 2, 2]
        grid.grid[3] = [0, 2, 0, 0]
        grid.grid[4] = [4, 4, 4, 4]
        grid.grid[5] = [3, 0, 0, 3]
        self.assertEqual(grid.clear_lines(), 2)
        self.assertEqual(grid.grid.shape, (6, 4))
        expected = np.array(
            [
                [0, 0, 0, 0],
                [0, 0, 0, 0],
                [0, 0, 0, 0],
                [1, 0, 0, 0],
                [0, 2, 0, 0],
                [3, 0, 0, 3],
            ],
            dtype=np.int8,
        )
        np.testing.assert_array_equal(grid.grid, expected)

    def test_more_than_four_rows_are_not_capped(self):
        grid = GameGrid(4, 8)
        grid.grid[2:, :] = 1
        self.assertEqual(grid.clear_lines(), 6)
        self.assertFalse(grid.grid.any())


class MetricsTests(unittest.TestCase):
    def test_height_and_holes(self):
        grid = GameGrid(4, 6)
        self.assertEqual(grid.get_max_height(), 0)
        grid.grid[3, 1] = 1
        grid.grid[5, 1] = 1
        self.assertEqual(grid.get_max_height(), 3)
        self.assertEqual(grid.count_holes(), 1)


if __name__ == "__main__":
    unittest.main()
