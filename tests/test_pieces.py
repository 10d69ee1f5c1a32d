import unittest

import numpy as np

from cyber_tetris.game import BASE_SHAPES, GameGrid, TetrominoType, spawn_piece, square_matrix


class SpawnTests(unittest.TestCase):
    def test_every_kind_spawns_clear_of_an_empty_board(self):
        grid = GameGrid(10, 20)
        for kind in TetrominoType:
            piece = spawn_piece(kind, grid.width)
            self.assertFalse(grid.collide(piece), kind.name)

    def test_spawn_is_centred_above_the_board(self):
        i_piece = spawn_piece(TetrominoType.I, 10)
        self.assertEqual(i_piece.size, 4)
        self.assertEqual((i_piece.x, i_piece.y), (3, -3))
        o_piece = spawn_piece(TetrominoType.O, 10)
        self.assertEqual((o_piece.x, o_piece.y), (4, -1))
        t_piece = spawn_piece(TetrominoType.T, 10)
        self.assertEqual((t_piece.x, t_piece.y), (3, -2))

    def test_square_matrix_is_tagged_with_kind(self):
        matrix = square_matrix(TetrominoType.S)
        self.assertEqual(matrix.shape, (3, 3))
        self.assertEqual(set(np.unique(matrix)), {0, int(TetrominoType.S)})
        self.assertEqual(int(np.count_nonzero(matrix)), 4)

    def test_base_shapes_are_read_only(self):
        with self.assertRaises(ValueError):
            BASE_SHAPES[TetrominoType.O][0, 0] = 0


class RotationTests(unittest.TestCase):
    def test_clockwise_rotation_of_t(self):
        piece = spawn_piece(TetrominoType.T, 10)
        t = int(TetrominoType.T)
        expected = np.array([[0, t, 0], [0, t, t], [0, t, 0]], dtype=np.int8)
        np.testing.assert_array_equal(piece.rotated(1), expected)

    def test_counter_clockwise_undoes_clockwise(self):
        piece = spawn_piece(TetrominoType.L, 10)
        piece.matrix = piece.rotated(1)
        np.testing.assert_array_equal(piece.rotated(-1), square_matrix(TetrominoType.L))

    def test_rotation_does_not_touch_the_piece(self):
        piece = spawn_piece(TetrominoType.J, 10)
        before = piece.matrix.copy()
        piece.rotated(1)
        np.testing.assert_array_equal(piece.matrix, before)


if __name__ == "__main__":
    unittest.main()
