import random

import numpy as np
import pytest

from tetris_engine.game import Piece, TetrominoType, random_piece, rotate_cw, rotation_states, shape_of


@pytest.mark.parametrize("kind", list(TetrominoType))
def test_four_clockwise_rotations_return_to_start(kind):
    piece = Piece.of(kind)
    turned = piece.rotated_cw().rotated_cw().rotated_cw().rotated_cw()
    assert turned.rotation == piece.rotation
    assert np.array_equal(turned.shape(), piece.shape())


@pytest.mark.parametrize("kind", list(TetrominoType))
def test_cw_then_ccw_is_identity(kind):
    piece = Piece.of(kind)
    for _ in range(4):
        back = piece.rotated_cw().rotated_ccw()
        assert back.rotation == piece.rotation
        assert np.array_equal(back.shape(), piece.shape())
        piece = piece.rotated_cw()


def test_rotate_cw_maps_cells_clockwise():
    m = np.array([[1, 2, 3], [4, 5, 6]], dtype=np.int8)
    r = rotate_cw(m)
    assert r.shape == (3, 2)
    n = m.shape[0]
    for i in range(m.shape[0]):
        for j in range(m.shape[1]):
            assert r[j, n - 1 - i] == m[i, j]


def test_i_piece_swaps_dimensions_when_unpadded():
    states = rotation_states(np.array([[1, 1, 1, 1]], dtype=np.int8))
    assert states[0].shape == (1, 4)
    assert states[1].shape == (4, 1)


def test_vertical_i_occupies_column_two():
    piece = Piece.of(TetrominoType.I).rotated_cw()
    assert piece.cells_at(0, 0) == [(2, 0), (2, 1), (2, 2), (2, 3)]


def test_o_piece_is_rotation_invariant():
    piece = Piece.of(TetrominoType.O)
    assert piece.width == 2 and piece.height == 2
    for _ in range(4):
        piece = piece.rotated_cw()
        assert np.array_equal(piece.shape(), shape_of(TetrominoType.O))


def test_shapes_carry_their_type_tag():
    for kind in TetrominoType:
        values = {int(v) for v in np.unique(shape_of(kind))} - {0}
        assert values == {int(kind)}
        assert int(np.count_nonzero(shape_of(kind))) == 4


def test_rotation_states_are_shared_not_recomputed():
    piece = Piece.of(TetrominoType.T)
    assert piece.rotated_cw().states is piece.states


def test_shapes_are_read_only():
    with pytest.raises(ValueError):
        shape_of(TetrominoType.T)[0, 0] = 9
    with pytest.raises(ValueError):
        Piece.of(TetrominoType.L).rotated_cw().shape()[0, 0] = 9


def test_random_piece_covers_all_types():
    rng = random.Random(1234)
    seen = {random_piece(rng).kind for _ in range(500)}
    assert seen == set(TetrominoType)
