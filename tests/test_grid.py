import numpy as np

from tetris_engine.game import BOARD_HEIGHT, BOARD_WIDTH, GameGrid


def test_new_grid_is_empty():
    grid = GameGrid()
    assert grid.grid.shape == (BOARD_HEIGHT, BOARD_WIDTH)
    assert grid.filled_cells() == 0


def test_can_place_rejects_out_of_bounds_and_overlap():
    grid = GameGrid()
    assert grid.can_place([(0, 0), (9, 19)])
    assert not grid.can_place([(0, 0), (-1, 0)])
    assert not grid.can_place([(0, 0), (10, 0)])
    assert not grid.can_place([(0, 19), (0, 20)])
    assert not grid.can_place([(0, 0), (0, -1)])
    grid.grid[5, 5] = 3
    assert not grid.can_place([(4, 5), (5, 5)])
    assert grid.can_place([(4, 5), (6, 5)])


def test_place_skips_cells_above_board():
    grid = GameGrid()
    written = grid.place([(3, -1), (3, 0)], 2)
    assert written == 1
    assert grid.grid[0, 3] == 2
    assert grid.filled_cells() == 1


def test_clear_two_separate_rows():
    grid = GameGrid()
    grid.grid[5, :] = 1
    grid.grid[7, :] = 2
    grid.grid[6, 0] = 3
    grid.grid[3, 4] = 4
    grid.grid[19, 9] = 5

    cleared = grid.clear_full_lines()

    assert cleared == 2
    assert grid.grid[7, 0] == 3  # one full row below it
    assert grid.grid[5, 4] == 4  # two full rows below it
    assert grid.grid[19, 9] == 5
    assert not grid.grid[0].any() and not grid.grid[1].any()
    assert grid.filled_cells() == 3


def test_clear_adjacent_rows_rechecks_same_index():
    grid = GameGrid()
    grid.grid[16:20, :] = 6
    grid.grid[15, 2] = 1
    assert grid.clear_full_lines() == 4
    assert grid.grid[19, 2] == 1
    assert grid.filled_cells() == 1


def test_no_full_rows_leaves_grid_untouched():
    grid = GameGrid()
    grid.grid[19, :9] = 7
    before = grid.clone_state()
    assert grid.clear_full_lines() == 0
    assert np.array_equal(before, grid.grid)


def test_reset_empties_grid():
    grid = GameGrid()
    grid.grid[15, 0] = 1
    grid.grid[19, :] = 3
    assert grid.filled_cells() == 11
    grid.reset()
    assert grid.filled_cells() == 0
