import numpy as np
import pytest

from gridfall.board import Position, clear_lines, create_empty_grid, is_valid_position, merge_piece
from gridfall.tetromino import Piece, TetrominoType

I_PIECE = Piece.of(TetrominoType.I)
VERTICAL_I = Piece(((1,), (1,), (1,), (1,)), 1)


def test_empty_grid_has_default_dimensions():
    grid = create_empty_grid()
    assert grid.shape == (20, 10)
    assert not grid.any()


@pytest.mark.parametrize(
    "position",
    [Position(-1, 0), Position(7, 0), Position(0, 20), Position(3, 20)],
)
def test_out_of_bounds_positions_are_invalid(position):
    assert not is_valid_position(create_empty_grid(), I_PIECE, position)


def test_positions_inside_the_board_are_valid():
    grid = create_empty_grid()
    assert is_valid_position(grid, I_PIECE, Position(0, 0))
    assert is_valid_position(grid, I_PIECE, Position(6, 19))


def test_overlap_with_occupied_cell_is_invalid():
    grid = create_empty_grid()
    grid[5, 4] = 3
    assert not is_valid_position(grid, I_PIECE, Position(2, 5))
    assert is_valid_position(grid, I_PIECE, Position(5, 5))
    assert is_valid_position(grid, I_PIECE, Position(2, 4))


def test_cells_above_the_top_edge_do_not_collide():
    grid = create_empty_grid()
    assert is_valid_position(grid, VERTICAL_I, Position(0, -2))


def test_empty_cells_of_the_shape_are_ignored():
    t_piece = Piece.of(TetrominoType.T)  # ((0, 1, 0), (1, 1, 1))
    grid = create_empty_grid()
    grid[0, 0] = 1
    grid[0, 2] = 1
    assert is_valid_position(grid, t_piece, Position(0, 0)) is True
    grid[1, 0] = 1
    assert is_valid_position(grid, t_piece, Position(0, 0)) is False


def test_merge_returns_new_grid_and_leaves_input_untouched():
    grid = create_empty_grid()
    merged = merge_piece(grid, I_PIECE, Position(3, 19))
    assert not grid.any()
    assert merged is not grid
    assert list(merged[19]) == [0, 0, 0, 1, 1, 1, 1, 0, 0, 0]


def test_merge_writes_piece_value():
    piece = Piece.of(TetrominoType.Z)
    merged = merge_piece(create_empty_grid(), piece, Position(0, 0))
    assert set(np.unique(merged)) == {0, piece.value}
    assert np.count_nonzero(merged) == 4


def test_merge_out_of_bounds_raises():
    with pytest.raises(IndexError):
        merge_piece(create_empty_grid(), I_PIECE, Position(8, 0))


def test_clear_lines_removes_full_rows_and_keeps_height():
    grid = create_empty_grid()
    grid[19] = 1
    grid[17] = 1
    grid[18, 0] = 5
    grid[16, 9] = 6
    cleared_grid, cleared = clear_lines(grid)
    assert cleared == 2
    assert cleared_grid.shape == (20, 10)
    assert cleared_grid[19, 0] == 5
    assert cleared_grid[18, 9] == 6
    assert not cleared_grid[:18].any()
    # Input is untouched
    assert grid[19].all()


def test_partial_rows_are_never_cleared():
    grid = create_empty_grid()
    grid[19] = 1
    grid[19, 4] = 0
    cleared_grid, cleared = clear_lines(grid)
    assert cleared == 0
    assert np.array_equal(cleared_grid, grid)
