"""Grid representation and the pure geometry helpers of the playfield.

None of the functions here modify the arrays they are given.  Operations that
produce a changed grid return a fresh array.
"""

from __future__ import annotations

from typing import NamedTuple, Tuple

import numpy as np
from numpy.typing import NDArray

from .tetromino import Piece


# Dimensions of the standard Tetris board.
WIDTH = 10
HEIGHT = 20

Grid = NDArray[np.uint8]


class Position(NamedTuple):
    """Top-left offset of a piece's shape within the grid."""

    x: int
    y: int


def create_empty_grid(rows: int = HEIGHT, cols: int = WIDTH) -> Grid:
    """Return a new empty board grid filled with zeros."""

    return np.zeros((rows, cols), dtype=np.uint8)


def is_valid_position(grid: Grid, piece: Piece, position: Tuple[int, int]) -> bool:
    """Return ``True`` if ``piece`` fits on ``grid`` at ``position``.

    Every occupied cell must lie within ``[0, cols)`` horizontally, above the
    bottom edge and on an empty grid cell.  Cells above the top edge are
    allowed since there is nothing there to collide with.
    """

    rows, cols = grid.shape
    x, y = position
    for dx, dy in piece.cells():
        col = x + dx
        row = y + dy
        if not (0 <= col < cols) or row >= rows:
            return False
        if row >= 0 and grid[row, col] != 0:
            return False
    return True


def merge_piece(grid: Grid, piece: Piece, position: Tuple[int, int]) -> Grid:
    """Return a copy of ``grid`` with ``piece`` locked in at ``position``.

    Raises:
        IndexError: If any block of the piece lies outside the grid.
    """

    merged = grid.copy()
    coordinates = np.asarray(list(piece.cells()), dtype=np.int16)
    if coordinates.size == 0:
        return merged

    x, y = position
    cols = coordinates[:, 0] + x
    rows = coordinates[:, 1] + y
    height, width = grid.shape
    if (
        np.any(rows < 0)
        or np.any(rows >= height)
        or np.any(cols < 0)
        or np.any(cols >= width)
    ):
        raise IndexError("Block out of bounds")

    merged[rows, cols] = np.uint8(piece.value)
    return merged


def clear_lines(grid: Grid) -> Tuple[Grid, int]:
    """Remove completed rows and return ``(new_grid, rows_removed)``.

    Empty rows are prepended so the grid keeps its height.  Rows that still
    contain an empty cell are never removed.
    """

    full_rows = np.all(grid != 0, axis=1)
    cleared = int(np.count_nonzero(full_rows))
    if not cleared:
        return grid.copy(), 0
    remaining = grid[~full_rows]
    new_rows = np.zeros((cleared, grid.shape[1]), dtype=grid.dtype)
    return np.vstack((new_rows, remaining)), cleared
