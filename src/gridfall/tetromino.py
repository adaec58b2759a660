"""Tetromino definitions and basic behaviour.

A piece is an immutable value: a small 0/1 shape matrix plus the integer
written into the grid when the piece locks.  Rotation always produces a new
piece rather than changing the existing one.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, Iterator, Optional, Tuple

Shape = Tuple[Tuple[int, ...], ...]


class TetrominoType(str, Enum):
    """Enumeration of the seven standard tetromino shapes."""

    I = "I"
    O = "O"
    T = "T"
    L = "L"
    J = "J"
    S = "S"
    Z = "Z"


def rotate_shape(shape: Shape) -> Shape:
    """Return ``shape`` rotated 90 degrees clockwise.

    The matrix is transposed and each resulting row is reversed.  Applying
    the rotation four times yields the original shape.
    """

    return tuple(tuple(reversed(column)) for column in zip(*shape))


# Spawn orientation of each tetromino.
SHAPES: Dict[TetrominoType, Shape] = {
    TetrominoType.I: ((1, 1, 1, 1),),
    TetrominoType.O: ((1, 1), (1, 1)),
    TetrominoType.T: ((0, 1, 0), (1, 1, 1)),
    TetrominoType.L: ((1, 0, 0), (1, 1, 1)),
    TetrominoType.J: ((0, 0, 1), (1, 1, 1)),
    TetrominoType.S: ((0, 1, 1), (1, 1, 0)),
    TetrominoType.Z: ((1, 1, 0), (0, 1, 1)),
}

# Mapping from ``TetrominoType`` to the integer stored in the grid.  ``0`` is
# reserved for empty cells.
PIECE_VALUES: Dict[TetrominoType, int] = {t: i + 1 for i, t in enumerate(TetrominoType)}

# Widest spawn shape; boards narrower than this cannot spawn every piece.
MAX_SHAPE_WIDTH = max(len(shape[0]) for shape in SHAPES.values())


@dataclass(frozen=True)
class Piece:
    """Active falling piece in the game."""

    shape: Shape
    value: int = 1

    @classmethod
    def of(cls, kind: TetrominoType) -> "Piece":
        """Return the spawn-orientation piece for ``kind``."""

        return cls(SHAPES[kind], PIECE_VALUES[kind])

    @property
    def width(self) -> int:
        return len(self.shape[0]) if self.shape else 0

    @property
    def height(self) -> int:
        return len(self.shape)

    def cells(self) -> Iterator[Tuple[int, int]]:
        """Yield ``(dx, dy)`` offsets of the occupied cells."""

        for dy, row in enumerate(self.shape):
            for dx, filled in enumerate(row):
                if filled:
                    yield dx, dy

    def rotated(self) -> "Piece":
        """Return a copy of this piece rotated clockwise."""

        return replace(self, shape=rotate_shape(self.shape))


def random_piece(rng: Optional[random.Random] = None) -> Piece:
    """Return a uniformly chosen tetromino in its spawn orientation."""

    chooser = rng or random
    return Piece.of(chooser.choice(list(TetrominoType)))
