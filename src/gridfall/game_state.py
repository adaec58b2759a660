"""High level game state container."""

from __future__ import annotations

from dataclasses import dataclass

from .board import Grid, Position
from .tetromino import Piece


def spawn_position(cols: int) -> Position:
    """Return the spawn point for a board ``cols`` wide.

    Pieces appear on the top row, horizontally centred.
    """

    return Position(cols // 2 - 1, 0)


@dataclass(frozen=True, eq=False)
class GameState:
    """Immutable snapshot of a game session.

    Transitions never modify a state; they return a new one.  A writable grid
    or a view is copied on construction and the copy is flagged read-only,
    so the caller's array is left alone and in-place writes through the
    state fail loudly.  Read-only arrays that own their data are shared,
    which is how successive states reuse an unchanged grid.
    """

    grid: Grid
    piece: Piece
    position: Position
    score: int = 0
    game_over: bool = False

    def __post_init__(self) -> None:
        grid = self.grid
        if grid.flags.writeable or grid.base is not None:
            grid = grid.copy()
            grid.flags.writeable = False
            object.__setattr__(self, "grid", grid)

    @property
    def rows(self) -> int:
        return int(self.grid.shape[0])

    @property
    def cols(self) -> int:
        return int(self.grid.shape[1])
