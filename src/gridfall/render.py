"""Output sinks and text rendering helpers."""

from __future__ import annotations

import sys
from typing import List, Protocol, TextIO

from .game_state import GameState


CLEAR_SCREEN = "\x1b[2J\x1b[H"


class Sink(Protocol):
    """Consumer of game states, injected into the game loop."""

    def render(self, state: GameState) -> None:
        ...

    def game_over(self, state: GameState) -> None:
        ...


def render_grid(state: GameState) -> List[List[int]]:
    """Return a copy of the grid with the active piece overlaid.

    This is a convenience for renderers that want a single 2D array to draw
    without locking the piece.  Cells covered by the active piece receive the
    piece's value.
    """

    grid = state.grid.tolist()
    x, y = state.position
    for dx, dy in state.piece.cells():
        row, col = y + dy, x + dx
        if 0 <= row < state.rows and 0 <= col < state.cols:
            grid[row][col] = state.piece.value
    return grid


def format_frame(state: GameState, filled: str = "X", empty: str = ".") -> str:
    """Return the score line followed by the grid as text."""

    lines = [f"Score: {state.score}"]
    for row in render_grid(state):
        lines.append(" ".join(filled if cell else empty for cell in row))
    return "\n".join(lines)


class TextSink:
    """Print every frame to a text stream."""

    def __init__(self, stream: TextIO | None = None, *, clear: bool = True) -> None:
        self.stream = stream or sys.stdout
        self.clear = clear

    def render(self, state: GameState) -> None:
        if self.clear:
            self.stream.write(CLEAR_SCREEN)
        self.stream.write(format_frame(state) + "\n")
        self.stream.flush()

    def game_over(self, state: GameState) -> None:
        self.stream.write("Game Over!\n")
        self.stream.flush()
