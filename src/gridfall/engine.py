"""Grid simulation engine.

The transition functions take a :class:`~gridfall.game_state.GameState` and
one event and return the next state.  A move that cannot be applied returns
the very same state object, which lets callers skip redundant redraws.  Only
the automatic :class:`~gridfall.events.Tick` can lock a piece; a manual move
down that hits something is simply rejected.
"""

from __future__ import annotations

import logging
import random
from dataclasses import replace
from typing import Callable, Iterable, Iterator, Optional

from .board import Position, clear_lines, create_empty_grid, is_valid_position, merge_piece
from .config import GameConfig
from .events import Event, Move, Quit, Rotate, Tick
from .game_state import GameState, spawn_position
from .tetromino import Piece, random_piece


LOGGER = logging.getLogger(__name__)

LINE_SCORE = 100

PieceFactory = Callable[[], Piece]


def apply_move(state: GameState, dx: int, dy: int) -> GameState:
    """Shift the active piece by ``(dx, dy)`` if the target is free.

    Pieces never move up, so a negative ``dy`` is rejected like a collision.
    """

    if state.game_over or dy < 0:
        return state
    target = Position(state.position.x + dx, state.position.y + dy)
    if not is_valid_position(state.grid, state.piece, target):
        return state
    return replace(state, position=target)


def apply_rotate(state: GameState) -> GameState:
    """Rotate the active piece clockwise in place on the board.

    There is no wall kick: a rotation that would collide or leave the board is
    dropped.
    """

    if state.game_over:
        return state
    rotated = state.piece.rotated()
    if not is_valid_position(state.grid, rotated, state.position):
        return state
    return replace(state, piece=rotated)


def apply_tick(
    state: GameState,
    next_piece: PieceFactory,
    line_score: int = LINE_SCORE,
) -> GameState:
    """Advance gravity by one row, locking the piece when it has landed.

    Locking merges the piece, clears full rows, adds ``line_score`` per
    cleared row and spawns the piece returned by ``next_piece``.  The factory
    is only called when a lock happens.  When the new piece does not fit at
    the spawn point the game ends and the pre-lock state is returned with
    ``game_over`` set.
    """

    if state.game_over:
        return state
    below = Position(state.position.x, state.position.y + 1)
    if is_valid_position(state.grid, state.piece, below):
        return replace(state, position=below)

    merged = merge_piece(state.grid, state.piece, state.position)
    grid, cleared = clear_lines(merged)
    piece = next_piece()
    spawn = spawn_position(state.cols)
    if not is_valid_position(grid, piece, spawn):
        LOGGER.info("Game over with score %d", state.score)
        return replace(state, game_over=True)

    score = state.score + cleared * line_score
    if cleared:
        LOGGER.debug("Cleared %d row(s). Score: %d", cleared, score)
    return GameState(grid=grid, piece=piece, position=spawn, score=score)


def step(
    state: GameState,
    event: Event,
    next_piece: Optional[PieceFactory] = None,
    line_score: int = LINE_SCORE,
) -> GameState:
    """Fold a single ``event`` into ``state``.

    ``next_piece`` is only consulted when a :class:`Tick` locks the piece.

    Raises:
        TypeError: If ``event`` is not one of the known event types, or a
            tick arrives without a ``next_piece`` factory.
    """

    if state.game_over:
        return state
    if isinstance(event, Move):
        return apply_move(state, event.dx, event.dy)
    if isinstance(event, Rotate):
        return apply_rotate(state)
    if isinstance(event, Tick):
        if next_piece is None:
            raise TypeError("Tick events need a factory for the next piece")
        return apply_tick(state, next_piece, line_score)
    if isinstance(event, Quit):
        return state
    raise TypeError(f"Unknown event: {event!r}")


class Engine:
    """Bind the transition functions to a configuration and a piece source.

    ``pieces`` may supply a fixed sequence of pieces (useful for replays and
    tests); once it is exhausted pieces are drawn at random from ``rng``.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        *,
        rng: Optional[random.Random] = None,
        pieces: Optional[Iterable[Piece]] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rng = rng or random.Random(self.config.seed)
        self._pieces: Optional[Iterator[Piece]] = iter(pieces) if pieces is not None else None

    def next_piece(self) -> Piece:
        """Return the next piece to spawn."""

        if self._pieces is not None:
            piece = next(self._pieces, None)
            if piece is not None:
                return piece
            self._pieces = None
        return random_piece(self.rng)

    def new_game(self) -> GameState:
        """Return the opening state: an empty grid and a freshly spawned piece."""

        grid = create_empty_grid(self.config.rows, self.config.cols)
        LOGGER.debug("New %dx%d game", self.config.cols, self.config.rows)
        return GameState(
            grid=grid,
            piece=self.next_piece(),
            position=spawn_position(self.config.cols),
        )

    def step(self, state: GameState, event: Event) -> GameState:
        """Apply ``event`` to ``state`` using this engine's piece source."""

        return step(state, event, self.next_piece, self.config.line_score)
