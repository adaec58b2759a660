"""Falling-piece grid simulation with pluggable event sources and renderers."""

from .board import Position, clear_lines, create_empty_grid, is_valid_position, merge_piece
from .config import GameConfig
from .engine import Engine, apply_move, apply_rotate, apply_tick, step
from .events import Event, Move, Quit, Rotate, Tick, event_for_key
from .game_state import GameState, spawn_position
from .loop import GameLoop, ScriptedSource, TimerSource, play
from .render import TextSink, format_frame, render_grid
from .tetromino import Piece, TetrominoType, random_piece, rotate_shape

__all__ = [
    "Engine",
    "Event",
    "GameConfig",
    "GameLoop",
    "GameState",
    "Move",
    "Piece",
    "Position",
    "Quit",
    "Rotate",
    "ScriptedSource",
    "TetrominoType",
    "TextSink",
    "Tick",
    "TimerSource",
    "apply_move",
    "apply_rotate",
    "apply_tick",
    "clear_lines",
    "create_empty_grid",
    "event_for_key",
    "format_frame",
    "is_valid_position",
    "merge_piece",
    "play",
    "random_piece",
    "render_grid",
    "rotate_shape",
    "spawn_position",
    "step",
]
