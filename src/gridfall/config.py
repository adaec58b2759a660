"""Game configuration: defaults, INI file loading and validation."""

from __future__ import annotations

import configparser
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .board import HEIGHT, WIDTH
from .game_state import spawn_position
from .tetromino import MAX_SHAPE_WIDTH

RENDERERS = ("pygame", "curses", "text")


@dataclass
class GameConfig:
    """Board geometry, timing and front-end settings for one game."""

    rows: int = HEIGHT
    cols: int = WIDTH
    cell_size: int = 30
    tick_ms: int = 500
    line_score: int = 100
    seed: Optional[int] = None
    renderer: str = "pygame"

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "GameConfig":
        """Load settings from the ``[game]`` section of an INI file.

        Keys that are missing keep their default values.  A missing file is
        treated like an empty one.

        Raises:
            ValueError: If the file is not valid INI or a value is not a number.
        """

        parser = configparser.ConfigParser()
        try:
            parser.read(path)
        except configparser.Error as exc:
            raise ValueError(f"Cannot parse config file {path}: {exc}") from exc
        section = parser["game"] if parser.has_section("game") else {}

        seed = section.get("seed", "").strip()
        return cls(
            rows=int(section.get("rows", cls.rows)),
            cols=int(section.get("cols", cls.cols)),
            cell_size=int(section.get("cell_size", cls.cell_size)),
            tick_ms=int(section.get("tick_ms", cls.tick_ms)),
            line_score=int(section.get("line_score", cls.line_score)),
            seed=int(seed) if seed else None,
            renderer=section.get("renderer", cls.renderer).strip().lower(),
        )

    def validate(self) -> "GameConfig":
        """Return ``self`` after checking every value.

        Raises:
            ValueError: If a value cannot produce a playable game.
        """

        for name in ("rows", "cols", "cell_size", "tick_ms"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        if spawn_position(self.cols).x + MAX_SHAPE_WIDTH > self.cols:
            raise ValueError(f"cols={self.cols} is too narrow to spawn every piece")
        if self.line_score < 0:
            raise ValueError(f"line_score must not be negative, got {self.line_score}")
        if self.renderer not in RENDERERS:
            raise ValueError(
                f"Unknown renderer {self.renderer!r}; expected one of {', '.join(RENDERERS)}"
            )
        return self

    @property
    def board_size_px(self) -> tuple[int, int]:
        """Return ``(width, height)`` of the drawing surface in pixels."""

        return self.cols * self.cell_size, self.rows * self.cell_size
