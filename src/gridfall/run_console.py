"""Text console front-ends.

``run_game`` plays interactively in a curses window using the arrow keys.
``watch`` needs no terminal control at all: it prints a frame per state to a
stream while the timer drops pieces until the board tops out.
"""

from __future__ import annotations

import asyncio
import curses
import logging
from typing import Dict, Optional, TextIO

from .config import GameConfig
from .engine import Engine
from .events import event_for_key
from .game_state import GameState
from .loop import GameLoop, TimerSource
from .render import TextSink, format_frame

# Seconds between keyboard polls
POLL_INTERVAL = 0.01

ESCAPE = 27

CURSES_KEYS: Dict[int, str] = {
    curses.KEY_LEFT: "left",
    curses.KEY_RIGHT: "right",
    curses.KEY_DOWN: "down",
    curses.KEY_UP: "up",
    ord("q"): "q",
    ESCAPE: "escape",
}

LOGGER = logging.getLogger(__name__)


class CursesSink:
    """Draw the text frame into a curses window."""

    def __init__(self, window) -> None:
        self.window = window

    def _write_lines(self, lines, top: int = 0) -> None:
        max_y, max_x = self.window.getmaxyx()
        for offset, line in enumerate(lines):
            y = top + offset
            if y >= max_y:
                break
            # The bottom-right cell cannot be written without an error.
            self.window.addstr(y, 0, line[: max(max_x - 1, 0)])

    def render(self, state: GameState) -> None:
        self.window.erase()
        self._write_lines(format_frame(state).splitlines())
        self.window.refresh()

    def game_over(self, state: GameState) -> None:
        self._write_lines(["GAME OVER - press any key"], top=state.rows + 1)
        self.window.refresh()


class CursesKeySource:
    """Poll a curses window for key presses without blocking."""

    def __init__(self, window, interval: float = POLL_INTERVAL) -> None:
        self.window = window
        self.interval = interval

    async def run(self, queue: asyncio.Queue) -> None:
        self.window.nodelay(True)
        while True:
            key = self.window.getch()
            while key != -1:
                name = CURSES_KEYS.get(key)
                event = event_for_key(name) if name else None
                if event is not None:
                    await queue.put(event)
                key = self.window.getch()
            await asyncio.sleep(self.interval)


async def _play(window, config: GameConfig) -> GameState:
    curses.curs_set(0)
    loop = GameLoop(
        Engine(config),
        CursesSink(window),
        [TimerSource(config.tick_ms), CursesKeySource(window)],
    )
    state = await loop.run()
    if state.game_over:
        window.nodelay(False)
        window.getch()
    return state


def run_game(config: Optional[GameConfig] = None) -> GameState:
    """Play interactively in the terminal until game over or ``q``."""

    config = config or GameConfig()
    return curses.wrapper(lambda window: asyncio.run(_play(window, config)))


def watch(config: Optional[GameConfig] = None, stream: Optional[TextIO] = None) -> GameState:
    """Print frames to ``stream`` while pieces fall on their own."""

    config = config or GameConfig()
    loop = GameLoop(Engine(config), TextSink(stream), [TimerSource(config.tick_ms)])
    state = asyncio.run(loop.run())
    LOGGER.info("Watch finished with score %d", state.score)
    return state
