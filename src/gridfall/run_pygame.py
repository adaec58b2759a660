"""Simple pygame front-end for the grid simulation.

Locked cells and the falling piece are drawn as coloured rectangles on a
black board.  Keyboard input and the gravity timer feed the shared game
loop as two independent event sources.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Dict, Optional, Tuple

import pygame

from .config import GameConfig
from .engine import Engine
from .events import Quit, event_for_key
from .game_state import GameState
from .loop import GameLoop, TimerSource
from .render import render_grid
from .tetromino import PIECE_VALUES, TetrominoType

# Frames per second to poll the pygame event queue at
FPS = 60

Color = Tuple[int, int, int]

BACKGROUND: Color = (0, 0, 0)
OUTLINE: Color = (50, 50, 50)
FALLBACK: Color = (128, 128, 128)

# Colours for each tetromino type
SHAPE_COLORS: Dict[TetrominoType, Color] = {
    TetrominoType.I: (0, 255, 255),
    TetrominoType.O: (255, 255, 0),
    TetrominoType.T: (128, 0, 128),
    TetrominoType.L: (255, 165, 0),
    TetrominoType.J: (0, 0, 255),
    TetrominoType.S: (0, 255, 0),
    TetrominoType.Z: (255, 0, 0),
}

# Mapping from the integer stored in the board grid to a colour
CELL_COLORS: Dict[int, Color] = {PIECE_VALUES[t]: c for t, c in SHAPE_COLORS.items()}

KEY_NAMES: Dict[int, str] = {
    pygame.K_LEFT: "left",
    pygame.K_RIGHT: "right",
    pygame.K_DOWN: "down",
    pygame.K_UP: "up",
    pygame.K_q: "q",
    pygame.K_ESCAPE: "escape",
}

LOGGER = logging.getLogger(__name__)


class PygameSink:
    """Draw game states onto a pygame surface."""

    def __init__(self, screen: pygame.Surface, cell_size: int = 30) -> None:
        self.screen = screen
        self.cell_size = cell_size

    def draw(self, state: GameState) -> None:
        """Render the board and the active piece onto the surface."""

        size = self.cell_size
        self.screen.fill(BACKGROUND)
        for r, row in enumerate(render_grid(state)):
            for c, value in enumerate(row):
                if not value:
                    continue
                rect = pygame.Rect(c * size, r * size, size, size)
                pygame.draw.rect(self.screen, CELL_COLORS.get(value, FALLBACK), rect)
                pygame.draw.rect(self.screen, OUTLINE, rect, 1)

    def render(self, state: GameState) -> None:
        self.draw(state)
        self._present(f"Tetris - Score: {state.score}")

    def game_over(self, state: GameState) -> None:
        self._present(f"Tetris - Game Over - Score: {state.score}")

    def _present(self, caption: str) -> None:
        if pygame.display.get_init() and pygame.display.get_surface() is not None:
            pygame.display.set_caption(caption)
            pygame.display.flip()


class PygameKeySource:
    """Translate pygame keyboard and window events into game events."""

    def __init__(self, fps: int = FPS) -> None:
        self.fps = fps

    async def run(self, queue: asyncio.Queue) -> None:
        while True:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    await queue.put(Quit())
                elif event.type == pygame.KEYDOWN:
                    name = KEY_NAMES.get(event.key)
                    game_event = event_for_key(name) if name else None
                    if game_event is not None:
                        await queue.put(game_event)
            # Yield to the event loop between polls
            await asyncio.sleep(1.0 / self.fps)


async def _wait_for_dismiss(fps: int = FPS) -> None:
    """Keep the final frame up until a key press or the window is closed."""

    while True:
        for event in pygame.event.get():
            if event.type in (pygame.QUIT, pygame.KEYDOWN):
                return
        await asyncio.sleep(1.0 / fps)


async def run_game(config: Optional[GameConfig] = None) -> GameState:
    """Open a window and play until game over or the window is closed."""

    config = config or GameConfig()
    pygame.init()
    try:
        screen = pygame.display.set_mode(config.board_size_px)
        pygame.display.set_caption("Tetris")
        loop = GameLoop(
            Engine(config),
            PygameSink(screen, config.cell_size),
            [TimerSource(config.tick_ms), PygameKeySource()],
        )
        state = await loop.run()
        if state.game_over:
            LOGGER.info("Game over. Final score: %d", state.score)
            await _wait_for_dismiss()
        return state
    finally:
        pygame.quit()


def main(config: Optional[GameConfig] = None) -> GameState:
    return asyncio.run(run_game(config))


if __name__ == "__main__":  # pragma: no cover - manual execution only
    main()
