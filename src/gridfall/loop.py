"""Event sources and the single-consumer game loop.

Sources run as asyncio tasks and put events on one shared queue.  The loop
takes events off that queue one at a time and folds them into the game
state, so the state is never touched by more than one coroutine.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Iterable, Optional, Protocol, Sequence, Set

from .engine import Engine
from .events import Event, Quit, Tick
from .game_state import GameState
from .render import Sink


LOGGER = logging.getLogger(__name__)


class EventSource(Protocol):
    async def run(self, queue: asyncio.Queue) -> None:
        ...


class TimerSource:
    """Emit a :class:`Tick` every ``period_ms`` milliseconds."""

    def __init__(self, period_ms: float = 500) -> None:
        if period_ms <= 0:
            raise ValueError("period_ms must be positive")
        self.period_ms = period_ms

    async def run(self, queue: asyncio.Queue) -> None:
        while True:
            await asyncio.sleep(self.period_ms / 1000.0)
            await queue.put(Tick())


class ScriptedSource:
    """Replay a fixed sequence of events, optionally spaced out in time."""

    def __init__(self, events: Iterable[Event], delay_ms: float = 0) -> None:
        self.events = list(events)
        self.delay_ms = delay_ms

    async def run(self, queue: asyncio.Queue) -> None:
        for event in self.events:
            if self.delay_ms:
                await asyncio.sleep(self.delay_ms / 1000.0)
            await queue.put(event)
            # Let the consumer interleave with other sources.
            await asyncio.sleep(0)


class GameLoop:
    """Fold events from ``sources`` into the state and feed ``sink``."""

    def __init__(self, engine: Engine, sink: Sink, sources: Sequence[EventSource]) -> None:
        self.engine = engine
        self.sink = sink
        self.sources = list(sources)
        self.state: Optional[GameState] = None

    async def run(self, state: Optional[GameState] = None) -> GameState:
        """Run until game over, a :class:`Quit` event or every source is spent.

        Sources start only after the opening frame has been rendered and are
        always cancelled before this returns.  An exception raised by a
        source or the sink propagates to the caller.
        """

        queue: asyncio.Queue = asyncio.Queue()
        pending: Set[asyncio.Future] = set()
        getter: Optional[asyncio.Future] = None
        try:
            self.state = state if state is not None else self.engine.new_game()
            self.sink.render(self.state)
            pending.update(asyncio.ensure_future(source.run(queue)) for source in self.sources)
            LOGGER.info("Game started")
            while True:
                if getter is None:
                    if not pending and queue.empty():
                        LOGGER.info("Event sources exhausted")
                        break
                    getter = asyncio.ensure_future(queue.get())
                done, _ = await asyncio.wait(
                    {getter, *pending}, return_when=asyncio.FIRST_COMPLETED
                )
                for task in done - {getter}:
                    pending.discard(task)
                    task.result()

                if getter not in done:
                    if not pending and queue.empty():
                        LOGGER.info("Event sources exhausted")
                        break
                    continue

                event = getter.result()
                getter = None
                if isinstance(event, Quit):
                    LOGGER.info("Quit requested")
                    break
                if self._apply(event):
                    break
        finally:
            if getter is not None:
                getter.cancel()
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)
            LOGGER.info("Game stopped")
        return self.state

    def _apply(self, event: Event) -> bool:
        """Fold ``event`` into the state; return ``True`` once the game is over."""

        previous = self.state
        self.state = self.engine.step(previous, event)
        if self.state.game_over:
            self.sink.game_over(self.state)
            return True
        if self.state is not previous:
            self.sink.render(self.state)
        return False


def play(
    engine: Engine, events: Iterable[Event], state: Optional[GameState] = None
) -> GameState:
    """Synchronously fold ``events`` into ``state`` and return the result.

    Folding stops early at game over or on a :class:`Quit` event.
    """

    if state is None:
        state = engine.new_game()
    for event in events:
        if state.game_over or isinstance(event, Quit):
            break
        state = engine.step(state, event)
    return state
