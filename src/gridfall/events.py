"""Discrete events fed into the simulation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Union


@dataclass(frozen=True)
class Move:
    """Shift the active piece by ``(dx, dy)``."""

    dx: int = 0
    dy: int = 0


@dataclass(frozen=True)
class Rotate:
    """Rotate the active piece clockwise."""


@dataclass(frozen=True)
class Tick:
    """Timer event; gravity pulls the active piece one row down."""


@dataclass(frozen=True)
class Quit:
    """Stop the game loop without touching the state."""


Event = Union[Move, Rotate, Tick, Quit]


KEY_BINDINGS: Dict[str, Event] = {
    "left": Move(-1, 0),
    "right": Move(1, 0),
    "down": Move(0, 1),
    "up": Rotate(),
    "q": Quit(),
    "escape": Quit(),
}


def event_for_key(name: str) -> Optional[Event]:
    """Return the event bound to key ``name`` or ``None`` if it is unmapped."""

    return KEY_BINDINGS.get(name.lower())
