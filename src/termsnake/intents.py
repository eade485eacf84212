# intents.py
"""Decoded player actions and the interfaces the game loop talks to."""
from __future__ import annotations
from enum import Enum
from typing import Optional, Protocol, Sequence

from .config import Preset
from .geometry import Direction
from .simulation import Snapshot


class Intent(Enum):
    NONE = "none"
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    PAUSE = "pause"
    QUIT = "quit"
    RESTART = "restart"

    @property
    def direction(self) -> Optional[Direction]:
        """The Direction for a movement intent, else None."""
        return _MOVES.get(self)


_MOVES = {
    Intent.UP: Direction.UP,
    Intent.DOWN: Direction.DOWN,
    Intent.LEFT: Direction.LEFT,
    Intent.RIGHT: Direction.RIGHT,
}


class InputSource(Protocol):
    def poll(self) -> Intent:
        """Return the next pending intent, or Intent.NONE. Must not block."""
        ...


class DisplaySink(Protocol):
    def render(self, snap: Snapshot) -> None: ...
    def fits(self, preset: Preset) -> bool: ...
    def select_preset(self, presets: Sequence[Preset]) -> Optional[Preset]:
        """Blocking pre-game menu. None means the player chose to quit."""
        ...
