# src/termsnake/__init__.py
"""Snake for the terminal: simulation engine, fixed-step game loop and frontends."""

from .geometry import Direction, Position, is_opposite
from .food import spawn_food
from .simulation import Simulation, Snapshot, Status
from .intents import Intent
from .loop import apply_intent, run

__all__ = [
    "Direction", "Position", "is_opposite",
    "spawn_food",
    "Simulation", "Snapshot", "Status",
    "Intent",
    "apply_intent", "run",
]
