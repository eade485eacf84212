# simulation.py
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple
import logging
import random

from .config import POINTS_PER_FOOD
from .food import spawn_food
from .geometry import Direction, Position, is_opposite

logger = logging.getLogger(__name__)

START_LENGTH = 3


class Status(Enum):
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"


# ---------- Snapshot handed to displays ----------
@dataclass(frozen=True)
class Snapshot:
    snake: Tuple[Position, ...]    # head at index 0
    food: Optional[Position]       # None only once the arena is full
    score: int
    status: Status
    width: int
    height: int
    waiting_for_first_move: bool
    won: bool = False

    @property
    def length(self) -> int:
        return len(self.snake)


# ---------- State ----------
@dataclass(eq=False)
class Simulation:
    """
    Game state for one arena. Restarting means building a new Simulation.

    `direction` is the heading applied on the last tick; `pending` is what
    input asked for since then and only becomes `direction` at the start of
    the next tick, so two key presses within one frame cannot reverse the
    snake into its own neck.
    """
    width: int
    height: int
    rng: random.Random = field(default_factory=random.Random, repr=False)

    def __post_init__(self):
        if self.width < START_LENGTH + 1 or self.height < 1:
            raise ValueError(
                f"Arena {self.width}x{self.height} is too small "
                f"(need width >= {START_LENGTH + 1} and height >= 1)"
            )
        cx, cy = self.width // 2, self.height // 2
        self.snake: List[Position] = [Position(cx - i, cy) for i in range(START_LENGTH)]
        self.direction = Direction.RIGHT
        self.pending = Direction.RIGHT
        self.score = 0
        self.status = Status.PLAYING
        self.waiting_for_first_move = True
        self.won = False
        self.food: Optional[Position] = spawn_food(self.width, self.height, self.snake, self.rng)

    @property
    def head(self) -> Position:
        return self.snake[0]

    # ---------- Intents ----------
    def set_direction(self, direction: Direction) -> None:
        """Buffer a turn (no 180° turns). Any direction intent starts the game."""
        self.waiting_for_first_move = False
        if not is_opposite(direction, self.direction):
            self.pending = direction

    def toggle_pause(self) -> None:
        if self.status is Status.PLAYING:
            self.status = Status.PAUSED
        elif self.status is Status.PAUSED:
            self.status = Status.PLAYING

    # ---------- Update ----------
    def advance_one_tick(self) -> None:
        if self.status is not Status.PLAYING or self.waiting_for_first_move:
            return

        # Commit direction once per tick
        self.direction = self.pending
        new_head = self.head.step(self.direction)
        logger.debug("Tick: %s -> %s heading %s", self.head, new_head, self.direction.name)

        # Both collision checks run before the snake is touched
        if not new_head.in_bounds(self.width, self.height):
            self._end("wall")
            return
        if new_head in self.snake:
            self._end("self")
            return

        # Move / grow
        self.snake.insert(0, new_head)
        if new_head == self.food:
            self.score += POINTS_PER_FOOD
            self.food = spawn_food(self.width, self.height, self.snake, self.rng)
            if self.food is None:
                self.won = True
                self._end("arena full")
        else:
            self.snake.pop()

    def _end(self, reason: str) -> None:
        self.status = Status.GAME_OVER
        logger.info(
            "Game over (%s): score=%d length=%d won=%s",
            reason, self.score, len(self.snake), self.won,
        )

    def snapshot(self) -> Snapshot:
        return Snapshot(
            snake=tuple(self.snake),
            food=self.food,
            score=self.score,
            status=self.status,
            width=self.width,
            height=self.height,
            waiting_for_first_move=self.waiting_for_first_move,
            won=self.won,
        )
