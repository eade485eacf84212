# food.py
from __future__ import annotations
import logging
import random
from typing import Iterable, Optional

from .geometry import Position

logger = logging.getLogger(__name__)


def spawn_food(
    width: int,
    height: int,
    occupied: Iterable[Position],
    rng: Optional[random.Random] = None,
) -> Optional[Position]:
    """
    Pick a free cell uniformly at random by rejection sampling.

    Returns None when every cell of the arena is occupied; otherwise the
    loop is guaranteed to find a free cell eventually (expected draws are
    area / free cells).
    """
    rng = rng or random.Random()
    taken = {p for p in map(Position._make, occupied) if p.in_bounds(width, height)}
    if len(taken) >= width * height:
        logger.debug("No free cell left in %dx%d arena", width, height)
        return None

    draws = 0
    while True:
        draws += 1
        cand = Position(rng.randrange(width), rng.randrange(height))
        if cand not in taken:
            logger.debug("Food at %s after %d draw(s)", cand, draws)
            return cand
