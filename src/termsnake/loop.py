# loop.py
from __future__ import annotations
import logging
import random
import time
from typing import Callable, Optional, Tuple

from .config import FRAME_MS
from .intents import DisplaySink, InputSource, Intent
from .simulation import Simulation, Status

logger = logging.getLogger(__name__)


def apply_intent(sim: Simulation, intent: Intent) -> Tuple[Simulation, bool]:
    """
    Apply one intent. Returns the (possibly replaced) simulation and
    False when the player asked to quit.
    """
    if intent is Intent.QUIT:
        return sim, False

    direction = intent.direction
    if direction is not None:
        sim.set_direction(direction)
    elif intent is Intent.PAUSE:
        # No pausing before the snake has started moving
        if not sim.waiting_for_first_move:
            sim.toggle_pause()
            logger.info("Status -> %s", sim.status.value)
    elif intent is Intent.RESTART:
        if sim.status is Status.GAME_OVER:
            logger.info("Restarting %dx%d arena (last score %d)", sim.width, sim.height, sim.score)
            sim = Simulation(sim.width, sim.height, sim.rng)
    return sim, True


def run(
    source: InputSource,
    sink: DisplaySink,
    width: int,
    height: int,
    rng: Optional[random.Random] = None,
    frame_ms: int = FRAME_MS,
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], None] = time.sleep,
    max_frames: Optional[int] = None,
) -> Simulation:
    """
    Drive a game until the player quits (or max_frames elapse).

    Every frame: one input sample, one tick, one render, then sleep until
    the frame boundary. Time spent inside the frame is subtracted from the
    sleep so ticks keep their cadence under load.
    """
    sim = Simulation(width, height, rng or random.Random())
    period = frame_ms / 1000.0
    sink.render(sim.snapshot())

    frames = 0
    while max_frames is None or frames < max_frames:
        started = clock()

        # 1) input
        sim, running = apply_intent(sim, source.poll())
        if not running:
            logger.info("Quit requested after %d frame(s)", frames)
            break

        # 2) update
        sim.advance_one_tick()

        # 3) render
        sink.render(sim.snapshot())

        # 4) wait for the next tick boundary
        sleep(max(0.0, period - (clock() - started)))
        frames += 1

    return sim
