import logging
import random

import pytest

from termsnake.geometry import Direction, Position
from termsnake.simulation import Simulation, Status


def make_sim(width=20, height=10, seed=0, started=True):
    sim = Simulation(width, height, random.Random(seed))
    # park the food out of the way unless a test puts it somewhere
    sim.food = Position(0, 0)
    if started:
        sim.waiting_for_first_move = False
    return sim


def assert_invariants(sim):
    assert all(p.in_bounds(sim.width, sim.height) for p in sim.snake)
    assert len(set(sim.snake)) == len(sim.snake)
    assert sim.food not in sim.snake


# ---------- Construction ----------
def test_initial_state():
    sim = Simulation(20, 10, random.Random(3))
    assert sim.snake == [(10, 5), (9, 5), (8, 5)]
    assert sim.direction is Direction.RIGHT
    assert sim.pending is Direction.RIGHT
    assert sim.status is Status.PLAYING
    assert sim.score == 0
    assert sim.waiting_for_first_move
    assert not sim.won
    assert_invariants(sim)


@pytest.mark.parametrize("width,height", [(0, 10), (10, 0), (3, 5), (-4, 4)])
def test_rejects_unusable_arena(width, height):
    with pytest.raises(ValueError):
        Simulation(width, height)


def test_waits_for_first_move():
    sim = make_sim(started=False)
    before = list(sim.snake)
    for _ in range(5):
        sim.advance_one_tick()
    assert sim.snake == before


def test_first_direction_starts_even_if_same_as_default():
    sim = make_sim(started=False)
    sim.set_direction(Direction.RIGHT)
    assert not sim.waiting_for_first_move
    sim.advance_one_tick()
    assert sim.head == (11, 5)


# ---------- Direction buffering ----------
def test_reversal_is_ignored():
    sim = make_sim()
    sim.set_direction(Direction.LEFT)
    assert sim.pending is Direction.RIGHT
    sim.advance_one_tick()
    assert sim.head == (11, 5)
    assert sim.status is Status.PLAYING


def test_two_keys_in_one_frame_cannot_reverse():
    sim = make_sim()
    sim.set_direction(Direction.UP)
    sim.set_direction(Direction.LEFT)  # still checked against RIGHT
    sim.advance_one_tick()
    assert sim.head == (10, 4)
    assert sim.direction is Direction.UP


def test_direction_applied_only_on_tick():
    sim = make_sim()
    sim.set_direction(Direction.DOWN)
    assert sim.direction is Direction.RIGHT
    sim.advance_one_tick()
    assert sim.direction is Direction.DOWN
    assert sim.head == (10, 6)


# ---------- Movement / eating ----------
def test_plain_move_keeps_length_and_score():
    sim = make_sim()
    sim.advance_one_tick()
    assert sim.snake == [(11, 5), (10, 5), (9, 5)]
    assert sim.score == 0


def test_eating_food_ahead_grows_and_scores():
    sim = make_sim()
    sim.food = Position(11, 5)
    sim.advance_one_tick()
    assert sim.snake == [(11, 5), (10, 5), (9, 5), (8, 5)]
    assert sim.score == 10
    assert sim.food is not None
    assert sim.food not in sim.snake
    assert_invariants(sim)


def test_filling_the_arena_is_a_win():
    # 4x1: snake covers three cells, the only free one is straight ahead
    sim = Simulation(4, 1, random.Random(0))
    assert sim.food == (3, 0)
    sim.set_direction(Direction.RIGHT)
    sim.advance_one_tick()
    assert sim.status is Status.GAME_OVER
    assert sim.won
    assert sim.food is None
    assert sim.score == 10
    assert len(sim.snake) == 4


# ---------- Collisions ----------
def test_wall_collision_ends_game_and_keeps_snake():
    sim = make_sim()
    sim.food = Position(0, 9)
    sim.set_direction(Direction.UP)
    for _ in range(5):
        sim.advance_one_tick()
    assert sim.head == (10, 0)
    before = list(sim.snake)
    sim.advance_one_tick()
    assert sim.status is Status.GAME_OVER
    assert sim.snake == before
    assert not sim.won


def test_self_collision_ends_game_and_keeps_snake():
    sim = make_sim()
    sim.snake = [Position(5, 5), Position(6, 5), Position(6, 6), Position(5, 6), Position(4, 6)]
    sim.direction = sim.pending = Direction.LEFT
    sim.set_direction(Direction.DOWN)
    before = list(sim.snake)
    sim.advance_one_tick()
    assert sim.status is Status.GAME_OVER
    assert sim.snake == before


def test_game_over_is_terminal_for_ticks():
    sim = make_sim()
    sim.status = Status.GAME_OVER
    before = list(sim.snake)
    sim.advance_one_tick()
    assert sim.snake == before


# ---------- Pause ----------
def test_toggle_pause():
    sim = make_sim()
    sim.toggle_pause()
    assert sim.status is Status.PAUSED
    before = list(sim.snake)
    sim.advance_one_tick()
    assert sim.snake == before
    sim.toggle_pause()
    assert sim.status is Status.PLAYING


def test_toggle_pause_ignored_after_game_over():
    sim = make_sim()
    sim.status = Status.GAME_OVER
    sim.toggle_pause()
    assert sim.status is Status.GAME_OVER


# ---------- Snapshot ----------
def test_snapshot_is_a_copy():
    sim = make_sim()
    snap = sim.snapshot()
    sim.advance_one_tick()
    assert snap.snake == ((10, 5), (9, 5), (8, 5))
    assert snap.length == 3
    assert snap.width == 20 and snap.height == 10
    assert snap.status is Status.PLAYING
    assert not snap.waiting_for_first_move


# ---------- Random play keeps the invariants ----------
def test_invariants_hold_under_random_play():
    rng = random.Random(42)
    for game in range(20):
        sim = Simulation(8, 6, random.Random(game))
        eaten = 0
        for _ in range(300):
            sim.set_direction(rng.choice(list(Direction)))
            if rng.random() < 0.05:
                sim.toggle_pause()
            length, score = len(sim.snake), sim.score
            sim.advance_one_tick()
            if sim.status is Status.GAME_OVER:
                break
            assert_invariants(sim)
            if len(sim.snake) == length + 1:
                eaten += 1
                assert sim.score == score + 10
            else:
                assert len(sim.snake) == length
                assert sim.score == score
            assert sim.score == 10 * eaten


def test_games_compare_by_identity():
    rng = random.Random(1)
    a, b = Simulation(20, 10, rng), Simulation(20, 10, rng)
    b.set_direction(Direction.UP)
    b.score = 50
    assert a != b
    assert a == a


def test_tick_logs_move_at_debug(caplog):
    sim = make_sim()
    with caplog.at_level(logging.DEBUG, logger="termsnake.simulation"):
        sim.advance_one_tick()
    assert any("Tick" in r.getMessage() and "RIGHT" in r.getMessage() for r in caplog.records)
