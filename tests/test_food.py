import random

from termsnake.food import spawn_food
from termsnake.geometry import Position


def test_single_free_cell_is_always_chosen():
    occupied = [(x, y) for x in range(4) for y in range(3) if (x, y) != (2, 1)]
    for seed in range(20):
        assert spawn_food(4, 3, occupied, random.Random(seed)) == Position(2, 1)


def test_full_arena_returns_none():
    occupied = [(x, y) for x in range(3) for y in range(2)]
    assert spawn_food(3, 2, occupied, random.Random(0)) is None


def test_out_of_arena_cells_do_not_count_as_occupied():
    occupied = [(0, 0), (5, 5), (-1, 0)]
    assert spawn_food(2, 1, occupied, random.Random(0)) == Position(1, 0)


def test_food_is_free_and_in_bounds():
    rng = random.Random(7)
    snake = [Position(x, 2) for x in range(8)]
    for _ in range(200):
        food = spawn_food(8, 5, snake, rng)
        assert food not in snake
        assert food.in_bounds(8, 5)


def test_every_free_cell_can_be_chosen():
    rng = random.Random(1)
    occupied = {(0, 0), (1, 1)}
    seen = {spawn_food(2, 2, occupied, rng) for _ in range(200)}
    assert seen == {(1, 0), (0, 1)}
