import random

import pytest

from snake_chase.ai_brain import compute_step
from snake_chase.grid import Grid


@pytest.fixture
def grid():
    return Grid(30, 20)


def test_moves_along_the_larger_axis(grid, rng):
    assert compute_step((5, 5), (10, 6), set(), grid, rng) == (6, 5)
    assert compute_step((5, 5), (6, 1), set(), grid, rng) == (5, 4)


def test_ties_go_to_the_vertical_axis(grid, rng):
    assert compute_step((5, 5), (7, 7), set(), grid, rng) == (5, 6)


def test_takes_the_short_way_across_the_edge(grid, rng):
    assert compute_step((1, 5), (28, 5), set(), grid, rng) == (0, 5)
    assert compute_step((3, 1), (3, 18), set(), grid, rng) == (3, 0)


def test_blocked_primary_axis_falls_back_to_the_other(grid, rng):
    assert compute_step((5, 5), (10, 7), {(6, 5)}, grid, rng) == (5, 6)


def test_aligned_fallback_axis_picks_a_random_side(grid):
    seen = set()
    for seed in range(20):
        seen.add(compute_step((5, 5), (10, 5), {(6, 5)}, grid, random.Random(seed)))
    assert seen == {(5, 4), (5, 6)}


def test_fully_blocked_chaser_stays_put(grid, rng):
    assert compute_step((5, 5), (10, 7), {(6, 5), (5, 6)}, grid, rng) == (5, 5)


def test_standing_on_the_target_does_not_move(grid, rng):
    assert compute_step((4, 4), (4, 4), set(), grid, rng) == (4, 4)
