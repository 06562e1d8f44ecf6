import random

import pytest

from snake_chase.errors import GridSaturatedError
from snake_chase.grid import Grid, step, toroidal_delta, wrap
from snake_chase.model import Direction


def test_wrap_stays_in_range():
    for n in (1, 2, 7, 20, 30):
        for v in range(-3 * n, 3 * n):
            assert 0 <= wrap(v, n) < n


def test_wrap_edges():
    assert wrap(-1, 30) == 29
    assert wrap(30, 30) == 0
    assert wrap(12, 30) == 12


def test_step_wraps_both_axes():
    assert step((0, 0), Direction.LEFT, 30, 20) == (29, 0)
    assert step((0, 0), Direction.UP, 30, 20) == (0, 19)
    assert step((29, 19), Direction.RIGHT, 30, 20) == (0, 19)
    assert step((29, 19), Direction.DOWN, 30, 20) == (29, 0)


def test_toroidal_delta_is_antisymmetric_and_bounded():
    for n in (1, 2, 5, 10, 20, 30):
        for a in range(n):
            for b in range(n):
                d = toroidal_delta(a, b, n)
                assert d == -toroidal_delta(b, a, n)
                assert abs(d) <= n / 2
                assert wrap(a + d, n) == b


def test_toroidal_delta_takes_the_short_way_round():
    assert toroidal_delta(1, 28, 30) == -3
    assert toroidal_delta(28, 1, 30) == 3
    assert toroidal_delta(3, 9, 30) == 6


def test_grid_rejects_empty_dimensions():
    with pytest.raises(ValueError):
        Grid(0, 5)


def test_grid_delta_uses_both_limits():
    grid = Grid(30, 20)
    assert grid.delta((0, 0), (29, 19)) == (-1, -1)


def test_place_only_returns_free_cells():
    grid = Grid(3, 1)
    assert grid.place(random.Random(0), [(0, 0), (2, 0)]) == (1, 0)


def test_place_on_full_grid_raises():
    grid = Grid(2, 1)
    with pytest.raises(GridSaturatedError):
        grid.place(random.Random(0), [(0, 0), (1, 0)])
