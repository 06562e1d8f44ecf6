"""
grid.py — Coordinate arithmetic on a toroidal (wrap-around) grid.

Pure functions, no state. Every position on the board is an ``(x, y)``
tuple with ``0 <= x < cols`` and ``0 <= y < rows``; stepping off one edge
re-enters from the opposite edge.
"""

from __future__ import annotations

import random
from typing import Iterable, Iterator

from .errors import GridSaturatedError

Coord = tuple[int, int]


def wrap(value: int, limit: int) -> int:
    """Map ``value`` into ``[0, limit)``; ``-1`` becomes ``limit - 1``."""
    return value % limit


def step(coord: Coord, direction, cols: int, rows: int) -> Coord:
    """Move one cell along ``direction`` (anything with ``x``/``y``), wrapping."""
    return wrap(coord[0] + direction.x, cols), wrap(coord[1] + direction.y, rows)


def toroidal_delta(a: int, b: int, limit: int) -> int:
    """
    Signed shortest displacement from ``a`` to ``b`` along one axis.

    The result never exceeds ``limit / 2`` in magnitude, so walking that
    many cells in its sign's direction (with wrap) reaches ``b``.
    """
    d = b - a
    if abs(d) > limit / 2:
        d -= limit if d > 0 else -limit
    return d


class Grid:
    """Board dimensions bundled with the wrap helpers above."""

    def __init__(self, cols: int, rows: int):
        if cols <= 0 or rows <= 0:
            raise ValueError(f"grid must be at least 1x1, got {cols}x{rows}")
        self.cols = cols
        self.rows = rows

    def step(self, coord: Coord, direction) -> Coord:
        return step(coord, direction, self.cols, self.rows)

    def delta(self, src: Coord, dst: Coord) -> tuple[int, int]:
        """Toroidal ``(dx, dy)`` from ``src`` to ``dst``."""
        return (
            toroidal_delta(src[0], dst[0], self.cols),
            toroidal_delta(src[1], dst[1], self.rows),
        )

    def cells(self) -> Iterator[Coord]:
        for y in range(self.rows):
            for x in range(self.cols):
                yield x, y

    def free_cells(self, occupied: Iterable[Coord]) -> list[Coord]:
        blocked = set(occupied)
        return [c for c in self.cells() if c not in blocked]

    def place(self, rng: random.Random, occupied: Iterable[Coord]) -> Coord:
        """
        Pick a uniformly random cell outside ``occupied``.

        Raises GridSaturatedError when every cell is taken instead of
        retrying forever.
        """
        free = self.free_cells(occupied)
        if not free:
            raise GridSaturatedError(
                f"no free cell left on a {self.cols}x{self.rows} grid"
            )
        return rng.choice(free)
