"""
ai_brain.py — Chaser pathfinding module.

Completely isolated from rendering and input.
Receives read-only positions and returns the chaser's next cell.

Strategy:
  - Take the toroidal shortest displacement to the food.
  - Step one cell along the axis with the larger displacement
    (Manhattan greedy, not a search; ties go to the vertical axis).
  - If the player's body is in the way, try the other axis instead,
    picking a random sign when that axis is already aligned.
  - If that is blocked too, stay put for this chaser step.
"""

from __future__ import annotations

import random
from typing import Collection

from .grid import Coord, Grid
from .model import Direction


def _sign(value: int) -> int:
    return 1 if value > 0 else -1


def _axis_direction(axis: str, delta: int, rng: random.Random) -> Direction:
    sign = _sign(delta) if delta != 0 else rng.choice((-1, 1))
    return Direction(sign, 0) if axis == "x" else Direction(0, sign)


def compute_step(
    position: Coord,
    target: Coord,
    blocked: Collection[Coord],
    grid: Grid,
    rng: random.Random,
) -> Coord:
    """
    Return the cell the chaser moves to this chaser step.

    Parameters
    ----------
    position : current chaser cell
    target   : cell the chaser walks towards (the food)
    blocked  : cells it may not enter (the player's body minus the head)
    grid     : board dimensions, for wrap-aware distances
    rng      : random source for the aligned-axis tie break
    """
    dx, dy = grid.delta(position, target)
    if dx == 0 and dy == 0:
        return position

    primary, secondary = ("x", "y") if abs(dx) > abs(dy) else ("y", "x")
    deltas = {"x": dx, "y": dy}

    candidate = grid.step(position, _axis_direction(primary, deltas[primary], rng))
    if candidate not in blocked:
        return candidate

    candidate = grid.step(position, _axis_direction(secondary, deltas[secondary], rng))
    if candidate not in blocked:
        return candidate

    return position
