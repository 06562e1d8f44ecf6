"""
effects.py — Powerup effects and their timers.

Slots:
    speed/slow  one shared slot per snake, the later pickup overwrites
    ghost       per snake, independent
    freeze      lives on the chaser, independent

Timers count kernel steps. They drop by one at the start of every step and
clamp at zero; an expired speed/slow slot hands the snake back to the
current base interval.
"""

from __future__ import annotations

import math
from typing import Iterable

from .config import KernelConfig
from .model import Chaser, PowerupKind, Snake


def advance_timers(snakes: Iterable[Snake], chaser: Chaser | None) -> list[tuple[int, PowerupKind]]:
    """Tick every running timer once. Returns ``(player_id, kind)`` of expired effects."""
    expired: list[tuple[int, PowerupKind]] = []

    if chaser is not None and chaser.frozen_ticks > 0:
        chaser.frozen_ticks -= 1
        if chaser.frozen_ticks == 0:
            expired.append((0, PowerupKind.FREEZE))

    for snake in snakes:
        fx = snake.effects
        if fx.speed_slow_ticks > 0:
            fx.speed_slow_ticks -= 1
            if fx.speed_slow_ticks == 0:
                expired.append((snake.player_id, fx.speed_slow_kind))
                fx.clear_speed_slow()
        if fx.ghost_ticks > 0:
            fx.ghost_ticks -= 1
            if fx.ghost_ticks == 0:
                expired.append((snake.player_id, PowerupKind.GHOST))
    return expired


def apply_powerup(
    kind: PowerupKind,
    snake: Snake,
    chaser: Chaser | None,
    base_interval: float,
    step: int,
    config: KernelConfig,
) -> None:
    """Apply exactly one powerup effect for ``snake``."""
    fx = snake.effects
    if kind is PowerupKind.FREEZE:
        if chaser is not None:
            chaser.frozen_ticks = config.freeze_duration
    elif kind is PowerupKind.SPEED:
        fx.speed_slow_kind = kind
        fx.speed_slow_ticks = config.speed_duration
        fx.interval_override = max(config.speed_interval_min, base_interval / 2)
        fx.applied_at = step
    elif kind is PowerupKind.SLOW:
        fx.speed_slow_kind = kind
        fx.speed_slow_ticks = config.speed_duration
        fx.interval_override = min(config.slow_interval_max, base_interval * 1.5)
        fx.applied_at = step
    elif kind is PowerupKind.GHOST:
        fx.ghost_ticks = config.ghost_duration
    elif kind is PowerupKind.SHRINK:
        snake.truncate(shrunk_length(len(snake), config.min_length))
    else:
        raise ValueError(f"unknown powerup kind: {kind!r}")


def shrunk_length(length: int, minimum: int) -> int:
    """Half the body, never below ``minimum`` and never longer than it was."""
    return min(length, max(minimum, math.floor(length / 2)))


def effective_interval(snake: Snake, base_interval: float) -> float:
    fx = snake.effects
    if fx.speed_slow_active and fx.interval_override is not None:
        return fx.interval_override
    return base_interval


def pacing_interval(snakes: Iterable[Snake], base_interval: float) -> float:
    """
    Lockstep interval for the whole board.

    The snake that most recently picked up speed/slow (and still has it)
    sets the pace; otherwise the base interval applies.
    """
    holders = [s for s in snakes if s.effects.speed_slow_active]
    if not holders:
        return base_interval
    latest = max(holders, key=lambda s: s.effects.applied_at)
    return effective_interval(latest, base_interval)
