"""Collision rules for one simulation step."""

from __future__ import annotations

from typing import NamedTuple, Sequence

from .events import DeathCause
from .grid import Coord
from .model import Chaser, Snake


class Move(NamedTuple):
    """A snake's proposed head for this step, before anything is committed."""

    snake: Snake
    head: Coord
    growing: bool   # the tail stays put this step


def hits_self(move: Move) -> bool:
    """
    ``True`` if the new head lands on the snake's own body.

    The tail cell is vacated during a non-growing step, so chasing your own
    tail is legal unless the same move also makes the snake grow.
    """
    body = move.snake.body
    if move.head not in body:
        return False
    if move.growing:
        return True
    return move.head != body[-1] or body.count(move.head) > 1


def hits_other(move: Move, other: Snake) -> bool:
    return other.occupies(move.head)


def resolve_deaths(
    moves: Sequence[Move],
    chaser: Chaser | None = None,
) -> dict[int, DeathCause]:
    """
    Return ``{player_id: cause}`` for every snake that dies this step.

    Order: self hit, then the opponent's body (both suppressed by ghost),
    then a head-on meeting, which kills both sides even through ghost.
    Walking into an unfrozen chaser is fatal as well; a frozen one is food.
    """
    deaths: dict[int, DeathCause] = {}

    for move in moves:
        snake = move.snake
        if not snake.effects.ghost:
            if hits_self(move):
                deaths[snake.player_id] = DeathCause.SELF
                continue
            others = [m.snake for m in moves if m.snake is not snake]
            if any(hits_other(move, other) for other in others):
                deaths[snake.player_id] = DeathCause.SNAKE
                continue
        if chaser is not None and not chaser.frozen and move.head == chaser.position:
            deaths[snake.player_id] = DeathCause.CHASER

    for i, a in enumerate(moves):
        for b in moves[i + 1:]:
            if a.head == b.head:
                deaths.setdefault(a.snake.player_id, DeathCause.HEAD_ON)
                deaths.setdefault(b.snake.player_id, DeathCause.HEAD_ON)

    return deaths
