from collections import deque

from snake_chase.collision import Move, hits_self, resolve_deaths
from snake_chase.events import DeathCause
from snake_chase.model import Chaser, Direction, Snake


def _snake(player_id, body, direction=Direction.RIGHT, ghost=0):
    snake = Snake(player_id, body[0], direction)
    snake.body = deque(body)
    snake.effects.ghost_ticks = ghost
    return snake


SQUARE = [(1, 1), (1, 2), (2, 2), (2, 1)]


def test_moving_into_the_vacating_tail_is_legal():
    snake = _snake(1, SQUARE)
    assert not hits_self(Move(snake, (2, 1), growing=False))


def test_tail_is_solid_while_growing():
    snake = _snake(1, SQUARE)
    assert hits_self(Move(snake, (2, 1), growing=True))


def test_moving_into_the_body_is_fatal():
    snake = _snake(1, SQUARE + [(3, 1)])
    deaths = resolve_deaths([Move(snake, (2, 1), growing=False)])
    assert deaths == {1: DeathCause.SELF}


def test_running_into_the_other_snake():
    a = _snake(1, [(5, 5)])
    b = _snake(2, [(6, 4), (6, 5), (6, 6)], Direction.UP)
    deaths = resolve_deaths([Move(a, (6, 5), False), Move(b, (6, 3), False)])
    assert deaths == {1: DeathCause.SNAKE}


def test_ghost_passes_through_bodies():
    a = _snake(1, [(5, 5)], ghost=3)
    b = _snake(2, [(6, 4), (6, 5), (6, 6)], Direction.UP)
    assert resolve_deaths([Move(a, (6, 5), False), Move(b, (6, 3), False)]) == {}

    looped = _snake(1, SQUARE + [(3, 1)], ghost=1)
    assert resolve_deaths([Move(looped, (2, 1), False)]) == {}


def test_head_on_kills_both_even_with_ghost():
    a = _snake(1, [(5, 5)], ghost=10)
    b = _snake(2, [(7, 5)], Direction.LEFT)
    deaths = resolve_deaths([Move(a, (6, 5), False), Move(b, (6, 5), False)])
    assert deaths == {1: DeathCause.HEAD_ON, 2: DeathCause.HEAD_ON}


def test_self_hit_takes_precedence_over_head_on():
    a = _snake(1, SQUARE + [(3, 1)])
    b = _snake(2, [(2, 0)], Direction.DOWN)
    deaths = resolve_deaths([Move(a, (2, 1), False), Move(b, (2, 1), False)])
    assert deaths == {1: DeathCause.SELF, 2: DeathCause.SNAKE}


def test_unfrozen_chaser_is_deadly_frozen_is_not():
    snake = _snake(1, [(5, 5)])
    chaser = Chaser((6, 5))
    assert resolve_deaths([Move(snake, (6, 5), False)], chaser) == {1: DeathCause.CHASER}

    chaser.frozen_ticks = 4
    assert resolve_deaths([Move(snake, (6, 5), True)], chaser) == {}
