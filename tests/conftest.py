import random
import sys
from collections import deque
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from snake_chase.config import KernelConfig  # noqa: E402
from snake_chase.kernel import SimulationKernel  # noqa: E402
from snake_chase.model import IntentQueue  # noqa: E402

FAR_AWAY = (25, 17)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def make_kernel(rng):
    """Build a kernel with a seeded rng; keyword arguments override KernelConfig."""

    def _make(**overrides) -> SimulationKernel:
        return SimulationKernel(KernelConfig(**overrides), rng=rng)

    return _make


def put_snake(kernel, player_id, body, direction):
    """Replace a snake's body and heading in place."""
    snake = next(s for s in kernel.snakes if s.player_id == player_id)
    snake.body = deque(body)
    snake.intents = IntentQueue(direction)
    return snake


def clear_board(kernel, food=FAR_AWAY):
    """Park the food out of the way and remove the powerup."""
    kernel.food = food
    kernel.powerup = None
