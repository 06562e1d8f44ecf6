"""
model.py — Entity model.

Pure game data owned by the simulation kernel. Zero rendering, zero input
handling, no rules beyond the invariants each holder protects itself.

Classes:
    Direction     — immutable (dx, dy) unit vector
    IntentQueue   — committed vs. pending direction of one snake
    EffectTimers  — per-snake powerup timers (speed/slow slot, ghost)
    Snake         — body, intents, effects, score, alive flag
    Chaser        — single-player pursuit agent
    Powerup       — the one collectible powerup on the board
    Mode / ModeRules / MODE_RULES — which entities a round carries
"""

from __future__ import annotations

import enum
from collections import deque
from typing import NamedTuple

from .errors import ContractViolation
from .grid import Coord


# ─────────────────────────── Direction ───────────────────────────
class Direction:
    """Immutable 2-D unit direction."""
    __slots__ = ("x", "y")

    LEFT: "Direction"
    RIGHT: "Direction"
    UP: "Direction"
    DOWN: "Direction"

    def __init__(self, x: int, y: int):
        object.__setattr__(self, "x", x)
        object.__setattr__(self, "y", y)

    def __setattr__(self, name, value):
        raise AttributeError("Direction is immutable")

    def is_unit(self) -> bool:
        return (
            isinstance(self.x, int) and isinstance(self.y, int)
            and abs(self.x) + abs(self.y) == 1
        )

    def is_opposite(self, other: "Direction") -> bool:
        return self.x == -other.x and self.y == -other.y

    def __eq__(self, other):
        return isinstance(other, Direction) and self.x == other.x and self.y == other.y

    def __hash__(self):
        return hash((self.x, self.y))

    def __repr__(self):
        return f"Direction({self.x}, {self.y})"


Direction.LEFT  = Direction(-1,  0)
Direction.RIGHT = Direction( 1,  0)
Direction.UP    = Direction( 0, -1)
Direction.DOWN  = Direction( 0,  1)


# ────────────────────────── IntentQueue ──────────────────────────
class IntentQueue:
    """
    Buffers the latest accepted direction between steps.

    Reversal is checked against the committed direction, so several key
    presses inside one step can never fold the snake back onto its neck.
    """

    def __init__(self, start: Direction):
        self.committed: Direction = start
        self.pending: Direction = start

    def submit(self, direction: Direction) -> bool:
        """Queue ``direction``; returns False when it was ignored as a reversal."""
        if not isinstance(direction, Direction) or not direction.is_unit():
            raise ContractViolation(f"not a unit direction: {direction!r}")
        if direction.is_opposite(self.committed):
            return False
        self.pending = direction
        return True

    def commit(self) -> Direction:
        self.committed = self.pending
        return self.committed


# ───────────────────────── Powerup kinds ─────────────────────────
class PowerupKind(enum.Enum):
    FREEZE = "freeze"
    SPEED  = "speed"
    SLOW   = "slow"
    GHOST  = "ghost"
    SHRINK = "shrink"


class Powerup(NamedTuple):
    position: Coord
    kind: PowerupKind


# ───────────────────────── EffectTimers ──────────────────────────
class EffectTimers:
    """
    Timed modifiers carried by one snake.

    SPEED and SLOW share a single slot: ``speed_slow_kind`` says which one
    is running and ``interval_override`` holds the move interval it set.
    """

    def __init__(self):
        self.speed_slow_ticks: int = 0
        self.speed_slow_kind: PowerupKind | None = None
        self.interval_override: float | None = None
        self.applied_at: int = -1       # step number of the last speed/slow pickup
        self.ghost_ticks: int = 0

    @property
    def ghost(self) -> bool:
        return self.ghost_ticks > 0

    @property
    def speed_slow_active(self) -> bool:
        return self.speed_slow_ticks > 0

    def clear_speed_slow(self) -> None:
        self.speed_slow_ticks = 0
        self.speed_slow_kind = None
        self.interval_override = None


# ──────────────────────────── Snake ──────────────────────────────
class Snake:
    """
    Pure game data for one player snake.
    No rendering. No input handling.
    """

    def __init__(self, player_id: int, start: Coord, start_dir: Direction):
        self.player_id = player_id
        self.body: deque[Coord] = deque([start])
        self.intents = IntentQueue(start_dir)
        self.effects = EffectTimers()
        self.alive: bool = True
        self.score: int = 0

    # ── Accessors ────────────────────────────────────────────────
    @property
    def head(self) -> Coord:
        return self.body[0]

    @property
    def dir(self) -> Direction:
        return self.intents.committed

    def __len__(self) -> int:
        return len(self.body)

    # ── Commands ─────────────────────────────────────────────────
    def advance(self, new_head: Coord, grow: bool) -> None:
        self.body.appendleft(new_head)
        if not grow:
            self.body.pop()

    def truncate(self, length: int) -> None:
        while len(self.body) > max(1, length):
            self.body.pop()

    def kill(self) -> None:
        self.alive = False

    # ── Queries ──────────────────────────────────────────────────
    def occupies(self, cell: Coord) -> bool:
        return cell in self.body


# ──────────────────────────── Chaser ─────────────────────────────
class Chaser:
    """The single-player pursuit agent."""

    def __init__(self, position: Coord):
        self.position: Coord = position
        self.frozen_ticks: int = 0
        self.score: int = 0

    @property
    def frozen(self) -> bool:
        return self.frozen_ticks > 0


# ───────────────────────── Mode rules ────────────────────────────
class Mode(enum.Enum):
    SINGLE_PLAYER = "single"
    TWO_PLAYER    = "two"


class ModeRules(NamedTuple):
    players: int
    has_chaser: bool
    powerups: tuple[PowerupKind, ...]


MODE_RULES: dict[Mode, ModeRules] = {
    Mode.SINGLE_PLAYER: ModeRules(
        players=1,
        has_chaser=True,
        powerups=tuple(PowerupKind),
    ),
    # No chaser to freeze in two-player rounds.
    Mode.TWO_PLAYER: ModeRules(
        players=2,
        has_chaser=False,
        powerups=tuple(k for k in PowerupKind if k is not PowerupKind.FREEZE),
    ),
}
