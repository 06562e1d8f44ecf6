"""
events.py — What the kernel tells its collaborators.

Every step yields a list of discrete events (for audio, particles, HUD)
plus an immutable WorldState snapshot. Collaborators never see the
mutable entities the kernel owns.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from .grid import Coord
from .model import Direction, Mode, PowerupKind

CHASER_ID = 0   # "who" of events caused by the chaser


class DeathCause(enum.Enum):
    SELF    = "self"        # ran into its own body
    SNAKE   = "snake"       # ran into the other snake's body
    HEAD_ON = "head_on"     # both heads entered the same cell
    CHASER  = "chaser"      # caught by (or ran into) an unfrozen chaser


class Outcome(enum.Enum):
    PLAYER_ONE_WINS = "p1_wins"
    PLAYER_TWO_WINS = "p2_wins"
    DRAW            = "draw"
    PLAYER_LOST     = "lost"


class Status(enum.Enum):
    READY      = "ready"
    RUNNING    = "running"
    ROUND_OVER = "round_over"


# ── Events ────────────────────────────────────────────────────────
@dataclass(frozen=True, slots=True)
class FoodEaten:
    by: int
    at: Coord


@dataclass(frozen=True, slots=True)
class PowerupCollected:
    by: int
    kind: PowerupKind
    at: Coord


@dataclass(frozen=True, slots=True)
class AgentConsumed:
    by: int
    at: Coord


@dataclass(frozen=True, slots=True)
class ChaserAteFood:
    at: Coord


@dataclass(frozen=True, slots=True)
class Death:
    who: int
    cause: DeathCause
    at: Coord


@dataclass(frozen=True, slots=True)
class RoundOver:
    outcome: Outcome
    scores: dict[int, int] = field(default_factory=dict)


Event = FoodEaten | PowerupCollected | AgentConsumed | ChaserAteFood | Death | RoundOver


# ── Snapshots ─────────────────────────────────────────────────────
@dataclass(frozen=True, slots=True)
class SnakeView:
    player_id: int
    body: tuple[Coord, ...]
    direction: Direction
    alive: bool
    score: int
    ghost_ticks: int
    speed_slow_kind: PowerupKind | None
    speed_slow_ticks: int

    @property
    def head(self) -> Coord:
        return self.body[0]


@dataclass(frozen=True, slots=True)
class ChaserView:
    position: Coord
    frozen_ticks: int
    score: int


@dataclass(frozen=True, slots=True)
class WorldState:
    mode: Mode
    status: Status
    step: int
    cols: int
    rows: int
    snakes: tuple[SnakeView, ...]
    chaser: ChaserView | None
    food: Coord
    powerup: tuple[Coord, PowerupKind] | None
    move_interval: float
    base_interval: float
    outcome: Outcome | None = None

    def snake(self, player_id: int) -> SnakeView:
        for s in self.snakes:
            if s.player_id == player_id:
                return s
        raise KeyError(player_id)

    @property
    def scores(self) -> dict[int, int]:
        return {s.player_id: s.score for s in self.snakes}


@dataclass(frozen=True, slots=True)
class TickResult:
    events: list[Event]
    state: WorldState
    stepped: bool = True
