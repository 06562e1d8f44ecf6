"""
kernel.py — The simulation kernel.

Owns ALL entity and timer state of a round. Zero rendering, zero input
devices, no internal timers or threads: a driver feeds it decoded
direction intents and elapsed milliseconds, it answers with events and an
immutable WorldState.

Step order:
    1. advance effect timers, revert what expired
    2. commit every snake's pending direction
    3. compute next heads, resolve deaths (head-on checked jointly)
    4. move survivors: food, powerup, frozen chaser, or plain move
    5. every second step, move the chaser
    6. any death ends the round; ROUND_OVER is sticky until reset_round()
"""

from __future__ import annotations

import logging
import random
from typing import Iterable

from .ai_brain import compute_step
from .collision import Move, resolve_deaths
from .config import KernelConfig
from .effects import advance_timers, apply_powerup, pacing_interval
from .errors import ContractViolation, GridSaturatedError, KernelStateError
from .events import (
    CHASER_ID,
    AgentConsumed,
    ChaserAteFood,
    ChaserView,
    Death,
    DeathCause,
    Event,
    FoodEaten,
    Outcome,
    PowerupCollected,
    RoundOver,
    SnakeView,
    Status,
    TickResult,
    WorldState,
)
from .grid import Coord, Grid
from .model import MODE_RULES, Chaser, Direction, Mode, Powerup, Snake

logger = logging.getLogger(__name__)


class SimulationKernel:
    """
    Fixed-step simulation of one round.

    The driver calls reset_round() once, then tick() every frame with the
    milliseconds elapsed since the previous call. A step happens at most
    once per tick() call, when the accumulated time exceeds the current
    move interval; a driver that falls behind is not caught up.
    """

    def __init__(self, config: KernelConfig | None = None, rng: random.Random | None = None):
        self.config = config or KernelConfig()
        self.grid = Grid(self.config.cols, self.config.rows)
        self.rng = rng if rng is not None else random.Random()

        self.status: Status = Status.READY
        self.mode: Mode | None = None
        self.snakes: list[Snake] = []
        self.chaser: Chaser | None = None
        self.food: Coord | None = None
        self.powerup: Powerup | None = None
        self.base_interval: float = self.config.base_interval
        self.step_count: int = 0
        self.outcome: Outcome | None = None

        self._accumulator: float = 0.0
        self._pending_heads: set[Coord] = set()

    # ── Public API ───────────────────────────────────────────────
    def reset_round(self, mode: Mode) -> WorldState:
        """Throw away the current round and lay out a fresh board for ``mode``."""
        if mode not in MODE_RULES:
            raise ContractViolation(f"unknown mode: {mode!r}")
        rules = MODE_RULES[mode]
        cols, rows = self.config.cols, self.config.rows

        self.mode = mode
        self.status = Status.RUNNING
        self.outcome = None
        self.base_interval = self.config.base_interval
        self.step_count = 0
        self._accumulator = 0.0
        self._pending_heads = set()
        self.food = None
        self.powerup = None
        self.chaser = None

        if rules.players == 2:
            self.snakes = [
                Snake(1, (int(cols * 0.75), rows // 2), Direction.UP),
                Snake(2, (int(cols * 0.25), rows // 2), Direction.UP),
            ]
        else:
            self.snakes = [Snake(1, (cols // 2, rows // 2), Direction.UP)]

        if rules.has_chaser:
            self.chaser = Chaser(self._place_chaser_start())

        self.food = self._place()
        logger.info("round started: mode=%s grid=%dx%d", mode.value, cols, rows)
        return self.state

    def submit_intent(self, player_id: int, direction: Direction) -> None:
        """Buffer a direction for ``player_id``; reversals are silently ignored."""
        if self.status is Status.READY:
            raise KernelStateError("submit_intent() called before reset_round()")
        self._snake(player_id).intents.submit(direction)

    def tick(self, elapsed_ms: float) -> TickResult:
        """Accumulate ``elapsed_ms`` and step once if the move interval has passed."""
        if self.status is Status.READY:
            raise KernelStateError("tick() called before reset_round()")
        if elapsed_ms < 0:
            raise ContractViolation(f"elapsed time cannot be negative: {elapsed_ms}")
        if self.status is Status.ROUND_OVER:
            return TickResult([], self.state, stepped=False)

        self._accumulator += elapsed_ms
        if self._accumulator > self.move_interval:
            self._accumulator = 0.0
            return self.step()
        return TickResult([], self.state, stepped=False)

    def step(self) -> TickResult:
        """Run one simulation step right now, ignoring the pacing accumulator."""
        if self.status is Status.READY:
            raise KernelStateError("step() called before reset_round()")
        if self.status is Status.ROUND_OVER:
            return TickResult([], self.state, stepped=False)

        events: list[Event] = []
        self.step_count += 1

        for who, kind in advance_timers(self.snakes, self.chaser):
            logger.debug("step %d: %s expired for %d", self.step_count, kind.value, who)

        for snake in self.snakes:
            snake.intents.commit()

        moves = []
        for snake in self.snakes:
            head = self.grid.step(snake.head, snake.dir)
            moves.append(Move(snake, head, self._grows_at(head)))
        self._pending_heads = {m.head for m in moves}

        deaths = resolve_deaths(moves, self.chaser)
        for move in moves:
            cause = deaths.get(move.snake.player_id)
            if cause is not None:
                move.snake.kill()
                events.append(Death(move.snake.player_id, cause, move.head))

        for move in moves:
            if move.snake.alive:
                self._commit_move(move, events)
        self._pending_heads = set()

        if (
            self.chaser is not None
            and self.snakes[0].alive
            and self.step_count % self.config.chaser_period == 0
        ):
            self._chaser_step(events)

        if any(not s.alive for s in self.snakes):
            self._finish_round(events)

        for event in events:
            logger.debug("step %d: %s", self.step_count, event)
        return TickResult(events, self.state)

    # ── Queries ──────────────────────────────────────────────────
    @property
    def move_interval(self) -> float:
        return pacing_interval(self.snakes, self.base_interval)

    @property
    def state(self) -> WorldState:
        if self.mode is None:
            raise KernelStateError("no round has been started")
        chaser = None
        if self.chaser is not None:
            chaser = ChaserView(self.chaser.position, self.chaser.frozen_ticks, self.chaser.score)
        powerup = None
        if self.powerup is not None:
            powerup = (self.powerup.position, self.powerup.kind)
        return WorldState(
            mode=self.mode,
            status=self.status,
            step=self.step_count,
            cols=self.grid.cols,
            rows=self.grid.rows,
            snakes=tuple(
                SnakeView(
                    player_id=s.player_id,
                    body=tuple(s.body),
                    direction=s.dir,
                    alive=s.alive,
                    score=s.score,
                    ghost_ticks=s.effects.ghost_ticks,
                    speed_slow_kind=s.effects.speed_slow_kind,
                    speed_slow_ticks=s.effects.speed_slow_ticks,
                )
                for s in self.snakes
            ),
            chaser=chaser,
            food=self.food,
            powerup=powerup,
            move_interval=self.move_interval,
            base_interval=self.base_interval,
            outcome=self.outcome,
        )

    def scores(self) -> dict[int, int]:
        scores = {s.player_id: s.score for s in self.snakes}
        if self.chaser is not None:
            scores[CHASER_ID] = self.chaser.score
        return scores

    # ── Step phases ──────────────────────────────────────────────
    def _grows_at(self, head: Coord) -> bool:
        if head == self.food:
            return True
        if self.powerup is not None and head == self.powerup.position:
            return True
        return self.chaser is not None and self.chaser.frozen and head == self.chaser.position

    def _commit_move(self, move: Move, events: list[Event]) -> None:
        snake, head = move.snake, move.head
        snake.advance(head, grow=move.growing)

        if head == self.food:
            snake.score += self.config.food_points
            events.append(FoodEaten(snake.player_id, head))
            self._speed_up()
            self.food = self._place()
            self._roll_powerup()
        elif self.powerup is not None and head == self.powerup.position:
            kind = self.powerup.kind
            self.powerup = None
            snake.score += self.config.powerup_points
            apply_powerup(kind, snake, self.chaser, self.base_interval, self.step_count, self.config)
            events.append(PowerupCollected(snake.player_id, kind, head))

        if self.chaser is not None and self.chaser.frozen and head == self.chaser.position:
            snake.score += self.config.chaser_bonus
            self.chaser.frozen_ticks = 0
            self.chaser.position = self._place()
            events.append(AgentConsumed(snake.player_id, head))

    def _chaser_step(self, events: list[Event]) -> None:
        chaser, player = self.chaser, self.snakes[0]
        if chaser.frozen:
            return

        blocked = set(player.body)
        blocked.discard(player.head)
        chaser.position = compute_step(chaser.position, self.food, blocked, self.grid, self.rng)

        if chaser.position == player.head:
            player.kill()
            events.append(Death(player.player_id, DeathCause.CHASER, player.head))

        if chaser.position == self.food:
            chaser.score += self.config.chaser_food_points
            events.append(ChaserAteFood(chaser.position))
            self.food = self._place()

        if self.powerup is not None and chaser.position == self.powerup.position:
            self.powerup = None

    def _finish_round(self, events: list[Event]) -> None:
        dead = [s for s in self.snakes if not s.alive]
        if self.mode is Mode.SINGLE_PLAYER:
            outcome = Outcome.PLAYER_LOST
        elif len(dead) == len(self.snakes):
            outcome = Outcome.DRAW
        elif dead[0].player_id == 1:
            outcome = Outcome.PLAYER_TWO_WINS
        else:
            outcome = Outcome.PLAYER_ONE_WINS

        self.status = Status.ROUND_OVER
        self.outcome = outcome
        scores = self.scores()
        events.append(RoundOver(outcome, scores))
        logger.info("round over after %d steps: %s %s", self.step_count, outcome.value, scores)

    # ── Helpers ──────────────────────────────────────────────────
    def _snake(self, player_id: int) -> Snake:
        for snake in self.snakes:
            if snake.player_id == player_id:
                return snake
        raise ContractViolation(f"no snake for player {player_id} in this round")

    def _speed_up(self) -> None:
        self.base_interval = max(self.config.min_interval, self.base_interval - 1)

    def _roll_powerup(self) -> None:
        kinds = MODE_RULES[self.mode].powerups
        if self.powerup is not None or not kinds:
            return
        if self.rng.random() < self.config.powerup_chance:
            position = self._place()
            self.powerup = Powerup(position, self.rng.choice(kinds))

    def _occupied(self) -> Iterable[Coord]:
        for snake in self.snakes:
            yield from snake.body
        yield from self._pending_heads
        if self.food is not None:
            yield self.food
        if self.powerup is not None:
            yield self.powerup.position
        if self.chaser is not None:
            yield self.chaser.position

    def _place(self) -> Coord:
        return self.grid.place(self.rng, self._occupied())

    def _place_chaser_start(self) -> Coord:
        start_x = self.snakes[0].head[0]
        occupied = {c for s in self.snakes for c in s.body}
        candidates = [
            c for c in self.grid.free_cells(occupied)
            if abs(c[0] - start_x) >= self.config.chaser_min_start_distance
        ]
        if not candidates:
            raise GridSaturatedError("no room to place the chaser away from the player")
        return self.rng.choice(candidates)
