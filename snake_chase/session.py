"""
session.py — Session layer.

The state machine around the kernel: menu, playing, paused, game over and
high-score name entry. The kernel is only ticked while PLAYING and knows
nothing about any of these phases.

Classes:
    HighScore    — one leaderboard row
    Leaderboard  — in-memory top-N table (nothing is written to disk)
    GameSession  — drives a SimulationKernel from a frame loop
"""

from __future__ import annotations

import datetime
import logging
from typing import NamedTuple

from .config import (
    DEFAULT_NAME, MAX_HIGH_SCORES, NAME_LENGTH,
    STATE_MENU, STATE_NAME, STATE_OVER, STATE_PAUSED, STATE_PLAYING,
)
from .events import Event, Outcome, RoundOver, WorldState
from .kernel import SimulationKernel
from .model import Direction, Mode

logger = logging.getLogger(__name__)


# ────────────────────────── Leaderboard ──────────────────────────
class HighScore(NamedTuple):
    name: str
    score: int
    date: str


DEFAULT_SCORES = (
    HighScore("PAC", 100, ""),
    HighScore("SNK", 50, ""),
    HighScore("ELF", 25, ""),
)


class Leaderboard:
    """Best single-player runs, highest first, capped at ``capacity`` rows."""

    def __init__(self, entries=DEFAULT_SCORES, capacity: int = MAX_HIGH_SCORES):
        self.capacity = capacity
        self._entries: list[HighScore] = sorted(entries, key=lambda e: -e.score)[:capacity]

    @property
    def entries(self) -> list[HighScore]:
        return list(self._entries)

    def lowest(self) -> int:
        if len(self._entries) < self.capacity:
            return 0
        return self._entries[-1].score

    def qualifies(self, score: int) -> bool:
        return score > self.lowest()

    def submit(self, name: str, score: int, date: str | None = None) -> int | None:
        """Insert a row; returns its 0-based rank, or None if it fell off the table."""
        if date is None:
            date = datetime.date.today().isoformat()
        entry = HighScore(name, score, date)
        # stable: an equal score ranks below the rows already there
        rank = next((i for i, e in enumerate(self._entries) if e.score < score), len(self._entries))
        self._entries.insert(rank, entry)
        del self._entries[self.capacity:]
        return rank if rank < self.capacity else None


# ────────────────────────── GameSession ──────────────────────────
class GameSession:
    """
    Top-level session state.
    The controller calls update() once per frame with elapsed milliseconds.
    """

    def __init__(self, kernel: SimulationKernel | None = None,
                 leaderboard: Leaderboard | None = None):
        self.kernel = kernel or SimulationKernel()
        self.leaderboard = leaderboard or Leaderboard()
        self.state: str = STATE_MENU
        self.mode: Mode = Mode.SINGLE_PLAYER
        self.outcome: Outcome | None = None
        self.final_scores: dict[int, int] = {}
        self.name_buffer: str = ""
        self.last_rank: int | None = None

    # ── Public API ───────────────────────────────────────────────
    def select_mode(self, mode: Mode) -> None:
        if self.state in (STATE_MENU, STATE_OVER):
            self.mode = mode

    def start(self) -> None:
        self.kernel.reset_round(self.mode)
        self.outcome = None
        self.final_scores = {}
        self.last_rank = None
        self.state = STATE_PLAYING

    def pause(self) -> None:
        if self.state == STATE_PLAYING:
            self.state = STATE_PAUSED

    def resume(self) -> None:
        if self.state == STATE_PAUSED:
            self.state = STATE_PLAYING

    def restart(self) -> None:
        self.start()

    def to_menu(self) -> None:
        if self.state != STATE_NAME:
            self.state = STATE_MENU

    def steer(self, player_id: int, direction: Direction) -> None:
        """Forward a direction intent; ignored outside of play."""
        if self.state != STATE_PLAYING:
            return
        if player_id > len(self.kernel.snakes):
            return
        self.kernel.submit_intent(player_id, direction)

    def update(self, elapsed_ms: float) -> list[Event]:
        """Advance the kernel while playing. Returns the events of this frame."""
        if self.state != STATE_PLAYING:
            return []
        result = self.kernel.tick(elapsed_ms)
        for event in result.events:
            if isinstance(event, RoundOver):
                self._on_round_over(event)
        return result.events

    @property
    def world(self) -> WorldState | None:
        if self.kernel.mode is None:
            return None
        return self.kernel.state

    # ── Name entry ───────────────────────────────────────────────
    def type_char(self, char: str) -> None:
        if self.state != STATE_NAME:
            return
        if char.isalnum() and len(self.name_buffer) < NAME_LENGTH:
            self.name_buffer += char.upper()

    def backspace(self) -> None:
        if self.state == STATE_NAME:
            self.name_buffer = self.name_buffer[:-1]

    def confirm_name(self) -> None:
        if self.state != STATE_NAME:
            return
        name = self.name_buffer or DEFAULT_NAME
        self.last_rank = self.leaderboard.submit(name, self.final_scores.get(1, 0))
        logger.info("high score %s by %s (rank %s)", self.final_scores.get(1, 0), name, self.last_rank)
        self.state = STATE_OVER

    # ── Private helpers ──────────────────────────────────────────
    def _on_round_over(self, event: RoundOver) -> None:
        self.outcome = event.outcome
        self.final_scores = dict(event.scores)
        # Only single-player runs go on the board.
        if self.mode is Mode.SINGLE_PLAYER and self.leaderboard.qualifies(self.final_scores.get(1, 0)):
            self.name_buffer = ""
            self.state = STATE_NAME
        else:
            self.state = STATE_OVER
