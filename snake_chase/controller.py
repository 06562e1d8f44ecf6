"""
controller.py — Controller layer.

Responsibilities:
  - Own the pygame event loop.
  - Translate raw keyboard events into session commands and direction intents.
  - Drive the frame loop: feed elapsed milliseconds to the session, hand the
    resulting events and world snapshot to the view.
  - Know nothing about rendering details (that's the View's job).
  - Know nothing about game rules (that's the kernel's job).

The controller is the only layer that reads pygame events.
"""

import logging
import sys

import pygame

from .config import (
    WIDTH, HEIGHT, FPS,
    STATE_MENU, STATE_PLAYING, STATE_PAUSED, STATE_OVER, STATE_NAME,
)
from .model import Direction, Mode
from .session import GameSession
from .view import GameView

logger = logging.getLogger(__name__)

# Arrow keys steer player 1, WASD steers player 2 (or player 1 when alone).
ARROW_KEYS = {
    pygame.K_UP:    Direction.UP,
    pygame.K_DOWN:  Direction.DOWN,
    pygame.K_LEFT:  Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
}
WASD_KEYS = {
    pygame.K_w: Direction.UP,
    pygame.K_s: Direction.DOWN,
    pygame.K_a: Direction.LEFT,
    pygame.K_d: Direction.RIGHT,
}
MODE_KEYS = {
    pygame.K_1: Mode.SINGLE_PLAYER,
    pygame.K_2: Mode.TWO_PLAYER,
}


def intent_for_key(key: int, mode: Mode) -> tuple[int, Direction] | None:
    """Map a key to ``(player_id, direction)``, or None if it does not steer."""
    if key in ARROW_KEYS:
        return 1, ARROW_KEYS[key]
    if key in WASD_KEYS:
        return (2 if mode is Mode.TWO_PLAYER else 1), WASD_KEYS[key]
    return None


class GameController:
    """
    Owns the main loop.
    Glues Session <-> View without them knowing about each other.
    """

    def __init__(self, session: GameSession | None = None):
        pygame.init()
        self.screen  = pygame.display.set_mode((WIDTH, HEIGHT))
        pygame.display.set_caption("SNAKE vs CHASER")
        self.clock   = pygame.time.Clock()
        self.session = session or GameSession()
        self.view    = GameView(self.screen)

    # ── Public entry point ────────────────────────────────────────
    def run(self) -> None:
        """Start and run the game loop until the player quits."""
        logger.info("entering main loop at %d fps", FPS)
        while True:
            elapsed_ms = self.clock.tick(FPS)
            self._handle_events()
            events = self.session.update(elapsed_ms)
            self.view.on_events(events)
            self.view.render(self.session)

    # ── Event dispatch ────────────────────────────────────────────
    def _handle_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._quit()
            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event.key, event.unicode)

    def _handle_keydown(self, key: int, char: str) -> None:
        state = self.session.state

        if state == STATE_NAME:
            self._handle_name_keys(key, char)
            return

        # Q quits from any other state
        if key == pygame.K_q:
            self._quit()

        if state == STATE_MENU:
            self._handle_menu_keys(key)
        elif state == STATE_PLAYING:
            self._handle_playing_keys(key)
        elif state == STATE_PAUSED:
            self._handle_paused_keys(key)
        elif state == STATE_OVER:
            self._handle_over_keys(key)

    # ── Per-state key handlers ────────────────────────────────────
    def _handle_menu_keys(self, key: int) -> None:
        if key in (pygame.K_RETURN, pygame.K_SPACE):
            self.session.start()
        elif key in MODE_KEYS:
            self.session.select_mode(MODE_KEYS[key])

    def _handle_playing_keys(self, key: int) -> None:
        intent = intent_for_key(key, self.session.mode)
        if intent is not None:
            self.session.steer(*intent)
        elif key == pygame.K_p:
            self.session.pause()
        elif key == pygame.K_r:
            self.session.restart()
        elif key == pygame.K_ESCAPE:
            self.session.to_menu()

    def _handle_paused_keys(self, key: int) -> None:
        if key in (pygame.K_p, pygame.K_SPACE):
            self.session.resume()
        elif key == pygame.K_r:
            self.session.restart()
        elif key == pygame.K_ESCAPE:
            self.session.to_menu()

    def _handle_over_keys(self, key: int) -> None:
        if key in (pygame.K_r, pygame.K_SPACE, pygame.K_RETURN):
            self.session.restart()
        elif key in (pygame.K_m, pygame.K_ESCAPE):
            self.session.to_menu()
        elif key in MODE_KEYS:
            self.session.select_mode(MODE_KEYS[key])

    def _handle_name_keys(self, key: int, char: str) -> None:
        if key == pygame.K_RETURN:
            self.session.confirm_name()
        elif key == pygame.K_BACKSPACE:
            self.session.backspace()
        elif char:
            self.session.type_char(char)

    # ── Utilities ─────────────────────────────────────────────────
    @staticmethod
    def _quit() -> None:
        pygame.quit()
        sys.exit()
