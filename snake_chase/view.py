"""
view.py — View layer.

Draws a WorldState snapshot; never touches the kernel's entities.
Kernel events only trigger cosmetic particle bursts here.

Public API:
    GameView(screen)        — bind to a pygame surface
    view.on_events(events)  — react to the events of one frame
    view.render(session)    — draw the current frame
"""

import math
import random

import pygame

from .config import (
    WIDTH, PANEL_H, GAME_W, GAME_H,
    OFFSET_X, OFFSET_Y, CELL, COLS, ROWS,
    BG, GRID_COL, FOOD_COL, UI_COL, BLACK, PANEL_BG, BORDER_COL,
    P1_COL, P1_DIM, P2_COL, P2_DIM, CHASER_COL, POWERUP_COLS,
    PARTICLE_FOOD_COUNT, PARTICLE_DEATH_COUNT,
    STATE_MENU, STATE_OVER, STATE_PAUSED, STATE_NAME,
)
from .events import (
    AgentConsumed, ChaserAteFood, Death, FoodEaten, Outcome, PowerupCollected,
    SnakeView, WorldState,
)
from .model import Mode
from .session import GameSession

SNAKE_COLS = {1: (P1_COL, P1_DIM), 2: (P2_COL, P2_DIM)}

OUTCOME_TEXT = {
    Outcome.PLAYER_LOST:     ("GAME OVER",   CHASER_COL),
    Outcome.PLAYER_ONE_WINS: ("GREEN WINS!", P1_COL),
    Outcome.PLAYER_TWO_WINS: ("PINK WINS!",  P2_COL),
    Outcome.DRAW:            ("DRAW!",       FOOD_COL),
}


# ─────────────────────── colour helpers ──────────────────────────
def _lerp_color(c1: tuple, c2: tuple, t: float) -> tuple:
    t = max(0.0, min(1.0, t))
    return tuple(int(c1[i] + (c2[i] - c1[i]) * t) for i in range(3))


def _with_alpha(color: tuple, alpha: int) -> tuple:
    return (*color[:3], max(0, min(255, alpha)))


def _cell_center(cell: tuple[int, int]) -> tuple[int, int]:
    return OFFSET_X + cell[0] * CELL + CELL // 2, OFFSET_Y + cell[1] * CELL + CELL // 2


# ─────────────────────────── Particle ────────────────────────────
class Particle:
    """Visual-only spark thrown out by a kernel event."""

    def __init__(self, x: float, y: float, color: tuple):
        angle = random.uniform(0, math.tau)
        speed = random.uniform(1.5, 4.5)
        self.x, self.y = x, y
        self.vx = math.cos(angle) * speed
        self.vy = math.sin(angle) * speed
        self.life: float = 1.0
        self.decay: float = random.uniform(0.03, 0.07)
        self.color = color
        self.size: int = random.randint(2, 4)

    @property
    def alive(self) -> bool:
        return self.life > 0

    def update(self) -> None:
        self.x += self.vx
        self.y += self.vy
        self.vx *= 0.90
        self.vy *= 0.90
        self.life -= self.decay


# ─────────────────────────── GameView ────────────────────────────
class GameView:
    """Renders the complete frame from a session and its world snapshot."""

    def __init__(self, screen: pygame.Surface):
        self.screen = screen
        self.particles: list[Particle] = []
        self._anim_tick: int = 0
        self._init_fonts()
        self._build_static_surfaces()

    # ── Events ───────────────────────────────────────────────────
    def on_events(self, events) -> None:
        for event in events:
            if isinstance(event, FoodEaten):
                self._burst(event.at, SNAKE_COLS[event.by][0], PARTICLE_FOOD_COUNT)
            elif isinstance(event, PowerupCollected):
                self._burst(event.at, POWERUP_COLS[event.kind.value], PARTICLE_FOOD_COUNT * 2)
            elif isinstance(event, (AgentConsumed, ChaserAteFood)):
                self._burst(event.at, CHASER_COL, PARTICLE_FOOD_COUNT + 4)
            elif isinstance(event, Death):
                self._burst(event.at, SNAKE_COLS[event.who][0], PARTICLE_DEATH_COUNT)

    def _burst(self, cell: tuple[int, int], color: tuple, count: int) -> None:
        x, y = _cell_center(cell)
        self.particles.extend(Particle(x, y, color) for _ in range(count))

    # ── Main entry ───────────────────────────────────────────────
    def render(self, session: GameSession) -> None:
        self._anim_tick += 1
        for p in self.particles:
            p.update()
        self.particles = [p for p in self.particles if p.alive]

        self.screen.fill(BG)
        self.screen.blit(self._grid_surf, (OFFSET_X, OFFSET_Y))

        world = session.world
        if world is not None and session.state != STATE_MENU:
            self._draw_world(world)
        self._draw_particles()
        pygame.draw.rect(self.screen, BORDER_COL,
                         (OFFSET_X - 1, OFFSET_Y - 1, GAME_W + 2, GAME_H + 2), 1)
        self._draw_panel(session, world)

        if session.state == STATE_MENU:
            self._draw_menu_overlay(session)
        elif session.state == STATE_PAUSED:
            self._draw_overlay("PAUSED", FOOD_COL, ["PRESS  P  TO RESUME"])
        elif session.state == STATE_NAME:
            self._draw_name_overlay(session)
        elif session.state == STATE_OVER:
            self._draw_game_over_overlay(session)

        pygame.display.flip()

    # ── Static surface pre-builds ─────────────────────────────────
    def _build_static_surfaces(self) -> None:
        self._grid_surf = pygame.Surface((GAME_W, GAME_H), pygame.SRCALPHA)
        for x in range(COLS + 1):
            pygame.draw.line(self._grid_surf, (*GRID_COL, 160),
                             (x * CELL, 0), (x * CELL, GAME_H))
        for y in range(ROWS + 1):
            pygame.draw.line(self._grid_surf, (*GRID_COL, 160),
                             (0, y * CELL), (GAME_W, y * CELL))

    # ── World ─────────────────────────────────────────────────────
    def _draw_world(self, world: WorldState) -> None:
        self._draw_food(world.food)
        if world.powerup is not None:
            position, kind = world.powerup
            self._draw_powerup(position, POWERUP_COLS[kind.value])
        for snake in world.snakes:
            self._draw_snake(snake)
        if world.chaser is not None:
            self._draw_chaser(world.chaser.position, world.chaser.frozen_ticks > 0)

    def _draw_food(self, food: tuple[int, int]) -> None:
        pulse = 0.70 + 0.30 * math.sin(self._anim_tick * 0.10)
        r = max(2, int((CELL / 2 - 1) * pulse))
        x, y = _cell_center(food)
        glow_r = r + 8
        glow = pygame.Surface((glow_r * 2, glow_r * 2), pygame.SRCALPHA)
        pygame.draw.circle(glow, _with_alpha(FOOD_COL, int(70 * pulse)), (glow_r, glow_r), glow_r)
        self.screen.blit(glow, (x - glow_r, y - glow_r))
        pygame.draw.circle(self.screen, FOOD_COL, (x, y), r)

    def _draw_powerup(self, cell: tuple[int, int], color: tuple) -> None:
        x, y = _cell_center(cell)
        half = CELL // 2 - 2
        diamond = [(x, y - half), (x + half, y), (x, y + half), (x - half, y)]
        pygame.draw.polygon(self.screen, color, diamond)
        pygame.draw.polygon(self.screen, BLACK, diamond, 1)

    def _draw_chaser(self, cell: tuple[int, int], frozen: bool) -> None:
        x, y = _cell_center(cell)
        color = POWERUP_COLS["freeze"] if frozen else CHASER_COL
        mouth = abs(math.sin(self._anim_tick * 0.2)) * 0.7
        r = CELL // 2 - 1
        points = [(x, y)]
        for i in range(17):
            a = mouth / 2 + (math.tau - mouth) * i / 16
            points.append((x + math.cos(a) * r, y - math.sin(a) * r))
        pygame.draw.polygon(self.screen, color, points)

    def _draw_snake(self, snake: SnakeView) -> None:
        color, dim = SNAKE_COLS[snake.player_id]
        length = len(snake.body)
        ghost = snake.ghost_ticks > 0
        for i, (sx, sy) in enumerate(snake.body):
            t = 1.0 - (i / max(length - 1, 1)) * 0.72
            seg = _lerp_color(dim, color, t)
            if not snake.alive:
                seg = _lerp_color(seg, BG, 0.5)
            rect = pygame.Rect(OFFSET_X + sx * CELL + 1, OFFSET_Y + sy * CELL + 1, CELL - 2, CELL - 2)
            radius = rect.width // 2 - 1 if i == 0 else rect.width // 4
            if ghost:
                surf = pygame.Surface(rect.size, pygame.SRCALPHA)
                pygame.draw.rect(surf, _with_alpha(seg, 110), surf.get_rect(), border_radius=radius)
                self.screen.blit(surf, rect.topleft)
            else:
                pygame.draw.rect(self.screen, seg, rect, border_radius=radius)

    def _draw_particles(self) -> None:
        for p in self.particles:
            s = pygame.Surface((p.size * 2, p.size * 2), pygame.SRCALPHA)
            pygame.draw.rect(s, _with_alpha(p.color, int(p.life * 255)),
                             (0, 0, p.size * 2, p.size * 2), border_radius=p.size)
            self.screen.blit(s, (int(p.x) - p.size, int(p.y) - p.size))

    # ── HUD Panel ─────────────────────────────────────────────────
    def _draw_panel(self, session: GameSession, world: WorldState | None) -> None:
        pygame.draw.rect(self.screen, PANEL_BG, (0, 0, WIDTH, PANEL_H))
        pygame.draw.line(self.screen, BORDER_COL, (0, PANEL_H - 1), (WIDTH, PANEL_H - 1), 1)

        if world is None:
            return
        for snake in world.snakes:
            color = SNAKE_COLS[snake.player_id][0]
            x = 16 if snake.player_id == 1 else WIDTH - 80
            self.screen.blit(self.font_small.render(f"P{snake.player_id}", True, color), (x, 6))
            self.screen.blit(self.font_big.render(str(snake.score), True, color), (x, 24))
            tags = []
            if snake.speed_slow_kind is not None:
                tags.append(f"{snake.speed_slow_kind.value.upper()} {snake.speed_slow_ticks}")
            if snake.ghost_ticks:
                tags.append(f"GHOST {snake.ghost_ticks}")
            if tags:
                tag = self.font_tiny.render("  ".join(tags), True, UI_COL)
                self.screen.blit(tag, (x + 50, 30))

        if world.chaser is not None:
            label = f"CHASER {world.chaser.score}"
            if world.chaser.frozen_ticks:
                label += f"  FROZEN {world.chaser.frozen_ticks}"
            surf = self.font_small.render(label, True, CHASER_COL)
            self.screen.blit(surf, surf.get_rect(topright=(WIDTH - 16, 8)))

        best = session.leaderboard.entries[0].score if session.leaderboard.entries else 0
        hs = self.font_tiny.render(f"BEST {best}", True, UI_COL)
        self.screen.blit(hs, hs.get_rect(center=(WIDTH // 2, PANEL_H - 12)))

    # ── Overlays ──────────────────────────────────────────────────
    def _draw_overlay(self, title: str, color: tuple, lines: list[str]) -> int:
        surf = pygame.Surface((GAME_W, GAME_H), pygame.SRCALPHA)
        surf.fill((5, 5, 12, 215))
        self.screen.blit(surf, (OFFSET_X, OFFSET_Y))

        pulse = 0.82 + 0.18 * math.sin(self._anim_tick * 0.05)
        title_surf = self.font_title.render(title, True, _lerp_color(BG, color, pulse))
        cy = OFFSET_Y + 40
        self.screen.blit(title_surf, title_surf.get_rect(center=(WIDTH // 2, cy)))
        cy += title_surf.get_height() + 10
        for line in lines:
            txt = self.font_med.render(line, True, UI_COL)
            self.screen.blit(txt, txt.get_rect(center=(WIDTH // 2, cy)))
            cy += txt.get_height() + 8
        return cy

    def _draw_menu_overlay(self, session: GameSession) -> None:
        single = session.mode is Mode.SINGLE_PLAYER
        self._draw_overlay("SNAKE vs CHASER", P1_COL, [
            ("> " if single else "  ") + "1  SINGLE PLAYER (vs CHASER)",
            ("  " if single else "> ") + "2  TWO PLAYERS",
            "",
            "ENTER  START     P  PAUSE     Q  QUIT",
            "ARROWS  P1      WASD  P2",
        ])

    def _draw_name_overlay(self, session: GameSession) -> None:
        cy = self._draw_overlay("NEW HIGH SCORE", FOOD_COL, [
            f"SCORE {session.final_scores.get(1, 0)}",
            "TYPE YOUR NAME, ENTER TO SAVE",
        ])
        name = session.name_buffer.ljust(3, "_")
        surf = self.font_title.render(name, True, FOOD_COL)
        self.screen.blit(surf, surf.get_rect(center=(WIDTH // 2, cy + 30)))

    def _draw_game_over_overlay(self, session: GameSession) -> None:
        title, color = OUTCOME_TEXT.get(session.outcome, ("GAME OVER", UI_COL))
        scores = "   ".join(
            f"{'CHASER' if who == 0 else f'P{who}'} {score}"
            for who, score in sorted(session.final_scores.items())
        )
        lines = [scores, ""]
        if session.mode is Mode.SINGLE_PLAYER:
            for rank, entry in enumerate(session.leaderboard.entries[:5], start=1):
                marker = "*" if session.last_rank == rank - 1 else " "
                lines.append(f"{marker}{rank:>2}. {entry.name:<3} {entry.score:>5}")
        lines.append("")
        lines.append("R  PLAY AGAIN     M  MENU")
        self._draw_overlay(title, color, lines)

    # ── Font init ─────────────────────────────────────────────────
    def _init_fonts(self) -> None:
        specs = [
            ("font_title", "courier", 36, True),
            ("font_big",   "courier", 26, True),
            ("font_med",   "courier", 16, False),
            ("font_small", "courier", 13, True),
            ("font_tiny",  "courier", 11, False),
        ]
        for attr, name, size, bold in specs:
            setattr(self, attr, pygame.font.SysFont(name, size, bold=bold))
