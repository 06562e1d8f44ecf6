"""
config.py — Shared constants for the entire application.
No logic, no imports from internal modules.
"""

from dataclasses import dataclass

# ── Grid ──────────────────────────────────────────────────────────
COLS            = 30
ROWS            = 20

# ── Window (front end only) ───────────────────────────────────────
CELL            = 20
GAME_W, GAME_H  = COLS * CELL, ROWS * CELL
PANEL_H         = 60
OFFSET_X        = 10
OFFSET_Y        = PANEL_H + 10
WIDTH, HEIGHT   = GAME_W + 2 * OFFSET_X, GAME_H + PANEL_H + 20
FPS             = 60

# ── Colors ────────────────────────────────────────────────────────
BG          = (5,   5,   16)
GRID_COL    = (29,  29,  43)
P1_COL      = (99,  199, 77)
P1_DIM      = (40,  100, 30)
P2_COL      = (255, 0,   77)
P2_DIM      = (130, 0,   40)
CHASER_COL  = (255, 236, 39)
FOOD_COL    = (255, 119, 168)
UI_COL      = (41,  173, 255)
BLACK       = (0,   0,   0)
PANEL_BG    = (12,  12,  20)
BORDER_COL  = (95,  87,  79)
POWERUP_COLS = {
    "freeze": (41,  173, 255),
    "speed":  (255, 204, 0),
    "slow":   (131, 118, 156),
    "ghost":  (255, 255, 255),
    "shrink": (255, 119, 168),
}

# ── Pacing (milliseconds) ─────────────────────────────────────────
BASE_MOVE_INTERVAL  = 120
MIN_MOVE_INTERVAL   = 60     # floor reached by eating food
SPEED_INTERVAL_MIN  = 30     # floor of the speed powerup
SLOW_INTERVAL_MAX   = 300    # ceiling of the slow powerup
CHASER_PERIOD       = 2      # chaser moves every Nth step

# ── Powerups (durations in steps) ─────────────────────────────────
FREEZE_DURATION         = 150
SPEED_BOOST_DURATION    = 200
GHOST_DURATION          = 200
MIN_SNAKE_LENGTH        = 3
POWERUP_CHANCE          = 0.2

# ── Scoring ───────────────────────────────────────────────────────
FOOD_POINTS         = 1
POWERUP_POINTS      = 5
CHASER_BONUS        = 5
CHASER_FOOD_POINTS  = 1

# ── Placement ─────────────────────────────────────────────────────
CHASER_MIN_START_DISTANCE = 5

# ── Leaderboard ───────────────────────────────────────────────────
MAX_HIGH_SCORES     = 10
NAME_LENGTH         = 3
DEFAULT_NAME        = "AAA"

PARTICLE_FOOD_COUNT  = 8
PARTICLE_DEATH_COUNT = 20

# ── Session States ────────────────────────────────────────────────
STATE_MENU    = "menu"
STATE_PLAYING = "playing"
STATE_PAUSED  = "paused"
STATE_OVER    = "over"
STATE_NAME    = "name_entry"


@dataclass(frozen=True)
class KernelConfig:
    """Tunables of one simulation kernel. Defaults mirror the constants above."""

    cols: int = COLS
    rows: int = ROWS
    base_interval: float = BASE_MOVE_INTERVAL
    min_interval: float = MIN_MOVE_INTERVAL
    speed_interval_min: float = SPEED_INTERVAL_MIN
    slow_interval_max: float = SLOW_INTERVAL_MAX
    chaser_period: int = CHASER_PERIOD
    freeze_duration: int = FREEZE_DURATION
    speed_duration: int = SPEED_BOOST_DURATION
    ghost_duration: int = GHOST_DURATION
    min_length: int = MIN_SNAKE_LENGTH
    powerup_chance: float = POWERUP_CHANCE
    food_points: int = FOOD_POINTS
    powerup_points: int = POWERUP_POINTS
    chaser_bonus: int = CHASER_BONUS
    chaser_food_points: int = CHASER_FOOD_POINTS
    chaser_min_start_distance: int = CHASER_MIN_START_DISTANCE
