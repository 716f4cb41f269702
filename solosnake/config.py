"""
config.py — Shared constants for the entire application.
No logic, no imports from internal modules.
"""

import os

# ── Window & Grid ─────────────────────────────────────────────────
GRID            = 20                 # side of one cell, in pixels
GAME_W, GAME_H  = 400, 400           # playing field, multiples of GRID
PANEL_H         = 70
OFFSET_X        = 10
OFFSET_Y        = PANEL_H + 10
WIDTH           = GAME_W + 2 * OFFSET_X
HEIGHT          = OFFSET_Y + GAME_H + 10
FPS             = 60

# ── Colors ────────────────────────────────────────────────────────
BG          = (0,   0,   0)
GRID_COL    = (51,  51,  51)
SNAKE_COL   = (76,  175, 80)
HEAD_COL    = (102, 187, 106)
SNAKE_DIM   = (38,  96,  44)
FOOD_COL    = (255, 87,  34)
UI_COL      = (150, 150, 170)
TEXT_COL    = (230, 230, 230)
ACCENT_COL  = (255, 228, 77)
PANEL_BG    = (14,  14,  20)
BORDER_COL  = (40,  40,  60)

# ── Gameplay ──────────────────────────────────────────────────────
START_CELL        = (200, 200)
SCORE_PER_FOOD    = 10
MAX_FOOD_ATTEMPTS = 100

# Tick interval in milliseconds per speed level (higher level = faster)
SPEED_SETTINGS = {
    1: 400,
    2: 350,
    3: 300,
    4: 250,
    5: 200,
    6: 150,
    7: 120,
    8: 100,
    9: 80,
    10: 60,
}
MIN_SPEED     = 1
MAX_SPEED     = 10
DEFAULT_SPEED = 5

# ── Input ─────────────────────────────────────────────────────────
SWIPE_THRESHOLD = 30                 # pixels a swipe must travel to count

# ── Persistence ───────────────────────────────────────────────────
HIGH_SCORE_KEY  = "snakeHighScore"
HIGH_SCORE_FILE = os.environ.get(
    "SNAKE_HIGHSCORE_FILE",
    os.path.join(os.path.expanduser("~"), ".solosnake", "highscore.json"),
)
LOG_LEVEL = os.environ.get("SNAKE_LOG_LEVEL", "WARNING")

# ── Game States ───────────────────────────────────────────────────
STATE_IDLE    = "idle"
STATE_RUNNING = "running"
STATE_PAUSED  = "paused"
STATE_OVER    = "over"

# ── Collision causes ──────────────────────────────────────────────
CAUSE_WALL = "wall"
CAUSE_SELF = "self"
