"""
view.py — View layer.

Draws one frame from a GameSnapshot: grid, snake, food, HUD panel and the
idle / paused / game-over overlays.  Never mutates game state; the only
thing it reports back is which HUD button or speed pip sits under a click.

Public API:
    GameView(screen)         — bind to a pygame surface
    view.render(snapshot)    — draw the current frame
    view.button_at(pos)      — "pause", "restart" or None
    view.speed_at(pos)       — speed level of the pip under pos, or None
"""

import pygame

from .config import (
    WIDTH, PANEL_H, GAME_W, GAME_H,
    OFFSET_X, OFFSET_Y, GRID,
    BG, GRID_COL, SNAKE_COL, HEAD_COL, SNAKE_DIM, FOOD_COL,
    UI_COL, TEXT_COL, ACCENT_COL, PANEL_BG, BORDER_COL,
    MAX_SPEED, CAUSE_WALL,
    STATE_IDLE, STATE_PAUSED, STATE_OVER,
)
from .model import GameSnapshot

BUTTON_W, BUTTON_H = 84, 24
PIP_SPACING, PIP_Y = 9, 46


# ─────────────────────── colour helpers ──────────────────────────
def _lerp_color(c1: tuple, c2: tuple, t: float) -> tuple:
    t = max(0.0, min(1.0, t))
    return tuple(int(c1[i] + (c2[i] - c1[i]) * t) for i in range(3))


def _with_alpha(color: tuple, alpha: int) -> tuple:
    return (*color[:3], max(0, min(255, alpha)))


def _brighten(color: tuple, factor: float) -> tuple:
    return tuple(min(255, int(c * factor)) for c in color[:3])


# ─────────────────────────── GameView ────────────────────────────
class GameView:
    """Renders the complete game frame from a GameSnapshot."""

    # ── Construction ─────────────────────────────────────────────
    def __init__(self, screen: pygame.Surface):
        self.screen = screen
        self._init_fonts()
        self._build_static_surfaces()
        right = WIDTH - OFFSET_X
        self.buttons = {
            "pause":   pygame.Rect(right - 2 * BUTTON_W - 8, 10, BUTTON_W, BUTTON_H),
            "restart": pygame.Rect(right - BUTTON_W, 10, BUTTON_W, BUTTON_H),
        }
        # Hit boxes for the speed pips, one per level, left to right
        pip_x = self.buttons["pause"].x + 4
        self.speed_pips = {
            level: pygame.Rect(pip_x + (level - 1) * PIP_SPACING - PIP_SPACING // 2,
                               PIP_Y - 6, PIP_SPACING, 12)
            for level in range(1, MAX_SPEED + 1)
        }

    # ── Main entry ───────────────────────────────────────────────
    def render(self, snap: GameSnapshot) -> None:
        self.screen.fill(BG)
        self.screen.blit(self._grid_surf, (OFFSET_X, OFFSET_Y))

        if snap.food is not None:
            self._draw_food(snap.food)
        self._draw_snake(snap)

        self._draw_border()
        self._draw_panel(snap)

        if snap.state == STATE_IDLE:
            self._draw_idle_hint()
        elif snap.state == STATE_PAUSED:
            self._draw_paused_overlay()
        elif snap.state == STATE_OVER:
            self._draw_game_over_overlay(snap)

        pygame.display.flip()

    def button_at(self, pos: tuple[int, int]) -> str | None:
        for name, rect in self.buttons.items():
            if rect.collidepoint(pos):
                return name
        return None

    def speed_at(self, pos: tuple[int, int]) -> int | None:
        for level, rect in self.speed_pips.items():
            if rect.collidepoint(pos):
                return level
        return None

    # ── Static surface pre-builds ─────────────────────────────────
    def _build_static_surfaces(self) -> None:
        self._grid_surf = pygame.Surface((GAME_W, GAME_H), pygame.SRCALPHA)
        for x in range(0, GAME_W + 1, GRID):
            pygame.draw.line(self._grid_surf, (*GRID_COL, 200), (x, 0), (x, GAME_H))
        for y in range(0, GAME_H + 1, GRID):
            pygame.draw.line(self._grid_surf, (*GRID_COL, 200), (0, y), (GAME_W, y))

    # ── Cells ────────────────────────────────────────────────────
    @staticmethod
    def _cell_rect(cell: tuple[int, int], inset: int = 1) -> pygame.Rect:
        x, y = cell
        return pygame.Rect(OFFSET_X + x + inset, OFFSET_Y + y + inset,
                           GRID - 2 * inset, GRID - 2 * inset)

    def _draw_food(self, food: tuple[int, int]) -> None:
        rect = self._cell_rect(food)
        pygame.draw.rect(self.screen, FOOD_COL, rect, border_radius=GRID // 4)
        pygame.draw.rect(self.screen, _brighten(FOOD_COL, 1.3),
                         (rect.x + 3, rect.y + 3, rect.w // 3, rect.h // 3),
                         border_radius=2)

    def _draw_snake(self, snap: GameSnapshot) -> None:
        length = len(snap.snake)
        for i, cell in enumerate(snap.snake):
            rect = self._cell_rect(cell)
            if i == 0:
                pygame.draw.rect(self.screen, HEAD_COL, rect, border_radius=GRID // 3)
                hi = pygame.Rect(rect.x + 3, rect.y + 3, rect.w - 6, max(2, rect.h // 4))
                pygame.draw.rect(self.screen, _brighten(HEAD_COL, 1.4), hi, border_radius=2)
                continue
            # Body fades from the neck towards the tail
            t = 1.0 - (i / max(length - 1, 1)) * 0.6
            color = _lerp_color(SNAKE_DIM, SNAKE_COL, t)
            pygame.draw.rect(self.screen, color, rect, border_radius=GRID // 5)

    # ── Border ───────────────────────────────────────────────────
    def _draw_border(self) -> None:
        pygame.draw.rect(self.screen, BORDER_COL,
                         (OFFSET_X - 1, OFFSET_Y - 1, GAME_W + 2, GAME_H + 2), 1)

    # ── HUD Panel ─────────────────────────────────────────────────
    def _draw_panel(self, snap: GameSnapshot) -> None:
        pygame.draw.rect(self.screen, PANEL_BG, (0, 0, WIDTH, PANEL_H))
        pygame.draw.line(self.screen, BORDER_COL,
                         (0, PANEL_H - 1), (WIDTH, PANEL_H - 1), 1)

        self.screen.blit(self.font_small.render("SCORE", True, UI_COL), (16, 8))
        self.screen.blit(self.font_big.render(str(snap.score), True, SNAKE_COL), (16, 24))

        self.screen.blit(self.font_small.render("BEST", True, UI_COL), (110, 8))
        best_col = ACCENT_COL if snap.new_high_score else TEXT_COL
        self.screen.blit(self.font_big.render(str(snap.high_score), True, best_col), (110, 24))

        pause_label = "RESUME" if snap.state == STATE_PAUSED else "PAUSE"
        self._draw_button(self.buttons["pause"], pause_label, ACCENT_COL)
        self._draw_button(self.buttons["restart"], "RESTART", SNAKE_COL)

        self._draw_speed_pips(snap.speed_level)
        label = self.font_tiny.render(
            f"SPEED {snap.speed_level}  {snap.interval} ms", True, UI_COL)
        self.screen.blit(label, (self.buttons["pause"].x + 4, PIP_Y + 8))

    def _draw_speed_pips(self, active: int) -> None:
        """One clickable pip per speed level; filled up to the active one."""
        for level, rect in self.speed_pips.items():
            px, y = rect.center
            if level <= active:
                c = _lerp_color(SNAKE_COL, FOOD_COL, (level - 1) / (MAX_SPEED - 1))
                pygame.draw.circle(self.screen, c, (px, y), 3)
            else:
                pygame.draw.circle(self.screen, _lerp_color(UI_COL, BG, 0.5), (px, y), 2)

    def _draw_button(self, rect: pygame.Rect, label: str, color: tuple) -> None:
        bg = pygame.Surface(rect.size, pygame.SRCALPHA)
        bg.fill(_with_alpha(color, 28))
        self.screen.blit(bg, rect.topleft)
        pygame.draw.rect(self.screen, color, rect, 1, border_radius=4)
        txt = self.font_small.render(label, True, color)
        self.screen.blit(txt, txt.get_rect(center=rect.center))

    # ── Overlay infrastructure ────────────────────────────────────
    def _draw_overlay_base(self) -> None:
        surf = pygame.Surface((GAME_W, GAME_H), pygame.SRCALPHA)
        surf.fill((5, 5, 12, 200))
        self.screen.blit(surf, (OFFSET_X, OFFSET_Y))

    def _draw_text_line(self, text: str, color: tuple,
                        cy: int, font: pygame.font.Font) -> int:
        surf = font.render(text, True, color)
        self.screen.blit(surf, surf.get_rect(center=(WIDTH // 2, cy)))
        return cy + surf.get_height() + 8

    # ── State overlays ────────────────────────────────────────────
    def _draw_idle_hint(self) -> None:
        cy = OFFSET_Y + GAME_H - 60
        cy = self._draw_text_line("ARROWS OR SWIPE TO START", TEXT_COL, cy, self.font_med)
        self._draw_text_line("SPACE PAUSE   R RESTART   1-0 SPEED", UI_COL, cy, self.font_tiny)

    def _draw_paused_overlay(self) -> None:
        self._draw_overlay_base()
        cy = OFFSET_Y + GAME_H // 2 - 30
        cy = self._draw_text_line("PAUSED", ACCENT_COL, cy, self.font_title)
        self._draw_text_line("PRESS SPACE TO RESUME", UI_COL, cy, self.font_med)

    def _draw_game_over_overlay(self, snap: GameSnapshot) -> None:
        self._draw_overlay_base()
        cy = OFFSET_Y + GAME_H // 2 - 80
        cy = self._draw_text_line("GAME OVER", FOOD_COL, cy, self.font_title)
        reason = "HIT THE WALL" if snap.cause == CAUSE_WALL else "BIT YOURSELF"
        cy = self._draw_text_line(reason, UI_COL, cy, self.font_small)
        cy += 6
        cy = self._draw_text_line(f"FINAL SCORE  {snap.score}", TEXT_COL, cy, self.font_med)
        if snap.new_high_score:
            cy = self._draw_text_line("NEW HIGH SCORE", ACCENT_COL, cy, self.font_small)
        else:
            cy = self._draw_text_line(f"BEST {snap.high_score}", UI_COL, cy, self.font_small)
        cy += 6
        self._draw_text_line("PRESS R TO PLAY AGAIN", SNAKE_COL, cy, self.font_med)

    # ── Font init ─────────────────────────────────────────────────
    def _init_fonts(self) -> None:
        specs = [
            ("font_title", "courier", 40, True),
            ("font_big",   "courier", 24, True),
            ("font_med",   "courier", 16, False),
            ("font_small", "courier", 13, True),
            ("font_tiny",  "courier", 11, False),
        ]
        for attr, name, size, bold in specs:
            try:
                setattr(self, attr, pygame.font.SysFont(name, size, bold=bold))
            except (pygame.error, OSError):
                setattr(self, attr, pygame.font.SysFont(None, size))
