
"""
Rendering helpers for GameInfo snapshots.

- Pre-render block cell Surfaces per piece id and blit them.
- Pre-render static background (grid + panel frame) once per Dims.
- Cache HUD text surfaces; re-render only when values change.
"""
from __future__ import annotations
import pygame
from dataclasses import dataclass
from typing import Dict, Tuple, List, Optional
from tetris_layout import Dims, COLS, ROWS, BLOCK

# Colors per field value (piece type + 1): I O T J L S Z
COLORS: Dict[int, Tuple[int,int,int]] = {
    1: (102,224,255),
    2: (255,224,102),
    3: (200,119,255),
    4: (106,119,255),
    5: (255,158,94),
    6: (94,224,142),
    7: (255,102,119),
}
TEXT = (200,210,240)

@dataclass
class HudCache:
    score: int = -1
    high_score: int = -1
    level: int = -1
    speed: int = -1
    score_s: Optional[pygame.Surface] = None
    high_s: Optional[pygame.Surface] = None
    level_s: Optional[pygame.Surface] = None
    speed_s: Optional[pygame.Surface] = None
    labels: Optional[list] = None

class RenderAssets:
    """Holds all pre-rendered assets for fast blitting."""
    def __init__(self, dims: Dims, font: pygame.font.Font):
        self.dims = dims
        self.font = font
        self._make_static()
        self._make_cells()
        self.hud = HudCache()

    # ---------- Static background (grid + panel) ----------
    def _make_static(self):
        d = self.dims
        self.bg = pygame.Surface((d.total_w, d.total_h))
        self.bg.fill((10,13,34))
        grid_col = (40,50,90)
        for x in range(COLS+1):
            X = d.board_x + x*d.cell
            pygame.draw.line(self.bg, grid_col, (X, d.board_y), (X, d.board_y + d.board_h))
        for y in range(ROWS+1):
            Y = d.board_y + y*d.cell
            pygame.draw.line(self.bg, grid_col, (d.board_x, Y), (d.board_x + d.board_w, Y))
        panel_rect = pygame.Rect(d.panel_x, d.panel_y, d.panel_w, d.board_h)
        pygame.draw.rect(self.bg, (21,25,53), panel_rect)
        pygame.draw.rect(self.bg, (50,60,100), panel_rect, 1)
        frame = pygame.Rect(d.preview_x-6, d.preview_y-6, d.cell*BLOCK+12, d.cell*BLOCK+12)
        pygame.draw.rect(self.bg, (15,18,40), frame)
        pygame.draw.rect(self.bg, (55,65,110), frame, 1)

    def _make_cells(self):
        self.cell_surf: Dict[int, pygame.Surface] = {}
        c = self.dims.cell
        for v, col in COLORS.items():
            s = pygame.Surface((c-2, c-2))
            s.fill(col)
            self.cell_surf[v] = s

    def redraw_static(self, screen: pygame.Surface):
        screen.blit(self.bg, (0,0))

    # ---------- Grids ----------
    def draw_grid(self, screen: pygame.Surface, grid: List[List[int]], ox: int, oy: int):
        c = self.dims.cell
        for y, row in enumerate(grid):
            for x, v in enumerate(row):
                if v:
                    screen.blit(self.cell_surf[v], (ox + x*c + 1, oy + y*c + 1))

    def draw_field(self, screen: pygame.Surface, field: List[List[int]]):
        self.draw_grid(screen, field, self.dims.board_x, self.dims.board_y)

    def draw_next(self, screen: pygame.Surface, nxt: List[List[int]]):
        screen.blit(self.font.render("Next:", True, TEXT), (self.dims.panel_x + 12, self.dims.panel_y + 12))
        self.draw_grid(screen, nxt, self.dims.preview_x, self.dims.preview_y)

    # ---------- HUD / Panel ----------
    def draw_panel_hud(self, screen: pygame.Surface, score: int, high_score: int, level: int, speed: int):
        d = self.dims
        f = self.font
        if score != self.hud.score:
            self.hud.score = score
            self.hud.score_s = f.render(f"Score: {score}", True, TEXT)
        if high_score != self.hud.high_score:
            self.hud.high_score = high_score
            self.hud.high_s = f.render(f"High: {high_score}", True, TEXT)
        if level != self.hud.level:
            self.hud.level = level
            self.hud.level_s = f.render(f"Level: {level}", True, TEXT)
        if speed != self.hud.speed:
            self.hud.speed = speed
            self.hud.speed_s = f.render(f"Speed: {speed} ms", True, TEXT)
        y = d.preview_y + d.cell*BLOCK + 24
        for surf in (self.hud.score_s, self.hud.high_s, self.hud.level_s, self.hud.speed_s):
            screen.blit(surf, (d.panel_x + 12, y)); y += 24
        if not self.hud.labels:
            self.hud.labels = [
                f.render("Controls:", True, TEXT),
                f.render("Enter Start", True, (165,175,215)),
                f.render("←/→ Move", True, (165,175,215)),
                f.render("↓ Drop", True, (165,175,215)),
                f.render("Space Rotate", True, (165,175,215)),
                f.render("P Pause • Q Quit", True, (165,175,215)),
            ]
        y += 16
        for surf in self.hud.labels:
            screen.blit(surf, (d.panel_x + 12, y)); y += 20

    def draw(self, screen: pygame.Surface, info):
        """Full frame from a GameInfo snapshot."""
        self.redraw_static(screen)
        self.draw_field(screen, info.field)
        self.draw_next(screen, info.next)
        self.draw_panel_hud(screen, info.score, info.high_score, info.level, info.speed)
