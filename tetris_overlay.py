
"""Status banners drawn over the board: start prompt, pause, game over"""
import pygame
from tetris import PAUSED, TERMINAL

class Overlay:
    def __init__(self, font, big_font):
        self.font = font
        self.big_font = big_font

    def _banner(self, screen, rect, lines):
        s = pygame.Surface(rect.size, pygame.SRCALPHA); s.fill((20,25,40,230))
        screen.blit(s, rect.topleft)
        y = rect.y + 16
        for f, txt, col in lines:
            surf = f.render(txt, True, col)
            screen.blit(surf, surf.get_rect(midtop=(rect.centerx, y))); y += surf.get_height() + 10

    def draw(self, screen, dims, info, started: bool):
        box = pygame.Rect(dims.board_x + 8, dims.board_y + dims.board_h//2 - 60, dims.board_w - 16, 120)
        if info.pause == TERMINAL:
            self._banner(screen, box.inflate(0, 40), [
                (self.big_font, "GAME OVER", (255,220,220)),
                (self.font, f"Score: {info.score}", (220,230,255)),
                (self.font, f"Level: {info.level}", (220,230,255)),
                (self.font, "Press any key", (200,210,235)),
            ])
        elif info.pause == PAUSED:
            self._banner(screen, box, [(self.big_font, "PAUSE", (220,240,255))])
        elif not started:
            self._banner(screen, box, [
                (self.big_font, "TETRIS", (230,240,255)),
                (self.font, "Press Enter to start", (200,210,235)),
            ])
