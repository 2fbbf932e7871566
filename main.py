
import argparse
import logging
import pygame, sys
from tetris import Game, TERMINAL, UserAction
from tetris_config import CONFIG
from tetris_highscore import HighScoreStore
from tetris_input import map_event
from tetris_layout import compute_dims
from tetris_overlay import Overlay
from tetris_render import RenderAssets

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Falling-block puzzle game")
    parser.add_argument("--seed", type=int, default=CONFIG["SEED"], help="Piece sequence seed")
    parser.add_argument("--highscore", default=CONFIG["HIGH_SCORE_PATH"], help="High score file")
    parser.add_argument("--cell-size", type=int, default=CONFIG["CELL_SIZE"], help="Cell size in pixels")
    parser.add_argument("--log-level", default=CONFIG["LOG_LEVEL"], help="Logging level")
    args = parser.parse_args(argv)
    CONFIG["SEED"] = args.seed
    CONFIG["HIGH_SCORE_PATH"] = args.highscore
    CONFIG["CELL_SIZE"] = args.cell_size
    CONFIG["LOG_LEVEL"] = args.log_level.upper()
    return args


def recreate_window(dims, flags=pygame.DOUBLEBUF):
    try:
        return pygame.display.set_mode((dims.total_w, dims.total_h), flags, vsync=1)
    except TypeError:
        return pygame.display.set_mode((dims.total_w, dims.total_h), flags)


def wait_any_key(clock):
    while True:
        for e in pygame.event.get():
            if e.type in (pygame.QUIT, pygame.KEYDOWN):
                return
        clock.tick(1000 // CONFIG["TICK_MS"])


def main(argv=None):
    parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, CONFIG["LOG_LEVEL"], logging.INFO),
        format='[%(asctime)s] %(levelname)s: %(message)s'
    )

    pygame.init()
    pygame.event.set_allowed([pygame.QUIT, pygame.KEYDOWN])
    dims = compute_dims()
    screen = recreate_window(dims)
    pygame.display.set_caption("Tetris")
    font = pygame.font.SysFont(None, 22)
    big_font = pygame.font.SysFont(None, 42)
    render = RenderAssets(dims, font)
    overlay = Overlay(font, big_font)
    clock = pygame.time.Clock()

    game = Game(HighScoreStore(CONFIG["HIGH_SCORE_PATH"]), seed=CONFIG["SEED"])
    with game:
        status = 0
        while status != TERMINAL:
            for e in pygame.event.get():
                if e.type == pygame.QUIT:
                    game.handle_input(UserAction.TERMINATE)
                    continue
                action, hold = map_event(e)
                game.handle_input(action, hold)
            info = game.tick()
            status = info.pause
            render.draw(screen, info)
            overlay.draw(screen, dims, info, game.started)
            pygame.display.flip()
            clock.tick(1000 // CONFIG["TICK_MS"])
        logger.info("Final score %d (high score %d)", info.score, info.high_score)
        wait_any_key(clock)
    pygame.quit()
    return 0


if __name__ == '__main__':
    sys.exit(main())
