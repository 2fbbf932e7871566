"""
Falling-block game session
==========================

The authoritative game lives in a single `Game` object. A front-end drives it
with three calls:

  • handle_input(action, hold)  – once per key event
  • tick()                      – once per frame, returns a GameInfo snapshot
  • shutdown()                  – when the window closes

-------------------------------------------------------------
STATE MACHINE
-------------------------------------------------------------

    START_WAIT ──Start──> SPAWN ──ok──> MOVING <──ok── SHIFTING
                            ^   └─no room─> GAME_OVER      │
                            │                 MOVING ─timer┘
                            └──── ATTACHING <──blocked── SHIFTING

  PAUSED is entered from MOVING with the Pause action and left the same way.
  GAME_OVER (and TERMINATED) persist the high score and report status 2.

Each tick advances at most one edge of this graph. While paused, or before the
first Start, a tick changes nothing and hands back the previous snapshot.

-------------------------------------------------------------
SNAPSHOTS
-------------------------------------------------------------

GameInfo carries fresh copies of the field (with the falling piece drawn in)
and of the 4×4 next-piece preview, so a renderer can keep or mutate them
without touching the session.
"""

from __future__ import annotations
import dataclasses
import logging
import time
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Callable, List, Optional

from tetris_board import can_place, hard_drop, merge, move_down, move_left, move_right, rotate, sweep
from tetris_config import CONFIG
from tetris_highscore import HighScoreStore
from tetris_matrix import Matrix
from tetris_piece import BLOCK, COLS, ROWS, Piece, spawn_x
from tetris_rng import PieceRandom
from tetris_score import apply_lines, speed_for

logger = logging.getLogger(__name__)

# Visible status flag (GameInfo.pause)
RUNNING, PAUSED, TERMINAL = 0, 1, 2


class UserAction(IntEnum):
    START = 0
    PAUSE = 1
    TERMINATE = 2
    LEFT = 3
    RIGHT = 4
    UP = 5
    DOWN = 6
    ACTION = 7


class GameState(Enum):
    START_WAIT = "start_wait"
    SPAWN = "spawn"
    MOVING = "moving"
    SHIFTING = "shifting"
    PAUSED = "paused"
    ATTACHING = "attaching"
    TERMINATED = "terminated"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class GameInfo:
    field: List[List[int]]
    next: List[List[int]]
    score: int
    high_score: int
    level: int
    speed: int
    pause: int


# -------------------------------------------------------------
# SESSION
# -------------------------------------------------------------

class Game:
    """One game session: field, pieces, progress and the state machine.

    `clock` returns seconds (monotonic); `seed` fixes the piece sequence.
    Both exist so tests can drive gravity and spawns deterministically.
    """

    def __init__(self, high_scores: Optional[HighScoreStore] = None,
                 seed: Optional[int] = None,
                 clock: Callable[[], float] = time.monotonic):
        self.high_scores = high_scores or HighScoreStore(CONFIG["HIGH_SCORE_PATH"])
        self.seed = seed
        self.clock = clock

        self.state = GameState.START_WAIT
        self.field: Optional[Matrix] = None
        self.next_grid: Optional[Matrix] = None
        self.render: Optional[Matrix] = None
        self.current: Optional[Piece] = None
        self.next_piece: Optional[Piece] = None
        self.rng: Optional[PieceRandom] = None

        self.score = 0
        self.high_score = 0
        self.level = 1
        self.speed = speed_for(1)
        self.pause = RUNNING
        self.started = False

        self.drop_time = 0.0
        self._paused_at = 0.0
        self._finished = False
        self._last_info: Optional[GameInfo] = None

    # ---------- lifecycle ----------
    def initialize(self) -> GameInfo:
        """Allocate grids, seed the RNG, load the high score and draw the first next piece."""
        self.rng = PieceRandom(self.seed)
        self.field = Matrix(ROWS, COLS)
        self.next_grid = Matrix(BLOCK, BLOCK)
        self.render = Matrix(ROWS, COLS)
        self.current = None
        self.started = False
        self._reset_progress()
        self.spawn(initial=True)
        self.state = GameState.START_WAIT
        self._last_info = self._build_info()
        logger.debug("Session initialized (seed=%s, high score=%d)", self.rng.initial_seed, self.high_score)
        return self._last_info

    def shutdown(self):
        """Release the grids. Safe to call more than once."""
        if self.field is None:
            return
        for m in (self.field, self.next_grid, self.render):
            m.release()
        self.field = self.next_grid = self.render = None
        logger.debug("Session shut down")

    def __enter__(self) -> "Game":
        self.initialize()
        return self

    def __exit__(self, *exc):
        self.shutdown()
        return False

    @property
    def active(self) -> bool:
        return self.field is not None

    def _reset_progress(self):
        self.score = 0
        self.level = 1
        self.speed = speed_for(self.level)
        self.pause = RUNNING
        self.high_score = self.high_scores.read()
        self._finished = False

    # ---------- spawner ----------
    def spawn(self, initial: bool = False) -> bool:
        """Initial mode fills only the next slot. Normal mode promotes next to
        current and returns False, leaving next as is, if it does not fit."""
        if initial:
            self._draw_next()
            return True
        nxt = self.next_piece
        self.current = Piece(nxt.type, [r[:] for r in nxt.shape], 0, spawn_x(), 0)
        if not can_place(self.field, self.current):
            return False
        self._draw_next()
        self.drop_time = self.clock()
        return True

    def _draw_next(self):
        self.next_piece = Piece.from_type(self.rng.next_type())
        for y in range(BLOCK):
            for x in range(BLOCK):
                self.next_grid[y][x] = self.next_piece.type + 1 if self.next_piece.shape[y][x] else 0

    # ---------- ticking ----------
    def tick(self) -> GameInfo:
        """Advance one state-machine step and return the snapshot."""
        if not self.active:
            return self._last_info
        if self.pause == PAUSED or not self.started:
            return self._frozen_info()

        st = before = self.state
        if st == GameState.START_WAIT:
            self.state = GameState.SPAWN
        elif st == GameState.SPAWN:
            if self.spawn():
                self.state = GameState.MOVING
            else:
                self.state = GameState.GAME_OVER
        elif st == GameState.MOVING:
            if self._drop_due():
                self.state = GameState.SHIFTING
        elif st == GameState.SHIFTING:
            if move_down(self.field, self.current):
                self.state = GameState.MOVING
            else:
                self.state = GameState.ATTACHING
        elif st == GameState.ATTACHING:
            merge(self.field, self.current)
            self._clear_lines()
            self.state = GameState.SPAWN
        elif st in (GameState.TERMINATED, GameState.GAME_OVER):
            self._finish()
        # PAUSED: nothing to do

        if self.state != before:
            logger.debug("State %s -> %s", before.name, self.state.name)
        self._last_info = self._build_info()
        return self._last_info

    def _drop_due(self) -> bool:
        now = self.clock()
        if (now - self.drop_time) * 1000 >= self.speed:
            self.drop_time = now
            return True
        return False

    def _clear_lines(self):
        cleared = sweep(self.field)
        if cleared:
            self.score, self.level, self.speed = apply_lines(self.score, self.level, self.speed, cleared)
            logger.debug("Cleared %d line(s); score %d, level %d", cleared, self.score, self.level)

    def _finish(self):
        """Enter the terminal status; persists the high score once per game."""
        self.pause = TERMINAL
        if self._finished:
            return
        self._finished = True
        self._save_high_score()
        logger.info("Game over: score %d, level %d", self.score, self.level)

    def _save_high_score(self):
        if self.score > self.high_score and self.high_scores.write(self.score):
            self.high_score = self.score

    # ---------- snapshots ----------
    def _build_info(self) -> GameInfo:
        self.render.copy_from(self.field)
        if self.current is not None:
            merge(self.render, self.current)
        return GameInfo(
            field=self.render.to_lists(),
            next=self.next_grid.to_lists(),
            score=self.score,
            high_score=self.high_score,
            level=self.level,
            speed=self.speed,
            pause=self.pause,
        )

    def _frozen_info(self) -> GameInfo:
        # grids stay as last built; the status flag may have moved on
        return dataclasses.replace(self._last_info, pause=self.pause, high_score=self.high_score)

    # ---------- input ----------
    def handle_input(self, action, hold: bool = False):
        """Apply one abstract action. Anything that is not a UserAction is ignored."""
        if not self.active:
            return
        try:
            action = UserAction(action)
        except ValueError:
            return

        if hold and action == UserAction.DOWN:
            if self._steerable():
                hard_drop(self.field, self.current)
            return

        if action == UserAction.START:
            self._start()
        elif action == UserAction.PAUSE:
            self._toggle_pause()
        elif action == UserAction.TERMINATE:
            self._finish()
            self.state = GameState.GAME_OVER
        elif action == UserAction.LEFT:
            if self._steerable():
                move_left(self.field, self.current)
        elif action == UserAction.RIGHT:
            if self._steerable():
                move_right(self.field, self.current)
        elif action == UserAction.ACTION:
            if self._steerable():
                rotate(self.field, self.current)
        # UP is reserved; a plain DOWN tap leaves descent to gravity

    def _steerable(self) -> bool:
        return self.state == GameState.MOVING and self.pause == RUNNING

    def _start(self):
        if self.state not in (GameState.START_WAIT, GameState.GAME_OVER):
            return
        if self.state == GameState.GAME_OVER:
            self.field.fill(0)
            self.current = None
            self._reset_progress()
            logger.info("New game (high score %d)", self.high_score)
        else:
            logger.info("Game started")
        self.started = True
        self.drop_time = self.clock()
        self.state = GameState.SPAWN

    def _toggle_pause(self):
        if self.state == GameState.PAUSED:
            self.state = GameState.MOVING
            self.pause = RUNNING
            # gravity resumes where it left off
            self.drop_time += self.clock() - self._paused_at
        elif self.state == GameState.MOVING:
            self.state = GameState.PAUSED
            self.pause = PAUSED
            self._paused_at = self.clock()
