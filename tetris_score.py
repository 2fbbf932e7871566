
"""Line-clear scoring, level and speed curves"""
from typing import Tuple

SCORE_TABLE = {1: 100, 2: 300, 3: 700, 4: 1500}
SCORE_PER_LEVEL = 600
MAX_LEVEL = 10
BASE_SPEED_MS = 1000
SPEED_STEP_MS = 100
MIN_SPEED_MS = 100


def points_for(lines: int) -> int:
    if lines <= 0:
        return 0
    # a single piece spans at most four rows, so >4 never happens in play
    return SCORE_TABLE.get(lines, SCORE_TABLE[4])


def level_for(score: int) -> int:
    return min(score // SCORE_PER_LEVEL + 1, MAX_LEVEL)


def speed_for(level: int) -> int:
    return max(MIN_SPEED_MS, BASE_SPEED_MS - (level - 1) * SPEED_STEP_MS)


def apply_lines(score: int, level: int, speed: int, lines: int) -> Tuple[int, int, int]:
    """Return (score, level, speed) after clearing `lines` rows in one tick.

    Speed is only recomputed when the level actually changes.
    """
    if lines <= 0:
        return score, level, speed
    score += points_for(lines)
    new_level = level_for(score)
    if new_level != level:
        level = new_level
        speed = speed_for(level)
    return score, level, speed
