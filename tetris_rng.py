
"""Uniform piece randomizer, seeded once per game"""
import random
import time
from typing import Optional

from tetris_piece import SHAPES


def clock_seed() -> int:
    """Wall-clock seed: seconds XOR nanoseconds, mixed with calendar seconds."""
    ns = time.time_ns()
    sec, nsec = divmod(ns, 1_000_000_000)
    return ((sec ^ nsec) + int(time.time())) & 0xFFFFFFFF


class PieceRandom:
    def __init__(self, seed: Optional[int] = None):
        self.seed(seed)

    def seed(self, seed: Optional[int] = None):
        if seed is None:
            seed = clock_seed()
        self.initial_seed = seed
        self._rng = random.Random(seed)

    def next_type(self) -> int:
        return self._rng.randrange(len(SHAPES))
