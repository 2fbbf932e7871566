
"""Piece model, shape templates, clockwise rotation"""
from dataclasses import dataclass, field
from typing import List, Tuple

COLS, ROWS = 10, 20
BLOCK = 4

# Index order is the piece type: I, O, T, J, L, S, Z
SHAPES: List[List[List[int]]] = [
    [[0,0,0,0],[1,1,1,1],[0,0,0,0],[0,0,0,0]],   # I
    [[1,1,0,0],[1,1,0,0],[0,0,0,0],[0,0,0,0]],   # O
    [[0,1,0,0],[1,1,1,0],[0,0,0,0],[0,0,0,0]],   # T
    [[1,0,0,0],[1,1,1,0],[0,0,0,0],[0,0,0,0]],   # J
    [[0,0,1,0],[1,1,1,0],[0,0,0,0],[0,0,0,0]],   # L
    [[0,1,1,0],[1,1,0,0],[0,0,0,0],[0,0,0,0]],   # S
    [[1,1,0,0],[0,1,1,0],[0,0,0,0],[0,0,0,0]],   # Z
]
NAMES = ["I", "O", "T", "J", "L", "S", "Z"]
I_PIECE, O_PIECE = 0, 1


def empty_shape() -> List[List[int]]:
    return [[0] * BLOCK for _ in range(BLOCK)]


@dataclass
class Piece:
    type: int = 0
    shape: List[List[int]] = field(default_factory=empty_shape)
    rotation: int = 0
    x: int = 0
    y: int = 0

    @staticmethod
    def from_type(t: int) -> "Piece":
        """Fresh piece of type t at the spawn position."""
        return Piece(t, [r[:] for r in SHAPES[t]], 0, spawn_x(), 0)

    def cells(self, shape=None, x=None, y=None):
        """Yield absolute (x, y) of occupied cells, optionally for another shape/position."""
        shape = self.shape if shape is None else shape
        x = self.x if x is None else x
        y = self.y if y is None else y
        for r, row in enumerate(shape):
            for c, v in enumerate(row):
                if v:
                    yield x + c, y + r


def spawn_x() -> int:
    return COLS // 2 - BLOCK // 2


def rotate_cw(m: List[List[int]]) -> List[List[int]]:
    """Clockwise 90 degrees: out[j][N-1-i] = m[i][j]."""
    n = len(m)
    out = [[0] * n for _ in range(n)]
    for i in range(n):
        for j in range(n):
            out[j][n - 1 - i] = m[i][j]
    return out


def min_xy(shape: List[List[int]]) -> Tuple[int, int]:
    """Bounding-box anchor: smallest occupied column and row."""
    min_x = min_y = BLOCK
    for i, row in enumerate(shape):
        for j, v in enumerate(row):
            if v:
                min_x = min(min_x, j)
                min_y = min(min_y, i)
    return min_x, min_y


def i_piece_nudge(rotation: int) -> Tuple[int, int]:
    """Hand-tuned (dx, dy) for the I piece, keyed on the rotation being left.

    The generic anchor keeps the top-left occupied cell fixed, which makes the
    long bar swing to one side. Alternating this shift by rotation parity keeps
    it on the same lattice column/row as before the turn.
    """
    if rotation % 2 == 0:
        return 1, -1
    return -1, 1
