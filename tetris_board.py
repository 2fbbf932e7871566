
"""Board helpers: placement, moves, rotation, fix, sweep"""
from tetris_matrix import Matrix
from tetris_piece import Piece, O_PIECE, I_PIECE, rotate_cw, min_xy, i_piece_nudge


def _fits(field: Matrix, piece: Piece, shape=None, x=None, y=None) -> bool:
    for bx, by in piece.cells(shape, x, y):
        if not field.in_bounds(bx, by) or field[by][bx]:
            return False
    return True


def can_place(field: Matrix, piece: Piece) -> bool:
    """True if every occupied cell is on the board and over an empty cell."""
    return _fits(field, piece)


def _shift(field: Matrix, piece: Piece, dx: int, dy: int) -> bool:
    nx, ny = piece.x + dx, piece.y + dy
    if not _fits(field, piece, x=nx, y=ny):
        return False
    piece.x, piece.y = nx, ny
    return True


def move_left(field: Matrix, piece: Piece) -> bool:
    return _shift(field, piece, -1, 0)


def move_right(field: Matrix, piece: Piece) -> bool:
    return _shift(field, piece, 1, 0)


def move_down(field: Matrix, piece: Piece) -> bool:
    return _shift(field, piece, 0, 1)


def hard_drop(field: Matrix, piece: Piece) -> int:
    """Move down until blocked; return rows fallen."""
    n = 0
    while move_down(field, piece):
        n += 1
    return n


def can_rotate(field: Matrix, piece: Piece) -> bool:
    """Cheap precheck: the rotated template at the unadjusted position fits."""
    return _fits(field, piece, shape=rotate_cw(piece.shape))


def rotate(field: Matrix, piece: Piece) -> bool:
    """Rotate clockwise in place. On failure the piece is left untouched."""
    if piece.type == O_PIECE:
        return True
    if not can_rotate(field, piece):
        return False

    old_shape, old_x, old_y = piece.shape, piece.x, piece.y
    new_shape = rotate_cw(old_shape)
    old_mx, old_my = min_xy(old_shape)
    new_mx, new_my = min_xy(new_shape)

    piece.shape = new_shape
    piece.x = old_x + old_mx - new_mx
    piece.y = old_y + old_my - new_my
    if piece.type == I_PIECE:
        dx, dy = i_piece_nudge(piece.rotation)
        piece.x += dx; piece.y += dy

    if not can_place(field, piece):
        piece.shape, piece.x, piece.y = old_shape, old_x, old_y
        return False
    piece.rotation = (piece.rotation + 1) % 4
    return True


def merge(field: Matrix, piece: Piece):
    """Write the piece into the field as type+1 (cells off the board are dropped)."""
    for bx, by in piece.cells():
        if field.in_bounds(bx, by):
            field[by][bx] = piece.type + 1


def sweep(field: Matrix) -> int:
    """Clear full rows bottom-up and return how many were cleared."""
    c = 0; y = field.rows - 1
    while y >= 0:
        if field.is_row_full(y):
            field.clear_row(y)
            field.collapse_onto(y)
            c += 1
        else:
            y -= 1
    return c
