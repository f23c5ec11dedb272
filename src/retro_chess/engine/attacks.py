from __future__ import annotations

from typing import List, Tuple

from .board import Board
from .pieces import BISHOP, KING, KNIGHT, PAWN, QUEEN, ROOK, WHITE, Piece, opponent
from .square import Square


Offsets = Tuple[Tuple[int, int], ...]

KNIGHT_OFFSETS: Offsets = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)
KING_OFFSETS: Offsets = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)
DIAGONALS: Offsets = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ORTHOGONALS: Offsets = ((-1, 0), (1, 0), (0, -1), (0, 1))

SLIDER_DIRECTIONS = {
    BISHOP: DIAGONALS,
    ROOK: ORTHOGONALS,
    QUEEN: DIAGONALS + ORTHOGONALS,
}


def pawn_direction(color: str) -> int:
    """Row step toward the opponent: white moves up the board (row - 1)."""
    return -1 if color == WHITE else 1


def step_targets(origin: Square, offsets: Offsets) -> List[Square]:
    """Squares one offset away from ``origin``, clipped to the board."""
    targets = []
    for dr, dc in offsets:
        sq = origin.offset(dr, dc)
        if sq is not None:
            targets.append(sq)
    return targets


def ray_targets(board: Board, origin: Square, directions: Offsets) -> List[Square]:
    """Cast rays until the edge or the first occupied square (which is included)."""
    targets = []
    for dr, dc in directions:
        sq = origin.offset(dr, dc)
        while sq is not None:
            targets.append(sq)
            if not board.is_empty(sq):
                break
            sq = sq.offset(dr, dc)
    return targets


def pawn_attack_targets(origin: Square, color: str) -> List[Square]:
    d = pawn_direction(color)
    return step_targets(origin, ((d, -1), (d, 1)))


def attacked_squares(board: Board, origin: Square, piece: Piece) -> List[Square]:
    """Squares ``piece`` standing on ``origin`` reaches by its raw movement rule.

    Occupants of the reached squares are not inspected: a friendly piece at the
    end of a ray still counts as attacked.
    """
    if piece.kind == PAWN:
        return pawn_attack_targets(origin, piece.color)
    if piece.kind == KNIGHT:
        return step_targets(origin, KNIGHT_OFFSETS)
    if piece.kind == KING:
        return step_targets(origin, KING_OFFSETS)
    return ray_targets(board, origin, SLIDER_DIRECTIONS[piece.kind])


def is_square_attacked(board: Board, target: Square, attacker_color: str) -> bool:
    """Return True if any ``attacker_color`` piece reaches ``target``.

    Pins and side to move are ignored. The whole board is scanned on each call.
    """
    for origin, piece in board.pieces(attacker_color):
        if target in attacked_squares(board, origin, piece):
            return True
    return False


def is_in_check(board: Board, color: str) -> bool:
    king = board.king_square(color)
    if king is None:
        return False
    return is_square_attacked(board, king, opponent(color))

