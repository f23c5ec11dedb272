from __future__ import annotations

from typing import Dict, List, Optional

from .attacks import (
    KING_OFFSETS,
    KNIGHT_OFFSETS,
    SLIDER_DIRECTIONS,
    is_in_check,
    is_square_attacked,
    pawn_attack_targets,
    pawn_direction,
    ray_targets,
    step_targets,
)
from .board import Board
from .move import Move
from .pieces import KING, KNIGHT, PAWN, ROOK, WHITE, Piece, opponent
from .square import Square
from .state import GameState


def home_row(color: str) -> int:
    return 7 if color == WHITE else 0


def pawn_start_row(color: str) -> int:
    return 6 if color == WHITE else 1


def promotion_row(color: str) -> int:
    return 0 if color == WHITE else 7


# (king destination col, step col, rook home col, rook destination col, cols that must be empty)
_CASTLE_SIDES = {
    True: (6, 5, 7, 5, (5, 6)),
    False: (2, 3, 0, 3, (1, 2, 3)),
}


def pseudo_moves(state: GameState, from_sq: Square) -> List[Move]:
    """Return candidate moves for the piece on ``from_sq``, ignoring self-check.

    Returns:
        List[Move]: Empty when the square is empty or holds a piece that does
            not belong to the side to move.
    """
    board = state.board
    piece = board.at(from_sq)
    if piece is None or piece.color != state.turn:
        return []
    if piece.kind == PAWN:
        return _pawn_moves(state, from_sq, piece.color)

    if piece.kind == KNIGHT:
        targets = step_targets(from_sq, KNIGHT_OFFSETS)
    elif piece.kind == KING:
        targets = step_targets(from_sq, KING_OFFSETS)
    else:
        targets = ray_targets(board, from_sq, SLIDER_DIRECTIONS[piece.kind])

    moves = [
        Move(from_sq, to, capture=board.is_enemy(to, piece.color))
        for to in targets
        if not _is_friendly(board, to, piece.color)
    ]
    if piece.kind == KING:
        moves.extend(_castling_moves(state, from_sq, piece.color))
    return moves


def _is_friendly(board: Board, sq: Square, color: str) -> bool:
    occupant = board.at(sq)
    return occupant is not None and occupant.color == color


def _pawn_moves(state: GameState, from_sq: Square, color: str) -> List[Move]:
    board = state.board
    d = pawn_direction(color)
    last_row = promotion_row(color)
    moves: List[Move] = []

    one = from_sq.offset(d, 0)
    if one is not None and board.is_empty(one):
        moves.append(Move(from_sq, one, promotion_required=one.row == last_row))
        two = from_sq.offset(2 * d, 0)
        if from_sq.row == pawn_start_row(color) and two is not None and board.is_empty(two):
            moves.append(Move(from_sq, two, sets_en_passant=one))

    for to in pawn_attack_targets(from_sq, color):
        if board.is_enemy(to, color):
            moves.append(Move(from_sq, to, capture=True, promotion_required=to.row == last_row))

    ep = state.en_passant
    if ep is not None and ep.row == from_sq.row + d and abs(ep.col - from_sq.col) == 1:
        victim = board.at(Square(from_sq.row, ep.col))
        if victim is not None and victim.color != color and victim.kind == PAWN:
            moves.append(Move(from_sq, ep, capture=True, en_passant=True))
    return moves


def _castling_moves(state: GameState, from_sq: Square, color: str) -> List[Move]:
    board = state.board
    row = home_row(color)
    if from_sq != Square(row, 4) or is_in_check(board, color):
        return []
    enemy = opponent(color)
    moves: List[Move] = []
    for king_side in (True, False):
        if not state.castling.has(color, king_side):
            continue
        king_to, step, rook_home, rook_to, between = _CASTLE_SIDES[king_side]
        rook = board.at(Square(row, rook_home))
        if rook != Piece(color, ROOK):
            continue
        if any(not board.is_empty(Square(row, c)) for c in between):
            continue
        if is_square_attacked(board, Square(row, step), enemy):
            continue
        if is_square_attacked(board, Square(row, king_to), enemy):
            continue
        moves.append(
            Move(
                from_sq,
                Square(row, king_to),
                castle=True,
                rook_from=Square(row, rook_home),
                rook_to=Square(row, rook_to),
            )
        )
    return moves


def play_on_board(board: Board, move: Move, promotion: Optional[str] = None) -> Board:
    """Return the board after ``move``, including its side effects.

    Clears the origin, removes an en-passant victim, slides the castling rook
    and substitutes the promotion kind when one is given.
    """
    piece = board.at(move.from_sq)
    if piece is None:
        raise ValueError(f"no piece on {move.from_sq}")
    changes: Dict[Square, Optional[Piece]] = {move.from_sq: None}
    if move.en_passant:
        changes[Square(move.from_sq.row, move.to_sq.col)] = None
    if move.castle and move.rook_from is not None and move.rook_to is not None:
        changes[move.rook_to] = board.at(move.rook_from)
        changes[move.rook_from] = None
    kind = promotion or move.promotion
    changes[move.to_sq] = Piece(piece.color, kind) if kind else piece
    return board.with_changes(changes)


def legal_moves(state: GameState, from_sq: Square) -> List[Move]:
    """Filter :func:`pseudo_moves` to those that keep the mover's king safe.

    Each candidate is played on a scratch board; this one check covers pins,
    discovered checks and moving into check.
    """
    color = state.turn
    return [
        m
        for m in pseudo_moves(state, from_sq)
        if not is_in_check(play_on_board(state.board, m), color)
    ]


def all_legal_moves(state: GameState) -> List[Move]:
    moves: List[Move] = []
    for sq, _ in state.board.pieces(state.turn):
        moves.extend(legal_moves(state, sq))
    return moves


def has_legal_move(state: GameState) -> bool:
    """True as soon as any piece of the side to move has a legal move."""
    return any(legal_moves(state, sq) for sq, _ in state.board.pieces(state.turn))
