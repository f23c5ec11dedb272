from __future__ import annotations

import logging
from dataclasses import replace
from typing import List, Optional

from .attacks import is_in_check
from .board import Board
from .errors import (
    EmptyOrEnemySquareError,
    GameOverError,
    IllegalMoveError,
    MoveError,
    PromotionRequiredError,
)
from .move import Move, MoveRequest
from .movegen import has_legal_move, home_row, legal_moves, play_on_board
from .notation import move_to_san
from .pieces import BLACK, KING, PAWN, PROMOTION_KINDS, ROOK, WHITE, opponent
from .square import Square
from .state import CHECKMATE, ONGOING, STALEMATE, CastlingRights, GameResult, GameState


logger = logging.getLogger(__name__)


def new_game() -> GameState:
    """Standard starting position, White to move, all castling rights held."""
    return setup_position(Board.startpos())


def setup_position(
    board: Board,
    turn: str = WHITE,
    castling: Optional[CastlingRights] = None,
    en_passant: Optional[Square] = None,
    halfmove_clock: int = 0,
    fullmove_number: int = 1,
) -> GameState:
    """Build a fresh state around ``board`` with its result already derived.

    Raises:
        ValueError: If either side does not have exactly one king.
    """
    for color in (WHITE, BLACK):
        kings = [sq for sq, p in board.pieces(color) if p.kind == KING]
        if len(kings) != 1:
            raise ValueError(f"{color!r} must have exactly one king")
    state = GameState(
        board=board,
        turn=turn,
        castling=castling if castling is not None else CastlingRights(),
        en_passant=en_passant,
        halfmove_clock=halfmove_clock,
        fullmove_number=fullmove_number,
    )
    return replace(state, result=compute_result(state))


def legal_moves_from(state: GameState, square: Square) -> List[Move]:
    """Legal moves for the piece on ``square``; empty for empty or enemy squares."""
    return legal_moves(state, square)


def compute_result(state: GameState) -> GameResult:
    """Derive ongoing/checkmate/stalemate for the side to move."""
    in_check = is_in_check(state.board, state.turn)
    if has_legal_move(state):
        return GameResult(status=ONGOING, in_check=in_check)
    if in_check:
        return GameResult(status=CHECKMATE, in_check=True, winner=opponent(state.turn))
    return GameResult(status=STALEMATE)


def apply_move(state: GameState, request: MoveRequest) -> GameState:
    """Validate ``request`` against ``state`` and return the next state.

    Args:
        state (GameState): Current state; never modified.
        request (MoveRequest): Origin, destination and optional promotion kind.

    Returns:
        GameState: New state with ``state`` pushed onto its history.

    Raises:
        GameOverError: The game already has a terminal result.
        EmptyOrEnemySquareError: Origin is empty or holds an opponent's piece.
        IllegalMoveError: Destination is not a legal target, or the promotion
            kind is not one of queen/rook/bishop/knight.
        PromotionRequiredError: A pawn reaches the last rank without a choice.
    """
    try:
        return _apply(state, request)
    except MoveError as e:
        logger.debug("rejected %s: %s", request.to_uci(), e.code)
        raise


def _apply(state: GameState, request: MoveRequest) -> GameState:
    if state.result.is_over:
        raise GameOverError()

    piece = state.board.at(request.from_sq)
    if piece is None or piece.color != state.turn:
        raise EmptyOrEnemySquareError()

    matched = next((m for m in legal_moves(state, request.from_sq) if m.to_sq == request.to_sq), None)
    if matched is None:
        raise IllegalMoveError()

    promotion: Optional[str] = None
    if matched.promotion_required:
        if not request.promotion:
            raise PromotionRequiredError()
        if request.promotion not in PROMOTION_KINDS:
            raise IllegalMoveError(f"invalid promotion piece: {request.promotion!r}")
        promotion = request.promotion
    move = replace(matched, promotion=promotion)

    nxt = GameState(
        board=play_on_board(state.board, move),
        turn=opponent(state.turn),
        castling=next_castling_rights(state, move),
        en_passant=move.sets_en_passant,
        halfmove_clock=0 if piece.kind == PAWN or move.capture else state.halfmove_clock + 1,
        fullmove_number=state.fullmove_number + (1 if state.turn == BLACK else 0),
        last_move=move,
        moves=state.moves,
        history=state.history + (state,),
    )
    nxt = replace(nxt, result=compute_result(nxt))
    san = move_to_san(state, move, nxt)
    nxt = replace(nxt, moves=state.moves + (san,))
    logger.debug("applied %s (%s)", san, nxt.result.status)
    return nxt


def next_castling_rights(state: GameState, move: Move) -> CastlingRights:
    """Drop rights for a king move, a rook leaving home, or a rook captured at home."""
    rights = state.castling
    board = state.board
    moved = board.at(move.from_sq)
    if moved is not None:
        if moved.kind == KING:
            rights = rights.without(moved.color)
        elif moved.kind == ROOK:
            rights = _drop_for_rook_square(rights, moved.color, move.from_sq)
    captured = board.at(move.to_sq)
    if captured is not None and captured.kind == ROOK:
        rights = _drop_for_rook_square(rights, captured.color, move.to_sq)
    return rights


def _drop_for_rook_square(rights: CastlingRights, color: str, sq: Square) -> CastlingRights:
    if sq.row != home_row(color):
        return rights
    if sq.col == 7:
        return rights.without(color, king_side=True)
    if sq.col == 0:
        return rights.without(color, king_side=False)
    return rights


def undo(state: GameState) -> GameState:
    """Return the previous snapshot, or ``state`` itself when there is no history."""
    if not state.history:
        return state
    return state.history[-1]
