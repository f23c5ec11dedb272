from __future__ import annotations

from .move import Move
from .pieces import PAWN
from .square import FILES, square_to_algebraic
from .state import CHECKMATE, GameState


def move_to_san(prev: GameState, move: Move, nxt: GameState) -> str:
    """Render ``move`` in short algebraic notation.

    Args:
        prev (GameState): State the move was played from.
        move (Move): The applied move, with its promotion choice filled in.
        nxt (GameState): State after the move, with its result computed.

    Returns:
        str: e.g. ``"Nf3"``, ``"exd6"``, ``"bxa8=Q+"``, ``"O-O"``, ``"Qh4#"``.

    Notes:
        No disambiguation is added when two pieces of the same kind can reach
        the destination, so ``"Nd2"`` may be ambiguous.
    """
    # Castling carries no check suffix.
    if move.castle:
        return "O-O" if move.to_sq.col == 6 else "O-O-O"

    piece = prev.board.at(move.from_sq)
    if piece is None:
        raise ValueError(f"no piece on {move.from_sq}")
    is_capture = prev.board.at(move.to_sq) is not None or move.en_passant
    text = "" if piece.kind == PAWN else piece.kind.upper()
    if piece.kind == PAWN and is_capture:
        text += FILES[move.from_sq.col]
    if is_capture:
        text += "x"
    text += square_to_algebraic(move.to_sq)
    if move.promotion:
        text += "=" + move.promotion.upper()

    if nxt.result.status == CHECKMATE:
        text += "#"
    elif nxt.result.in_check:
        text += "+"
    return text
