from __future__ import annotations

from dataclasses import replace

from .game import next_castling_rights
from .move import Move
from .movegen import all_legal_moves, play_on_board
from .pieces import BLACK, PAWN, PROMOTION_KINDS, opponent
from .state import GameState


def perft(state: GameState, depth: int) -> int:
    """Count leaf nodes of the legal move tree below ``state``.

    Definition:
    - depth == 0 returns 1 (the current node).
    - depth > 0 returns the sum over all legal child positions' perft(depth-1).
    - A promotion counts once per promotion kind.

    Children are built without notation or result bookkeeping; only the
    fields move generation reads are carried forward.
    """
    if depth < 0:
        raise ValueError("depth must be >= 0")
    if depth == 0:
        return 1

    nodes = 0
    for m in all_legal_moves(state):
        if m.promotion_required:
            if depth == 1:
                nodes += len(PROMOTION_KINDS)
                continue
            for kind in PROMOTION_KINDS:
                nodes += perft(_child(state, replace(m, promotion=kind)), depth - 1)
        elif depth == 1:
            nodes += 1
        else:
            nodes += perft(_child(state, m), depth - 1)
    return nodes


def _child(state: GameState, move: Move) -> GameState:
    piece = state.board.at(move.from_sq)
    if piece is None:
        raise ValueError(f"no piece on {move.from_sq}")
    return GameState(
        board=play_on_board(state.board, move),
        turn=opponent(state.turn),
        castling=next_castling_rights(state, move),
        en_passant=move.sets_en_passant,
        halfmove_clock=0 if piece.kind == PAWN or move.capture else state.halfmove_clock + 1,
        fullmove_number=state.fullmove_number + (1 if state.turn == BLACK else 0),
    )
