from __future__ import annotations

from retro_chess.engine.attacks import is_in_check
from retro_chess.engine.game import apply_move, legal_moves_from, new_game
from retro_chess.engine.move import parse_uci
from retro_chess.engine.movegen import all_legal_moves, play_on_board, pseudo_moves
from retro_chess.engine.pieces import PAWN
from retro_chess.engine.square import parse_square, square_to_algebraic


def targets(state, origin: str) -> set[str]:
    return {square_to_algebraic(m.to_sq) for m in legal_moves_from(state, parse_square(origin))}


def test_startpos_has_twenty_moves() -> None:
    state = new_game()
    moves = all_legal_moves(state)
    assert len(moves) == 20
    pawn_moves = [m for m in moves if state.board.at(m.from_sq).kind == PAWN]
    assert len(pawn_moves) == 16
    assert targets(state, "g1") == {"f3", "h3"}
    assert targets(state, "e2") == {"e3", "e4"}


def test_double_push_records_en_passant_square() -> None:
    state = new_game()
    double = next(m for m in legal_moves_from(state, parse_square("e2")) if m.to_sq == parse_square("e4"))
    single = next(m for m in legal_moves_from(state, parse_square("e2")) if m.to_sq == parse_square("e3"))
    assert double.sets_en_passant == parse_square("e3")
    assert single.sets_en_passant is None


def test_empty_and_enemy_squares_have_no_moves() -> None:
    state = new_game()
    assert legal_moves_from(state, parse_square("e4")) == []
    assert legal_moves_from(state, parse_square("e7")) == []
    assert pseudo_moves(state, parse_square("e7")) == []
    # Blocked pieces: bishop and rook have nowhere to go
    assert legal_moves_from(state, parse_square("c1")) == []
    assert legal_moves_from(state, parse_square("a1")) == []


def test_sliders_basic_moves(make_state) -> None:
    state = make_state(
        """
        . . . . k . . .
        . . . . . . . .
        . . . . . . . .
        . . . . . . . .
        . . . . . . . .
        . . . . . . . .
        . . . . . . . .
        R . B Q K . . .
        """
    )
    assert {"a2", "a8", "b1"} <= targets(state, "a1")
    assert "c1" not in targets(state, "a1")
    assert targets(state, "c1") == {"b2", "a3", "d2", "e3", "f4", "g5", "h6"}
    assert {"d2", "d8", "c2", "a4"} <= targets(state, "d1")


def test_pinned_rook_moves_only_along_pin(make_state) -> None:
    state = make_state(
        """
        . . . . r . . k
        . . . . . . . .
        . . . . . . . .
        . . . . . . . .
        . . . . . . . .
        . . . . . . . .
        . . . . R . . .
        . . . . K . . .
        """
    )
    assert targets(state, "e2") == {"e3", "e4", "e5", "e6", "e7", "e8"}


def test_pinned_knight_cannot_move(make_state) -> None:
    state = make_state(
        """
        . . . . . . . k
        . . . . . . . .
        . . . . . . . .
        . b . . . . . .
        . . . . . . . .
        . . . N . . . .
        . . . . . . . .
        . . . . . K . .
        """
    )
    assert targets(state, "d3") == set()


def test_king_cannot_step_into_attack(make_state) -> None:
    state = make_state(
        """
        . . . . k . . .
        . . . . . . . .
        . . . . . . . .
        . . . . . . . .
        . . . . . . . .
        . . . . . . . .
        . . . . . . . .
        . . . r . . . K
        """
    )
    # Rook on d1 covers the whole first rank and the d-file
    assert targets(state, "h1") == {"g2", "h2"}


def test_king_cannot_capture_protected_piece(make_state) -> None:
    state = make_state(
        """
        . . . . k . . .
        . . . . . . . .
        . . . . . . . .
        . . . . . . . .
        . . . . . . . .
        . . . . . . . b
        . . . . . . q .
        . . . . . . . K
        """
    )
    assert "g2" not in targets(state, "h1")


def test_must_answer_check(make_state) -> None:
    state = make_state(
        """
        . . . . k . . .
        . . . . . . . .
        . . . . . . . .
        . . . . . . . .
        . . . . . . . .
        . . . . . . . .
        . . . . . . . .
        r . . . K . . N
        """
    )
    # Knight on h1 cannot block or capture; only king moves off the rank remain
    assert targets(state, "h1") == set()
    assert targets(state, "e1") == {"d2", "e2", "f2"}


def test_legal_moves_never_leave_own_king_attacked() -> None:
    state = new_game()
    for uci in ("e2e4", "e7e5", "g1f3", "b8c6", "f1b5", "a7a6", "b5c6", "d7c6", "e1g1", "c8g4"):
        state = apply_move(state, parse_uci(uci))
        for m in all_legal_moves(state):
            assert not is_in_check(play_on_board(state.board, m), state.turn)
