from __future__ import annotations

import pytest

from retro_chess.engine.game import new_game
from retro_chess.engine.move import Move
from retro_chess.engine.perft import _child, perft
from retro_chess.engine.square import parse_square

KIWIPETE = """
r . . . k . . r
p . p p q p b .
b n . . p n p .
. . . P N . . .
. p . . P . . .
. . N . . Q . p
P P P B B P P P
R . . . K . . R
"""

POSITION_3 = """
. . . . . . . .
. . p . . . . .
. . . p . . . .
K P . . . . . r
. R . . . p . k
. . . . . . . .
. . . . P . P .
. . . . . . . .
"""


def test_perft_startpos_depths_0_3() -> None:
    s = new_game()
    assert perft(s, 0) == 1
    assert perft(s, 1) == 20
    assert perft(s, 2) == 400
    assert perft(s, 3) == 8902


def test_perft_negative_depth_rejected() -> None:
    with pytest.raises(ValueError):
        perft(new_game(), -1)


def test_perft_kiwipete_depth_2(make_state) -> None:
    # Classic Kiwipete position: castling, en passant and promotions all in reach
    s = make_state(KIWIPETE, castling="KQkq")
    assert perft(s, 1) == 48
    assert perft(s, 2) == 2039


@pytest.mark.slow
def test_perft_kiwipete_depth_3(make_state) -> None:
    s = make_state(KIWIPETE, castling="KQkq")
    assert perft(s, 3) == 97862


def test_perft_position_3(make_state) -> None:
    # Horizontal pins and en passant discovered checks along the fifth rank
    s = make_state(POSITION_3)
    assert perft(s, 1) == 14
    assert perft(s, 2) == 191
    assert perft(s, 3) == 2812


def test_child_from_empty_square_rejected() -> None:
    with pytest.raises(ValueError):
        _child(new_game(), Move(parse_square("e4"), parse_square("e5")))
