import os
import sys
from typing import Callable, Optional

import pytest


# Ensure the repository's src/ is on sys.path for `retro_chess` imports without installing
REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
SRC_PATH = os.path.join(REPO_ROOT, "src")
SRC_PATH = os.path.abspath(SRC_PATH)
if SRC_PATH not in sys.path:
    sys.path.insert(0, SRC_PATH)

from retro_chess.engine.board import Board  # noqa: E402
from retro_chess.engine.game import setup_position  # noqa: E402
from retro_chess.engine.square import FILES, parse_square  # noqa: E402
from retro_chess.engine.state import CastlingRights, GameState  # noqa: E402


def board_from_diagram(diagram: str) -> Board:
    """Build a board from eight rows (rank 8 first), ``.`` for empty squares.

    Spaces are ignored, so ``"r . . . k . . r"`` and ``"r...k..r"`` are equal.
    """
    rows = [line.replace(" ", "") for line in diagram.strip().splitlines()]
    assert len(rows) == 8 and all(len(r) == 8 for r in rows), "diagram must be 8x8"
    placement = {}
    for r, row in enumerate(rows):
        for c, ch in enumerate(row):
            if ch != ".":
                placement[FILES[c] + str(8 - r)] = ch
    return Board.from_pieces(placement)


@pytest.fixture
def make_state() -> Callable[..., GameState]:
    def _make(
        diagram: str,
        turn: str = "w",
        castling: str = "-",
        en_passant: Optional[str] = None,
    ) -> GameState:
        return setup_position(
            board_from_diagram(diagram),
            turn=turn,
            castling=CastlingRights.from_string(castling),
            en_passant=parse_square(en_passant) if en_passant else None,
        )

    return _make
