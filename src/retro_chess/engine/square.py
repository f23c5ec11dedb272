from __future__ import annotations

from typing import NamedTuple, Optional


FILES = "abcdefgh"


class Square(NamedTuple):
    """Board coordinate.

    Attributes:
        row (int): 0..7, row 0 is rank 8.
        col (int): 0..7, column 0 is file a.
    """

    row: int
    col: int

    def offset(self, dr: int, dc: int) -> Optional["Square"]:
        """Return the square ``(row + dr, col + dc)`` or ``None`` when off the board."""
        r, c = self.row + dr, self.col + dc
        if in_bounds(r, c):
            return Square(r, c)
        return None

    def __str__(self) -> str:
        return square_to_algebraic(self)


def in_bounds(row: int, col: int) -> bool:
    return 0 <= row < 8 and 0 <= col < 8


def square_to_algebraic(sq: Square) -> str:
    """Convert a square into algebraic notation such as ``"e4"``."""
    return FILES[sq.col] + str(8 - sq.row)


def algebraic_to_square(text: str) -> Optional[Square]:
    """Parse algebraic notation.

    Args:
        text (str): Square name such as ``"e4"``.

    Returns:
        Optional[Square]: The square, or ``None`` for anything that does not
            match ``[a-h][1-8]``.
    """
    if not isinstance(text, str) or len(text) != 2:
        return None
    file, rank = text[0], text[1]
    if file not in FILES or rank not in "12345678":
        return None
    return Square(8 - int(rank), FILES.index(file))


def parse_square(text: str) -> Square:
    """Like :func:`algebraic_to_square` but raises ``ValueError`` on bad input."""
    sq = algebraic_to_square(text)
    if sq is None:
        raise ValueError(f"invalid square: {text!r}")
    return sq


def square_to_index(sq: Square) -> int:
    """Row-major linear index, a8 = 0 .. h1 = 63."""
    return sq.row * 8 + sq.col


def index_to_square(idx: int) -> Square:
    if idx < 0 or idx > 63:
        raise ValueError(f"invalid square index: {idx}")
    return Square(idx // 8, idx % 8)


ALL_SQUARES = tuple(Square(r, c) for r in range(8) for c in range(8))
