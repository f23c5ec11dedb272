from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .pieces import PROMOTION_KINDS
from .square import Square, parse_square, square_to_algebraic


@dataclass(frozen=True)
class MoveRequest:
    """What a caller asks for: origin, destination, optional promotion kind.

    Attributes:
        from_sq (Square): Origin square.
        to_sq (Square): Destination square.
        promotion (Optional[str]): Lowercase promotion kind (``"q" "r" "b" "n"``).
    """

    from_sq: Square
    to_sq: Square
    promotion: Optional[str] = None

    def to_uci(self) -> str:
        """Serialize the request into long algebraic form like ``"e2e4"`` or ``"e7e8q"``."""
        return square_to_algebraic(self.from_sq) + square_to_algebraic(self.to_sq) + (self.promotion or "")


@dataclass(frozen=True)
class Move:
    """A generated candidate move with its derived flags.

    Attributes:
        from_sq (Square): Origin square.
        to_sq (Square): Destination square.
        promotion (Optional[str]): Promotion kind once a choice has been made.
        capture (bool): Destination holds an enemy piece, or the move is en passant.
        en_passant (bool): Captures the pawn beside the origin, on the destination file.
        castle (bool): King move of two files; ``rook_from``/``rook_to`` are set.
        rook_from (Optional[Square]): Castling rook origin.
        rook_to (Optional[Square]): Castling rook destination.
        promotion_required (bool): Pawn lands on the far rank and needs a kind.
        sets_en_passant (Optional[Square]): For a double pawn push, the square it skips.
    """

    from_sq: Square
    to_sq: Square
    promotion: Optional[str] = None
    capture: bool = False
    en_passant: bool = False
    castle: bool = False
    rook_from: Optional[Square] = None
    rook_to: Optional[Square] = None
    promotion_required: bool = False
    sets_en_passant: Optional[Square] = None

    def to_uci(self) -> str:
        return square_to_algebraic(self.from_sq) + square_to_algebraic(self.to_sq) + (self.promotion or "")


def parse_uci(uci: str) -> MoveRequest:
    """Parse a long algebraic move string.

    Args:
        uci (str): Move such as ``"e2e4"`` or ``"b7a8q"``.

    Returns:
        MoveRequest: Parsed request.

    Raises:
        ValueError: If the string has an invalid length, squares, or promotion
            piece.
    """
    if len(uci) not in (4, 5):
        raise ValueError(f"invalid move length: {uci!r}")
    from_sq = parse_square(uci[0:2])
    to_sq = parse_square(uci[2:4])
    promo: Optional[str] = None
    if len(uci) == 5:
        promo = uci[4].lower()
        if promo not in PROMOTION_KINDS:
            raise ValueError(f"invalid promotion piece: {promo!r}")
    return MoveRequest(from_sq, to_sq, promo)
