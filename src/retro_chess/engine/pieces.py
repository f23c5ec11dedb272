from __future__ import annotations

from dataclasses import dataclass


WHITE, BLACK = "w", "b"
COLORS = (WHITE, BLACK)

PAWN, KNIGHT, BISHOP, ROOK, QUEEN, KING = "p", "n", "b", "r", "q", "k"
KINDS = (PAWN, KNIGHT, BISHOP, ROOK, QUEEN, KING)
PROMOTION_KINDS = (QUEEN, ROOK, BISHOP, KNIGHT)

PIECE_VALUES = {PAWN: 1, KNIGHT: 3, BISHOP: 3, ROOK: 5, QUEEN: 9, KING: 0}

GLYPHS = {
    WHITE: {KING: "♔", QUEEN: "♕", ROOK: "♖", BISHOP: "♗", KNIGHT: "♘", PAWN: "♙"},
    BLACK: {KING: "♚", QUEEN: "♛", ROOK: "♜", BISHOP: "♝", KNIGHT: "♞", PAWN: "♟"},
}


def opponent(color: str) -> str:
    if color not in COLORS:
        raise ValueError(f"color must be 'w' or 'b', got {color!r}")
    return BLACK if color == WHITE else WHITE


@dataclass(frozen=True)
class Piece:
    """Immutable piece value.

    Attributes:
        color (str): ``"w"`` or ``"b"``.
        kind (str): One of ``"p" "n" "b" "r" "q" "k"``.
    """

    color: str
    kind: str

    def __post_init__(self) -> None:
        if self.color not in COLORS:
            raise ValueError(f"invalid piece color: {self.color!r}")
        if self.kind not in KINDS:
            raise ValueError(f"invalid piece kind: {self.kind!r}")

    @classmethod
    def from_char(cls, ch: str) -> "Piece":
        """Build a piece from its letter, uppercase for white (``"N"``), lowercase for black."""
        if len(ch) != 1 or ch.lower() not in KINDS:
            raise ValueError(f"invalid piece character: {ch!r}")
        return cls(WHITE if ch.isupper() else BLACK, ch.lower())

    @property
    def letter(self) -> str:
        return self.kind.upper() if self.color == WHITE else self.kind

    @property
    def glyph(self) -> str:
        return GLYPHS[self.color][self.kind]

    def __str__(self) -> str:
        return self.letter
