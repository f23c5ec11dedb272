from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

from .pieces import (
    BISHOP,
    BLACK,
    COLORS,
    KING,
    KNIGHT,
    PAWN,
    PIECE_VALUES,
    QUEEN,
    ROOK,
    WHITE,
    Piece,
)
from .square import ALL_SQUARES, Square, parse_square, square_to_index


BACK_RANK = (ROOK, KNIGHT, BISHOP, QUEEN, KING, BISHOP, KNIGHT, ROOK)


@dataclass(frozen=True)
class Board:
    """Immutable 8x8 piece placement.

    Notes:
    - ``cells`` holds 64 entries in row-major order (a8 first, h1 last).
    - Every change goes through :meth:`with_changes`, which returns a fresh
      board; no board is ever edited after construction.
    """

    cells: Tuple[Optional[Piece], ...]

    def __post_init__(self) -> None:
        if len(self.cells) != 64:
            raise ValueError("board must have 64 cells")

    @classmethod
    def empty(cls) -> "Board":
        return cls(cells=(None,) * 64)

    @classmethod
    def startpos(cls) -> "Board":
        """Create a board holding the standard starting position.

        Returns:
            Board: Black on rows 0-1, White on rows 6-7.
        """
        cells: List[Optional[Piece]] = [None] * 64
        for c, kind in enumerate(BACK_RANK):
            cells[c] = Piece(BLACK, kind)
            cells[8 + c] = Piece(BLACK, PAWN)
            cells[48 + c] = Piece(WHITE, PAWN)
            cells[56 + c] = Piece(WHITE, kind)
        return cls(cells=tuple(cells))

    @classmethod
    def from_pieces(cls, placement: Mapping[str, str]) -> "Board":
        """Create a board from ``{"e1": "K", "e8": "k", ...}``.

        Args:
            placement (Mapping[str, str]): Algebraic square to piece letter
                (uppercase white, lowercase black).

        Raises:
            ValueError: On a bad square name or piece letter.
        """
        cells: List[Optional[Piece]] = [None] * 64
        for name, ch in placement.items():
            cells[square_to_index(parse_square(name))] = Piece.from_char(ch)
        return cls(cells=tuple(cells))

    # --- Queries ---
    def at(self, sq: Square) -> Optional[Piece]:
        return self.cells[sq.row * 8 + sq.col]

    def is_empty(self, sq: Square) -> bool:
        return self.at(sq) is None

    def is_enemy(self, sq: Square, color: str) -> bool:
        piece = self.at(sq)
        return piece is not None and piece.color != color

    def pieces(self, color: Optional[str] = None) -> Iterator[Tuple[Square, Piece]]:
        """Yield ``(square, piece)`` pairs in row-major order, optionally for one color."""
        for sq in ALL_SQUARES:
            piece = self.at(sq)
            if piece is not None and (color is None or piece.color == color):
                yield sq, piece

    def king_square(self, color: str) -> Optional[Square]:
        for sq, piece in self.pieces(color):
            if piece.kind == KING:
                return sq
        return None

    def material(self) -> Dict[str, int]:
        """Material tally per color (p=1, n=3, b=3, r=5, q=9)."""
        tally = {color: 0 for color in COLORS}
        for _, piece in self.pieces():
            tally[piece.color] += PIECE_VALUES[piece.kind]
        return tally

    # --- Transitions ---
    def with_changes(self, changes: Mapping[Square, Optional[Piece]]) -> "Board":
        """Return a new board with ``changes`` applied in iteration order."""
        cells = list(self.cells)
        for sq, piece in changes.items():
            cells[sq.row * 8 + sq.col] = piece
        return Board(cells=tuple(cells))

    def __str__(self) -> str:
        rows = []
        for r in range(8):
            row = [str(p) if p else "." for p in self.cells[r * 8 : r * 8 + 8]]
            rows.append(f"{8 - r} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
