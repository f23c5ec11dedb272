from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

from .board import Board
from .move import Move
from .pieces import BLACK, WHITE
from .square import Square


ONGOING = "ongoing"
CHECKMATE = "checkmate"
STALEMATE = "stalemate"
DRAW = "draw"


@dataclass(frozen=True)
class CastlingRights:
    """Four independent castling flags. Rights are only ever dropped."""

    white_king_side: bool = True
    white_queen_side: bool = True
    black_king_side: bool = True
    black_queen_side: bool = True

    @classmethod
    def from_string(cls, text: str) -> "CastlingRights":
        """Build rights from a ``KQkq`` subset, ``"-"`` or ``""`` meaning none."""
        if text == "-":
            text = ""
        if any(ch not in "KQkq" for ch in text):
            raise ValueError(f"invalid castling rights: {text!r}")
        return cls("K" in text, "Q" in text, "k" in text, "q" in text)

    def has(self, color: str, king_side: bool) -> bool:
        if color == WHITE:
            return self.white_king_side if king_side else self.white_queen_side
        return self.black_king_side if king_side else self.black_queen_side

    def without(self, color: str, king_side: Optional[bool] = None) -> "CastlingRights":
        """Drop one side's right for ``color``, or both when ``king_side`` is None."""
        wk, wq, bk, bq = (
            self.white_king_side,
            self.white_queen_side,
            self.black_king_side,
            self.black_queen_side,
        )
        drop_k = king_side is None or king_side
        drop_q = king_side is None or not king_side
        if color == WHITE:
            wk = wk and not drop_k
            wq = wq and not drop_q
        else:
            bk = bk and not drop_k
            bq = bq and not drop_q
        return CastlingRights(wk, wq, bk, bq)

    def __str__(self) -> str:
        text = "".join(
            ch
            for ch, flag in zip(
                "KQkq",
                (
                    self.white_king_side,
                    self.white_queen_side,
                    self.black_king_side,
                    self.black_queen_side,
                ),
            )
            if flag
        )
        return text or "-"


@dataclass(frozen=True)
class GameResult:
    """Terminal-state value.

    ``status`` is one of ongoing/checkmate/stalemate/draw. ``winner`` is only
    set for checkmate. ``draw`` is reserved; no rule produces it yet.
    """

    status: str = ONGOING
    in_check: bool = False
    winner: Optional[str] = None
    reason: Optional[str] = None

    @property
    def is_over(self) -> bool:
        return self.status != ONGOING


@dataclass(frozen=True)
class GameState:
    """Full immutable snapshot of a game.

    ``history`` holds every prior snapshot, oldest first; undo restores the
    last one wholesale.
    """

    board: Board
    turn: str = WHITE
    castling: CastlingRights = field(default_factory=CastlingRights)
    en_passant: Optional[Square] = None
    halfmove_clock: int = 0
    fullmove_number: int = 1
    last_move: Optional[Move] = None
    moves: Tuple[str, ...] = ()
    result: GameResult = field(default_factory=GameResult)
    history: Tuple["GameState", ...] = field(default=(), repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.turn not in (WHITE, BLACK):
            raise ValueError("turn must be 'w' or 'b'")
        if self.halfmove_clock < 0 or self.fullmove_number <= 0:
            raise ValueError("invalid move counters")

    @property
    def in_check(self) -> bool:
        return self.result.in_check

    @property
    def check_square(self) -> Optional[Square]:
        """Square of the side-to-move's king when it is in check."""
        if not self.result.in_check:
            return None
        return self.board.king_square(self.turn)

    @property
    def can_undo(self) -> bool:
        return bool(self.history)
