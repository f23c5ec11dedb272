"""Chess rules core.

Pure, deterministic, and side-effect free: every operation takes an immutable
``GameState`` and returns a new one.
"""

from __future__ import annotations

from .errors import (
    EmptyOrEnemySquareError,
    GameOverError,
    IllegalMoveError,
    MoveError,
    PromotionRequiredError,
)
from .game import apply_move, compute_result, legal_moves_from, new_game, setup_position, undo
from .move import Move, MoveRequest, parse_uci
from .square import Square, algebraic_to_square, index_to_square, square_to_algebraic, square_to_index
from .state import CastlingRights, GameResult, GameState

__all__ = [
    "CastlingRights",
    "EmptyOrEnemySquareError",
    "GameOverError",
    "GameResult",
    "GameState",
    "IllegalMoveError",
    "Move",
    "MoveError",
    "MoveRequest",
    "PromotionRequiredError",
    "Square",
    "algebraic_to_square",
    "apply_move",
    "compute_result",
    "index_to_square",
    "legal_moves_from",
    "new_game",
    "parse_uci",
    "setup_position",
    "square_to_algebraic",
    "square_to_index",
    "undo",
]
