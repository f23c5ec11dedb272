from __future__ import annotations


class MoveError(ValueError):
    """Base class for rejected move requests.

    The caller's state is never modified when one of these is raised.
    """

    code = "move_error"
    default_message = "move rejected"

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class GameOverError(MoveError):
    code = "game_over"
    default_message = "game over"


class EmptyOrEnemySquareError(MoveError):
    code = "empty_or_enemy_square"
    default_message = "no piece to move"


class IllegalMoveError(MoveError):
    code = "illegal_move"
    default_message = "illegal move"


class PromotionRequiredError(MoveError):
    code = "promotion_required"
    default_message = "promotion required"
