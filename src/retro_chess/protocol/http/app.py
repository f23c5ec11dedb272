from __future__ import annotations

import logging
import os
from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException, Query, Response
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ConfigDict, Field
from starlette.exceptions import HTTPException as StarletteHTTPException

from .error import (
    exception_handler,
    http_exception_handler,
    move_error_handler,
    request_validation_exception_handler,
)
from .logging_middleware import RequestIDLoggingMiddleware
from .session import InMemorySessionStore
from ... import __version__
from ...engine.errors import MoveError
from ...engine.game import apply_move, legal_moves_from, new_game, undo
from ...engine.move import Move, MoveRequest, parse_uci
from ...engine.square import Square, parse_square, square_to_algebraic
from ...engine.state import GameState


logger = logging.getLogger(__name__)

LOG_LEVEL_ENV = "RETRO_CHESS_LOG_LEVEL"


class PieceView(BaseModel):
    color: str
    kind: str
    glyph: str


class ResultView(BaseModel):
    status: str
    winner: Optional[str] = None
    in_check: bool
    reason: Optional[str] = None


class LastMoveView(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_square: str = Field(..., alias="from")
    to_square: str = Field(..., alias="to")


class MoveView(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_square: str = Field(..., alias="from")
    to_square: str = Field(..., alias="to")
    capture: bool
    en_passant: bool
    castle: bool
    promotion_required: bool


class GameView(BaseModel):
    game_id: str
    board: Dict[str, PieceView]
    turn: str
    castling: str
    en_passant: Optional[str]
    halfmove_clock: int
    fullmove_number: int
    result: ResultView
    check_square: Optional[str]
    last_move: Optional[LastMoveView]
    moves: List[str]
    can_undo: bool
    material: Dict[str, int]


class MoveBody(BaseModel):
    """Either ``from``/``to`` (plus optional ``promotion``) or a single ``uci`` string."""

    model_config = ConfigDict(populate_by_name=True)

    from_square: Optional[str] = Field(default=None, alias="from", description="Origin, e.g. e2")
    to_square: Optional[str] = Field(default=None, alias="to", description="Destination, e.g. e4")
    promotion: Optional[str] = Field(default=None, min_length=1, max_length=1)
    uci: Optional[str] = Field(default=None, description="Long algebraic move, e.g. e7e8q")


def create_app(log_level: Optional[str] = None) -> FastAPI:
    app = FastAPI(title="Retro Chess API", version=__version__)

    # Basic logging setup; explicit argument wins over the environment
    level = log_level or os.environ.get(LOG_LEVEL_ENV, "INFO")
    logging.basicConfig(level=level.upper())

    # Middleware & error handling
    app.add_middleware(RequestIDLoggingMiddleware)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(MoveError, move_error_handler)
    app.add_exception_handler(Exception, exception_handler)

    # Current state per game; replaced wholesale on every accepted move or undo
    store = InMemorySessionStore()
    app.state.sessions = store

    @app.get("/healthz")
    async def healthz() -> Dict[str, str]:
        return {"status": "ok"}

    @app.post("/api/games", response_model=GameView)
    async def create_game() -> GameView:
        game_id = store.create(new_game())
        logger.info("game created", extra={"game_id": game_id})
        return _view(game_id, _require_game(store, game_id))

    @app.get("/api/games/{game_id}/state", response_model=GameView)
    async def get_state(game_id: str) -> GameView:
        return _view(game_id, _require_game(store, game_id))

    @app.get("/api/games/{game_id}/moves", response_model=List[MoveView])
    async def get_moves(game_id: str, square: str = Query(..., description="e.g. e2")) -> List[MoveView]:
        state = _require_game(store, game_id)
        origin = _parse_square_or_400(square)
        return [_move_view(m) for m in legal_moves_from(state, origin)]

    @app.post("/api/games/{game_id}/move", response_model=GameView)
    async def make_move(game_id: str, body: MoveBody) -> GameView:
        state = _require_game(store, game_id)
        request = _to_request(body)
        # MoveError propagates to move_error_handler; the stored state stays as it was
        nxt = apply_move(state, request)
        store.replace(game_id, nxt)
        logger.info(
            "move applied",
            extra={"game_id": game_id, "san": nxt.moves[-1], "status": nxt.result.status},
        )
        return _view(game_id, nxt)

    @app.post("/api/games/{game_id}/undo", response_model=GameView)
    async def undo_move(game_id: str) -> GameView:
        state = _require_game(store, game_id)
        prev = undo(state)
        store.replace(game_id, prev)
        return _view(game_id, prev)

    @app.delete("/api/games/{game_id}", status_code=204)
    async def delete_game(game_id: str) -> Response:
        if not store.delete(game_id):
            raise HTTPException(status_code=404, detail="game not found")
        return Response(status_code=204)

    return app


def _require_game(store: InMemorySessionStore, game_id: str) -> GameState:
    state = store.get(game_id)
    if state is None:
        raise HTTPException(status_code=404, detail="game not found")
    return state


def _parse_square_or_400(text: str) -> Square:
    try:
        return parse_square(text)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


def _to_request(body: MoveBody) -> MoveRequest:
    if body.uci:
        try:
            return parse_uci(body.uci)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
    if not body.from_square or not body.to_square:
        raise HTTPException(status_code=400, detail="either uci or both from and to are required")
    return MoveRequest(
        _parse_square_or_400(body.from_square),
        _parse_square_or_400(body.to_square),
        body.promotion.lower() if body.promotion else None,
    )


def _move_view(m: Move) -> MoveView:
    return MoveView(
        from_square=square_to_algebraic(m.from_sq),
        to_square=square_to_algebraic(m.to_sq),
        capture=m.capture,
        en_passant=m.en_passant,
        castle=m.castle,
        promotion_required=m.promotion_required,
    )


def _view(game_id: str, state: GameState) -> GameView:
    last = state.last_move
    return GameView(
        game_id=game_id,
        board={
            square_to_algebraic(sq): PieceView(color=p.color, kind=p.kind, glyph=p.glyph)
            for sq, p in state.board.pieces()
        },
        turn=state.turn,
        castling=str(state.castling),
        en_passant=square_to_algebraic(state.en_passant) if state.en_passant is not None else None,
        halfmove_clock=state.halfmove_clock,
        fullmove_number=state.fullmove_number,
        result=ResultView(
            status=state.result.status,
            winner=state.result.winner,
            in_check=state.result.in_check,
            reason=state.result.reason,
        ),
        check_square=square_to_algebraic(state.check_square) if state.check_square is not None else None,
        last_move=(
            LastMoveView(
                from_square=square_to_algebraic(last.from_sq),
                to_square=square_to_algebraic(last.to_sq),
            )
            if last is not None
            else None
        ),
        moves=list(state.moves),
        can_undo=state.can_undo,
        material=state.board.material(),
    )


# Default app for non-factory servers
app = create_app()
