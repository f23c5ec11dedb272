from __future__ import annotations

import logging
import re
import time
import uuid
from typing import Callable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request


logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "x-request-id"

_GAME_PATH = re.compile(r"^/api/games/(?P<game_id>[^/]+)")


def game_id_from_path(path: str) -> Optional[str]:
    """Return the game id addressed by ``path``, if any."""
    m = _GAME_PATH.match(path)
    return m.group("game_id") if m else None


class RequestIDLoggingMiddleware(BaseHTTPMiddleware):
    """Tag each request with an id and the game it addresses, then log both ends.

    A caller-supplied ``x-request-id`` is reused so a UI can correlate its own
    logs with ours. Server errors are logged at ERROR, everything else at INFO.
    """

    async def dispatch(self, request: Request, call_next: Callable):
        start = time.perf_counter()
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id
        fields = {"request_id": request_id, "game_id": game_id_from_path(request.url.path)}

        logger.info("request", extra={**fields, "method": request.method, "path": request.url.path})

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id

        level = logging.ERROR if response.status_code >= 500 else logging.INFO
        logger.log(
            level,
            "response",
            extra={
                **fields,
                "status_code": response.status_code,
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        return response
