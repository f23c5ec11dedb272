from __future__ import annotations

import threading
import uuid
from typing import Dict, Optional

from ...engine.game import new_game
from ...engine.state import GameState


class InMemorySessionStore:
    """Thread-safe in-memory store of the current state per game.

    Responsibilities:
    - Create new sessions with unique `game_id`s
    - Retrieve the current `GameState` by `game_id`
    - Replace the current state wholesale after an accepted move or undo
    - Delete sessions

    States are immutable, so a reader holding an older state is never affected
    by a later replacement.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._games: Dict[str, GameState] = {}

    def create(self, state: Optional[GameState] = None) -> str:
        """Create a new game session and return its `game_id`."""
        gid = str(uuid.uuid4())
        if state is None:
            state = new_game()
        with self._lock:
            self._games[gid] = state
        return gid

    def get(self, game_id: str) -> Optional[GameState]:
        with self._lock:
            return self._games.get(game_id)

    def replace(self, game_id: str, state: GameState) -> None:
        with self._lock:
            if game_id not in self._games:
                raise KeyError(game_id)
            self._games[game_id] = state

    def delete(self, game_id: str) -> bool:
        with self._lock:
            return self._games.pop(game_id, None) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._games)
