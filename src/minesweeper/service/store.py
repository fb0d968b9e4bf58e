"""
Game storage for the Minesweeper service.

Sessions are stored as records, never as live objects, so a mutation
only becomes visible once it is saved.
"""
import copy
import json
import threading
from pathlib import Path
from typing import Any, Dict, Optional

from ..game.errors import SessionNotFound
from ..game.session import Clock, GameSession


# ============================================================================
# In-Memory Store
# ============================================================================

class InMemoryGameStore:
    """Game records keyed by increasing integer ids."""

    def __init__(self, clock: Optional[Clock] = None) -> None:
        self.clock = clock
        self._records: Dict[int, Dict[str, Any]] = {}
        self._next_id = 1
        # One lock for the whole store; ids and the file are shared by all games
        self._lock = threading.RLock()

    def create(self, session: GameSession) -> int:
        """Store a new session and return its game id."""
        record = copy.deepcopy(session.to_record())
        with self._lock:
            game_id = self._next_id
            self._records[game_id] = record
            try:
                self._flush()
            except OSError:
                del self._records[game_id]
                raise
            self._next_id += 1
        return game_id

    def load(self, game_id: int) -> GameSession:
        """Rebuild the stored session for a game id."""
        with self._lock:
            try:
                record = copy.deepcopy(self._records[game_id])
            except KeyError:
                raise SessionNotFound(game_id) from None
        return GameSession.from_record(record, clock=self.clock)

    def save(self, game_id: int, session: GameSession) -> None:
        """Replace the stored record of an existing game."""
        record = copy.deepcopy(session.to_record())
        with self._lock:
            if game_id not in self._records:
                raise SessionNotFound(game_id)
            previous = self._records[game_id]
            self._records[game_id] = record
            try:
                self._flush()
            except OSError:
                self._records[game_id] = previous
                raise

    def delete(self, game_id: int) -> None:
        with self._lock:
            if self._records.pop(game_id, None) is None:
                raise SessionNotFound(game_id)
            self._flush()

    def __contains__(self, game_id: object) -> bool:
        with self._lock:
            return game_id in self._records

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def _flush(self) -> None:
        """Hook for persistent subclasses. Called with the store lock held."""


# ============================================================================
# JSON File Store
# ============================================================================

class JsonGameStore(InMemoryGameStore):
    """
    Game records kept in a JSON file.

    The whole file is rewritten after every change.
    """

    def __init__(self, path: str, clock: Optional[Clock] = None) -> None:
        super().__init__(clock=clock)
        self.path = Path(path)
        if self.path.exists():
            data = json.loads(self.path.read_text(encoding="utf-8"))
            self._records = {
                int(game_id): record for game_id, record in data["games"].items()
            }
            self._next_id = data["next_id"]

    def _flush(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        records = dict(self._records)
        data = {
            "next_id": max(self._next_id, max(records, default=0) + 1),
            "games": {str(game_id): record for game_id, record in records.items()},
        }
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(data), encoding="utf-8")
        tmp_path.replace(self.path)
