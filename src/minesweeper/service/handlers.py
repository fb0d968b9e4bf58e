"""
Request handlers for the Minesweeper service.

Each handler loads a session from the store, runs one engine operation
and saves the result. Mutations on the same game are serialized; a
failed operation is never saved.
"""
import logging
import random
import threading
import weakref
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Mapping, Optional, Union

from ..game.cell import CellView
from ..game.config import Difficulty, GameConfig
from ..game.errors import MinesweeperError
from ..game.session import (
    Clock,
    GameSession,
    MoveRequest,
    ScoreSubmission,
    SessionSnapshot,
)
from .leaderboard import HighScore, Leaderboard
from .store import InMemoryGameStore

logger = logging.getLogger(__name__)


# ============================================================================
# Responses
# ============================================================================

@dataclass
class GameStateResponse:
    """Session snapshot plus projected grid and derived fields."""

    game_id: int
    game: SessionSnapshot
    grid: List[List[CellView]]
    remaining_mines: int
    is_game_over: bool
    is_victory: bool

    @classmethod
    def from_session(cls, game_id: int, session: GameSession) -> "GameStateResponse":
        return cls(
            game_id=game_id,
            game=session.snapshot(),
            grid=session.projection(),
            remaining_mines=session.remaining_mines,
            is_game_over=session.is_game_over,
            is_victory=session.is_victory,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        game = self.game.to_dict()
        game["id"] = self.game_id
        return {
            "game": game,
            "grid": [[view.to_dict() for view in line] for line in self.grid],
            "remaining_mines": self.remaining_mines,
            "is_game_over": self.is_game_over,
            "is_victory": self.is_victory,
        }


# ============================================================================
# Game Service
# ============================================================================

class _GameLock:
    """Mutex for one game id (``threading.Lock`` cannot be weakly referenced)."""

    def __init__(self) -> None:
        self._lock = threading.Lock()

    def __enter__(self) -> "_GameLock":
        self._lock.acquire()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self._lock.release()


class GameService:
    """
    In-process game service.

    Features:
        - Game creation, moves and restarts backed by a game store
        - One lock per game id; different games never block each other
        - High score hand-off and leaderboard queries
    """

    def __init__(
        self,
        store: Optional[InMemoryGameStore] = None,
        leaderboard: Optional[Leaderboard] = None,
        rng: Optional[random.Random] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        """
        Initialize the service.

        Args:
            store: Game store (default: a new in-memory store).
            leaderboard: High score table (default: a new empty one).
            rng: Random source for mine layouts.
            clock: Timestamp source for new sessions.
        """
        self.clock = clock
        self.store = store if store is not None else InMemoryGameStore(clock=clock)
        self.leaderboard = leaderboard if leaderboard is not None else Leaderboard(clock=clock)
        self.rng = rng or random.Random()
        # Entries disappear once no request holds the game's lock
        self._locks: "weakref.WeakValueDictionary[int, _GameLock]" = (
            weakref.WeakValueDictionary()
        )
        self._locks_guard = threading.Lock()

    @contextmanager
    def _game_lock(self, game_id: int) -> Iterator[None]:
        with self._locks_guard:
            lock = self._locks.get(game_id)
            if lock is None:
                lock = self._locks[game_id] = _GameLock()
        with lock:
            yield

    # ========================================================================
    # Handlers
    # ========================================================================

    def create_game(
        self, config: Union[GameConfig, Mapping[str, Any]]
    ) -> GameStateResponse:
        """Create a game with a fresh minefield."""
        try:
            if not isinstance(config, GameConfig):
                config = GameConfig.from_dict(config)
            session = GameSession.new(config, rng=self.rng, clock=self.clock)
        except MinesweeperError as error:
            logger.warning("Rejected game creation: %s", error)
            raise

        game_id = self.store.create(session)
        logger.info(
            "Created game %d (%s, %dx%d, %d mines)",
            game_id,
            config.difficulty.value,
            config.rows,
            config.columns,
            config.mine_count,
        )
        return GameStateResponse.from_session(game_id, session)

    def get_game_state(self, game_id: int) -> GameStateResponse:
        """Current state of a game under the visibility rule."""
        try:
            session = self.store.load(game_id)
        except MinesweeperError as error:
            logger.warning("Game state lookup failed: %s", error)
            raise
        return GameStateResponse.from_session(game_id, session)

    def make_move(
        self, game_id: int, move: Union[MoveRequest, Mapping[str, Any]]
    ) -> GameStateResponse:
        """
        Apply one move and persist the result.

        A reveal that wins a game with a player name also records the
        high score.

        Args:
            game_id: Game to act on.
            move: Move request, or a mapping with row, column and action.

        Returns:
            Updated game state.
        """
        if not isinstance(move, MoveRequest):
            try:
                move = MoveRequest.from_dict(move)
            except MinesweeperError as error:
                logger.warning("Rejected move in game %s: %s", game_id, error)
                raise

        with self._game_lock(game_id):
            try:
                session = self.store.load(game_id)
                session.apply_move(move)
            except MinesweeperError as error:
                logger.warning(
                    "Rejected %s at (%d, %d) in game %d: %s",
                    move.action.value,
                    move.row,
                    move.column,
                    game_id,
                    error,
                )
                raise
            self.store.save(game_id, session)

            if session.is_game_over:
                logger.info(
                    "Game %d %s after %d seconds",
                    game_id,
                    session.status.value,
                    session.duration,
                )
                if session.is_victory and (session.player_name or "").strip():
                    self._record_score(session.scoring_handoff())
        return GameStateResponse.from_session(game_id, session)

    def restart_game(self, game_id: int) -> GameStateResponse:
        """Start a new game with the configuration of an existing one."""
        try:
            previous = self.store.load(game_id)
        except MinesweeperError as error:
            logger.warning("Restart failed: %s", error)
            raise

        session = previous.restart(rng=self.rng, clock=self.clock)
        new_id = self.store.create(session)
        logger.info("Restarted game %d as game %d", game_id, new_id)
        return GameStateResponse.from_session(new_id, session)

    def save_high_score(
        self, game_id: int, player_name: Optional[str] = None
    ) -> HighScore:
        """
        Record a won game on the leaderboard.

        Args:
            game_id: Won game to record.
            player_name: Name to record instead of the game's player.

        Returns:
            The stored leaderboard entry.
        """
        try:
            submission = self.store.load(game_id).scoring_handoff(player_name)
        except MinesweeperError as error:
            logger.warning("High score save failed for game %d: %s", game_id, error)
            raise
        return self._record_score(submission)

    def _record_score(self, submission: ScoreSubmission) -> HighScore:
        score = self.leaderboard.record(submission)
        logger.info(
            "Saved high score %d for %s (%s, %d seconds)",
            score.id,
            score.player_name,
            score.difficulty.value,
            score.duration_seconds,
        )
        return score

    def get_leaderboard(
        self, difficulty: Optional[Difficulty] = None, limit: int = 10
    ) -> List[HighScore]:
        """Fastest high scores, optionally for one difficulty."""
        return self.leaderboard.top(difficulty=difficulty, limit=limit)
