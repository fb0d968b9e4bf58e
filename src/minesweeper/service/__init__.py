"""
Minesweeper service module.

Provides game storage, the leaderboard and the request handlers that
tie them to the engine.
"""
from .store import InMemoryGameStore, JsonGameStore
from .leaderboard import HighScore, Leaderboard
from .handlers import GameService, GameStateResponse

__all__ = [
    "InMemoryGameStore",
    "JsonGameStore",
    "HighScore",
    "Leaderboard",
    "GameService",
    "GameStateResponse",
]
