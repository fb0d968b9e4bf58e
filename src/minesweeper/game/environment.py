"""
Gymnasium environment wrapper for Minesweeper.

Exposes a game session through a standard agent interface.
"""
import random
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .cell import FLAGGED_CODE, HIDDEN_CODE, MINE_CODE
from .config import GameConfig
from .errors import CellStateError
from .session import GameSession


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D array where:
        - -1 = hidden cell
        - -2 = flagged cell
        - 0-8 = revealed cell with adjacent mine count
        - 9 = mine (shown once the game is over)

    Actions:
        Discrete action space of size rows * columns.
        Action i corresponds to cell at (i // columns, i % columns).

    Rewards:
        - +1 for revealing a safe cell
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for invalid action (already revealed/flagged)
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            config: Game configuration (default: 8x8 with 10 mines).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or GameConfig()
        self.render_mode = render_mode
        self.session: Optional[GameSession] = None

        self.observation_space = spaces.Box(
            low=FLAGGED_CODE,
            high=MINE_CODE,
            shape=(self.config.rows, self.config.columns),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(self.config.total_cells)

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Start a new game.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        rng = random.Random(int(self.np_random.integers(0, 2**32)))
        self.session = GameSession.new(self.config, rng=rng)
        self._steps = 0
        return self.session.observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Reveal the cell behind an action.

        Args:
            action: Cell index to reveal (row * columns + column).

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        if self.session is None:
            raise RuntimeError("Call reset() before step()")

        row, col = self._action_to_position(action)
        self._steps += 1
        reward = self._calculate_reward(row, col)

        terminated = self.session.is_game_over
        return self.session.observation(), reward, terminated, False, self._get_info()

    def _action_to_position(self, action: int) -> Tuple[int, int]:
        """Convert flat action index to (row, col) position."""
        return int(action) // self.config.columns, int(action) % self.config.columns

    def _calculate_reward(self, row: int, col: int) -> float:
        try:
            self.session.reveal(row, col)
        except CellStateError:
            return -0.1

        if self.session.is_victory:
            return 10.0
        if self.session.is_game_over:
            return -10.0
        return 1.0

    def _get_info(self) -> Dict[str, Any]:
        return {
            "steps": self._steps,
            "revealed": self.session.revealed_count,
            "total_safe": self.session.grid.safe_cell_count,
            "game_state": self.session.status.value,
            "remaining_mines": self.session.remaining_mines,
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return self._render_ansi()
        if self.render_mode == "human":
            print(self._render_ansi())
        return None

    def _render_ansi(self) -> str:
        return render_observation(self.session.observation())

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = hidden, unflagged cell.
        """
        return (self.session.observation() == HIDDEN_CODE).flatten()


def render_observation(obs: np.ndarray) -> str:
    """Render an observation as ASCII rows."""
    symbols = {HIDDEN_CODE: ".", FLAGGED_CODE: "F", MINE_CODE: "*", 0: " "}
    lines = []
    for row in obs:
        lines.append(" ".join(symbols.get(int(val), str(int(val))) for val in row))
    return "\n".join(lines)
