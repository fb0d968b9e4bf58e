"""
Game configuration for Minesweeper.

Holds board dimensions, mine count and difficulty, validated the moment
a configuration is built.
"""
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from .errors import InvalidConfiguration


# ============================================================================
# Constants
# ============================================================================

MIN_DIMENSION = 5
MAX_DIMENSION = 50


class Difficulty(str, Enum):
    """Difficulty labels; also used to group leaderboard entries."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    EXPERT = "expert"
    CUSTOM = "custom"


# ============================================================================
# Configuration Data Class
# ============================================================================

@dataclass
class GameConfig:
    """
    Configuration for a Minesweeper game.

    Attributes:
        rows: Number of rows (5-50).
        columns: Number of columns (5-50).
        mine_count: Total mines to place, at least one and fewer than cells.
        difficulty: Difficulty label for scoring.
        player_name: Optional player identity carried across restarts.
    """

    rows: int = 8
    columns: int = 8
    mine_count: int = 10
    difficulty: Difficulty = Difficulty.CUSTOM
    player_name: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        try:
            self.difficulty = Difficulty(self.difficulty)
        except ValueError:
            raise InvalidConfiguration(
                f"Unknown difficulty {self.difficulty!r}"
            ) from None
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        for name in ("rows", "columns"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise InvalidConfiguration(f"{name} must be an integer")
            if not MIN_DIMENSION <= value <= MAX_DIMENSION:
                raise InvalidConfiguration(
                    f"{name} must be between {MIN_DIMENSION} and "
                    f"{MAX_DIMENSION}, got {value}"
                )
        if not isinstance(self.mine_count, int) or isinstance(self.mine_count, bool):
            raise InvalidConfiguration("mine_count must be an integer")
        if self.mine_count < 1:
            raise InvalidConfiguration("mine_count must be at least 1")
        max_mines = self.total_cells - 1
        if self.mine_count > max_mines:
            raise InvalidConfiguration(f"Too many mines (max {max_mines})")

    @property
    def total_cells(self) -> int:
        return self.rows * self.columns

    @classmethod
    def for_difficulty(
        cls,
        difficulty: Any,
        rows: Optional[int] = None,
        columns: Optional[int] = None,
        mine_count: Optional[int] = None,
        player_name: Optional[str] = None,
    ) -> "GameConfig":
        """
        Build a configuration from a difficulty label.

        Preset difficulties ignore the explicit dimensions; ``custom``
        uses them, falling back to the beginner layout for any that are
        missing.

        Args:
            difficulty: A ``Difficulty`` or its string value.
            rows: Rows for a custom game.
            columns: Columns for a custom game.
            mine_count: Mines for a custom game.
            player_name: Optional player identity.

        Returns:
            Validated game configuration.
        """
        try:
            difficulty = Difficulty(difficulty)
        except ValueError:
            raise InvalidConfiguration(
                f"Unknown difficulty {difficulty!r}"
            ) from None

        if difficulty == Difficulty.CUSTOM:
            rows = rows if rows is not None else CUSTOM_DEFAULTS[0]
            columns = columns if columns is not None else CUSTOM_DEFAULTS[1]
            mine_count = (
                mine_count if mine_count is not None else CUSTOM_DEFAULTS[2]
            )
        else:
            rows, columns, mine_count = PRESETS[difficulty]

        return cls(
            rows=rows,
            columns=columns,
            mine_count=mine_count,
            difficulty=difficulty,
            player_name=player_name,
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GameConfig":
        """Build a configuration from a request mapping."""
        return cls.for_difficulty(
            data.get("difficulty", Difficulty.CUSTOM),
            rows=data.get("rows"),
            columns=data.get("columns"),
            mine_count=data.get("mine_count", data.get("mines")),
            player_name=data.get("player_name"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        data = asdict(self)
        data["difficulty"] = self.difficulty.value
        return data


# Preset difficulty levels as (rows, columns, mines)
PRESETS = {
    Difficulty.BEGINNER: (8, 8, 10),
    Difficulty.INTERMEDIATE: (16, 16, 40),
    Difficulty.EXPERT: (16, 30, 99),
}
CUSTOM_DEFAULTS = (8, 8, 10)

BEGINNER = GameConfig.for_difficulty(Difficulty.BEGINNER)
INTERMEDIATE = GameConfig.for_difficulty(Difficulty.INTERMEDIATE)
EXPERT = GameConfig.for_difficulty(Difficulty.EXPERT)
