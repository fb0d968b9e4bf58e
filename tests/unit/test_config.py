"""
Unit tests for GameConfig validation and presets.
"""
import pytest

from minesweeper.game import (
    BEGINNER,
    EXPERT,
    INTERMEDIATE,
    Difficulty,
    GameConfig,
    InvalidConfiguration,
)


class TestGameConfig:
    """Test game configuration validation."""

    def test_valid_config_creation(self, valid_config: GameConfig) -> None:
        """Valid configuration should be created successfully."""
        assert valid_config.rows == 9
        assert valid_config.columns == 9
        assert valid_config.mine_count == 10
        assert valid_config.total_cells == 81

    @pytest.mark.parametrize("rows, columns", [(4, 9), (9, 4), (51, 9), (9, 51)])
    def test_dimensions_out_of_range(self, rows: int, columns: int) -> None:
        with pytest.raises(InvalidConfiguration, match="between 5 and 50"):
            GameConfig(rows=rows, columns=columns, mine_count=1)

    def test_boundary_dimensions_valid(self) -> None:
        assert GameConfig(rows=5, columns=50, mine_count=1).total_cells == 250

    def test_zero_mines_rejected(self) -> None:
        with pytest.raises(InvalidConfiguration, match="at least 1"):
            GameConfig(rows=5, columns=5, mine_count=0)

    def test_too_many_mines_rejected(self) -> None:
        """Mines must leave at least one safe cell."""
        with pytest.raises(InvalidConfiguration, match="Too many mines"):
            GameConfig(rows=5, columns=5, mine_count=25)

    def test_max_mines_is_valid(self) -> None:
        assert GameConfig(rows=5, columns=5, mine_count=24).mine_count == 24

    def test_non_integer_rejected(self) -> None:
        with pytest.raises(InvalidConfiguration):
            GameConfig(rows=5.5, columns=5, mine_count=3)

    def test_invalid_configuration_is_value_error(self) -> None:
        """Callers catching ValueError still see configuration errors."""
        with pytest.raises(ValueError):
            GameConfig(rows=1, columns=1, mine_count=1)

    def test_unknown_difficulty(self) -> None:
        with pytest.raises(InvalidConfiguration, match="Unknown difficulty"):
            GameConfig(difficulty="nightmare")


class TestPresets:
    """Test difficulty presets."""

    def test_preset_values(self) -> None:
        assert (BEGINNER.rows, BEGINNER.columns, BEGINNER.mine_count) == (8, 8, 10)
        assert (INTERMEDIATE.rows, INTERMEDIATE.columns, INTERMEDIATE.mine_count) == (16, 16, 40)
        assert (EXPERT.rows, EXPERT.columns, EXPERT.mine_count) == (16, 30, 99)

    def test_preset_ignores_explicit_dimensions(self) -> None:
        config = GameConfig.for_difficulty("expert", rows=5, columns=5, mine_count=1)
        assert config.difficulty == Difficulty.EXPERT
        assert config.mine_count == 99

    def test_custom_uses_explicit_dimensions(self) -> None:
        config = GameConfig.for_difficulty("custom", rows=20, columns=10, mine_count=30)
        assert (config.rows, config.columns, config.mine_count) == (20, 10, 30)

    def test_custom_defaults(self) -> None:
        config = GameConfig.for_difficulty(Difficulty.CUSTOM)
        assert (config.rows, config.columns, config.mine_count) == (8, 8, 10)

    def test_from_dict(self) -> None:
        config = GameConfig.from_dict(
            {"difficulty": "beginner", "player_name": "Alice"}
        )
        assert config.player_name == "Alice"
        assert config.to_dict() == {
            "rows": 8,
            "columns": 8,
            "mine_count": 10,
            "difficulty": "beginner",
            "player_name": "Alice",
        }

    def test_from_dict_accepts_mines_key(self) -> None:
        config = GameConfig.from_dict({"rows": 10, "columns": 10, "mines": 12})
        assert config.mine_count == 12
