"""
Unit tests for the gymnasium environment.
"""
import numpy as np
import pytest

from minesweeper.game import BEGINNER, GameSession, Grid, MinesweeperEnv


@pytest.fixture
def env() -> MinesweeperEnv:
    """Beginner environment, already reset."""
    env = MinesweeperEnv(config=BEGINNER, render_mode="ansi")
    env.reset(seed=0)
    return env


def install_grid(env: MinesweeperEnv, grid: Grid) -> None:
    """Swap in a known layout."""
    env.session = GameSession(grid=grid)


class TestEnvironment:
    """Test reset/step contract."""

    def test_reset_observation(self, env: MinesweeperEnv) -> None:
        obs, info = env.reset(seed=1)
        assert obs.shape == (8, 8)
        assert obs.dtype == np.int8
        assert np.all(obs == -1)
        assert info["game_state"] == "in_progress"
        assert env.observation_space.contains(obs)

    def test_seeded_reset_is_reproducible(self, env: MinesweeperEnv) -> None:
        env.reset(seed=5)
        first = env.session.grid.mine_positions
        env.reset(seed=5)
        assert env.session.grid.mine_positions == first

    def test_action_space_size(self, env: MinesweeperEnv) -> None:
        assert env.action_space.n == 64
        assert env.get_action_mask().shape == (64,)
        assert env.get_action_mask().all()

    def test_safe_step_rewards_one(self, env: MinesweeperEnv) -> None:
        mines = {(0, 0), (7, 7)}
        install_grid(env, Grid(8, 8, mines))
        obs, reward, terminated, truncated, info = env.step(1)
        assert reward == 1.0
        assert terminated is False
        assert truncated is False
        assert obs[0, 1] == 1

    def test_mine_step_terminates(self, env: MinesweeperEnv) -> None:
        install_grid(env, Grid(8, 8, {(0, 0)}))
        obs, reward, terminated, _, info = env.step(0)
        assert reward == -10.0
        assert terminated is True
        assert info["game_state"] == "lost"
        assert obs[0, 0] == 9

    def test_winning_step(self, env: MinesweeperEnv) -> None:
        install_grid(env, Grid(8, 8, {(0, 0)}))
        _, reward, terminated, _, info = env.step(63)
        assert reward == 10.0
        assert terminated is True
        assert info["game_state"] == "won"

    def test_repeat_step_penalized(self, env: MinesweeperEnv) -> None:
        install_grid(env, Grid(8, 8, {(0, 0), (7, 7)}))
        env.step(1)
        _, reward, terminated, _, _ = env.step(1)
        assert reward == pytest.approx(-0.1)
        assert terminated is False
        assert env.get_action_mask()[1] == False  # noqa: E712

    def test_render_ansi(self, env: MinesweeperEnv) -> None:
        text = env.render()
        lines = text.split("\n")
        assert len(lines) == 8
        assert lines[0] == " ".join(["."] * 8)

    def test_step_before_reset(self) -> None:
        with pytest.raises(RuntimeError):
            MinesweeperEnv(config=BEGINNER).step(0)
