"""
Unit tests for the Gymnasium environment wrapper.
"""
import numpy as np
import pytest
from minesweeper import BoardConfig, GameStatus, MinesweeperEnv, make_vec_env


@pytest.fixture
def env(small_config: BoardConfig) -> MinesweeperEnv:
    """Create a small seeded-on-reset environment."""
    return MinesweeperEnv(config=small_config, render_mode="ansi")


# ============================================================================
# Reset Tests
# ============================================================================

class TestReset:
    """Test episode reset."""

    def test_reset_returns_hidden_observation(self, env: MinesweeperEnv) -> None:
        obs, info = env.reset(seed=0)
        assert obs.shape == (4, 4)
        assert obs.dtype == np.int8
        assert np.all(obs == -1)
        assert env.observation_space.contains(obs)
        assert info["status"] == GameStatus.NOT_STARTED.name
        assert info["total_safe"] == 14

    def test_seed_makes_layout_reproducible(self, env: MinesweeperEnv) -> None:
        env.reset(seed=42)
        first = [env.board.get_cell((x, y)).is_mine for y in range(4) for x in range(4)]
        env.reset(seed=42)
        second = [env.board.get_cell((x, y)).is_mine for y in range(4) for x in range(4)]
        assert first == second

    def test_unseeded_reset_continues_seeded_stream(
        self, small_config: BoardConfig
    ) -> None:
        """Envs seeded alike should stay in step across unseeded resets."""
        envs = [MinesweeperEnv(config=small_config) for _ in range(2)]
        layouts = []
        for env in envs:
            env.reset(seed=7)
            episodes = []
            for _ in range(3):
                env.reset()
                episodes.append(
                    [env.board.get_cell((x, y)).is_mine for y in range(4) for x in range(4)]
                )
            layouts.append(episodes)
        assert layouts[0] == layouts[1]

    def test_default_config(self) -> None:
        env = MinesweeperEnv()
        assert env.action_space.n == 81


# ============================================================================
# Step Tests
# ============================================================================

class TestStep:
    """Test actions and rewards."""

    def test_step_opens_cell(self, env: MinesweeperEnv) -> None:
        env.reset(seed=1)
        obs, reward, terminated, truncated, info = env.step(0)
        assert truncated is False
        assert info["steps"] == 1
        assert reward in (1.0, 10.0, -10.0)
        assert obs[0, 0] != -1
        assert terminated == (not env.board.is_playing)

    def test_repeated_action_is_penalized(self, env: MinesweeperEnv) -> None:
        """Re-opening an opened safe cell changes nothing."""
        env.reset(seed=1)
        safe = next(
            y * 4 + x
            for y in range(4)
            for x in range(4)
            if not env.board.get_cell((x, y)).is_mine
            and env.board.get_cell((x, y)).adjacent_mines > 0
        )
        env.step(safe)
        _, reward, _, _, _ = env.step(safe)
        assert reward == pytest.approx(-0.1)

    def test_hitting_mine_terminates(self, env: MinesweeperEnv) -> None:
        env.reset(seed=3)
        mine = next(
            y * 4 + x
            for y in range(4)
            for x in range(4)
            if env.board.get_cell((x, y)).is_mine
        )
        obs, reward, terminated, _, info = env.step(mine)
        assert reward == -10.0
        assert terminated is True
        assert info["status"] == GameStatus.DEFEAT.name
        assert not np.any(obs == -1)

    def test_action_mask_tracks_hidden_cells(self, env: MinesweeperEnv) -> None:
        env.reset(seed=5)
        assert env.get_action_mask().all()
        env.step(15)
        mask = env.get_action_mask()
        assert mask.dtype == bool
        assert mask[15] == False  # noqa: E712
        assert mask.sum() == len(env.board.get_valid_actions())


# ============================================================================
# Render Tests
# ============================================================================

class TestRender:
    """Test text rendering."""

    def test_ansi_render_matches_field(self, env: MinesweeperEnv) -> None:
        env.reset(seed=2)
        assert env.render() == "----\n----\n----\n----"

    def test_human_render_prints(
        self, small_config: BoardConfig, capsys
    ) -> None:
        env = MinesweeperEnv(config=small_config, render_mode="human")
        env.reset(seed=2)
        assert env.render() is None
        assert "----" in capsys.readouterr().out


# ============================================================================
# Vectorized Environment Tests
# ============================================================================

class TestVecEnv:
    """Test vectorized environment factory."""

    def test_vec_env_batches_observations(self, small_config: BoardConfig) -> None:
        vec_env = make_vec_env(n_envs=2, config=small_config)
        try:
            obs, _ = vec_env.reset(seed=0)
            assert obs.shape == (2, 4, 4)
        finally:
            vec_env.close()
