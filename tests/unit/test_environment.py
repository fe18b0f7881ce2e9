"""
Unit tests for MinesweeperEnv.

Tests the gymnasium reset/step contract, rewards and action masks.
"""
import numpy as np
import pytest
from minesweeper import BoardConfig, Client, GameState, MinesweeperEnv, Minefield
from minesweeper.environment import (
    REWARD_INVALID,
    REWARD_LOSS,
    REWARD_WIN,
)


@pytest.fixture
def env() -> MinesweeperEnv:
    """Create a small environment with a fixed corner-bomb session."""
    environment = MinesweeperEnv(BoardConfig(5, 5, 1), render_mode="ansi")
    environment.reset(seed=0)
    environment.client = Client(Minefield.from_bomb_locations(5, 5, [(4, 4)]))
    return environment


def flag_action(env: MinesweeperEnv, row: int, col: int) -> int:
    return env.config.num_cells + row * env.config.width + col


# ============================================================================
# Space and Reset Tests
# ============================================================================

class TestSpaces:
    """Test observation and action spaces."""

    def test_action_space_size(self) -> None:
        """One reveal and one flag action per cell, plus submit."""
        environment = MinesweeperEnv(BoardConfig(4, 6, 3))
        assert environment.action_space.n == 2 * 24 + 1
        assert environment.submit_action == 48

    def test_reset_observation(self) -> None:
        """Reset should return an all-hidden observation in the space."""
        environment = MinesweeperEnv(BoardConfig(4, 6, 3))
        obs, info = environment.reset(seed=42)
        assert obs.shape == (4, 6)
        assert environment.observation_space.contains(obs)
        assert np.all(obs == -1)
        assert info["game_state"] == "RUNNING"
        assert info["num_bombs"] == 3
        assert info["steps"] == 0

    def test_seeded_reset_is_reproducible(self) -> None:
        """The same seed should give the same bomb layout."""
        environment = MinesweeperEnv(BoardConfig(8, 8, 10))
        environment.reset(seed=5)
        first = environment.client.minefield.bomb_locations()
        environment.reset(seed=5)
        assert environment.client.minefield.bomb_locations() == first


# ============================================================================
# Step Tests
# ============================================================================

class TestStep:
    """Test actions and rewards."""

    def test_flood_reveal_reward(self, env: MinesweeperEnv) -> None:
        """Reward should count every safe cell the flood revealed."""
        obs, reward, terminated, truncated, info = env.step(0)
        assert reward == 24.0
        assert terminated is False
        assert truncated is False
        assert info["revealed"] == 24
        assert obs[3, 3] == 1

    def test_reveal_bomb_terminates(self, env: MinesweeperEnv) -> None:
        """Revealing the bomb should end the episode with a penalty."""
        _, reward, terminated, _, info = env.step(24)
        assert reward == REWARD_LOSS
        assert terminated is True
        assert info["game_state"] == "LOST"

    def test_reveal_twice_is_invalid(self, env: MinesweeperEnv) -> None:
        """Revealing a revealed cell should be penalized."""
        env.step(23)
        _, reward, _, _, _ = env.step(23)
        assert reward == REWARD_INVALID

    def test_flag_toggle(self, env: MinesweeperEnv) -> None:
        """Flag actions should toggle and show in the observation."""
        obs, reward, _, _, info = env.step(flag_action(env, 4, 4))
        assert reward == 0.0
        assert obs[4, 4] == -2
        assert info["flags"] == 1
        obs, _, _, _, info = env.step(flag_action(env, 4, 4))
        assert obs[4, 4] == -1
        assert info["flags"] == 0

    def test_flag_revealed_is_invalid(self, env: MinesweeperEnv) -> None:
        """Flagging a revealed cell should be penalized."""
        env.step(0)
        _, reward, _, _, _ = env.step(flag_action(env, 0, 0))
        assert reward == REWARD_INVALID

    def test_submit_correct_flags_wins(self, env: MinesweeperEnv) -> None:
        """Submitting the right flags should win the episode."""
        env.step(flag_action(env, 4, 4))
        _, reward, terminated, _, info = env.step(env.submit_action)
        assert reward == REWARD_WIN
        assert terminated is True
        assert env.client.game_state == GameState.WON
        assert info["game_state"] == "WON"

    def test_submit_wrong_flags_loses(self, env: MinesweeperEnv) -> None:
        """Submitting wrong flags should lose the episode."""
        env.step(flag_action(env, 0, 0))
        _, reward, terminated, _, _ = env.step(env.submit_action)
        assert reward == REWARD_LOSS
        assert terminated is True

    @pytest.mark.parametrize("action", [-1, 51])
    def test_action_outside_space_raises_error(
        self, env: MinesweeperEnv, action: int
    ) -> None:
        """Actions outside the action space should be rejected up front."""
        with pytest.raises(ValueError, match="outside the action space"):
            env.step(action)
        assert env.client.get_valid_actions() == [
            (row, col) for row in range(5) for col in range(5)
        ]

    def test_actions_after_game_over_are_invalid(
        self, env: MinesweeperEnv
    ) -> None:
        """Every action after the end should be penalized."""
        env.step(24)
        for action in (0, flag_action(env, 0, 0), env.submit_action):
            _, reward, terminated, _, _ = env.step(action)
            assert reward == REWARD_INVALID
            assert terminated is True


# ============================================================================
# Mask and Render Tests
# ============================================================================

class TestActionMask:
    """Test valid action masks."""

    def test_new_game_mask(self, env: MinesweeperEnv) -> None:
        """Every reveal, flag and submit action is valid at start."""
        assert env.get_action_mask().all()

    def test_mask_after_moves(self, env: MinesweeperEnv) -> None:
        """Revealed cells lose both actions; flagged keep only flag."""
        env.step(23)
        env.step(flag_action(env, 4, 4))
        mask = env.get_action_mask()
        assert not mask[23]
        assert not mask[flag_action(env, 4, 3)]
        assert not mask[24]
        assert mask[flag_action(env, 4, 4)]
        assert mask[env.submit_action]

    def test_mask_empty_after_game_over(self, env: MinesweeperEnv) -> None:
        """No action is valid once the game ended."""
        env.step(24)
        assert not env.get_action_mask().any()


class TestRender:
    """Test ASCII rendering."""

    def test_render_ansi(self, env: MinesweeperEnv) -> None:
        """Render should draw hidden, flagged and revealed cells."""
        env.step(flag_action(env, 4, 4))
        env.step(23)
        lines = env.render().split("\n")
        assert len(lines) == 5
        assert lines[0] == ". . . . . "
        assert lines[4] == ". . . 1 F "

    def test_render_bomb(self, env: MinesweeperEnv) -> None:
        """Revealed bombs should render as '*'."""
        env.step(24)
        assert env.render().split("\n")[4].endswith("* ")
