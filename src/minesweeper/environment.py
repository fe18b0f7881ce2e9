"""
Gymnasium environment wrapper for Minesweeper.

Exposes a Client session through the standard RL interface.
"""
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .cell import OBS_BOMB, OBS_FLAGGED, OBS_HIDDEN, OBS_MARKED
from .client import Client, GameState
from .config import BoardConfig
from .errors import InvalidStateError

# Rewards
REWARD_SAFE_CELL = 1.0
REWARD_WIN = 10.0
REWARD_LOSS = -10.0
REWARD_INVALID = -0.1

_SYMBOLS = {OBS_HIDDEN: ".", OBS_FLAGGED: "F", OBS_MARKED: "M", OBS_BOMB: "*", 0: " "}


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
        - -3 = marked cell
        - 0-8 = revealed cell with adjacent bomb count
        - 9 = revealed bomb

    Actions:
        Discrete action space of size 2 * width * height + 1.
        - a < n: flood-reveal cell (a // width, a % width)
        - n <= a < 2n: toggle flag on cell a - n
        - a == 2n: submit the flags as the bomb locations

    Rewards:
        - +1 per safe cell revealed
        - +10 for winning the game
        - -10 for losing the game
        - -0.1 for invalid action (revealing a non-hidden cell,
          flagging a revealed one)
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            config: Board configuration (default: 9x9 with 10 bombs).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or BoardConfig()
        self.render_mode = render_mode
        self.client = Client.from_config(self.config, self.np_random)

        self.observation_space = spaces.Box(
            low=OBS_MARKED,
            high=OBS_BOMB,
            shape=(self.config.height, self.config.width),
            dtype=np.int8,
        )

        self._num_cells = self.config.num_cells
        self.submit_action = 2 * self._num_cells
        self.action_space = spaces.Discrete(self.submit_action + 1)

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new episode.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        self.client = Client.from_config(self.config, self.np_random)
        self._steps = 0

        return self.client.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Reveal, flag or submit action index.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).

        Raises:
            ValueError: If the action is outside the action space.
        """
        if not self.action_space.contains(action):
            raise ValueError(
                f"Action {action!r} is outside the action space "
                f"[0, {self.action_space.n})"
            )
        self._steps += 1
        action = int(action)

        if action == self.submit_action:
            reward = self._submit()
        elif action >= self._num_cells:
            reward = self._flag(*self._action_to_position(action - self._num_cells))
        else:
            reward = self._reveal(*self._action_to_position(action))

        observation = self.client.get_observation()
        terminated = not self.client.is_running
        truncated = False

        return observation, reward, terminated, truncated, self._get_info()

    def _action_to_position(self, action: int) -> Tuple[int, int]:
        """Convert flat cell index to (row, col) position."""
        return divmod(action, self.config.width)

    def _reveal(self, row: int, col: int) -> float:
        """Flood-reveal a cell and score the outcome."""
        if not self.client.is_running:
            return REWARD_INVALID
        before = self.client.get_state().get(row, col)
        if not before.is_hidden:
            return REWARD_INVALID

        hidden_before = len(self.client.get_valid_actions())
        self.client.query_smart(row, col)

        if self.client.is_lost:
            return REWARD_LOSS
        return REWARD_SAFE_CELL * (hidden_before - len(self.client.get_valid_actions()))

    def _flag(self, row: int, col: int) -> float:
        """Toggle a flag; only hidden and flagged cells accept it."""
        if not self.client.is_running:
            return REWARD_INVALID
        before = self.client.get_state().get(row, col)
        after = self.client.flag(row, col)
        if after == before:
            return REWARD_INVALID
        return 0.0

    def _submit(self) -> float:
        """Submit the flags and score the outcome."""
        try:
            result = self.client.submit()
        except InvalidStateError:
            return REWARD_INVALID
        return REWARD_WIN if result == GameState.WON else REWARD_LOSS

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        revealed = sum(
            1 for _, _, cell_state in self.client.get_state()
            if cell_state.is_revealed
        )

        return {
            "steps": self._steps,
            "revealed": revealed,
            "flags": len(self.client.get_flag_locations()),
            "num_bombs": self.client.num_bombs,
            "game_state": self.client.game_state.name,
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return self._render_ansi()
        if self.render_mode == "human":
            print(self._render_ansi())
        return None

    def _render_ansi(self) -> str:
        """Render board as ASCII string."""
        lines = []
        obs = self.client.get_observation()

        for row in range(self.config.height):
            row_str = ""
            for col in range(self.config.width):
                val = int(obs[row, col])
                row_str += _SYMBOLS.get(val, str(val))
                row_str += " "
            lines.append(row_str)

        return "\n".join(lines)

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = valid action.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        if not self.client.is_running:
            return mask
        for row, col, cell_state in self.client.get_state():
            action = row * self.config.width + col
            mask[action] = cell_state.is_hidden
            mask[self._num_cells + action] = (
                cell_state.is_hidden or cell_state.is_flagged
            )
        mask[self.submit_action] = True
        return mask

