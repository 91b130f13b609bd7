"""
Gymnasium environment wrapper for Minesweeper.

Provides a standard RL interface on top of the board engine.
"""
import random
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import Board, BoardConfig, Coordinate


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
        - 0-8 = opened cell with adjacent mine count
        - 9 = opened mine (after a loss the whole board is opened)

    Actions:
        Discrete action space of size width * height.
        Action i opens the cell at (x=i % width, y=i // width).

    Rewards:
        - +1 for opening a safe cell
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for an action that changes nothing
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
            config: Board configuration (default: 9x9 with 10 mines).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or BoardConfig()
        self.board = Board(
            self.config.width, self.config.height, self.config.num_mines
        )
        self.render_mode = render_mode

        self.observation_space = spaces.Box(
            low=-2,
            high=9,
            shape=(self.config.height, self.config.width),
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
        Reset the environment for a new episode.

        Args:
            seed: Random seed. Mine placement is drawn from the
                environment's np_random, so later unseeded resets stay
                reproducible too.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        rng = random.Random(int(self.np_random.integers(2**32)))
        self.board = Board(
            self.config.width, self.config.height, self.config.num_mines, rng=rng
        )
        self._steps = 0

        return self.board.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Cell index to open (y * width + x).

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        self._steps += 1
        reward = self._calculate_reward(self._action_to_coordinate(action))

        observation = self.board.get_observation()
        terminated = not self.board.is_playing
        truncated = False

        return observation, reward, terminated, truncated, self._get_info()

    def _action_to_coordinate(self, action: int) -> Coordinate:
        """Convert flat action index to an (x, y) coordinate."""
        y, x = divmod(int(action), self.config.width)
        return Coordinate(x, y)

    def _calculate_reward(self, coordinate: Coordinate) -> float:
        """
        Open a cell and score the result.

        Args:
            coordinate: Cell to open.

        Returns:
            Reward value.
        """
        if not self.board.open_cell(coordinate):
            return -0.1
        if self.board.is_won:
            return 10.0
        if self.board.is_lost:
            return -10.0
        return 1.0

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        return {
            "steps": self._steps,
            "opened": self.board.opened_count,
            "total_safe": self.board.target_safe_count,
            "status": self.board.status.name,
            "valid_actions": len(self.board.get_valid_actions()),
            "elapsed": self.board.elapsed_time(),
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return str(self.board)
        if self.render_mode == "human":
            print(self.board)
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = valid action.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        for x, y in self.board.get_valid_actions():
            mask[y * self.config.width + x] = True
        return mask


# ============================================================================
# Vectorized Environment Factory
# ============================================================================

def make_vec_env(
    n_envs: int = 4,
    config: Optional[BoardConfig] = None,
) -> gym.vector.VectorEnv:
    """
    Create vectorized environment for batched rollouts.

    Args:
        n_envs: Number of environments.
        config: Board configuration.

    Returns:
        Vectorized environment.
    """
    def make_env() -> MinesweeperEnv:
        return MinesweeperEnv(config=config)

    return gym.vector.SyncVectorEnv([make_env for _ in range(n_envs)])
