"""
Gymnasium environment wrapper for Minefield.

Drives a board the way a player-facing front end does: build a board per
episode, reveal one cell per step and poll the outcome.
"""
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import Board, BoardConfig, GameState, Shuffle, generator_shuffle
from .cell import BOMB_OBSERVATION, HIDDEN_OBSERVATION


# ============================================================================
# Minefield Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minefield.

    Observation:
        2D array indexed [y, x] where:
        - -1 = hidden cell
        - 0-8 = revealed cell with adjacent bomb count
        - 9 = revealed bomb

    Actions:
        Discrete action space of size dimension * dimension.
        Action i corresponds to cell (i % dimension, i // dimension).

    Rewards:
        - +1 for revealing a safe cell
        - +10 for winning the game
        - -10 for revealing a bomb
        - -0.1 for invalid action (already revealed)
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
        shuffle: Optional[Shuffle] = None,
    ) -> None:
        """
        Initialize the Minefield environment.

        Args:
            config: Board configuration (default: 8x8 with 8 bombs).
            render_mode: How to render the environment.
            shuffle: Fixed bomb shuffle; by default each board draws from
                the environment's seeded random generator.
        """
        super().__init__()

        self.config = config or BoardConfig()
        self.render_mode = render_mode
        self._shuffle = shuffle
        self.board = self._new_board()

        dimension = self.config.dimension
        self.observation_space = spaces.Box(
            low=HIDDEN_OBSERVATION,
            high=BOMB_OBSERVATION,
            shape=(dimension, dimension),
            dtype=np.int8,
        )

        # One action per cell
        self.action_space = spaces.Discrete(self.config.num_cells)

        self._steps = 0
        self._total_safe_cells = self.config.num_cells - self.config.num_bombs

    def _new_board(self) -> Board:
        shuffle = self._shuffle or generator_shuffle(self.np_random)
        return Board(self.config, shuffle)

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Start a new episode on a freshly generated board.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        self.board = self._new_board()
        self._steps = 0

        return self.board.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Cell index to reveal (y * dimension + x).

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
            Once the game is won or lost, further steps reveal nothing,
            score 0 and stay terminated until ``reset``.
        """
        x, y = self._action_to_position(action)
        self._steps += 1

        if not self.board.is_playing:
            return (
                self.board.get_observation(), 0.0, True, False,
                self._get_info(),
            )

        reward = self._calculate_reward(x, y)
        observation = self.board.get_observation()
        terminated = not self.board.is_playing

        return observation, reward, terminated, False, self._get_info()

    def _action_to_position(self, action: int) -> Tuple[int, int]:
        """Convert flat action index to (x, y) position."""
        dimension = self.config.dimension
        return int(action) % dimension, int(action) // dimension

    def _calculate_reward(self, x: int, y: int) -> float:
        """Reveal (x, y) and score the result."""
        if self.board.is_visible(x, y):
            return -0.1

        self.board.reveal(x, y)

        state = self.board.game_state
        if state == GameState.WON:
            return 10.0
        if state == GameState.LOST:
            return -10.0
        return 1.0

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        revealed = self.board.revealed_count
        return {
            "steps": self._steps,
            "revealed": revealed,
            "total_safe": self._total_safe_cells,
            "game_state": self.board.game_state.name,
            "valid_actions": self.config.num_cells - revealed,
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return self.board.render()
        if self.render_mode == "human":
            print(self.board.render())
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = valid action.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        for x, y in self.board.get_valid_actions():
            mask[y * self.config.dimension + x] = True
        return mask
