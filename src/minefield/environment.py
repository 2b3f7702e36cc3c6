"""
Gymnasium environment wrapper for the minefield engine.

Provides a standard RL interface over any tessellation, plus the ANSI
text rendering shared with the command line.
"""
import random
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import FieldConfig, MineField
from .cell import MINE_OBSERVATION
from .geometry import Geometry


# ============================================================================
# Text Rendering
# ============================================================================

def render_ansi(minefield: MineField) -> str:
    """
    Render a board as plain text, one line per row.

    Cells are placed by column so triangular and hexagonal boards keep
    their outline: "." hidden, "F" flagged, "*" mine, blank for no
    adjacent mines, otherwise the count.

    Args:
        minefield: Board to render.

    Returns:
        Multi-line string.
    """
    roman = minefield.roman_digits
    width = 6 if roman else 2
    # Hexagonal rows use every other column.
    step = width // 2 if minefield.geometry is Geometry.HEXAGONAL else width
    min_col = min(col for _, col in minefield.coordinates)

    lines = []
    for _, row_cells in minefield.rows():
        line = ""
        for cell in row_cells:
            line = line.ljust((cell.col - min_col) * step)
            line += cell.label(roman).ljust(width)
        lines.append(line.rstrip())
    return "\n".join(lines)


# ============================================================================
# Tessellation Environment
# ============================================================================

class TessellationEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper on any supported tiling.

    Observation:
        1D array over the board's cells in row-major order where:
        - -1 = hidden cell
        - -2 = flagged cell
        - 0-12 = revealed cell with adjacent mine count
        - 13 = revealed mine

    Actions:
        Discrete action space of size cell_count.
        Action i reveals the i-th coordinate in row-major order.

    Rewards:
        - +1 for revealing a safe cell
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for invalid action (already revealed/flagged), or when the
          board is too small to place its mines (episode truncated)
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[FieldConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the environment.

        Args:
            config: Board configuration (default: 144 square cells, 12% mines).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or FieldConfig()
        self.board = MineField(self.config)
        self.render_mode = render_mode
        self._coordinates = self.board.coordinates

        # Define observation space
        self.observation_space = spaces.Box(
            low=-2,
            high=MINE_OBSERVATION,
            shape=(self.board.cell_count,),
            dtype=np.int8,
        )

        # Define action space (one action per cell)
        self.action_space = spaces.Discrete(self.board.cell_count)

        # Track steps for info
        self._steps = 0
        self._total_safe_cells = self.board.cell_count - self.board.mine_count

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
        rng = random.Random(int(self.np_random.integers(2**32)))
        self.board = MineField(self.config, rng)
        self._steps = 0

        observation = self.board.get_observation()
        info = self._get_info()

        return observation, info

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Index of the cell to reveal.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        row, col = self._action_to_position(action)
        self._steps += 1

        reward, truncated = self._calculate_reward(row, col)

        observation = self.board.get_observation()
        terminated = not self.board.is_playing
        info = self._get_info()

        return observation, reward, terminated, truncated, info

    def _action_to_position(self, action: int) -> Tuple[int, int]:
        """Convert flat action index to (row, col) position."""
        return self._coordinates[int(action)]

    def _calculate_reward(self, row: int, col: int) -> Tuple[float, bool]:
        """
        Calculate reward for revealing a cell.

        Args:
            row: Row index.
            col: Column index.

        Returns:
            Tuple of (reward, truncated).
        """
        cell = self.board.get_cell(row, col)

        # Invalid action (already revealed or flagged)
        if cell is None or not cell.is_hidden:
            return -0.1, False

        if not self.board.reveal(row, col):
            return -0.1, True

        if self.board.is_won:
            return 10.0, False
        if self.board.is_lost:
            return -10.0, False

        return 1.0, False

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        revealed = sum(1 for cell in self.board.cells() if cell.is_revealed)

        return {
            "steps": self._steps,
            "revealed": revealed,
            "total_safe": self._total_safe_cells,
            "game_state": self.board.outcome.name,
            "valid_actions": len(self.board.get_valid_actions()),
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return render_ansi(self.board)
        if self.render_mode == "human":
            print(render_ansi(self.board))
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = valid action.
        """
        valid = set(self.board.get_valid_actions())
        return np.array(
            [coordinate in valid for coordinate in self._coordinates],
            dtype=bool,
        )
