"""
Gymnasium environment wrapper for Minesweeper.

Exposes the game state through a standard RL interface so scripted
or learning players can drive the same core as the terminal UI.
"""
import random
from typing import Any, Dict, Iterable, Optional, SupportsFloat, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import (
    Board,
    BoardConfig,
    Difficulty,
    Position,
    generate_from_config,
)
from .state import DifficultyLike, GameEvent, GameState, config_for


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D array where:
        - -1 = hidden cell
        - -2 = flagged hidden cell
        - 0-8 = revealed cell with adjacent mine count
        - 9 = revealed mine
        A flagged cell opened by flood fill shows its value.

    Actions:
        Discrete action space of size 2 * rows * cols.
        Action i < rows * cols opens cell (i // cols, i % cols).
        Action i >= rows * cols toggles the flag on cell i - rows * cols.

    Rewards:
        - +1 for opening a safe cell
        - +10 for winning the game
        - -10 for hitting a mine
        - 0 for toggling a flag
        - -0.1 for an action that changes nothing
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        difficulty: DifficultyLike = Difficulty.EASY,
        render_mode: Optional[str] = None,
        mines: Optional[Iterable[Position]] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            difficulty: Preset or board configuration.
            render_mode: How to render the environment.
            mines: Fixed mine layout used on every reset instead of
                random placement.
        """
        super().__init__()

        self.config: BoardConfig = config_for(difficulty)
        self.render_mode = render_mode
        self._fixed_mines = None
        if mines is not None:
            self._fixed_mines = frozenset(mines)
            difficulty = self.config = BoardConfig(
                self.config.rows, self.config.cols, len(self._fixed_mines)
            )
        self.game = GameState(difficulty, board_factory=self._build_board)

        self.observation_space = spaces.Box(
            low=-2,
            high=9,
            shape=(self.config.rows, self.config.cols),
            dtype=np.int8,
        )

        # One open action and one flag action per cell
        self._cells = self.config.rows * self.config.cols
        self.action_space = spaces.Discrete(2 * self._cells)

        self._steps = 0

    def _build_board(
        self, config: BoardConfig, rng: Optional[random.Random]
    ) -> Board:
        if self._fixed_mines is not None:
            return Board.from_mines(
                config.rows, config.cols, self._fixed_mines
            )
        seed = int(self.np_random.integers(2**32))
        return generate_from_config(config, random.Random(seed))

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
        self.game.start_or_reset()
        self._steps = 0

        return self._observe(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Cell index to open, or cells + index to flag.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        flag, (row, col) = self._decode_action(int(action))
        self._steps += 1

        if flag:
            reward = 0.0 if self.game.toggle_flag(row, col) else -0.1
        else:
            reward = self._open(row, col)

        terminated = self.game.is_terminal
        return self._observe(), reward, terminated, False, self._get_info()

    def _decode_action(self, action: int) -> Tuple[bool, Position]:
        """Convert flat action index to (is_flag, (row, col))."""
        flag = action >= self._cells
        index = action - self._cells if flag else action
        return flag, divmod(index, self.config.cols)

    def _open(self, row: int, col: int) -> float:
        """
        Open a cell and score the result.

        Args:
            row: Row index.
            col: Column index.

        Returns:
            Reward value.
        """
        before = len(self.game.revealed)
        event = self.game.open_cell(row, col)

        if event == GameEvent.COMPLETED:
            return 10.0
        if event == GameEvent.DETONATED:
            return -10.0
        if len(self.game.revealed) == before:
            return -0.1
        return 1.0

    def _observe(self) -> np.ndarray:
        return self.game.snapshot().to_observation()

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        return {
            "steps": self._steps,
            "revealed": len(self.game.revealed),
            "flags": len(self.game.flagged),
            "remaining_mines": self.game.remaining_mines,
            "status": self.game.status.name,
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return self.game.snapshot().render_ansi()
        if self.render_mode == "human":
            print(self.game.snapshot().render_ansi())
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of actions that change the game.

        Returns:
            Boolean array where True = valid action.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        if self.game.is_terminal:
            return mask
        for row in range(self.config.rows):
            for col in range(self.config.cols):
                position = (row, col)
                if position in self.game.revealed:
                    continue
                index = row * self.config.cols + col
                mask[self._cells + index] = True
                if position not in self.game.flagged:
                    mask[index] = True
        return mask
