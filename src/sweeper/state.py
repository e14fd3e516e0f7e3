"""
Game state machine for Minesweeper.

Tracks revealed and flagged cells, elapsed time, and the terminal
outcome of one game. All mutation goes through open_cell, toggle_flag,
tick and start_or_reset.
"""
import logging
import random
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, FrozenSet, Optional, Tuple, Union

import numpy as np

from .board import (
    Board,
    BoardConfig,
    Difficulty,
    Position,
    generate_from_config,
)
from .cell import CellView
from .clock import GameClock
from .reveal import reveal

logger = logging.getLogger(__name__)

BoardFactory = Callable[[BoardConfig, Optional[random.Random]], Board]
DifficultyLike = Union[Difficulty, BoardConfig]


# ============================================================================
# Constants
# ============================================================================

class GameStatus(Enum):
    """Possible states of the game."""

    NOT_STARTED = auto()
    IN_PROGRESS = auto()
    WON = auto()
    LOST = auto()


class Outcome(Enum):
    """Result of the game as shown to the player."""

    IN_PROGRESS = auto()
    WON = auto()
    LOST = auto()


class GameEvent(Enum):
    """Terminal events consumed by the presentation layer."""

    DETONATED = ("Game Over", "You hit a mine!")
    COMPLETED = ("Congratulations!", "You won the game!")

    @property
    def title(self) -> str:
        return self.value[0]

    @property
    def message(self) -> str:
        return self.value[1]


_FACES = {
    Outcome.IN_PROGRESS: "\U0001F603",
    Outcome.LOST: "\U0001F635",
    Outcome.WON: "\U0001F60E",
}


# ============================================================================
# Snapshot
# ============================================================================

@dataclass(frozen=True)
class GameSnapshot:
    """
    Immutable view of a game handed to the presentation layer.

    Attributes:
        rows: Number of rows.
        cols: Number of columns.
        cells: Per-cell views, indexed [row][col].
        status: State machine position.
        outcome: Player-facing result.
        elapsed_seconds: Seconds on the clock.
        remaining_mines: Mine count minus flags placed (may be negative).
        mine_count: Mines on the board.
        difficulty: Preset name, or "Custom".
    """

    rows: int
    cols: int
    cells: Tuple[Tuple[CellView, ...], ...]
    status: GameStatus
    outcome: Outcome
    elapsed_seconds: int
    remaining_mines: int
    mine_count: int
    difficulty: str

    def cell(self, row: int, col: int) -> CellView:
        return self.cells[row][col]

    @property
    def face(self) -> str:
        """Status indicator for the restart button."""
        return _FACES[self.outcome]

    @property
    def revealed_count(self) -> int:
        return sum(cell.revealed for row in self.cells for cell in row)

    def to_observation(self) -> np.ndarray:
        """
        Get board state as a numpy array.

        Returns:
            2D int8 array using CellView.to_observation encoding.
        """
        obs = np.zeros((self.rows, self.cols), dtype=np.int8)
        for row in range(self.rows):
            for col in range(self.cols):
                obs[row, col] = self.cells[row][col].to_observation()
        return obs

    def render_ansi(self) -> str:
        """Render board as a text grid with a status header."""
        header = (
            f"{self.remaining_mines:>3}  {self.face}  "
            f"{self.elapsed_seconds:>4}s"
        )
        lines = [header]
        for row in self.cells:
            lines.append(" ".join(cell.to_char() for cell in row))
        return "\n".join(lines)


# ============================================================================
# Game State
# ============================================================================

class GameState:
    """
    Authoritative state of a single Minesweeper game.

    Board, revealed set, flagged set, status and clock are created
    together and replaced together on reset.
    """

    def __init__(
        self,
        difficulty: DifficultyLike = Difficulty.EASY,
        rng: Optional[random.Random] = None,
        board_factory: Optional[BoardFactory] = None,
    ) -> None:
        """
        Initialize and deal the first board.

        Args:
            difficulty: Preset or explicit board configuration.
            rng: Random source for mine placement.
            board_factory: Builds a board for a configuration
                (default: random generation).
        """
        self._rng = rng
        self._board_factory = board_factory or generate_from_config
        self._clock = GameClock()
        self._difficulty: DifficultyLike = difficulty
        self._board: Board
        self._revealed: FrozenSet[Position] = frozenset()
        self._flagged: FrozenSet[Position] = frozenset()
        self._status = GameStatus.NOT_STARTED
        self.start_or_reset(difficulty)

    # ========================================================================
    # Transitions
    # ========================================================================

    def start_or_reset(
        self, difficulty: Optional[DifficultyLike] = None
    ) -> None:
        """
        Deal a new board and clear all progress.

        Args:
            difficulty: New preset or configuration (default: current one).

        Raises:
            InvalidConfiguration: If the configuration is not playable.
                The current game is left untouched.
        """
        difficulty = difficulty if difficulty is not None else self._difficulty
        config = config_for(difficulty)
        board = self._board_factory(config, self._rng)

        self._difficulty = difficulty
        self._board = board
        self._revealed = frozenset()
        self._flagged = frozenset()
        self._status = GameStatus.NOT_STARTED
        self._clock.reset()
        logger.info(
            "New %s game: %dx%d with %d mines",
            self.difficulty_name, board.rows, board.cols, board.mine_count,
        )

    def open_cell(self, row: int, col: int) -> Optional[GameEvent]:
        """
        Open a cell.

        Ignored when the game is over or the cell is revealed or flagged.
        The first accepted open starts the clock.

        Args:
            row: Row index.
            col: Column index.

        Returns:
            DETONATED or COMPLETED when the move ends the game, else None.

        Raises:
            OutOfBoundsCoordinate: If (row, col) is outside the board.
        """
        position = (row, col)
        self._board.require(position)
        if not self._can_open(position):
            return None

        if self._status == GameStatus.NOT_STARTED:
            self._status = GameStatus.IN_PROGRESS
            self._clock.start()

        self._revealed = reveal(self._board, self._revealed, position)

        if self._board.is_mine(position):
            return self._finish(GameStatus.LOST, GameEvent.DETONATED)
        if self._is_cleared():
            return self._finish(GameStatus.WON, GameEvent.COMPLETED)
        return None

    def toggle_flag(self, row: int, col: int) -> bool:
        """
        Toggle flag on a cell. Never starts the clock.

        Args:
            row: Row index.
            col: Column index.

        Returns:
            True if flag was toggled, False if the game is over or the
            cell is revealed.

        Raises:
            OutOfBoundsCoordinate: If (row, col) is outside the board.
        """
        position = (row, col)
        self._board.require(position)
        if self.is_terminal or position in self._revealed:
            return False
        if position in self._flagged:
            self._flagged = self._flagged - {position}
        else:
            self._flagged = self._flagged | {position}
        return True

    def tick(self) -> int:
        """Advance elapsed time by one second while in progress."""
        if self._status != GameStatus.IN_PROGRESS:
            return self._clock.elapsed
        return self._clock.tick()

    def _can_open(self, position: Position) -> bool:
        if self.is_terminal:
            return False
        return position not in self._revealed and position not in self._flagged

    def _is_cleared(self) -> bool:
        """Check if every non-mine cell is revealed."""
        hidden = self._board.cell_count - len(self._revealed)
        return hidden == self._board.mine_count

    def _finish(self, status: GameStatus, event: GameEvent) -> GameEvent:
        self._status = status
        self._clock.stop()
        logger.info(
            "Game %s after %ds (%d cells revealed)",
            status.name.lower(), self._clock.elapsed, len(self._revealed),
        )
        return event

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def board(self) -> Board:
        return self._board

    @property
    def difficulty(self) -> DifficultyLike:
        return self._difficulty

    @property
    def difficulty_name(self) -> str:
        if isinstance(self._difficulty, Difficulty):
            return self._difficulty.value
        return "Custom"

    @property
    def config(self) -> BoardConfig:
        return config_for(self._difficulty)

    @property
    def status(self) -> GameStatus:
        return self._status

    @property
    def outcome(self) -> Outcome:
        if self._status == GameStatus.WON:
            return Outcome.WON
        if self._status == GameStatus.LOST:
            return Outcome.LOST
        return Outcome.IN_PROGRESS

    @property
    def is_terminal(self) -> bool:
        return self._status in (GameStatus.WON, GameStatus.LOST)

    @property
    def revealed(self) -> FrozenSet[Position]:
        return self._revealed

    @property
    def flagged(self) -> FrozenSet[Position]:
        return self._flagged

    @property
    def elapsed_seconds(self) -> int:
        return self._clock.elapsed

    @property
    def clock_running(self) -> bool:
        return self._clock.running

    @property
    def remaining_mines(self) -> int:
        """Mines left to flag. Goes negative when over-flagged."""
        return self._board.mine_count - len(self._flagged)

    def snapshot(self) -> GameSnapshot:
        """Capture an immutable view for rendering."""
        board = self._board
        cells = tuple(
            tuple(
                self._cell_view((row, col))
                for col in range(board.cols)
            )
            for row in range(board.rows)
        )
        return GameSnapshot(
            rows=board.rows,
            cols=board.cols,
            cells=cells,
            status=self._status,
            outcome=self.outcome,
            elapsed_seconds=self._clock.elapsed,
            remaining_mines=self.remaining_mines,
            mine_count=board.mine_count,
            difficulty=self.difficulty_name,
        )

    def _cell_view(self, position: Position) -> CellView:
        revealed = position in self._revealed
        return CellView(
            revealed=revealed,
            flagged=position in self._flagged,
            value=self._board.value(position) if revealed else None,
        )


def config_for(difficulty: DifficultyLike) -> BoardConfig:
    if isinstance(difficulty, Difficulty):
        return difficulty.config
    return difficulty
