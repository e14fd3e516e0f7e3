"""
Board module for Minesweeper.

Implements board configuration, difficulty presets, and the immutable
board produced by rejection-sampled mine placement.
"""
import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Iterable, List, Optional, Tuple

import numpy as np

from .errors import InvalidConfiguration, OutOfBoundsCoordinate

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


# ============================================================================
# Constants
# ============================================================================

MINE = -1

_NEIGHBOR_OFFSETS = tuple(
    (delta_row, delta_col)
    for delta_row in (-1, 0, 1)
    for delta_col in (-1, 0, 1)
    if (delta_row, delta_col) != (0, 0)
)


@dataclass(frozen=True)
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        rows: Number of rows.
        cols: Number of columns.
        mine_count: Total mines to place.
    """

    rows: int = 8
    cols: int = 8
    mine_count: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are playable."""
        if self.rows < 1 or self.cols < 1:
            raise InvalidConfiguration("Board dimensions must be positive")
        if self.mine_count < 0:
            raise InvalidConfiguration("Number of mines cannot be negative")
        max_mines = self.rows * self.cols - 1
        if self.mine_count > max_mines:
            raise InvalidConfiguration(f"Too many mines (max {max_mines})")

    @property
    def cell_count(self) -> int:
        """Total number of cells on the board."""
        return self.rows * self.cols


# Preset difficulty levels
EASY = BoardConfig(8, 8, 10)
MEDIUM = BoardConfig(12, 12, 20)
HARD = BoardConfig(16, 16, 40)


class Difficulty(Enum):
    """Selectable difficulty presets."""

    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"

    @property
    def config(self) -> BoardConfig:
        """Board configuration for this preset."""
        return _PRESETS[self]

    @classmethod
    def from_name(cls, name: str) -> "Difficulty":
        """
        Look up a preset by name, ignoring case.

        Raises:
            InvalidConfiguration: If no preset has that name.
        """
        for difficulty in cls:
            if difficulty.value.lower() == name.strip().lower():
                return difficulty
        choices = ", ".join(d.value for d in cls)
        raise InvalidConfiguration(
            f"Unknown difficulty {name!r} (choose from {choices})"
        )


_PRESETS = {
    Difficulty.EASY: EASY,
    Difficulty.MEDIUM: MEDIUM,
    Difficulty.HARD: HARD,
}


# ============================================================================
# Board Class
# ============================================================================

@dataclass(frozen=True, eq=False)
class Board:
    """
    Immutable Minesweeper board.

    Each cell holds MINE (-1) or the number of mines among its
    (up to 8) neighbours. The grid never changes after construction.
    """

    values: np.ndarray = field(repr=False)

    def __post_init__(self) -> None:
        """Freeze the underlying grid."""
        grid = np.array(self.values, dtype=np.int8)
        grid.setflags(write=False)
        object.__setattr__(self, "values", grid)

    @classmethod
    def from_mines(
        cls, rows: int, cols: int, mines: Iterable[Position]
    ) -> "Board":
        """
        Build a board from explicit mine positions.

        Args:
            rows: Number of rows.
            cols: Number of columns.
            mines: (row, col) positions holding a mine.

        Returns:
            Board with adjacency counts filled in.
        """
        mine_set = set(mines)
        BoardConfig(rows, cols, len(mine_set))
        mask = np.zeros((rows, cols), dtype=bool)
        for row, col in mine_set:
            if not (0 <= row < rows and 0 <= col < cols):
                raise OutOfBoundsCoordinate(row, col, rows, cols)
            mask[row, col] = True
        return cls(_count_adjacent_mines(mask))

    # ========================================================================
    # Dimensions
    # ========================================================================

    @property
    def rows(self) -> int:
        return self.values.shape[0]

    @property
    def cols(self) -> int:
        return self.values.shape[1]

    @property
    def cell_count(self) -> int:
        return self.values.size

    @property
    def mine_count(self) -> int:
        return int(np.count_nonzero(self.values == MINE))

    @property
    def safe_cell_count(self) -> int:
        return self.cell_count - self.mine_count

    @property
    def mines(self) -> FrozenSet[Position]:
        """Positions of every mine."""
        rows, cols = np.nonzero(self.values == MINE)
        return frozenset(zip(rows.tolist(), cols.tolist()))

    # ========================================================================
    # Cell Queries
    # ========================================================================

    def contains(self, position: Position) -> bool:
        """Check if position is within board bounds."""
        row, col = position
        return 0 <= row < self.rows and 0 <= col < self.cols

    def require(self, position: Position) -> None:
        """
        Guard a coordinate coming from a caller.

        Raises:
            OutOfBoundsCoordinate: If position is outside the grid.
        """
        if not self.contains(position):
            raise OutOfBoundsCoordinate(
                position[0], position[1], self.rows, self.cols
            )

    def value(self, position: Position) -> int:
        """MINE or the adjacent mine count at position."""
        return int(self.values[position])

    def is_mine(self, position: Position) -> bool:
        return self.value(position) == MINE

    def neighbors(self, position: Position) -> List[Position]:
        """
        Get valid neighbouring cell positions.

        Args:
            position: (row, col) of the center cell.

        Returns:
            In-bounds (row, col) tuples, at most 8.
        """
        row, col = position
        neighbors = []
        for delta_row, delta_col in _NEIGHBOR_OFFSETS:
            neighbor = (row + delta_row, col + delta_col)
            if self.contains(neighbor):
                neighbors.append(neighbor)
        return neighbors


# ============================================================================
# Board Generation
# ============================================================================

def generate_board(
    rows: int,
    cols: int,
    mine_count: int,
    rng: Optional[random.Random] = None,
) -> Board:
    """
    Generate a board with randomly placed mines.

    Mines are placed by drawing uniform random coordinates and rejecting
    any that already hold a mine. The first opened cell may be a mine.

    Args:
        rows: Number of rows.
        cols: Number of columns.
        mine_count: Mines to place, strictly fewer than rows * cols.
        rng: Random source, defaults to the module-level generator.

    Returns:
        Fully determined board.

    Raises:
        InvalidConfiguration: If the dimensions or mine count are invalid.
    """
    BoardConfig(rows, cols, mine_count)
    source = rng if rng is not None else random

    mask = np.zeros((rows, cols), dtype=bool)
    placed = 0
    draws = 0
    while placed < mine_count:
        row = source.randrange(rows)
        col = source.randrange(cols)
        draws += 1
        if not mask[row, col]:
            mask[row, col] = True
            placed += 1

    logger.debug(
        "Generated %dx%d board with %d mines in %d draws",
        rows, cols, mine_count, draws,
    )
    return Board(_count_adjacent_mines(mask))


def generate_from_config(
    config: BoardConfig, rng: Optional[random.Random] = None
) -> Board:
    """Generate a board for a validated configuration."""
    return generate_board(config.rows, config.cols, config.mine_count, rng)


def _count_adjacent_mines(mask: np.ndarray) -> np.ndarray:
    """Calculate adjacent mine counts, marking mines with MINE."""
    rows, cols = mask.shape
    padded = np.pad(mask.astype(np.int8), 1)
    counts = np.zeros((rows, cols), dtype=np.int8)
    for delta_row, delta_col in _NEIGHBOR_OFFSETS:
        counts += padded[
            1 + delta_row:1 + delta_row + rows,
            1 + delta_col:1 + delta_col + cols,
        ]
    counts[mask] = MINE
    return counts
