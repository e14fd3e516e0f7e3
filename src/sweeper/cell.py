"""
Cell module for Minesweeper.

Represents the rendered view of a single cell: whether it is
revealed or flagged, and what it shows once opened.
"""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from .board import MINE


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible visual states of a cell."""

    HIDDEN = auto()
    REVEALED = auto()
    FLAGGED = auto()


# ============================================================================
# Cell View
# ============================================================================

@dataclass(frozen=True)
class CellView:
    """
    Read-only view of one cell in a game snapshot.

    Attributes:
        revealed: Whether the cell has been opened.
        flagged: Whether the player marked the cell.
        value: MINE or adjacent mine count once revealed, None while hidden.
    """

    revealed: bool = False
    flagged: bool = False
    value: Optional[int] = None

    @property
    def state(self) -> CellState:
        """Display state. A flag is drawn even over an opened cell."""
        if self.flagged:
            return CellState.FLAGGED
        if self.revealed:
            return CellState.REVEALED
        return CellState.HIDDEN

    @property
    def is_mine(self) -> bool:
        """Check if cell is a revealed mine."""
        return self.revealed and self.value == MINE

    def to_observation(self) -> int:
        """
        Convert cell to an integer observation.

        An opened cell reports its value even if a flag is still set on it.

        Returns:
            -1: Hidden cell
            -2: Flagged hidden cell
            0-8: Revealed cell with adjacent mine count
            9: Revealed mine
        """
        if self.revealed:
            return 9 if self.is_mine else self.value
        if self.flagged:
            return -2
        return -1

    def to_char(self) -> str:
        """Single character used by the text renderer."""
        if self.state == CellState.FLAGGED:
            return "F"
        observation = self.to_observation()
        if observation == -1:
            return "."
        if observation == 9:
            return "*"
        if observation == 0:
            return " "
        return str(observation)
