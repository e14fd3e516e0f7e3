"""
Pytest configuration and shared fixtures.
"""
import random
import sys
from pathlib import Path
from typing import Callable, Optional

import pytest

# Add src (library) and the repo root (entry points) to path for imports
ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT))
sys.path.insert(0, str(ROOT / "src"))

from sweeper import Board, BoardConfig, GameController, GameState


# ============================================================================
# Helpers
# ============================================================================

class ManualTicker:
    """Ticker driven by the test instead of a clock."""

    def __init__(self) -> None:
        self.callback: Optional[Callable[[], None]] = None
        self.starts = 0
        self.cancels = 0

    @property
    def active(self) -> bool:
        return self.callback is not None

    def start(self, callback: Callable[[], None]) -> None:
        if self.active:
            return
        self.starts += 1
        self.callback = callback

    def cancel(self) -> None:
        if self.active:
            self.cancels += 1
        self.callback = None

    def fire(self, times: int = 1) -> None:
        """Deliver ticks while the schedule is active."""
        for _ in range(times):
            if self.callback is None:
                return
            self.callback()


def fixed_factory(board: Board):
    """Board factory that always deals the same board."""
    return lambda config, rng: board


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def corner_board() -> Board:
    """3x3 board with a single mine in the top-left corner."""
    return Board.from_mines(3, 3, [(0, 0)])


@pytest.fixture
def split_board() -> Board:
    """
    5x5 board with a wall of mines down column 2.

    Flood fill from the left half never reaches the right half.
    """
    return Board.from_mines(5, 5, [(row, 2) for row in range(5)])


@pytest.fixture
def empty_board() -> Board:
    """5x5 board with no mines for cascade testing."""
    return Board.from_mines(5, 5, [])


# ============================================================================
# Game Fixtures
# ============================================================================

@pytest.fixture
def corner_game(corner_board: Board) -> GameState:
    """Game dealt on the 3x3 corner board."""
    return GameState(
        BoardConfig(3, 3, 1), board_factory=fixed_factory(corner_board)
    )


@pytest.fixture
def split_game(split_board: Board) -> GameState:
    """Game dealt on the 5x5 split board."""
    return GameState(
        BoardConfig(5, 5, 5), board_factory=fixed_factory(split_board)
    )


@pytest.fixture
def seeded_game() -> GameState:
    """Easy game with reproducible mine placement."""
    return GameState(rng=random.Random(1234))


# ============================================================================
# Controller Fixtures
# ============================================================================

@pytest.fixture
def ticker() -> ManualTicker:
    return ManualTicker()


@pytest.fixture
def corner_controller(
    corner_board: Board, ticker: ManualTicker
) -> GameController:
    """Controller on the 3x3 corner board with a manual ticker."""
    return GameController(
        BoardConfig(3, 3, 1),
        ticker=ticker,
        board_factory=fixed_factory(corner_board),
    )
