"""
Minesweeper core.

Provides board generation, the flood-fill reveal engine, and the
game state machine, plus a controller and a Gymnasium environment
for presentation layers to drive them.
"""
from .errors import InvalidConfiguration, OutOfBoundsCoordinate
from .board import (
    Board,
    BoardConfig,
    Difficulty,
    MINE,
    EASY,
    MEDIUM,
    HARD,
    generate_board,
)
from .reveal import reveal
from .cell import CellState, CellView
from .clock import AsyncioTicker, GameClock, Ticker
from .state import GameEvent, GameSnapshot, GameState, GameStatus, Outcome
from .controller import ControllerSettings, GameController
from .environment import MinesweeperEnv

__all__ = [
    "InvalidConfiguration",
    "OutOfBoundsCoordinate",
    "Board",
    "BoardConfig",
    "Difficulty",
    "MINE",
    "EASY",
    "MEDIUM",
    "HARD",
    "generate_board",
    "reveal",
    "CellState",
    "CellView",
    "AsyncioTicker",
    "GameClock",
    "Ticker",
    "GameEvent",
    "GameSnapshot",
    "GameState",
    "GameStatus",
    "Outcome",
    "ControllerSettings",
    "GameController",
    "MinesweeperEnv",
]
