"""
Controller between a presentation layer and the game state.

Translates gestures into state transitions, owns the tick schedule,
and notifies listeners of terminal events.
"""
import asyncio
import logging
import random
from dataclasses import dataclass
from typing import Callable, List, Optional, Union

from .board import BoardConfig, Difficulty
from .clock import AsyncioTicker, Ticker
from .errors import InvalidConfiguration
from .state import (
    BoardFactory,
    DifficultyLike,
    GameEvent,
    GameSnapshot,
    GameState,
    GameStatus,
)

logger = logging.getLogger(__name__)

EventListener = Callable[[GameEvent, GameSnapshot], None]
TickListener = Callable[[GameSnapshot], None]


# ============================================================================
# Settings
# ============================================================================

@dataclass(frozen=True)
class ControllerSettings:
    """
    Input and timing settings for a controller.

    Attributes:
        long_press_seconds: Minimum hold before a press toggles a flag.
        tick_interval: Seconds between clock ticks.
    """

    long_press_seconds: float = 2.0
    tick_interval: float = 1.0

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.long_press_seconds <= 0:
            raise InvalidConfiguration("long_press_seconds must be positive")
        if self.tick_interval <= 0:
            raise InvalidConfiguration("tick_interval must be positive")


# ============================================================================
# Controller
# ============================================================================

class GameController:
    """
    Entry point for presentation code.

    Calls must be serialized, e.g. all made from one event loop.
    """

    def __init__(
        self,
        difficulty: Union[DifficultyLike, str] = Difficulty.EASY,
        settings: Optional[ControllerSettings] = None,
        ticker: Optional[Ticker] = None,
        rng: Optional[random.Random] = None,
        board_factory: Optional[BoardFactory] = None,
    ) -> None:
        """
        Initialize the controller and deal the first game.

        Args:
            difficulty: Preset, preset name, or board configuration.
            settings: Input and timing settings.
            ticker: Tick source (default: AsyncioTicker on the running loop).
            rng: Random source for mine placement.
            board_factory: Optional board builder, see GameState.

        Raises:
            RuntimeError: If no ticker is given and no asyncio loop is
                running.
        """
        self.settings = settings or ControllerSettings()
        if ticker is None:
            ticker = AsyncioTicker(
                self.settings.tick_interval, asyncio.get_running_loop()
            )
        self.ticker: Ticker = ticker
        self.state = GameState(
            _resolve(difficulty), rng=rng, board_factory=board_factory
        )
        self._event_listeners: List[EventListener] = []
        self._tick_listeners: List[TickListener] = []

    # ========================================================================
    # Gestures
    # ========================================================================

    def select_difficulty(
        self, difficulty: Union[DifficultyLike, str]
    ) -> GameSnapshot:
        """Start a new game at the given difficulty."""
        return self._reset(_resolve(difficulty))

    def restart(self) -> GameSnapshot:
        """Start a new game at the current difficulty."""
        return self._reset(None)

    def tap(self, row: int, col: int) -> GameSnapshot:
        """
        Open a cell.

        Raises:
            OutOfBoundsCoordinate: If (row, col) is outside the board.
        """
        event = self.state.open_cell(row, col)
        self._sync_ticker()
        snapshot = self.state.snapshot()
        if event is not None:
            self._dispatch(event, snapshot)
        return snapshot

    def long_press(
        self, row: int, col: int, held_seconds: Optional[float] = None
    ) -> GameSnapshot:
        """
        Toggle a flag if the press was held long enough.

        Args:
            row: Row index.
            col: Column index.
            held_seconds: Hold duration, or None when the caller has
                already recognised the gesture as a long press.

        Raises:
            OutOfBoundsCoordinate: If (row, col) is outside the board.
        """
        self.state.board.require((row, col))
        threshold = self.settings.long_press_seconds
        if held_seconds is None or held_seconds >= threshold:
            self.state.toggle_flag(row, col)
        return self.state.snapshot()

    def snapshot(self) -> GameSnapshot:
        return self.state.snapshot()

    # ========================================================================
    # Listeners
    # ========================================================================

    def subscribe(self, listener: EventListener) -> None:
        """Receive (event, snapshot) whenever a game is won or lost."""
        self._event_listeners.append(listener)

    def unsubscribe(self, listener: EventListener) -> None:
        self._event_listeners.remove(listener)

    def on_tick(self, listener: TickListener) -> None:
        """Receive a snapshot after every clock tick."""
        self._tick_listeners.append(listener)

    def close(self) -> None:
        """Stop the clock schedule."""
        self.ticker.cancel()

    # ========================================================================
    # Internals
    # ========================================================================

    def _reset(self, difficulty: Optional[DifficultyLike]) -> GameSnapshot:
        self.state.start_or_reset(difficulty)
        self.ticker.cancel()
        return self.state.snapshot()

    def _sync_ticker(self) -> None:
        """Run the ticker exactly while the game is in progress."""
        if self.state.status == GameStatus.IN_PROGRESS:
            if not self.ticker.active:
                self.ticker.start(self._handle_tick)
        elif self.ticker.active:
            self.ticker.cancel()

    def _handle_tick(self) -> None:
        self.state.tick()
        snapshot = self.state.snapshot()
        for listener in list(self._tick_listeners):
            listener(snapshot)

    def _dispatch(self, event: GameEvent, snapshot: GameSnapshot) -> None:
        logger.info("%s: %s", event.title, event.message)
        for listener in list(self._event_listeners):
            listener(event, snapshot)


def _resolve(difficulty: Union[DifficultyLike, str]) -> DifficultyLike:
    if isinstance(difficulty, str):
        return Difficulty.from_name(difficulty)
    if not isinstance(difficulty, (Difficulty, BoardConfig)):
        raise InvalidConfiguration(f"Unsupported difficulty: {difficulty!r}")
    return difficulty
