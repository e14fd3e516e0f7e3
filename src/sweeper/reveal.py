"""
Reveal engine for Minesweeper.

Computes the set of cells opened by a single tap, flood-filling
outward from cells with no adjacent mines.
"""
import logging
from typing import AbstractSet, FrozenSet, List

from .board import Board, Position

logger = logging.getLogger(__name__)


def reveal(
    board: Board,
    revealed: AbstractSet[Position],
    origin: Position,
) -> FrozenSet[Position]:
    """
    Open a cell and everything its flood fill reaches.

    A mine is revealed alone. A zero-count cell expands to all of its
    neighbours, a numbered cell is revealed without expanding. Cells
    already revealed stop the fill. Flags do not.

    Args:
        board: Board being played.
        revealed: Cells opened so far.
        origin: (row, col) of the tapped cell.

    Returns:
        New revealed set. Equal to `revealed` if origin was already open.

    Raises:
        OutOfBoundsCoordinate: If origin is outside the board.
    """
    board.require(origin)

    if origin in revealed:
        return frozenset(revealed)

    if board.is_mine(origin):
        return frozenset(revealed) | {origin}

    opened = set(revealed)
    stack: List[Position] = [origin]
    while stack:
        position = stack.pop()
        if position in opened:
            continue
        opened.add(position)
        if board.value(position) == 0:
            stack.extend(
                neighbor for neighbor in board.neighbors(position)
                if neighbor not in opened
            )

    logger.debug(
        "Reveal at %s opened %d cells", origin, len(opened) - len(revealed)
    )
    return frozenset(opened)
