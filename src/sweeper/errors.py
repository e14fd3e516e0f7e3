"""
Exceptions raised by the Minesweeper core.

Normal gameplay inputs (opening a revealed or flagged cell, acting on a
finished game) are no-ops and never raise.
"""


class InvalidConfiguration(ValueError):
    """Board dimensions, mine count, or settings are not playable."""


class OutOfBoundsCoordinate(IndexError):
    """A coordinate outside the grid was passed to the core."""

    def __init__(self, row: int, col: int, rows: int, cols: int) -> None:
        super().__init__(
            f"Cell ({row}, {col}) is outside the {rows}x{cols} board"
        )
        self.row = row
        self.col = col
