"""
Unit tests for board configuration and generation.

Tests configuration validation, difficulty presets, mine placement,
and adjacency counts.
"""
import random

import numpy as np
import pytest
from sweeper import (
    MINE,
    Board,
    BoardConfig,
    Difficulty,
    InvalidConfiguration,
    OutOfBoundsCoordinate,
    generate_board,
)


def brute_force_count(board: Board, row: int, col: int) -> int:
    """Count neighbouring mines the slow way."""
    count = 0
    for r in range(row - 1, row + 2):
        for c in range(col - 1, col + 2):
            if (r, c) == (row, col):
                continue
            if 0 <= r < board.rows and 0 <= c < board.cols:
                count += board.is_mine((r, c))
    return count


# ============================================================================
# Board Configuration Tests
# ============================================================================

class TestBoardConfig:
    """Test board configuration validation."""

    def test_valid_config_creation(self) -> None:
        """Valid configuration should be created successfully."""
        config = BoardConfig(8, 8, 10)
        assert config.rows == 8
        assert config.cols == 8
        assert config.mine_count == 10
        assert config.cell_count == 64

    def test_zero_rows_raises_error(self) -> None:
        """Zero rows should be rejected."""
        with pytest.raises(InvalidConfiguration, match="must be positive"):
            BoardConfig(0, 8, 10)

    def test_negative_cols_raises_error(self) -> None:
        """Negative columns should be rejected."""
        with pytest.raises(InvalidConfiguration, match="must be positive"):
            BoardConfig(8, -1, 10)

    def test_negative_mines_raises_error(self) -> None:
        """Negative mine count should be rejected."""
        with pytest.raises(InvalidConfiguration, match="cannot be negative"):
            BoardConfig(8, 8, -1)

    def test_mines_filling_board_raises_error(self) -> None:
        """A mine on every cell leaves nothing to open."""
        with pytest.raises(InvalidConfiguration, match="Too many mines"):
            BoardConfig(3, 3, 9)

    def test_max_mines_is_valid(self) -> None:
        """One safe cell is the minimum."""
        assert BoardConfig(3, 3, 8).mine_count == 8

    def test_invalid_configuration_is_value_error(self) -> None:
        """Callers catching ValueError also catch bad configurations."""
        with pytest.raises(ValueError):
            BoardConfig(2, 2, 4)


# ============================================================================
# Difficulty Tests
# ============================================================================

class TestDifficulty:
    """Test difficulty presets."""

    @pytest.mark.parametrize(
        "difficulty, expected",
        [
            (Difficulty.EASY, (8, 8, 10)),
            (Difficulty.MEDIUM, (12, 12, 20)),
            (Difficulty.HARD, (16, 16, 40)),
        ],
    )
    def test_preset_dimensions(self, difficulty, expected) -> None:
        config = difficulty.config
        assert (config.rows, config.cols, config.mine_count) == expected

    @pytest.mark.parametrize("name", ["easy", "Easy", " EASY "])
    def test_from_name_ignores_case(self, name: str) -> None:
        assert Difficulty.from_name(name) is Difficulty.EASY

    def test_unknown_name_raises_error(self) -> None:
        with pytest.raises(InvalidConfiguration, match="Unknown difficulty"):
            Difficulty.from_name("nightmare")


# ============================================================================
# Generation Tests
# ============================================================================

class TestGenerateBoard:
    """Test random mine placement."""

    @pytest.mark.parametrize(
        "rows, cols, mines",
        [(8, 8, 10), (12, 12, 20), (16, 16, 40), (1, 1, 0), (2, 3, 5)],
    )
    def test_exact_mine_count(self, rows: int, cols: int, mines: int) -> None:
        """Generated board holds exactly the requested mines."""
        board = generate_board(rows, cols, mines, random.Random(7))
        assert board.mine_count == mines
        assert len(board.mines) == mines
        assert (board.rows, board.cols) == (rows, cols)

    def test_counts_match_neighbouring_mines(self) -> None:
        """Every safe cell counts its neighbouring mines."""
        for seed in range(20):
            board = generate_board(8, 8, 10, random.Random(seed))
            for row in range(8):
                for col in range(8):
                    if board.is_mine((row, col)):
                        continue
                    expected = brute_force_count(board, row, col)
                    assert board.value((row, col)) == expected

    def test_counts_stay_in_range(self) -> None:
        board = generate_board(16, 16, 40, random.Random(3))
        safe = board.values[board.values != MINE]
        assert safe.min() >= 0
        assert safe.max() <= 8

    def test_same_seed_same_board(self) -> None:
        first = generate_board(12, 12, 20, random.Random(99))
        second = generate_board(12, 12, 20, random.Random(99))
        assert np.array_equal(first.values, second.values)

    def test_dense_board_terminates(self) -> None:
        """Rejection sampling still fills a board with one safe cell."""
        board = generate_board(4, 4, 15, random.Random(0))
        assert board.safe_cell_count == 1

    def test_invalid_input_raises_error(self) -> None:
        with pytest.raises(InvalidConfiguration):
            generate_board(3, 3, 9)
        with pytest.raises(InvalidConfiguration):
            generate_board(-1, 3, 0)


# ============================================================================
# Board Query Tests
# ============================================================================

class TestBoard:
    """Test the immutable board."""

    def test_from_mines_counts(self, corner_board: Board) -> None:
        assert corner_board.is_mine((0, 0))
        assert corner_board.value((0, 1)) == 1
        assert corner_board.value((1, 1)) == 1
        assert corner_board.value((2, 2)) == 0
        assert corner_board.value((0, 2)) == 0

    def test_board_is_read_only(self, corner_board: Board) -> None:
        with pytest.raises(ValueError):
            corner_board.values[1, 1] = 5

    def test_corner_has_three_neighbors(self, corner_board: Board) -> None:
        assert sorted(corner_board.neighbors((0, 0))) == [
            (0, 1), (1, 0), (1, 1),
        ]

    def test_center_has_eight_neighbors(self, corner_board: Board) -> None:
        assert len(corner_board.neighbors((1, 1))) == 8

    def test_no_wraparound(self) -> None:
        board = Board.from_mines(3, 3, [(0, 2)])
        assert board.value((0, 0)) == 0
        assert board.value((2, 0)) == 0

    def test_require_rejects_out_of_bounds(self, corner_board: Board) -> None:
        with pytest.raises(OutOfBoundsCoordinate):
            corner_board.require((3, 0))
        with pytest.raises(OutOfBoundsCoordinate):
            corner_board.require((0, -1))

    def test_from_mines_rejects_out_of_bounds(self) -> None:
        with pytest.raises(OutOfBoundsCoordinate):
            Board.from_mines(3, 3, [(5, 5)])

    def test_safe_cell_count(self, corner_board: Board) -> None:
        assert corner_board.safe_cell_count == 8
