"""
Unit tests for CellView.

Tests display state priority, observation values, and text rendering.
"""
import pytest
from sweeper import MINE, CellState, CellView


# ============================================================================
# Cell State Tests
# ============================================================================

class TestCellState:
    """Test display state of a cell view."""

    def test_default_cell_is_hidden(self) -> None:
        cell = CellView()
        assert cell.state == CellState.HIDDEN
        assert cell.value is None

    def test_revealed_cell(self) -> None:
        assert CellView(revealed=True, value=3).state == CellState.REVEALED

    def test_flagged_cell(self) -> None:
        assert CellView(flagged=True).state == CellState.FLAGGED

    def test_flag_drawn_over_revealed_cell(self) -> None:
        """A flag reached by flood fill is still shown."""
        cell = CellView(revealed=True, flagged=True, value=0)
        assert cell.state == CellState.FLAGGED

    def test_revealed_mine(self) -> None:
        assert CellView(revealed=True, value=MINE).is_mine is True

    def test_hidden_cell_is_not_mine(self) -> None:
        assert CellView().is_mine is False

    def test_cell_view_is_immutable(self) -> None:
        cell = CellView()
        with pytest.raises(AttributeError):
            cell.revealed = True


# ============================================================================
# Cell Observation Tests
# ============================================================================

class TestCellObservation:
    """Test integer observation values."""

    def test_hidden_cell_observation_is_negative_one(self) -> None:
        assert CellView().to_observation() == -1

    def test_flagged_cell_observation_is_negative_two(self) -> None:
        assert CellView(flagged=True).to_observation() == -2

    @pytest.mark.parametrize("count", range(0, 9))
    def test_revealed_cell_observation_matches_count(self, count: int) -> None:
        cell = CellView(revealed=True, value=count)
        assert cell.to_observation() == count

    def test_revealed_mine_observation_is_nine(self) -> None:
        assert CellView(revealed=True, value=MINE).to_observation() == 9

    def test_opened_flagged_cell_observation_is_value(self) -> None:
        """A flag left on a cell opened by flood fill hides nothing."""
        cell = CellView(revealed=True, flagged=True, value=2)
        assert cell.to_observation() == 2


# ============================================================================
# Cell Rendering Tests
# ============================================================================

class TestCellChar:
    """Test text rendering characters."""

    @pytest.mark.parametrize(
        "cell, expected",
        [
            (CellView(), "."),
            (CellView(flagged=True), "F"),
            (CellView(revealed=True, value=MINE), "*"),
            (CellView(revealed=True, value=0), " "),
            (CellView(revealed=True, value=4), "4"),
            (CellView(revealed=True, flagged=True, value=1), "F"),
        ],
    )
    def test_to_char(self, cell: CellView, expected: str) -> None:
        assert cell.to_char() == expected
