"""Test grid coordinate helpers and rendering."""

import pytest

from src.board import (
    Cell,
    can_extract_word,
    empty_grid,
    index_from_row_col,
    is_valid_column,
    is_valid_row,
    is_within_bounds,
    render_grid,
    row_col_from_index,
)


class TestIndexFromRowCol:
    """Test row/col to linear index conversion."""

    def test_bottom_left_of_default_grid(self):
        """Row 5, column 0 of a 7-column grid is index 35."""
        assert index_from_row_col(5, 0, 7) == 35

    def test_origin(self):
        """Top-left corner is index 0."""
        assert index_from_row_col(0, 0, 7) == 0

    @pytest.mark.parametrize("row, col, columns", [
        (-1, 0, 7),
        (0, -1, 7),
        (0, 7, 7),
        (1.5, 0, 7),
        ("1", 0, 7),
        (None, 0, 7),
        (True, 0, 7),
        (0, 0, 0),
        (0, 0, -3),
        (0, 0, 7.0),
    ])
    def test_invalid_inputs_return_minus_one(self, row, col, columns):
        """Malformed or out-of-range inputs yield the -1 sentinel."""
        assert index_from_row_col(row, col, columns) == -1


class TestRowColFromIndex:
    """Test linear index to row/col conversion."""

    def test_round_trip_position(self):
        """Index 37 in a 7-column grid is row 5, column 2."""
        assert row_col_from_index(37, 7) == (5, 2)

    def test_zero_index(self):
        assert row_col_from_index(0, 7) == (0, 0)

    @pytest.mark.parametrize("index, columns", [
        (-1, 7),
        (2.0, 7),
        ("3", 7),
        (3, 0),
        (3, None),
        (False, 7),
    ])
    def test_invalid_inputs_return_none(self, index, columns):
        """Malformed inputs yield None instead of raising."""
        assert row_col_from_index(index, columns) is None


class TestBoundsChecks:
    """Test column/row validity predicates."""

    def test_valid_columns(self):
        assert is_valid_column(0, 7) is True
        assert is_valid_column(6, 7) is True

    def test_invalid_columns(self):
        """Out-of-range, non-integer and bad grid widths are rejected."""
        assert is_valid_column(7, 7) is False
        assert is_valid_column(-1, 7) is False
        assert is_valid_column(2.0, 7) is False
        assert is_valid_column(None, 7) is False
        assert is_valid_column(2, 0) is False

    def test_rows(self):
        assert is_valid_row(5, 6) is True
        assert is_valid_row(6, 6) is False
        assert is_valid_row(0, 0) is False

    def test_within_bounds(self):
        assert is_within_bounds(5, 6, 6, 7) is True
        assert is_within_bounds(6, 6, 6, 7) is False

    def test_can_extract_word(self):
        """A straight word must start and end inside the grid."""
        assert can_extract_word(5, 0, 0, 1, 3, 6, 7) is True
        assert can_extract_word(5, 5, 0, 1, 3, 6, 7) is False
        assert can_extract_word(3, 2, 1, 0, 3, 6, 7) is True
        assert can_extract_word(4, 2, 1, 0, 3, 6, 7) is False
        assert can_extract_word(0, 0, 0, 1, 0, 6, 7) is False


class TestRenderGrid:
    """Test text rendering of a grid."""

    def test_empty_grid_renders_dots(self):
        rendered = render_grid(empty_grid(2, 3), 3)
        assert rendered == "...\n..."

    def test_pending_cells_lowercase(self):
        """Pending cells render lowercase, others uppercase."""
        grid = list(empty_grid(2, 3))
        grid[3] = Cell(char="C", id="tile-0", is_pending=True, pending_directions={"horizontal"})
        grid[4] = Cell(char="A", id="tile-1")
        assert render_grid(grid, 3) == "...\ncA."

    def test_empty_input(self):
        assert render_grid((), 7) == ""
