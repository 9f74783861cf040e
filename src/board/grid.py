"""Grid arithmetic and rendering utilities.

All helpers are pure. Malformed input never raises: index helpers return -1
or None and predicates return False, so callers can treat them inline as
"not applicable".
"""

from typing import Iterator, List, Optional, Sequence, Tuple

from .models import Cell, Direction, Grid, HORIZONTAL


DEFAULT_ROWS = 6
DEFAULT_COLUMNS = 7


def _is_int(value) -> bool:
    # bool is an int subclass but never a coordinate
    return isinstance(value, int) and not isinstance(value, bool)


def _is_valid_columns(columns) -> bool:
    return _is_int(columns) and columns > 0


def index_from_row_col(row, col, columns) -> int:
    """Linear index for (row, col), or -1 if any input is invalid."""
    if not _is_valid_columns(columns) or not _is_int(row) or not _is_int(col):
        return -1
    if row < 0 or col < 0 or col >= columns:
        return -1
    return row * columns + col


def row_col_from_index(index, columns) -> Optional[Tuple[int, int]]:
    """(row, col) for a linear index, or None if any input is invalid."""
    if not _is_valid_columns(columns) or not _is_int(index) or index < 0:
        return None
    return divmod(index, columns)


def is_valid_column(col, columns) -> bool:
    """Check that col addresses a column of a grid with `columns` columns."""
    if not _is_valid_columns(columns):
        return False
    return _is_int(col) and 0 <= col < columns


def is_valid_row(row, rows) -> bool:
    """Check that row addresses a row of a grid with `rows` rows."""
    if not _is_int(rows) or rows <= 0:
        return False
    return _is_int(row) and 0 <= row < rows


def is_within_bounds(row, col, rows, columns) -> bool:
    return is_valid_row(row, rows) and is_valid_column(col, columns)


def can_extract_word(
    start_row, start_col, row_delta: int, col_delta: int, length, rows, columns
) -> bool:
    """Check that a straight word of `length` cells fits inside the grid."""
    if not _is_int(length) or length < 1:
        return False
    if not is_within_bounds(start_row, start_col, rows, columns):
        return False

    end_row = start_row + (length - 1) * row_delta
    end_col = start_col + (length - 1) * col_delta
    return is_within_bounds(end_row, end_col, rows, columns)


def empty_grid(rows: int = DEFAULT_ROWS, columns: int = DEFAULT_COLUMNS) -> Grid:
    """Create a grid with every position empty."""
    return (None,) * (rows * columns)


def line_indices(grid_size: int, columns: int, direction: Direction) -> List[List[int]]:
    """
    Grid indices of every line in one direction, in scan order.

    Horizontal lines are the rows top to bottom, each read left to right.
    Vertical lines are the columns left to right, each read top to bottom.
    """
    rows = grid_size // columns
    if direction == HORIZONTAL:
        return [[row * columns + col for col in range(columns)] for row in range(rows)]
    return [[row * columns + col for row in range(rows)] for col in range(columns)]


def iter_runs(grid: Sequence[Optional[Cell]], line: Sequence[int]) -> Iterator[List[int]]:
    """Yield maximal runs of occupied cells along one line."""
    run: List[int] = []
    for index in line:
        if grid[index] is not None:
            run.append(index)
        elif run:
            yield run
            run = []
    if run:
        yield run


def render_grid(grid: Sequence[Optional[Cell]], columns: int = DEFAULT_COLUMNS) -> str:
    """
    Render the grid to a string.

    Empty positions are shown as '.', pending cells in lowercase and every
    other cell as its uppercase letter.
    """
    if not grid or not _is_valid_columns(columns):
        return ""

    def symbol(cell: Optional[Cell]) -> str:
        if cell is None:
            return '.'
        return cell.char.lower() if cell.is_pending else cell.char

    lines = [
        ''.join(symbol(cell) for cell in grid[start:start + columns])
        for start in range(0, len(grid), columns)
    ]

    return '\n'.join(lines)
