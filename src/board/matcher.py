"""
Word matching over a grid snapshot.

Scans every row (left to right) and every column (top to bottom) for
maximal runs of occupied cells, then tests each substring of at least
MIN_WORD_LENGTH letters against the dictionary. Every hit is reported,
including words nested inside longer ones (CAT inside CATS).
"""

from typing import List, Optional, Sequence

from .dictionary import Dictionary
from .grid import DEFAULT_COLUMNS, iter_runs, line_indices, row_col_from_index
from .models import Cell, Direction, HORIZONTAL, VERTICAL, WordMatch


MIN_WORD_LENGTH = 3


def _lookup(dictionary, word: str) -> bool:
    contains = getattr(dictionary, "contains", None)
    if contains is not None:
        return bool(contains(word))
    return word in dictionary


def _matches_in_run(
    grid: Sequence[Optional[Cell]],
    run: List[int],
    direction: Direction,
    dictionary,
    columns: int,
) -> List[WordMatch]:
    """Find every dictionary word inside one run of occupied cells."""
    matches: List[WordMatch] = []
    letters = [grid[index].char for index in run]

    for i in range(len(run)):
        for j in range(i + MIN_WORD_LENGTH - 1, len(run)):
            word = ''.join(letters[i:j + 1])
            if not _lookup(dictionary, word):
                continue
            start_row, start_col = row_col_from_index(run[i], columns)
            matches.append(WordMatch(
                word=word,
                direction=direction,
                positions=tuple(run[i:j + 1]),
                start_row=start_row,
                start_col=start_col,
            ))

    return matches


def find_words(
    grid: Sequence[Optional[Cell]],
    dictionary: Optional[Dictionary],
    columns: int = DEFAULT_COLUMNS,
) -> List[WordMatch]:
    """
    Find all dictionary words on the grid.

    Args:
        grid: Cells in row-major order, None for empty positions
        dictionary: Anything with `contains(word)` (or supporting `in`)
        columns: Number of columns in the grid

    Returns:
        Matches for all horizontal lines, then all vertical lines. Empty if
        the dictionary is missing or the grid holds no cell.
    """
    if dictionary is None or not any(cell is not None for cell in grid):
        return []

    found: List[WordMatch] = []
    for direction in (HORIZONTAL, VERTICAL):
        for line in line_indices(len(grid), columns, direction):
            for run in iter_runs(grid, line):
                if len(run) >= MIN_WORD_LENGTH:
                    found.extend(_matches_in_run(grid, run, direction, dictionary, columns))

    return found
