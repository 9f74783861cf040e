"""Grid model, coordinates, dictionary and word matching."""

from .models import Cell, LetterTile, WordMatch, Direction, Grid, HORIZONTAL, VERTICAL
from .grid import (
    DEFAULT_ROWS,
    DEFAULT_COLUMNS,
    index_from_row_col,
    row_col_from_index,
    is_valid_column,
    is_valid_row,
    is_within_bounds,
    can_extract_word,
    empty_grid,
    render_grid,
)
from .dictionary import Dictionary, WordDictionary, load_word_file, load_dictionary
from .matcher import find_words, MIN_WORD_LENGTH

__all__ = [
    # Models
    "Cell",
    "LetterTile",
    "WordMatch",
    "Direction",
    "Grid",
    "HORIZONTAL",
    "VERTICAL",
    # Coordinates
    "DEFAULT_ROWS",
    "DEFAULT_COLUMNS",
    "index_from_row_col",
    "row_col_from_index",
    "is_valid_column",
    "is_valid_row",
    "is_within_bounds",
    "can_extract_word",
    "empty_grid",
    "render_grid",
    # Dictionary
    "Dictionary",
    "WordDictionary",
    "load_word_file",
    "load_dictionary",
    # Matching
    "find_words",
    "MIN_WORD_LENGTH",
]
