"""Data models for grid cells, queued tiles and word matches."""

from typing import FrozenSet, Literal, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field


# Type aliases
Direction = Literal["horizontal", "vertical"]

HORIZONTAL = "horizontal"
VERTICAL = "vertical"


class Cell(BaseModel):
    """A placed tile occupying one grid position."""
    model_config = ConfigDict(frozen=True)

    char: str = Field(..., pattern=r'^[A-Z]$')
    id: str
    type: Literal["filled"] = "filled"
    is_matched: bool = False
    is_pending: bool = False
    pending_directions: FrozenSet[Direction] = frozenset()
    pending_reset_count: int = Field(default=0, ge=0)
    is_initial: bool = False


class LetterTile(BaseModel):
    """A letter waiting in the upcoming queue."""
    model_config = ConfigDict(frozen=True)

    char: str = Field(..., pattern=r'^[A-Z]$')
    id: str
    type: Literal["letter"] = "letter"


class WordMatch(BaseModel):
    """A dictionary word found along one row or column."""
    model_config = ConfigDict(frozen=True)

    word: str = Field(..., min_length=3)
    direction: Direction
    positions: Tuple[int, ...]
    start_row: int = Field(..., ge=0)
    start_col: int = Field(..., ge=0)


Grid = Tuple[Optional[Cell], ...]
