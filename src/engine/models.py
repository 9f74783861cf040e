"""
Pydantic models for the game engine.

GameState is frozen: transitions build new values with model_copy and
never touch the instance they were given.
"""

from typing import List, Literal, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field

from ..board.grid import DEFAULT_COLUMNS, DEFAULT_ROWS, empty_grid
from ..board.models import Grid, LetterTile
from .scoring import ScoringPolicy


# Type aliases
GameStatus = Literal["IDLE", "PLAYING", "PROCESSING", "GAME_OVER"]
GameMode = Literal["classic", "clear"]

IDLE = "IDLE"
PLAYING = "PLAYING"
PROCESSING = "PROCESSING"
GAME_OVER = "GAME_OVER"

CLASSIC = "classic"
CLEAR = "clear"

# Upper bound on the made-words history
MAX_MADE_WORDS = 20


class GameConfig(BaseModel):
    """Configuration for a game instance."""
    rows: int = Field(default=DEFAULT_ROWS, ge=1)
    columns: int = Field(default=DEFAULT_COLUMNS, ge=1)
    total_letters: int = Field(default=100, ge=1)
    grace_period_ms: float = Field(default=1000, ge=0)
    shake_duration_ms: float = Field(default=400, ge=0)
    gravity_delay_ms: float = Field(default=150, ge=0)
    max_made_words: int = Field(default=MAX_MADE_WORDS, ge=1, le=MAX_MADE_WORDS)
    clear_mode_fill_percentage: float = Field(default=0.20, ge=0.0, le=1.0)
    preview_count: int = Field(default=4, ge=0)
    seed: Optional[int] = None
    dictionary_path: Optional[str] = None
    scoring: ScoringPolicy = Field(default_factory=ScoringPolicy)

    @property
    def grid_size(self) -> int:
        """Number of cells (automatically derived from rows and columns)."""
        return self.rows * self.columns


class InitialGrid(BaseModel):
    """Starting grid produced by a mode initializer."""
    model_config = ConfigDict(frozen=True)

    grid: Grid
    target_indices: Tuple[int, ...] = ()


class GameState(BaseModel):
    """Complete, immutable game state."""
    model_config = ConfigDict(frozen=True)

    grid: Grid
    score: int = Field(default=0, ge=0)
    letters_remaining: int = Field(default=0, ge=0)
    next_queue: Tuple[LetterTile, ...] = ()
    status: GameStatus = IDLE
    made_words: Tuple[str, ...] = ()
    game_mode: Optional[GameMode] = None
    initial_blocks: Tuple[int, ...] = ()

    @property
    def occupied_indices(self) -> List[int]:
        return [i for i, cell in enumerate(self.grid) if cell is not None]


def initial_state(config: Optional[GameConfig] = None) -> GameState:
    """The canonical IDLE state for a configuration."""
    config = config or GameConfig()
    return GameState(
        grid=empty_grid(config.rows, config.columns),
        letters_remaining=config.total_letters,
    )
