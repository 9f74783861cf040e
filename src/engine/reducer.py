"""
Game state transitions.

`transition(state, action, rules)` is the only way game state changes. It
never mutates its input: every handler either returns the state it was
given (no-op) or a fully built new GameState.
"""

import logging
import random
from typing import Any, Callable, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..board.grid import empty_grid, index_from_row_col, is_valid_column
from ..board.models import Cell
from .actions import (
    ApplyGravity,
    ClearPending,
    DropLetter,
    GameOver,
    RemoveWords,
    Reset,
    SetMatchedIndices,
    SetPending,
    StartGame,
)
from .clear_mode import ClearModeInitializer
from .letters import generate_letter_sequence
from .models import (
    CLEAR,
    GAME_OVER,
    MAX_MADE_WORDS,
    PLAYING,
    PROCESSING,
    GameConfig,
    GameState,
    InitialGrid,
    initial_state,
)


log = logging.getLogger("letterdrop.reducer")


class GameRules(BaseModel):
    """
    Everything a transition needs besides the state and action.

    Attributes:
        config: Grid dimensions, letter budget and scoring policy
        initializers: Mode name to object with populate_initial_grid()
        seed: Optional random seed for reproducible letter sequences
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    config: GameConfig = Field(default_factory=GameConfig)
    initializers: Dict[str, Any] = Field(default_factory=dict)
    seed: Optional[int] = None
    _rng: random.Random = None

    def model_post_init(self, __context) -> None:
        """Initialize the random generator and default mode initializers."""
        seed = self.seed if self.seed is not None else self.config.seed
        self._rng = random.Random(seed)
        if CLEAR not in self.initializers:
            self.initializers[CLEAR] = ClearModeInitializer(self.config, self._rng)

    @property
    def rng(self) -> random.Random:
        return self._rng

    def calculate_word_score(self, word: str) -> int:
        return self.config.scoring.calculate_word_score(word)


def _start_game(state: GameState, action: StartGame, rules: GameRules) -> GameState:
    config = rules.config
    queue = generate_letter_sequence(config.total_letters, rules.rng)

    grid = empty_grid(config.rows, config.columns)
    targets = ()
    initializer = rules.initializers.get(action.mode)
    if action.mode != "classic" and initializer is not None:
        populated: InitialGrid = initializer.populate_initial_grid()
        grid = populated.grid
        targets = populated.target_indices

    log.info("Starting %s game with %d letters", action.mode, len(queue))
    return GameState(
        grid=grid,
        score=0,
        letters_remaining=len(queue),
        next_queue=tuple(queue),
        status=PLAYING,
        made_words=(),
        game_mode=action.mode,
        initial_blocks=targets,
    )


def _drop_letter(state: GameState, action: DropLetter, rules: GameRules) -> GameState:
    config = rules.config
    if not state.next_queue or state.status != PLAYING:
        return state
    if not is_valid_column(action.column, config.columns):
        return state

    # Lowest empty position in the column
    target = -1
    for row in range(config.rows - 1, -1, -1):
        index = index_from_row_col(row, action.column, config.columns)
        if state.grid[index] is None:
            target = index
            break

    if target == -1:
        return state

    tile, remaining = state.next_queue[0], state.next_queue[1:]
    grid = list(state.grid)
    grid[target] = Cell(char=tile.char, id=tile.id)

    return state.model_copy(update={
        "grid": tuple(grid),
        "next_queue": remaining,
        "letters_remaining": len(remaining),
        "status": GAME_OVER if not remaining else state.status,
    })


def _update_cells(state: GameState, indices, update: Callable[[Cell], Cell]) -> GameState:
    grid = list(state.grid)
    for index in set(indices):
        if 0 <= index < len(grid) and grid[index] is not None:
            grid[index] = update(grid[index])
    return state.model_copy(update={"grid": tuple(grid)})


def _set_pending(state: GameState, action: SetPending, rules: GameRules) -> GameState:
    def mark(cell: Cell) -> Cell:
        already_pending = bool(cell.pending_directions)
        return cell.model_copy(update={
            "is_pending": True,
            "is_matched": False,
            "pending_directions": cell.pending_directions | {action.direction},
            # a bump restarts the pending presentation
            "pending_reset_count": cell.pending_reset_count + (1 if already_pending else 0),
        })

    return _update_cells(state, action.indices, mark)


def _clear_pending(state: GameState, action: ClearPending, rules: GameRules) -> GameState:
    def unmark(cell: Cell) -> Cell:
        directions = cell.pending_directions - {action.direction}
        return cell.model_copy(update={
            "is_pending": bool(directions),
            "pending_directions": directions,
            "pending_reset_count": cell.pending_reset_count if directions else 0,
        })

    return _update_cells(state, action.indices, unmark)


def _set_matched(state: GameState, action: SetMatchedIndices, rules: GameRules) -> GameState:
    def match(cell: Cell) -> Cell:
        return cell.model_copy(update={
            "is_matched": True,
            "is_pending": False,
            "pending_directions": frozenset(),
            "pending_reset_count": 0,
        })

    return _update_cells(state, action.indices, match).model_copy(update={"status": PROCESSING})


def _remove_words(state: GameState, action: RemoveWords, rules: GameRules) -> GameState:
    grid = list(state.grid)
    made_words: List[str] = list(state.made_words)
    gained = 0

    for removal in action.words_to_remove:
        gained += rules.calculate_word_score(removal.word)
        made_words.insert(0, removal.word)
        for index in removal.indices:
            if 0 <= index < len(grid):
                grid[index] = None

    if gained:
        log.info("Scored %d points for %s", gained, [r.word for r in action.words_to_remove])

    return state.model_copy(update={
        "grid": tuple(grid),
        "score": state.score + gained,
        "made_words": tuple(made_words[:min(rules.config.max_made_words, MAX_MADE_WORDS)]),
        "status": PLAYING,
    })


def _apply_gravity(state: GameState, action: ApplyGravity, rules: GameRules) -> GameState:
    columns = rules.config.columns
    rows = len(state.grid) // columns
    grid: List[Optional[Cell]] = [None] * len(state.grid)

    for col in range(columns):
        column_cells = [
            state.grid[row * columns + col]
            for row in range(rows)
            if state.grid[row * columns + col] is not None
        ]
        # Bottom-aligned, transient flags stripped
        for i, cell in enumerate(column_cells):
            row = rows - len(column_cells) + i
            grid[row * columns + col] = cell.model_copy(update={
                "is_matched": False,
                "is_pending": False,
                "pending_directions": frozenset(),
                "pending_reset_count": 0,
            })

    return state.model_copy(update={"grid": tuple(grid), "status": PLAYING})


def _game_over(state: GameState, action: GameOver, rules: GameRules) -> GameState:
    return state.model_copy(update={"status": GAME_OVER})


def _reset(state: GameState, action: Reset, rules: GameRules) -> GameState:
    return initial_state(rules.config)


_HANDLERS: Dict[str, Callable[[GameState, Any, GameRules], GameState]] = {
    "START_GAME": _start_game,
    "DROP_LETTER": _drop_letter,
    "SET_PENDING": _set_pending,
    "CLEAR_PENDING": _clear_pending,
    "SET_MATCHED_INDICES": _set_matched,
    "REMOVE_WORDS": _remove_words,
    "APPLY_GRAVITY": _apply_gravity,
    "GAME_OVER": _game_over,
    "RESET": _reset,
}

DEFAULT_RULES = GameRules()


def transition(state: GameState, action: Any, rules: Optional[GameRules] = None) -> GameState:
    """
    Apply an action to a state and return the resulting state.

    Unrecognized actions leave the state unchanged.
    """
    handler = _HANDLERS.get(getattr(action, "type", None))
    if handler is None:
        log.debug("Ignoring unknown action %r", action)
        return state
    return handler(state, action, rules or DEFAULT_RULES)
