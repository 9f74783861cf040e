"""Game engine: letters, scoring, grace periods and state transitions."""

from .models import (
    GameStatus,
    GameMode,
    GameConfig,
    GameState,
    InitialGrid,
    initial_state,
    IDLE,
    PLAYING,
    PROCESSING,
    GAME_OVER,
    CLASSIC,
    CLEAR,
)
from .actions import (
    GameAction,
    StartGame,
    DropLetter,
    SetPending,
    ClearPending,
    SetMatchedIndices,
    WordRemoval,
    RemoveWords,
    ApplyGravity,
    GameOver,
    Reset,
)
from .letters import (
    LETTER_FREQUENCIES,
    LetterSequenceGenerator,
    LetterSupplyExhausted,
    generate_letter_sequence,
    weighted_random_letter,
)
from .scoring import ScoringPolicy, calculate_word_score, get_letter_value
from .scheduler import Scheduler, TimerHandle, VirtualScheduler, AsyncioScheduler
from .grace import GracePeriodCoordinator, AnimationNotifier, NullNotifier, PendingWordSnapshot
from .clear_mode import (
    ClearModeInitializer,
    clear_mode_progress,
    is_clear_mode_complete,
    remaining_initial_cells,
)
from .reducer import GameRules, transition
from .session import GameSession

__all__ = [
    # Models
    "GameStatus",
    "GameMode",
    "GameConfig",
    "GameState",
    "InitialGrid",
    "initial_state",
    "IDLE",
    "PLAYING",
    "PROCESSING",
    "GAME_OVER",
    "CLASSIC",
    "CLEAR",
    # Actions
    "GameAction",
    "StartGame",
    "DropLetter",
    "SetPending",
    "ClearPending",
    "SetMatchedIndices",
    "WordRemoval",
    "RemoveWords",
    "ApplyGravity",
    "GameOver",
    "Reset",
    # Letters
    "LETTER_FREQUENCIES",
    "LetterSequenceGenerator",
    "LetterSupplyExhausted",
    "generate_letter_sequence",
    "weighted_random_letter",
    # Scoring
    "ScoringPolicy",
    "calculate_word_score",
    "get_letter_value",
    # Timing
    "Scheduler",
    "TimerHandle",
    "VirtualScheduler",
    "AsyncioScheduler",
    "GracePeriodCoordinator",
    "AnimationNotifier",
    "NullNotifier",
    "PendingWordSnapshot",
    # Modes
    "ClearModeInitializer",
    "clear_mode_progress",
    "is_clear_mode_complete",
    "remaining_initial_cells",
    # Transitions
    "GameRules",
    "transition",
    "GameSession",
]
