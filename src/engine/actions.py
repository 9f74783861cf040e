"""Actions accepted by the game transition function."""

from typing import Literal, Tuple, Union
from pydantic import BaseModel, ConfigDict, Field

from ..board.models import Direction
from .models import GameMode


class Action(BaseModel):
    model_config = ConfigDict(frozen=True)


class StartGame(Action):
    type: Literal["START_GAME"] = "START_GAME"
    mode: GameMode = "classic"


class DropLetter(Action):
    type: Literal["DROP_LETTER"] = "DROP_LETTER"
    column: int


class SetPending(Action):
    type: Literal["SET_PENDING"] = "SET_PENDING"
    indices: Tuple[int, ...]
    direction: Direction


class ClearPending(Action):
    type: Literal["CLEAR_PENDING"] = "CLEAR_PENDING"
    indices: Tuple[int, ...]
    direction: Direction


class SetMatchedIndices(Action):
    type: Literal["SET_MATCHED_INDICES"] = "SET_MATCHED_INDICES"
    indices: Tuple[int, ...]


class WordRemoval(BaseModel):
    """A word to score and the cells it occupies."""
    model_config = ConfigDict(frozen=True)

    word: str = Field(..., min_length=1)
    indices: Tuple[int, ...]


class RemoveWords(Action):
    type: Literal["REMOVE_WORDS"] = "REMOVE_WORDS"
    words_to_remove: Tuple[WordRemoval, ...]


class ApplyGravity(Action):
    type: Literal["APPLY_GRAVITY"] = "APPLY_GRAVITY"


class GameOver(Action):
    type: Literal["GAME_OVER"] = "GAME_OVER"


class Reset(Action):
    type: Literal["RESET"] = "RESET"


GameAction = Union[
    StartGame,
    DropLetter,
    SetPending,
    ClearPending,
    SetMatchedIndices,
    RemoveWords,
    ApplyGravity,
    GameOver,
    Reset,
]
