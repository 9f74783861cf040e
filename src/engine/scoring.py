"""Word scoring: letter values plus a length bonus."""

from typing import Dict
from pydantic import BaseModel, ConfigDict, Field


# Scrabble letter point values
DEFAULT_LETTER_VALUES: Dict[str, int] = {
    "A": 1, "B": 3, "C": 3, "D": 2, "E": 1, "F": 4, "G": 2, "H": 4, "I": 1,
    "J": 8, "K": 5, "L": 1, "M": 3, "N": 1, "O": 1, "P": 3, "Q": 10, "R": 1,
    "S": 1, "T": 1, "U": 1, "V": 4, "W": 4, "X": 8, "Y": 4, "Z": 10,
}

DEFAULT_LENGTH_BONUSES: Dict[int, int] = {3: 0, 4: 1, 5: 3, 6: 4, 7: 7}


class ScoringPolicy(BaseModel):
    """
    Deterministic word to points mapping.

    Words longer than the longest configured length receive that length's
    bonus. Every non-empty word scores at least one point.
    """
    model_config = ConfigDict(frozen=True)

    letter_values: Dict[str, int] = Field(default_factory=lambda: dict(DEFAULT_LETTER_VALUES))
    length_bonuses: Dict[int, int] = Field(default_factory=lambda: dict(DEFAULT_LENGTH_BONUSES))

    def get_letter_value(self, letter: str) -> int:
        return self.letter_values.get(letter.upper(), 0)

    def length_bonus(self, length: int) -> int:
        if length in self.length_bonuses:
            return self.length_bonuses[length]
        longest = max((n for n in self.length_bonuses if n <= length), default=None)
        return self.length_bonuses[longest] if longest is not None else 0

    def calculate_word_score(self, word: str) -> int:
        """Score a word: sum of letter values plus length bonus, minimum 1."""
        if not word:
            return 0
        base = sum(self.get_letter_value(letter) for letter in word)
        return max(1, base + self.length_bonus(len(word)))


DEFAULT_SCORING = ScoringPolicy()


def calculate_word_score(word: str) -> int:
    """Score a word with the default policy."""
    return DEFAULT_SCORING.calculate_word_score(word)


def get_letter_value(letter: str) -> int:
    return DEFAULT_SCORING.get_letter_value(letter)
