"""
Weighted letter generation.

Letters are drawn by English usage frequency and filtered so the stream
never shows the same letter three times in a row, nor three vowels or three
consonants in a row.
"""

import bisect
import logging
import random
from functools import lru_cache
from typing import List, Optional, Sequence, Tuple

from ..board.models import LetterTile


log = logging.getLogger("letterdrop.letters")

# Relative weights from corpus analysis; the order fixes the cumulative walk
LETTER_FREQUENCIES: Tuple[Tuple[str, float], ...] = (
    ("E", 12.70), ("T", 9.06), ("A", 8.17), ("O", 7.51), ("I", 6.97),
    ("N", 6.75), ("S", 6.33), ("H", 6.09), ("R", 5.99), ("D", 4.25),
    ("L", 4.03), ("C", 2.78), ("U", 2.76), ("M", 2.41), ("W", 2.36),
    ("F", 2.23), ("G", 2.02), ("Y", 1.97), ("P", 1.93), ("B", 1.29),
    ("V", 0.98), ("K", 0.77), ("J", 0.15), ("X", 0.15), ("Q", 0.10),
    ("Z", 0.07),
)

VOWELS = frozenset("AEIOU")
CONSONANTS: Tuple[str, ...] = tuple(
    sorted(letter for letter, _ in LETTER_FREQUENCIES if letter not in VOWELS)
)
SORTED_VOWELS: Tuple[str, ...] = tuple(sorted(VOWELS))

MAX_ATTEMPTS = 100
FALLBACK_LETTER = "E"


class LetterSupplyExhausted(ValueError):
    """Raised when a generator is asked for more letters than it was built for."""


@lru_cache(maxsize=None)
def cumulative_weights() -> Tuple[Tuple[float, ...], Tuple[str, ...], float]:
    """
    Cumulative weight table, computed once per process.

    Returns:
        (cumulative weights, letters in table order, total weight)
    """
    cumulative: List[float] = []
    total = 0.0
    for _, weight in LETTER_FREQUENCIES:
        total += weight
        cumulative.append(total)
    letters = tuple(letter for letter, _ in LETTER_FREQUENCIES)
    return tuple(cumulative), letters, total


def weighted_random_letter(rng: Optional[random.Random] = None) -> str:
    """Draw one letter in proportion to its frequency weight."""
    rng = rng or random
    cumulative, letters, total = cumulative_weights()
    draw = rng.random() * total
    # First entry whose cumulative weight is >= the draw
    position = bisect.bisect_left(cumulative, draw)
    if position >= len(letters):
        return FALLBACK_LETTER
    return letters[position]


def is_vowel(letter: str) -> bool:
    return letter in VOWELS


def _trailing_run(sequence: Sequence[str], vowel: bool) -> int:
    """Length of the run of same-class letters at the end of the sequence."""
    length = 0
    for letter in reversed(sequence):
        if is_vowel(letter) != vowel:
            break
        length += 1
    return length


def _fits_after(letter: str, sequence: Sequence[str]) -> bool:
    """Check a candidate against the tail of a sequence under construction."""
    if len(sequence) >= 2 and sequence[-1] == letter and sequence[-2] == letter:
        return False
    return _trailing_run(sequence, is_vowel(letter)) < 2


def _pick_fallback(sequence: Sequence[str], rng) -> str:
    """Deterministic-class pick used once weighted sampling gives up."""
    if _trailing_run(sequence, vowel=False) >= 2:
        return rng.choice(SORTED_VOWELS)
    previous = sequence[-1] if sequence else None
    return rng.choice([letter for letter in CONSONANTS if letter != previous])


def _draw_valid(sequence: Sequence[str], rng) -> str:
    for _ in range(MAX_ATTEMPTS):
        letter = weighted_random_letter(rng)
        if _fits_after(letter, sequence):
            return letter
    return _pick_fallback(sequence, rng)


def generate_letter_sequence(count: int, rng: Optional[random.Random] = None) -> List[LetterTile]:
    """
    Generate `count` queued tiles with ids tile-0 .. tile-(count-1).

    The constraints are applied against the sequence being built, so calls
    are independent of each other and of any LetterSequenceGenerator.
    """
    rng = rng or random
    chars: List[str] = []
    for _ in range(max(0, count)):
        chars.append(_draw_valid(chars, rng))
    return [LetterTile(char=char, id=f"tile-{i}") for i, char in enumerate(chars)]


class LetterSequenceGenerator:
    """
    Stateful generator producing at most `number_of_letters` letters.

    Callers must check get_remaining_count() before asking for another
    letter; going past the cap raises LetterSupplyExhausted.
    """

    def __init__(self, number_of_letters: int, rng: Optional[random.Random] = None):
        self.number_of_letters = number_of_letters
        self._rng = rng or random.Random()
        self._generated: List[str] = []

    def generate_letter(self) -> str:
        """
        Generate the next letter, respecting the adjacency constraints.

        Raises:
            LetterSupplyExhausted: If the configured number of letters was reached
        """
        if len(self._generated) >= self.number_of_letters:
            raise LetterSupplyExhausted(
                f"Maximum number of letters reached ({self.number_of_letters})"
            )

        letter = None
        for _ in range(MAX_ATTEMPTS):
            candidate = self.get_weighted_random_letter()
            if self.is_valid_letter(candidate):
                letter = candidate
                break
        if letter is None:
            letter = self.force_valid_letter()
            log.debug("Weighted sampling gave up, forced %s", letter)

        self._generated.append(letter)
        return letter

    def get_weighted_random_letter(self) -> str:
        return weighted_random_letter(self._rng)

    def is_valid_letter(self, letter: str) -> bool:
        """Check a candidate against the last two generated letters."""
        if len(self._generated) < 2:
            return True

        prev1, prev2 = self._generated[-1], self._generated[-2]
        if letter == prev1 == prev2:
            return False

        current_vowel = is_vowel(letter)
        return not (current_vowel == is_vowel(prev1) == is_vowel(prev2))

    def force_valid_letter(self) -> str:
        """
        Pick a valid letter without weighting.

        A vowel if two consonants precede, otherwise a consonant different
        from the previous letter.
        """
        return _pick_fallback(self._generated[-2:], self._rng)

    def generate_all_letters(self) -> List[str]:
        while len(self._generated) < self.number_of_letters:
            self.generate_letter()
        return self.get_generated_letters()

    def get_generated_letters(self) -> List[str]:
        return list(self._generated)

    def get_remaining_count(self) -> int:
        return self.number_of_letters - len(self._generated)

    def reset(self) -> None:
        self._generated = []
