"""Test weighted letter generation and its adjacency constraints."""

import random
from collections import Counter

import pytest

from src.engine import (
    LETTER_FREQUENCIES,
    LetterSequenceGenerator,
    LetterSupplyExhausted,
    generate_letter_sequence,
    weighted_random_letter,
)
from src.engine import letters as letters_module
from src.engine.letters import VOWELS, cumulative_weights


def assert_constraints(sequence):
    """No triple letter, no three vowels, no three consonants."""
    for a, b, c in zip(sequence, sequence[1:], sequence[2:]):
        assert not (a == b == c), f"triple {a}{b}{c}"
        classes = {x in VOWELS for x in (a, b, c)}
        assert len(classes) == 2, f"same-class run {a}{b}{c}"


class TestWeightedDraw:
    """Test the frequency-weighted draw."""

    def test_cumulative_table_is_shared_and_immutable(self):
        cumulative, letters, total = cumulative_weights()
        assert cumulative_weights() is cumulative_weights()
        assert isinstance(cumulative, tuple)
        assert letters[0] == "E" and letters[-1] == "Z"
        assert total == pytest.approx(sum(w for _, w in LETTER_FREQUENCIES))
        assert cumulative[-1] == total

    def test_table_has_all_letters(self):
        assert sorted(letter for letter, _ in LETTER_FREQUENCIES) == list("ABCDEFGHIJKLMNOPQRSTUVWXYZ")

    def test_e_far_more_common_than_z(self):
        """Across 100,000 draws E outnumbers Z."""
        rng = random.Random(1234)
        counts = Counter(weighted_random_letter(rng) for _ in range(100_000))
        assert counts["E"] > counts["Z"]
        assert counts["E"] > 10 * max(1, counts["Z"])

    def test_zero_draw_returns_first_letter(self):
        class ZeroRandom:
            def random(self):
                return 0.0
        assert weighted_random_letter(ZeroRandom()) == "E"

    def test_out_of_range_draw_falls_back(self):
        """A draw at or past the total weight returns the fallback letter."""
        class OverRandom:
            def random(self):
                return 1.5
        assert weighted_random_letter(OverRandom()) == "E"


class TestLetterSequenceGenerator:
    """Test the stateful generator."""

    def test_long_stream_respects_constraints(self):
        """10,000 letters with no triples and no same-class runs of three."""
        generator = LetterSequenceGenerator(10_000, rng=random.Random(7))
        letters = generator.generate_all_letters()

        assert len(letters) == 10_000
        assert all(letter.isupper() and len(letter) == 1 for letter in letters)
        assert_constraints(letters)

    def test_exhaustion_raises(self):
        generator = LetterSequenceGenerator(3, rng=random.Random(0))
        generator.generate_all_letters()

        assert generator.get_remaining_count() == 0
        with pytest.raises(LetterSupplyExhausted):
            generator.generate_letter()

    def test_exhaustion_is_value_error(self):
        generator = LetterSequenceGenerator(0)
        with pytest.raises(ValueError):
            generator.generate_letter()

    def test_remaining_count(self):
        generator = LetterSequenceGenerator(5, rng=random.Random(0))
        generator.generate_letter()
        generator.generate_letter()
        assert generator.get_remaining_count() == 3

    def test_generated_letters_is_a_copy(self):
        """Mutating the returned list never changes the generator."""
        generator = LetterSequenceGenerator(4, rng=random.Random(0))
        generator.generate_letter()
        snapshot = generator.get_generated_letters()
        snapshot.append("Q")
        snapshot.clear()

        assert len(generator.get_generated_letters()) == 1

    def test_generate_all_returns_copy(self):
        generator = LetterSequenceGenerator(3, rng=random.Random(0))
        letters = generator.generate_all_letters()
        letters.pop()
        assert len(generator.get_generated_letters()) == 3

    def test_reset_clears_history(self):
        generator = LetterSequenceGenerator(3, rng=random.Random(0))
        generator.generate_all_letters()
        generator.reset()

        assert generator.get_generated_letters() == []
        assert generator.get_remaining_count() == 3
        generator.generate_letter()

    def test_first_letters_always_valid(self):
        generator = LetterSequenceGenerator(3)
        assert generator.is_valid_letter("Z")

    def test_is_valid_letter_rejections(self):
        generator = LetterSequenceGenerator(10)
        generator._generated = ["T", "T"]
        assert not generator.is_valid_letter("T")
        assert not generator.is_valid_letter("N")
        assert generator.is_valid_letter("A")

        generator._generated = ["A", "E"]
        assert not generator.is_valid_letter("I")
        assert generator.is_valid_letter("S")

    def test_fallback_after_consonant_pair_is_vowel(self):
        """If sampling keeps failing, two consonants force a vowel."""
        generator = LetterSequenceGenerator(3, rng=random.Random(0))
        generator.get_weighted_random_letter = lambda: "T"

        letters = generator.generate_all_letters()
        assert letters[:2] == ["T", "T"]
        assert letters[2] in VOWELS

    def test_fallback_after_vowel_pair_is_other_consonant(self):
        generator = LetterSequenceGenerator(3, rng=random.Random(0))
        generator.get_weighted_random_letter = lambda: "A"

        letters = generator.generate_all_letters()
        assert letters[2] not in VOWELS
        assert letters[2] != "A"


class TestGenerateLetterSequence:
    """Test the batch generator."""

    def test_ids_are_sequential(self):
        tiles = generate_letter_sequence(5, random.Random(3))
        assert [t.id for t in tiles] == [f"tile-{i}" for i in range(5)]
        assert all(t.type == "letter" for t in tiles)

    def test_constraints_hold(self):
        tiles = generate_letter_sequence(10_000, random.Random(11))
        assert_constraints([t.char for t in tiles])

    def test_zero_count(self):
        assert generate_letter_sequence(0) == []

    def test_independent_of_generator_history(self):
        """Same seed gives the same sequence regardless of other generators."""
        first = generate_letter_sequence(50, random.Random(5))
        other = LetterSequenceGenerator(50, rng=random.Random(5))
        other.generate_all_letters()
        second = generate_letter_sequence(50, random.Random(5))
        assert [t.char for t in first] == [t.char for t in second]

    def test_forced_fallback_keeps_constraints(self, monkeypatch):
        """Even a draw stuck on one letter produces a valid sequence."""
        monkeypatch.setattr(letters_module, "weighted_random_letter", lambda rng=None: "E")
        tiles = generate_letter_sequence(30, random.Random(0))
        chars = [t.char for t in tiles]

        assert chars[:2] == ["E", "E"]
        assert_constraints(chars)
