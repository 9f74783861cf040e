"""Test word list loading and lookup."""

import logging

import pytest

from src.board import WordDictionary, load_dictionary, load_word_file


def write_csv(path, lines):
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


class TestWordDictionary:
    """Test lookup behaviour."""

    def test_contains_is_case_insensitive(self):
        dictionary = WordDictionary({"cat": "A small feline"})
        assert dictionary.contains("CAT")
        assert dictionary.contains("cat")
        assert "Cat" in dictionary

    def test_missing_word(self):
        dictionary = WordDictionary.from_words(["CAT"])
        assert not dictionary.contains("DOG")
        assert dictionary.get("DOG") is None
        assert not dictionary.contains("")

    def test_get_returns_definition(self):
        dictionary = WordDictionary({"CAT": "A small feline"})
        assert dictionary.get("cat") == "A small feline"

    def test_len(self):
        assert len(WordDictionary.from_words(["CAT", "cat", "DOG"])) == 2

    def test_non_string_membership(self):
        assert 42 not in WordDictionary.from_words(["CAT"])


class TestLoadWordFile:
    """Test CSV parsing."""

    def test_header_and_blank_lines_skipped(self, tmp_path):
        path = write_csv(tmp_path / "words.csv", [
            "word,definition",
            "cat,A small feline",
            "",
            "dog,A loyal companion",
        ])
        assert load_word_file(path) == [
            ("CAT", "A small feline"),
            ("DOG", "A loyal companion"),
        ]

    def test_definition_may_contain_commas(self, tmp_path):
        """Only the first comma separates word and definition."""
        path = write_csv(tmp_path / "words.csv", [
            "word,definition",
            "tea,A hot drink, usually with milk",
        ])
        assert load_word_file(path) == [("TEA", "A hot drink, usually with milk")]

    def test_line_without_comma_ignored(self, tmp_path):
        path = write_csv(tmp_path / "words.csv", ["word,definition", "lonely"])
        assert load_word_file(path) == []

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_word_file(tmp_path / "missing.csv")


class TestLoadDictionary:
    """Test merging of several word files."""

    def test_merges_files(self, tmp_path):
        three = write_csv(tmp_path / "3.csv", ["word,definition", "cat,feline"])
        four = write_csv(tmp_path / "4.csv", ["word,definition", "cats,felines"])

        dictionary = load_dictionary([three, four])
        assert dictionary.contains("CAT")
        assert dictionary.contains("CATS")
        assert len(dictionary) == 2

    def test_unreadable_file_skipped_with_warning(self, tmp_path, caplog):
        good = write_csv(tmp_path / "3.csv", ["word,definition", "cat,feline"])

        with caplog.at_level(logging.WARNING, logger="letterdrop.dictionary"):
            dictionary = load_dictionary([tmp_path / "missing.csv", good])

        assert dictionary.contains("CAT")
        assert "Failed to load" in caplog.text

    def test_no_words_raises(self, tmp_path):
        empty = write_csv(tmp_path / "empty.csv", ["word,definition"])
        with pytest.raises(ValueError):
            load_dictionary([empty, tmp_path / "missing.csv"])

    def test_bundled_word_list(self):
        """The default word list loads and holds common words."""
        dictionary = load_dictionary()
        assert dictionary.contains("CAT")
        assert dictionary.get("CAT")
