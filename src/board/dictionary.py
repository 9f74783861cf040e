"""Word list loading and lookup.

Word lists are CSV files with a `word,definition` header. Words are stored
uppercase; definitions are kept for presentation and never consulted by the
matcher.
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Protocol, Tuple, Union


log = logging.getLogger("letterdrop.dictionary")

DEFAULT_WORD_FILE = Path(__file__).parent / "data" / "words.csv"


class Dictionary(Protocol):
    """Lookup capability consumed by the word matcher."""

    def contains(self, word: str) -> bool: ...

    def get(self, word: str) -> Optional[str]: ...


class WordDictionary:
    """In-memory word to definition mapping."""

    def __init__(self, entries: Optional[Dict[str, str]] = None):
        self._entries: Dict[str, str] = {
            word.strip().upper(): definition
            for word, definition in (entries or {}).items()
            if word.strip()
        }

    @classmethod
    def from_words(cls, words: Iterable[str]) -> "WordDictionary":
        """Build a dictionary without definitions."""
        return cls({word: "" for word in words})

    def contains(self, word: str) -> bool:
        if not word:
            return False
        return word.upper() in self._entries

    def get(self, word: str) -> Optional[str]:
        if not word:
            return None
        return self._entries.get(word.upper())

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.contains(word)

    def __len__(self) -> int:
        return len(self._entries)


def load_word_file(path: Union[str, Path]) -> List[Tuple[str, str]]:
    """
    Parse a single CSV word file.

    The first line is a header and is skipped, as are blank lines. Each
    remaining line is split on its first comma into word and definition.

    Raises:
        FileNotFoundError: If the file does not exist
    """
    path = Path(path)
    text = path.read_text(encoding="utf-8")

    word_defs: List[Tuple[str, str]] = []
    for line in text.splitlines()[1:]:
        line = line.strip()
        if not line:
            continue
        word, sep, definition = line.partition(',')
        word = word.strip()
        if sep and word:
            word_defs.append((word.upper(), definition.strip()))

    return word_defs


def load_dictionary(paths: Optional[Iterable[Union[str, Path]]] = None) -> WordDictionary:
    """
    Load and merge word files into one dictionary.

    Unreadable files are skipped with a warning. Later files override
    definitions from earlier ones.

    Args:
        paths: Word files to load (default: the bundled word list)

    Returns:
        The merged WordDictionary

    Raises:
        ValueError: If no word could be loaded from any file
    """
    paths = list(paths) if paths is not None else [DEFAULT_WORD_FILE]

    entries: Dict[str, str] = {}
    failed = 0
    for path in paths:
        try:
            word_defs = load_word_file(path)
        except OSError as e:
            log.warning("Failed to load %s: %s", path, e)
            failed += 1
            continue
        entries.update(word_defs)
        log.info("Loaded %d words from %s", len(word_defs), path)

    if not entries:
        raise ValueError("Failed to load any words from dictionary files")

    log.info(
        "Dictionary loaded: %d unique words from %d/%d files",
        len(entries), len(paths) - failed, len(paths),
    )
    return WordDictionary(entries)
