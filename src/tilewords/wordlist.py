"""Module for word list management in Tilewords."""

from collections import Counter, defaultdict
from collections.abc import Iterable
from os import PathLike
from pathlib import Path
from typing import NamedTuple

from tilewords.logging_utils import get_logger
from tilewords.tiles import TileBag, affordable

logger = get_logger()

DEFAULT_WORDS = [
    "apple",
    "banana",
    "orange",
    "pear",
    "grape",
    "peel",
    "split",
    "dump",
    "swap",
]
"""Fallback word list, used when no word list file is available."""


def _keep(word: str, min_len: int, max_len: int | None) -> bool:
    if len(word) < min_len:
        return False
    if max_len is not None and len(word) > max_len:
        return False
    return word.isascii() and word.isalpha()


def load_word_list(
    path: str | PathLike | None = None,
    *,
    min_len: int = 1,
    max_len: int | None = None,
) -> list[str]:
    """Load the word list from a file, one word per line.

    Args:
        path: Path of the word list.  If None or missing, `DEFAULT_WORDS` is used instead.
        min_len: Minimum word length to include.
        max_len: Optional maximum word length to include.

    Returns:
        Lowercase words in file order, without duplicates.  Lines that are not purely
        alphabetic are skipped.
    """
    word_list_path = Path(path) if path is not None else None
    if word_list_path is None or not word_list_path.is_file():
        logger.warning(f"Word list file not found: {word_list_path}; using built-in list.")
        lines: Iterable[str] = DEFAULT_WORDS
        with_file = False
    else:
        lines = word_list_path.read_text(encoding="utf-8").splitlines()
        with_file = True

    words: dict[str, None] = {}
    for line in lines:
        word = line.strip().lower()
        if word and _keep(word, min_len, max_len):
            words.setdefault(word)

    if with_file:
        logger.info(f"Loaded {len(words)} words from {word_list_path}")
    return list(words)


class Candidate(NamedTuple):
    """A dictionary word together with the offset of an anchor letter within it."""

    word: str
    offset: int


class WordIndex:
    """Dictionary words plus a per-letter positional index.

    `candidates_for(ch)` lists one `(word, offset)` pair for every occurrence of `ch` in
    every word, in dictionary order.  Built once; never modified afterwards.
    """

    def __init__(self, words: Iterable[str]) -> None:
        self.words: list[str] = list(words)
        """Words in dictionary order."""

        letter_index: defaultdict[str, list[Candidate]] = defaultdict(list)
        for word in self.words:
            for offset, ch in enumerate(word):
                letter_index[ch].append(Candidate(word, offset))
        self._letter_index = dict(letter_index)

    def __len__(self) -> int:
        return len(self.words)

    def candidates_for(self, letter: str) -> list[Candidate]:
        """Return the (word, offset) pairs for a letter.  Do not modify the result."""
        return self._letter_index.get(letter, [])

    def candidate_count(self, letter: str) -> int:
        """Number of index entries for a letter (its number of occurrences)."""
        return len(self._letter_index.get(letter, ()))

    def affordable_words(self, bag: TileBag) -> list[str]:
        """Words that can be paid for in full from `bag`, longest first.

        Words of equal length keep their dictionary order.
        """
        words = [w for w in self.words if affordable(w, bag)]
        words.sort(key=len, reverse=True)
        return words


def get_letter_frequency(words: Iterable[str]) -> dict[str, float]:
    """Compute the frequency of each letter in the given words, as percentages."""
    letter_freq: Counter[str] = Counter()
    for word in words:
        letter_freq.update(word)
    total_letter_count = letter_freq.total()
    if total_letter_count == 0:
        return {}
    return {ch: freq / total_letter_count * 100 for ch, freq in letter_freq.items()}
