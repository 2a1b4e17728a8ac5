from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Iterable, Iterator, Tuple, Union

from .letters import LetterMultiset

logger = logging.getLogger(__name__)

MIN_WORD_LENGTH = 2
MAX_WORD_LENGTH = 14

_WORD_RE = re.compile(r"^[a-z]+$")


# PUBLIC_INTERFACE
class DictionaryError(RuntimeError):
    """Raised when a word list is missing or malformed."""


def _as_pool(letters: Union[str, LetterMultiset]) -> LetterMultiset:
    if isinstance(letters, LetterMultiset):
        return letters
    return LetterMultiset(letters)


class FormableWords:
    """Restartable view over the dictionary words formable from a letter pool.

    Every iteration walks the word list again; nothing is computed until the
    view is iterated.
    """

    def __init__(self, entries: Tuple[Tuple[str, LetterMultiset], ...], pool: LetterMultiset):
        self._entries = entries
        self._pool = pool

    def __iter__(self) -> Iterator[str]:
        size = len(self._pool)
        for word, letters in self._entries:
            # Fast path: a word longer than the pool can never fit.
            if len(word) > size:
                continue
            if self._pool.contains(letters):
                yield word


# PUBLIC_INTERFACE
class Dictionary:
    """Immutable, lowercase word list with anagram-subset queries.

    Words are normalized (stripped, lowercased) on construction. Entries
    outside MIN_WORD_LENGTH..MAX_WORD_LENGTH are dropped because they can never
    be submitted; entries with characters outside a-z raise DictionaryError.
    """

    def __init__(self, words: Iterable[str]):
        seen = {}
        for raw in words:
            if not isinstance(raw, str):
                raise DictionaryError(f"Word list entries must be strings, got {type(raw).__name__}.")
            word = raw.strip().lower()
            if not _WORD_RE.match(word):
                raise DictionaryError(f"Word list entry {raw!r} contains characters outside a-z.")
            if not MIN_WORD_LENGTH <= len(word) <= MAX_WORD_LENGTH:
                continue
            seen.setdefault(word, None)
        self._words: Tuple[str, ...] = tuple(seen)
        self._lookup = frozenset(self._words)
        self._entries: Tuple[Tuple[str, LetterMultiset], ...] = tuple(
            (word, LetterMultiset(word)) for word in self._words
        )

    @property
    def words(self) -> Tuple[str, ...]:
        return self._words

    @property
    def shortest_word_length(self) -> int:
        """Length of the shortest word, or 0 for an empty dictionary."""
        return min((len(w) for w in self._words), default=0)

    # PUBLIC_INTERFACE
    def contains(self, word: str) -> bool:
        """Case-insensitive exact membership."""
        return (word or "").lower() in self._lookup

    # PUBLIC_INTERFACE
    def any_word_formable_from(self, letters: Union[str, LetterMultiset]) -> bool:
        """True if at least one word can be drawn from the given letters."""
        for _ in self.all_words_formable_from(letters):
            return True
        return False

    # PUBLIC_INTERFACE
    def all_words_formable_from(self, letters: Union[str, LetterMultiset]) -> FormableWords:
        """Every word whose letters are contained in the given pool, lazily."""
        return FormableWords(self._entries, _as_pool(letters))

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.contains(word)

    def __len__(self) -> int:
        return len(self._words)

    def __iter__(self) -> Iterator[str]:
        return iter(self._words)


# PUBLIC_INTERFACE
def load_dictionary(path: Union[str, Path]) -> Dictionary:
    """Load a word list from a JSON file.

    The file holds either a list of strings or an object with a "words" list.

    Raises:
        DictionaryError: if the file is missing, is not valid JSON, or does not
            hold a list of a-z strings.
    """
    path = Path(path)
    if not path.is_file():
        raise DictionaryError(f"Word list file not found at: {path}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise DictionaryError(f"Could not read word list {path}: {e}") from e

    if isinstance(data, dict):
        data = data.get("words")
    if not isinstance(data, list):
        raise DictionaryError(f"Invalid word list format in {path}: expected a list of words.")

    dictionary = Dictionary(data)
    logger.info("Loaded %d words from %s", len(dictionary), path)
    return dictionary

