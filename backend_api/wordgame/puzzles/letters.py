from __future__ import annotations

from collections import Counter
from string import ascii_lowercase
from typing import Iterator


# PUBLIC_INTERFACE
class LetterMultiset:
    """Letter histogram built from a string.

    Counting is case-insensitive: the source string is lowercased before its
    letters are counted. Characters outside a-z are ignored. Counts never go
    negative.

    Example:
        pool = LetterMultiset("dgeftoikbvxuaa")
        pool.contains(LetterMultiset("fox"))   # True
        pool.minus(LetterMultiset("get"))      # pool without g, e, t
    """

    __slots__ = ("_counts",)

    def __init__(self, letters: str = "") -> None:
        self._counts: Counter = Counter(ch for ch in (letters or "").lower() if ch in ascii_lowercase)

    @classmethod
    def _from_counter(cls, counts: Counter) -> "LetterMultiset":
        instance = cls()
        instance._counts = +counts
        return instance

    # PUBLIC_INTERFACE
    def contains(self, other: "LetterMultiset") -> bool:
        """Return True if every letter of other occurs here at least as often."""
        return all(self._counts[ch] >= n for ch, n in other._counts.items())

    # PUBLIC_INTERFACE
    def minus(self, other: "LetterMultiset") -> "LetterMultiset":
        """Remove up to other's count of each letter, clamping at zero."""
        return self._from_counter(self._counts - other._counts)

    def plus(self, other: "LetterMultiset") -> "LetterMultiset":
        return self._from_counter(self._counts + other._counts)

    def count(self, letter: str) -> int:
        return self._counts[letter.lower()]

    def __len__(self) -> int:
        return sum(self._counts.values())

    def __iter__(self) -> Iterator[str]:
        for ch in sorted(self._counts):
            for _ in range(self._counts[ch]):
                yield ch

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LetterMultiset):
            return NotImplemented
        return self._counts == other._counts

    def __hash__(self) -> int:
        return hash(frozenset(self._counts.items()))

    def __str__(self) -> str:
        return "".join(self)

    def __repr__(self) -> str:  # pragma: no cover
        return f"LetterMultiset({str(self)!r})"


# PUBLIC_INTERFACE
def strip_letters(letters: str, used: LetterMultiset) -> str:
    """Remove the letters in used from letters, one occurrence at a time.

    Surviving characters keep their original order. Letters in used that do
    not occur in letters are ignored.
    """
    pending: Counter = Counter({ch: used.count(ch) for ch in set(used)})
    kept = []
    for ch in (letters or "").lower():
        if pending[ch] > 0:
            pending[ch] -= 1
            continue
        kept.append(ch)
    return "".join(kept)
