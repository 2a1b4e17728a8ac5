from __future__ import annotations

import logging
import random
import string
from typing import Optional

from .dictionary import Dictionary

logger = logging.getLogger(__name__)

PUZZLE_LENGTH = 14
ALPHABET = string.ascii_lowercase


# PUBLIC_INTERFACE
class GenerationError(RuntimeError):
    """Raised when the dictionary can never yield a solvable puzzle."""


# PUBLIC_INTERFACE
class PuzzleGenerator:
    """Random letter puzzles that always contain at least one dictionary word.

    Candidates are 14 independent uniformly random letters; candidates with no
    formable word are discarded and redrawn.

    Parameters:
        dictionary: word list used for the solvability check.
        length: number of letters per puzzle.
        rng: random.Random-compatible source, SystemRandom by default.
    """

    def __init__(self, dictionary: Dictionary, length: int = PUZZLE_LENGTH, rng: Optional[random.Random] = None):
        self.dictionary = dictionary
        self.length = length
        self._rng = rng or random.SystemRandom()

    def _draw(self) -> str:
        return "".join(self._rng.choice(ALPHABET) for _ in range(self.length))

    # PUBLIC_INTERFACE
    def generate(self) -> str:
        """Return a lowercase letter string from which some word can be formed.

        Raises:
            GenerationError: if no dictionary word fits in a puzzle of this length.
        """
        shortest = self.dictionary.shortest_word_length
        if not shortest or shortest > self.length:
            raise GenerationError(
                f"Dictionary has no word of at most {self.length} letters; cannot generate a puzzle."
            )

        attempts = 0
        while True:
            attempts += 1
            candidate = self._draw()
            if self.dictionary.any_word_formable_from(candidate):
                logger.debug("Generated puzzle %s after %d attempt(s)", candidate, attempts)
                return candidate
