"""
Puzzle engine: dictionary, letter multisets, puzzle generation and word validation.

Exports:
- LetterMultiset and strip_letters for letter-pool arithmetic
- Dictionary, DictionaryError and load_dictionary for the word list
- PuzzleGenerator and GenerationError for solvable puzzle generation
- SubmissionValidator and SubmissionDecision for word submissions

These modules are framework-agnostic and can be reused by views or services
without importing request objects or Django models.
"""

from .letters import LetterMultiset, strip_letters
from .dictionary import Dictionary, DictionaryError, load_dictionary
from .generator import GenerationError, PuzzleGenerator, PUZZLE_LENGTH
from .validator import SubmissionDecision, SubmissionValidator

__all__ = [
    "LetterMultiset",
    "strip_letters",
    "Dictionary",
    "DictionaryError",
    "load_dictionary",
    "GenerationError",
    "PuzzleGenerator",
    "PUZZLE_LENGTH",
    "SubmissionDecision",
    "SubmissionValidator",
]
