"""
Word puzzle game app.

Re-exports the framework-agnostic puzzle engine so callers can import from
wordgame directly, e.g.:

    from wordgame import Dictionary, SubmissionValidator
"""

# PUBLIC_INTERFACE
from .puzzles import (
    Dictionary,
    DictionaryError,
    LetterMultiset,
    PuzzleGenerator,
    SubmissionDecision,
    SubmissionValidator,
    load_dictionary,
)

__all__ = [
    "Dictionary",
    "DictionaryError",
    "LetterMultiset",
    "PuzzleGenerator",
    "SubmissionDecision",
    "SubmissionValidator",
    "load_dictionary",
]
