from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import List

from django.conf import settings
from django.db.models import Sum

from .leaderboard import get_leaderboard
from .models import Puzzle, Student, Submission
from .puzzles import (
    Dictionary,
    LetterMultiset,
    PuzzleGenerator,
    SubmissionDecision,
    SubmissionValidator,
    load_dictionary,
)

logger = logging.getLogger(__name__)

DEFAULT_DICTIONARY_PATH = Path(__file__).resolve().parent / "data" / "words.json"


# PUBLIC_INTERFACE
@lru_cache(maxsize=1)
def get_dictionary() -> Dictionary:
    """Load the configured word list once per process.

    Raises:
        DictionaryError: if the word list is missing or malformed.
    """
    path = getattr(settings, "WORDGAME_DICTIONARY_PATH", None) or DEFAULT_DICTIONARY_PATH
    return load_dictionary(path)


# PUBLIC_INTERFACE
def generate_puzzle() -> Puzzle:
    """Generate a solvable puzzle and store it."""
    letters = PuzzleGenerator(get_dictionary()).generate()
    puzzle = Puzzle.objects.create(letters=letters)
    logger.info("Created puzzle #%s: %s", puzzle.pk, letters)
    return puzzle


# PUBLIC_INTERFACE
def valid_words_for(puzzle: Puzzle) -> List[str]:
    """All dictionary words that can be formed from the puzzle's full letter pool."""
    return list(get_dictionary().all_words_formable_from(LetterMultiset(puzzle.letters)))


def _previous_words(student_id: int, puzzle: Puzzle) -> List[str]:
    return list(puzzle.submissions.filter(student_id=student_id).values_list("word", flat=True))


# PUBLIC_INTERFACE
def submit_word(student_id: int, puzzle_id: int, word: str) -> SubmissionDecision:
    """Validate and, if accepted, record a word submission.

    The whole unit of work runs under the leaderboard write lock: the history
    read, the submission row and the leaderboard offer share one transaction,
    and the lock is only released once it has committed. If a write fails
    both are rolled back and the error propagates.

    Raises:
        Puzzle.DoesNotExist: if puzzle_id does not exist.
        django.db.DatabaseError: if persisting the accepted word fails.
    """
    leaderboard = get_leaderboard()
    with leaderboard.serialized():
        puzzle = Puzzle.objects.get(pk=puzzle_id)
        previous = _previous_words(student_id, puzzle)

        decision = SubmissionValidator(get_dictionary()).submit(puzzle.letters, previous, word)
        if not decision.valid:
            logger.info("Student %s, puzzle %s: %r rejected (%s)", student_id, puzzle_id, word, decision.message)
            return decision

        Submission.objects.create(student_id=student_id, puzzle=puzzle, word=word, score=decision.score)
        leaderboard.offer(word, decision.score)

    logger.info("Student %s, puzzle %s: %r accepted for %d", student_id, puzzle_id, word, decision.score)
    return decision


# PUBLIC_INTERFACE
def student_total_score(student: Student) -> int:
    """Sum of scores over every accepted submission of a student."""
    return Submission.objects.filter(student=student).aggregate(total=Sum("score"))["total"] or 0
