from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Tuple

from .dictionary import Dictionary
from .letters import LetterMultiset, strip_letters

logger = logging.getLogger(__name__)

MESSAGE_DUPLICATE = "Word already submitted."
MESSAGE_NOT_A_WORD = "Not a valid English word."
MESSAGE_UNAVAILABLE = "Word cannot be formed from remaining letters."
MESSAGE_ACCEPTED = "Word submitted successfully!"


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class SubmissionDecision:
    """Outcome of validating one word against a puzzle and a submission history.

    Rejections carry only valid/message. Acceptances also carry the score, the
    puzzle letters still unused and the dictionary words still formable.
    """

    valid: bool
    message: str
    word: str = ""
    score: int = 0
    remaining_letters: str = ""
    remaining_words: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def reject(cls, word: str, message: str) -> "SubmissionDecision":
        return cls(valid=False, message=message, word=word)

    def as_dict(self) -> Dict[str, Any]:
        if not self.valid:
            return {"valid": False, "message": self.message}
        return {
            "valid": True,
            "score": self.score,
            "remaining_letters": self.remaining_letters,
            "remaining_words": list(self.remaining_words),
            "message": self.message,
        }


# PUBLIC_INTERFACE
@dataclass
class SubmissionValidator:
    """Decides whether a student may claim a word on a puzzle.

    The validator holds no per-student state: the letters already consumed are
    recomputed from the caller-supplied list of previously accepted words on
    every call.
    """

    dictionary: Dictionary

    # PUBLIC_INTERFACE
    def submit(self, letters: str, previous_words: Iterable[str], word: str) -> SubmissionDecision:
        """Validate word for a puzzle.

        Checks run in order and the first failure wins:
        1. duplicate: exact (case-sensitive) match in previous_words
        2. dictionary membership (case-insensitive)
        3. availability in the letters left after previous_words

        Parameters:
            letters: the puzzle's letter string.
            previous_words: words this student already had accepted on the puzzle.
            word: the candidate word, pre-validated as 2-14 ASCII letters.

        Returns:
            SubmissionDecision; rejections are returned, never raised.
        """
        previous = list(previous_words)

        # Case-sensitive on purpose; the dictionary and letter checks are not.
        if word in previous:
            logger.debug("Rejected %r: already submitted", word)
            return SubmissionDecision.reject(word, MESSAGE_DUPLICATE)

        if not self.dictionary.contains(word):
            logger.debug("Rejected %r: not in dictionary", word)
            return SubmissionDecision.reject(word, MESSAGE_NOT_A_WORD)

        consumed = LetterMultiset("".join(previous))
        available = LetterMultiset(letters).minus(consumed)
        wanted = LetterMultiset(word)
        if not available.contains(wanted):
            logger.debug("Rejected %r: letters not available in %s", word, available)
            return SubmissionDecision.reject(word, MESSAGE_UNAVAILABLE)

        remaining_pool = available.minus(wanted)
        return SubmissionDecision(
            valid=True,
            message=MESSAGE_ACCEPTED,
            word=word,
            score=len(word),
            remaining_letters=strip_letters(letters, consumed.plus(wanted)),
            remaining_words=tuple(self.dictionary.all_words_formable_from(remaining_pool)),
        )
