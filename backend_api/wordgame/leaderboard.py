from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Any, Dict, Generator, List, Optional

from django.conf import settings
from django.core.cache import cache
from django.db import transaction

from .models import LeaderboardEntry, LeaderboardLock

logger = logging.getLogger(__name__)

TOP_SCORES_CACHE_KEY = "top_scores"
DEFAULT_SIZE = 10
DEFAULT_CACHE_TIMEOUT = 60
LEADERBOARD_LOCK_ID = 1

# Threads of this process; the guard row covers other processes.
_write_lock = threading.RLock()


# PUBLIC_INTERFACE
class Leaderboard:
    """Bounded table of the highest-scoring distinct words, with a cached read.

    offer() runs as one transaction:
    - known word: the score only ever goes up
    - free slot: the word is inserted
    - full table: the lowest entry is evicted if the new score beats it

    Among several entries sharing the lowest score, the lexicographically
    smallest word is evicted. Every change drops the cached top_scores() read.
    """

    def __init__(self, size: Optional[int] = None, cache_timeout: Optional[int] = None):
        self.size = size if size is not None else getattr(settings, "WORDGAME_LEADERBOARD_SIZE", DEFAULT_SIZE)
        self.cache_timeout = (
            cache_timeout
            if cache_timeout is not None
            else getattr(settings, "WORDGAME_LEADERBOARD_CACHE_TIMEOUT", DEFAULT_CACHE_TIMEOUT)
        )

    # PUBLIC_INTERFACE
    @contextmanager
    def serialized(self) -> Generator[None, None, None]:
        """Run the enclosed block as one transaction holding the leaderboard write lock.

        The lock is the process-wide RLock plus SELECT ... FOR UPDATE on the single
        LeaderboardLock row, so concurrent writers queue on one row instead of
        racing on the entries. Both are held until the transaction commits or
        rolls back. Re-entrant: offer() inside a serialized() block joins it.
        """
        with _write_lock, transaction.atomic():
            LeaderboardLock.objects.select_for_update().get_or_create(pk=LEADERBOARD_LOCK_ID)
            yield

    # PUBLIC_INTERFACE
    def offer(self, word: str, score: int) -> bool:
        """Offer a word for the table.

        Returns:
            True if the table changed, False otherwise.
        """
        word = (word or "").lower()
        with self.serialized():
            entries = list(LeaderboardEntry.objects.order_by("score", "word"))
            changed = self._apply(entries, word, score)
            if changed:
                self.invalidate()
                transaction.on_commit(self.invalidate)
        return changed

    def _apply(self, entries: List[LeaderboardEntry], word: str, score: int) -> bool:
        existing = next((e for e in entries if e.word == word), None)
        if existing is not None:
            if score <= existing.score:
                return False
            logger.info("Leaderboard: %s raised from %d to %d", word, existing.score, score)
            existing.score = score
            existing.save(update_fields=["score", "updated_at"])
            return True

        if len(entries) < self.size:
            LeaderboardEntry.objects.create(word=word, score=score)
            logger.info("Leaderboard: %s entered with %d", word, score)
            return True

        # entries is ordered by (score, word); the first row is the eviction candidate.
        lowest = entries[0]
        if score <= lowest.score:
            return False
        logger.info("Leaderboard: %s (%d) evicts %s (%d)", word, score, lowest.word, lowest.score)
        lowest.delete()
        LeaderboardEntry.objects.create(word=word, score=score)
        return True

    # PUBLIC_INTERFACE
    def top_scores(self) -> List[Dict[str, Any]]:
        """Return up to size {"word", "score"} rows, highest score first.

        Served from the cache while fresh, recomputed from the table otherwise.
        """
        scores = cache.get(TOP_SCORES_CACHE_KEY)
        if scores is None:
            scores = [
                {"word": word, "score": score}
                for word, score in LeaderboardEntry.objects.order_by("-score", "word").values_list("word", "score")[
                    : self.size
                ]
            ]
            cache.set(TOP_SCORES_CACHE_KEY, scores, self.cache_timeout)
        return scores

    def invalidate(self) -> None:
        cache.delete(TOP_SCORES_CACHE_KEY)


_leaderboard: Optional[Leaderboard] = None


# PUBLIC_INTERFACE
def get_leaderboard() -> Leaderboard:
    """Process-wide Leaderboard configured from settings."""
    global _leaderboard
    if _leaderboard is None:
        _leaderboard = Leaderboard()
    return _leaderboard
