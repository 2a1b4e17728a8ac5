import threading
from unittest import mock

from django.core.cache import cache
from django.db import connection
from django.test import TestCase, TransactionTestCase

from wordgame import services
from wordgame.leaderboard import Leaderboard
from wordgame.models import LeaderboardEntry, Puzzle, Student, Submission


class LeaderboardTests(TestCase):
    def setUp(self):
        cache.clear()
        self.board = Leaderboard(size=10, cache_timeout=60)

    def test_offer_inserts_until_full(self):
        self.assertTrue(self.board.offer("get", 3))
        self.assertTrue(self.board.offer("taxi", 4))
        self.assertEqual(self.board.top_scores(), [{"word": "taxi", "score": 4}, {"word": "get", "score": 3}])

    def test_bounded_to_ten_entries(self):
        words = [f"w{chr(ord('a') + i)}" for i in range(15)]
        for score, word in enumerate(words, start=1):
            self.board.offer(word, score)

        top = self.board.top_scores()
        self.assertEqual(len(top), 10)
        self.assertEqual(LeaderboardEntry.objects.count(), 10)
        self.assertEqual([row["score"] for row in top], list(range(15, 5, -1)))
        kept = {row["word"] for row in top}
        for word in words[:5]:
            self.assertNotIn(word, kept)

    def test_no_downgrade(self):
        self.board.offer("fox", 5)
        self.assertFalse(self.board.offer("fox", 2))
        self.assertEqual(LeaderboardEntry.objects.get(word="fox").score, 5)

    def test_upgrade_existing_word(self):
        self.board.offer("fox", 3)
        self.assertTrue(self.board.offer("fox", 7))
        self.assertEqual(LeaderboardEntry.objects.get(word="fox").score, 7)
        self.assertEqual(LeaderboardEntry.objects.count(), 1)

    def test_words_are_stored_lowercase(self):
        self.board.offer("FOX", 3)
        self.assertFalse(self.board.offer("fox", 3))
        self.assertEqual(list(LeaderboardEntry.objects.values_list("word", flat=True)), ["fox"])

    def test_full_table_ignores_low_scores(self):
        board = Leaderboard(size=2, cache_timeout=60)
        board.offer("taxi", 4)
        board.offer("get", 3)
        self.assertFalse(board.offer("dog", 3))
        self.assertFalse(board.offer("ox", 2))
        self.assertEqual([r["word"] for r in board.top_scores()], ["taxi", "get"])

    def test_eviction_tie_break_removes_smallest_word(self):
        board = Leaderboard(size=3, cache_timeout=60)
        board.offer("zoo", 3)
        board.offer("bag", 3)
        board.offer("taxi", 4)
        self.assertTrue(board.offer("table", 5))
        self.assertEqual(
            sorted(LeaderboardEntry.objects.values_list("word", flat=True)), ["table", "taxi", "zoo"]
        )

    def test_top_scores_is_cached(self):
        self.board.offer("get", 3)
        first = self.board.top_scores()
        # A write that bypasses offer() is not visible until the cache is dropped.
        LeaderboardEntry.objects.create(word="taxi", score=4)
        self.assertEqual(self.board.top_scores(), first)
        self.board.invalidate()
        self.assertEqual(self.board.top_scores()[0], {"word": "taxi", "score": 4})

    def test_offer_invalidates_cache(self):
        self.board.offer("get", 3)
        self.assertEqual(self.board.top_scores(), [{"word": "get", "score": 3}])
        self.board.offer("taxi", 4)
        self.assertEqual(self.board.top_scores()[0], {"word": "taxi", "score": 4})

    def test_rejected_offer_keeps_cache(self):
        self.board.offer("fox", 5)
        top = self.board.top_scores()
        self.board.offer("fox", 1)
        self.assertEqual(self.board.top_scores(), top)


def _in_thread(fn, results, errors, barrier=None):
    """Thread running fn on its own database connection, collecting its result or error."""

    def run():
        try:
            if barrier is not None:
                barrier.wait(timeout=10)
            results.append(fn())
        except Exception as e:
            errors.append(e)
        finally:
            connection.close()

    return threading.Thread(target=run)


class LeaderboardConcurrencyTests(TransactionTestCase):
    def setUp(self):
        cache.clear()

    def _run_together(self, calls):
        results, errors = [], []
        barrier = threading.Barrier(len(calls))
        threads = [_in_thread(fn, results, errors, barrier) for fn in calls]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=30)
        self.assertFalse(any(thread.is_alive() for thread in threads))
        self.assertEqual(errors, [])
        return results

    def test_racing_offers_never_overflow(self):
        board = Leaderboard(size=3, cache_timeout=60)
        words = [f"w{chr(ord('a') + i)}" for i in range(8)]
        self._run_together(
            [lambda w=word, s=score: board.offer(w, s) for score, word in enumerate(words, start=1)]
        )

        self.assertEqual(LeaderboardEntry.objects.count(), 3)
        self.assertEqual([row["word"] for row in board.top_scores()], ["wh", "wg", "wf"])

    def test_racing_submissions_keep_the_table_bounded(self):
        puzzle = Puzzle.objects.create(letters="dgeftoikbvxuaa")
        words = ["get", "fox", "taxi", "bad", "boat", "kid", "dog", "bug"]
        students = [Student.objects.create(name=f"Student {i}") for i in range(len(words))]
        board = Leaderboard(size=2, cache_timeout=60)

        with mock.patch("wordgame.services.get_leaderboard", return_value=board):
            decisions = self._run_together(
                [
                    lambda s=student, w=word: services.submit_word(s.id, puzzle.id, w)
                    for student, word in zip(students, words)
                ]
            )

        self.assertTrue(all(decision.valid for decision in decisions))
        self.assertEqual(Submission.objects.count(), len(words))
        self.assertEqual(sorted(LeaderboardEntry.objects.values_list("word", flat=True)), ["boat", "taxi"])

    def test_write_lock_is_held_until_commit(self):
        board = Leaderboard(size=10, cache_timeout=60)
        results, errors = [], []
        waiting = _in_thread(lambda: board.offer("cc", 3), results, errors)

        with board.serialized():
            board.offer("bb", 2)
            waiting.start()
            waiting.join(timeout=0.5)
            # The other writer queues until this transaction has committed.
            self.assertTrue(waiting.is_alive())
            self.assertEqual(results, [])

        waiting.join(timeout=10)
        self.assertFalse(waiting.is_alive())
        self.assertEqual(errors, [])
        self.assertEqual(results, [True])
        self.assertEqual(board.top_scores(), [{"word": "cc", "score": 3}, {"word": "bb", "score": 2}])
