from io import StringIO
from unittest import mock

from django.core.cache import cache
from django.core.management import call_command
from django.db import DatabaseError
from django.urls import reverse
from rest_framework.test import APITestCase

from wordgame.leaderboard import Leaderboard
from wordgame.models import LeaderboardEntry, Puzzle, Student, Submission


class GameFlowTests(APITestCase):
    def setUp(self):
        cache.clear()
        self.student = Student.objects.create(name="Test Student")
        self.puzzle = Puzzle.objects.create(letters="dgeftoikbvxuaa")

    def _submit(self, word, student=None, puzzle_id=None):
        payload = {
            "student_id": (student or self.student).id,
            "puzzle_id": puzzle_id if puzzle_id is not None else self.puzzle.id,
            "word": word,
        }
        return self.client.post(reverse('submit-word'), payload, format="json")

    def test_health(self):
        resp = self.client.get(reverse('Health'))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"message": "Server is up!"})

    def test_can_submit_valid_word(self):
        resp = self._submit("get")
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertTrue(data["valid"])
        self.assertEqual(data["score"], 3)
        self.assertEqual(data["message"], "Word submitted successfully!")
        self.assertIn("fox", data["remaining_words"])
        for letter in "get":
            self.assertNotIn(letter, data["remaining_letters"])
        self.assertTrue(
            Submission.objects.filter(student=self.student, puzzle=self.puzzle, word="get", score=3).exists()
        )
        self.assertTrue(LeaderboardEntry.objects.filter(word="get", score=3).exists())

    def test_cannot_submit_invalid_word(self):
        data = self._submit("XYZ").json()
        self.assertFalse(data["valid"])
        self.assertEqual(data, {"valid": False, "message": "Not a valid English word."})
        self.assertFalse(Submission.objects.exists())

    def test_cannot_submit_duplicate_word(self):
        self.assertTrue(self._submit("get").json()["valid"])
        data = self._submit("get").json()
        self.assertFalse(data["valid"])
        self.assertEqual(data["message"], "Word already submitted.")
        self.assertEqual(Submission.objects.count(), 1)

    def test_cannot_submit_word_with_unavailable_letters(self):
        self._submit("get")
        data = self._submit("over").json()
        self.assertFalse(data["valid"])
        self.assertEqual(data["message"], "Word cannot be formed from remaining letters.")

    def test_history_is_per_student(self):
        other = Student.objects.create(name="Other Student")
        self.assertTrue(self._submit("get").json()["valid"])
        self.assertTrue(self._submit("get", student=other).json()["valid"])

    def test_request_validation(self):
        self.assertEqual(self._submit("a").status_code, 400)
        self.assertEqual(self._submit("ab1").status_code, 400)
        self.assertEqual(self._submit("abcdefghijklmno").status_code, 400)
        resp = self.client.post(
            reverse('submit-word'), {"student_id": 9999, "puzzle_id": self.puzzle.id, "word": "get"}, format="json"
        )
        self.assertEqual(resp.status_code, 400)
        self.assertIn("student_id", resp.json())

    def test_unknown_puzzle(self):
        resp = self._submit("get", puzzle_id=9999)
        self.assertEqual(resp.status_code, 404)
        self.assertFalse(resp.json()["success"])

    def test_leaderboard_failure_rolls_back_submission(self):
        with mock.patch.object(Leaderboard, "offer", side_effect=DatabaseError("boom")):
            resp = self._submit("get")
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json()["message"], "Failed to store submission in database")
        self.assertFalse(Submission.objects.exists())
        self.assertFalse(LeaderboardEntry.objects.exists())

    def test_can_get_top_scores(self):
        # Both words need the puzzle's only "t", so they come from different students.
        other = Student.objects.create(name="Other Student")
        self.assertTrue(self._submit("get").json()["valid"])
        self.assertTrue(self._submit("taxi", student=other).json()["valid"])
        resp = self.client.get(reverse('leaderboard'))
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertTrue(data["success"])
        scores = [row["score"] for row in data["scores"]]
        self.assertEqual(scores, sorted(scores, reverse=True))
        self.assertLessEqual(len(scores), 10)
        self.assertEqual(data["scores"][0], {"word": "taxi", "score": 4})

    def test_leaderboard_empty(self):
        resp = self.client.get(reverse('leaderboard'))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"success": True, "scores": []})

    def test_generate_puzzle(self):
        resp = self.client.post(reverse('generate-puzzle'))
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertTrue(data["success"])
        self.assertEqual(len(data["puzzle"]), 14)
        self.assertEqual(Puzzle.objects.get(pk=data["puzzle_id"]).letters, data["puzzle"])

        words = self.client.get(reverse('puzzle-valid-words', kwargs={"puzzle_id": data["puzzle_id"]})).json()
        self.assertTrue(words["valid_words"])

    def test_puzzle_valid_words(self):
        resp = self.client.get(reverse('puzzle-valid-words', kwargs={"puzzle_id": self.puzzle.id}))
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data["puzzle_id"], self.puzzle.id)
        self.assertIn("fox", data["valid_words"])
        self.assertIn("get", data["valid_words"])
        self.assertNotIn("over", data["valid_words"])

        missing = self.client.get(reverse('puzzle-valid-words', kwargs={"puzzle_id": 9999}))
        self.assertEqual(missing.status_code, 404)


class StudentApiTests(APITestCase):
    def setUp(self):
        cache.clear()

    def test_create_and_list(self):
        resp = self.client.post(reverse('students'), {"name": "  Ada "}, format="json")
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json()["name"], "Ada")

        listing = self.client.get(reverse('students')).json()
        self.assertEqual([s["name"] for s in listing], ["Ada"])

    def test_create_requires_name(self):
        resp = self.client.post(reverse('students'), {"name": "   "}, format="json")
        self.assertEqual(resp.status_code, 400)

    def test_detail_update_delete(self):
        student = Student.objects.create(name="Bo")
        url = reverse('student-detail', kwargs={"student_id": student.id})

        self.assertEqual(self.client.get(url).json()["name"], "Bo")
        resp = self.client.put(url, {"name": "Bea"}, format="json")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(Student.objects.get(pk=student.id).name, "Bea")

        self.assertEqual(self.client.delete(url).status_code, 200)
        self.assertFalse(Student.objects.filter(pk=student.id).exists())
        self.assertEqual(self.client.get(url).status_code, 404)

    def test_submissions_and_score(self):
        student = Student.objects.create(name="Cy")
        puzzle = Puzzle.objects.create(letters="dgeftoikbvxuaa")
        for word in ["get", "fox"]:
            self.client.post(
                reverse('submit-word'),
                {"student_id": student.id, "puzzle_id": puzzle.id, "word": word},
                format="json",
            )

        subs = self.client.get(reverse('student-submissions', kwargs={"student_id": student.id})).json()
        self.assertEqual({s["word"] for s in subs}, {"get", "fox"})
        self.assertTrue(all(s["puzzle_letters"] == "dgeftoikbvxuaa" for s in subs))
        self.assertTrue(all(s["puzzle_id"] == puzzle.id for s in subs))

        score = self.client.get(reverse('student-score', kwargs={"student_id": student.id})).json()
        self.assertEqual(score, {"success": True, "student_id": student.id, "total_score": 6})

    def test_unknown_student(self):
        resp = self.client.get(reverse('student-score', kwargs={"student_id": 9999}))
        self.assertEqual(resp.status_code, 404)


class GeneratePuzzlesCommandTests(APITestCase):
    def test_creates_requested_puzzles(self):
        out = StringIO()
        call_command("generate_puzzles", count=3, stdout=out)
        self.assertEqual(Puzzle.objects.count(), 3)
        self.assertIn("Generated 3 puzzle(s).", out.getvalue())
        for letters in Puzzle.objects.values_list("letters", flat=True):
            self.assertRegex(letters, r"^[a-z]{14}$")
