from __future__ import annotations

from django.db import models


# PUBLIC_INTERFACE
class TimeStampedModel(models.Model):
    """Abstract base model providing created/updated timestamps.

    Notes:
        Keep this abstract model free of any logic that would access the Django
        app registry or execute queries at module import time. Only field
        declarations and Meta options are allowed here so that importing this
        module does not trigger AppRegistryNotReady during Django startup.
    """
    created_at = models.DateTimeField(auto_now_add=True, help_text="Time when the record was created.")
    updated_at = models.DateTimeField(auto_now=True, help_text="Time when the record was last updated.")

    class Meta:
        abstract = True


# PUBLIC_INTERFACE
class Student(TimeStampedModel):
    """A player who submits words against puzzles."""
    name = models.CharField(max_length=255, help_text="Display name of the student.")

    class Meta:
        ordering = ["id"]
        verbose_name = "Student"
        verbose_name_plural = "Students"

    def __str__(self) -> str:  # pragma: no cover
        return self.name


# PUBLIC_INTERFACE
class Puzzle(TimeStampedModel):
    """A 14-letter pool that students draw words from.

    Fields:
    - letters: lowercase letter string; always contains at least one dictionary
      word when produced by the puzzle generator
    """
    letters = models.CharField(max_length=14, help_text="Lowercase puzzle letters.")

    class Meta:
        ordering = ["-created_at"]
        verbose_name = "Puzzle"
        verbose_name_plural = "Puzzles"

    def save(self, *args, **kwargs):
        # Normalize letters on save
        if self.letters:
            self.letters = self.letters.strip().lower()
        super().save(*args, **kwargs)

    def __str__(self) -> str:  # pragma: no cover
        return f"Puzzle #{self.pk}: {self.letters}"


# PUBLIC_INTERFACE
class Submission(TimeStampedModel):
    """An accepted word for a (student, puzzle) pair.

    Fields:
    - student / puzzle: who claimed the word and where
    - word: the word exactly as submitted (duplicate checks are case-sensitive)
    - score: points awarded, one per letter
    """
    student = models.ForeignKey(Student, on_delete=models.CASCADE, related_name="submissions")
    puzzle = models.ForeignKey(Puzzle, on_delete=models.CASCADE, related_name="submissions")
    word = models.CharField(max_length=14, help_text="Submitted word, as typed.")
    score = models.PositiveSmallIntegerField(help_text="Points awarded for the word.")

    class Meta:
        ordering = ["created_at"]
        indexes = [models.Index(fields=["student", "puzzle"], name="submission_student_puzzle")]
        verbose_name = "Submission"
        verbose_name_plural = "Submissions"

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.word} ({self.score}) by student {self.student_id} on puzzle {self.puzzle_id}"


# PUBLIC_INTERFACE
class LeaderboardEntry(TimeStampedModel):
    """One row of the global top-scoring words table.

    Rows are only written through wordgame.leaderboard.Leaderboard, which keeps
    the table bounded and the cached read coherent.
    """
    word = models.CharField(max_length=14, unique=True, help_text="Lowercase word.")
    score = models.PositiveSmallIntegerField(db_index=True)

    class Meta:
        ordering = ["-score", "word"]
        verbose_name = "Leaderboard entry"
        verbose_name_plural = "Leaderboard entries"

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.word}: {self.score}"


# PUBLIC_INTERFACE
class LeaderboardLock(models.Model):
    """Single guard row that every leaderboard write locks with SELECT ... FOR UPDATE.

    Locking one known row serializes writers even when the race is over
    inserting a new entry, which row locks on the entries themselves cannot do.
    """

    class Meta:
        verbose_name = "Leaderboard lock"

    def __str__(self) -> str:  # pragma: no cover
        return f"leaderboard lock #{self.pk}"
