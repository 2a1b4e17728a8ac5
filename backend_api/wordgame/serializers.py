from __future__ import annotations

from typing import Any, Dict

from django.core.validators import RegexValidator
from rest_framework import serializers

from .models import Student, Submission
from .puzzles.dictionary import MAX_WORD_LENGTH, MIN_WORD_LENGTH


# PUBLIC_INTERFACE
class StudentSerializer(serializers.ModelSerializer):
    """Student payload used for list, create, read and update."""

    class Meta:
        model = Student
        fields = ["id", "name", "created_at", "updated_at"]
        read_only_fields = ["id", "created_at", "updated_at"]


# PUBLIC_INTERFACE
class StudentSubmissionSerializer(serializers.ModelSerializer):
    """A student's accepted word, with the letters of the puzzle it came from."""

    puzzle_id = serializers.IntegerField(read_only=True)
    puzzle_letters = serializers.CharField(source="puzzle.letters", read_only=True)

    class Meta:
        model = Submission
        fields = ["puzzle_id", "word", "score", "created_at", "puzzle_letters"]


# PUBLIC_INTERFACE
class SubmitWordRequestSerializer(serializers.Serializer):
    """Request payload to submit a word for a puzzle.

    Fields:
    - student_id: existing student
    - puzzle_id: puzzle identifier (existence is checked by the submission service)
    - word: 2-14 ASCII letters; case is preserved for the duplicate check
    """

    student_id = serializers.IntegerField()
    puzzle_id = serializers.IntegerField()
    word = serializers.CharField(
        min_length=MIN_WORD_LENGTH,
        max_length=MAX_WORD_LENGTH,
        validators=[RegexValidator(r"^[a-zA-Z]+$", "Word must contain only letters a-z.")],
    )

    def validate(self, attrs: Dict[str, Any]) -> Dict[str, Any]:
        if not Student.objects.filter(pk=attrs["student_id"]).exists():
            raise serializers.ValidationError({"student_id": "Student not found."})
        return attrs


# PUBLIC_INTERFACE
class SubmitWordResponseSerializer(serializers.Serializer):
    """Decision returned for a word submission.

    Rejections only carry valid and message; the other fields are omitted.
    """

    valid = serializers.BooleanField()
    score = serializers.IntegerField(required=False)
    remaining_letters = serializers.CharField(required=False, allow_blank=True)
    remaining_words = serializers.ListField(child=serializers.CharField(), required=False)
    message = serializers.CharField()


# PUBLIC_INTERFACE
class PuzzleResponseSerializer(serializers.Serializer):
    """Response payload for a generated puzzle."""

    success = serializers.BooleanField()
    puzzle_id = serializers.IntegerField()
    puzzle = serializers.CharField()
    message = serializers.CharField()


# PUBLIC_INTERFACE
class ValidWordsResponseSerializer(serializers.Serializer):
    """Every dictionary word that can be formed from a puzzle."""

    success = serializers.BooleanField()
    puzzle_id = serializers.IntegerField()
    valid_words = serializers.ListField(child=serializers.CharField())


# PUBLIC_INTERFACE
class LeaderboardEntrySerializer(serializers.Serializer):
    """Leaderboard entry."""

    word = serializers.CharField()
    score = serializers.IntegerField()


# PUBLIC_INTERFACE
class LeaderboardResponseSerializer(serializers.Serializer):
    """Top scoring words, highest first."""

    success = serializers.BooleanField()
    scores = LeaderboardEntrySerializer(many=True)


# PUBLIC_INTERFACE
class StudentScoreResponseSerializer(serializers.Serializer):
    """Total score across all of a student's accepted words."""

    success = serializers.BooleanField()
    student_id = serializers.IntegerField()
    total_score = serializers.IntegerField()
