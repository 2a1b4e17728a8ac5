from __future__ import annotations

import logging

from django.db import DatabaseError
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework import status, permissions
from drf_yasg.utils import swagger_auto_schema

from .leaderboard import get_leaderboard
from .models import Puzzle, Student
from .puzzles import GenerationError
from .serializers import (
    StudentSerializer,
    StudentSubmissionSerializer,
    StudentScoreResponseSerializer,
    SubmitWordRequestSerializer,
    SubmitWordResponseSerializer,
    PuzzleResponseSerializer,
    ValidWordsResponseSerializer,
    LeaderboardResponseSerializer,
)
from . import services

logger = logging.getLogger(__name__)


def _not_found(what: str) -> Response:
    return Response({"success": False, "message": f"{what} not found."}, status=status.HTTP_404_NOT_FOUND)


def _server_error(message: str) -> Response:
    return Response({"success": False, "message": message}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)


# PUBLIC_INTERFACE
@api_view(['GET'])
@permission_classes([permissions.AllowAny])
def health(request):
    """Health check endpoint for the API.

    Returns:
    - 200 OK with {"message": "Server is up!"}
    """
    return Response({"message": "Server is up!"})


# PUBLIC_INTERFACE
@swagger_auto_schema(
    method="get",
    operation_id="list_students",
    operation_summary="List students",
    responses={200: StudentSerializer(many=True)},
    tags=["students"],
)
@swagger_auto_schema(
    method="post",
    operation_id="create_student",
    operation_summary="Create a student",
    request_body=StudentSerializer,
    responses={201: StudentSerializer},
    tags=["students"],
)
@api_view(["GET", "POST"])
@permission_classes([permissions.AllowAny])
def students(request):
    """List all students, or create one from {"name": str}."""
    if request.method == "GET":
        return Response(StudentSerializer(Student.objects.all(), many=True).data)

    serializer = StudentSerializer(data=request.data or {})
    serializer.is_valid(raise_exception=True)
    serializer.save()
    return Response(serializer.data, status=status.HTTP_201_CREATED)


# PUBLIC_INTERFACE
@swagger_auto_schema(
    method="get",
    operation_id="get_student",
    operation_summary="Get a student",
    responses={200: StudentSerializer},
    tags=["students"],
)
@swagger_auto_schema(
    method="put",
    operation_id="update_student",
    operation_summary="Rename a student",
    request_body=StudentSerializer,
    responses={200: StudentSerializer},
    tags=["students"],
)
@swagger_auto_schema(
    method="delete",
    operation_id="delete_student",
    operation_summary="Delete a student and their submissions",
    tags=["students"],
)
@api_view(["GET", "PUT", "DELETE"])
@permission_classes([permissions.AllowAny])
def student_detail(request, student_id: int):
    """Read, rename or delete a single student."""
    try:
        student = Student.objects.get(pk=student_id)
    except Student.DoesNotExist:
        return _not_found("Student")

    if request.method == "GET":
        return Response(StudentSerializer(student).data)

    if request.method == "PUT":
        serializer = StudentSerializer(student, data=request.data or {})
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(serializer.data)

    student.delete()
    return Response({"success": True, "message": "Student deleted successfully!"})


# PUBLIC_INTERFACE
@swagger_auto_schema(
    method="get",
    operation_id="student_submissions",
    operation_summary="List a student's accepted words",
    operation_description="Newest first, each with the letters of its puzzle.",
    responses={200: StudentSubmissionSerializer(many=True)},
    tags=["students"],
)
@api_view(["GET"])
@permission_classes([permissions.AllowAny])
def student_submissions(request, student_id: int):
    """All accepted submissions of a student, newest first."""
    try:
        student = Student.objects.get(pk=student_id)
    except Student.DoesNotExist:
        return _not_found("Student")

    qs = student.submissions.select_related("puzzle").order_by("-created_at", "-id")
    return Response(StudentSubmissionSerializer(qs, many=True).data)


# PUBLIC_INTERFACE
@swagger_auto_schema(
    method="get",
    operation_id="student_score",
    operation_summary="Get a student's total score",
    responses={200: StudentScoreResponseSerializer},
    tags=["students"],
)
@api_view(["GET"])
@permission_classes([permissions.AllowAny])
def student_score(request, student_id: int):
    """Total score across all of a student's accepted words."""
    try:
        student = Student.objects.get(pk=student_id)
    except Student.DoesNotExist:
        return _not_found("Student")

    resp = {
        "success": True,
        "student_id": student.id,
        "total_score": services.student_total_score(student),
    }
    return Response(StudentScoreResponseSerializer(resp).data)


# PUBLIC_INTERFACE
@swagger_auto_schema(
    method="post",
    operation_id="generate_puzzle",
    operation_summary="Generate a new puzzle",
    operation_description="""
Generate and store a random 14-letter puzzle. Every generated puzzle contains
at least one dictionary word.

Response:
- success, puzzle_id, puzzle (the letters), message
""",
    responses={200: PuzzleResponseSerializer},
    tags=["puzzles"],
)
@api_view(["POST"])
@permission_classes([permissions.AllowAny])
def generate_puzzle(request):
    """Generate a solvable puzzle and persist it."""
    try:
        puzzle = services.generate_puzzle()
    except DatabaseError:
        logger.exception("Database error while generating puzzle")
        return _server_error("Failed to store puzzle in database")
    except GenerationError:
        logger.exception("Error generating puzzle")
        return _server_error("Failed to generate puzzle")

    resp = {
        "success": True,
        "puzzle_id": puzzle.id,
        "puzzle": puzzle.letters,
        "message": "Puzzle generated successfully!",
    }
    return Response(PuzzleResponseSerializer(resp).data, status=status.HTTP_200_OK)


# PUBLIC_INTERFACE
@swagger_auto_schema(
    method="get",
    operation_id="puzzle_valid_words",
    operation_summary="List every word formable from a puzzle",
    responses={200: ValidWordsResponseSerializer},
    tags=["puzzles"],
)
@api_view(["GET"])
@permission_classes([permissions.AllowAny])
def puzzle_valid_words(request, puzzle_id: int):
    """Every dictionary word that can be formed from the puzzle's letters."""
    try:
        puzzle = Puzzle.objects.get(pk=puzzle_id)
    except Puzzle.DoesNotExist:
        return _not_found("Puzzle")

    resp = {
        "success": True,
        "puzzle_id": puzzle.id,
        "valid_words": services.valid_words_for(puzzle),
    }
    return Response(ValidWordsResponseSerializer(resp).data, status=status.HTTP_200_OK)


# PUBLIC_INTERFACE
@swagger_auto_schema(
    method="post",
    operation_id="submit_word",
    operation_summary="Submit a word for a puzzle",
    operation_description="""
Submit a word a student formed from a puzzle's letters.

Request body:
- student_id (int, required)
- puzzle_id (int, required)
- word (string, required, 2-14 letters)

A rejected word (already submitted, not a dictionary word, or not formable
from the letters left) returns 200 with valid=false and the reason. An
accepted word returns its score, the remaining letters and the words still
formable from them.
""",
    request_body=SubmitWordRequestSerializer,
    responses={200: SubmitWordResponseSerializer},
    tags=["game"],
)
@api_view(["POST"])
@permission_classes([permissions.AllowAny])
def submit_word(request):
    """Validate a word submission, score it and update the leaderboard."""
    serializer = SubmitWordRequestSerializer(data=request.data or {})
    serializer.is_valid(raise_exception=True)
    vd = serializer.validated_data

    try:
        decision = services.submit_word(vd["student_id"], vd["puzzle_id"], vd["word"])
    except Puzzle.DoesNotExist:
        return _not_found("Puzzle")
    except DatabaseError:
        logger.exception("Database error while submitting word %r", vd["word"])
        return _server_error("Failed to store submission in database")

    return Response(SubmitWordResponseSerializer(decision.as_dict()).data, status=status.HTTP_200_OK)


# PUBLIC_INTERFACE
@swagger_auto_schema(
    method="get",
    operation_id="leaderboard",
    operation_summary="Get the top scoring words",
    operation_description="Up to 10 distinct words, highest score first.",
    responses={200: LeaderboardResponseSerializer},
    tags=["game"],
)
@api_view(["GET"])
@permission_classes([permissions.AllowAny])
def leaderboard(request):
    """Global leaderboard of the highest-scoring words."""
    try:
        scores = get_leaderboard().top_scores()
    except DatabaseError:
        logger.exception("Database error while retrieving leaderboard")
        return _server_error("Failed to retrieve leaderboard from database")

    resp = {"success": True, "scores": scores}
    return Response(LeaderboardResponseSerializer(resp).data, status=status.HTTP_200_OK)
