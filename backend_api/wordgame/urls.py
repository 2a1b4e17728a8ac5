from django.urls import path
from .views import (
    health,
    students,
    student_detail,
    student_submissions,
    student_score,
    generate_puzzle,
    puzzle_valid_words,
    submit_word,
    leaderboard,
)

urlpatterns = [
    path('health/', health, name='Health'),
    path('students', students, name='students'),
    path('students/<int:student_id>', student_detail, name='student-detail'),
    path('students/<int:student_id>/submissions', student_submissions, name='student-submissions'),
    path('students/<int:student_id>/score', student_score, name='student-score'),
    path('generate-puzzle', generate_puzzle, name='generate-puzzle'),
    path('puzzles/<int:puzzle_id>/valid-words', puzzle_valid_words, name='puzzle-valid-words'),
    path('submit-word', submit_word, name='submit-word'),
    path('leaderboard', leaderboard, name='leaderboard'),
]
