from django.contrib import admin

from .models import Student, Puzzle, Submission, LeaderboardEntry


class SubmissionInline(admin.TabularInline):
    model = Submission
    extra = 0
    fields = ("student", "word", "score", "created_at")
    readonly_fields = ("created_at",)


@admin.register(Student)
class StudentAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "created_at")
    search_fields = ("name",)


@admin.register(Puzzle)
class PuzzleAdmin(admin.ModelAdmin):
    list_display = ("id", "letters", "created_at")
    search_fields = ("letters",)
    inlines = [SubmissionInline]
    readonly_fields = ("created_at", "updated_at")


@admin.register(Submission)
class SubmissionAdmin(admin.ModelAdmin):
    list_display = ("student", "puzzle", "word", "score", "created_at")
    search_fields = ("word", "student__name", "puzzle__letters")
    ordering = ("-created_at",)


@admin.register(LeaderboardEntry)
class LeaderboardEntryAdmin(admin.ModelAdmin):
    # Rows change only through Leaderboard.offer so the cached read stays coherent.
    list_display = ("word", "score", "updated_at")
    ordering = ("-score", "word")

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
