from django.core.management.base import BaseCommand, CommandError

from wordgame.puzzles import GenerationError
from wordgame.services import generate_puzzle


class Command(BaseCommand):
    help = "Generate and store solvable 14-letter puzzles."

    def add_arguments(self, parser):
        parser.add_argument("--count", type=int, default=1, help="Number of puzzles to create.")

    def handle(self, *args, **options):
        count = options["count"]
        if count < 1:
            raise CommandError("--count must be at least 1.")

        for _ in range(count):
            try:
                puzzle = generate_puzzle()
            except GenerationError as e:
                raise CommandError(str(e)) from e
            self.stdout.write(f"#{puzzle.pk} {puzzle.letters}")
        self.stdout.write(self.style.SUCCESS(f"Generated {count} puzzle(s)."))
