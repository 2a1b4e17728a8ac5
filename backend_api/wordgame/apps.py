from django.apps import AppConfig
from django.core.exceptions import ImproperlyConfigured


class WordgameConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "wordgame"
    verbose_name = "Word Puzzle Game"

    def ready(self):
        # The word list is a startup precondition: refuse to serve without it.
        from .puzzles import DictionaryError
        from .services import get_dictionary

        try:
            get_dictionary()
        except DictionaryError as e:
            raise ImproperlyConfigured(str(e)) from e
