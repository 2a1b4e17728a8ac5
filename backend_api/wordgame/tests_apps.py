import os
import tempfile

from django.apps import apps
from django.core.exceptions import ImproperlyConfigured
from django.test import SimpleTestCase, override_settings

from wordgame.services import get_dictionary


class WordgameConfigTests(SimpleTestCase):
    def setUp(self):
        get_dictionary.cache_clear()
        # Reload the configured word list for the tests that follow.
        self.addCleanup(get_dictionary.cache_clear)
        self.config = apps.get_app_config("wordgame")

    def test_ready_loads_dictionary(self):
        self.config.ready()
        self.assertIn("get", get_dictionary())

    def test_missing_word_list_is_improperly_configured(self):
        missing = os.path.join(tempfile.gettempdir(), "wordgame-no-such-words.json")
        with override_settings(WORDGAME_DICTIONARY_PATH=missing):
            with self.assertRaises(ImproperlyConfigured):
                self.config.ready()

    def test_malformed_word_list_is_improperly_configured(self):
        fd, path = tempfile.mkstemp(suffix=".json")
        with os.fdopen(fd, "w") as fh:
            fh.write("{not json")
        self.addCleanup(os.remove, path)
        with override_settings(WORDGAME_DICTIONARY_PATH=path):
            with self.assertRaises(ImproperlyConfigured):
                self.config.ready()
