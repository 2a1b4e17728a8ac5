import json
import os
import random
import tempfile

from django.test import SimpleTestCase

from wordgame.puzzles import (
    Dictionary,
    DictionaryError,
    GenerationError,
    LetterMultiset,
    PuzzleGenerator,
    SubmissionValidator,
    load_dictionary,
    strip_letters,
)
from wordgame.services import DEFAULT_DICTIONARY_PATH

PUZZLE = "dgeftoikbvxuaa"
SMALL_WORDS = ["get", "fox", "over", "kit", "tab", "bat", "taxi", "bag", "dog", "add"]


class LetterMultisetTests(SimpleTestCase):
    def test_contains_itself(self):
        for text in ["", "a", "get", "aabbccddeeffgg", PUZZLE]:
            m = LetterMultiset(text)
            self.assertTrue(m.contains(m), text)

    def test_contains_respects_counts(self):
        pool = LetterMultiset("aab")
        self.assertTrue(pool.contains(LetterMultiset("aa")))
        self.assertTrue(pool.contains(LetterMultiset("ab")))
        self.assertFalse(pool.contains(LetterMultiset("aaa")))
        self.assertFalse(pool.contains(LetterMultiset("c")))

    def test_case_is_normalized(self):
        self.assertEqual(LetterMultiset("GeT"), LetterMultiset("get"))
        self.assertEqual(LetterMultiset("Aa").count("a"), 2)

    def test_only_letters_are_counted(self):
        m = LetterMultiset("a-b c!1é")
        self.assertEqual(m, LetterMultiset("abc"))
        self.assertEqual(len(m), 3)
        self.assertEqual(m.count("-"), 0)

    def test_minus_clamps_at_zero(self):
        result = LetterMultiset("abc").minus(LetterMultiset("aaz"))
        self.assertEqual(result, LetterMultiset("bc"))
        self.assertEqual(result.count("a"), 0)
        self.assertEqual(result.count("z"), 0)

    def test_len_and_str(self):
        m = LetterMultiset("banana")
        self.assertEqual(len(m), 6)
        self.assertEqual(str(m), "aaabnn")

    def test_strip_letters_keeps_order(self):
        self.assertEqual(strip_letters(PUZZLE, LetterMultiset("get")), "dfoikbvxuaa")
        self.assertEqual(strip_letters("aab", LetterMultiset("a")), "ab")
        self.assertEqual(strip_letters("abc", LetterMultiset("zz")), "abc")


class DictionaryTests(SimpleTestCase):
    def setUp(self):
        self.dictionary = Dictionary(SMALL_WORDS)

    def test_contains_is_case_insensitive(self):
        self.assertTrue(self.dictionary.contains("get"))
        self.assertTrue(self.dictionary.contains("GET"))
        self.assertIn("Fox", self.dictionary)
        self.assertFalse(self.dictionary.contains("xyz"))

    def test_words_normalized_and_deduplicated(self):
        d = Dictionary(["  Apple ", "apple", "BED"])
        self.assertEqual(d.words, ("apple", "bed"))

    def test_words_outside_length_bounds_are_dropped(self):
        d = Dictionary(["a", "at", "abcdefghijklmno"])
        self.assertEqual(d.words, ("at",))

    def test_non_letter_entry_is_rejected(self):
        with self.assertRaises(DictionaryError):
            Dictionary(["fine", "not-fine"])
        with self.assertRaises(DictionaryError):
            Dictionary(["fine", 42])

    def test_any_word_formable_from(self):
        self.assertTrue(self.dictionary.any_word_formable_from(PUZZLE))
        self.assertFalse(self.dictionary.any_word_formable_from("xyzxyzxyzxyzxy"))
        self.assertFalse(Dictionary([]).any_word_formable_from(PUZZLE))

    def test_all_words_formable_from(self):
        words = list(self.dictionary.all_words_formable_from(PUZZLE))
        self.assertEqual(words, ["get", "fox", "kit", "tab", "bat", "taxi", "bag", "dog"])

    def test_formable_words_are_restartable(self):
        view = self.dictionary.all_words_formable_from(LetterMultiset("tab"))
        self.assertEqual(list(view), ["tab", "bat"])
        self.assertEqual(list(view), ["tab", "bat"])

    def test_formable_respects_duplicate_letters(self):
        self.assertEqual(list(self.dictionary.all_words_formable_from("ad")), [])
        self.assertEqual(list(self.dictionary.all_words_formable_from("add")), ["add"])


class LoadDictionaryTests(SimpleTestCase):
    def _write(self, content: str) -> str:
        fd, path = tempfile.mkstemp(suffix=".json")
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        self.addCleanup(os.remove, path)
        return path

    def test_loads_words_object(self):
        d = load_dictionary(self._write(json.dumps({"words": ["Get", "fox"]})))
        self.assertEqual(d.words, ("get", "fox"))

    def test_loads_plain_list(self):
        d = load_dictionary(self._write(json.dumps(["over", "dog"])))
        self.assertEqual(len(d), 2)

    def test_missing_file(self):
        with self.assertRaises(DictionaryError):
            load_dictionary(os.path.join(tempfile.gettempdir(), "no-such-wordlist.json"))

    def test_invalid_json(self):
        with self.assertRaises(DictionaryError):
            load_dictionary(self._write("{not json"))

    def test_wrong_shape(self):
        with self.assertRaises(DictionaryError):
            load_dictionary(self._write(json.dumps({"entries": ["get"]})))
        with self.assertRaises(DictionaryError):
            load_dictionary(self._write(json.dumps("get")))

    def test_non_string_entries(self):
        with self.assertRaises(DictionaryError):
            load_dictionary(self._write(json.dumps({"words": ["get", None]})))

    def test_packaged_word_list(self):
        d = load_dictionary(DEFAULT_DICTIONARY_PATH)
        self.assertGreater(len(d), 0)
        for word in d:
            self.assertEqual(word, word.lower())
            self.assertTrue(2 <= len(word) <= 14)
        self.assertTrue(d.any_word_formable_from(PUZZLE), "The puzzle should contain the word 'fox'")
        self.assertTrue(d.any_word_formable_from("aabbccddeeffgg"))
        self.assertFalse(d.any_word_formable_from("xyzxyzxyzxyzxy"))


class PuzzleGeneratorTests(SimpleTestCase):
    def setUp(self):
        self.dictionary = load_dictionary(DEFAULT_DICTIONARY_PATH)

    def test_generated_puzzles_are_solvable(self):
        generator = PuzzleGenerator(self.dictionary, rng=random.Random(1234))
        for _ in range(20):
            letters = generator.generate()
            self.assertEqual(len(letters), 14)
            self.assertRegex(letters, r"^[a-z]{14}$")
            self.assertTrue(self.dictionary.any_word_formable_from(letters))

    def test_default_random_source(self):
        letters = PuzzleGenerator(self.dictionary).generate()
        self.assertEqual(len(letters), 14)

    def test_rejects_unsatisfiable_dictionary(self):
        with self.assertRaises(GenerationError):
            PuzzleGenerator(Dictionary([])).generate()
        with self.assertRaises(GenerationError):
            PuzzleGenerator(Dictionary(["fox"]), length=2).generate()


class SubmissionValidatorTests(SimpleTestCase):
    def setUp(self):
        self.validator = SubmissionValidator(Dictionary(SMALL_WORDS))

    def test_accepts_word(self):
        decision = self.validator.submit(PUZZLE, [], "get")
        self.assertTrue(decision.valid)
        self.assertEqual(decision.score, 3)
        self.assertEqual(decision.message, "Word submitted successfully!")
        self.assertEqual(decision.remaining_letters, "dfoikbvxuaa")
        self.assertIn("fox", decision.remaining_words)
        self.assertNotIn("get", decision.remaining_words)

    def test_rejects_duplicate(self):
        decision = self.validator.submit(PUZZLE, ["get"], "get")
        self.assertFalse(decision.valid)
        self.assertEqual(decision.message, "Word already submitted.")

    def test_duplicate_check_is_case_sensitive(self):
        # "GET" is not a duplicate of "get", but the letters are already used.
        decision = self.validator.submit(PUZZLE, ["get"], "GET")
        self.assertFalse(decision.valid)
        self.assertEqual(decision.message, "Word cannot be formed from remaining letters.")

    def test_uppercase_word_accepted_on_fresh_puzzle(self):
        decision = self.validator.submit(PUZZLE, [], "FOX")
        self.assertTrue(decision.valid)
        self.assertEqual(decision.remaining_letters, "dgetikbvuaa")

    def test_rejects_non_dictionary_word(self):
        first = self.validator.submit(PUZZLE, [], "XYZ")
        second = self.validator.submit(PUZZLE, [], "XYZ")
        self.assertFalse(first.valid)
        self.assertEqual(first.message, "Not a valid English word.")
        self.assertEqual(first, second)

    def test_rejects_unavailable_letters(self):
        decision = self.validator.submit(PUZZLE, ["get"], "over")
        self.assertFalse(decision.valid)
        self.assertEqual(decision.message, "Word cannot be formed from remaining letters.")

    def test_previous_words_consume_letters(self):
        # The puzzle has a single t: "kit" uses it, so "tab" cannot follow.
        self.assertTrue(self.validator.submit(PUZZLE, [], "tab").valid)
        decision = self.validator.submit(PUZZLE, ["kit"], "tab")
        self.assertFalse(decision.valid)

    def test_as_dict(self):
        rejected = self.validator.submit(PUZZLE, [], "nope").as_dict()
        self.assertEqual(rejected, {"valid": False, "message": "Not a valid English word."})

        accepted = self.validator.submit(PUZZLE, ["get"], "fox").as_dict()
        self.assertEqual(
            set(accepted), {"valid", "score", "remaining_letters", "remaining_words", "message"}
        )
        self.assertEqual(accepted["remaining_letters"], "dikbvuaa")
        self.assertEqual(accepted["remaining_words"], [])
