import tempfile
import unittest
from pathlib import Path

from searchle.core.exceptions import DictionaryLoadError
from searchle.data.dictionary import DictionaryConfig, WordDictionary, parse_words_file
from searchle.data.normalization import clean_word, is_playable_word, normalize_letter
from searchle.data.wordlist import DEFAULT_WORDS


class NormalizationTests(unittest.TestCase):
    def test_clean_word(self) -> None:
        self.assertEqual(clean_word("  ice-cream! "), "ICECREAM")
        self.assertEqual(clean_word(""), "")

    def test_is_playable_word(self) -> None:
        self.assertTrue(is_playable_word("apple"))
        self.assertFalse(is_playable_word("don't"))
        self.assertFalse(is_playable_word(""))

    def test_normalize_letter(self) -> None:
        self.assertEqual(normalize_letter("q"), "Q")
        self.assertEqual(normalize_letter("QQ"), "")
        self.assertEqual(normalize_letter("7"), "")
        self.assertEqual(normalize_letter(""), "")


class WordDictionaryTests(unittest.TestCase):
    def setUp(self) -> None:
        self.dictionary = WordDictionary(words=["apple", "Amber", "trap", "tree", "x-ray", "a", "CREATE"])

    def test_loads_playable_words_uppercased(self) -> None:
        self.assertEqual(len(self.dictionary), 5)
        self.assertEqual(self.dictionary.find_candidates(6), ["CREATE"])
        self.assertNotIn("X-RAY", self.dictionary.find_candidates(5))
        self.assertEqual(self.dictionary.find_candidates(1), [])

    def test_find_candidates_by_length_and_letter(self) -> None:
        self.assertEqual(self.dictionary.find_candidates(5), ["AMBER", "APPLE"])
        self.assertEqual(self.dictionary.find_candidates(4, "e"), ["TREE"])
        self.assertEqual(self.dictionary.find_candidates(4, "T"), ["TRAP", "TREE"])
        self.assertEqual(self.dictionary.find_candidates(7, "T"), [])
        self.assertEqual(self.dictionary.find_candidates(5, "P"), ["APPLE"])

    def test_default_word_list_covers_generation_lengths(self) -> None:
        dictionary = WordDictionary()
        for length in (4, 5, 6):
            self.assertTrue(dictionary.find_candidates(length))
        for length, words in DEFAULT_WORDS.items():
            self.assertTrue(all(len(word) == length for word in words), length)

    def test_length_limits(self) -> None:
        dictionary = WordDictionary(DictionaryConfig(min_length=5, max_length=5), words=["trap", "apple", "create"])
        self.assertEqual(len(dictionary), 1)


class WordFileTests(unittest.TestCase):
    def test_reads_file_skipping_comments(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "words.txt"
            path.write_text("# fruit\napple\n\n  lemon \n", encoding="utf-8")
            self.assertEqual(parse_words_file(path), ["apple", "lemon"])
            dictionary = WordDictionary(DictionaryConfig(path=path))
            self.assertEqual(dictionary.find_candidates(5, "L"), ["APPLE", "LEMON"])

    def test_missing_file_raises(self) -> None:
        with self.assertRaises(DictionaryLoadError):
            WordDictionary(DictionaryConfig(path="/nonexistent/words.txt"))


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
