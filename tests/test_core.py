"""Tests for the text cleaning stages and the edit distance."""
import unittest

from keyword_finder.core import (
    build_clean_tokens,
    levenshtein_distance,
    normalize_token,
    normalize_tokens,
    remove_stopwords,
    tokenize_text,
    unique_tokens,
)
from keyword_finder.exceptions import PipelineError, TokenizationError
from keyword_finder.stopwords import STOPWORDS


class TestTokenizeText(unittest.TestCase):
    def test_splits_on_whitespace_and_punctuation(self):
        tokens = tokenize_text("Hello, world! How's it going?")
        self.assertEqual(tokens, ["Hello", "world", "How", "s", "it", "going"])

    def test_empty_string(self):
        self.assertEqual(tokenize_text(""), [])

    def test_only_delimiters(self):
        self.assertEqual(tokenize_text(" ... ,;!? \n\t"), [])

    def test_unicode_words(self):
        tokens = tokenize_text("Árvíztűrő tükörfúrógép, Привет мир")
        self.assertEqual(tokens, ["Árvíztűrő", "tükörfúrógép", "Привет", "мир"])

    def test_keeps_digits_and_underscores(self):
        self.assertEqual(tokenize_text("snake_case v2"), ["snake_case", "v2"])

    def test_non_string_raises(self):
        with self.assertRaises(TokenizationError):
            tokenize_text(42)

    def test_tokenization_error_is_pipeline_error(self):
        self.assertTrue(issubclass(TokenizationError, PipelineError))


class TestNormalize(unittest.TestCase):
    def test_lowercases(self):
        self.assertEqual(normalize_token("QuIcK"), "quick")

    def test_idempotent_on_lowercase(self):
        for word in ["quick", "árvíztűrő", "", "v2"]:
            self.assertEqual(normalize_token(word), word)
            self.assertEqual(normalize_token(normalize_token(word)), word)

    def test_non_string_becomes_false(self):
        self.assertIs(normalize_token(None), False)
        self.assertIs(normalize_token(3), False)

    def test_normalize_tokens_keeps_order(self):
        self.assertEqual(normalize_tokens(["B", "a", "C"]), ["b", "a", "c"])


class TestUniqueTokens(unittest.TestCase):
    def test_keeps_first_occurrence_order(self):
        tokens = ["fox", "quick", "fox", "brown", "quick"]
        self.assertEqual(unique_tokens(tokens), ["fox", "quick", "brown"])

    def test_no_repeats_and_same_elements(self):
        tokens = ["a", "b", "a", "c", "b", "a", "d"]
        result = unique_tokens(tokens)
        self.assertEqual(len(result), len(set(result)))
        self.assertEqual(set(result), set(tokens))

    def test_tolerates_false_markers(self):
        self.assertEqual(unique_tokens(["a", False, False, "a"]), ["a", False])

    def test_empty(self):
        self.assertEqual(unique_tokens([]), [])


class TestRemoveStopwords(unittest.TestCase):
    def test_removes_stopwords(self):
        tokens = ["the", "quick", "and", "brown", "is", "fox"]
        self.assertEqual(remove_stopwords(tokens), ["quick", "brown", "fox"])

    def test_no_stopword_survives(self):
        tokens = sorted(STOPWORDS) + ["keyword"]
        result = remove_stopwords(tokens)
        self.assertEqual(result, ["keyword"])
        self.assertFalse(set(result) & STOPWORDS)

    def test_exact_membership_only(self):
        # "theory" contains "the" but is not a stopword
        self.assertEqual(remove_stopwords(["theory", "isolate"]), ["theory", "isolate"])

    def test_drops_false_markers(self):
        self.assertEqual(remove_stopwords(["fox", False]), ["fox"])

    def test_custom_stopword_set(self):
        self.assertEqual(remove_stopwords(["a", "fox"], stopwords={"fox"}), ["a"])


class TestLevenshteinDistance(unittest.TestCase):
    def test_identical(self):
        self.assertEqual(levenshtein_distance("keyword", "keyword"), 0)

    def test_symmetric(self):
        self.assertEqual(
            levenshtein_distance("flaw", "lawn"), levenshtein_distance("lawn", "flaw")
        )

    def test_empty(self):
        self.assertEqual(levenshtein_distance("", "abc"), 3)
        self.assertEqual(levenshtein_distance("", ""), 0)

    def test_kitten_sitting(self):
        self.assertEqual(levenshtein_distance("kitten", "sitting"), 3)

    def test_score_cutoff(self):
        self.assertEqual(levenshtein_distance("kitten", "sitting", score_cutoff=3), 3)
        self.assertEqual(levenshtein_distance("kitten", "sitting", score_cutoff=1), 2)

    def test_cutoff_beyond_machine_integers(self):
        self.assertEqual(levenshtein_distance("help", "hello", score_cutoff=10**20), 2)
        self.assertEqual(levenshtein_distance("", "", score_cutoff=10**20), 0)


class TestBuildCleanTokens(unittest.TestCase):
    def test_full_pipeline(self):
        self.assertEqual(
            build_clean_tokens("The quick brown fox"), ["quick", "brown", "fox"]
        )

    def test_dedup_after_lowercasing(self):
        self.assertEqual(build_clean_tokens("Apple apple APPLE pie"), ["apple", "pie"])

    def test_contractions(self):
        self.assertEqual(build_clean_tokens("Don't stop"), ["stop"])

    def test_empty_text(self):
        self.assertEqual(build_clean_tokens(""), [])


if __name__ == "__main__":
    unittest.main()
