"""
Tests for search text normalization and fuzzy token matching.
"""
import pytest

from lotfinder.pipeline.fuzzy import (
    is_subsequence,
    levenshtein,
    max_edit_distance,
    token_matches,
)
from lotfinder.pipeline.text import normalize, tokenize


class TestNormalize:
    """Tests for normalize."""

    def test_lowercases_and_collapses_punctuation(self):
        assert normalize("  BMW 3-Series!! ") == "bmw 3 series"

    def test_strips_accents(self):
        assert normalize("Citroën Côte") == "citroen cote"

    def test_empty_and_none(self):
        assert normalize("") == ""
        assert normalize(None) == ""
        assert normalize("  --  ") == ""

    @pytest.mark.parametrize("text", [
        "BMW X5 xDrive40i",
        "  Škoda   Octavia / 1.6 TDI ",
        "FRONT END, REAR END",
        "Ünïcödé ß ﬁ",
        "",
    ])
    def test_idempotent(self, text):
        once = normalize(text)
        assert normalize(once) == once


class TestTokenize:
    """Tests for tokenize."""

    def test_empty_input(self):
        assert tokenize("") == []
        assert tokenize("   ") == []

    def test_splits_normalized_words(self):
        assert tokenize("Ford F-150, Lariat") == ["ford", "f", "150", "lariat"]


class TestLevenshtein:
    """Tests for edit distance."""

    def test_known_distances(self):
        assert levenshtein("kitten", "sitting") == 3
        assert levenshtein("bmq", "bmw") == 1
        assert levenshtein("", "abc") == 3
        assert levenshtein("abc", "") == 3
        assert levenshtein("camry", "camry") == 0

    @pytest.mark.parametrize("a,b", [
        ("toyota", "toyta"),
        ("flood", "fold"),
        ("mercedes", "mercedez benz"),
        ("", "x"),
    ])
    def test_symmetric(self, a, b):
        assert levenshtein(a, b) == levenshtein(b, a)


class TestTokenMatches:
    """Tests for fuzzy token matching."""

    def test_subsequence(self):
        assert is_subsequence("bmw", "b3mw")
        assert not is_subsequence("bmw", "bwm")
        assert is_subsequence("", "anything")

    def test_threshold_by_length(self):
        assert max_edit_distance("abcd") == 1
        assert max_edit_distance("abcde") == 2
        assert max_edit_distance("abcdefg") == 2
        assert max_edit_distance("abcdefgh") == 3

    def test_reflexive(self):
        for token in ["bmw", "x5", "chevrolet"]:
            assert token_matches(token, token)

    def test_containment_either_direction(self):
        assert token_matches("toy", "toyota")
        assert token_matches("toyota", "toy")

    def test_subsequence_match(self):
        assert token_matches("bmw", "b3mw")

    def test_one_character_typo(self):
        assert token_matches("bmq", "bmw")

    def test_transposition_within_threshold(self):
        # Two substitutions, allowed for five-letter tokens
        assert token_matches("camry", "carmy")

    def test_rejects_distant_words(self):
        assert not token_matches("xyz", "bmw")
        assert not token_matches("honda", "mazda")

    def test_empty_never_matches(self):
        assert not token_matches("", "bmw")
        assert not token_matches("bmw", "")
