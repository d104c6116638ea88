"""
Tests for query term expansion.
"""

import pytest

from search.synonyms import build_term_pattern, expand_terms


class TestExpandTerms:

    def test_tokens_then_synonyms(self):
        assert expand_terms("Ring") == ["ring", "band", "solitaire", "halo", "setting"]

    def test_multi_word_query_dedupes(self):
        terms = expand_terms("wedding engagement ring")

        assert terms[:3] == ["wedding", "engagement", "ring"]
        assert terms.count("bridal") == 1
        assert "nuptial" in terms
        assert "proposal" in terms

    def test_synonym_table_is_not_symmetric(self):
        assert "necklace" in expand_terms("choker")
        assert expand_terms("pendant") == ["pendant"]

    @pytest.mark.parametrize("query", ["", "   ", "\t\n"])
    def test_blank_query_has_no_terms(self, query):
        assert expand_terms(query) == []

    def test_unknown_words_pass_through(self):
        assert expand_terms("Emerald  Cut") == ["emerald", "cut"]


class TestBuildTermPattern:

    def test_none_for_no_terms(self):
        assert build_term_pattern([]) is None

    def test_case_insensitive_alternation(self):
        pattern = build_term_pattern(["halo", "band"])

        assert pattern.search("Vintage HALO setting")
        assert pattern.search("Wedding Band")
        assert not pattern.search("Solitaire")

    def test_terms_are_escaped(self):
        pattern = build_term_pattern(["men's", "1.5ct"])

        assert pattern.search("Men's Jewelry")
        assert not pattern.search("1x5ct")
