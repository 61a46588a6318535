"""Tests for content analysis heuristics."""

import pytest

from models.article import Complexity, ContentType
from processing.analyzer import analyze_content, determine_content_type


class TestDetermineContentType:
    """Keyword-count classification."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("He was born in Vienna and died in London after a long career.", ContentType.BIOGRAPHY),
            ("The empire fought a war in the ancient world.", ContentType.HISTORY),
            ("The experiment confirmed the theory about each molecule.", ContentType.SCIENCE),
            ("The capital is located on a river near the border.", ContentType.GEOGRAPHY),
            ("The software runs on any digital computer.", ContentType.TECHNOLOGY),
            ("The festival celebrates music and literature.", ContentType.CULTURE),
        ],
    )
    def test_dominant_keywords_win(self, text, expected):
        assert determine_content_type(text) == expected

    def test_no_keywords_is_general(self):
        assert determine_content_type("Nothing here matches anything.") == ContentType.GENERAL

    def test_empty_text_is_general(self):
        assert determine_content_type("") == ContentType.GENERAL

    def test_tie_keeps_first_type_in_table(self):
        # one history keyword, one science keyword
        assert determine_content_type("The war ended. The theory held.") == ContentType.HISTORY

    def test_higher_count_beats_table_order(self):
        text = "The war ended. The theory and the hypothesis held."
        assert determine_content_type(text) == ContentType.SCIENCE

    def test_keywords_are_case_insensitive(self):
        assert determine_content_type("BORN and DIED") == ContentType.BIOGRAPHY

    def test_deterministic(self):
        text = "The river crosses the region. The theory is new."
        assert determine_content_type(text) == determine_content_type(text)


class TestAnalyzeContent:
    """Complexity tiers and densities."""

    def test_empty_text_has_zero_densities(self):
        analysis = analyze_content("")
        assert analysis.complexity == Complexity.LOW
        assert analysis.technical_density == 0.0
        assert analysis.data_richness == 0.0
        assert analysis.content_type == ContentType.GENERAL

    def test_punctuation_only_has_no_sentences(self):
        analysis = analyze_content("...!!!")
        assert analysis.complexity == Complexity.LOW
        assert analysis.technical_density == 0.0

    def test_short_sentences_are_low_complexity(self):
        assert analyze_content("A cat sat. A dog ran.").complexity == Complexity.LOW

    def test_medium_sentence_length(self):
        sentence = "word " * 16  # 80 characters
        assert analyze_content(sentence + ".").complexity == Complexity.MEDIUM

    def test_long_sentence_length(self):
        sentence = "word " * 30  # 150 characters
        assert analyze_content(sentence + ".").complexity == Complexity.HIGH

    def test_densities_are_per_sentence(self):
        analysis = analyze_content("There were 5 cats. There were 10 dogs.")
        assert analysis.data_richness == pytest.approx(1.0)
        assert analysis.technical_density == pytest.approx(1.0)

    def test_content_type_is_included(self):
        analysis = analyze_content("The Nile is a river. It is located in Africa.")
        assert analysis.content_type == ContentType.GEOGRAPHY
