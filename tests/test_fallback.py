"""Tests for the heuristic study guide."""

import pytest

from processing.fallback import (
    GENERIC_DEFINITION,
    create_fallback_study_guide,
    extract_fallback_content,
    extract_key_term,
    factual_point,
    historical_point,
    application_point,
    significance_point,
)

SAMPLE = (
    "The city has a population of 5 million people. "
    "Photosynthesis is a process that plants use for energy. "
    "It is used for making food in many industries. "
    "Short one here."
)


class TestExtractFallbackContent:

    def test_sentences_are_categorized(self):
        extraction = extract_fallback_content(SAMPLE)
        assert "The city has a population of 5 million people" in extraction.facts
        assert "Photosynthesis is a process that plants use for energy" in extraction.key_terms
        assert "It is used for making food in many industries" in extraction.applications
        assert not extraction.is_empty

    def test_short_sentences_are_skipped(self):
        extraction = extract_fallback_content("Founded in 1990. Used daily.")
        assert extraction.is_empty

    def test_vague_achievements_are_not_facts(self):
        extraction = extract_fallback_content(
            "It was the largest bridge ever built on the coast. Some of the largest ones were lost at sea."
        )
        assert extraction.facts == ["It was the largest bridge ever built on the coast"]

    def test_category_limits(self):
        content = " ".join(f"In {1900 + i} the museum was founded by the council." for i in range(10))
        extraction = extract_fallback_content(content)
        assert len(extraction.historical) <= 5
        assert len(extraction.facts) <= 6


class TestPointFormatting:

    def test_key_term_from_definition(self):
        assert extract_key_term("Photosynthesis is a process used by plants") == "Photosynthesis"

    def test_key_term_takes_first_subject(self):
        assert extract_key_term("The cat is a mammal that is small") == "The cat"

    def test_key_term_without_definition(self):
        assert extract_key_term("Running quickly through fields") == "Running quickly through"

    @pytest.mark.parametrize(
        "func, plain, marked, label",
        [
            (historical_point, "It grew quickly in 1500", "The city was founded in 1200", "Historical context"),
            (application_point, "Farmers rely on it", "It is used in medicine", "Practical application"),
            (significance_point, "It changed farming", "It had a major impact", "Significance"),
        ],
    )
    def test_labels_added_only_without_marker(self, func, plain, marked, label):
        assert func(plain) == f"{label}: {plain}"
        assert func(marked) == marked

    def test_factual_point(self):
        assert factual_point("It has 9 lives") == "It has 9 lives"
        assert factual_point("It is the largest") == "Key fact: It is the largest"


class TestCreateFallbackStudyGuide:

    MANDATED = ("Learning Objectives", "Key Terms & Definitions", "Applications", "Review")

    def test_minimal_content_populates_every_section(self):
        guide = create_fallback_study_guide("x y z", "Topic")
        for heading in self.MANDATED:
            assert heading in guide
        assert GENERIC_DEFINITION in guide
        assert "**Origins**" in guide
        assert "**Contemporary Uses**" in guide

    def test_title_appears_in_objectives_and_questions(self):
        guide = create_fallback_study_guide("x y z", "Cat")
        assert "characteristics of Cat" in guide
        assert "distinguish Cat from related concepts" in guide

    def test_extracted_sentences_are_used(self):
        guide = create_fallback_study_guide(SAMPLE, "Plants")
        assert "• **Photosynthesis**: Photosynthesis is a process that plants use for energy" in guide
        assert "• The city has a population of 5 million people" in guide
        assert "• It is used for making food in many industries" in guide

    def test_multi_topic_template(self):
        guide = create_fallback_study_guide("x y z", "Cat, Dog", multi_topic=True)
        assert "underlying Cat and Dog" in guide
        assert "• **Cat**:" in guide
        assert "• **Dog**:" in guide
        assert "Thought-Provoking Review Questions" in guide

    def test_multi_topic_with_many_topics(self):
        guide = create_fallback_study_guide("x y z", "A, B, C", multi_topic=True)
        assert "A and B and related topics" in guide
