"""Tests for paragraph scoring and content optimization."""

from processing.optimizer import optimize_content, score_paragraph


class TestScoreParagraph:

    def test_short_paragraph_with_punctuation(self):
        assert score_paragraph("Short.") == 0

    def test_importance_patterns_add_points(self):
        # under 50 chars: only "important" and the year count
        assert score_paragraph("This was an important change in 1990.") == 2

    def test_medium_length_bonus(self):
        paragraph = "The river flows north. " * 6  # 138 characters
        assert score_paragraph(paragraph.strip()) == 2

    def test_missing_punctuation_penalty(self):
        paragraph = "a" * 60
        assert score_paragraph(paragraph) == 0

    def test_century_and_magnitude(self):
        assert score_paragraph("In the 19th century it had a million people.") == 2


class TestOptimizeContent:

    def test_empty_text(self):
        assert optimize_content("") == ""

    def test_higher_scores_come_first(self):
        text = "Plain text here.\n\nAn important event in 1990."
        assert optimize_content(text) == "An important event in 1990.\n\nPlain text here."

    def test_equal_scores_keep_document_order(self):
        text = "Alpha one.\n\nBeta two.\n\nGamma three."
        assert optimize_content(text) == "Alpha one.\n\nBeta two.\n\nGamma three."

    def test_respects_max_length(self):
        paragraphs = [f"Paragraph {i} has a key fact from 19{i}0." for i in range(10)]
        text = "\n\n".join(paragraphs)
        for limit in (0, 10, 45, 100, 250):
            assert len(optimize_content(text, max_length=limit)) <= limit

    def test_stops_at_first_paragraph_that_does_not_fit(self):
        top = "A key event in 1990."
        long_paragraph = "b" * 100
        tiny = "Tiny."
        text = "\n\n".join([top, long_paragraph, tiny])
        assert optimize_content(text, max_length=50) == top

    def test_whitespace_paragraphs_are_ignored(self):
        text = "First.\n\n   \n\nSecond."
        assert optimize_content(text) == "First.\n\nSecond."

    def test_everything_fits(self):
        text = "One.\n\nTwo."
        assert optimize_content(text, max_length=len(text)) == text
