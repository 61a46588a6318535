"""Paragraph scoring and length-bounded content selection."""

from processing.patterns import DEFAULT_PATTERNS, PatternSet, count_matches

PARAGRAPH_SEPARATOR = "\n\n"


def score_paragraph(paragraph: str, patterns: PatternSet = DEFAULT_PATTERNS) -> int:
    """Importance score of one paragraph.

    Medium-length paragraphs (100-500 chars) earn 2 points, anything over 50
    chars earns 1. Each match of an importance pattern adds a point. A
    paragraph without sentence punctuation loses a point.
    """
    score = 0
    length = len(paragraph)
    if 100 < length < 500:
        score += 2
    elif length > 50:
        score += 1

    for pattern in patterns.paragraph_importance:
        score += count_matches(pattern, paragraph)

    if len(patterns.sentence_split.split(paragraph)) < 2:
        score -= 1

    return score


def optimize_content(
    text: str,
    max_length: int = 8000,
    patterns: PatternSet = DEFAULT_PATTERNS,
) -> str:
    """Keep the most important paragraphs that fit within max_length.

    Paragraphs are ranked by score (stable, so equal scores keep document
    order) and appended while the output, separators included, stays within
    max_length. Selection stops at the first paragraph that does not fit.

    Args:
        text: Article content with blank-line separated paragraphs
        max_length: Maximum length of the returned text
        patterns: Pattern tables to use

    Returns:
        Selected paragraphs joined by blank lines, in score order
    """
    paragraphs = [p for p in text.split(PARAGRAPH_SEPARATOR) if p.strip()]
    ranked = sorted(paragraphs, key=lambda p: score_paragraph(p, patterns), reverse=True)

    selected: list[str] = []
    used = 0
    for paragraph in ranked:
        separator = len(PARAGRAPH_SEPARATOR) if selected else 0
        if used + separator + len(paragraph) > max_length:
            break
        selected.append(paragraph)
        used += separator + len(paragraph)

    return PARAGRAPH_SEPARATOR.join(selected).strip()
