"""Content analysis heuristics.

Profiles raw article text without any model call: average sentence length
gives a complexity tier, capitalized phrases and numeric expressions give
technical density and data richness, and keyword tables pick the dominant
content type.
"""

import logging

from models.article import Complexity, ContentAnalysis, ContentType
from processing.patterns import DEFAULT_PATTERNS, PatternSet, count_matches, split_sentences

logger = logging.getLogger(__name__)

# Average sentence length (characters) above which complexity rises
HIGH_COMPLEXITY_LENGTH = 100
MEDIUM_COMPLEXITY_LENGTH = 60


def determine_content_type(text: str, patterns: PatternSet = DEFAULT_PATTERNS) -> ContentType:
    """Pick the content type whose keywords occur most often.

    A type must beat the current best strictly, so ties keep the type that
    comes first in the pattern table. Text without any keyword is GENERAL.
    """
    best_type = ContentType.GENERAL
    best_score = 0

    for content_type, pattern in patterns.content_types:
        score = count_matches(pattern, text)
        if score > best_score:
            best_score = score
            best_type = content_type

    return best_type


def _complexity_for(average_length: float) -> Complexity:
    if average_length > HIGH_COMPLEXITY_LENGTH:
        return Complexity.HIGH
    if average_length > MEDIUM_COMPLEXITY_LENGTH:
        return Complexity.MEDIUM
    return Complexity.LOW


def analyze_content(text: str, patterns: PatternSet = DEFAULT_PATTERNS) -> ContentAnalysis:
    """Profile article text.

    Args:
        text: Plain-text article content
        patterns: Pattern tables to use

    Returns:
        ContentAnalysis with complexity, densities and content type. Text
        without any sentence yields LOW complexity and zero densities.

    Example:
        >>> analyze_content("The Nile is a river. It is located in Africa.").content_type
        <ContentType.GEOGRAPHY: 'geography'>
    """
    content_type = determine_content_type(text, patterns)
    sentences = split_sentences(text, patterns)

    if not sentences:
        logger.debug("Content has no sentences | chars=%d", len(text))
        return ContentAnalysis(
            complexity=Complexity.LOW,
            technical_density=0.0,
            data_richness=0.0,
            content_type=content_type,
        )

    count = len(sentences)
    average_length = sum(len(s) for s in sentences) / count

    return ContentAnalysis(
        complexity=_complexity_for(average_length),
        technical_density=count_matches(patterns.technical_term, text) / count,
        data_richness=count_matches(patterns.numeric_data, text) / count,
        content_type=content_type,
    )
