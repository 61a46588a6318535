"""Keyword-overlap clustering of articles in a multi-article request.

Similarity is the Jaccard index over the sets of lowercase words with at
least four characters. Clustering is a single greedy pass: each article not
yet placed seeds a cluster and pulls in every later unplaced article whose
similarity to the seed exceeds the threshold. The result depends on input
order, and membership is judged against the seed only.
"""

import logging

from models.article import AnalyzedArticle
from models.cluster import Cluster, Connection
from processing.patterns import DEFAULT_PATTERNS, PatternSet

logger = logging.getLogger(__name__)


def _word_set(text: str, patterns: PatternSet) -> set[str]:
    return set(patterns.similarity_word.findall(text.lower()))


def _jaccard(words_a: set[str], words_b: set[str]) -> float:
    union = words_a | words_b
    if not union:
        return 0.0
    return len(words_a & words_b) / len(union)


def content_similarity(a: str, b: str, patterns: PatternSet = DEFAULT_PATTERNS) -> float:
    """Jaccard similarity of the long-word sets of two texts.

    Returns 0.0 when neither text has any qualifying word.

    Example:
        >>> content_similarity("solar energy panels", "solar energy storage")
        0.5
    """
    return _jaccard(_word_set(a, patterns), _word_set(b, patterns))


def extract_semantic_clusters(
    articles: list[AnalyzedArticle],
    threshold: float = 0.3,
    patterns: PatternSet = DEFAULT_PATTERNS,
) -> list[Cluster]:
    """Group articles into theme clusters.

    Args:
        articles: Analyzed articles in request order
        threshold: Similarity a later article must exceed to join a seed
        patterns: Pattern tables to use

    Returns:
        Clusters in seed order; every article appears in exactly one
    """
    word_sets = [_word_set(a.content, patterns) for a in articles]
    processed: set[int] = set()
    clusters: list[Cluster] = []

    for i, seed in enumerate(articles):
        if i in processed:
            continue
        processed.add(i)

        members = [seed]
        connections = []
        for j in range(i + 1, len(articles)):
            if j in processed:
                continue
            similarity = _jaccard(word_sets[i], word_sets[j])
            if similarity > threshold:
                members.append(articles[j])
                connections.append(Connection(seed.title, articles[j].title, similarity))
                processed.add(j)

        clusters.append(
            Cluster(
                articles=tuple(members),
                theme=seed.analysis.content_type,
                connections=tuple(connections),
            )
        )

    logger.debug(
        "Clustered articles | articles=%d | clusters=%d | threshold=%.2f",
        len(articles),
        len(clusters),
        threshold,
    )
    return clusters
