"""Heuristic text processing for study guide generation.

These functions never call a model. They profile and trim article text,
group related articles, extract facts when every model fails, and polish
the final markdown.

Modules:
    patterns: Shared regex tables (PatternSet, DEFAULT_PATTERNS)
    analyzer: Complexity, density and content-type profiling
    optimizer: Paragraph scoring and length-bounded selection
    clustering: Keyword-overlap clustering of articles
    fallback: Regex extraction and fallback study guide templates
    assembler: Section normalization, refilling and multi-topic rendering
    budget: Token/word budgets per length tier and per cluster
"""

from processing.analyzer import analyze_content, determine_content_type
from processing.assembler import (
    create_structured_multi_topic_summary,
    enhance_and_polish,
    ensure_essential_sections,
)
from processing.budget import allocate_cluster_budget, get_summary_parameters, scale_for_clusters
from processing.clustering import content_similarity, extract_semantic_clusters
from processing.fallback import (
    FallbackExtraction,
    create_fallback_study_guide,
    extract_fallback_content,
    extract_key_term,
)
from processing.optimizer import optimize_content, score_paragraph
from processing.patterns import DEFAULT_PATTERNS, PatternSet, split_sentences

__all__ = [
    "DEFAULT_PATTERNS",
    "PatternSet",
    "split_sentences",
    "analyze_content",
    "determine_content_type",
    "optimize_content",
    "score_paragraph",
    "content_similarity",
    "extract_semantic_clusters",
    "FallbackExtraction",
    "create_fallback_study_guide",
    "extract_fallback_content",
    "extract_key_term",
    "enhance_and_polish",
    "ensure_essential_sections",
    "create_structured_multi_topic_summary",
    "allocate_cluster_budget",
    "get_summary_parameters",
    "scale_for_clusters",
]
