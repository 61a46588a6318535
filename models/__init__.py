"""Data models for the Prism study guide service.

Article:
    Fetched Wikipedia article (title, content, url). Immutable.

ContentAnalysis:
    Complexity, technical density, data richness and content type of an
    article, derived once per request.

AnalyzedArticle:
    Article + analysis + optimized content, consumed by the clusterer.

Cluster:
    Group of related articles with a theme and similarity connections.

SummaryParams:
    Token/word budget of one summarization call.

Request/response models for the HTTP API live in models.api.

Example:
    >>> from models import Article, ContentType
    >>> article = Article(title="Cat", content="...", url="https://en.wikipedia.org/wiki/Cat")
"""

from models.article import AnalyzedArticle, Article, Complexity, ContentAnalysis, ContentType
from models.cluster import Cluster, Connection
from models.summary import ClusterSummary, LengthTier, Section, SummaryParams

__all__ = [
    "Article",
    "AnalyzedArticle",
    "Complexity",
    "ContentAnalysis",
    "ContentType",
    "Cluster",
    "Connection",
    "ClusterSummary",
    "LengthTier",
    "Section",
    "SummaryParams",
]
