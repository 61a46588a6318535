"""Theme cluster models for multi-article requests.

Clusters are assembled from plain lists while the clusterer scans the input,
then frozen into tuples so nothing downstream can reassign an article.
"""

from dataclasses import dataclass

from models.article import AnalyzedArticle, ContentType


@dataclass(frozen=True)
class Connection:
    """Similarity link between a cluster seed and an article that joined it."""

    source: str
    target: str
    similarity: float


@dataclass(frozen=True)
class Cluster:
    """Group of articles judged related by keyword overlap.

    Attributes:
        articles: Member articles; the first one is the seed
        theme: Content type of the seed article
        connections: Seed-to-member similarity links
    """

    articles: tuple[AnalyzedArticle, ...]
    theme: ContentType
    connections: tuple[Connection, ...] = ()

    def __post_init__(self):
        if not self.articles:
            raise ValueError("Cluster requires at least one article")

    @property
    def titles(self) -> list[str]:
        return [a.title for a in self.articles]

    @property
    def combined_title(self) -> str:
        return ", ".join(self.titles)

    @property
    def average_complexity(self) -> float:
        """Mean complexity weight (low=1, medium=2, high=3) of the members."""
        total = sum(a.analysis.complexity.weight for a in self.articles)
        return total / len(self.articles)

    def __len__(self) -> int:
        return len(self.articles)
