"""Article and content analysis models.

An Article is the unit of source text fetched from Wikipedia. The analyzer
derives a ContentAnalysis from it once per request, and the optimizer trims
its content; both are bundled into an AnalyzedArticle that the clusterer and
summarizer consume.

Content Types:
    Six topic families are recognised by keyword patterns (biography,
    history, science, geography, technology, culture). Anything else is
    GENERAL.
"""

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ContentType(str, Enum):
    """Dominant topic family of an article."""

    BIOGRAPHY = "biography"
    HISTORY = "history"
    SCIENCE = "science"
    GEOGRAPHY = "geography"
    TECHNOLOGY = "technology"
    CULTURE = "culture"
    GENERAL = "general"


class Complexity(str, Enum):
    """Reading complexity derived from average sentence length."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def weight(self) -> int:
        """Numeric weight used for cluster averages (low=1, medium=2, high=3)."""
        return {"low": 1, "medium": 2, "high": 3}[self.value]


class Article(BaseModel):
    """A fetched Wikipedia article.

    Attributes:
        title: Normalized article title (underscores replaced by spaces)
        content: Plain-text article body
        url: The URL the caller asked for

    Example:
        >>> article = Article(
        ...     title="Cat",
        ...     content="The cat is a small domesticated carnivorous mammal...",
        ...     url="https://en.wikipedia.org/wiki/Cat",
        ... )
    """

    model_config = ConfigDict(frozen=True)

    title: str = Field(description="Article title")
    content: str = Field(description="Plain-text article content")
    url: str = Field(description="Source Wikipedia URL")

    def __str__(self) -> str:
        """Human-readable representation for logging."""
        return f"Article('{self.title[:50]}', chars={len(self.content)})"


class ContentAnalysis(BaseModel):
    """Heuristic profile of an article's text.

    Attributes:
        complexity: low/medium/high from average sentence length
        technical_density: Capitalized-phrase matches per sentence
        data_richness: Numeric/quantity matches per sentence
        content_type: Dominant topic family
    """

    model_config = ConfigDict(frozen=True)

    complexity: Complexity = Field(description="Reading complexity")
    technical_density: float = Field(ge=0.0, description="Capitalized phrases per sentence")
    data_richness: float = Field(ge=0.0, description="Numeric expressions per sentence")
    content_type: ContentType = Field(description="Dominant topic family")


@dataclass(frozen=True)
class AnalyzedArticle:
    """An article together with its analysis and optimized content."""

    article: Article
    analysis: ContentAnalysis
    optimized_content: str

    @property
    def title(self) -> str:
        return self.article.title

    @property
    def content(self) -> str:
        return self.article.content
