"""Request and response models for the HTTP API.

Field names are snake_case in Python and camelCase on the wire
(``wordCount``, ``originalUrl``, ...).
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base model serializing to camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SummaryRequest(ApiModel):
    """Body of POST /api/summarize."""

    url: str | None = Field(default=None, description="Wikipedia article URL")
    length: str = Field(default="short", description="short, medium or long")


class MultiSummaryRequest(ApiModel):
    """Body of POST /api/summarize-multiple.

    ``urls`` is left untyped so that shape errors produce the domain
    validation message instead of a generic schema error.
    """

    urls: Any = Field(default=None, description="Wikipedia article URLs (1-10)")
    length: str = Field(default="short", description="short, medium or long")


class SummaryResponse(ApiModel):
    """Study guide for a single article."""

    summary: str
    title: str
    original_url: str
    length: str
    word_count: int


class ClusterAnalytics(ApiModel):
    theme: str
    article_count: int
    titles: list[str]
    average_complexity: float


class ContentTypeAnalytics(ApiModel):
    title: str
    type: str
    complexity: str


class OptimizationAnalytics(ApiModel):
    total_original_length: int
    total_optimized_length: int
    compression_ratio: float


class SummaryAnalytics(ApiModel):
    """How a multi-article request was analyzed and summarized."""

    clusters: list[ClusterAnalytics] = Field(default_factory=list)
    content_types: list[ContentTypeAnalytics] = Field(default_factory=list)
    optimization: OptimizationAnalytics
    summary_strategy: str


class MultiSummaryResponse(ApiModel):
    """Combined study guide for several articles."""

    summary: str
    titles: list[str]
    urls: list[str]
    success_count: int
    total_count: int
    length: str
    word_count: int
    analytics: SummaryAnalytics
    warnings: list[str] | None = None


class HealthResponse(ApiModel):
    status: str
    timestamp: str
    uptime: float
