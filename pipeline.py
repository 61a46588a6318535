"""Request orchestration for study guide generation.

Single article:
    validate -> fetch -> summarize (model or fallback) -> polish

Multiple articles:
    1. FETCHING: Fetch all URLs concurrently (bounded by MAX_WORKERS);
       failures become warnings as long as one article succeeds
    2. ANALYZING: Profile and trim each article
    3. CLUSTERING: Group related articles by keyword overlap
    4. SUMMARIZING: Pick a strategy from the cluster layout
       - one cluster with several articles -> unified_thematic
       - several clusters -> multi_topic_structured
       - otherwise -> standard_combined
    5. ASSEMBLING: Build the response with analytics
    FALLBACK: If the chosen strategy raises, every article is summarized
       independently and the guides are concatenated
"""

import asyncio
import logging
import time
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Awaitable, Callable

from agents.summarizer import StudyGuideSummarizer
from config import Config
from errors import AppError, ErrorCode, NotFoundError, ValidationError, classify_exception, sanitize_message
from models.api import (
    ClusterAnalytics,
    ContentTypeAnalytics,
    MultiSummaryResponse,
    OptimizationAnalytics,
    SummaryAnalytics,
    SummaryResponse,
)
from models.article import AnalyzedArticle, Article
from models.cluster import Cluster
from models.summary import SummaryParams
from observability.tracing import trace_operation
from processing.analyzer import analyze_content
from processing.budget import get_summary_parameters, scale_for_clusters
from processing.clustering import extract_semantic_clusters
from processing.optimizer import optimize_content
from processing.patterns import DEFAULT_PATTERNS, PatternSet
from tools.wikipedia import INVALID_URL_MESSAGE, WikipediaClient, is_wikipedia_url

logger = logging.getLogger(__name__)

Fetcher = Callable[[str], Awaitable[Article]]

NO_ARTICLES_MESSAGE = "No articles could be retrieved. Please check your URLs and try again."
URLS_REQUIRED_MESSAGE = "Please provide an array of Wikipedia URLs."
UNAVAILABLE_SUMMARY = "Unable to generate summary."


class RequestStage(str, Enum):
    FETCHING = "fetching"
    ANALYZING = "analyzing"
    CLUSTERING = "clustering"
    SUMMARIZING = "summarizing"
    ASSEMBLING = "assembling"
    DONE = "done"
    FALLBACK = "fallback"


class SummaryStrategy(str, Enum):
    UNIFIED_THEMATIC = "unified_thematic"
    MULTI_TOPIC_STRUCTURED = "multi_topic_structured"
    STANDARD_COMBINED = "standard_combined"


@dataclass
class RequestStats:
    """Counters for one multi-article request.

    Attributes:
        requested: URLs in the request
        fetched: Articles fetched successfully
        failed: URLs that could not be fetched
        clusters: Theme clusters found
        strategy: Summary strategy chosen
        fallback: Whether per-article fallback was used
        duration: Total time in seconds
    """

    requested: int = 0
    fetched: int = 0
    failed: int = 0
    clusters: int = 0
    strategy: str = ""
    fallback: bool = False
    duration: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        d["duration"] = round(d["duration"], 2)
        return d


def count_words(text: str) -> int:
    return len(text.split())


def validate_url(url: Any) -> str:
    """Return url if it is a Wikipedia article URL.

    Raises:
        ValidationError: Otherwise
    """
    if not is_wikipedia_url(url):
        raise ValidationError(INVALID_URL_MESSAGE, ErrorCode.INVALID_URL)
    return url


def validate_urls(urls: Any, max_urls: int = 10) -> list[str]:
    """Validate the URL list of a multi-article request.

    Any invalid entry rejects the whole batch.

    Raises:
        ValidationError: For a missing, empty, oversized or invalid list
    """
    if not isinstance(urls, list) or not urls:
        raise ValidationError(URLS_REQUIRED_MESSAGE)
    if len(urls) > max_urls:
        raise ValidationError(f"Maximum {max_urls} URLs allowed per request.")
    invalid = [u for u in urls if not is_wikipedia_url(u)]
    if invalid:
        raise ValidationError(
            f"Invalid Wikipedia URLs found: {len(invalid)} URLs are not valid Wikipedia articles.",
            ErrorCode.INVALID_URL,
        )
    return urls


def choose_strategy(clusters: list[Cluster]) -> SummaryStrategy:
    if len(clusters) == 1 and len(clusters[0]) > 1:
        return SummaryStrategy.UNIFIED_THEMATIC
    if len(clusters) > 1:
        return SummaryStrategy.MULTI_TOPIC_STRUCTURED
    return SummaryStrategy.STANDARD_COMBINED


def build_analytics(
    articles: list[Article],
    analyzed: list[AnalyzedArticle],
    clusters: list[Cluster],
    strategy: SummaryStrategy,
) -> SummaryAnalytics:
    original_length = sum(len(a.content) for a in articles)
    optimized_length = sum(len(a.optimized_content) for a in analyzed)
    ratio = round(optimized_length / original_length, 2) if original_length else 0.0

    return SummaryAnalytics(
        clusters=[
            ClusterAnalytics(
                theme=c.theme.value,
                article_count=len(c),
                titles=c.titles,
                average_complexity=c.average_complexity,
            )
            for c in clusters
        ],
        content_types=[
            ContentTypeAnalytics(
                title=a.title,
                type=a.analysis.content_type.value,
                complexity=a.analysis.complexity.value,
            )
            for a in analyzed
        ],
        optimization=OptimizationAnalytics(
            total_original_length=original_length,
            total_optimized_length=optimized_length,
            compression_ratio=ratio,
        ),
        summary_strategy=strategy.value,
    )


class StudyGuidePipeline:
    """Turns Wikipedia URLs into study guides.

    Collaborators are injectable: fetcher is any coroutine function mapping
    a URL to an Article, and summarizer any StudyGuideSummarizer.

    Example:
        >>> pipeline = StudyGuidePipeline(Config.load())
        >>> response = await pipeline.summarize_single("https://en.wikipedia.org/wiki/Cat", "short")
    """

    def __init__(
        self,
        config: Config,
        fetcher: Fetcher | None = None,
        summarizer: StudyGuideSummarizer | None = None,
        patterns: PatternSet = DEFAULT_PATTERNS,
    ):
        self.config = config
        self.fetcher = fetcher or WikipediaClient.from_config(config).fetch_article
        self.summarizer = summarizer or StudyGuideSummarizer.from_config(config)
        self.patterns = patterns

    def _enter(self, stage: RequestStage, **fields: Any) -> None:
        details = "".join(f" | {k}={v}" for k, v in fields.items())
        logger.info("Request stage | stage=%s%s", stage.value, details)

    async def summarize_single(self, url: Any, length: str = "short") -> SummaryResponse:
        """Study guide for one article.

        Raises:
            ValidationError: If url is not a Wikipedia article URL
            AppError: If the article cannot be fetched
        """
        url = validate_url(url)
        params = get_summary_parameters(length)

        with trace_operation("pipeline.fetch", {"urls": 1}):
            article = await self.fetcher(url)

        with trace_operation("pipeline.summarize", {"title": article.title}) as attrs:
            summary = await self.summarizer.generate_summary(article.content, article.title, params)
            attrs["words"] = count_words(summary)

        logger.info("Summary generated | title=%s | length=%s | words=%d", article.title, length, count_words(summary))
        return SummaryResponse(
            summary=summary,
            title=article.title,
            original_url=url,
            length=length,
            word_count=count_words(summary),
        )

    async def fetch_articles(self, urls: list[str]) -> tuple[list[Article], list[str]]:
        """Fetch every URL concurrently, keeping input order.

        Returns:
            (articles fetched, warning message per failed URL)
        """
        semaphore = asyncio.Semaphore(self.config.max_workers)

        async def fetch_one(url: str) -> Article:
            async with semaphore:
                return await self.fetcher(url)

        results = await asyncio.gather(*(fetch_one(u) for u in urls), return_exceptions=True)

        articles: list[Article] = []
        warnings: list[str] = []
        for url, result in zip(urls, results):
            if isinstance(result, Exception):
                error = classify_exception(result)
                logger.warning("Fetch failed | url=%s | code=%s | error=%s", url, error.code, error.message)
                warnings.append(sanitize_message(error.message))
            elif isinstance(result, BaseException):
                raise result
            else:
                articles.append(result)
        return articles, warnings

    def analyze_articles(self, articles: list[Article]) -> list[AnalyzedArticle]:
        """Profile and trim each article."""
        limit = self.config.optimization.max_input_length
        analyzed = []
        for article in articles:
            optimized = optimize_content(article.content, limit, self.patterns)
            if not optimized:
                optimized = article.content[:limit]
            analyzed.append(
                AnalyzedArticle(
                    article=article,
                    analysis=analyze_content(article.content, self.patterns),
                    optimized_content=optimized,
                )
            )
            logger.debug(
                "Article analyzed | title=%s | type=%s | complexity=%s",
                article.title,
                analyzed[-1].analysis.content_type.value,
                analyzed[-1].analysis.complexity.value,
            )
        return analyzed

    async def _run_strategy(
        self,
        strategy: SummaryStrategy,
        clusters: list[Cluster],
        analyzed: list[AnalyzedArticle],
        params: SummaryParams,
    ) -> str:
        if strategy is SummaryStrategy.UNIFIED_THEMATIC:
            return await self.summarizer.generate_unified_summary(clusters[0], params)
        if strategy is SummaryStrategy.MULTI_TOPIC_STRUCTURED:
            return await self.summarizer.generate_multi_topic_summary(clusters, params)

        combined_title = ", ".join(a.title for a in analyzed)
        combined_content = "\n\n---\n\n".join(f"## {a.title}\n\n{a.optimized_content}" for a in analyzed)
        return await self.summarizer.generate_summary(combined_content, combined_title, params)

    async def _summarize_individually(self, analyzed: list[AnalyzedArticle], params: SummaryParams) -> str:
        parts = []
        for article in analyzed:
            try:
                guide = await self.summarizer.generate_summary(article.optimized_content, article.title, params)
            except Exception as e:
                logger.error(
                    "Individual summary failed | title=%s | error=%s",
                    article.title,
                    sanitize_message(str(e)),
                    exc_info=True,
                )
                guide = UNAVAILABLE_SUMMARY
            parts.append(f"**{article.title}:** {guide}")
        return "\n\n".join(parts)

    async def summarize_multiple(self, urls: Any, length: str = "short") -> MultiSummaryResponse:
        """Combined study guide for up to MAX_URLS articles.

        Raises:
            ValidationError: For an invalid URL list
            NotFoundError: If no article could be fetched
        """
        urls = validate_urls(urls, self.config.max_urls)
        start = time.monotonic()
        stats = RequestStats(requested=len(urls))
        params = get_summary_parameters(length)

        self._enter(RequestStage.FETCHING, urls=len(urls))
        with trace_operation("pipeline.fetch", {"urls": len(urls)}) as attrs:
            articles, warnings = await self.fetch_articles(urls)
            attrs["fetched"] = len(articles)
        stats.fetched = len(articles)
        stats.failed = len(warnings)

        if not articles:
            raise NotFoundError(NO_ARTICLES_MESSAGE)

        self._enter(RequestStage.ANALYZING, articles=len(articles))
        analyzed = self.analyze_articles(articles)

        self._enter(RequestStage.CLUSTERING)
        with trace_operation("pipeline.clustering", {"articles": len(analyzed)}) as attrs:
            clusters = extract_semantic_clusters(
                analyzed, self.config.optimization.related_threshold, self.patterns
            )
            attrs["clusters"] = len(clusters)
        stats.clusters = len(clusters)

        strategy = choose_strategy(clusters)
        stats.strategy = strategy.value
        multi_params = scale_for_clusters(params, len(clusters), self.config.optimization.budget)

        self._enter(RequestStage.SUMMARIZING, strategy=strategy.value, max_tokens=multi_params.max_tokens)
        try:
            with trace_operation("pipeline.summarize", {"strategy": strategy.value}):
                summary = await self._run_strategy(strategy, clusters, analyzed, multi_params)
        except Exception as e:
            error = classify_exception(e)
            logger.error(
                "Summary strategy failed | strategy=%s | error=%s",
                strategy.value,
                sanitize_message(error.message),
                exc_info=not isinstance(e, AppError),
            )
            self._enter(RequestStage.FALLBACK, articles=len(analyzed))
            stats.fallback = True
            summary = await self._summarize_individually(analyzed, params)

        self._enter(RequestStage.ASSEMBLING)
        response = MultiSummaryResponse(
            summary=summary,
            titles=[a.title for a in articles],
            urls=[a.url for a in articles],
            success_count=len(articles),
            total_count=len(urls),
            length=length,
            word_count=count_words(summary),
            analytics=build_analytics(articles, analyzed, clusters, strategy),
            warnings=warnings or None,
        )

        stats.duration = time.monotonic() - start
        self._enter(RequestStage.DONE, **stats.to_dict())
        return response
