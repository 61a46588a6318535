"""Study guide summarizer backed by OpenRouter models.

Models are tried in priority order and the first non-blank completion wins
(first_success). When every model fails, or no API key is configured, the
heuristic fallback in processing.fallback builds the study guide instead, so
generate_summary() never fails because of a model error.

Flow:
    content -> truncate -> prompt -> first_success(providers)
            -> (fallback study guide on exhaustion) -> enhance_and_polish
"""

import asyncio
import logging
from typing import Protocol

from openai import AsyncOpenAI
from pydantic_ai import Agent
from pydantic_ai.models.openai import OpenAIModel
from pydantic_ai.providers.openai import OpenAIProvider
from pydantic_ai.settings import ModelSettings
from pydantic_ai.usage import UsageLimits

from agents.prompts import build_study_guide_prompt, build_unified_prompt, combined_cluster_content, is_multi_topic
from config import DEFAULT_OPTIMIZATION, Config, OptimizationSettings
from errors import ServiceError, sanitize_message
from models.cluster import Cluster
from models.summary import ClusterSummary, SummaryParams
from processing.assembler import create_structured_multi_topic_summary, enhance_and_polish
from processing.budget import allocate_cluster_budget
from processing.fallback import create_fallback_study_guide
from processing.patterns import DEFAULT_PATTERNS, PatternSet

logger = logging.getLogger(__name__)

# Sampling settings shared by every model
TEMPERATURE = 0.25
TOP_P = 0.85
FREQUENCY_PENALTY = 0.3
PRESENCE_PENALTY = 0.2


class CompletionProvider(Protocol):
    """Anything that turns a prompt into text within a budget."""

    name: str

    async def complete(self, prompt: str, params: SummaryParams) -> str: ...


class SummarizationExhausted(ServiceError):
    """Every configured provider failed or returned blank text.

    Attributes:
        errors: (provider name, exception) for each failed attempt
    """

    def __init__(self, errors: list[tuple[str, BaseException]]):
        if errors:
            detail = "; ".join(f"{name}: {type(e).__name__}" for name, e in errors)
            message = f"All summarization models failed ({detail})"
        else:
            message = "No summarization models configured"
        super().__init__(message)
        self.errors = errors


class OpenRouterProvider:
    """One OpenRouter model accessed through a PydanticAI agent."""

    def __init__(self, model_name: str, client: AsyncOpenAI):
        self.name = model_name
        model = OpenAIModel(model_name=model_name, provider=OpenAIProvider(openai_client=client))
        self._agent = Agent(model, output_type=str)

    async def complete(self, prompt: str, params: SummaryParams) -> str:
        settings = ModelSettings(
            max_tokens=params.max_tokens,
            temperature=TEMPERATURE,
            top_p=TOP_P,
            frequency_penalty=FREQUENCY_PENALTY,
            presence_penalty=PRESENCE_PENALTY,
        )
        result = await self._agent.run(
            prompt,
            model_settings=settings,
            usage_limits=UsageLimits(request_limit=1),
        )
        usage = result.usage()
        logger.debug(
            "Completion received | model=%s | requests=%d | total_tokens=%s",
            self.name,
            usage.requests,
            usage.total_tokens,
        )
        return result.output


def build_providers(config: Config) -> list[CompletionProvider]:
    """Providers for every configured model, or none without an API key."""
    if not config.llm_enabled:
        logger.warning("No OPENROUTER_API_KEY configured | study guides use heuristic fallback only")
        return []

    client = AsyncOpenAI(
        base_url=config.openrouter_base_url,
        api_key=config.openrouter_api_key,
        default_headers={"HTTP-Referer": config.app_url, "X-Title": config.app_title},
    )
    return [OpenRouterProvider(model, client) for model in config.summary_models]


async def first_success(
    providers: list[CompletionProvider],
    prompt: str,
    params: SummaryParams,
) -> str:
    """Return the first non-blank completion, trying providers in order.

    Raises:
        SummarizationExhausted: If every provider fails or none is configured
    """
    errors: list[tuple[str, BaseException]] = []
    for provider in providers:
        try:
            text = await provider.complete(prompt, params)
        except Exception as e:
            logger.warning(
                "Model failed | model=%s | error=%s: %s",
                provider.name,
                type(e).__name__,
                sanitize_message(str(e))[:200],
            )
            errors.append((provider.name, e))
            continue

        if text and text.strip():
            logger.info("Model succeeded | model=%s | chars=%d", provider.name, len(text))
            return text.strip()

        logger.warning("Model returned empty text | model=%s", provider.name)
        errors.append((provider.name, ServiceError(f"Empty completion from {provider.name}")))

    raise SummarizationExhausted(errors)


class StudyGuideSummarizer:
    """Produces study guides for articles and clusters of articles.

    Example:
        >>> summarizer = StudyGuideSummarizer.from_config(config)
        >>> guide = await summarizer.generate_summary(article.content, article.title, params)
    """

    def __init__(
        self,
        providers: list[CompletionProvider],
        settings: OptimizationSettings = DEFAULT_OPTIMIZATION,
        patterns: PatternSet = DEFAULT_PATTERNS,
    ):
        self.providers = providers
        self.settings = settings
        self.patterns = patterns

    @classmethod
    def from_config(cls, config: Config) -> "StudyGuideSummarizer":
        return cls(build_providers(config), settings=config.optimization)

    def _truncate(self, content: str) -> str:
        limit = self.settings.summary_input_length
        if len(content) > limit:
            return content[:limit] + "..."
        return content

    async def generate_summary(self, content: str, title: str, params: SummaryParams) -> str:
        """Study guide for one article, or for combined articles.

        A title containing commas selects the multi-topic prompt and
        template. Model failures fall back to the heuristic study guide.
        """
        truncated = self._truncate(content)
        prompt = build_study_guide_prompt(truncated, title, params)

        try:
            summary = await first_success(self.providers, prompt, params)
        except SummarizationExhausted as e:
            logger.warning(
                "Using fallback study guide | title=%s | reason=%s",
                title[:60],
                sanitize_message(e.message),
            )
            summary = create_fallback_study_guide(truncated, title, is_multi_topic(title), self.patterns)

        return enhance_and_polish(summary, title, truncated, self.patterns, self.settings)

    async def generate_unified_summary(self, cluster: Cluster, params: SummaryParams) -> str:
        """One integrated study guide for a cluster of related articles.

        Raises:
            SummarizationExhausted: If no model produced text
        """
        logger.info(
            "Generating unified summary | theme=%s | articles=%d",
            cluster.theme.value,
            len(cluster),
        )
        prompt = build_unified_prompt(cluster, params)
        summary = await first_success(self.providers, prompt, params)
        return enhance_and_polish(
            summary,
            cluster.combined_title,
            self._truncate(combined_cluster_content(cluster)),
            self.patterns,
            self.settings,
        )

    async def _summarize_articles_individually(self, cluster: Cluster, params: SummaryParams) -> str:
        parts = []
        for article in cluster.articles:
            guide = await self.generate_summary(article.optimized_content, article.title, params)
            parts.append(f"**{article.title}:** {guide}")
        return "\n\n".join(parts)

    async def _summarize_cluster(self, cluster: Cluster, params: SummaryParams) -> ClusterSummary:
        if len(cluster) == 1:
            article = cluster.articles[0]
            content = await self.generate_summary(article.optimized_content, article.title, params)
        else:
            try:
                content = await self.generate_unified_summary(cluster, params)
            except SummarizationExhausted:
                logger.warning(
                    "Unified summary failed, summarizing cluster articles individually | theme=%s",
                    cluster.theme.value,
                )
                content = await self._summarize_articles_individually(cluster, params)
        return ClusterSummary(theme=cluster.theme.value, content=content, titles=cluster.titles)

    async def generate_multi_topic_summary(self, clusters: list[Cluster], params: SummaryParams) -> str:
        """Structured document with one section per cluster.

        Clusters are summarized concurrently, each with an even share of the
        budget; sections follow cluster order.
        """
        cluster_params = allocate_cluster_budget(params, len(clusters), self.settings.budget)
        logger.info(
            "Generating multi-topic summary | clusters=%d | max_tokens_per_cluster=%d",
            len(clusters),
            cluster_params.max_tokens,
        )
        summaries = await asyncio.gather(*(self._summarize_cluster(c, cluster_params) for c in clusters))
        total_articles = sum(len(c) for c in clusters)
        return create_structured_multi_topic_summary(list(summaries), total_articles)
