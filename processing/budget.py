"""Token and word budgets for summarization calls.

Single-article requests use the tier table directly. Multi-article requests
scale the tier up with the number of clusters (capped), and each cluster then
receives an even share of the scaled budget.
"""

from config import BudgetSettings
from models.summary import LengthTier, SummaryParams

LENGTH_TIERS: dict[LengthTier, SummaryParams] = {
    LengthTier.SHORT: SummaryParams(max_tokens=400, min_words=200, max_words=300),
    LengthTier.MEDIUM: SummaryParams(max_tokens=800, min_words=400, max_words=600),
    LengthTier.LONG: SummaryParams(max_tokens=1200, min_words=600, max_words=900),
}


def parse_length(length: str | None) -> LengthTier:
    """Length tier for a request value; unknown values mean SHORT."""
    try:
        return LengthTier((length or "").lower())
    except ValueError:
        return LengthTier.SHORT


def get_summary_parameters(length: str | LengthTier | None) -> SummaryParams:
    """Budget for a single summary of the requested length.

    Example:
        >>> get_summary_parameters("medium").target_words
        '400-600'
    """
    tier = length if isinstance(length, LengthTier) else parse_length(length)
    return LENGTH_TIERS[tier]


def scale_for_clusters(
    base: SummaryParams,
    cluster_count: int,
    settings: BudgetSettings = BudgetSettings(),
) -> SummaryParams:
    """Enlarge a tier budget for a request spanning several clusters.

    Tokens grow by max(1.2, n * 0.3) up to the token cap; word bounds grow by
    n * 0.7 and n * 0.8 with fixed floors.
    """
    n = max(cluster_count, 1)
    multiplier = max(settings.base_token_multiplier, n * settings.cluster_token_factor)
    max_tokens = min(int(base.max_tokens * multiplier), settings.token_cap)
    min_words = max(int(base.min_words * n * settings.min_word_scale), settings.multi_min_words)
    max_words = max(int(base.max_words * n * settings.max_word_scale), settings.multi_max_words)
    return SummaryParams(max_tokens=max_tokens, min_words=min_words, max_words=max(max_words, min_words))


def allocate_cluster_budget(
    params: SummaryParams,
    cluster_count: int,
    settings: BudgetSettings = BudgetSettings(),
) -> SummaryParams:
    """Even share of a budget for one of cluster_count clusters.

    Shares are floor-divided, then clamped so every cluster gets at least
    min_tokens_per_cluster tokens (never more than the cap) and
    min_words_per_cluster words.
    """
    n = max(cluster_count, 1)
    max_tokens = params.max_tokens // n
    max_tokens = min(max(max_tokens, settings.min_tokens_per_cluster), settings.token_cap)
    min_words = max(params.min_words // n, settings.min_words_per_cluster)
    max_words = max(params.max_words // n, min_words)
    return SummaryParams(max_tokens=max_tokens, min_words=min_words, max_words=max_words)
