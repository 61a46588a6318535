"""Model-backed agents for study guide generation.

StudyGuideSummarizer:
    Builds study guide prompts and runs them against the configured
    OpenRouter models in priority order, falling back to the heuristic
    study guide when every model fails.

Example:
    >>> from agents import StudyGuideSummarizer
    >>> summarizer = StudyGuideSummarizer.from_config(config)
"""

from agents.summarizer import (
    CompletionProvider,
    OpenRouterProvider,
    StudyGuideSummarizer,
    SummarizationExhausted,
    build_providers,
    first_success,
)

__all__ = [
    "CompletionProvider",
    "OpenRouterProvider",
    "StudyGuideSummarizer",
    "SummarizationExhausted",
    "build_providers",
    "first_success",
]
