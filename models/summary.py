"""Summary budget and document models."""

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class LengthTier(str, Enum):
    """Requested summary length."""

    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"


class SummaryParams(BaseModel):
    """Token and word budget for one summarization call.

    Attributes:
        max_tokens: Completion token ceiling
        min_words: Lower bound of the target word range
        max_words: Upper bound of the target word range

    Example:
        >>> SummaryParams(max_tokens=400, min_words=200, max_words=300).target_words
        '200-300'
    """

    model_config = ConfigDict(frozen=True)

    max_tokens: int = Field(gt=0, description="Completion token ceiling")
    min_words: int = Field(ge=0, description="Lower bound of target words")
    max_words: int = Field(ge=0, description="Upper bound of target words")

    @property
    def target_words(self) -> str:
        """Word range as used in prompts, e.g. '200-300'."""
        return f"{self.min_words}-{self.max_words}"


@dataclass
class Section:
    """A `## ` section of a study guide while it is being polished."""

    title: str
    body: str = ""

    def render(self) -> str:
        return f"## {self.title}\n\n{self.body}".rstrip()


@dataclass
class ClusterSummary:
    """Generated text for one cluster of a multi-topic request."""

    theme: str
    content: str
    titles: list[str]
