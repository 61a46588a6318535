"""
Shared pytest fixtures for the study guide tests.

Collaborators that would reach the network are replaced by fakes:
FakeProvider stands in for an OpenRouter model and FakeFetcher for the
Wikipedia client.
"""

import pytest

from agents.summarizer import StudyGuideSummarizer
from config import Config
from errors import NotFoundError
from models.article import AnalyzedArticle, Article
from models.summary import SummaryParams
from pipeline import StudyGuidePipeline
from processing.analyzer import analyze_content
from processing.optimizer import optimize_content

CAT_TEXT = (
    "The cat (Felis catus) is a small domesticated carnivorous mammal. It is the only "
    "domesticated species of the family Felidae. Cats were first domesticated in the Near "
    "East around 7500 BC.\n\n"
    "The cat is known for its important role in controlling rodents. Cats are used in many "
    "homes as companions, and today there are an estimated 220 million owned cats worldwide.\n\n"
    "Cat anatomy consists of a flexible body, quick reflexes and sharp retractable claws. "
    "Ancient Egyptians held cats in high esteem during the dynastic period of their history."
)

DOG_TEXT = (
    "The dog (Canis familiaris) is a domesticated descendant of the wolf. Dogs were the first "
    "species to be domesticated by hunter-gatherers over 15,000 years ago.\n\n"
    "Dogs are used for herding, hunting, guarding and as assistance animals. The dog is a "
    "significant companion species with a population of about 900 million worldwide."
)

SOLAR_TEXT = (
    "Solar energy panels convert sunlight into electricity using photovoltaic cells. "
    "Solar panels are installed on rooftops and in large solar farms."
)

SOLAR_FARM_TEXT = (
    "Solar farms use many solar energy panels to convert sunlight into electricity. "
    "Large solar installations are built in deserts with strong sunlight."
)

SHORT_PARAMS = SummaryParams(max_tokens=400, min_words=200, max_words=300)

# Model output in the shape the prompts ask for
MODEL_GUIDE = """## 🎯 Learning Objectives
- **Explain** how cats were domesticated in the Near East around 7500 BC
- **Describe** the anatomy that makes cats effective hunters of rodents

## 📚 Key Terms & Definitions
- **Felis catus**: The scientific name of the domestic cat, a member of the family Felidae

## 💡 Real-World Impact & Applications
- Cats are kept in an estimated 220 million homes and still control rodents on farms

## ❓ Review Questions
- Where and when were cats first domesticated, and why did it happen there?"""


def wiki_url(title: str) -> str:
    return f"https://en.wikipedia.org/wiki/{title.replace(' ', '_')}"


def make_article(title: str, content: str) -> Article:
    return Article(title=title, content=content, url=wiki_url(title))


def make_analyzed(title: str, content: str) -> AnalyzedArticle:
    """Article run through the analyzer and optimizer."""
    return AnalyzedArticle(
        article=make_article(title, content),
        analysis=analyze_content(content),
        optimized_content=optimize_content(content) or content,
    )


class FakeProvider:
    """Completion provider returning canned text or raising.

    Records every prompt it receives in .prompts.
    """

    def __init__(self, name: str, response: str = "", error: Exception | None = None):
        self.name = name
        self.response = response
        self.error = error
        self.prompts: list[str] = []
        self.params: list[SummaryParams] = []

    async def complete(self, prompt: str, params: SummaryParams) -> str:
        self.prompts.append(prompt)
        self.params.append(params)
        if self.error is not None:
            raise self.error
        return self.response


class FakeFetcher:
    """Maps URLs to articles; unknown URLs raise NotFoundError."""

    def __init__(self, articles: dict[str, Article] | None = None, errors: dict[str, Exception] | None = None):
        self.articles = articles or {}
        self.errors = errors or {}
        self.calls: list[str] = []

    async def __call__(self, url: str) -> Article:
        self.calls.append(url)
        if url in self.errors:
            raise self.errors[url]
        if url in self.articles:
            return self.articles[url]
        title = url.rsplit("/", 1)[-1].replace("_", " ")
        raise NotFoundError(f'Article "{title}" not found')


@pytest.fixture
def config(tmp_path) -> Config:
    """Configuration without an API key (heuristic-only mode)."""
    return Config(log_dir=tmp_path / "log", max_retries=1, retry_base_delay=0.0)


@pytest.fixture
def fetcher() -> FakeFetcher:
    return FakeFetcher({
        wiki_url("Cat"): make_article("Cat", CAT_TEXT),
        wiki_url("Dog"): make_article("Dog", DOG_TEXT),
        wiki_url("Solar panel"): make_article("Solar panel", SOLAR_TEXT),
        wiki_url("Solar farm"): make_article("Solar farm", SOLAR_FARM_TEXT),
    })


@pytest.fixture
def summarizer() -> StudyGuideSummarizer:
    """Summarizer without providers: every guide comes from the fallback."""
    return StudyGuideSummarizer([])


@pytest.fixture
def pipeline(config, fetcher, summarizer) -> StudyGuidePipeline:
    return StudyGuidePipeline(config, fetcher=fetcher, summarizer=summarizer)
