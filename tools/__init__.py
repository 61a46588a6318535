"""External data sources for the study guide service.

WikipediaClient:
    Fetches plain-text Wikipedia articles (REST summary + Action API
    extracts) with typed failures and bounded retries.

title_from_url / is_wikipedia_url:
    URL validation and title normalization helpers.

Example:
    >>> from tools import WikipediaClient
    >>> client = WikipediaClient(timeout=30.0)
    >>> article = await client.fetch_article("https://en.wikipedia.org/wiki/Cat")
"""

from tools.utils import USER_AGENT, create_session, create_ssl_context
from tools.wikipedia import WikipediaClient, is_wikipedia_url, title_from_url

__all__ = [
    "WikipediaClient",
    "is_wikipedia_url",
    "title_from_url",
    "create_session",
    "create_ssl_context",
    "USER_AGENT",
]
