"""Wikipedia article fetching.

An article URL is reduced to its title (the path after /wiki/, URL-decoded,
underscores turned into spaces). The article is then read from the same
wiki host in two steps:

    1. REST summary endpoint: confirms the article exists and provides a
       short extract used when the full text is unavailable
    2. Action API extracts endpoint: the full plain-text article

Failures are raised as typed errors (errors.NotFoundError, EmptyContentError,
FetchError, RateLimitError, RequestTimeoutError). Transient failures (5xx,
connection errors, timeouts) are retried with exponential backoff; rate
limits are not.
"""

import asyncio
import logging
from typing import Any
from urllib.parse import quote, unquote, urlparse

import aiohttp

from config import Config
from errors import (
    EmptyContentError,
    FetchError,
    NotFoundError,
    RateLimitError,
    RequestTimeoutError,
    ValidationError,
    is_retryable,
    retry_delay,
)
from models.article import Article
from observability.tracing import trace_function
from tools.utils import create_session

logger = logging.getLogger(__name__)

WIKI_PATH = "/wiki/"
DEFAULT_WIKI_BASE = "https://en.wikipedia.org"
INVALID_URL_MESSAGE = "Invalid Wikipedia URL. Please provide a valid Wikipedia article URL."


def is_wikipedia_url(url: Any) -> bool:
    """Whether url looks like a Wikipedia article URL."""
    return isinstance(url, str) and "wikipedia.org/wiki/" in url


def title_from_url(url: str) -> str:
    """Article title encoded in a Wikipedia URL.

    Example:
        >>> title_from_url("https://en.wikipedia.org/wiki/Albert_Einstein#Life")
        'Albert Einstein'
    """
    if WIKI_PATH not in url:
        return ""
    raw = url.split(WIKI_PATH, 1)[1]
    raw = raw.split("#", 1)[0].split("?", 1)[0]
    return unquote(raw).replace("_", " ").strip()


def wiki_base_url(url: str) -> str:
    """Scheme and host of the wiki serving url (defaults to English Wikipedia)."""
    parsed = urlparse(url)
    if parsed.netloc.endswith("wikipedia.org"):
        return f"{parsed.scheme or 'https'}://{parsed.netloc}"
    return DEFAULT_WIKI_BASE


def extract_page_text(data: dict[str, Any], title: str, fallback_extract: str = "") -> str:
    """Full article text from an Action API extracts response.

    Raises:
        NotFoundError: If the API reports the page as missing (page id -1)
        EmptyContentError: If neither the page nor the fallback has text
    """
    pages = (data.get("query") or {}).get("pages") or {}
    if not pages:
        raise FetchError(f'Failed to fetch article "{title}"')

    page_id = next(iter(pages))
    if page_id == "-1":
        raise NotFoundError(f'Article "{title}" not found')

    content = (pages[page_id] or {}).get("extract") or fallback_extract
    if not content or not content.strip():
        raise EmptyContentError(f'Content for "{title}" is empty')
    return content


class WikipediaClient:
    """Fetches Wikipedia articles with bounded retries.

    Example:
        >>> client = WikipediaClient.from_config(config)
        >>> article = await client.fetch_article("https://en.wikipedia.org/wiki/Cat")
        >>> article.title
        'Cat'
    """

    def __init__(self, timeout: float = 30.0, max_retries: int = 3, retry_base_delay: float = 1.0):
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_base_delay = retry_base_delay

    @classmethod
    def from_config(cls, config: Config) -> "WikipediaClient":
        return cls(
            timeout=config.wikipedia_timeout,
            max_retries=config.max_retries,
            retry_base_delay=config.retry_base_delay,
        )

    async def _get_json(
        self,
        session: aiohttp.ClientSession,
        url: str,
        params: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """GET a JSON document, retrying transient failures."""
        attempt = 0
        while True:
            attempt += 1
            try:
                async with session.get(url, params=params) as resp:
                    if resp.status >= 400:
                        raise aiohttp.ClientResponseError(
                            resp.request_info,
                            resp.history,
                            status=resp.status,
                            message=resp.reason or "",
                        )
                    return await resp.json(content_type=None)
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                if attempt >= self.max_retries or not is_retryable(e):
                    raise
                delay = retry_delay(attempt, self.retry_base_delay)
                logger.warning(
                    "Wikipedia request failed, retrying | url=%s | attempt=%d/%d | delay=%.1fs | error=%s",
                    url,
                    attempt,
                    self.max_retries,
                    delay,
                    type(e).__name__,
                )
                await asyncio.sleep(delay)

    @trace_function("wikipedia.fetch_article")
    async def fetch_article(self, url: str) -> Article:
        """Fetch the plain-text article behind a Wikipedia URL.

        Raises:
            ValidationError: If url is not a Wikipedia article URL
            NotFoundError: If the article does not exist
            EmptyContentError: If the article has no text
            RateLimitError: If Wikipedia rate-limits the request
            RequestTimeoutError: If Wikipedia does not answer in time
            FetchError: For any other fetch failure
        """
        title = title_from_url(url) if is_wikipedia_url(url) else ""
        if not title:
            raise ValidationError(INVALID_URL_MESSAGE)

        base = wiki_base_url(url)
        logger.debug("Fetching article | title=%s | host=%s", title, base)

        try:
            async with create_session(self.timeout) as session:
                summary = await self._get_json(
                    session, f"{base}/api/rest_v1/page/summary/{quote(title, safe='')}"
                )
                data = await self._get_json(
                    session,
                    f"{base}/w/api.php",
                    params={
                        "action": "query",
                        "format": "json",
                        "titles": title,
                        "prop": "extracts",
                        "explaintext": "true",
                        "exsectionformat": "plain",
                    },
                )
        except aiohttp.ClientResponseError as e:
            if e.status == 404:
                raise NotFoundError(f'Article "{title}" not found') from e
            if e.status == 429:
                raise RateLimitError() from e
            raise FetchError(f'Failed to fetch article "{title}"') from e
        except asyncio.TimeoutError as e:
            raise RequestTimeoutError() from e
        except aiohttp.ClientError as e:
            raise FetchError(f'Failed to fetch article "{title}"') from e

        content = extract_page_text(data, title, summary.get("extract") or "")
        logger.info("Fetched article | title=%s | chars=%d", title, len(content))
        return Article(title=title, content=content, url=url)
