"""Shared HTTP helpers for the tools package."""

import ssl

import aiohttp
import certifi

# Wikimedia asks API clients to identify themselves
USER_AGENT = "Prism/0.1 (Wikipedia study guide generator; aiohttp)"

DEFAULT_HEADERS = {
    "User-Agent": USER_AGENT,
    "Accept": "application/json",
}


def create_ssl_context() -> ssl.SSLContext:
    """SSL context verifying certificates against the certifi bundle."""
    return ssl.create_default_context(cafile=certifi.where())


def create_session(timeout: float) -> aiohttp.ClientSession:
    """Client session with the default headers, CA bundle and total timeout."""
    return aiohttp.ClientSession(
        headers=DEFAULT_HEADERS,
        timeout=aiohttp.ClientTimeout(total=timeout),
        connector=aiohttp.TCPConnector(ssl=create_ssl_context()),
    )
