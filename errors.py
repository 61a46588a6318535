"""Error taxonomy for the study guide service.

Every failure that reaches a caller is an AppError carrying a machine code,
an HTTP status and a human-readable message. Exceptions raised by libraries
(aiohttp, asyncio, the LLM client) are translated with classify_exception()
before they are surfaced.

Taxonomy:
    ValidationError      400  bad input, never retried
    NotFoundError        404  article missing (EmptyContentError: no text)
    RequestTimeoutError  408  an upstream call timed out
    RateLimitError       429  upstream rate limit, not retried here
    QuotaError           429  upstream quota exhausted
    ServiceError         500  any other upstream or internal failure
                              (FetchError, ConfigurationError)

Propagation:
    - Batch requests turn per-article fetch failures into warnings.
    - Summarization failures never surface: the heuristic fallback runs.
    - Error text is passed through sanitize_message() before it is logged
      or returned, so credentials never leak into responses.
"""

import asyncio
import random
import re
from datetime import datetime, timezone
from typing import Any

import aiohttp


class ErrorCode:
    """Machine-readable error codes returned alongside messages."""

    INVALID_URL = "INVALID_URL"
    INVALID_REQUEST = "INVALID_REQUEST"
    ARTICLE_NOT_FOUND = "ARTICLE_NOT_FOUND"
    EMPTY_CONTENT = "EMPTY_CONTENT"
    API_KEY_INVALID = "API_KEY_INVALID"
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"
    INSUFFICIENT_CREDITS = "INSUFFICIENT_CREDITS"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    FETCH_FAILED = "FETCH_FAILED"
    TIMEOUT = "TIMEOUT"
    INTERNAL = "INTERNAL_ERROR"


ERROR_MESSAGES = {
    ErrorCode.INVALID_URL: "Please provide a valid Wikipedia article URL",
    ErrorCode.ARTICLE_NOT_FOUND: "The specified Wikipedia article could not be found",
    ErrorCode.API_KEY_INVALID: "AI service configuration error. Please contact support.",
    ErrorCode.RATE_LIMIT_EXCEEDED: "AI service temporarily overloaded. Please try again in a few moments.",
    ErrorCode.INSUFFICIENT_CREDITS: "AI service temporarily overloaded. Please try again in a few moments.",
    ErrorCode.SERVICE_UNAVAILABLE: "Service is temporarily unavailable. Please try again later",
    ErrorCode.TIMEOUT: "Request timed out. Please try again with a shorter article.",
    ErrorCode.INTERNAL: "An unexpected error occurred while generating the summary.",
}

# HTTP statuses worth another attempt (429 is excluded: rate limits surface)
RETRYABLE_STATUSES = frozenset({500, 502, 503, 504})


class AppError(Exception):
    """Base class for errors surfaced to API callers.

    Attributes:
        message: Human-readable description
        code: Machine-readable ErrorCode value
        status_code: HTTP status returned to the caller
    """

    status_code: int = 500
    default_code: str = ErrorCode.INTERNAL

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code

    def to_dict(self) -> dict[str, Any]:
        """JSON body for this error."""
        return {"error": sanitize_message(self.message), "code": self.code}

    def __str__(self) -> str:
        return self.message


class ValidationError(AppError):
    status_code = 400
    default_code = ErrorCode.INVALID_REQUEST


class NotFoundError(AppError):
    status_code = 404
    default_code = ErrorCode.ARTICLE_NOT_FOUND


class EmptyContentError(NotFoundError):
    default_code = ErrorCode.EMPTY_CONTENT


class RequestTimeoutError(AppError):
    status_code = 408
    default_code = ErrorCode.TIMEOUT

    def __init__(self, message: str = ERROR_MESSAGES[ErrorCode.TIMEOUT], code: str | None = None):
        super().__init__(message, code)


class RateLimitError(AppError):
    status_code = 429
    default_code = ErrorCode.RATE_LIMIT_EXCEEDED

    def __init__(
        self,
        message: str = ERROR_MESSAGES[ErrorCode.RATE_LIMIT_EXCEEDED],
        retry_after: int = 60,
    ):
        super().__init__(message)
        self.retry_after = retry_after


class QuotaError(AppError):
    status_code = 429
    default_code = ErrorCode.INSUFFICIENT_CREDITS


class ServiceError(AppError):
    status_code = 500
    default_code = ErrorCode.SERVICE_UNAVAILABLE


class FetchError(ServiceError):
    default_code = ErrorCode.FETCH_FAILED


class ConfigurationError(ServiceError):
    default_code = ErrorCode.API_KEY_INVALID


_REDACTIONS = (
    (re.compile(r"Bearer\s+[A-Za-z0-9_\-.]+"), "Bearer [REDACTED]"),
    (re.compile(r"api[_-]?key[=:]\s*[A-Za-z0-9_\-]+", re.IGNORECASE), "api_key=[REDACTED]"),
    (re.compile(r"token[=:]\s*[A-Za-z0-9_.\-]+", re.IGNORECASE), "token=[REDACTED]"),
    (re.compile(r"sk-or-[A-Za-z0-9_\-]+"), "[REDACTED]"),
)


def sanitize_message(message: str) -> str:
    """Remove API keys and tokens from error text.

    Example:
        >>> sanitize_message("401: Bearer sk-abc123 rejected")
        '401: Bearer [REDACTED] rejected'
    """
    for pattern, replacement in _REDACTIONS:
        message = pattern.sub(replacement, message)
    return message


def sanitize_error(error: BaseException) -> dict[str, Any]:
    """Describe an exception for logging without leaking credentials."""
    app_error = error if isinstance(error, AppError) else None
    return {
        "message": sanitize_message(str(error)),
        "code": app_error.code if app_error else "UNKNOWN_ERROR",
        "type": type(error).__name__,
        "status_code": app_error.status_code if app_error else None,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


def classify_exception(error: BaseException) -> AppError:
    """Translate an arbitrary exception into the error taxonomy.

    AppErrors pass through unchanged. Timeouts become RequestTimeoutError;
    messages mentioning an API key, quota or rate limit map to the
    corresponding errors; everything else becomes a ServiceError with the
    sanitized original message.
    """
    if isinstance(error, AppError):
        return error
    if isinstance(error, (asyncio.TimeoutError, aiohttp.ServerTimeoutError)):
        return RequestTimeoutError()

    message = str(error)
    lowered = message.lower()
    if isinstance(error, aiohttp.ClientResponseError):
        if error.status == 429:
            return RateLimitError()
        if error.status in (401, 403):
            return ConfigurationError(ERROR_MESSAGES[ErrorCode.API_KEY_INVALID])
        if error.status == 404:
            return NotFoundError(ERROR_MESSAGES[ErrorCode.ARTICLE_NOT_FOUND])
    if "api key" in lowered:
        return ConfigurationError(ERROR_MESSAGES[ErrorCode.API_KEY_INVALID])
    if "quota" in lowered:
        return QuotaError(ERROR_MESSAGES[ErrorCode.INSUFFICIENT_CREDITS])
    if "rate limit" in lowered:
        return RateLimitError()
    if "timeout" in lowered or "timed out" in lowered:
        return RequestTimeoutError()
    return ServiceError(sanitize_message(message) or ERROR_MESSAGES[ErrorCode.INTERNAL], ErrorCode.INTERNAL)


def is_retryable(error: BaseException) -> bool:
    """Whether a fetch failure is transient and worth another attempt."""
    if isinstance(error, AppError):
        return False
    if isinstance(error, aiohttp.ClientResponseError):
        return error.status in RETRYABLE_STATUSES
    return isinstance(error, (aiohttp.ClientConnectionError, asyncio.TimeoutError))


def retry_delay(attempt: int, base_delay: float = 1.0, max_delay: float = 30.0) -> float:
    """Exponential backoff with up to one second of jitter.

    Args:
        attempt: 1-based attempt number that just failed
        base_delay: Delay after the first failure (seconds)
        max_delay: Upper bound on the returned delay

    Returns:
        Seconds to wait before the next attempt
    """
    exponential = base_delay * (2 ** (attempt - 1))
    jittered = exponential + random.random() * min(1.0, base_delay)
    return min(jittered, max_delay)
