"""Optional Logfire tracing.

When enabled, Logfire instruments PydanticAI model calls and (if an app is
passed) FastAPI request handling. trace_operation() and trace_function()
open spans around pipeline stages and the Wikipedia fetch; they cost only a
debug log line when tracing is off.

Enable via configuration:
    ENABLE_LOGFIRE=true
    LOGFIRE_TOKEN=your-token  # Optional for cloud dashboard

Usage:
    >>> from observability.tracing import setup_tracing, trace_operation
    >>> setup_tracing(enabled=True, service_name="prism")
    >>> with trace_operation("pipeline.clustering", {"articles": 3}) as attrs:
    ...     attrs["clusters"] = 2
"""

import asyncio
import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from functools import wraps
from typing import Any, Callable, Generator

import logfire

logger = logging.getLogger(__name__)


@dataclass
class TracingContext:
    """Tracing state for the process."""

    enabled: bool = False
    service_name: str = "prism"
    token: str = ""
    _logfire_configured: bool = field(default=False, init=False)


_context = TracingContext()


def setup_tracing(
    enabled: bool = False,
    service_name: str = "prism",
    token: str = "",
    app: Any = None,
) -> TracingContext:
    """Configure Logfire and instrument PydanticAI (and FastAPI if app is given).

    Configuration failures disable tracing instead of stopping the service.

    Returns:
        TracingContext for the session
    """
    _context.enabled = enabled
    _context.service_name = service_name
    _context.token = token

    if not enabled:
        logger.debug("Tracing disabled")
        return _context

    try:
        logfire.configure(
            service_name=service_name,
            token=token or None,
            send_to_logfire="if-token-present",
        )
        logfire.instrument_pydantic_ai()
        if app is not None:
            logfire.instrument_fastapi(app)
        _context._logfire_configured = True
        logger.info("Logfire tracing enabled | service=%s", service_name)
    except Exception as e:
        logger.error("Failed to configure Logfire | error=%s", e)
        _context.enabled = False

    return _context


@contextmanager
def trace_operation(
    name: str,
    attributes: dict[str, Any] | None = None,
) -> Generator[dict[str, Any], None, None]:
    """Span around an operation.

    Yields a dict; keys added to it during the operation are attached to
    the span when it closes.
    """
    start = time.monotonic()
    result_attrs: dict[str, Any] = {}
    try:
        if _context.enabled and _context._logfire_configured:
            with logfire.span(name, **(attributes or {})) as span:
                yield result_attrs
                for key, value in result_attrs.items():
                    span.set_attribute(key, value)
        else:
            yield result_attrs
    finally:
        logger.debug("Operation completed | name=%s | duration=%.2fs", name, time.monotonic() - start)


def trace_function(name: str | None = None) -> Callable:
    """Decorator wrapping a function (sync or async) in trace_operation()."""

    def decorator(func: Callable) -> Callable:
        span_name = name or func.__name__

        @wraps(func)
        async def async_wrapper(*args, **kwargs):
            with trace_operation(span_name):
                return await func(*args, **kwargs)

        @wraps(func)
        def sync_wrapper(*args, **kwargs):
            with trace_operation(span_name):
                return func(*args, **kwargs)

        if asyncio.iscoroutinefunction(func):
            return async_wrapper
        return sync_wrapper

    return decorator
