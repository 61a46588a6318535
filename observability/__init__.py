"""Logging and tracing infrastructure.

setup_logging / set_request_context:
    Console + rotating file logging with request-id propagation.

setup_tracing / trace_operation / trace_function:
    Optional Logfire spans with PydanticAI and FastAPI instrumentation.

Enable tracing via configuration:
    ENABLE_LOGFIRE=true
    LOGFIRE_TOKEN=your-token  # Optional

Example:
    >>> from observability import setup_tracing, trace_operation
    >>> setup_tracing(enabled=True, service_name="prism")
    >>> with trace_operation("pipeline.fetch"):
    ...     pass
"""

from observability.logging import new_request_id, set_request_context, setup_logging
from observability.tracing import TracingContext, setup_tracing, trace_function, trace_operation

__all__ = [
    "setup_logging",
    "set_request_context",
    "new_request_id",
    "setup_tracing",
    "trace_operation",
    "trace_function",
    "TracingContext",
]
