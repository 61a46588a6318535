"""HTTP API for the study guide service.

Endpoints:
    POST /api/summarize            Study guide for one article
    POST /api/summarize-multiple   Combined study guide for 1-10 articles
    GET  /api/health               Liveness check

Every request gets a request id (echoed as X-Request-ID) that is attached
to all log lines produced while handling it. Errors are always returned as
{"error": message, "code": code} with the status of the error class.

Usage:
    >>> app = create_app(Config.load())
    >>> uvicorn.run(app, host="127.0.0.1", port=3000)
"""

import logging
import time
from datetime import datetime, timezone

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import Config
from errors import AppError, ErrorCode, classify_exception, sanitize_error
from models.api import (
    HealthResponse,
    MultiSummaryRequest,
    MultiSummaryResponse,
    SummaryRequest,
    SummaryResponse,
)
from observability.logging import new_request_id, reset_request_context, set_request_context
from observability.tracing import setup_tracing
from pipeline import StudyGuidePipeline

logger = logging.getLogger(__name__)

INVALID_JSON_MESSAGE = "Invalid JSON format in request body"
INVALID_BODY_MESSAGE = "Invalid request body"
REQUEST_ID_HEADER = "X-Request-ID"

API_ENDPOINTS = [
    "POST /api/summarize",
    "POST /api/summarize-multiple",
    "GET /api/health",
]


def get_pipeline(request: Request) -> StudyGuidePipeline:
    """Pipeline bound to the application (overridable in tests)."""
    return request.app.state.pipeline


def _error_response(error: AppError) -> JSONResponse:
    headers = {}
    retry_after = getattr(error, "retry_after", None)
    if retry_after:
        headers["Retry-After"] = str(retry_after)
    return JSONResponse(status_code=error.status_code, content=error.to_dict(), headers=headers)


def create_app(config: Config | None = None, pipeline: StudyGuidePipeline | None = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        config: Service configuration (defaults to Config.load())
        pipeline: Pre-built pipeline; one is created from config if omitted

    Returns:
        Configured FastAPI app
    """
    config = config or Config.load()
    started = time.monotonic()

    app = FastAPI(
        title="Prism",
        description="Study guides generated from Wikipedia articles",
        version="0.1.0",
    )
    app.state.config = config
    app.state.pipeline = pipeline or StudyGuidePipeline(config)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )

    @app.middleware("http")
    async def request_context(request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or new_request_id()
        token = set_request_context(request_id)
        start = time.monotonic()
        try:
            response = await call_next(request)
            logger.info(
                "Request handled | method=%s | path=%s | status=%d | duration=%.2fs",
                request.method,
                request.url.path,
                response.status_code,
                time.monotonic() - start,
            )
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            reset_request_context(token)

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        logger.warning(
            "Request failed | path=%s | code=%s | status=%d | error=%s",
            request.url.path,
            exc.code,
            exc.status_code,
            exc.message,
        )
        return _error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        if any(err.get("type") == "json_invalid" for err in exc.errors()):
            message = INVALID_JSON_MESSAGE
        else:
            message = INVALID_BODY_MESSAGE
        logger.warning("Invalid request body | path=%s | errors=%d", request.url.path, len(exc.errors()))
        return JSONResponse(status_code=400, content={"error": message, "code": ErrorCode.INVALID_REQUEST})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        error = classify_exception(exc)
        logger.error(
            "Unhandled error | path=%s | details=%s",
            request.url.path,
            sanitize_error(exc),
            exc_info=exc,
        )
        return _error_response(error)

    @app.post("/api/summarize", response_model=SummaryResponse, response_model_by_alias=True)
    async def summarize(
        body: SummaryRequest | None = None,
        pipeline: StudyGuidePipeline = Depends(get_pipeline),
    ) -> SummaryResponse:
        body = body or SummaryRequest()
        return await pipeline.summarize_single(body.url, body.length)

    @app.post(
        "/api/summarize-multiple",
        response_model=MultiSummaryResponse,
        response_model_by_alias=True,
        response_model_exclude_none=True,
    )
    async def summarize_multiple(
        body: MultiSummaryRequest | None = None,
        pipeline: StudyGuidePipeline = Depends(get_pipeline),
    ) -> MultiSummaryResponse:
        body = body or MultiSummaryRequest()
        return await pipeline.summarize_multiple(body.urls, body.length)

    @app.get("/api/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(
            status="healthy",
            timestamp=datetime.now(timezone.utc).isoformat(),
            uptime=round(time.monotonic() - started, 3),
        )

    @app.api_route("/api/{path:path}", methods=["GET", "POST", "PUT", "PATCH", "DELETE"], include_in_schema=False)
    async def unknown_endpoint(path: str) -> JSONResponse:
        return JSONResponse(
            status_code=404,
            content={
                "error": "API endpoint not found",
                "code": "NOT_FOUND",
                "availableEndpoints": API_ENDPOINTS,
            },
        )

    setup_tracing(
        enabled=config.enable_logfire,
        service_name="prism",
        token=config.logfire_token,
        app=app,
    )

    return app
