#!/usr/bin/env python3
"""Prism: Wikipedia study guide generator.

Turns one or more Wikipedia articles into a structured study guide
(learning objectives, key terms, applications, review questions) using
OpenRouter models, with a heuristic fallback when no model is available.

Commands:
    serve       Run the HTTP API
    summarize   Generate a study guide from the command line
    status      Show configuration

Examples:
    python main.py serve                              # http://127.0.0.1:3000
    python main.py serve --port 8000
    python main.py summarize --url https://en.wikipedia.org/wiki/Cat
    python main.py summarize --url .../wiki/Cat --url .../wiki/Dog --length medium
    python main.py status

Environment:
    OPENROUTER_API_KEY: Enables model summaries (optional)
    See config.py for all configuration options
"""

import argparse
import asyncio
import json
import logging
import sys

from config import Config
from errors import AppError, classify_exception
from observability.logging import new_request_id, reset_request_context, set_request_context, setup_logging
from observability.tracing import setup_tracing


def cmd_serve(args: argparse.Namespace, config: Config) -> int:
    """Run the HTTP API with uvicorn.

    Args:
        args: Parsed command line arguments
        config: Application configuration

    Returns:
        Exit code (0 for success)
    """
    import uvicorn

    from server import create_app

    if args.host:
        config.host = args.host
    if args.port:
        config.port = args.port

    logger = logging.getLogger(__name__)
    logger.info("Starting server | host=%s | port=%d | llm=%s", config.host, config.port, config.llm_enabled)

    app = create_app(config)
    uvicorn.run(app, host=config.host, port=config.port, log_config=None)
    return 0


def cmd_summarize(args: argparse.Namespace, config: Config) -> int:
    """Generate a study guide and print the response as JSON.

    One --url produces a single-article guide; several produce a combined
    guide with analytics.

    Returns:
        Exit code (0 for success)
    """
    from pipeline import StudyGuidePipeline

    logger = logging.getLogger(__name__)
    setup_tracing(enabled=config.enable_logfire, service_name="prism", token=config.logfire_token)
    token = set_request_context(new_request_id())

    async def run():
        pipeline = StudyGuidePipeline(config)
        if len(args.url) == 1:
            return await pipeline.summarize_single(args.url[0], args.length)
        return await pipeline.summarize_multiple(args.url, args.length)

    try:
        response = asyncio.run(run())
    except KeyboardInterrupt:
        logger.info("Stopped by user (Ctrl+C)")
        return 130
    except Exception as e:
        error = classify_exception(e)
        if not isinstance(e, AppError):
            logger.error("Summarize failed | error=%s type=%s", error.message, type(e).__name__, exc_info=True)
        print(json.dumps(error.to_dict(), indent=2), file=sys.stderr)
        return 1
    finally:
        reset_request_context(token)

    print(json.dumps(response.model_dump(by_alias=True, exclude_none=True), indent=2, ensure_ascii=False))
    return 0


def cmd_status(args: argparse.Namespace, config: Config) -> int:
    """Display configuration (secrets are reported as set/unset only)."""
    status = {
        "llm": {
            "enabled": config.llm_enabled,
            "api_key": "set" if config.openrouter_api_key else "unset",
            "base_url": config.openrouter_base_url,
            "models": config.summary_models,
        },
        "server": {
            "host": config.host,
            "port": config.port,
            "max_urls": config.max_urls,
        },
        "wikipedia": {
            "timeout": config.wikipedia_timeout,
            "max_retries": config.max_retries,
            "max_workers": config.max_workers,
        },
        "logging": {
            "dir": str(config.log_dir),
            "level": config.log_level,
            "format": config.log_format,
            "enable_logfire": config.enable_logfire,
        },
    }

    print(json.dumps(status, indent=2))
    return 0


def main() -> int:
    """Main entry point.

    Returns:
        Exit code
    """
    parser = argparse.ArgumentParser(
        description="Prism: Wikipedia study guide generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument(
        "--host",
        help="Bind address (default: config HOST)",
    )
    serve_parser.add_argument(
        "--port",
        type=int,
        help="Listen port (default: config PORT)",
    )

    # summarize command
    summarize_parser = subparsers.add_parser("summarize", help="Generate a study guide")
    summarize_parser.add_argument(
        "--url",
        action="append",
        required=True,
        help="Wikipedia article URL (repeat for a combined guide)",
    )
    summarize_parser.add_argument(
        "--length",
        choices=["short", "medium", "long"],
        default="short",
        help="Study guide length (default: short)",
    )

    # status command
    subparsers.add_parser("status", help="Show configuration")

    args = parser.parse_args()

    # Load configuration
    config = Config.load()

    # Setup logging
    setup_logging(config, verbose=args.verbose)

    if args.command in ("serve", "summarize"):
        error = config.validate()
        if error:
            print(f"Configuration error: {error}", file=sys.stderr)
            return 1

    # Route to command handler
    commands = {
        "serve": cmd_serve,
        "summarize": cmd_summarize,
        "status": cmd_status,
    }

    if args.command in commands:
        return commands[args.command](args, config)

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
