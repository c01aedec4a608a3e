# ABOUTME: CLI entry point for Ukraine Pulse.
# ABOUTME: Provides subcommands: serve, summaries, focus.

import argparse
import asyncio
import json
import logging
import sys

import structlog

from ukraine_pulse.ai.errors import NotConfigured
from ukraine_pulse.ai.service import build_news_service
from ukraine_pulse.config import Settings, get_settings
from ukraine_pulse.models import Leaning

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_NOT_CONFIGURED = 2


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structlog for console or JSON output."""
    settings = settings or get_settings()

    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    if settings.log_format == "json":
        structlog.configure(
            processors=[
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.add_log_level,
                structlog.processors.JSONRenderer(),
            ],
            wrapper_class=structlog.make_filtering_bound_logger(log_level),
        )
    else:
        structlog.configure(
            processors=[
                structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
                structlog.processors.add_log_level,
                structlog.dev.ConsoleRenderer(colors=True),
            ],
            wrapper_class=structlog.make_filtering_bound_logger(log_level),
        )


def cmd_serve(args: argparse.Namespace) -> int:
    """Run the web frontend with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "ukraine_pulse.web.app:app",
        host=args.host or settings.host,
        port=args.port or settings.port,
        reload=args.reload,
    )
    return EXIT_OK


def cmd_summaries(args: argparse.Namespace) -> int:
    """Fetch all topic summaries and print them as JSON."""
    log = structlog.get_logger()
    service = build_news_service(get_settings())
    if isinstance(service, NotConfigured):
        log.error("not_configured", message=service.message)
        print(f"\n{service.message}\n", file=sys.stderr)
        return EXIT_NOT_CONFIGURED

    topics = args.topic or None
    result = asyncio.run(service.fetch_all_summaries(topics))
    print(json.dumps(result.model_dump(mode="json", by_alias=True), indent=2))

    if result.error:
        log.error("cmd_summaries_failed", error=result.error)
        return EXIT_FAILED
    log.info("cmd_summaries_complete", count=len(result.summaries))
    return EXIT_OK


def cmd_focus(args: argparse.Namespace) -> int:
    """Fetch and print the focus summary for one leaning."""
    log = structlog.get_logger()
    service = build_news_service(get_settings())
    if isinstance(service, NotConfigured):
        log.error("not_configured", message=service.message)
        print(f"\n{service.message}\n", file=sys.stderr)
        return EXIT_NOT_CONFIGURED

    leaning = Leaning(args.leaning)
    try:
        summary = asyncio.run(service.fetch_focus_summary(leaning))
    except Exception as e:
        log.error("cmd_focus_failed", leaning=leaning.value, error=str(e))
        return EXIT_FAILED

    print(f"\nFocus of {leaning.label} Media\n")
    print(summary)
    return EXIT_OK


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="ukraine_pulse",
        description="Ukraine Pulse - AI-generated news summaries about the war in Ukraine",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # serve command
    serve_parser = subparsers.add_parser("serve", help="Run the web frontend")
    serve_parser.add_argument("--host", type=str, help="Bind address (default from settings)")
    serve_parser.add_argument("--port", type=int, help="Port (default from settings)")
    serve_parser.add_argument("--reload", action="store_true", help="Reload on code changes")

    # summaries command
    summaries_parser = subparsers.add_parser(
        "summaries",
        help="Fetch all topic summaries and print JSON",
    )
    summaries_parser.add_argument(
        "--topic",
        action="append",
        help="Topic to summarize (repeatable). Defaults to the configured topics.",
    )

    # focus command
    focus_parser = subparsers.add_parser("focus", help="Summarize one media group's focus")
    focus_parser.add_argument(
        "leaning",
        choices=[leaning.value for leaning in Leaning],
        help="Media leaning to analyze",
    )

    return parser


def main() -> int:
    """Main entry point."""
    configure_logging()

    parser = create_parser()
    args = parser.parse_args()

    commands = {
        "serve": cmd_serve,
        "summaries": cmd_summaries,
        "focus": cmd_focus,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)

    parser.print_help()
    return EXIT_FAILED


if __name__ == "__main__":
    sys.exit(main())
