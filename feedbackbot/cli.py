"""
Command-line entry point for the FeedbackBot API server.

Usage:
    python -m feedbackbot
    python -m feedbackbot --port 8080
    feedbackbot --host 127.0.0.1 --reload
"""

from __future__ import annotations

import argparse
import logging

import uvicorn

from feedbackbot.config.settings import settings
from feedbackbot.shared.logging import setup_logging

logger = logging.getLogger("feedbackbot")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="feedbackbot",
        description="Serve the review submission API",
    )
    parser.add_argument("--host", default=settings.host, help=f"Bind address (default: {settings.host})")
    parser.add_argument("--port", type=int, default=settings.port, help=f"Port (default: {settings.port})")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes (development)")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    setup_logging(settings.log_level)

    display_host = "localhost" if args.host in ("0.0.0.0", "::") else args.host
    logger.info("Server running on port %s", args.port)
    logger.info("API URL: http://%s:%s", display_host, args.port)

    uvicorn.run(
        "feedbackbot.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
