"""
CLI entry point.

Usage:
    # Serve the HTTP API on port 3000
    python -m bookshelf serve

    # Prune book references to deleted books, then exit
    python -m bookshelf reconcile

Both commands exit with status 1 when MONGO_URL is not set.
"""

import argparse
import logging
import sys
from typing import Optional

import uvicorn

from bookshelf.core.config import LISTEN_PORT, settings
from bookshelf.shared.logging import configure_logging

logger = logging.getLogger(__name__)


def _require_connection_string() -> None:
    if not settings.mongo_url:
        logger.error("MONGO_URL is not set")
        sys.exit(1)


def cmd_serve(args: argparse.Namespace) -> None:
    """Run the API server."""
    _require_connection_string()
    uvicorn.run(
        "bookshelf.main:app",
        host=args.host,
        port=LISTEN_PORT,
        log_level=settings.log_level.lower(),
    )


def cmd_reconcile(args: argparse.Namespace) -> None:
    """Run the dangling reference repair pass once."""
    _require_connection_string()

    from bookshelf.infrastructure.library.mongo_gateway import MongoGateway
    from bookshelf.main import reconcile_book_references

    gateway = MongoGateway.connect(settings)
    try:
        pruned = reconcile_book_references(gateway)
    finally:
        gateway.close()
    logger.info("Reconciliation complete: %d user(s) updated.", pruned)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bookshelf",
        description="Users and books HTTP API backed by MongoDB",
    )
    sub = parser.add_subparsers(dest="command")

    serve = sub.add_parser("serve", help="Serve the HTTP API")
    serve.add_argument("--host", default=settings.host, help="Interface to bind")
    serve.set_defaults(func=cmd_serve)

    reconcile = sub.add_parser("reconcile", help="Prune dangling book references")
    reconcile.set_defaults(func=cmd_reconcile)

    return parser


def main(argv: Optional[list[str]] = None) -> None:
    configure_logging(level=settings.log_level)
    parser = build_parser()
    args = parser.parse_args(argv)
    if not getattr(args, "func", None):
        args = parser.parse_args(["serve", *(argv or [])])
    args.func(args)


if __name__ == "__main__":
    main()
