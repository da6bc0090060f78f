from __future__ import annotations

import argparse
import logging
import os
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from oddsync.app import open_candidate_store, preview_election_odds, sync_election_odds
from oddsync.config import configure_logging

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)

DEFAULT_PORT = 8080


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Synchronise election betting odds")
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log per-candidate decisions",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("sync", help="Fetch the odds feed and store it")
    subparsers.add_parser("preview", help="Show the parsed feed next to stored candidates")
    subparsers.add_parser("init-db", help="Create the candidate table if it is missing")

    serve = subparsers.add_parser("serve", help="Run the HTTP server")
    serve.add_argument("--host", type=str, default="0.0.0.0", help="Bind host")  # noqa: S104
    serve.add_argument(
        "--port",
        type=int,
        default=int(os.getenv("PORT", str(DEFAULT_PORT))),
        help="Bind port (default: $PORT or %(default)s)",
    )

    return parser.parse_args(list(argv))


def _run_sync() -> int:
    with open_candidate_store() as store:
        result = sync_election_odds(store=store)
    for outcome in result.outcomes:
        log.info("%s %s", outcome.kind, outcome.key)
    if not result.succeeded:
        log.error("Sync aborted after %s candidates: %s", len(result.outcomes), result.error)
        return 1
    return 0


def _run_preview() -> int:
    with open_candidate_store() as store:
        preview = preview_election_odds(store=store)
    log.info("Feed time: %s", preview.feed.time)
    for key, value in preview.feed.candidates.items():
        log.info("feed %s = %s", key, value)
    for record in preview.candidates:
        log.info("stored %s = %s", record.last_name, record.win_probability)
    return 0


def _run_init_db() -> int:
    with open_candidate_store():
        log.info("Schema is ready")
    return 0


def _run_serve(host: str, port: int) -> int:
    import uvicorn  # noqa: PLC0415

    uvicorn.run("oddsync.ui.http:create_app", factory=True, host=host, port=port)
    return 0


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        if parsed_args.command == "sync":
            exit_code = _run_sync()
        elif parsed_args.command == "preview":
            exit_code = _run_preview()
        elif parsed_args.command == "init-db":
            exit_code = _run_init_db()
        elif parsed_args.command == "serve":
            exit_code = _run_serve(parsed_args.host, parsed_args.port)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except Exception:
        log.exception("Fatal error")
        sys.exit(1)

    if exit_code:
        sys.exit(exit_code)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
