#!/usr/bin/env python3
"""Main entry point for the GIF ledger command line."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import logging.config
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import ValidationError

from gif_ledger.domain.shared.exceptions import DomainError
from gif_ledger.domain.shared.messages import CliMessages, LogTemplates

if TYPE_CHECKING:
    from gif_ledger.application.queries.get_ledger import LedgerSnapshot
    from gif_ledger.config.settings import Settings

_LOGGING_CONFIG_PATH = Path(__file__).resolve().parents[2] / "logging_config.json"

DEMO_GIF_URL = "https://media.giphy.com/media/bUyNEbEglZg41CMw6y/giphy.gif"
DEMO_USER = "demo-wallet"


def setup_logging(log_level: str = "INFO") -> None:
    resolved_level = getattr(logging, log_level.upper(), logging.INFO)

    try:
        with open(_LOGGING_CONFIG_PATH) as f:
            config = json.load(f)
        logging.config.dictConfig(config)
    except (FileNotFoundError, json.JSONDecodeError, ValueError):
        logging.warning(LogTemplates.LOGGING_CONFIG_FALLBACK, _LOGGING_CONFIG_PATH)
        logging.basicConfig(
            level=resolved_level,
            format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    logging.getLogger().setLevel(resolved_level)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance.
    """
    parser = argparse.ArgumentParser(
        prog="gif-ledger",
        description="Submit GIF links and vote on them in a persistent ledger.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s init                                  # Create the default ledger
  %(prog)s add https://x/gif1 --user alice       # Submit a GIF
  %(prog)s upvote 0 --user bob                   # Up vote entry 0
  %(prog)s downvote 0 --user bob                 # Change bob's vote to down
  %(prog)s show --json                           # Print entries and tallies
  %(prog)s demo                                  # Replay the end-to-end scenario
        """,
    )

    parser.add_argument(
        "--ledger",
        "-L",
        default=None,
        help="ledger name (default: LEDGER__DEFAULT_LEDGER_ID or 'default')",
    )
    parser.add_argument(
        "--database",
        "-d",
        default=None,
        help="database URL, e.g. sqlite:///data/ledger.db (default: DATABASE__URL)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="override LOG_LEVEL for this run",
    )

    subparsers = parser.add_subparsers(dest="action", required=True)

    subparsers.add_parser("init", help="create an empty ledger")

    add = subparsers.add_parser("add", help="submit a new entry")
    add.add_argument("url", help="link to store")
    add.add_argument("--user", "-u", required=True, help="submitter identity")

    for action, help_text in (("upvote", "up vote an entry"), ("downvote", "down vote an entry")):
        vote = subparsers.add_parser(action, help=help_text)
        vote.add_argument("entry_id", type=int, help="entry number")
        vote.add_argument("--user", "-u", required=True, help="voter identity")

    show = subparsers.add_parser("show", help="print entry count and entries")
    show.add_argument("--json", action="store_true", help="print the snapshot as JSON")

    subparsers.add_parser("demo", help="run init/add/upvote/downvote on a throwaway ledger")

    return parser


def print_snapshot(snapshot: LedgerSnapshot) -> None:
    print(CliMessages.TOTAL_ENTRIES.format(total=snapshot.total_entries))
    if snapshot.is_empty:
        print(CliMessages.NO_ENTRIES)
        return
    for entry in snapshot.entries:
        print(
            CliMessages.ENTRY_LINE.format(
                entry_id=entry.id,
                url=entry.url,
                submitter=entry.submitter,
                upvotes=entry.upvotes,
                downvotes=entry.downvotes,
                score=entry.score,
            )
        )


async def run_demo() -> LedgerSnapshot:
    """Initialize, add one GIF, vote up then down, and print the ledger."""
    from gif_ledger.application.commands.processor import CommandProcessor
    from gif_ledger.application.queries.get_ledger import LedgerSnapshot

    processor = CommandProcessor("demo")

    result = await processor.initialize()
    print(CliMessages.LEDGER_INITIALIZED.format(ledger_id=result.ledger_id))
    print(CliMessages.TOTAL_ENTRIES.format(total=processor.snapshot().total_entries))

    added = await processor.add_entry(DEMO_GIF_URL, DEMO_USER)
    print(CliMessages.ENTRY_ADDED.format(entry_id=added.entry_id, url=DEMO_GIF_URL))

    for vote in (processor.up_vote, processor.down_vote):
        ack = await vote(added.entry_id, DEMO_USER)
        print(
            CliMessages.VOTE_APPLIED.format(
                entry_id=ack.entry_id,
                upvotes=ack.upvotes,
                downvotes=ack.downvotes,
                outcome=ack.message,
            )
        )

    snapshot = LedgerSnapshot.from_state(processor.snapshot())
    print_snapshot(snapshot)
    return snapshot


async def run_command(args: argparse.Namespace, settings: Settings) -> int:
    from gif_ledger.application.queries.get_ledger import GetLedgerQuery
    from gif_ledger.config.container import create_container

    container = create_container(settings)
    await container.initialize()
    try:
        processor = await container.processor(args.ledger)

        match args.action:
            case "init":
                initialized = await processor.initialize()
                print(CliMessages.LEDGER_INITIALIZED.format(ledger_id=initialized.ledger_id))
            case "add":
                added = await processor.add_entry(args.url, args.user)
                print(CliMessages.ENTRY_ADDED.format(entry_id=added.entry_id, url=args.url))
            case "upvote" | "downvote":
                vote = processor.up_vote if args.action == "upvote" else processor.down_vote
                ack = await vote(args.entry_id, args.user)
                print(
                    CliMessages.VOTE_APPLIED.format(
                        entry_id=ack.entry_id,
                        upvotes=ack.upvotes,
                        downvotes=ack.downvotes,
                        outcome=ack.message,
                    )
                )
            case "show":
                snapshot = await container.get_ledger_handler.handle(
                    GetLedgerQuery(ledger_id=processor.ledger_id)
                )
                if args.json:
                    print(snapshot.model_dump_json(indent=2))
                else:
                    print_snapshot(snapshot)
    finally:
        await container.shutdown()

    return 0


def _resolve_settings(args: argparse.Namespace) -> Settings:
    from gif_ledger.config.settings import DatabaseSettings, get_settings

    settings = get_settings()
    if args.database:
        database = DatabaseSettings(
            url=args.database,
            busy_timeout_ms=settings.database.busy_timeout_ms,
            connection_timeout_s=settings.database.connection_timeout_s,
        )
        settings = settings.model_copy(update={"database": database})
    return settings


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logger = logging.getLogger(__name__)

    try:
        settings = _resolve_settings(args)
    except ValidationError as e:
        print(CliMessages.ERROR.format(code="INVALID_CONFIG", message=e), file=sys.stderr)
        return 2

    setup_logging(args.log_level or settings.log_level)
    logger.debug(LogTemplates.APP_STARTING, settings.environment)

    try:
        if args.action == "demo":
            asyncio.run(run_demo())
            return 0
        return asyncio.run(run_command(args, settings))
    except DomainError as e:
        print(CliMessages.ERROR.format(code=e.code, message=e.message), file=sys.stderr)
        return 1
    except ValidationError as e:
        print(CliMessages.ERROR.format(code="INVALID_INPUT", message=e), file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130
    except Exception as e:
        logger.exception(LogTemplates.APP_FATAL_ERROR, e)
        return 1


def cli() -> None:
    """Console script entry point (used by pyproject.toml [project.scripts])."""
    sys.exit(main())


if __name__ == "__main__":
    cli()  # pragma: no cover
