import sys
import asyncio
import argparse
from typing import List, Optional

# --- Settings/Logging ---
from teamhub.logging.setup import setup_logging
from teamhub.config.settings import settings

setup_logging()

from loguru import logger

from teamhub.display.console import render_collection
from teamhub.extraction.pipeline import ingest_files
from teamhub.models.enums import PlayerAlignment, Variant
from teamhub.storage.base_store import StorageError
from teamhub.storage.factory import create_store
from teamhub.summarization.gemini_client import (
    create_gemini_client,
    summarize_collection,
)

from rich import print
from rich.panel import Panel


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="teamhub",
        description="Extract team records from exported FACEIT team pages.",
    )
    parser.add_argument("files", nargs="*", help="Exported team page(s) (.html)")
    parser.add_argument(
        "--variant",
        choices=[v.value for v in Variant],
        default=settings.variant,
        help="Extraction profile (default: %(default)s)",
    )
    parser.add_argument(
        "--alignment",
        choices=[a.value for a in PlayerAlignment],
        default=settings.player_alignment,
        help="How player elo/avatar are paired with nicknames",
    )
    parser.add_argument(
        "--summarize", action="store_true", help="Generate AI scouting reports"
    )
    parser.add_argument("--remove", metavar="ID", help="Remove a saved team by id")
    parser.add_argument(
        "--clear",
        action="store_true",
        help="Clear all saved teams (before ingesting any FILES given)",
    )
    parser.add_argument(
        "--list", action="store_true", help="Show saved teams without ingesting"
    )
    return parser


async def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application."""
    args = build_parser().parse_args(argv)
    store = create_store(settings)

    # --clear with files starts the new batch from an empty store
    if args.clear:
        if not await store.clear():
            return 1
        if not args.files:
            return 0

    collection = await store.load()

    if args.remove:
        if collection.get(args.remove) is None:
            logger.warning(f"No saved team with id {args.remove}")
        collection = collection.remove(args.remove)

    failures = []
    if args.files:
        collection, batch = await ingest_files(
            collection,
            args.files,
            variant=Variant(args.variant),
            alignment=PlayerAlignment(args.alignment),
        )
        failures = batch.failures
        for failure in failures:
            print(Panel(f"{failure.path}: {failure.reason}", title="Parse failure"))
        new_ids = [r.id for r in batch.records]

        if args.summarize and new_ids:
            client = create_gemini_client()
            if client:
                try:
                    collection = await summarize_collection(
                        collection, client, team_ids=new_ids
                    )
                finally:
                    await client.close()

    if not args.list or args.files or args.remove:
        if not await store.save(collection):
            logger.error("Failed to save the team collection.")

    render_collection(collection)

    if args.files and len(failures) == len(args.files):
        logger.error("No file could be extracted.")
        return 1
    return 0


def cli() -> None:
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        logger.info("Execution interrupted by user (KeyboardInterrupt).")
        sys.exit(0)
    except StorageError as e:
        logger.critical(f"Storage is not configured: {e}")
        sys.exit(1)
    except Exception as e:
        logger.exception(f"Unhandled exception in main execution: {e}")
        sys.exit(1)


if __name__ == "__main__":
    cli()
