#!/usr/bin/env python3
"""
Main entry point for the ingestion package.

Run with a command, or without one to be prompted for it:
    uv run -m src.ingestion delete
    uv run -m src.ingestion rebuild
    uv run -m src.ingestion new
    uv run -m src.ingestion https://feeds.example.com/podcast.xml
    uv run -m src.ingestion
"""

import argparse
import sys
from typing import Optional

from src.db import get_firestore_client
from src.logger import setup_logging, setup_progress_logging
from src.storage import BaseStorage, CloudStorage, LocalStorage
from src.utils.errors import ConfigError
from .config import IngestConfig, load_config
from .sync_podcasts import run_command


def prompt() -> str:
    """Ask for a command or a feed URL on stdin."""
    return input("Enter Feed URL: ").strip()


def build_storage(config: IngestConfig, local_dir: Optional[str]) -> BaseStorage:
    if local_dir:
        return LocalStorage(local_dir)
    return CloudStorage(
        config.thumbnail_bucket,
        endpoint=config.storage_endpoint,
        retry_config=config.retry_config,
    )


def main(argv: Optional[list[str]] = None) -> int:
    """
    Entry point for the ingestion CLI.

    Loads config.yaml, opens the Firestore client and runs one command:
    ``delete``, ``rebuild``, ``new`` or a feed URL.

    Returns 0 on success, 1 on configuration errors or failed feeds, and 130
    when interrupted by the user.
    """
    parser = argparse.ArgumentParser(
        description="Ingest podcast RSS feeds into Firestore",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  delete    Erase the podcasts collection and stop
  rebuild   Erase, then ingest every configured feed
  new       Ingest configured feeds not stored yet
  <url>     Ingest a single feed
        """,
    )
    parser.add_argument(
        "command", nargs="?", help="delete, rebuild, new or a feed URL (prompted if omitted)"
    )
    parser.add_argument(
        "--config", default=None, help="YAML config file (default: config.yaml)"
    )
    parser.add_argument(
        "--workers", type=int, default=None, help="Feeds processed concurrently"
    )
    parser.add_argument(
        "--local-storage",
        metavar="DIR",
        default=None,
        help="Write thumbnails to DIR instead of Cloud Storage",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Detailed console output"
    )

    args = parser.parse_args(argv)

    logger = setup_logging(
        logger_name="sync_podcasts",
        log_file="logs/sync_podcasts.log",
        verbose=args.verbose,
    )
    for name in ("feeds", "thumbnails", "storage", "database"):
        setup_logging(logger_name=name, log_file="logs/sync_podcasts.log")
    setup_progress_logging()

    try:
        config = load_config(args.config)
        if args.workers is not None:
            config.workers = args.workers

        command = args.command or prompt()
        if not command:
            print("No command or feed URL given", file=sys.stderr)
            return 1

        errors = config.validate(
            require_storage=command != "delete" and not args.local_storage
        )
        if errors:
            for error in errors:
                print(f"✗ {error}", file=sys.stderr)
            return 1

        storage = None if command == "delete" else build_storage(config, args.local_storage)

        logger.info(f"Starting command {command!r}")
        with get_firestore_client(config.service_account_path) as client:
            stats = run_command(command, client, storage, config)

        logger.info(f"Operation completed: {stats}")
        if stats.get("failed", 0) > 0:
            print("Check logs/sync_podcasts.log for detailed error information")
            return 1
        return 0

    except ConfigError as e:
        print(f"✗ Configuration error: {e}", file=sys.stderr)
        logger.error(f"Configuration error: {e}")
        return 1
    except KeyboardInterrupt:
        print("\nIngestion interrupted by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
