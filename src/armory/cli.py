"""Command line entrypoint: serve the API or run the updater once."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence

import uvicorn

from armory.config import Settings, get_settings
from armory.errors import ConnectivityError, IngestError
from armory.logging_config import configure_logging
from armory.repository import DocumentClient
from armory.services import ReloadService

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Return the parser for the server and updater options."""
    parser = argparse.ArgumentParser(description="Run the Armory API server")
    parser.add_argument("--host", default="127.0.0.1", help="Host interface to bind")
    parser.add_argument("--port", type=int, default=8000, help="TCP port to listen on")
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable autoreload (dev mode)",
    )
    parser.add_argument(
        "--updater",
        action="store_true",
        help="Back up the database, reload it from the data directory and exit",
    )
    return parser


def run_updater(settings: Settings, client: DocumentClient) -> bool:
    """Run the reload pipeline once against the configured databases."""

    service = ReloadService(
        client.get_database(settings.database_name),
        client.get_database(settings.backup_database_name),
        settings.data_dir,
    )
    try:
        success = service.run()
    except IngestError:
        logger.exception("updater could not start")
        return False

    if success:
        logger.info("updater has successfully backed up and updated all collections")
    else:
        logger.error(
            "updater failed to backup and/or update all collections, failed files: %s",
            ", ".join(sorted(service.file_errors)),
        )
    return success


def main(argv: Sequence[str] | None = None) -> int:
    """Serve the API, or run the updater once when ``--updater`` is given."""
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(settings.log_level, settings.logfile_path)

    if args.updater:
        with DocumentClient(settings.store_url) as client:
            try:
                client.ping(settings.database_name)
            except ConnectivityError:
                logger.exception("document store is unreachable")
                return 1
            run_updater(settings, client)
        # The outcome only changes log severity; the process always exits cleanly.
        return 0

    if args.reload:
        uvicorn.run("armory.api.app:app", host=args.host, port=args.port, reload=True)
    else:
        from armory.api.app import app

        uvicorn.run(app, host=args.host, port=args.port, reload=False)
    return 0
