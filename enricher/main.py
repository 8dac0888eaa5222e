import argparse
import signal
import sys
import threading
from collections.abc import Callable

import httpx
import psycopg

from enricher.config.settings import ConfigurationError, Settings, require_credentials
from enricher.database.connection import close_pool, get_connection, init_pool
from enricher.database.repositories.document_repository import PostgresDocumentStore
from enricher.database.schema import create_schema
from enricher.ingestion.crawler import build_crawler
from enricher.ingestion.exceptions import IngestionError
from enricher.logging.logger import Log
from enricher.store.base import BaseDocumentStore
from enricher.store.exceptions import StoreError
from enricher.worker.format_worker import build_format_worker
from enricher.worker.summary import RunSummary, log_summary
from enricher.worker.worker import build_enrichment_worker

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CANCELLED = 130

Command = Callable[[Settings, BaseDocumentStore, httpx.Client, threading.Event], RunSummary]


def _enrich(
    settings: Settings,
    store: BaseDocumentStore,
    http_client: httpx.Client,
    cancel: threading.Event,
) -> RunSummary:
    return build_enrichment_worker(settings, store, http_client).run(cancel)


def _format(
    settings: Settings,
    store: BaseDocumentStore,
    http_client: httpx.Client,
    cancel: threading.Event,
) -> RunSummary:
    _ = http_client
    return build_format_worker(settings, store).run(cancel)


def _ingest(
    settings: Settings,
    store: BaseDocumentStore,
    http_client: httpx.Client,
    cancel: threading.Event,
) -> RunSummary:
    return build_crawler(settings, store, http_client).run(cancel)


COMMANDS: dict[str, Command] = {
    "enrich": _enrich,
    "format": _format,
    "ingest": _ingest,
}

HEADINGS = {
    "enrich": "ENHANCEMENT SUMMARY",
    "format": "FORMATTING SUMMARY",
    "ingest": "INGESTION SUMMARY",
}


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="blog-enrichment-worker")
    parser.add_argument(
        "command",
        nargs="?",
        default="enrich",
        choices=sorted(COMMANDS),
        help="enrich stored blogs (default), format original content, or ingest new posts",
    )
    return parser.parse_args(argv)


def _install_signal_handlers(cancel: threading.Event) -> None:
    def _handle(signum: int, _frame: object) -> None:
        Log.warning(f"Received signal {signum}, finishing current stage and stopping")
        cancel.set()

    signal.signal(signal.SIGINT, _handle)
    signal.signal(signal.SIGTERM, _handle)


def main(argv: list[str] | None = None) -> int:
    """Entry point: settings -> credentials check -> pool -> run command -> summary."""
    args = _parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)

    try:
        require_credentials(
            settings,
            search=args.command == "enrich",
            generation=args.command in ("enrich", "format"),
        )
    except ConfigurationError as exc:
        Log.error(str(exc))
        return EXIT_FAILURE

    cancel = threading.Event()
    _install_signal_handlers(cancel)
    init_pool(settings)
    try:
        with get_connection() as conn:
            create_schema(conn)
        store = PostgresDocumentStore()
        with httpx.Client() as http_client:
            summary = COMMANDS[args.command](settings, store, http_client, cancel)
    except IngestionError as exc:
        Log.error(str(exc))
        return EXIT_FAILURE
    except (StoreError, psycopg.Error) as exc:
        # psycopg.Error also covers the pool's PoolTimeout.
        Log.error(f"Database unavailable: {exc}")
        return EXIT_FAILURE
    finally:
        close_pool()

    log_summary(summary, heading=HEADINGS[args.command])
    return EXIT_CANCELLED if cancel.is_set() else EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
