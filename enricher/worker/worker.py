import threading
from concurrent.futures import ThreadPoolExecutor

import httpx

from enricher.config.settings import Settings
from enricher.logging.logger import Log
from enricher.pipeline.models import OutcomeStatus, RunOutcome
from enricher.pipeline.processor import DocumentProcessor, build_processor
from enricher.store.base import BaseDocumentStore
from enricher.store.models import Document
from enricher.worker.locks import KeyedLock
from enricher.worker.pacing import PacingPolicy
from enricher.worker.summary import RunSummary


class EnrichmentWorker:
    """One pass over the pending documents: load -> process each -> summarize.

    With ``max_workers=1`` documents are handled strictly one after another.
    A larger value processes different documents in parallel threads; each
    document still runs its stages in order, so at most ``max_workers``
    external requests are in flight.
    """

    def __init__(
        self,
        store: BaseDocumentStore,
        processor: DocumentProcessor,
        pacing: PacingPolicy,
        max_workers: int = 1,
        locks: KeyedLock | None = None,
    ) -> None:
        self._store = store
        self._processor = processor
        self._pacing = pacing
        self._max_workers = max_workers
        self._locks = locks if locks is not None else KeyedLock()

    def run(self, cancel: threading.Event | None = None) -> RunSummary:
        """Process every pending document once.

        Once ``cancel`` is set no further document is started; a document
        already in flight stops after its current stage.
        """
        cancel = cancel if cancel is not None else threading.Event()
        documents = self._store.find_pending()
        Log.info(f"Found {len(documents)} blogs to process")

        if self._max_workers > 1:
            outcomes = self._run_concurrent(documents, cancel)
        else:
            outcomes = self._run_sequential(documents, cancel)

        not_started = len(documents) - len(outcomes)
        if not_started:
            Log.warning(f"Run cancelled, {not_started} blogs were not started")
        return RunSummary(outcomes)

    def _run_sequential(
        self,
        documents: list[Document],
        cancel: threading.Event,
    ) -> list[RunOutcome]:
        outcomes: list[RunOutcome] = []
        for index, document in enumerate(documents):
            if cancel.is_set():
                break
            outcome = self._process(document, cancel)
            outcomes.append(outcome)
            is_last = index == len(documents) - 1
            if outcome.status is not OutcomeStatus.SKIPPED and not is_last:
                self._pacing.wait()
        return outcomes

    def _run_concurrent(
        self,
        documents: list[Document],
        cancel: threading.Event,
    ) -> list[RunOutcome]:
        with ThreadPoolExecutor(
            max_workers=self._max_workers,
            thread_name_prefix="enrich",
        ) as executor:
            futures = [
                executor.submit(self._process_paced, document, cancel)
                for document in documents
            ]
            results = [future.result() for future in futures]
        return [outcome for outcome in results if outcome is not None]

    def _process_paced(
        self,
        document: Document,
        cancel: threading.Event,
    ) -> RunOutcome | None:
        if cancel.is_set():
            return None
        outcome = self._process(document, cancel)
        if outcome.status is not OutcomeStatus.SKIPPED:
            self._pacing.wait()
        return outcome

    def _process(self, document: Document, cancel: threading.Event) -> RunOutcome:
        with self._locks.hold(document.url):
            return self._processor.process(document, cancel)


def build_enrichment_worker(
    settings: Settings,
    store: BaseDocumentStore,
    http_client: httpx.Client,
) -> EnrichmentWorker:
    """Build an EnrichmentWorker wired from settings."""
    return EnrichmentWorker(
        store=store,
        processor=build_processor(settings, store, http_client),
        pacing=PacingPolicy(settings.item_delay_seconds),
        max_workers=settings.max_workers,
    )
