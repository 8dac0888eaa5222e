import threading

from enricher.config.settings import Settings
from enricher.logging.logger import Log
from enricher.pipeline.models import OutcomeReason, OutcomeStatus, RunOutcome
from enricher.store.base import BaseDocumentStore
from enricher.store.exceptions import StoreError
from enricher.store.models import Document
from enricher.synthesis.factory import GenerationClientFactory
from enricher.synthesis.formatter import ContentFormatter
from enricher.worker.pacing import PacingPolicy
from enricher.worker.summary import RunSummary


class FormatWorker:
    """Fills formatted_original_content for every document that lacks it."""

    def __init__(
        self,
        store: BaseDocumentStore,
        formatter: ContentFormatter,
        pacing: PacingPolicy,
    ) -> None:
        self._store = store
        self._formatter = formatter
        self._pacing = pacing

    def run(self, cancel: threading.Event | None = None) -> RunSummary:
        documents = self._store.find_all()
        Log.info(f"Found {len(documents)} blogs to format")
        outcomes: list[RunOutcome] = []
        for index, document in enumerate(documents):
            if cancel is not None and cancel.is_set():
                Log.warning("Formatting cancelled")
                break
            outcome = self._format(document)
            outcomes.append(outcome)
            is_last = index == len(documents) - 1
            if outcome.status is not OutcomeStatus.SKIPPED and not is_last:
                self._pacing.wait()
        return RunSummary(outcomes)

    def _format(self, document: Document) -> RunOutcome:
        if document.formatted_original_content:
            return self._outcome(
                document, OutcomeStatus.SKIPPED, "Already formatted", OutcomeReason.ALREADY_FORMATTED
            )

        result = self._formatter.format(document.title, document.original_content)
        if not result.ok:
            return self._outcome(
                document, OutcomeStatus.FAILED, "LLM formatting failed", OutcomeReason.SYNTHESIS_FAILED
            )

        try:
            self._store.update_formatted_content(document.url, result.formatted_content)
        except StoreError as exc:
            Log.error(f"Failed to save formatted content for '{document.title}': {exc}")
            return self._outcome(
                document, OutcomeStatus.FAILED, str(exc), OutcomeReason.PERSISTENCE_FAILED
            )

        Log.info(f"Formatted '{document.title}' ({len(result.formatted_content)} chars)")
        return self._outcome(
            document, OutcomeStatus.SUCCESS, "Successfully formatted", OutcomeReason.FORMATTED
        )

    @staticmethod
    def _outcome(
        document: Document,
        status: OutcomeStatus,
        message: str,
        reason: OutcomeReason,
    ) -> RunOutcome:
        return RunOutcome(
            document_id=document.url,
            title=document.title,
            status=status,
            message=message,
            reason=reason,
        )


def build_format_worker(settings: Settings, store: BaseDocumentStore) -> FormatWorker:
    return FormatWorker(
        store=store,
        formatter=GenerationClientFactory.create_formatter(settings),
        pacing=PacingPolicy(settings.format_delay_seconds),
    )
