import threading

import httpx

from enricher.config.settings import Settings
from enricher.discovery.factory import DiscovererFactory
from enricher.extraction.extractor import ContentExtractor
from enricher.logging.logger import Log
from enricher.pipeline.exceptions import DocumentSkipped, EnrichmentCancelled, EnrichmentError
from enricher.pipeline.models import OutcomeReason, OutcomeStatus, RunOutcome
from enricher.pipeline.pipeline import EnrichmentContext, PipelineStep
from enricher.pipeline.steps import (
    AcquireReferencesStep,
    DiscoverStep,
    PersistEnrichmentStep,
    SkipEnhancedStep,
    SynthesizeStep,
)
from enricher.store.base import BaseDocumentStore
from enricher.store.models import Document
from enricher.synthesis.factory import GenerationClientFactory
from enricher.worker.pacing import PacingPolicy


class DocumentProcessor:
    """Runs one document through the enrichment steps.

    Pipeline: skip check -> discover -> acquire -> synthesize -> persist.
    Every failure is turned into a RunOutcome; nothing escapes to the caller.
    """

    def __init__(self, steps: list[PipelineStep]) -> None:
        self._steps = steps

    def process(
        self,
        document: Document,
        cancel: threading.Event | None = None,
    ) -> RunOutcome:
        Log.info(f"Processing '{document.title}' ({document.url})")
        context = EnrichmentContext(document=document)
        try:
            for step in self._steps:
                if cancel is not None and cancel.is_set():
                    raise EnrichmentCancelled(
                        f"Run cancelled before {step.__class__.__name__}"
                    )
                context = step.run(context)
        except DocumentSkipped as signal:
            Log.info(f"Skipped '{document.title}': {signal}")
            return self._outcome(document, OutcomeStatus.SKIPPED, str(signal), signal.reason)
        except EnrichmentError as exc:
            Log.warning(f"Failed '{document.title}': {exc}")
            return self._outcome(document, OutcomeStatus.FAILED, str(exc), exc.reason)
        except Exception as exc:
            Log.exception(f"Unexpected error while processing '{document.title}'")
            return self._outcome(
                document, OutcomeStatus.FAILED, str(exc), OutcomeReason.UNEXPECTED_ERROR
            )

        sources = context.synthesis.sources if context.synthesis is not None else []
        Log.info(f"Enhanced and saved '{document.title}'")
        return self._outcome(
            document,
            OutcomeStatus.SUCCESS,
            f"Enhanced with {len(sources)} sources",
            OutcomeReason.ENRICHED,
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


def build_processor(
    settings: Settings,
    store: BaseDocumentStore,
    http_client: httpx.Client,
) -> DocumentProcessor:
    """Build a DocumentProcessor with all required adapters."""
    discoverer = DiscovererFactory.create(settings, http_client)
    extractor = ContentExtractor(http_client, timeout_seconds=settings.scrape_timeout_seconds)
    synthesizer = GenerationClientFactory.create_synthesizer(settings)
    steps: list[PipelineStep] = [
        SkipEnhancedStep(),
        DiscoverStep(discoverer),
        AcquireReferencesStep(
            extractor,
            pacing=PacingPolicy(settings.attempt_delay_seconds),
            target=settings.target_references,
        ),
        SynthesizeStep(synthesizer),
        PersistEnrichmentStep(
            store,
            enrichment_model=synthesizer.model,
            quality_score=settings.quality_score,
        ),
    ]
    return DocumentProcessor(steps)
