from collections.abc import Callable
from datetime import UTC, datetime

from enricher.discovery.discoverer import Discoverer
from enricher.discovery.exceptions import SearchFailure
from enricher.extraction.extractor import ContentExtractor
from enricher.logging.logger import Log
from enricher.pipeline.exceptions import (
    DiscoveryFailure,
    DocumentSkipped,
    ExtractionFailure,
    NoCandidatesError,
    PersistenceFailure,
    SynthesisFailure,
)
from enricher.pipeline.pipeline import EnrichmentContext, PipelineStep
from enricher.store.base import BaseDocumentStore
from enricher.store.exceptions import StoreError
from enricher.store.models import EnrichmentUpdate
from enricher.synthesis.models import ReferenceDocument
from enricher.synthesis.synthesizer import Synthesizer
from enricher.worker.pacing import PacingPolicy


class SkipEnhancedStep(PipelineStep):
    def run(self, context: EnrichmentContext) -> EnrichmentContext:
        if context.document.is_enhanced:
            raise DocumentSkipped("Already has updated content")
        return context


class DiscoverStep(PipelineStep):
    def __init__(self, discoverer: Discoverer) -> None:
        self._discoverer = discoverer

    def run(self, context: EnrichmentContext) -> EnrichmentContext:
        try:
            context.candidates = self._discoverer.discover(context.document.title)
        except SearchFailure as exc:
            raise DiscoveryFailure(f"Search failed: {exc}") from exc
        if not context.candidates:
            raise NoCandidatesError("No related articles found")
        return context


class AcquireReferencesStep(PipelineStep):
    """Extract candidates in ranking order until enough references succeed."""

    def __init__(
        self,
        extractor: ContentExtractor,
        pacing: PacingPolicy,
        target: int = 2,
    ) -> None:
        self._extractor = extractor
        self._pacing = pacing
        self._target = target

    def run(self, context: EnrichmentContext) -> EnrichmentContext:
        for candidate in context.candidates:
            if len(context.references) >= self._target:
                break
            if context.attempted_urls:
                self._pacing.wait()

            context.attempted_urls.append(candidate.url)
            content = self._extractor.extract(candidate.url)
            if not content.ok:
                Log.info(f"  Could not extract {candidate.url}")
                continue

            context.references.append(
                ReferenceDocument(
                    url=candidate.url,
                    title=content.title or candidate.title,
                    content=content.text,
                )
            )
            Log.info(
                f"  Extracted {candidate.url} ({len(context.references)}/{self._target})"
            )

        if not context.references:
            raise ExtractionFailure(
                f"Failed to extract any of {len(context.attempted_urls)} reference articles"
            )
        return context


class SynthesizeStep(PipelineStep):
    def __init__(self, synthesizer: Synthesizer) -> None:
        self._synthesizer = synthesizer

    def run(self, context: EnrichmentContext) -> EnrichmentContext:
        result = self._synthesizer.synthesize(
            context.document.title,
            context.document.original_content,
            context.references,
        )
        if not result.ok:
            raise SynthesisFailure("LLM enhancement failed")
        context.synthesis = result
        return context


class PersistEnrichmentStep(PipelineStep):
    def __init__(
        self,
        store: BaseDocumentStore,
        *,
        enrichment_model: str,
        quality_score: int,
        clock: Callable[[], datetime] = lambda: datetime.now(UTC),
    ) -> None:
        self._store = store
        self._enrichment_model = enrichment_model
        self._quality_score = quality_score
        self._clock = clock

    def run(self, context: EnrichmentContext) -> EnrichmentContext:
        if context.synthesis is None:
            raise ValueError("EnrichmentContext.synthesis must be set before persist")
        update = EnrichmentUpdate(
            updated_content=context.synthesis.updated_content,
            sources=list(context.synthesis.sources),
            enrichment_model=self._enrichment_model,
            enriched_at=self._clock(),
            quality_score=self._quality_score,
        )
        try:
            applied = self._store.update_enrichment(context.document.url, update)
        except StoreError as exc:
            Log.debug(
                f"Unsaved content for {context.document.url}:\n{update.updated_content}"
            )
            raise PersistenceFailure(f"Failed to save enhanced content: {exc}") from exc
        if not applied:
            raise DocumentSkipped("Enhanced concurrently by another run")
        return context
