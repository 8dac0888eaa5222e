from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from enricher.discovery.models import CandidateLink
from enricher.store.models import Document
from enricher.synthesis.models import ReferenceDocument, SynthesisResult


@dataclass(slots=True)
class EnrichmentContext:
    document: Document
    candidates: list[CandidateLink] = field(default_factory=list)
    attempted_urls: list[str] = field(default_factory=list)
    references: list[ReferenceDocument] = field(default_factory=list)
    synthesis: SynthesisResult | None = None


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: EnrichmentContext) -> EnrichmentContext:
        raise NotImplementedError
