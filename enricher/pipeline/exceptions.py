from enricher.pipeline.models import OutcomeReason


class DocumentSkipped(Exception):
    """Signals that a document needs no work in this pass."""

    def __init__(self, message: str, reason: OutcomeReason = OutcomeReason.ALREADY_ENHANCED) -> None:
        super().__init__(message)
        self.reason = reason


class EnrichmentError(Exception):
    """Base exception for a failed enrichment pass of one document."""

    reason: OutcomeReason = OutcomeReason.UNEXPECTED_ERROR


class DiscoveryFailure(EnrichmentError):
    """Raised when the search provider call failed."""

    reason = OutcomeReason.SEARCH_FAILED


class NoCandidatesError(EnrichmentError):
    """Raised when search succeeded but returned nothing."""

    reason = OutcomeReason.NO_CANDIDATES


class ExtractionFailure(EnrichmentError):
    """Raised when no candidate link yielded usable content."""

    reason = OutcomeReason.EXTRACTION_FAILED


class SynthesisFailure(EnrichmentError):
    """Raised when generation failed or returned unusable output."""

    reason = OutcomeReason.SYNTHESIS_FAILED


class PersistenceFailure(EnrichmentError):
    """Raised when the store rejected the enrichment write."""

    reason = OutcomeReason.PERSISTENCE_FAILED


class EnrichmentCancelled(EnrichmentError):
    """Raised between stages once the run has been cancelled."""

    reason = OutcomeReason.CANCELLED
