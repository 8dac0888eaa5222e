from dataclasses import dataclass
from enum import Enum


class OutcomeStatus(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"
    SKIPPED = "skipped"


class OutcomeReason(str, Enum):
    """Which branch of a pass decided a document's outcome."""

    ENRICHED = "enriched"
    ALREADY_ENHANCED = "already_enhanced"
    SEARCH_FAILED = "search_failed"
    NO_CANDIDATES = "no_candidates"
    EXTRACTION_FAILED = "extraction_failed"
    SYNTHESIS_FAILED = "synthesis_failed"
    PERSISTENCE_FAILED = "persistence_failed"
    CANCELLED = "cancelled"
    UNEXPECTED_ERROR = "unexpected_error"
    FORMATTED = "formatted"
    ALREADY_FORMATTED = "already_formatted"
    INGESTED = "ingested"
    ALREADY_INGESTED = "already_ingested"


@dataclass(frozen=True)
class RunOutcome:
    """Result of one document in one pass. Reported to operators, never stored."""

    document_id: str
    title: str
    status: OutcomeStatus
    message: str
    reason: OutcomeReason
