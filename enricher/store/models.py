from dataclasses import dataclass
from datetime import datetime

ENHANCED_MIN_LENGTH = 200


def is_enhanced_content(updated_content: str | None) -> bool:
    """Return True when content is long enough to count as a finished enrichment.

    Anything of 200 characters or fewer is treated as a truncated fill and
    re-attempted.
    """
    return updated_content is not None and len(updated_content) > ENHANCED_MIN_LENGTH


@dataclass(frozen=True)
class Document:
    """A stored blog post, keyed by its source URL."""

    url: str
    title: str
    original_content: str
    author: str = "Unknown"
    date: str = ""
    excerpt: str = ""
    category: str = "Uncategorized"
    formatted_original_content: str | None = None
    formatted_at: datetime | None = None
    updated_content: str | None = None
    sources: tuple[str, ...] = ()
    enrichment_model: str | None = None
    enriched_at: datetime | None = None
    quality_score: int = 0

    @property
    def is_enhanced(self) -> bool:
        return is_enhanced_content(self.updated_content)


@dataclass(frozen=True)
class EnrichmentUpdate:
    """The exact set of fields an enrichment pass writes back."""

    updated_content: str
    sources: list[str]
    enrichment_model: str
    enriched_at: datetime
    quality_score: int = 0

    def __post_init__(self) -> None:
        if not self.updated_content:
            raise ValueError("updated_content must be non-empty")
        if not self.sources:
            raise ValueError("sources must be non-empty when updated_content is set")
        if not 0 <= self.quality_score <= 100:
            raise ValueError(f"quality_score must be within 0..100, got {self.quality_score}")
