from dataclasses import dataclass


@dataclass(frozen=True)
class CandidateLink:
    """A search result considered as a reference source."""

    title: str
    url: str
