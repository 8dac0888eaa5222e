from abc import ABC, abstractmethod

from enricher.discovery.models import CandidateLink


class BaseSearchClient(ABC):
    """Contract for provider-specific web search clients."""

    @abstractmethod
    def search(self, query: str, num_results: int) -> list[CandidateLink]:
        """Run one search query and return organic results in ranking order.

        Raises:
            SearchFailure: on auth, quota, network or response errors.
        """
