from enricher.discovery.base import BaseSearchClient
from enricher.discovery.models import CandidateLink
from enricher.logging.logger import Log


class Discoverer:
    """Finds competing articles for a topic via one search call."""

    def __init__(self, client: BaseSearchClient, max_results: int = 5) -> None:
        self._client = client
        self._max_results = max_results

    def discover(self, topic: str) -> list[CandidateLink]:
        """Return up to ``max_results`` distinct candidate links in ranking order.

        Raises:
            SearchFailure: propagated from the search client.
        """
        results = self._client.search(topic, self._max_results)

        seen: set[str] = set()
        candidates: list[CandidateLink] = []
        for link in results:
            if link.url in seen:
                continue
            seen.add(link.url)
            candidates.append(link)
            if len(candidates) >= self._max_results:
                break

        Log.info(f"Found {len(candidates)} candidate links for '{topic}'")
        return candidates
