import httpx

from enricher.config.settings import Settings
from enricher.discovery.base import BaseSearchClient
from enricher.discovery.discoverer import Discoverer
from enricher.discovery.serpapi_client import SerpApiClient


class DiscovererFactory:
    """Creates the configured search client wrapped in a Discoverer."""

    @classmethod
    def create(cls, settings: Settings, http_client: httpx.Client) -> Discoverer:
        """Create a Discoverer from application settings."""
        return Discoverer(
            client=cls._create_client(settings, http_client),
            max_results=settings.search_result_count,
        )

    @classmethod
    def _create_client(cls, settings: Settings, http_client: httpx.Client) -> BaseSearchClient:
        provider = settings.search_provider.lower()
        if provider == "serpapi":
            return SerpApiClient(
                client=http_client,
                api_key=settings.serp_api_key,
                base_url=settings.serp_api_url,
                engine=settings.serp_api_engine,
                timeout_seconds=settings.search_timeout_seconds,
            )
        raise ValueError(f"Unknown search provider '{provider}'. Choose from: ['serpapi']")
