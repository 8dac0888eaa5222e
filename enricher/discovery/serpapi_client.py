from typing import Any

import httpx

from enricher.discovery.base import BaseSearchClient
from enricher.discovery.exceptions import SearchAuthError, SearchFailure, SearchQuotaError
from enricher.discovery.models import CandidateLink


class SerpApiClient(BaseSearchClient):
    """Google organic results through SerpAPI's JSON endpoint."""

    def __init__(
        self,
        *,
        client: httpx.Client,
        api_key: str,
        base_url: str = "https://serpapi.com/search.json",
        engine: str = "google",
        timeout_seconds: float = 30.0,
    ) -> None:
        self._client = client
        self._api_key = api_key
        self._base_url = base_url
        self._engine = engine
        self._timeout = timeout_seconds

    def search(self, query: str, num_results: int) -> list[CandidateLink]:
        params: dict[str, Any] = {
            "q": query,
            "num": num_results,
            "engine": self._engine,
            "api_key": self._api_key,
        }
        try:
            response = self._client.get(self._base_url, params=params, timeout=self._timeout)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise self._status_error(exc.response) from exc
        except httpx.HTTPError as exc:
            raise SearchFailure(f"serpapi: network error: {exc}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise SearchFailure(f"serpapi: invalid JSON response: {exc}") from exc
        if not isinstance(payload, dict):
            raise SearchFailure("serpapi: response must be a JSON object")

        # Zero hits come back as an "error" message with HTTP 200.
        error = payload.get("error")
        if error and not str(error).startswith("Google hasn't returned any results"):
            raise SearchFailure(f"serpapi: {error}")

        return [
            CandidateLink(title=str(item.get("title") or ""), url=str(item["link"]))
            for item in payload.get("organic_results") or []
            if isinstance(item, dict) and item.get("link")
        ]

    @staticmethod
    def _status_error(response: httpx.Response) -> SearchFailure:
        code = response.status_code
        if code in (401, 403):
            return SearchAuthError(f"serpapi: HTTP {code}: invalid API key")
        if code == 429:
            return SearchQuotaError("serpapi: HTTP 429: quota exhausted or rate limited")
        return SearchFailure(f"serpapi: HTTP {code}: {response.text[:200]}")
