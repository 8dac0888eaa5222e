from typing import ClassVar

import httpx
from bs4.exceptions import ParserRejectedMarkup

from enricher.extraction.models import ExtractedContent, is_substantial
from enricher.extraction.parser import parse_html
from enricher.logging.logger import Log


class ContentExtractor:
    """Fetches a page and returns its best-effort title and main text.

    Failures are an expected outcome here: any network error or non-2xx
    response yields ``ExtractedContent(ok=False)`` instead of raising.
    """

    DEFAULT_HEADERS: ClassVar[dict[str, str]] = {
        "User-Agent": (
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
        ),
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
        "Accept-Language": "en-US,en;q=0.5",
    }

    def __init__(self, client: httpx.Client, timeout_seconds: float = 15.0) -> None:
        self._client = client
        self._timeout = timeout_seconds

    def extract(self, url: str) -> ExtractedContent:
        html = self._fetch(url)
        if html is None:
            return ExtractedContent.failed(url)

        try:
            page = parse_html(html)
        except ParserRejectedMarkup as exc:
            Log.warning(f"Failed to parse {url}: {exc}")
            return ExtractedContent.failed(url)

        content = ExtractedContent(
            url=url,
            title=page.title,
            text=page.text,
            ok=is_substantial(page.text),
        )
        Log.debug(f"Extracted {len(content.text)} chars from {url} (ok={content.ok})")
        return content

    def _fetch(self, url: str) -> str | None:
        try:
            response = self._client.get(
                url,
                headers=self.DEFAULT_HEADERS,
                timeout=self._timeout,
                follow_redirects=True,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            Log.warning(f"Failed to fetch {url}: HTTP {exc.response.status_code}")
            return None
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            Log.warning(f"Failed to fetch {url}: {exc.__class__.__name__} {exc}")
            return None
        return response.text
