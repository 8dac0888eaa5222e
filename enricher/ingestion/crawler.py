import threading
from typing import ClassVar
from urllib.parse import urljoin

import httpx
from bs4.exceptions import ParserRejectedMarkup

from enricher.config.settings import Settings
from enricher.extraction.extractor import ContentExtractor
from enricher.ingestion.exceptions import IngestionError
from enricher.ingestion.listing import ListingPost, oldest_posts, parse_listing
from enricher.logging.logger import Log
from enricher.pipeline.models import OutcomeReason, OutcomeStatus, RunOutcome
from enricher.store.base import BaseDocumentStore
from enricher.store.exceptions import StoreError
from enricher.store.models import Document
from enricher.worker.pacing import PacingPolicy
from enricher.worker.summary import RunSummary


class BlogCrawler:
    """Seeds the store with the oldest posts of a blog listing page.

    Each post's body goes through the same ContentExtractor used for
    reference articles.
    """

    LISTING_HEADERS: ClassVar[dict[str, str]] = ContentExtractor.DEFAULT_HEADERS

    def __init__(
        self,
        *,
        http_client: httpx.Client,
        extractor: ContentExtractor,
        store: BaseDocumentStore,
        listing_url: str,
        post_count: int,
        pacing: PacingPolicy,
        timeout_seconds: float = 15.0,
    ) -> None:
        self._http_client = http_client
        self._extractor = extractor
        self._store = store
        self._listing_url = listing_url
        self._post_count = post_count
        self._pacing = pacing
        self._timeout = timeout_seconds

    def run(self, cancel: threading.Event | None = None) -> RunSummary:
        """Crawl the listing page and insert posts not stored yet.

        Raises:
            IngestionError: if the listing page cannot be fetched or parsed.
        """
        html = self._fetch_listing()
        try:
            listing = parse_listing(html)
        except ParserRejectedMarkup as exc:
            raise IngestionError(f"Failed to parse listing page {self._listing_url}: {exc}") from exc
        posts = oldest_posts(listing, self._post_count)
        Log.info(f"Selected {len(posts)} oldest posts from {self._listing_url}")

        outcomes: list[RunOutcome] = []
        for index, post in enumerate(posts):
            if cancel is not None and cancel.is_set():
                Log.warning("Ingestion cancelled")
                break
            outcome = self._ingest(post)
            outcomes.append(outcome)
            is_last = index == len(posts) - 1
            if outcome.status is not OutcomeStatus.SKIPPED and not is_last:
                self._pacing.wait()
        return RunSummary(outcomes)

    def _fetch_listing(self) -> str:
        try:
            response = self._http_client.get(
                self._listing_url,
                headers=self.LISTING_HEADERS,
                timeout=self._timeout,
                follow_redirects=True,
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise IngestionError(
                f"Failed to fetch listing page {self._listing_url}: {exc}"
            ) from exc
        return response.text

    def _ingest(self, post: ListingPost) -> RunOutcome:
        url = urljoin(self._listing_url, post.url)
        if self._store.get_by_key(url) is not None:
            return self._outcome(
                post, url, OutcomeStatus.SKIPPED, "Already exists", OutcomeReason.ALREADY_INGESTED
            )

        content = self._extractor.extract(url)
        if not content.ok:
            return self._outcome(
                post,
                url,
                OutcomeStatus.FAILED,
                "Content could not be extracted",
                OutcomeReason.EXTRACTION_FAILED,
            )

        document = Document(
            url=url,
            title=post.title,
            original_content=content.text,
            author=post.author,
            date=post.date,
            excerpt=post.excerpt,
            category=post.category,
        )
        try:
            created = self._store.insert_if_absent(document)
        except StoreError as exc:
            Log.error(f"Failed to save '{post.title}': {exc}")
            return self._outcome(
                post, url, OutcomeStatus.FAILED, str(exc), OutcomeReason.PERSISTENCE_FAILED
            )
        if not created:
            return self._outcome(
                post, url, OutcomeStatus.SKIPPED, "Already exists", OutcomeReason.ALREADY_INGESTED
            )

        Log.info(f"Saved '{post.title}' ({len(content.text)} chars)")
        return self._outcome(post, url, OutcomeStatus.SUCCESS, "Ingested", OutcomeReason.INGESTED)

    @staticmethod
    def _outcome(
        post: ListingPost,
        url: str,
        status: OutcomeStatus,
        message: str,
        reason: OutcomeReason,
    ) -> RunOutcome:
        return RunOutcome(
            document_id=url,
            title=post.title,
            status=status,
            message=message,
            reason=reason,
        )


def build_crawler(
    settings: Settings,
    store: BaseDocumentStore,
    http_client: httpx.Client,
) -> BlogCrawler:
    return BlogCrawler(
        http_client=http_client,
        extractor=ContentExtractor(http_client, timeout_seconds=settings.scrape_timeout_seconds),
        store=store,
        listing_url=settings.seed_listing_url,
        post_count=settings.seed_post_count,
        pacing=PacingPolicy(settings.attempt_delay_seconds),
        timeout_seconds=settings.scrape_timeout_seconds,
    )
