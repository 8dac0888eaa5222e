import threading
from dataclasses import replace
from datetime import UTC, datetime

from enricher.store.base import BaseDocumentStore
from enricher.store.exceptions import DocumentNotFoundError
from enricher.store.models import Document, EnrichmentUpdate


class InMemoryDocumentStore(BaseDocumentStore):
    """Dict-backed store for local runs and tests. Thread-safe."""

    def __init__(self, documents: list[Document] | None = None) -> None:
        self._documents: dict[str, Document] = {}
        self._lock = threading.Lock()
        for document in documents or []:
            self.insert_if_absent(document)

    def find_pending(self) -> list[Document]:
        return self.find_all()

    def find_all(self) -> list[Document]:
        with self._lock:
            return list(self._documents.values())

    def get_by_key(self, url: str) -> Document | None:
        with self._lock:
            return self._documents.get(url)

    def update_enrichment(self, url: str, update: EnrichmentUpdate) -> bool:
        with self._lock:
            current = self._require(url)
            if current.is_enhanced:
                return False
            self._documents[url] = replace(
                current,
                updated_content=update.updated_content,
                sources=tuple(update.sources),
                enrichment_model=update.enrichment_model,
                enriched_at=update.enriched_at,
                quality_score=update.quality_score,
            )
            return True

    def update_formatted_content(self, url: str, formatted_content: str) -> None:
        with self._lock:
            current = self._require(url)
            self._documents[url] = replace(
                current,
                formatted_original_content=formatted_content,
                formatted_at=datetime.now(UTC),
            )

    def insert_if_absent(self, document: Document) -> bool:
        with self._lock:
            if document.url in self._documents:
                return False
            self._documents[document.url] = document
            return True

    def _require(self, url: str) -> Document:
        document = self._documents.get(url)
        if document is None:
            raise DocumentNotFoundError(f"Document {url} not found")
        return document
