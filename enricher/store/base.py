from abc import ABC, abstractmethod

from enricher.store.models import Document, EnrichmentUpdate


class BaseDocumentStore(ABC):
    """Contract for all document store adapters.

    Documents are keyed by their source URL. The enrichment pipeline only
    reads and updates; creation goes through ``insert_if_absent`` from the
    ingestion path.
    """

    @abstractmethod
    def find_pending(self) -> list[Document]:
        """Return the documents an enrichment pass should visit.

        Already enhanced documents are included; the processor reports them
        as skipped so repeated runs stay observable.
        """

    @abstractmethod
    def find_all(self) -> list[Document]:
        """Return every stored document in ingestion order."""

    @abstractmethod
    def get_by_key(self, url: str) -> Document | None:
        """Return the document stored under ``url`` or None."""

    @abstractmethod
    def update_enrichment(self, url: str, update: EnrichmentUpdate) -> bool:
        """Write the enrichment fields of one document.

        The write only applies while the document is not yet enhanced.

        Returns:
            True if the fields were written, False if the document had
            already been enhanced by someone else.

        Raises:
            DocumentNotFoundError: if no document is stored under ``url``.
            StoreError: on any other storage failure.
        """

    @abstractmethod
    def update_formatted_content(self, url: str, formatted_content: str) -> None:
        """Persist the cleaned restatement of the original content.

        Raises:
            DocumentNotFoundError: if no document is stored under ``url``.
        """

    @abstractmethod
    def insert_if_absent(self, document: Document) -> bool:
        """Insert a new document unless its URL is already stored.

        Returns:
            True if a row was created.
        """
