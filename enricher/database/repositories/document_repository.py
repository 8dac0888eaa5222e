from typing import Any

import psycopg
from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from enricher.database.connection import get_connection
from enricher.store.base import BaseDocumentStore
from enricher.store.exceptions import DocumentNotFoundError, StoreError
from enricher.store.models import ENHANCED_MIN_LENGTH, Document, EnrichmentUpdate

_COLUMNS = """
    url, title, author, date, excerpt, category, original_content,
    formatted_original_content, formatted_at, updated_content, sources,
    enrichment_model, enriched_at, quality_score
"""


def _row_to_document(row: dict[str, Any]) -> Document:
    return Document(
        url=row["url"],
        title=row["title"],
        original_content=row["original_content"],
        author=row["author"],
        date=row["date"],
        excerpt=row["excerpt"],
        category=row["category"],
        formatted_original_content=row["formatted_original_content"],
        formatted_at=row["formatted_at"],
        updated_content=row["updated_content"],
        sources=tuple(row["sources"] or ()),
        enrichment_model=row["enrichment_model"],
        enriched_at=row["enriched_at"],
        quality_score=row["quality_score"],
    )


class PostgresDocumentStore(BaseDocumentStore):
    """Database operations for the blogs table."""

    def find_pending(self) -> list[Document]:
        return self.find_all()

    def find_all(self) -> list[Document]:
        """Return every blog ordered by ingestion time."""
        try:
            with get_connection() as conn:
                with conn.cursor(row_factory=dict_row) as cur:
                    cur.execute(f"SELECT {_COLUMNS} FROM blogs ORDER BY created_at, id")
                    rows = cur.fetchall()
        except psycopg.Error as exc:
            raise StoreError(f"Failed to load blogs: {exc}") from exc
        return [_row_to_document(row) for row in rows]

    def get_by_key(self, url: str) -> Document | None:
        try:
            with get_connection() as conn:
                with conn.cursor(row_factory=dict_row) as cur:
                    cur.execute(f"SELECT {_COLUMNS} FROM blogs WHERE url = %s", (url,))
                    row = cur.fetchone()
        except psycopg.Error as exc:
            raise StoreError(f"Failed to load blog {url}: {exc}") from exc
        return _row_to_document(row) if row is not None else None

    def update_enrichment(self, url: str, update: EnrichmentUpdate) -> bool:
        """Persist enrichment fields unless another run already enhanced the blog.

        The enhanced-check lives in the WHERE clause so two overlapping runs
        cannot both write.

        Raises:
            DocumentNotFoundError: if no blog with this URL exists.
            StoreError: on database failure.
        """
        try:
            with get_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(
                        """
                        UPDATE blogs
                        SET updated_content = %s,
                            sources = %s,
                            enrichment_model = %s,
                            enriched_at = %s,
                            quality_score = %s,
                            updated_at = NOW()
                        WHERE url = %s
                          AND (updated_content IS NULL
                               OR char_length(updated_content) <= %s)
                        """,
                        (
                            update.updated_content,
                            Jsonb(list(update.sources)),
                            update.enrichment_model,
                            update.enriched_at,
                            update.quality_score,
                            url,
                            ENHANCED_MIN_LENGTH,
                        ),
                    )
                    applied = cur.rowcount > 0
                    if not applied:
                        cur.execute("SELECT 1 FROM blogs WHERE url = %s", (url,))
                        exists = cur.fetchone() is not None
                conn.commit()
        except psycopg.Error as exc:
            raise StoreError(f"Failed to update blog {url}: {exc}") from exc

        if not applied and not exists:
            raise DocumentNotFoundError(f"Document {url} not found")
        return applied

    def update_formatted_content(self, url: str, formatted_content: str) -> None:
        """Persist formatted original content.

        Raises:
            DocumentNotFoundError: if no blog with this URL exists.
        """
        try:
            with get_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(
                        """
                        UPDATE blogs
                        SET formatted_original_content = %s,
                            formatted_at = NOW(),
                            updated_at = NOW()
                        WHERE url = %s
                        """,
                        (formatted_content, url),
                    )
                    if cur.rowcount == 0:
                        raise DocumentNotFoundError(f"Document {url} not found")
                conn.commit()
        except psycopg.Error as exc:
            raise StoreError(f"Failed to update blog {url}: {exc}") from exc

    def insert_if_absent(self, document: Document) -> bool:
        try:
            with get_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(
                        """
                        INSERT INTO blogs
                        (url, title, author, date, excerpt, category, original_content)
                        VALUES (%s, %s, %s, %s, %s, %s, %s)
                        ON CONFLICT (url) DO NOTHING
                        """,
                        (
                            document.url,
                            document.title,
                            document.author,
                            document.date,
                            document.excerpt,
                            document.category,
                            document.original_content,
                        ),
                    )
                    created = cur.rowcount > 0
                conn.commit()
        except psycopg.Error as exc:
            raise StoreError(f"Failed to insert blog {document.url}: {exc}") from exc
        return created
