from datetime import UTC, datetime
from unittest.mock import MagicMock, patch

import psycopg
import pytest
from psycopg.types.json import Jsonb

from enricher.database.repositories.document_repository import PostgresDocumentStore
from enricher.store.exceptions import DocumentNotFoundError, StoreError
from enricher.store.models import Document, EnrichmentUpdate

REPO = "enricher.database.repositories.document_repository.get_connection"
NOW = datetime(2026, 1, 15, 12, 0, tzinfo=UTC)


def _make_row(**overrides: object) -> dict:
    row = {
        "url": "https://blog.test/a",
        "title": "Post A",
        "author": "Jane",
        "date": "March 3, 2025",
        "excerpt": "Summary",
        "category": "AI",
        "original_content": "Original body",
        "formatted_original_content": None,
        "formatted_at": None,
        "updated_content": None,
        "sources": None,
        "enrichment_model": None,
        "enriched_at": None,
        "quality_score": 0,
    }
    row.update(overrides)
    return row


def _mock_connection(mock_get_conn: MagicMock) -> tuple[MagicMock, MagicMock]:
    """Wire up a mock connection + cursor and return (mock_conn, mock_cursor)."""
    mock_cursor = MagicMock()
    mock_conn = MagicMock()
    mock_conn.cursor.return_value.__enter__ = MagicMock(return_value=mock_cursor)
    mock_conn.cursor.return_value.__exit__ = MagicMock(return_value=False)
    mock_get_conn.return_value.__enter__ = MagicMock(return_value=mock_conn)
    mock_get_conn.return_value.__exit__ = MagicMock(return_value=False)
    return mock_conn, mock_cursor


def _update() -> EnrichmentUpdate:
    return EnrichmentUpdate(
        updated_content="e" * 300,
        sources=["https://ref1.test", "https://ref2.test"],
        enrichment_model="gpt-test",
        enriched_at=NOW,
        quality_score=85,
    )


class TestFindAll:
    @patch(REPO)
    def test_maps_rows_to_documents(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchall.return_value = [
            _make_row(),
            _make_row(url="https://blog.test/b", sources=["https://ref1.test"]),
        ]

        documents = PostgresDocumentStore().find_all()

        assert [d.url for d in documents] == ["https://blog.test/a", "https://blog.test/b"]
        assert documents[0].sources == ()
        assert documents[1].sources == ("https://ref1.test",)
        assert "ORDER BY created_at, id" in mock_cursor.execute.call_args.args[0]

    @patch(REPO)
    def test_find_pending_includes_enhanced_rows(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchall.return_value = [_make_row(updated_content="e" * 500)]

        documents = PostgresDocumentStore().find_pending()

        assert len(documents) == 1
        assert documents[0].is_enhanced

    @patch(REPO)
    def test_wraps_database_errors(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.execute.side_effect = psycopg.OperationalError("connection lost")

        with pytest.raises(StoreError, match="Failed to load blogs"):
            PostgresDocumentStore().find_all()


class TestGetByKey:
    @patch(REPO)
    def test_returns_document(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchone.return_value = _make_row()

        document = PostgresDocumentStore().get_by_key("https://blog.test/a")

        assert isinstance(document, Document)
        assert document.author == "Jane"
        assert mock_cursor.execute.call_args.args[1] == ("https://blog.test/a",)

    @patch(REPO)
    def test_returns_none_when_missing(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchone.return_value = None

        assert PostgresDocumentStore().get_by_key("https://blog.test/none") is None


class TestUpdateEnrichment:
    @patch(REPO)
    def test_applies_conditional_update(self, mock_get_conn: MagicMock) -> None:
        mock_conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.rowcount = 1

        applied = PostgresDocumentStore().update_enrichment("https://blog.test/a", _update())

        assert applied is True
        sql, params = mock_cursor.execute.call_args.args
        assert "char_length(updated_content) <= %s" in sql
        assert params[0] == "e" * 300
        assert isinstance(params[1], Jsonb)
        assert params[1].obj == ["https://ref1.test", "https://ref2.test"]
        assert params[2:] == ("gpt-test", NOW, 85, "https://blog.test/a", 200)
        mock_conn.commit.assert_called_once()

    @patch(REPO)
    def test_returns_false_when_already_enhanced(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.rowcount = 0
        mock_cursor.fetchone.return_value = (1,)

        assert PostgresDocumentStore().update_enrichment("https://blog.test/a", _update()) is False

    @patch(REPO)
    def test_raises_when_document_missing(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.rowcount = 0
        mock_cursor.fetchone.return_value = None

        with pytest.raises(DocumentNotFoundError, match="not found"):
            PostgresDocumentStore().update_enrichment("https://blog.test/none", _update())

    @patch(REPO)
    def test_wraps_database_errors(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.execute.side_effect = psycopg.OperationalError("connection lost")

        with pytest.raises(StoreError, match="Failed to update blog"):
            PostgresDocumentStore().update_enrichment("https://blog.test/a", _update())


class TestUpdateFormattedContent:
    @patch(REPO)
    def test_updates_row(self, mock_get_conn: MagicMock) -> None:
        mock_conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.rowcount = 1

        PostgresDocumentStore().update_formatted_content("https://blog.test/a", "# Formatted")

        assert mock_cursor.execute.call_args.args[1] == ("# Formatted", "https://blog.test/a")
        mock_conn.commit.assert_called_once()

    @patch(REPO)
    def test_raises_when_document_missing(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.rowcount = 0

        with pytest.raises(DocumentNotFoundError):
            PostgresDocumentStore().update_formatted_content("https://blog.test/none", "# F")


class TestInsertIfAbsent:
    @patch(REPO)
    def test_returns_true_when_inserted(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.rowcount = 1
        document = Document(url="https://blog.test/a", title="A", original_content="Body")

        assert PostgresDocumentStore().insert_if_absent(document) is True
        assert "ON CONFLICT (url) DO NOTHING" in mock_cursor.execute.call_args.args[0]

    @patch(REPO)
    def test_returns_false_on_conflict(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.rowcount = 0
        document = Document(url="https://blog.test/a", title="A", original_content="Body")

        assert PostgresDocumentStore().insert_if_absent(document) is False
