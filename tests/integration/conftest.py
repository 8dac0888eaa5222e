import os
import uuid
from collections.abc import Callable, Generator
from typing import Any

import psycopg
import pytest

from enricher.config.settings import Settings
from enricher.database.connection import close_pool, get_connection, init_pool
from enricher.database.schema import create_schema
from enricher.store.models import Document


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "blogs_test")
    os.environ.setdefault("DB_POOL_TIMEOUT_SECONDS", "5")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
        with get_connection() as conn:
            create_schema(conn)
    except Exception as e:
        close_pool()
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to run integration tests")
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def integration_cleanup(integration_pool: None) -> Generator[list[str], None, None]:
    cleanup: list[str] = []
    yield cleanup
    if not cleanup:
        return
    with get_connection() as conn:
        with conn.cursor() as cur:
            for url in cleanup:
                cur.execute("DELETE FROM blogs WHERE url = %s", (url,))
        conn.commit()


@pytest.fixture
def make_document(integration_cleanup: list[str]) -> Callable[..., Document]:
    """Build a Document with a unique URL that is deleted after the test."""

    def _make(**overrides: Any) -> Document:
        url = f"https://blog.test/{uuid.uuid4()}"
        integration_cleanup.append(url)
        fields: dict[str, Any] = {"url": url, "title": "Integration post", "original_content": "Body"}
        fields.update(overrides)
        return Document(**fields)

    return _make
