from typing import Any

import psycopg

BLOGS_TABLE_DDL = """
CREATE TABLE IF NOT EXISTS blogs (
    id BIGSERIAL PRIMARY KEY,
    url TEXT NOT NULL UNIQUE CHECK (url ~ '^https?://\\S+$'),
    title TEXT NOT NULL,
    author TEXT NOT NULL DEFAULT 'Unknown',
    date TEXT NOT NULL DEFAULT '',
    excerpt TEXT NOT NULL DEFAULT '',
    category TEXT NOT NULL DEFAULT 'Uncategorized',
    original_content TEXT NOT NULL,
    formatted_original_content TEXT,
    formatted_at TIMESTAMPTZ,
    updated_content TEXT,
    sources JSONB NOT NULL DEFAULT '[]'::jsonb,
    enrichment_model TEXT,
    enriched_at TIMESTAMPTZ,
    quality_score SMALLINT NOT NULL DEFAULT 0 CHECK (quality_score BETWEEN 0 AND 100),
    created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
)
"""


def create_schema(conn: psycopg.Connection[Any]) -> None:
    """Create the blogs table if it does not exist yet."""
    conn.execute(BLOGS_TABLE_DDL)
    conn.commit()
