"""Tables written by the ingest pipeline."""

from upload_vault.database.connection import get_connection

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS structured_records (
    id BIGSERIAL PRIMARY KEY,
    source_file TEXT NOT NULL,
    uploaded_by TEXT NOT NULL,
    data JSONB NOT NULL,
    topics JSONB NOT NULL DEFAULT '[]'::jsonb,
    ticker_sentiment JSONB NOT NULL DEFAULT '[]'::jsonb,
    created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
);

CREATE TABLE IF NOT EXISTS audio_files (
    id BIGSERIAL PRIMARY KEY,
    filename TEXT NOT NULL,
    original_name TEXT NOT NULL,
    filepath TEXT NOT NULL,
    size BIGINT NOT NULL,
    uploaded_by TEXT NOT NULL,
    uploaded_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
);

CREATE TABLE IF NOT EXISTS video_files (
    id BIGSERIAL PRIMARY KEY,
    filename TEXT NOT NULL,
    original_name TEXT NOT NULL,
    filepath TEXT NOT NULL,
    size BIGINT NOT NULL,
    uploaded_by TEXT NOT NULL,
    uploaded_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
);
"""


def ensure_schema() -> None:
    """Create the ingest tables when they do not exist yet."""
    with get_connection() as conn:
        conn.execute(SCHEMA_SQL)
        conn.commit()
