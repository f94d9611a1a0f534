from collections.abc import Sequence

import psycopg
from psycopg.types.json import Jsonb

from upload_vault.database.connection import get_connection
from upload_vault.processor.exceptions import PersistenceError
from upload_vault.processor.models import StructuredRecord


class StructuredRecordsRepository:
    """Database operations for the structured_records table."""

    def insert_structured_records(self, records: Sequence[StructuredRecord]) -> int:
        """Insert all records of one file in a single transaction.

        Returns:
            Number of rows inserted.

        Raises:
            PersistenceError: if the database rejects the batch; nothing is
                committed in that case.
        """
        if not records:
            return 0
        params = [
            (
                record.source_file,
                record.uploaded_by,
                Jsonb(record.fields),
                Jsonb(record.topics_payload()),
                Jsonb(record.ticker_sentiment_payload()),
            )
            for record in records
        ]
        try:
            with get_connection() as conn:
                with conn.cursor() as cur:
                    cur.executemany(
                        """
                        INSERT INTO structured_records
                        (source_file, uploaded_by, data, topics, ticker_sentiment)
                        VALUES (%s, %s, %s, %s, %s)
                        """,
                        params,
                    )
                conn.commit()
        except psycopg.Error as exc:
            raise PersistenceError(f"Failed to store records: {exc}") from exc
        return len(params)

    def count_by_source_file(self, source_file: str) -> int:
        """Count stored rows for one uploaded file. Useful for tests."""
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    "SELECT COUNT(*) FROM structured_records WHERE source_file = %s",
                    (source_file,),
                )
                row = cur.fetchone()
        return int(row[0]) if row is not None else 0
