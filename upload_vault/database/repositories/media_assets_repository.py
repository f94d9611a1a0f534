from typing import ClassVar

import psycopg
from psycopg import sql
from psycopg.rows import dict_row

from upload_vault.database.connection import get_connection
from upload_vault.processor.exceptions import PersistenceError
from upload_vault.processor.models import FileKind, MediaAsset


class MediaAssetsRepository:
    """Database operations for the audio_files and video_files tables."""

    TABLES: ClassVar[dict[FileKind, str]] = {
        FileKind.AUDIO: "audio_files",
        FileKind.VIDEO: "video_files",
    }

    def create_media_asset(self, asset: MediaAsset) -> int:
        """Insert one media metadata row and return its id.

        Raises:
            PersistenceError: on database failure or a non-media kind.
        """
        query = sql.SQL(
            """
            INSERT INTO {table}
            (filename, original_name, filepath, size, uploaded_by, uploaded_at)
            VALUES (%s, %s, %s, %s, %s, %s)
            RETURNING id
            """
        ).format(table=sql.Identifier(self._table_for(asset.kind)))
        try:
            with get_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(
                        query,
                        (
                            asset.filename,
                            asset.original_name,
                            asset.filepath,
                            asset.size,
                            asset.uploaded_by,
                            asset.uploaded_at,
                        ),
                    )
                    row = cur.fetchone()
                conn.commit()
        except psycopg.Error as exc:
            raise PersistenceError(f"Failed to store {asset.kind.value} metadata: {exc}") from exc
        if row is None:
            raise PersistenceError(f"No id returned for {asset.original_name}")
        return int(row[0])

    def find_by_id(self, kind: FileKind, asset_id: int) -> MediaAsset | None:
        """Find a media asset by kind and ID. Useful for tests."""
        query = sql.SQL(
            """
            SELECT filename, original_name, filepath, size, uploaded_by, uploaded_at
            FROM {table}
            WHERE id = %s
            """
        ).format(table=sql.Identifier(self._table_for(kind)))
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(query, (asset_id,))
                row = cur.fetchone()

        if row is None:
            return None

        return MediaAsset(
            kind=kind,
            filename=row["filename"],
            original_name=row["original_name"],
            filepath=row["filepath"],
            size=row["size"],
            uploaded_by=row["uploaded_by"],
            uploaded_at=row["uploaded_at"],
        )

    def _table_for(self, kind: FileKind) -> str:
        table = self.TABLES.get(kind)
        if table is None:
            raise PersistenceError(f"No media table for kind '{kind.value}'")
        return table
