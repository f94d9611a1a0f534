import io
from collections.abc import Callable
from pathlib import Path

import pytest
from openpyxl import Workbook

from upload_vault.config.ingest_config import IngestConfig

TEST_KEY_HEX = "00112233445566778899aabbccddeeff" * 2


@pytest.fixture()
def encryption_key() -> str:
    return TEST_KEY_HEX


@pytest.fixture()
def ingest_config(tmp_path: Path, encryption_key: str) -> IngestConfig:
    return IngestConfig(
        upload_root=tmp_path / "uploads",
        encryption_key=encryption_key,
        encryption_chunk_size=32,
        max_workers=3,
        batch_timeout_seconds=30.0,
    )


@pytest.fixture()
def sentiment_csv_bytes() -> bytes:
    """Two rows in the shape of the sentiment export."""
    return (
        "title,topics,ticker_sentiment\n"
        'BTC rallies,"AI(0.92), Crypto(0.88)","BTC(Bullish), ETH(Neutral)"\n'
        "Quiet day,Markets(0.5),\n"
    ).encode("utf-8")


@pytest.fixture()
def make_xlsx_bytes() -> Callable[[list[list[object]]], bytes]:
    """Build an .xlsx workbook whose first sheet holds the given rows."""

    def _make(rows: list[list[object]]) -> bytes:
        workbook = Workbook()
        sheet = workbook.active
        for row in rows:
            sheet.append(row)
        buf = io.BytesIO()
        workbook.save(buf)
        return buf.getvalue()

    return _make
