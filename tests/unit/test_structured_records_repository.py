from unittest.mock import MagicMock, patch

import psycopg
import pytest

from upload_vault.database.repositories.structured_records_repository import (
    StructuredRecordsRepository,
)
from upload_vault.parsing.models import TickerSentiment, Topic
from upload_vault.processor.exceptions import PersistenceError
from upload_vault.processor.models import StructuredRecord


def _mock_connection(mock_get_conn: MagicMock) -> tuple[MagicMock, MagicMock]:
    """Wire up a mock connection + cursor and return (mock_conn, mock_cursor)."""
    mock_cursor = MagicMock()
    mock_conn = MagicMock()
    mock_conn.cursor.return_value.__enter__ = MagicMock(return_value=mock_cursor)
    mock_conn.cursor.return_value.__exit__ = MagicMock(return_value=False)
    mock_get_conn.return_value.__enter__ = MagicMock(return_value=mock_conn)
    mock_get_conn.return_value.__exit__ = MagicMock(return_value=False)
    return mock_conn, mock_cursor


def _record(title: str) -> StructuredRecord:
    return StructuredRecord(
        fields={"title": title},
        topics=(Topic(topic="AI", relevance_score="0.9"),),
        ticker_sentiment=(TickerSentiment(ticker="BTC", sentiment_label="Bullish"),),
        source_file="news.csv",
        uploaded_by="bob",
    )


REPO = "upload_vault.database.repositories.structured_records_repository"


class TestInsertStructuredRecords:
    @patch(f"{REPO}.get_connection")
    def test_inserts_all_rows_in_one_call_and_commits(self, mock_get_conn: MagicMock) -> None:
        mock_conn, mock_cursor = _mock_connection(mock_get_conn)

        count = StructuredRecordsRepository().insert_structured_records(
            [_record("a"), _record("b")]
        )

        assert count == 2
        mock_cursor.executemany.assert_called_once()
        params = mock_cursor.executemany.call_args.args[1]
        assert [p[0] for p in params] == ["news.csv", "news.csv"]
        assert params[0][2].obj == {"title": "a"}
        assert params[0][3].obj == [{"topic": "AI", "relevance_score": "0.9"}]
        assert params[0][4].obj == [
            {
                "ticker": "BTC",
                "sentiment_label": "Bullish",
                "relevance_score": "",
                "sentiment_score": "",
            }
        ]
        mock_conn.commit.assert_called_once()

    @patch(f"{REPO}.get_connection")
    def test_empty_sequence_skips_database(self, mock_get_conn: MagicMock) -> None:
        assert StructuredRecordsRepository().insert_structured_records([]) == 0
        mock_get_conn.assert_not_called()

    @patch(f"{REPO}.get_connection")
    def test_wraps_driver_errors(self, mock_get_conn: MagicMock) -> None:
        mock_conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.executemany.side_effect = psycopg.OperationalError("connection lost")

        with pytest.raises(PersistenceError, match="connection lost"):
            StructuredRecordsRepository().insert_structured_records([_record("a")])

        mock_conn.commit.assert_not_called()
