import csv
import sys
from pathlib import Path

from upload_vault.processor.cancellation import CancellationToken
from upload_vault.tabular.base import BaseTabularDecoder, TabularRow
from upload_vault.tabular.exceptions import DecodeError


def _lift_field_size_limit() -> int:
    """Raise csv's per-cell limit (128 KiB by default) as far as the platform allows."""
    limit = sys.maxsize
    while True:
        try:
            csv.field_size_limit(limit)
        except OverflowError:
            limit //= 2
        else:
            return limit


_lift_field_size_limit()


class CsvDecoder(BaseTabularDecoder):
    """Decodes comma-separated UTF-8 text with a header row.

    Cell text is kept verbatim. A row shorter than the header leaves its
    trailing columns absent; cells beyond the header are dropped.
    """

    def decode(
        self,
        path: Path,
        token: CancellationToken | None = None,
    ) -> list[TabularRow]:
        try:
            with path.open("r", encoding="utf-8-sig", newline="") as handle:
                reader = csv.reader(handle, strict=True)
                header = next(reader, None)
                if header is None:
                    return []
                columns = [name.strip() for name in header]
                records: list[TabularRow] = []
                for cells in reader:
                    if token is not None:
                        token.raise_if_cancelled()
                    if not any(cell.strip() for cell in cells):
                        continue
                    records.append(
                        {column: cell for column, cell in zip(columns, cells) if column}
                    )
            return records
        except DecodeError:
            raise
        except Exception as exc:
            raise DecodeError(f"CSV decoding failed: {exc}") from exc
