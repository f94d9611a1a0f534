from pathlib import Path

from openpyxl import load_workbook

from upload_vault.processor.cancellation import CancellationToken
from upload_vault.tabular.base import BaseTabularDecoder, TabularRow
from upload_vault.tabular.exceptions import DecodeError
from upload_vault.tabular.rows import build_records


class ExcelDecoder(BaseTabularDecoder):
    """Decodes the first worksheet of an .xlsx workbook using openpyxl."""

    def decode(
        self,
        path: Path,
        token: CancellationToken | None = None,
    ) -> list[TabularRow]:
        try:
            workbook = load_workbook(str(path), read_only=True, data_only=True)
            try:
                if not workbook.worksheets:
                    raise DecodeError(f"Workbook {path.name} has no worksheets")
                rows = workbook.worksheets[0].iter_rows(values_only=True)
                header = next(rows, None)
                return build_records(header, rows, token)
            finally:
                workbook.close()
        except DecodeError:
            raise
        except Exception as exc:
            raise DecodeError(f"Excel decoding failed: {exc}") from exc
