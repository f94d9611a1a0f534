from collections.abc import Iterator
from pathlib import Path

import xlrd

from upload_vault.processor.cancellation import CancellationToken
from upload_vault.tabular.base import BaseTabularDecoder, TabularRow
from upload_vault.tabular.exceptions import DecodeError
from upload_vault.tabular.rows import build_records


class XlsDecoder(BaseTabularDecoder):
    """Decodes the first sheet of a legacy .xls workbook using xlrd."""

    def decode(
        self,
        path: Path,
        token: CancellationToken | None = None,
    ) -> list[TabularRow]:
        try:
            book = xlrd.open_workbook(str(path), on_demand=True)
            try:
                if book.nsheets == 0:
                    raise DecodeError(f"Workbook {path.name} has no sheets")
                rows = self._iter_rows(book, book.sheet_by_index(0))
                header = next(rows, None)
                return build_records(header, rows, token)
            finally:
                book.release_resources()
        except DecodeError:
            raise
        except Exception as exc:
            raise DecodeError(f"XLS decoding failed: {exc}") from exc

    @staticmethod
    def _iter_rows(book: xlrd.book.Book, sheet: xlrd.sheet.Sheet) -> Iterator[list[object]]:
        for index in range(sheet.nrows):
            values: list[object] = []
            for cell in sheet.row(index):
                if cell.ctype in (xlrd.XL_CELL_EMPTY, xlrd.XL_CELL_BLANK):
                    values.append(None)
                elif cell.ctype == xlrd.XL_CELL_DATE:
                    values.append(xlrd.xldate.xldate_as_datetime(cell.value, book.datemode))
                elif cell.ctype == xlrd.XL_CELL_BOOLEAN:
                    values.append(bool(cell.value))
                else:
                    values.append(cell.value)
            yield values
