from pathlib import PurePath

from upload_vault.tabular.base import BaseTabularDecoder
from upload_vault.tabular.csv_adapter import CsvDecoder
from upload_vault.tabular.excel_adapter import ExcelDecoder
from upload_vault.tabular.exceptions import DecodeError
from upload_vault.tabular.xls_adapter import XlsDecoder


class TabularDecoderFactory:
    """Creates the decoder matching a file's extension."""

    ADAPTERS: dict[str, type[BaseTabularDecoder]] = {
        ".csv": CsvDecoder,
        ".xlsx": ExcelDecoder,
        ".xls": XlsDecoder,
    }

    @classmethod
    def create(cls, filename: str) -> BaseTabularDecoder:
        extension = PurePath(filename).suffix.lower()
        adapter_cls = cls.ADAPTERS.get(extension)
        if adapter_cls is None:
            raise DecodeError(
                f"No tabular decoder for '{extension}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return adapter_cls()
