import pytest

from upload_vault.tabular.csv_adapter import CsvDecoder
from upload_vault.tabular.excel_adapter import ExcelDecoder
from upload_vault.tabular.exceptions import DecodeError
from upload_vault.tabular.factory import TabularDecoderFactory
from upload_vault.tabular.xls_adapter import XlsDecoder


class TestTabularDecoderFactory:
    @pytest.mark.parametrize(
        ("filename", "expected"),
        [("a.csv", CsvDecoder), ("a.XLSX", ExcelDecoder), ("a.xls", XlsDecoder)],
    )
    def test_creates_adapter_by_extension(self, filename: str, expected: type) -> None:
        assert isinstance(TabularDecoderFactory.create(filename), expected)

    def test_unknown_extension_raises(self) -> None:
        with pytest.raises(DecodeError, match="No tabular decoder"):
            TabularDecoderFactory.create("song.mp3")
