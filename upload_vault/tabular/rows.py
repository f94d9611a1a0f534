"""Shared row shaping for the spreadsheet adapters."""

from collections.abc import Iterable, Sequence
from datetime import date, datetime, time

from upload_vault.processor.cancellation import CancellationToken
from upload_vault.tabular.base import TabularRow


def cell_value(value: object) -> object:
    """Map a spreadsheet cell to a JSON-friendly value; None means empty."""
    if value is None:
        return None
    if isinstance(value, str):
        return value if value.strip() else None
    if isinstance(value, bool | int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else value
    if isinstance(value, datetime | date | time):
        return value.isoformat()
    return str(value)


def header_names(cells: Sequence[object]) -> list[str | None]:
    """Column names from the header row; unnamed columns map to None."""
    names: list[str | None] = []
    for cell in cells:
        value = cell_value(cell)
        names.append(str(value).strip() if value is not None else None)
    return names


def build_records(
    header: Sequence[object] | None,
    rows: Iterable[Sequence[object]],
    token: CancellationToken | None = None,
) -> list[TabularRow]:
    """Zip every row against the header, skipping rows with no values."""
    if header is None:
        return []
    columns = header_names(header)
    records: list[TabularRow] = []
    for cells in rows:
        if token is not None:
            token.raise_if_cancelled()
        record: TabularRow = {}
        for column, cell in zip(columns, cells):
            value = cell_value(cell)
            if column and value is not None:
                record[column] = value
        if record:
            records.append(record)
    return records
