from abc import ABC, abstractmethod
from pathlib import Path

from upload_vault.processor.cancellation import CancellationToken

TabularRow = dict[str, object]


class BaseTabularDecoder(ABC):
    """Contract for all tabular file adapters."""

    @abstractmethod
    def decode(
        self,
        path: Path,
        token: CancellationToken | None = None,
    ) -> list[TabularRow]:
        """Decode a file into records keyed by its header row.

        Args:
            path: Plaintext file on disk.
            token: Checked between rows; an expired token aborts decoding.

        Returns:
            One mapping per data row, in file order. Empty cells are absent
            from the mapping. A file without data rows yields an empty list.

        Raises:
            DecodeError: if the file is unreadable, malformed or cancelled.
        """
