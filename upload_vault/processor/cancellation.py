import threading
import time

from upload_vault.processor.exceptions import OperationCancelledError


class CancellationToken:
    """Shared by every file of a batch; checked by long-running I/O loops."""

    def __init__(self, deadline: float | None = None) -> None:
        self._deadline = deadline
        self._cancelled = threading.Event()

    @classmethod
    def with_timeout(cls, seconds: float | None) -> "CancellationToken":
        """Token that expires ``seconds`` from now; no deadline when None or <= 0."""
        if seconds is None or seconds <= 0:
            return cls()
        return cls(deadline=time.monotonic() + seconds)

    def cancel(self) -> None:
        self._cancelled.set()

    @property
    def expired(self) -> bool:
        return self._deadline is not None and time.monotonic() >= self._deadline

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set() or self.expired

    def raise_if_cancelled(self) -> None:
        if self._cancelled.is_set():
            raise OperationCancelledError("Batch was cancelled")
        if self.expired:
            raise OperationCancelledError("Batch deadline exceeded")
