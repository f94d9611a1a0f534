class IngestError(Exception):
    """Base exception for per-file ingest failures.

    The orchestrator converts every IngestError into an error FileResult,
    so the message should tell the uploader what to fix.
    """


class ClassificationRejectedError(IngestError):
    """Raised when a file extension is not one of the supported kinds."""


class EmptyFileError(IngestError):
    """Raised when an uploaded file has zero bytes."""


class OversizedMediaError(IngestError):
    """Raised when an audio or video file exceeds the size ceiling."""


class EmptyDatasetError(IngestError):
    """Raised when a tabular file decodes to zero data rows."""


class PersistenceError(IngestError):
    """Raised when the storage collaborator rejects a write."""


class OperationCancelledError(IngestError):
    """Raised when the batch deadline passes or the batch is cancelled."""
