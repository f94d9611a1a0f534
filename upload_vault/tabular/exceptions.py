from upload_vault.processor.exceptions import IngestError


class DecodeError(IngestError):
    """Raised when a CSV or spreadsheet file is unreadable or malformed."""
