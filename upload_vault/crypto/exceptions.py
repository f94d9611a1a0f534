from upload_vault.processor.exceptions import IngestError


class EncryptionError(IngestError):
    """Raised when the key is unusable or the artifact cannot be read or written."""
