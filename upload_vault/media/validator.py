from datetime import datetime, timezone

from upload_vault.processor.exceptions import EmptyFileError, OversizedMediaError
from upload_vault.processor.models import FileKind, MediaAsset, RawFile

DEFAULT_MAX_MEDIA_BYTES = 10 * 1024 * 1024


def _format_limit(limit: int) -> str:
    if limit % (1024 * 1024) == 0:
        return f"{limit // (1024 * 1024)} MB"
    return f"{limit} bytes"


class MediaValidator:
    """Size rules for audio and video uploads."""

    def __init__(self, max_bytes: int = DEFAULT_MAX_MEDIA_BYTES) -> None:
        self._max_bytes = max_bytes

    def validate(self, raw_file: RawFile) -> None:
        """Raises:
        EmptyFileError: zero-byte file.
        OversizedMediaError: larger than the configured ceiling.
        """
        if raw_file.size == 0:
            raise EmptyFileError("File is empty")
        if raw_file.size > self._max_bytes:
            raise OversizedMediaError(
                f"File size must be under {_format_limit(self._max_bytes)}"
            )

    def build_asset(
        self,
        raw_file: RawFile,
        kind: FileKind,
        now: datetime | None = None,
    ) -> MediaAsset:
        """Metadata for a validated file; the stored name is already unique."""
        if not kind.is_media:
            raise ValueError(f"{kind.value} is not a media kind")
        return MediaAsset(
            kind=kind,
            filename=raw_file.path.name,
            original_name=raw_file.original_name,
            filepath=str(raw_file.path),
            size=raw_file.size,
            uploaded_by=raw_file.uploaded_by,
            uploaded_at=now or datetime.now(timezone.utc),
        )
