from dataclasses import dataclass
from pathlib import Path

from upload_vault.config.settings import Settings


@dataclass(frozen=True)
class IngestConfig:
    """Read-only pipeline configuration, built once at startup.

    ``encryption_key`` is kept as configured (hex text); the cipher validates
    it on every use so a bad key fails individual files, not the process.
    """

    upload_root: Path
    encryption_key: str
    encryption_chunk_size: int = 64 * 1024
    max_upload_files: int = 10
    max_media_bytes: int = 10 * 1024 * 1024
    max_workers: int = 4
    batch_timeout_seconds: float = 300.0
    default_username: str = "UnknownUser"

    @classmethod
    def from_settings(cls, settings: Settings) -> "IngestConfig":
        return cls(
            upload_root=Path(settings.upload_root),
            encryption_key=settings.encryption_key,
            encryption_chunk_size=settings.encryption_chunk_size,
            max_upload_files=settings.max_upload_files,
            max_media_bytes=settings.max_media_bytes,
            max_workers=settings.max_workers,
            batch_timeout_seconds=settings.batch_timeout_seconds,
            default_username=settings.default_username,
        )
