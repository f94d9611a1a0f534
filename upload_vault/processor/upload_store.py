import re
import shutil
import time
import uuid
from datetime import datetime
from pathlib import Path
from typing import BinaryIO

from upload_vault.processor.models import RawFile

ARTIFACT_SUFFIX = ".enc"
_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def sanitize_filename(name: str, fallback: str = "upload") -> str:
    """Strip directories and characters that are unsafe in a path segment."""
    base = Path(name.replace("\\", "/")).name
    cleaned = _UNSAFE_CHARS.sub("_", base).strip("._")
    return cleaned or fallback


def upload_dir_path(upload_root: Path, username: str, day: datetime) -> Path:
    """Build upload directory: {upload_root}/{YYYY-MM-DD}/{username}"""
    return upload_root / day.strftime("%Y-%m-%d") / sanitize_filename(username, "unknown")


class UploadStore:
    """Places uploads on disk and derives artifact paths next to them."""

    def __init__(self, upload_root: Path) -> None:
        self._upload_root = upload_root

    def save(
        self,
        stream: BinaryIO,
        original_name: str,
        username: str,
        now: datetime | None = None,
    ) -> RawFile:
        """Stream an upload to a new unique plaintext path."""
        now = now or datetime.now()
        directory = upload_dir_path(self._upload_root, username, now)
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / self.unique_name(original_name)
        with path.open("xb") as target:
            shutil.copyfileobj(stream, target)
        return RawFile(
            original_name=original_name,
            path=path,
            size=path.stat().st_size,
            uploaded_by=username,
        )

    @staticmethod
    def unique_name(original_name: str) -> str:
        """``<epoch ms>-<8 hex>-<sanitized name>``"""
        stamp = int(time.time() * 1000)
        return f"{stamp}-{uuid.uuid4().hex[:8]}-{sanitize_filename(original_name)}"

    @staticmethod
    def artifact_path(plaintext: Path) -> Path:
        return plaintext.with_name(plaintext.name + ARTIFACT_SUFFIX)

    @staticmethod
    def discard(path: Path) -> None:
        path.unlink(missing_ok=True)
