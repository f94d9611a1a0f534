from dataclasses import asdict, dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path

from upload_vault.parsing.models import TickerSentiment, Topic


class FileKind(str, Enum):
    """Category resolved from a file's extension."""

    STRUCTURED_DATA = "structured-data"
    AUDIO = "audio"
    VIDEO = "video"
    REJECTED = "rejected"

    @property
    def is_media(self) -> bool:
        return self in (FileKind.AUDIO, FileKind.VIDEO)


class FileStatus(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class RawFile:
    """An uploaded file already written to its plaintext path."""

    original_name: str
    path: Path
    size: int
    uploaded_by: str


@dataclass(frozen=True)
class IngestRequest:
    """One submitted batch; file order is the order of the report."""

    files: tuple[RawFile, ...]
    uploaded_by: str


@dataclass(frozen=True)
class StructuredRecord:
    """One normalized row of a tabular file.

    ``fields`` holds every other column as decoded, with no fixed schema.
    """

    fields: dict[str, object]
    topics: tuple[Topic, ...] = ()
    ticker_sentiment: tuple[TickerSentiment, ...] = ()
    source_file: str = ""
    uploaded_by: str = ""

    def topics_payload(self) -> list[dict[str, str]]:
        return [asdict(topic) for topic in self.topics]

    def ticker_sentiment_payload(self) -> list[dict[str, str]]:
        return [asdict(entry) for entry in self.ticker_sentiment]


@dataclass(frozen=True)
class MediaAsset:
    """Metadata row for an audio or video upload.

    ``filepath`` points at the plaintext and is not rewritten after encryption.
    """

    kind: FileKind
    filename: str
    original_name: str
    filepath: str
    size: int
    uploaded_by: str
    uploaded_at: datetime


@dataclass(frozen=True)
class FileResult:
    file: str
    status: FileStatus
    kind: FileKind | None = None
    message: str | None = None
    model_id: int | None = None
    total_records: int | None = None
    encrypted_file: str | None = None

    @property
    def ok(self) -> bool:
        return self.status is FileStatus.SUCCESS

    @classmethod
    def failed(cls, file: str, message: str, kind: FileKind | None = None) -> "FileResult":
        if kind is FileKind.REJECTED:
            kind = None
        return cls(file=file, status=FileStatus.ERROR, kind=kind, message=message)


@dataclass(frozen=True)
class BatchReport:
    results: tuple[FileResult, ...] = field(default_factory=tuple)

    @property
    def total_files(self) -> int:
        return len(self.results)

    @property
    def failed_count(self) -> int:
        return sum(1 for result in self.results if not result.ok)
