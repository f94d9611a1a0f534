from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path

from upload_vault.processor.cancellation import CancellationToken
from upload_vault.processor.models import FileKind, MediaAsset, RawFile, StructuredRecord
from upload_vault.tabular.base import TabularRow


@dataclass(slots=True)
class FileContext:
    raw_file: RawFile
    token: CancellationToken
    kind: FileKind | None = None
    rows: list[TabularRow] = field(default_factory=list)
    records: list[StructuredRecord] = field(default_factory=list)
    inserted_count: int = 0
    asset: MediaAsset | None = None
    asset_id: int | None = None
    persisted: bool = False
    artifact_path: Path | None = None
    error_message: str = ""


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: FileContext) -> FileContext:
        raise NotImplementedError
