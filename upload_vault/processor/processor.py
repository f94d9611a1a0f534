from upload_vault.config.ingest_config import IngestConfig
from upload_vault.crypto.cipher import StreamingCipher
from upload_vault.database.repositories.media_assets_repository import MediaAssetsRepository
from upload_vault.database.repositories.structured_records_repository import (
    StructuredRecordsRepository,
)
from upload_vault.logging.logger import Log
from upload_vault.media.validator import MediaValidator
from upload_vault.processor.cancellation import CancellationToken
from upload_vault.processor.exceptions import IngestError
from upload_vault.processor.models import FileKind, FileResult, FileStatus, RawFile
from upload_vault.processor.pipeline import FileContext, PipelineStep
from upload_vault.processor.steps import (
    BuildRecordsStep,
    ClassifyStep,
    DecodeTabularStep,
    DiscardPlaintextStep,
    DiscardRejectedUploadStep,
    EncryptStep,
    PersistMediaStep,
    PersistRecordsStep,
    RejectEmptyStep,
    ValidateMediaStep,
)
from upload_vault.processor.upload_store import UploadStore


class FileProcessor:
    """Runs one uploaded file through its pipeline and reports the outcome.

    received -> classified -> decoded|validated -> persisted -> encrypted -> done,
    or failed from any step. Zero-byte files fail before classification.
    Every IngestError becomes an error FileResult; anything else propagates
    to the caller.
    """

    def __init__(
        self,
        entry_steps: list[PipelineStep],
        branches: dict[FileKind, list[PipelineStep]],
        failed_step: PipelineStep,
    ) -> None:
        self._entry_steps = entry_steps
        self._branches = branches
        self._failed_step = failed_step

    def process(self, raw_file: RawFile, token: CancellationToken) -> FileResult:
        context = FileContext(raw_file=raw_file, token=token)
        Log.info(f"Processing {raw_file.original_name} ({raw_file.size} bytes)")
        try:
            token.raise_if_cancelled()
            for step in self._entry_steps:
                context = step.run(context)
            for step in self._branch_for(context):
                context = step.run(context)
        except IngestError as exc:
            context.error_message = str(exc)
            self._failed_step.run(context)
            return FileResult.failed(raw_file.original_name, str(exc), context.kind)
        Log.info(f"{raw_file.original_name} done")
        return self._success(context)

    def _branch_for(self, context: FileContext) -> list[PipelineStep]:
        if context.kind is None or context.kind not in self._branches:
            raise ValueError(f"No pipeline branch for kind {context.kind!r}")
        return self._branches[context.kind]

    @staticmethod
    def _success(context: FileContext) -> FileResult:
        encrypted_file = context.artifact_path.name if context.artifact_path else None
        if context.kind is FileKind.STRUCTURED_DATA:
            return FileResult(
                file=context.raw_file.original_name,
                status=FileStatus.SUCCESS,
                kind=context.kind,
                message="File uploaded & data stored successfully",
                total_records=context.inserted_count,
                encrypted_file=encrypted_file,
            )
        return FileResult(
            file=context.raw_file.original_name,
            status=FileStatus.SUCCESS,
            kind=context.kind,
            model_id=context.asset_id,
            encrypted_file=encrypted_file,
        )


def build_file_processor(
    config: IngestConfig,
    records_repo: StructuredRecordsRepository | None = None,
    media_repo: MediaAssetsRepository | None = None,
) -> FileProcessor:
    """Build a FileProcessor with all required adapters."""
    if records_repo is None:
        records_repo = StructuredRecordsRepository()
    if media_repo is None:
        media_repo = MediaAssetsRepository()
    upload_store = UploadStore(config.upload_root)
    cipher = StreamingCipher(config.encryption_key, chunk_size=config.encryption_chunk_size)
    finish = [EncryptStep(cipher, upload_store), DiscardPlaintextStep(upload_store)]
    media_steps: list[PipelineStep] = [
        ValidateMediaStep(MediaValidator(config.max_media_bytes)),
        PersistMediaStep(media_repo),
        *finish,
    ]
    return FileProcessor(
        entry_steps=[RejectEmptyStep(), ClassifyStep()],
        branches={
            FileKind.STRUCTURED_DATA: [
                DecodeTabularStep(),
                BuildRecordsStep(),
                PersistRecordsStep(records_repo),
                *finish,
            ],
            FileKind.AUDIO: media_steps,
            FileKind.VIDEO: media_steps,
        },
        failed_step=DiscardRejectedUploadStep(upload_store),
    )
