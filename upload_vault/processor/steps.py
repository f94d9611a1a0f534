from upload_vault.crypto.cipher import StreamingCipher
from upload_vault.database.repositories.media_assets_repository import MediaAssetsRepository
from upload_vault.database.repositories.structured_records_repository import (
    StructuredRecordsRepository,
)
from upload_vault.logging.logger import Log
from upload_vault.media.validator import MediaValidator
from upload_vault.parsing.field_parsers import parse_ticker_sentiment, parse_topics
from upload_vault.processor.classifier import classify
from upload_vault.processor.exceptions import (
    ClassificationRejectedError,
    EmptyDatasetError,
    EmptyFileError,
)
from upload_vault.processor.models import FileKind, StructuredRecord
from upload_vault.processor.pipeline import FileContext, PipelineStep
from upload_vault.processor.upload_store import UploadStore
from upload_vault.tabular.factory import TabularDecoderFactory

TOPICS_COLUMN = "topics"
TICKER_SENTIMENT_COLUMN = "ticker_sentiment"


class ClassifyStep(PipelineStep):
    def run(self, context: FileContext) -> FileContext:
        context.kind = classify(context.raw_file.original_name)
        if context.kind is FileKind.REJECTED:
            raise ClassificationRejectedError("Invalid file type")
        Log.info(f"Classified {context.raw_file.original_name} as {context.kind.value}")
        return context


class RejectEmptyStep(PipelineStep):
    def run(self, context: FileContext) -> FileContext:
        if context.raw_file.size == 0:
            raise EmptyFileError("File is empty")
        return context


class DecodeTabularStep(PipelineStep):
    def __init__(self, decoder_factory: type[TabularDecoderFactory] = TabularDecoderFactory) -> None:
        self._decoder_factory = decoder_factory

    def run(self, context: FileContext) -> FileContext:
        decoder = self._decoder_factory.create(context.raw_file.original_name)
        context.rows = decoder.decode(context.raw_file.path, context.token)
        if not context.rows:
            raise EmptyDatasetError("No valid data found in the file")
        Log.info(f"Decoded {len(context.rows)} rows from {context.raw_file.original_name}")
        return context


class BuildRecordsStep(PipelineStep):
    def run(self, context: FileContext) -> FileContext:
        context.records = [
            StructuredRecord(
                fields={
                    column: value
                    for column, value in row.items()
                    if column not in (TOPICS_COLUMN, TICKER_SENTIMENT_COLUMN)
                },
                topics=tuple(parse_topics(row.get(TOPICS_COLUMN))),
                ticker_sentiment=tuple(parse_ticker_sentiment(row.get(TICKER_SENTIMENT_COLUMN))),
                source_file=context.raw_file.original_name,
                uploaded_by=context.raw_file.uploaded_by,
            )
            for row in context.rows
        ]
        return context


class PersistRecordsStep(PipelineStep):
    def __init__(self, records_repo: StructuredRecordsRepository) -> None:
        self._records_repo = records_repo

    def run(self, context: FileContext) -> FileContext:
        context.token.raise_if_cancelled()
        context.inserted_count = self._records_repo.insert_structured_records(context.records)
        context.persisted = True
        Log.info(
            f"Stored {context.inserted_count} records from {context.raw_file.original_name}"
        )
        return context


class ValidateMediaStep(PipelineStep):
    def __init__(self, validator: MediaValidator) -> None:
        self._validator = validator

    def run(self, context: FileContext) -> FileContext:
        if context.kind is None or not context.kind.is_media:
            raise ValueError("FileContext.kind must be a media kind before validation")
        self._validator.validate(context.raw_file)
        context.asset = self._validator.build_asset(context.raw_file, context.kind)
        return context


class PersistMediaStep(PipelineStep):
    def __init__(self, media_repo: MediaAssetsRepository) -> None:
        self._media_repo = media_repo

    def run(self, context: FileContext) -> FileContext:
        if context.asset is None:
            raise ValueError("FileContext.asset must be set before persist")
        context.token.raise_if_cancelled()
        context.asset_id = self._media_repo.create_media_asset(context.asset)
        context.persisted = True
        Log.info(
            f"Stored {context.asset.kind.value} asset {context.asset_id} "
            f"for {context.raw_file.original_name}"
        )
        return context


class EncryptStep(PipelineStep):
    def __init__(self, cipher: StreamingCipher, upload_store: UploadStore) -> None:
        self._cipher = cipher
        self._upload_store = upload_store

    def run(self, context: FileContext) -> FileContext:
        plaintext = context.raw_file.path
        context.artifact_path = self._cipher.encrypt_file(
            plaintext,
            self._upload_store.artifact_path(plaintext),
            context.token,
        )
        return context


class DiscardPlaintextStep(PipelineStep):
    def __init__(self, upload_store: UploadStore) -> None:
        self._upload_store = upload_store

    def run(self, context: FileContext) -> FileContext:
        if context.artifact_path is None:
            raise ValueError("FileContext.artifact_path must be set before discarding plaintext")
        self._upload_store.discard(context.raw_file.path)
        return context


class DiscardRejectedUploadStep(PipelineStep):
    """Failure step: removes plaintext only when nothing references it yet.

    Once a file is persisted its plaintext is kept until encryption succeeds.
    """

    def __init__(self, upload_store: UploadStore) -> None:
        self._upload_store = upload_store

    def run(self, context: FileContext) -> FileContext:
        name = context.raw_file.original_name
        if context.persisted:
            Log.error(f"{name} failed after persistence, plaintext kept: {context.error_message}")
            return context
        self._upload_store.discard(context.raw_file.path)
        Log.error(f"{name} rejected: {context.error_message}")
        return context
