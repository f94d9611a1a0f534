from concurrent.futures import ThreadPoolExecutor

from upload_vault.config.ingest_config import IngestConfig
from upload_vault.database.repositories.media_assets_repository import MediaAssetsRepository
from upload_vault.database.repositories.structured_records_repository import (
    StructuredRecordsRepository,
)
from upload_vault.logging.logger import Log
from upload_vault.processor.cancellation import CancellationToken
from upload_vault.processor.models import BatchReport, FileResult, IngestRequest, RawFile
from upload_vault.processor.processor import FileProcessor, build_file_processor


class BatchOrchestrator:
    """Fan a batch out over a bounded pool and collect results in input order."""

    def __init__(self, file_processor: FileProcessor, config: IngestConfig) -> None:
        self._file_processor = file_processor
        self._config = config

    def ingest(self, request: IngestRequest) -> BatchReport:
        """Process every file; one file failing never stops the others."""
        if not request.files:
            return BatchReport()
        Log.info(f"Ingesting {len(request.files)} files for {request.uploaded_by}")
        token = CancellationToken.with_timeout(self._config.batch_timeout_seconds)
        workers = max(1, min(self._config.max_workers, len(request.files)))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="ingest") as pool:
            futures = [pool.submit(self._run_one, raw_file, token) for raw_file in request.files]
            report = BatchReport(results=tuple(future.result() for future in futures))
        Log.info(
            f"Batch finished: {report.total_files - report.failed_count} succeeded, "
            f"{report.failed_count} failed"
        )
        return report

    def _run_one(self, raw_file: RawFile, token: CancellationToken) -> FileResult:
        try:
            return self._file_processor.process(raw_file, token)
        except Exception as exc:
            Log.exception(f"Unexpected error while processing {raw_file.original_name}")
            return FileResult.failed(raw_file.original_name, f"Unexpected error: {exc}")


def build_orchestrator(
    config: IngestConfig,
    records_repo: StructuredRecordsRepository | None = None,
    media_repo: MediaAssetsRepository | None = None,
) -> BatchOrchestrator:
    """Build a BatchOrchestrator with all required adapters."""
    file_processor = build_file_processor(config, records_repo, media_repo)
    return BatchOrchestrator(file_processor, config)
