"""Batch upload router."""
from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import JSONResponse

from upload_vault.api.deps import get_ingest_config, get_orchestrator, get_upload_store
from upload_vault.api.schemas.upload import BatchResponse
from upload_vault.config.ingest_config import IngestConfig
from upload_vault.logging.logger import Log
from upload_vault.processor.models import IngestRequest, RawFile
from upload_vault.processor.orchestrator import BatchOrchestrator
from upload_vault.processor.upload_store import UploadStore

router = APIRouter(tags=["upload"])


@router.post("/upload", response_model=BatchResponse, response_model_exclude_none=True)
def upload_files(
    files: list[UploadFile] | None = File(default=None),
    username: str | None = Form(default=None),
    orchestrator: BatchOrchestrator = Depends(get_orchestrator),
    upload_store: UploadStore = Depends(get_upload_store),
    config: IngestConfig = Depends(get_ingest_config),
) -> BatchResponse | JSONResponse:
    if not files:
        return JSONResponse(status_code=400, content={"msg": "No files uploaded"})
    if len(files) > config.max_upload_files:
        return JSONResponse(
            status_code=400,
            content={"msg": f"Too many files: at most {config.max_upload_files} per upload"},
        )

    uploaded_by = (username or "").strip() or config.default_username
    saved: list[RawFile] = []
    try:
        for upload in files:
            saved.append(
                upload_store.save(upload.file, upload.filename or "upload", uploaded_by)
            )
        report = orchestrator.ingest(IngestRequest(files=tuple(saved), uploaded_by=uploaded_by))
    except Exception as exc:
        Log.exception("Upload batch failed before per-file processing")
        for raw_file in saved:
            upload_store.discard(raw_file.path)
        return JSONResponse(
            status_code=500,
            content={"msg": "Server error while processing files", "error": str(exc)},
        )
    return BatchResponse.from_report(report)
