"""FastAPI dependencies resolved from the objects built at startup."""
from fastapi import Request

from upload_vault.config.ingest_config import IngestConfig
from upload_vault.processor.orchestrator import BatchOrchestrator
from upload_vault.processor.upload_store import UploadStore


def get_orchestrator(request: Request) -> BatchOrchestrator:
    return request.app.state.orchestrator


def get_upload_store(request: Request) -> UploadStore:
    return request.app.state.upload_store


def get_ingest_config(request: Request) -> IngestConfig:
    return request.app.state.ingest_config
