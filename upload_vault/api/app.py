"""FastAPI application factory."""
from fastapi import FastAPI

from upload_vault.config.ingest_config import IngestConfig
from upload_vault.processor.orchestrator import BatchOrchestrator
from upload_vault.processor.upload_store import UploadStore


def create_app(
    orchestrator: BatchOrchestrator,
    config: IngestConfig,
    upload_store: UploadStore | None = None,
) -> FastAPI:
    app = FastAPI(title="Upload Vault API", version="0.1.0")
    app.state.orchestrator = orchestrator
    app.state.ingest_config = config
    app.state.upload_store = upload_store or UploadStore(config.upload_root)

    # Import routers inside create_app() to keep module import side-effect free
    from upload_vault.api.routers.upload import router as upload_router

    app.include_router(upload_router, prefix="/api")

    @app.get("/health", tags=["ops"])
    def health() -> dict:
        return {"status": "ok"}

    return app
