import uvicorn

from upload_vault.api.app import create_app
from upload_vault.config.ingest_config import IngestConfig
from upload_vault.config.settings import Settings
from upload_vault.database.connection import close_pool, init_pool
from upload_vault.database.schema import ensure_schema
from upload_vault.logging.logger import Log
from upload_vault.processor.orchestrator import build_orchestrator


def main() -> None:
    """Entry point: initialize pool -> build dependencies -> serve the upload API."""
    settings = Settings()
    Log.configure(settings.log_level)
    init_pool(settings)

    try:
        ensure_schema()
        config = IngestConfig.from_settings(settings)
        orchestrator = build_orchestrator(config)
        app = create_app(orchestrator, config)
        Log.info(f"Serving uploads from {config.upload_root} on port {settings.api_port}")
        uvicorn.run(app, host=settings.api_host, port=settings.api_port)
    finally:
        close_pool()


if __name__ == "__main__":
    main()
