from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "upload_vault"
    db_username: str = "upload_vault"
    db_password: str = "secret"
    db_pool_max_size: int = 10

    api_host: str = "0.0.0.0"
    api_port: int = 3000

    upload_root: str = "uploads"
    encryption_key: str = ""
    encryption_chunk_size: int = 64 * 1024

    max_upload_files: int = 10
    max_media_bytes: int = 10 * 1024 * 1024
    max_workers: int = 4
    batch_timeout_seconds: float = 300.0
    default_username: str = "UnknownUser"
