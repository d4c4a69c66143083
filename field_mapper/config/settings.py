from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    host: str = "0.0.0.0"
    port: int = 4000
    cors_origins: list[str] = ["http://localhost:5173"]

    storage_backend: str = "json"
    db_path: str = "data/db.json"
    uploads_dir: str = "data/uploads"
    snapshot_name: str = "default"

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "field_mapper"
    db_username: str = "field_mapper"
    db_password: str = "secret"

    pdf_engine: str = "pdfplumber"
    render_scale: float = 1.5
    max_upload_bytes: int = 20 * 1024 * 1024
