from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "localhost"
    db_port: int = 5432
    db_database: str = "certificados"
    db_username: str = "certificados"
    db_password: str = "secret"
    db_pool_max_size: int = 10

    pdf_engine: str = "pdfplumber"

    batch_concurrency: int = Field(default=5, ge=1)
    batch_executor: str = "thread"
    max_file_size_bytes: int = 5 * 1024 * 1024

    output_dir: str = "output"
    include_statistics: bool = True
    storage_headers: bool = False
    persist_results: bool = False
