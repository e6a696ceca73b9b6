from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "docingest"
    db_username: str = "docingest"
    db_password: str = "secret"

    job_poll_interval_seconds: int = 5
    worker_pool_size: int = 4

    storage_backend: str = "local"
    files_root: str = "/app/files"
    s3_bucket: str = ""
    s3_region: str = "us-east-1"
    s3_endpoint_url: str | None = None
    storage_timeout_seconds: int = 30

    pdf_engine: str = "pdfplumber"

    max_text_chars: int = 500_000
    min_text_chars: int = 10
    segment_target_chars: int = 1600
    summary_input_chars: int = 12_000

    summarization_provider: str = "openai"
    summarization_api_key: str = ""
    summarization_model_name: str = "gpt-4o-mini"
    summarization_base_url: str | None = None
    summarization_timeout_seconds: int = 30
    summarization_temperature: float = 0.2
