from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    extraction_provider: str = "openai"
    extraction_api_key: str = ""
    extraction_model_name: str = "gpt-4o-mini"
    extraction_base_url: str = ""
    extraction_timeout_seconds: int = 60
    extraction_temperature: float = 0.1
    extraction_max_tokens: int = 4000
    extraction_locale: str = "pt-BR"

    pdf_attachment_mode: str = "native"
    pdf_max_pages: int = 10
    pdf_render_dpi: int = 144

    spreadsheet_engine: str = "pandas"
    materialized_min_length: int = 50

    max_upload_bytes: int = 20 * 1024 * 1024

    entity_store: str = "memory"
    db_host: str = "localhost"
    db_port: int = 5432
    db_database: str = "ledger"
    db_username: str = "ledger"
    db_password: str = "secret"
    db_pool_max_size: int = 4
