from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    analysis_provider: str = "http"
    analyzer_url: str = "http://localhost:8000/upload_video"
    analyzer_upload_filename: str = "video.mp4"
    analyzer_timeout_seconds: int = 120
    analysis_summary_max_chars: int = 2000

    pdf_engine: str = "pdfplumber"

    ledger_provider: str = "web3"
    ledger_rpc_url: str = "http://localhost:8545"
    ledger_contract_address: str = "0x16726d44f6b1ed8145c407e2950e15e0a03b9ade"
    ledger_timeout_seconds: int = 180
    ledger_receipt_timeout_seconds: int = 150

    db_host: str = "localhost"
    db_port: int = 5432
    db_database: str = "video_tracker"
    db_username: str = "video_tracker"
    db_password: str = "secret"
    db_pool_max_size: int = 5

    recorder_timeout_seconds: int = 15

    report_output_dir: str = "."
