"""CCentral Dashboard — Configuration."""

from pathlib import Path
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment / .env file."""

    # Backend REST API
    backend_url: str = "http://127.0.0.1:3000"
    request_timeout_seconds: float = 5.0

    # Polling
    refresh_interval_seconds: int = 2

    # Instances whose last-seen timestamp is older than this are flagged
    expired_after_seconds: int = 60

    # Authentication (set API_KEY env var to enable; empty = auth disabled)
    api_key: str = ""

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def templates_path(self) -> Path:
        return Path(__file__).parent / "templates"


settings = Settings()
