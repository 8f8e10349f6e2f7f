from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    app_name: str = "find-keywords-in-text"
    version: str = "1.0.0"
    debug: bool = False

    # Server configuration
    host: str = "0.0.0.0"
    port: int = 9999

    # CORS allow-list, e.g. ALLOWED_ORIGINS='["https://example.com"]'
    allowed_origins: List[str] = ["*"]

    # Logging configuration
    log_level: str = "INFO"
    environment: str = "development"

    # Matching configuration
    match_workers: int = 4
    match_timeout: float = 10.0  # seconds per request

    # Responses smaller than this are sent uncompressed
    gzip_minimum_size: int = 500


# Global settings instance
settings = Settings()
