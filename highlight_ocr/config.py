"""Application configuration using pydantic-settings."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    environment: str = "development"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 5000
    cors_origins: list[str] = ["*"]

    # Storage
    upload_dir: Path = Path("uploads")
    public_dir: Path = Path("public")
    max_upload_bytes: int = 10 * 1024 * 1024

    # OCR
    ocr_language: str = "eng"
    tesseract_cmd: str | None = None

    # Cleanup policy
    delete_upload_on_failure: bool = False  # False keeps failed uploads on disk
    highlight_ttl_seconds: int = 0  # 0 = keep highlighted images forever
    cleanup_interval_seconds: int = 300

    @property
    def retention_enabled(self) -> bool:
        """Whether generated images are swept after highlight_ttl_seconds."""
        return self.highlight_ttl_seconds > 0

    def display(self) -> dict:
        """Return configuration for display."""
        return {
            "environment": self.environment,
            "upload_dir": str(self.upload_dir),
            "max_upload_bytes": self.max_upload_bytes,
            "ocr_language": self.ocr_language,
            "delete_upload_on_failure": self.delete_upload_on_failure,
            "highlight_ttl_seconds": self.highlight_ttl_seconds,
        }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
