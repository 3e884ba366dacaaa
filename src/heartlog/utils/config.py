"""Configuration management."""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="HEARTLOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Data storage
    data_dir: Path = Field(default=Path("data"))

    # Health data export (CSV: timestamp,metric,value)
    health_export_path: Optional[Path] = None

    # Logging
    log_level: str = Field(default="INFO")
    log_file: Optional[Path] = None

    # Web interface
    web_host: str = Field(default="127.0.0.1")
    web_port: int = Field(default=8000)

    @property
    def db_path(self) -> Path:
        return self.data_dir / "heartlog.json"

    @property
    def has_health_export(self) -> bool:
        return self.health_export_path is not None and self.health_export_path.exists()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
