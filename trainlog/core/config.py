"""
Application configuration using Pydantic Settings.

Loads configuration from environment variables (.env file).
"""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from trainlog.sync.account import AccountStatus


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Project Info
    PROJECT_NAME: str = "TrainLog"
    VERSION: str = "0.1.0"

    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Stores
    DATA_DIR: Path = Path("data")
    LOCAL_STORE_FILENAME: str = "TrainLog.store"
    CLOUD_STORE_FILENAME: str = "TrainLogCloud.store"
    DEFAULTS_FILENAME: str = "defaults.db"

    # Cloud sync
    CLOUD_SYNC_ENABLED: bool = True
    CLOUD_DATABASE_URL: str = ""          # empty -> SQLite file under DATA_DIR
    CLOUD_ACCOUNT_STATUS: Optional[AccountStatus] = None  # forces the account status when set
    ACCOUNT_STATUS_TIMEOUT_SECONDS: float = 1.0

    # Exercise catalog
    EXERCISE_CATALOG_PATH: Optional[Path] = None

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    @property
    def local_store_path(self) -> Path:
        return self.DATA_DIR / self.LOCAL_STORE_FILENAME

    @property
    def cloud_store_path(self) -> Path:
        return self.DATA_DIR / self.CLOUD_STORE_FILENAME

    @property
    def defaults_path(self) -> Path:
        return self.DATA_DIR / self.DEFAULTS_FILENAME


# Global settings instance
settings = Settings()
