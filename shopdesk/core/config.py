# shopdesk/core/config.py

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List


class Settings(BaseSettings):
    # App
    ENV: str = "development"
    DEBUG: bool = False

    # Database
    DATABASE_URL: str = "sqlite:///./shopdesk.db"
    AUTO_CREATE_TABLES: bool = True

    # CORS
    CORS_ORIGINS: List[str] = ["*"]

    # Rate limiting
    RATE_LIMIT_DEFAULT: str = "100/15 minutes"

    # Uploads
    UPLOAD_DIR: str = "uploads"
    MAX_UPLOAD_SIZE_MB: int = 5

    # Importers
    ERROR_DETAILS_LIMIT: int = 20

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="forbid",
    )


settings = Settings()
