# ============================================================================
# FILE: catalog_api/config.py
# ============================================================================
from pydantic_settings import BaseSettings
from typing import List, Optional

DEFAULT_SECRET_KEY = "your-secret-key-change-this-in-production"


class Settings(BaseSettings):
    """Application configuration using Pydantic BaseSettings"""

    # App settings
    APP_NAME: str = "Music Catalog API"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite:///./music_catalog.db"  # Change to PostgreSQL in production

    # Security
    SECRET_KEY: str = DEFAULT_SECRET_KEY
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    ALLOW_ADMIN_REGISTRATION: bool = False

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8000"]

    # Query limits
    DEFAULT_LIMIT: int = 10
    MAX_LIMIT: int = 100

    # Object storage (any S3-compatible provider)
    S3_ENDPOINT_URL: Optional[str] = None
    S3_ACCESS_KEY_ID: Optional[str] = None
    S3_SECRET_ACCESS_KEY: Optional[str] = None
    S3_REGION_NAME: str = "us-east-1"
    S3_BUCKET_NAME: str = "music-catalog"
    S3_PUBLIC_BASE_URL: Optional[str] = None
    MEDIA_ROOT_FOLDER: str = "music-catalog"
    UPLOAD_TMP_DIR: str = "./uploads"

    class Config:
        env_file = ".env"
        case_sensitive = True

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"


def check_settings(config: Settings) -> None:
    """Refuse to boot a production server with development secrets"""
    if config.is_production and config.SECRET_KEY == DEFAULT_SECRET_KEY:
        raise RuntimeError("SECRET_KEY must be set in production")


settings = Settings()
