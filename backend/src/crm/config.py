"""
Application Configuration
Handles all environment variables and settings
"""

from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings

BASE_DIR = Path(__file__).parent.parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Application
    APP_NAME: str = "Sales CRM"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True

    # Database (hosted Postgres in production)
    DATABASE_URL: str = ""

    # Local fallback for the "show in notification" flag
    FLAG_STORE_PATH: str = ""

    # Notifications
    REMINDER_WINDOW_DAYS: int = 7

    # CORS
    ALLOWED_ORIGINS: str = "http://localhost:3000"

    @property
    def allowed_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string"""
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",")]

    class Config:
        env_file = BASE_DIR / "src" / ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


# Global settings instance
settings = Settings()
