"""
Configuration management for the profile service
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional

DEFAULT_JWT_SECRET = "change-this-secret-in-prod-0123456789"


class Settings(BaseSettings):
    """Profile service configuration loaded from environment variables"""

    # Server Configuration
    PORT: int = 5000
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = None

    # Database Configuration
    DATABASE_URL: str = "sqlite:///./profile.db"

    # Token Configuration
    JWT_SECRET: str = DEFAULT_JWT_SECRET
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    JWT_LEEWAY_SECONDS: int = 0

    # CORS Configuration
    CORS_ORIGINS: List[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    def uses_default_secret(self) -> bool:
        return self.JWT_SECRET == DEFAULT_JWT_SECRET


# Global settings instance
settings = Settings()
