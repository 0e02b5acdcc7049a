from functools import lru_cache
from typing import Optional
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
import os
from dotenv import load_dotenv


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Service information
    SERVICE_NAME: str = "devevent-service"
    VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"

    # FastAPI configuration
    API_PREFIX: str = "/api/v1"
    DEBUG: bool = False

    # MongoDB configuration
    # Optional at load time; a missing URI is reported when a connection is requested
    MONGODB_URI: Optional[str] = None
    MONGODB_DATABASE: str = "devevent"
    MONGODB_SERVER_SELECTION_TIMEOUT_MS: int = 5000
    MONGODB_CONNECT_TIMEOUT_MS: int = 10000
    CONNECT_ON_STARTUP: bool = False

    # Logging configuration
    LOG_LEVEL: str = "INFO"

    @field_validator("MONGODB_URI")
    @classmethod
    def validate_mongodb_uri(cls, v: Optional[str]) -> Optional[str]:
        """Validate that the MongoDB URI is properly formatted."""
        if v is None or not v.strip():
            return None
        if not v.startswith(("mongodb://", "mongodb+srv://")):
            raise ValueError("MONGODB_URI must be a mongodb:// or mongodb+srv:// connection string")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level


def load_env_file() -> None:
    """Load environment variables from .env file if it exists."""
    env_path = os.path.join(os.getcwd(), ".env")
    if os.path.exists(env_path):
        load_dotenv(dotenv_path=env_path)


@lru_cache
def get_settings() -> Settings:
    """
    Create and cache application settings.

    Returns:
        Settings: Application settings instance
    """
    load_env_file()
    return Settings()
