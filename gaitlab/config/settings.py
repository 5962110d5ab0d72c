"""
Application configuration using pydantic-settings with nested structure
"""
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List
from pathlib import Path


# ============================================================================
# NESTED CONFIGURATION MODELS
# ============================================================================

# Absolute path to the .env file (project root)
_BASE_DIR = Path(__file__).resolve().parent.parent.parent
_ENV_FILE = _BASE_DIR / ".env"


class APIConfig(BaseSettings):
    """HTTP API server configuration."""
    host: str = "127.0.0.1"
    port: int = 8787
    model_config = SettingsConfigDict(env_prefix="API__", extra="ignore")


class CORSConfig(BaseSettings):
    """Cross-origin access for the dashboard frontend.

    The allow-list is handed to the app factory; nothing reads it from
    module state.
    """
    allow_origins: List[str] = ["http://localhost:5173"]
    allow_methods: List[str] = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    allow_headers: List[str] = ["Content-Type", "Authorization", "X-API-Key"]
    max_age: int = 86400
    model_config = SettingsConfigDict(env_prefix="CORS__", extra="ignore")


class DatabaseConfig(BaseSettings):
    """Database connection configuration."""
    url: str = "sqlite:///./data/gaitlab.db"
    echo: bool = False
    model_config = SettingsConfigDict(env_prefix="DATABASE__", extra="ignore")


class LoggerConfig(BaseSettings):
    """Logger configuration settings."""
    default_level: str = "INFO"
    file_path: str = "./data/logs/gaitlab.log"
    rotation: str = "10 MB"
    retention: str = "30 days"
    filter_enabled: bool = True
    filter_max_history: int = 5
    filter_time_threshold_seconds: float = 1.0
    model_config = SettingsConfigDict(env_prefix="LOGGER__", extra="ignore")


class IngestConfig(BaseSettings):
    """Ingestion pipeline configuration."""
    # 0 disables the per-second sample count check
    expected_samples_per_second: int = 0
    model_config = SettingsConfigDict(env_prefix="INGEST__", extra="ignore")


# ============================================================================
# MAIN SETTINGS CLASS
# ============================================================================

class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Configuration is organized into nested sections.
    Use double underscore (__) in env vars to access nested configs.

    Example:
        LOGGER__DEFAULT_LEVEL=DEBUG
        DATABASE__URL=sqlite:///./data/gaitlab.db
        CORS__ALLOW_ORIGINS='["https://gait.example.org"]'
    """

    # Application metadata
    APP_NAME: str = "GaitLab Backend"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # Nested configuration sections (constructed after environment is loaded)
    API: APIConfig = Field(default_factory=APIConfig)
    CORS: CORSConfig = Field(default_factory=CORSConfig)
    DATABASE: DatabaseConfig = Field(default_factory=DatabaseConfig)
    LOGGER: LoggerConfig = Field(default_factory=LoggerConfig)
    INGEST: IngestConfig = Field(default_factory=IngestConfig)

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        # Sections passed explicitly (tests) win over the environment
        self.API = kwargs.get("API") or APIConfig()
        self.CORS = kwargs.get("CORS") or CORSConfig()
        self.DATABASE = kwargs.get("DATABASE") or DatabaseConfig()
        self.LOGGER = kwargs.get("LOGGER") or LoggerConfig()
        self.INGEST = kwargs.get("INGEST") or IngestConfig()

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        env_nested_delimiter="__",
        env_prefix=""
    )


# Global settings instance
from dotenv import load_dotenv

# Load .env file into environment variables
if _ENV_FILE.exists():
    load_dotenv(str(_ENV_FILE), override=True)

settings = Settings()
